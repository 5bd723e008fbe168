"""
Pytest configuration and shared fixtures for the order lookup service.

This module provides common test fixtures and configuration used across
unit, integration, and end-to-end tests.
"""

import json
import os
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock

import httpx
import pytest

# Set before the package is imported so Powertools picks them up at init time
os.environ.update({
    "POWERTOOLS_SERVICE_NAME": "test-order-lookup",
    "POWERTOOLS_METRICS_NAMESPACE": "TestOrderLookup",
    "POWERTOOLS_TRACE_DISABLED": "true",
    "LOG_LEVEL": "DEBUG",
})

from order_lookup.handlers.models.lookup_settings import LookupSettings  # noqa: E402
from order_lookup.logic.order_lookup import OrderLookupService  # noqa: E402

STORE_DOMAIN = "kahnke-test.myshopify.com"
ACCESS_TOKEN = "shpat_test_token"


# Settings fixtures
@pytest.fixture
def settings() -> LookupSettings:
    """Settings with credentials, production error shaping."""
    return LookupSettings(
        store_domain=STORE_DOMAIN,
        access_token=ACCESS_TOKEN,
        api_version="2024-01",
    )


@pytest.fixture
def debug_settings(settings: LookupSettings) -> LookupSettings:
    """Same settings with the development flag on."""
    return settings.model_copy(update={"debug_mode": True})


@pytest.fixture
def unconfigured_settings() -> LookupSettings:
    """Settings without Shopify credentials."""
    return LookupSettings()


# Upstream payload fixtures
@pytest.fixture
def shopify_order() -> Dict[str, Any]:
    """A digital order as returned by the Shopify orders endpoint."""
    return {
        "id": 5550001779,
        "name": "#1779",
        "email": "user@x.com",
        "created_at": "2024-11-28T10:15:00-05:00",
        "total_price": "19.99",
        "currency": "USD",
        "order_status_url": "https://kahnke-test.myshopify.com/123/orders/abc/authenticate?key=xyz",
        "financial_status": "paid",
        "fulfillments": [
            {
                "id": 1,
                "tracking_company": "UPS",
                "tracking_urls": ["http://t"],
            }
        ],
        "line_items": [
            {
                "name": "Holiday Cookbook",
                "properties": [
                    {"name": "_download_url", "value": "https://cdn.example.com/holiday.pdf"},
                    {"name": "Gift note", "value": "Enjoy!"},
                ],
            }
        ],
    }


@pytest.fixture
def other_order() -> Dict[str, Any]:
    return {
        "name": "#1650",
        "email": "user@x.com",
        "created_at": "2024-06-01T09:00:00-05:00",
        "total_price": "12.00",
        "currency": "USD",
        "fulfillments": [],
        "line_items": [],
    }


# Upstream HTTP fixtures
class RecordingTransport(httpx.MockTransport):
    """Mock transport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def shopify_transport() -> Callable[..., RecordingTransport]:
    """Factory for a transport answering the orders endpoint."""

    def factory(
        orders: Optional[List[Dict[str, Any]]] = None,
        status_code: int = 200,
        body: Optional[Any] = None,
        error: Optional[Exception] = None,
    ) -> RecordingTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            if error is not None:
                raise error
            if body is not None:
                content = body if isinstance(body, (str, bytes)) else json.dumps(body)
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json={"orders": orders or []})

        return RecordingTransport(handler)

    return factory


@pytest.fixture
def lookup_service_factory(settings: LookupSettings) -> Callable[..., OrderLookupService]:
    """Build a lookup service whose Shopify calls go to a mock transport."""

    def factory(
        transport: httpx.BaseTransport,
        lookup_settings: Optional[LookupSettings] = None,
    ) -> OrderLookupService:
        return OrderLookupService(
            settings=lookup_settings or settings,
            http_client=httpx.Client(transport=transport),
        )

    return factory


# API Gateway fixtures
@pytest.fixture
def api_gateway_event() -> Callable[..., Dict[str, Any]]:
    """Factory for API Gateway REST proxy events."""

    def factory(
        body: Optional[Any] = None,
        method: str = "POST",
        path: str = "/",
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)

        request_headers = {
            "Content-Type": "application/json",
            "Origin": "https://cookingwithkahnke.com",
            "User-Agent": "test-agent/1.0",
        }
        if headers:
            request_headers.update(headers)

        return {
            "resource": path,
            "path": path,
            "httpMethod": method,
            "headers": request_headers,
            "multiValueHeaders": {k: [v] for k, v in request_headers.items()},
            "queryStringParameters": None,
            "multiValueQueryStringParameters": None,
            "pathParameters": None,
            "stageVariables": None,
            "requestContext": {
                "requestId": "test-request-id-123",
                "accountId": "123456789012",
                "stage": "test",
                "httpMethod": method,
                "path": path,
                "resourcePath": path,
                "protocol": "HTTP/1.1",
                "requestTime": "28/Nov/2024:12:00:00 +0000",
                "requestTimeEpoch": 1732795200000,
                "identity": {
                    "sourceIp": "127.0.0.1",
                    "userAgent": "test-agent/1.0",
                },
            },
            "body": body,
            "isBase64Encoded": False,
        }

    return factory


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "find-order-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:find-order-function"
    context.memory_limit_in_mb = 256
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/find-order-function"
    context.log_stream_name = "2024/11/28/[$LATEST]test123"
    context.get_remaining_time_in_millis.return_value = 30000
    return context


def get_header(response: Dict[str, Any], name: str) -> Optional[str]:
    """Read a header from a proxy response, single- or multi-value form."""
    multi = response.get("multiValueHeaders") or {}
    if name in multi and multi[name]:
        return multi[name][0]
    return (response.get("headers") or {}).get(name)


def response_json(response: Dict[str, Any]) -> Any:
    return json.loads(response["body"])


# Integration test fixtures
@pytest.fixture
def integration_client():
    """HTTP client for a deployed endpoint; skips when none is configured."""
    base_url = os.environ.get("API_BASE_URL")
    if not base_url:
        pytest.skip("API_BASE_URL not set")

    with httpx.Client(base_url=base_url, timeout=30.0) as client:
        yield client


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "integration" in path:
            item.add_marker(pytest.mark.integration)
        elif "e2e" in path:
            item.add_marker(pytest.mark.e2e)
