"""
Data Access Layer for the Shopify Admin order API.

Read-only: the only call made is the orders list filtered by email. The
upstream ``name`` filter is unreliable, so order-number matching happens in
the logic layer on the returned page.
"""

from typing import Any, Dict, List, Optional

import httpx
from aws_lambda_powertools.metrics import MetricUnit
from pydantic import ValidationError

from order_lookup.handlers.models.lookup_settings import LookupSettings
from order_lookup.handlers.utils.errors import ConfigurationError, UpstreamAuthError, UpstreamError
from order_lookup.handlers.utils.observability import logger, mask_email, metrics, tracer
from order_lookup.models.order import OrdersPage, UpstreamOrder

ACCESS_TOKEN_HEADER = 'X-Shopify-Access-Token'
ORDERS_PAGE_LIMIT = 250


class ShopifyOrdersHandler:
    """Fetches orders for a customer email from the Shopify Admin API."""

    def __init__(
        self,
        settings: LookupSettings,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the Shopify handler.

        Args:
            settings: Deployment settings carrying store domain and token
            http_client: Optional pre-built client, mainly for tests

        Raises:
            ConfigurationError: If the store domain or access token is missing
        """
        if not settings.has_credentials:
            logger.error("Missing Shopify API credentials", extra={
                "has_store": bool(settings.store_domain),
                "has_token": bool(settings.access_token),
            })
            raise ConfigurationError(
                message="Shopify store domain or access token not configured",
                details="Missing environment variables SHOPIFY_STORE and/or SHOPIFY_ADMIN_API_TOKEN.",
            )

        self.settings = settings
        self.http_client = http_client or httpx.Client(timeout=settings.timeout_seconds)

    def _build_params(self, email: str) -> Dict[str, Any]:
        return {
            'email': email.lower(),
            'status': 'any',
            'limit': ORDERS_PAGE_LIMIT,
        }

    def _build_headers(self) -> Dict[str, str]:
        return {
            ACCESS_TOKEN_HEADER: self.settings.access_token or '',
            'Content-Type': 'application/json',
        }

    def _parse_orders(self, raw_orders: List[Any]) -> List[UpstreamOrder]:
        """Validate orders one at a time; an entry that fails is logged and skipped."""
        orders: List[UpstreamOrder] = []
        for index, raw_order in enumerate(raw_orders):
            try:
                orders.append(UpstreamOrder.model_validate(raw_order))
            except ValidationError as e:
                metrics.add_metric(name="UpstreamOrderSkipped", unit=MetricUnit.Count, value=1)
                logger.warning("Skipping malformed Shopify order", extra={
                    "index": index,
                    "error_count": e.error_count(),
                })
        return orders

    @tracer.capture_method
    def list_orders_by_email(self, email: str) -> List[UpstreamOrder]:
        """
        List up to 250 orders of any status placed with ``email``.

        Args:
            email: Customer email; lower-cased before querying

        Returns:
            Orders in upstream-provided order

        Raises:
            UpstreamAuthError: On a 401 or 403 from Shopify
            UpstreamError: On any other failure talking to Shopify
        """
        logger.info("Querying Shopify orders", extra={
            "email": mask_email(email),
            "api_version": self.settings.api_version,
        })

        try:
            response = self.http_client.get(
                self.settings.orders_url,
                params=self._build_params(email),
                headers=self._build_headers(),
                timeout=self.settings.timeout_seconds,
            )
        except httpx.HTTPError as e:
            metrics.add_metric(name="UpstreamError", unit=MetricUnit.Count, value=1)
            logger.error("Shopify API request failed", extra={
                "error": str(e),
                "error_type": type(e).__name__,
            })
            raise UpstreamError(message=f"Shopify API request failed: {e}") from e

        if response.status_code in (401, 403):
            metrics.add_metric(name="UpstreamAuthError", unit=MetricUnit.Count, value=1)
            logger.error("Shopify API authentication failed", extra={
                "status_code": response.status_code,
            })
            raise UpstreamAuthError(upstream_status=response.status_code)

        if not response.is_success:
            metrics.add_metric(name="UpstreamError", unit=MetricUnit.Count, value=1)
            logger.error("Shopify API returned an error status", extra={
                "status_code": response.status_code,
            })
            raise UpstreamError(
                message=f"Shopify API error: {response.status_code}",
                upstream_status=response.status_code,
            )

        try:
            page = OrdersPage.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error("Could not parse Shopify orders response", extra={"error": str(e)})
            raise UpstreamError(
                message=f"Invalid Shopify API response: {e}",
                upstream_status=response.status_code,
            ) from e

        orders = self._parse_orders(page.orders or [])

        logger.info("Shopify orders fetched", extra={
            "email": mask_email(email),
            "orders_found": len(orders),
            "orders_skipped": len(page.orders or []) - len(orders),
        })
        tracer.put_metadata("orders_found", len(orders))

        return orders
