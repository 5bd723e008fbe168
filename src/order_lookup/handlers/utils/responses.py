"""
Response helpers shared by the find-order routes and the Lambda entry point.

Every response carries the same permissive CORS headers, so the storefront
can call the endpoint from any origin, plus a small set of security headers.
"""

import json
import uuid
from typing import Any, Dict, Optional

from aws_lambda_powertools.event_handler import Response, content_types

ALLOWED_METHODS = 'POST, OPTIONS'

CORS_HEADERS: Dict[str, str] = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': ALLOWED_METHODS,
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Max-Age': '86400',
}

SECURITY_HEADERS: Dict[str, str] = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'DENY',
    'Referrer-Policy': 'strict-origin-when-cross-origin',
}


def _body_to_str(body: Any) -> str:
    if body is None:
        return ''
    if isinstance(body, str):
        return body
    return json.dumps(body)


def response_headers(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """CORS and security headers, plus any per-response extras."""
    headers = {**CORS_HEADERS, **SECURITY_HEADERS}
    if extra:
        headers.update(extra)
    return headers


def json_response(
    status_code: int,
    body: Any,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """Build a Powertools ``Response`` with a JSON body."""
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=_body_to_str(body),
        headers=response_headers(headers),
    )


def preflight_response() -> Response:
    """Empty 200 answering a CORS preflight."""
    return Response(
        status_code=200,
        content_type=None,
        body='',
        headers=response_headers(),
    )


def create_api_response(
    status_code: int,
    body: Any,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Create a raw API Gateway proxy response, for use outside the resolver."""
    default_headers = {
        'Content-Type': content_types.APPLICATION_JSON,
        'X-Request-ID': str(uuid.uuid4()),
        **response_headers(),
    }

    if headers:
        default_headers.update(headers)

    return {
        'statusCode': status_code,
        'headers': default_headers,
        'body': _body_to_str(body),
        'isBase64Encoded': False,
    }
