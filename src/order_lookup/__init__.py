"""
Order Lookup Service Module.

A storefront order-lookup proxy for Shopify, packaged as an AWS Lambda
function behind API Gateway:

- handlers: Lambda entry point, request validation and error mapping
- logic: order-number/email normalization, matching and download extraction
- dal: read-only client for the Shopify Admin order API
- models: request, upstream and response models
- widget: the storefront form handler and its HTML rendering
"""

__version__ = "1.0.0"
__description__ = "Shopify order lookup proxy for storefront download pages"

# Re-export commonly used classes for convenience
from order_lookup.models.input import LookupRequest
from order_lookup.models.output import DownloadLink, LookupResponse
from order_lookup.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "LookupRequest",
    "DownloadLink",
    "LookupResponse",
    "logger",
    "tracer",
    "metrics",
]
