"""
Service Models Package

This package contains the Pydantic models used throughout the service:
the lookup request, the upstream order subset and the response payloads.
"""

from .input import EMAIL_PATTERN, LookupRequest
from .order import Fulfillment, LineItem, LineItemProperty, OrdersPage, UpstreamOrder
from .output import DownloadLink, ErrorOutput, LookupResponse, OrderSummary

__all__ = [
    # Input models
    "EMAIL_PATTERN",
    "LookupRequest",

    # Upstream models
    "Fulfillment",
    "LineItem",
    "LineItemProperty",
    "OrdersPage",
    "UpstreamOrder",

    # Output models
    "DownloadLink",
    "ErrorOutput",
    "LookupResponse",
    "OrderSummary",
]
