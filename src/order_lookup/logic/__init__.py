"""
Business Logic Layer Module.

Order-number and email normalization, order matching, download extraction
and the ``OrderLookupService`` that ties them to the upstream order source.
"""

from order_lookup.logic.order_lookup import (
    OrderLookupService,
    build_lookup_response,
    extract_download_links,
    find_matching_order,
    normalize_email,
    normalize_order_name,
    normalize_order_number,
)

__all__ = [
    "OrderLookupService",
    "build_lookup_response",
    "extract_download_links",
    "find_matching_order",
    "normalize_email",
    "normalize_order_name",
    "normalize_order_number",
]
