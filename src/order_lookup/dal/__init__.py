"""
Data Access Layer (DAL) for the order lookup service.

The lookup never persists anything; its only data source is the Shopify
Admin order API. ``OrdersSource`` is the seam the logic layer depends on.
"""

from typing import Protocol, runtime_checkable

from order_lookup.dal.shopify_handler import ShopifyOrdersHandler
from order_lookup.models.order import UpstreamOrder


@runtime_checkable
class OrdersSource(Protocol):
    """Protocol defining the read side the lookup needs."""

    def list_orders_by_email(self, email: str) -> list[UpstreamOrder]:
        """List orders placed with the given email, in upstream order."""
        ...


__all__ = [
    "OrdersSource",
    "ShopifyOrdersHandler",
]
