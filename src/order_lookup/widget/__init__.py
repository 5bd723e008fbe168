"""Storefront find-order widget: form handling and result rendering."""

from order_lookup.widget.find_order_widget import FindOrderWidget, WidgetState, WidgetView

__all__ = [
    "FindOrderWidget",
    "WidgetState",
    "WidgetView",
]
