"""
HTML fragments for the find-order results panel.

Every value that came from the API or the buyer goes through ``escape``
before it is interpolated, and only http(s) URLs are ever rendered as links.
"""

from datetime import datetime
from html import escape
from typing import Any, Dict, List, Optional

BUTTON_STYLE = (
    "display: inline-block; padding: 15px 32px; color: #fff; text-decoration: none; "
    "border-radius: 4px; font-weight: 600; font-size: 16px; margin: 0.5rem 0.5rem 0.5rem 0;"
)
PRIMARY_COLOR = "#005633"
SECONDARY_COLOR = "#6c757d"
LINK_SCHEMES = ("http://", "https://")


def is_safe_url(url: Any) -> bool:
    return isinstance(url, str) and url.strip().lower().startswith(LINK_SCHEMES)


def _text(value: Any) -> str:
    return escape("" if value is None else str(value))


def format_order_date(created_at: Optional[str]) -> str:
    """Render an ISO timestamp as M/D/YYYY; unparseable values pass through."""
    if not created_at:
        return ""
    try:
        parsed = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    except ValueError:
        return created_at
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def _link_button(url: str, label: str, color: str = PRIMARY_COLOR) -> str:
    return (
        f'<a href="{_text(url)}" class="find-order-download-link" target="_blank" '
        f'rel="noopener noreferrer" style="{BUTTON_STYLE} background: {color};">{_text(label)}</a>'
    )


def render_order_details(order: Optional[Dict[str, Any]]) -> str:
    """Order name, date and total."""
    if not order:
        return ""
    total = f"{order.get('currency') or '$'}{order.get('total_price') or ''}"
    return (
        '<div class="find-order-details">'
        f'<p><strong>Order:</strong> {_text(order.get("name"))}</p>'
        f'<p><strong>Date:</strong> {_text(format_order_date(order.get("created_at")))}</p>'
        f'<p><strong>Total:</strong> {_text(total)}</p>'
        '</div>'
    )


def render_downloads(downloads: List[Dict[str, Any]], order_status_url: Optional[str] = None) -> str:
    """Download buttons, followed by a status link when one is known."""
    downloads = [download for download in downloads if is_safe_url(download.get("url"))]
    if downloads:
        buttons = "".join(
            _link_button(download["url"], f"Download: {download.get('name') or 'File'}")
            for download in downloads
        )
    else:
        buttons = "<p>No download links found for this order.</p>"

    status_link = ""
    if is_safe_url(order_status_url):
        status_link = (
            '<div class="find-order-status">'
            f'{_link_button(order_status_url, "View Full Order Status", SECONDARY_COLOR)}'
            '</div>'
        )

    return (
        '<div class="find-order-success">'
        '<p class="find-order-heading">Order Found!</p>'
        '<p>Your download links are below:</p>'
        f'<div class="find-order-buttons">{buttons}</div>'
        f'{status_link}'
        '</div>'
    )


def render_order_status_link(order_status_url: str) -> str:
    """A single external link to the storefront order status page."""
    if not is_safe_url(order_status_url):
        return render_order_found_notice()
    return (
        '<div class="find-order-success">'
        '<p class="find-order-heading">Order Found!</p>'
        '<p>Click the link below to view your order status and download links:</p>'
        f'{_link_button(order_status_url, "View Order Status & Downloads")}'
        '</div>'
    )


def render_order_found_notice() -> str:
    return (
        '<div class="find-order-notice">'
        '<p class="find-order-heading">Order Found!</p>'
        '<p>Your order has been found. Please check your email for download links '
        'or contact support if you need assistance.</p>'
        '</div>'
    )


def render_error(message: str) -> str:
    return f'<div class="find-order-error" role="alert">{_text(message)}</div>'
