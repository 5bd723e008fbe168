"""
Upstream order models.

Only the subset of the Shopify Admin order payload the lookup consumes is
modelled. Every field is optional and unknown fields are ignored. Scalar
fields accept numbers and anything else non-textual becomes None; list
fields drop entries of the wrong shape. The page envelope keeps raw order
entries so the DAL can validate orders one at a time.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _text_or_none(v: Any) -> str | None:
    if isinstance(v, str):
        return v
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return None


def _entries_of(v: Any, kind: type) -> list | None:
    if not isinstance(v, list):
        return None
    return [entry for entry in v if isinstance(entry, kind)]


class UpstreamModel(BaseModel):
    """Base for models parsed from the Shopify API."""

    model_config = ConfigDict(extra='ignore')


class Fulfillment(UpstreamModel):
    tracking_company: str | None = None
    tracking_urls: list[str] | None = None

    @field_validator('tracking_company', mode='before')
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _text_or_none(v)

    @field_validator('tracking_urls', mode='before')
    @classmethod
    def keep_string_urls(cls, v: Any) -> list | None:
        return _entries_of(v, str)


class LineItemProperty(UpstreamModel):
    name: str | None = None
    value: Any = None

    @field_validator('name', mode='before')
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _text_or_none(v)


class LineItem(UpstreamModel):
    name: str | None = None
    properties: list[LineItemProperty] | None = None

    @field_validator('name', mode='before')
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _text_or_none(v)

    @field_validator('properties', mode='before')
    @classmethod
    def keep_object_entries(cls, v: Any) -> list | None:
        return _entries_of(v, dict)


class UpstreamOrder(UpstreamModel):
    """An order as returned by ``GET /admin/api/<version>/orders.json``."""

    name: str | None = Field(default=None, description='Display identifier, typically "#<number>"')
    email: str | None = None
    created_at: str | None = None
    total_price: str | None = None
    currency: str | None = None
    order_status_url: str | None = None
    fulfillments: list[Fulfillment] | None = None
    line_items: list[LineItem] | None = None

    @field_validator('name', 'email', 'created_at', 'total_price', 'currency', 'order_status_url', mode='before')
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        """Shopify sends prices as strings; tolerate numbers and drop other shapes."""
        return _text_or_none(v)

    @field_validator('fulfillments', 'line_items', mode='before')
    @classmethod
    def keep_object_entries(cls, v: Any) -> list | None:
        return _entries_of(v, dict)


class OrdersPage(UpstreamModel):
    """Top-level envelope of the orders list response."""

    orders: list[Any] | None = None
