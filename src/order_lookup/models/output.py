"""
Output models for API responses using Pydantic.

This module defines the payloads returned by the find-order endpoint and
consumed by the client widget.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field


class DownloadLink(BaseModel):
    """A digital download surfaced to the buyer."""

    name: Annotated[str, Field(
        description='Label shown on the download button',
        examples=['UPS', 'Download 1', 'Holiday Cookbook (PDF)']
    )]

    url: Annotated[str, Field(
        description='Absolute http(s) URL of the download',
        examples=['https://cdn.example.com/cookbook.pdf']
    )]


class OrderSummary(BaseModel):
    """The order fields echoed back to the storefront."""

    name: Annotated[str | None, Field(
        default=None,
        description='Order display name, unchanged from upstream',
        examples=['#1779']
    )] = None

    created_at: Annotated[str | None, Field(
        default=None,
        description='Upstream creation timestamp (ISO 8601)'
    )] = None

    total_price: Annotated[str | None, Field(
        default=None,
        description='Order total as a decimal string',
        examples=['29.99']
    )] = None

    currency: Annotated[str | None, Field(
        default=None,
        description='ISO 4217 currency code',
        examples=['USD']
    )] = None

    order_status_url: Annotated[str | None, Field(
        default=None,
        description='Link to the storefront order status page'
    )] = None


class LookupResponse(BaseModel):
    """Response model for a successful lookup."""

    success: Literal[True] = True

    order: OrderSummary

    downloads: Annotated[list[DownloadLink], Field(
        default_factory=list,
        description='Download links derived from fulfillments and line items'
    )]

    order_status_url: Annotated[str | None, Field(
        default=None,
        description='Same as order.order_status_url, kept at top level for the widget'
    )] = None


class ErrorOutput(BaseModel):
    """Standard error response model."""

    error: Annotated[str, Field(
        description='Error label',
        examples=['Order not found', 'Invalid email format', 'Server configuration error']
    )]

    message: Annotated[str, Field(
        description='User-facing error message'
    )]

    details: Annotated[str | None, Field(
        default=None,
        description='Internal details, development mode only'
    )] = None

    debug: Annotated[dict[str, Any] | None, Field(
        default=None,
        description='Lookup diagnostics, development mode only'
    )] = None
