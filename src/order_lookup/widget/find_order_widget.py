"""
Find Order widget - the storefront side of the order lookup.

Mirrors the form handler shipped with the theme: validate the two fields,
normalize the order number the same way the endpoint does, POST once, and
render one of three success panels or the server's error message. The
widget moves through ``idle -> loading -> (success | error)`` on every
submission and never retries.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

import httpx

from order_lookup.handlers.utils.observability import logger, mask_email
from order_lookup.logic.order_lookup import normalize_order_number
from order_lookup.models.input import EMAIL_PATTERN
from order_lookup.widget import rendering

SUBMIT_LABEL = "Find My Order"
LOADING_LABEL = "Searching..."

MISSING_FIELDS_MESSAGE = "Please fill in both fields."
INVALID_EMAIL_MESSAGE = "Please enter a valid email address."
NOT_CONFIGURED_MESSAGE = "Order lookup service is not configured. Please contact support for assistance."
NOT_FOUND_FALLBACK_MESSAGE = "Order not found. Please check your order number and email address."
NO_INFORMATION_MESSAGE = "Order found but no information available."
GENERIC_ERROR_MESSAGE = "An error occurred. Please try again or contact support."


class WidgetState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class LookupFailed(Exception):
    """Carries the message shown to the buyer when a lookup fails."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass
class WidgetView:
    """Everything the page needs to redraw the form and results panel."""

    state: WidgetState = WidgetState.IDLE
    submit_label: str = SUBMIT_LABEL
    submit_disabled: bool = False
    error_message: Optional[str] = None
    error_html: str = ""
    details_html: str = ""
    results_html: str = ""

    @property
    def show_results(self) -> bool:
        return self.state == WidgetState.SUCCESS


class FindOrderWidget:
    """Form-bound order lookup handler."""

    def __init__(
        self,
        api_endpoint: Optional[str],
        http_client: Optional[httpx.Client] = None,
        on_change: Optional[Callable[[WidgetView], None]] = None,
        timeout_seconds: float = 30.0,
    ):
        """
        Initialize the widget.

        Args:
            api_endpoint: URL of the find-order endpoint, usually a theme setting
            http_client: Optional pre-built client, mainly for tests
            on_change: Called with the new view on every state change
            timeout_seconds: Timeout for the lookup request
        """
        self.api_endpoint = api_endpoint
        self.http_client = http_client or httpx.Client(timeout=timeout_seconds)
        self.on_change = on_change
        self.view = WidgetView()

        logger.debug("FindOrder widget initialized", extra={"has_api_endpoint": bool(api_endpoint)})

    def _set_view(self, view: WidgetView) -> WidgetView:
        self.view = view
        if self.on_change is not None:
            self.on_change(view)
        return view

    def _show_error(self, message: str) -> WidgetView:
        return self._set_view(WidgetView(
            state=WidgetState.ERROR,
            error_message=message,
            error_html=rendering.render_error(message),
        ))

    def _show_loading(self) -> WidgetView:
        return self._set_view(WidgetView(
            state=WidgetState.LOADING,
            submit_label=LOADING_LABEL,
            submit_disabled=True,
        ))

    @staticmethod
    def validate_email(email: str) -> bool:
        return bool(EMAIL_PATTERN.match(email))

    def _request_lookup(self, order_number: str, email: str) -> Dict[str, Any]:
        payload = {"order_number": order_number, "email": email}

        try:
            response = self.http_client.post(self.api_endpoint, json=payload)
        except httpx.HTTPError as e:
            logger.warning("Order lookup request failed", extra={"error": str(e)})
            raise LookupFailed(GENERIC_ERROR_MESSAGE) from e

        if not response.is_success:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            message = error_data.get("message") if isinstance(error_data, dict) else None
            logger.info("Order lookup API error", extra={"status_code": response.status_code})
            raise LookupFailed(message or NOT_FOUND_FALLBACK_MESSAGE)

        try:
            data = response.json()
        except ValueError as e:
            raise LookupFailed(GENERIC_ERROR_MESSAGE) from e

        if not isinstance(data, dict) or not data.get("success"):
            raise LookupFailed(NO_INFORMATION_MESSAGE)

        return data

    def render_success(self, data: Dict[str, Any]) -> WidgetView:
        """Pick the success panel: downloads, status link, or a bare notice."""
        order = data.get("order")
        downloads = data.get("downloads") or []
        order_status_url = data.get("order_status_url")

        if downloads:
            results_html = rendering.render_downloads(downloads, order_status_url)
        elif order_status_url:
            results_html = rendering.render_order_status_link(order_status_url)
        else:
            results_html = rendering.render_order_found_notice()

        return self._set_view(WidgetView(
            state=WidgetState.SUCCESS,
            details_html=rendering.render_order_details(order),
            results_html=results_html,
        ))

    def submit(self, order_number: str, email: str) -> WidgetView:
        """
        Handle one form submission.

        Args:
            order_number: Raw order number field value
            email: Raw email field value

        Returns:
            The final view after the submission settles
        """
        order_number = (order_number or "").strip()
        email = (email or "").strip()

        if not order_number or not email:
            return self._show_error(MISSING_FIELDS_MESSAGE)

        if not self.validate_email(email):
            return self._show_error(INVALID_EMAIL_MESSAGE)

        if not self.api_endpoint:
            logger.error("Find order API endpoint not configured")
            return self._show_error(NOT_CONFIGURED_MESSAGE)

        clean_order_number = normalize_order_number(order_number)
        clean_email = email.lower()

        logger.info("Submitting order lookup", extra={
            "order_number": clean_order_number,
            "email": mask_email(clean_email),
        })

        self._show_loading()

        try:
            data = self._request_lookup(clean_order_number, clean_email)
        except LookupFailed as e:
            return self._show_error(e.message)

        return self.render_success(data)
