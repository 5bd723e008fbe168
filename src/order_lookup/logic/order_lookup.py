"""
Business Logic Layer for order lookup.

Normalizes the buyer's order number and email, matches them against the
orders Shopify returns for that email, and shapes the response including any
digital download links found on the matched order.
"""

import re
from typing import Any, Dict, List, Optional

import httpx
from aws_lambda_powertools.metrics import MetricUnit

from order_lookup.dal import OrdersSource
from order_lookup.dal.shopify_handler import ShopifyOrdersHandler
from order_lookup.handlers.models.lookup_settings import LookupSettings
from order_lookup.handlers.utils.errors import OrderNotFoundError
from order_lookup.handlers.utils.observability import logger, mask_email, metrics, tracer
from order_lookup.models.input import LookupRequest
from order_lookup.models.order import UpstreamOrder
from order_lookup.models.output import DownloadLink, LookupResponse, OrderSummary

_ORDER_NUMBER_NOISE = re.compile(r'[#\s]')
_WHITESPACE = re.compile(r'\s')
_LEADING_HASH = re.compile(r'^#')

DOWNLOAD_PROPERTY_KEYWORDS = ('download', 'url')
URL_PREFIXES = ('http://', 'https://')
SAMPLE_SIZE = 5


def normalize_order_number(order_number: Any) -> str:
    """Strip every "#" and all whitespace from a requested order number."""
    return _ORDER_NUMBER_NOISE.sub('', str(order_number))


def normalize_order_name(name: str) -> str:
    """Strip a leading "#" and all whitespace from an upstream order name."""
    return _WHITESPACE.sub('', _LEADING_HASH.sub('', name))


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_matching_order(
    orders: List[UpstreamOrder],
    order_number: str,
    email: str,
) -> Optional[UpstreamOrder]:
    """
    Return the first order whose normalized name and email both match.

    Args:
        orders: Candidates in upstream-provided order
        order_number: Requested order number, raw or normalized
        email: Requested email, raw or normalized

    Returns:
        The first matching order, or None
    """
    wanted_number = normalize_order_number(order_number)
    wanted_email = normalize_email(email)

    for index, order in enumerate(orders):
        if not order.name or not order.email:
            logger.debug("Skipping order without name or email", extra={"index": index})
            continue

        name_match = normalize_order_name(order.name) == wanted_number
        email_match = normalize_email(order.email) == wanted_email

        if name_match and email_match:
            logger.info("Order matched", extra={"index": index, "order_name": order.name})
            return order

        # near misses are the usual support question
        if name_match or email_match:
            logger.debug("Partial order match", extra={
                "index": index,
                "order_name": order.name,
                "name_match": name_match,
                "email_match": email_match,
            })

    return None


def extract_download_links(order: UpstreamOrder) -> List[DownloadLink]:
    """
    Collect download links from fulfillments and line-item properties.

    Fulfillment tracking URLs come first, named after the tracking company or
    ``Download N`` by position within the fulfillment. Line-item properties
    whose name mentions "download" or "url" contribute their value when it is
    an absolute http(s) URL.
    """
    downloads: List[DownloadLink] = []

    for fulfillment in order.fulfillments or []:
        for position, url in enumerate(fulfillment.tracking_urls or [], start=1):
            downloads.append(DownloadLink(
                name=fulfillment.tracking_company or f"Download {position}",
                url=url,
            ))

    for item in order.line_items or []:
        for prop in item.properties or []:
            if not prop.name:
                continue
            prop_name = prop.name.lower()
            if not any(keyword in prop_name for keyword in DOWNLOAD_PROPERTY_KEYWORDS):
                continue
            if isinstance(prop.value, str) and prop.value.startswith(URL_PREFIXES):
                downloads.append(DownloadLink(name=item.name or 'Download', url=prop.value))

    return downloads


def build_lookup_response(order: UpstreamOrder) -> LookupResponse:
    """Shape a matched order into the response the storefront renders."""
    status_url = order.order_status_url or None
    return LookupResponse(
        order=OrderSummary(
            name=order.name,
            created_at=order.created_at,
            total_price=order.total_price,
            currency=order.currency,
            order_status_url=status_url,
        ),
        downloads=extract_download_links(order),
        order_status_url=status_url,
    )


def build_not_found_error(
    orders: List[UpstreamOrder],
    order_number: str,
    email: str,
) -> OrderNotFoundError:
    """Describe a failed match without echoing the full email back."""
    wanted_number = normalize_order_number(order_number)
    message = (
        f"No order found matching order #{wanted_number} and email {mask_email(email)}. "
        f"Found {len(orders)} order(s) for this email. "
        "Please verify the order number and email address."
    )
    debug: Dict[str, Any] = {
        "requestedOrderNumber": wanted_number,
        "requestedEmail": normalize_email(email),
        "ordersFound": len(orders),
        "sampleOrderNumbers": [order.name for order in orders[:SAMPLE_SIZE]],
    }
    return OrderNotFoundError(user_message=message, debug=debug)


class OrderLookupService:
    """Looks up a single order by order number and email."""

    def __init__(
        self,
        settings: LookupSettings,
        orders_source: Optional[OrdersSource] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the lookup service.

        Args:
            settings: Deployment settings, injected once per process
            orders_source: Upstream order source; built from settings when omitted
            http_client: HTTP client handed to the default Shopify handler
        """
        self.settings = settings
        self._orders_source = orders_source
        self._http_client = http_client

    @property
    def orders_source(self) -> OrdersSource:
        # Built lazily so invalid input is rejected before credentials are checked
        if self._orders_source is None:
            self._orders_source = ShopifyOrdersHandler(self.settings, http_client=self._http_client)
        return self._orders_source

    @tracer.capture_method
    def lookup(self, request: LookupRequest) -> LookupResponse:
        """
        Find the order matching the request.

        Args:
            request: Validated lookup request

        Returns:
            The shaped lookup response

        Raises:
            ConfigurationError: If upstream credentials are missing
            UpstreamAuthError: If Shopify rejects the credentials
            UpstreamError: If the Shopify call fails
            OrderNotFoundError: If no order matches both predicates
        """
        logger.info("Order lookup requested", extra={
            "order_number": normalize_order_number(request.order_number),
            "email": mask_email(request.email),
        })

        orders = self.orders_source.list_orders_by_email(request.email)
        order = find_matching_order(orders, request.order_number, request.email)

        if order is None:
            metrics.add_metric(name="OrderNotFound", unit=MetricUnit.Count, value=1)
            logger.warning("Order not found", extra={
                "order_number": normalize_order_number(request.order_number),
                "email": mask_email(request.email),
                "orders_found": len(orders),
                "sample_order_numbers": [o.name for o in orders[:SAMPLE_SIZE]],
            })
            raise build_not_found_error(orders, request.order_number, request.email)

        response = build_lookup_response(order)

        metrics.add_metric(name="OrderLookupSuccess", unit=MetricUnit.Count, value=1)
        metrics.add_metric(name="DownloadLinksReturned", unit=MetricUnit.Count, value=len(response.downloads))
        tracer.put_annotation("order_name", order.name or "")

        return response
