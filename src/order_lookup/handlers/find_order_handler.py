"""
Find Order Handler - Lambda function for the storefront order lookup.

The storefront form POSTs ``{order_number, email}``; this handler validates
the body, delegates to ``OrderLookupService`` and maps every outcome to a JSON
response with permissive CORS headers.
"""

import json
from typing import Any, Dict, Optional

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response
from aws_lambda_powertools.event_handler.exceptions import NotFoundError
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from order_lookup.handlers.models.env_vars import get_handler_env_vars
from order_lookup.handlers.models.lookup_settings import LookupSettings
from order_lookup.handlers.utils.errors import (
    BaseServiceError,
    ConfigurationError,
    InternalError,
    InvalidInputError,
    format_error_response,
    log_error_metrics,
)
from order_lookup.handlers.utils.observability import logger, mask_email, metrics, tracer
from order_lookup.handlers.utils.responses import (
    ALLOWED_METHODS,
    create_api_response,
    json_response,
    preflight_response,
)
from order_lookup.logic.order_lookup import OrderLookupService
from order_lookup.models.input import LookupRequest


def parse_body(raw_body: Optional[str]) -> Any:
    """Decode the JSON request body; an absent body is an empty object."""
    if not raw_body:
        return {}
    try:
        return json.loads(raw_body)
    except json.JSONDecodeError as e:
        raise InvalidInputError(
            message=f"Body parse error: {e}",
            error="Invalid request body",
            user_message="Could not parse request body as JSON.",
        ) from e


def validate_lookup_request(body: Any) -> LookupRequest:
    """
    Validate the decoded body into a ``LookupRequest``.

    Missing or empty fields are reported ahead of a malformed email.

    Raises:
        InvalidInputError: If either field is missing or the email is malformed
    """
    try:
        return LookupRequest.model_validate(body if body is not None else {})
    except ValidationError as e:
        metrics.add_metric(name="ValidationError", unit=MetricUnit.Count, value=1)
        errors = e.errors()
        logger.info("Request validation failed", extra={
            "error_count": e.error_count(),
            "fields": [str(error["loc"][-1]) if error["loc"] else "body" for error in errors],
        })

        if any(error["type"] != "value_error" for error in errors):
            raise InvalidInputError(
                message="Order number or email missing",
                error="Missing required fields",
                user_message="Order number and email are required.",
            ) from e

        raise InvalidInputError(
            message="Email failed format validation",
            error="Invalid email format",
            user_message="Please provide a valid email address.",
        ) from e


def create_app(lookup_service: OrderLookupService) -> APIGatewayRestResolver:
    """
    Build the API Gateway resolver for one lookup service.

    Args:
        lookup_service: Service carrying the deployment settings

    Returns:
        Resolver with the lookup route and error handlers registered
    """
    settings = lookup_service.settings
    app = APIGatewayRestResolver()

    @app.post(settings.route_path)
    @tracer.capture_method
    def find_order() -> Response:
        metrics.add_metric(name="OrderLookupRequest", unit=MetricUnit.Count, value=1)

        body = parse_body(app.current_event.decoded_body)
        lookup_request = validate_lookup_request(body)

        tracer.put_annotation("email_masked", mask_email(lookup_request.email) or "")

        result = lookup_service.lookup(lookup_request)

        logger.info("Order lookup succeeded", extra={
            "order_name": result.order.name,
            "download_count": len(result.downloads),
            "has_order_status_url": bool(result.order_status_url),
        })

        return json_response(200, result.model_dump_json())

    @app.exception_handler(BaseServiceError)
    def handle_service_error(error: BaseServiceError) -> Response:
        log_error_metrics(error)
        return json_response(
            error.status_code,
            format_error_response(error, include_details=settings.debug_mode),
        )

    @app.exception_handler(Exception)
    def handle_unexpected_error(error: Exception) -> Response:
        logger.exception("Unexpected error in find order handler", extra={"error": str(error)})
        metrics.add_metric(name="UnexpectedError", unit=MetricUnit.Count, value=1)

        internal_error = InternalError(message=str(error))
        return json_response(
            internal_error.status_code,
            format_error_response(internal_error, include_details=settings.debug_mode),
        )

    @app.not_found
    def handle_not_found(_: NotFoundError) -> Response:
        method = app.current_event.http_method.upper()

        if method == "OPTIONS":
            return preflight_response()

        if method != "POST":
            logger.info("Method not allowed", extra={"http_method": method})
            return json_response(
                405,
                {"error": "Method not allowed", "message": "Only POST requests are supported."},
                headers={"Allow": ALLOWED_METHODS},
            )

        logger.info("No route for path", extra={"path": app.current_event.path})
        return json_response(404, {"error": "Not found", "message": "No such endpoint."})

    return app


def get_settings() -> LookupSettings:
    """
    Read deployment settings from the environment.

    Raises:
        ConfigurationError: If an environment variable fails validation
    """
    try:
        return LookupSettings.from_env_vars(get_handler_env_vars())
    except ValueError as e:
        raise ConfigurationError(
            message="Invalid environment configuration",
            details=str(e),
        ) from e


# Built once per execution environment, reused across warm invocations
_app: Optional[APIGatewayRestResolver] = None


def get_app() -> APIGatewayRestResolver:
    """Get or create the per-process resolver."""
    global _app

    if _app is None:
        settings = get_settings()
        _app = create_app(OrderLookupService(settings=settings))
        logger.debug("Find order resolver initialized", extra={
            "route_path": settings.route_path,
            "api_version": settings.api_version,
            "debug_mode": settings.debug_mode,
        })

    return _app


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler function.

    Args:
        event: API Gateway REST proxy event
        context: Lambda context object

    Returns:
        API Gateway response
    """
    try:
        return get_app().resolve(event, context)

    except BaseServiceError as e:
        log_error_metrics(e)
        return create_api_response(
            status_code=e.status_code,
            body=format_error_response(e),
        )

    except Exception as e:
        metrics.add_metric(name="RequestError", unit=MetricUnit.Count, value=1)
        logger.exception("Unhandled error in lambda handler", extra={"error": str(e)})

        internal_error = InternalError(message=str(e))
        return create_api_response(
            status_code=internal_error.status_code,
            body=format_error_response(internal_error),
        )
