"""
Environment variable models for type-safe configuration.

The Lambda reads these once per process and converts them into an immutable
``LookupSettings`` object that is handed to the lookup service explicitly.
"""

from typing import Annotated

from aws_lambda_env_modeler import BaseModel as BaseEnvModel, get_environment_variables
from pydantic import Field


class FindOrderEnvVars(BaseEnvModel):
    """Environment variables for the find-order handler."""

    # Shopify store domain, e.g. my-shop.myshopify.com
    SHOPIFY_STORE: Annotated[str | None, Field(
        default=None,
        description='Shopify store domain, with or without scheme'
    )] = None

    # Older deployments used this name
    SHOPIFY_STORE_URL: Annotated[str | None, Field(
        default=None,
        description='Legacy name for the Shopify store domain'
    )] = None

    SHOPIFY_ADMIN_API_TOKEN: Annotated[str | None, Field(
        default=None,
        description='Shopify Admin API access token'
    )] = None

    SHOPIFY_API_VERSION: Annotated[str, Field(
        default='2024-01',
        description='Shopify Admin API version',
        pattern=r'^\d{4}-\d{2}$'
    )] = '2024-01'

    # Environment name (dev, staging, prod)
    ENVIRONMENT: Annotated[str, Field(
        default='prod',
        description='Deployment environment name',
        pattern=r'^(dev|staging|prod)$'
    )] = 'prod'

    FIND_ORDER_PATH: Annotated[str, Field(
        default='/',
        description='Route the lookup endpoint is mounted on',
        pattern=r'^/'
    )] = '/'

    UPSTREAM_TIMEOUT_SECONDS: Annotated[float, Field(
        default=10.0,
        description='Timeout for the Shopify API call in seconds',
        gt=0,
        le=60
    )] = 10.0

    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        default='order-lookup',
        description='Service name for AWS Powertools'
    )] = 'order-lookup'

    LOG_LEVEL: Annotated[str, Field(
        default='INFO',
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == 'dev'

    @property
    def store_domain(self) -> str | None:
        return self.SHOPIFY_STORE or self.SHOPIFY_STORE_URL


def get_handler_env_vars() -> FindOrderEnvVars:
    """
    Get typed environment variables for the find-order handler.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=FindOrderEnvVars)
