"""
Runtime configuration passed explicitly into the lookup service.

``LookupSettings`` is immutable and built once per process, either from
environment variables in the Lambda entry point or directly in tests.
"""

import re
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from order_lookup.handlers.models.env_vars import FindOrderEnvVars

_SCHEME_PATTERN = re.compile(r'^https?://')


class LookupSettings(BaseModel):
    """Configuration for a single deployment of the lookup endpoint."""

    model_config = ConfigDict(frozen=True)

    store_domain: Annotated[str | None, Field(
        default=None,
        description='Shopify store domain without scheme or trailing slash',
        examples=['my-shop.myshopify.com']
    )] = None

    access_token: Annotated[str | None, Field(
        default=None,
        description='Shopify Admin API access token',
        repr=False
    )] = None

    api_version: Annotated[str, Field(
        default='2024-01',
        description='Shopify Admin API version'
    )] = '2024-01'

    route_path: Annotated[str, Field(
        default='/',
        description='Route the lookup endpoint is mounted on'
    )] = '/'

    timeout_seconds: Annotated[float, Field(
        default=10.0,
        gt=0,
        description='Timeout for the upstream call'
    )] = 10.0

    debug_mode: Annotated[bool, Field(
        default=False,
        description='Include internal details in error responses'
    )] = False

    @field_validator('store_domain')
    @classmethod
    def clean_store_domain(cls, v: str | None) -> str | None:
        """Strip the scheme and any trailing slash from the store value."""
        if v is None:
            return None
        cleaned = _SCHEME_PATTERN.sub('', v.strip()).rstrip('/')
        return cleaned or None

    @property
    def has_credentials(self) -> bool:
        return bool(self.store_domain and self.access_token)

    @property
    def orders_url(self) -> str:
        return f"https://{self.store_domain}/admin/api/{self.api_version}/orders.json"

    @classmethod
    def from_env_vars(cls, env_vars: FindOrderEnvVars) -> 'LookupSettings':
        """Build settings from the validated environment model."""
        return cls(
            store_domain=env_vars.store_domain,
            access_token=env_vars.SHOPIFY_ADMIN_API_TOKEN or None,
            api_version=env_vars.SHOPIFY_API_VERSION,
            route_path=env_vars.FIND_ORDER_PATH,
            timeout_seconds=env_vars.UPSTREAM_TIMEOUT_SECONDS,
            debug_mode=env_vars.is_development,
        )
