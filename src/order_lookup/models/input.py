"""
Input models for request validation using Pydantic.

This module defines the body accepted by the find-order endpoint.
"""

import re
from typing import Annotated, Any

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

INVALID_EMAIL_MESSAGE = 'Invalid email format'


class LookupRequest(BaseModel):
    """Request model for looking up an order."""

    order_number: Annotated[str, Field(
        min_length=1,
        description='Order number as printed on the receipt, with or without "#"',
        examples=['1779', '#1779']
    )]

    email: Annotated[str, Field(
        min_length=1,
        description='Email address the order was placed with',
        examples=['buyer@example.com']
    )]

    @field_validator('order_number', mode='before')
    @classmethod
    def coerce_order_number(cls, v: Any) -> Any:
        """Accept whole-number order numbers sent as JSON numbers."""
        if isinstance(v, bool):
            return v
        if isinstance(v, int):
            return str(v)
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        return v

    @field_validator('email')
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate email format."""
        if not EMAIL_PATTERN.match(v):
            raise ValueError(INVALID_EMAIL_MESSAGE)
        return v
