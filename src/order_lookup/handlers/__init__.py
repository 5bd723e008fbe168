"""
AWS Lambda Handlers Module.

This module contains the Lambda handler for the find-order endpoint. It is
the handler layer of the three-layer layout:

1. Handler Layer (this module): request/response handling, validation, error mapping
2. Logic Layer: order matching and response shaping
3. Data Access Layer: the Shopify Admin order API

The handler uses AWS Lambda Powertools for structured logging with
correlation IDs, X-Ray tracing and CloudWatch metrics.
"""

from order_lookup.handlers.utils.observability import logger, metrics, tracer

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
