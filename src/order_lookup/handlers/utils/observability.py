"""
Centralized observability utilities for the order lookup function.

This module provides configured instances of AWS Lambda Powertools for logging,
tracing, and metrics collection, shared by the handler, logic and DAL layers.
"""

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

# Metrics namespace for lookup KPIs
METRICS_NAMESPACE = 'OrderLookup'

# JSON output format, service name can be set by environment variable "POWERTOOLS_SERVICE_NAME"
logger: Logger = Logger(service='order-lookup')

# Disabled by setting POWERTOOLS_TRACE_DISABLED to "True"
tracer: Tracer = Tracer(service='order-lookup')

# Namespace can be overridden by POWERTOOLS_METRICS_NAMESPACE
metrics = Metrics(namespace=METRICS_NAMESPACE)


def mask_email(email: str | None) -> str | None:
    """Keep the first three characters of an email for log correlation."""
    if not email:
        return None
    return f"{email[:3]}***"
