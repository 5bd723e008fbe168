"""
Find Order Lambda Function - Entry point for the storefront order lookup.

This module serves as the Lambda function entry point that delegates to the
find-order handler in the ``order_lookup`` package.
"""

import os
import sys
from typing import Any, Dict

# Add the order_lookup package to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from order_lookup.handlers.find_order_handler import lambda_handler as find_order_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda function entry point for the find-order API.

    Args:
        event: Lambda event payload (API Gateway event)
        context: Lambda context object

    Returns:
        API Gateway response dictionary
    """
    return find_order_handler(event, context)
