"""
DLQ Demo Lambda Function - Entry point for the SQS batch consumer.

This module serves as the Lambda function entry point that delegates to the
batch handler in the service package.
"""

import os
import sys
from typing import Any, Dict

# Add the service module to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from batch_service.handlers.dlq_handler import lambda_handler as batch_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda function entry point for the demo queue.

    Args:
        event: Lambda event payload (SQS event)
        context: Lambda context object

    Returns:
        Partial batch response listing the messages to redeliver
    """
    return batch_handler(event, context)
