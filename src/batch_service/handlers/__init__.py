"""
AWS Lambda Handlers Module.

This module contains the Lambda entry point for the SQS batch processor.
The handler parses the SQS event, delegates to the logic layer and returns
the partial batch response.

The handlers use AWS Lambda Powertools for:
- Structured logging with Lambda context
- Distributed tracing with X-Ray
- Custom metrics collection
- Typed event data classes
"""

__version__ = "1.0.0"

# Re-export handler utilities for convenience
from batch_service.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
