"""
SQS Batch Processor Service Module.

This package contains the Lambda service that consumes SQS batches with
partial-failure reporting, following the three-layer layout:

- handlers: Lambda entry points, configuration and observability
- logic: Concurrent batch processing and per-message domain logic
- models: Queue message, processing outcome and batch response schemas

Failed messages are reported individually so SQS redelivers only those;
after the queue's maximum receive count SQS moves them to the dead-letter queue.
"""

__version__ = "1.0.0"
__description__ = "SQS batch processor with partial batch responses and DLQ semantics"

# Re-export commonly used classes for convenience
from batch_service.models.message import QueueMessage
from batch_service.models.outcome import ErrorClassification, ProcessingOutcome
from batch_service.models.output import BatchResult
from batch_service.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "QueueMessage",
    "ErrorClassification",
    "ProcessingOutcome",
    "BatchResult",
    "logger",
    "tracer",
    "metrics",
]
