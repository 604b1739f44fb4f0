"""
Service Models Package

This package contains the Pydantic models used by the batch processor:
the inbound queue message, per-message outcomes and the batch response.
"""

from .message import QueueMessage
from .outcome import ErrorClassification, ProcessingOutcome
from .output import BatchItemFailure, BatchResult

__all__ = [
    # Input models
    "QueueMessage",

    # Domain models
    "ErrorClassification",
    "ProcessingOutcome",

    # Output models
    "BatchItemFailure",
    "BatchResult",
]
