"""
Business Logic Layer Module.

Concurrent batch orchestration and the per-message domain logic. Every
failure is converted to a classified ProcessingOutcome inside this layer.
"""

from batch_service.logic.batch_processor import BatchMessageProcessor
from batch_service.logic.message_handler import DemoMessageHandler, deserialize_body

__all__ = [
    "BatchMessageProcessor",
    "DemoMessageHandler",
    "deserialize_body",
]
