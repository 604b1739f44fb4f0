"""
Error types for SQS message processing.

Every error raised while processing a message carries the retry-policy
classification decided at the point of failure, so the batch processor can
tag the outcome without inspecting exception types.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from batch_service.models.outcome import ErrorClassification


class MessageProcessingError(Exception):
    """Base exception class for message processing errors."""

    classification: ErrorClassification = ErrorClassification.UNKNOWN

    def __init__(
        self,
        message: str,
        error_code: str = 'MESSAGE_PROCESSING_ERROR',
        classification: Optional[ErrorClassification] = None,
        retry_after: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        if classification is not None:
            self.classification = classification
        self.retry_after = retry_after
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for structured logging."""
        return {
            'error_id': self.error_id,
            'error_code': self.error_code,
            'message': self.message,
            'classification': self.classification.value,
            'retry_after': self.retry_after,
            'timestamp': datetime.now(timezone.utc).isoformat(),
        }


class PermanentFailureError(MessageProcessingError):
    """Raised when a message can never be processed, e.g. invalid business state."""

    classification = ErrorClassification.PERMANENT

    def __init__(self, message: str, error_code: str = 'BUSINESS_LOGIC_ERROR'):
        super().__init__(message=message, error_code=error_code)


class TransientFailureError(MessageProcessingError):
    """Raised for recoverable conditions such as downstream unavailability."""

    classification = ErrorClassification.TRANSIENT

    def __init__(
        self,
        message: str,
        error_code: str = 'TEMPORARY_ERROR',
        retry_after: Optional[int] = None,
    ):
        super().__init__(message=message, error_code=error_code, retry_after=retry_after)


class TimeBudgetExceededError(MessageProcessingError):
    """Raised when a message is still running as the invocation deadline approaches."""

    classification = ErrorClassification.TRANSIENT

    def __init__(self, time_budget_seconds: float):
        super().__init__(
            message='Processing exceeded the invocation time budget',
            error_code='TIME_BUDGET_EXCEEDED',
        )
        self.time_budget_seconds = time_budget_seconds


class MalformedMessageError(MessageProcessingError):
    """Raised when a message body cannot be deserialized."""

    classification = ErrorClassification.UNKNOWN

    def __init__(self, message: str):
        super().__init__(message=message, error_code='MALFORMED_MESSAGE')


def classify_error(error: BaseException) -> ErrorClassification:
    """Return the classification carried by ``error``, UNKNOWN when it carries none."""
    classification = getattr(error, 'classification', None)
    if isinstance(classification, ErrorClassification):
        return classification
    return ErrorClassification.UNKNOWN
