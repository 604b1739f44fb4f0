"""
Per-message processing outcome models.

A ProcessingOutcome is created for every message in a batch and consumed
immediately when the batch response is built; nothing here is persisted.
"""

from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ErrorClassification(str, Enum):
    """Retry-policy classification attached to a failed message."""

    PERMANENT = 'PERMANENT'
    TRANSIENT = 'TRANSIENT'
    UNKNOWN = 'UNKNOWN'

    @property
    def reaches_dlq(self) -> bool:
        """Whether the failure is expected to exhaust its retries and land in the DLQ."""
        return self is ErrorClassification.PERMANENT

    @property
    def retry_policy(self) -> str:
        if self is ErrorClassification.PERMANENT:
            return 'will reach DLQ after retry exhaustion'
        if self is ErrorClassification.TRANSIENT:
            return 'will be retried'
        return 'will be retried (conservative default for unclassified errors)'

    @property
    def metric_name(self) -> str:
        return f'{self.value.capitalize()}Failures'


class ProcessingOutcome(BaseModel):
    """Result of processing a single queue message."""

    model_config = ConfigDict(frozen=True)

    message_id: Annotated[str, Field(
        min_length=1,
        description='SQS message identifier the outcome belongs to'
    )]

    success: Annotated[bool, Field(
        description='True when the message was processed successfully'
    )]

    classification: Annotated[Optional[ErrorClassification], Field(
        description='Error classification, only set on failure'
    )] = None

    error_message: Annotated[Optional[str], Field(
        description='Human readable error description, only set on failure'
    )] = None

    @model_validator(mode='after')
    def validate_classification(self) -> 'ProcessingOutcome':
        """A failed outcome must be classified and a successful one must not be."""
        if self.success and self.classification is not None:
            raise ValueError('successful outcome cannot carry an error classification')
        if not self.success and self.classification is None:
            raise ValueError('failed outcome requires an error classification')
        return self

    @classmethod
    def succeeded(cls, message_id: str) -> 'ProcessingOutcome':
        return cls(message_id=message_id, success=True)

    @classmethod
    def failed(
        cls,
        message_id: str,
        classification: ErrorClassification,
        error_message: Optional[str] = None,
    ) -> 'ProcessingOutcome':
        return cls(
            message_id=message_id,
            success=False,
            classification=classification,
            error_message=error_message,
        )
