"""
Output models for the SQS partial batch response.

Field aliases match the Lambda ``ReportBatchItemFailures`` response contract.
"""

from typing import Annotated, Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from batch_service.models.outcome import ProcessingOutcome


class BatchItemFailure(BaseModel):
    """A message SQS must keep in the queue for redelivery."""

    model_config = ConfigDict(populate_by_name=True)

    item_identifier: Annotated[str, Field(
        alias='itemIdentifier',
        min_length=1,
        description='SQS message identifier to redeliver'
    )]


class BatchResult(BaseModel):
    """Failed message identifiers for one batch invocation."""

    model_config = ConfigDict(populate_by_name=True)

    batch_item_failures: Annotated[List[BatchItemFailure], Field(
        default_factory=list,
        alias='batchItemFailures',
        description='Messages to retain in the queue; all others are deleted'
    )]

    @classmethod
    def from_outcomes(cls, outcomes: List[ProcessingOutcome]) -> 'BatchResult':
        """Collect the unsuccessful outcomes, once per message, in collection order."""
        failures: List[BatchItemFailure] = []
        seen = set()
        for outcome in outcomes:
            if outcome.success or outcome.message_id in seen:
                continue
            seen.add(outcome.message_id)
            failures.append(BatchItemFailure(item_identifier=outcome.message_id))
        return cls(batch_item_failures=failures)

    @property
    def failed_ids(self) -> List[str]:
        return [failure.item_identifier for failure in self.batch_item_failures]

    def to_response(self) -> Dict[str, Any]:
        """Serialize to the partial batch response Lambda returns to SQS."""
        return self.model_dump(by_alias=True)
