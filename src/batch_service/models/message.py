"""
Queue message model.

Wraps the fields of an SQS record the processor needs. Delivery metadata is
owned by SQS and only read here for observability.
"""

from typing import Annotated, Any, Dict

from aws_lambda_powertools.utilities.data_classes.sqs_event import SQSRecord
from pydantic import BaseModel, ConfigDict, Field


def parse_receive_count(value: Any) -> int:
    """Read ``ApproximateReceiveCount``, falling back to the first receive when it is absent or invalid."""
    try:
        receive_count = int(value)
    except (TypeError, ValueError):
        return 1
    return max(receive_count, 1)


class QueueMessage(BaseModel):
    """A single message delivered in an SQS batch."""

    model_config = ConfigDict(frozen=True)

    message_id: Annotated[str, Field(
        min_length=1,
        description='Unique identifier assigned by SQS',
        examples=['059f36b4-87a3-44ab-83d2-661975830a7d']
    )]

    body: Annotated[str, Field(
        description='Serialized message payload',
        examples=['{"type": "ok"}']
    )]

    receive_count: Annotated[int, Field(
        ge=1,
        description='Number of times SQS has delivered this message'
    )] = 1

    attributes: Annotated[Dict[str, Any], Field(
        default_factory=dict,
        description='Raw SQS delivery attributes'
    )]

    @classmethod
    def from_sqs_record(cls, record: SQSRecord) -> 'QueueMessage':
        """Build a message from a Powertools SQS record."""
        attributes = dict(record.raw_event.get('attributes') or {})
        return cls(
            message_id=record.message_id,
            body=record.body or '',
            receive_count=parse_receive_count(attributes.get('ApproximateReceiveCount')),
            attributes=attributes,
        )
