"""
Domain logic applied to each deserialized SQS message.

The demo payloads select a simulated branch through their ``type`` field:

- ``business-error``: the message can never succeed (permanent failure)
- ``temporary-error``: a downstream dependency is briefly unavailable (transient failure)
- ``timeout``: a slow downstream call that eventually fails with an unclassified error

Every other payload is processed successfully.
"""

import asyncio
import json
from typing import Any, Dict, Optional

from aws_lambda_powertools import Logger

from batch_service.handlers.utils.errors import (
    MalformedMessageError,
    PermanentFailureError,
    TransientFailureError,
)
from batch_service.handlers.utils.observability import logger as default_logger

BUSINESS_ERROR_TYPE = 'business-error'
TEMPORARY_ERROR_TYPE = 'temporary-error'
TIMEOUT_TYPE = 'timeout'

DEFAULT_SIMULATED_DELAY_SECONDS = 5.0


class OperationTimedOutError(Exception):
    """Raised by the simulated slow downstream call. Carries no classification."""


def deserialize_body(body: str) -> Dict[str, Any]:
    """
    Parse a message body into a JSON object.

    Raises:
        MalformedMessageError: If the body is not valid JSON or not a JSON object
    """
    try:
        payload = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise MalformedMessageError(f'Message body is not valid JSON: {exc}') from exc

    if not isinstance(payload, dict):
        raise MalformedMessageError(
            f'Message body must be a JSON object, got {type(payload).__name__}'
        )
    return payload


class DemoMessageHandler:
    """Applies the simulated business logic to a message payload."""

    def __init__(
        self,
        simulated_delay_seconds: float = DEFAULT_SIMULATED_DELAY_SECONDS,
        logger: Optional[Logger] = None,
    ):
        self.simulated_delay_seconds = simulated_delay_seconds
        self.logger = logger or default_logger

    async def __call__(self, payload: Dict[str, Any]) -> None:
        message_type = payload.get('type')

        if message_type == BUSINESS_ERROR_TYPE:
            raise PermanentFailureError('Invalid business logic')

        if message_type == TEMPORARY_ERROR_TYPE:
            raise TransientFailureError('Temporary processing error')

        if message_type == TIMEOUT_TYPE:
            await asyncio.sleep(self.simulated_delay_seconds)
            raise OperationTimedOutError('Operation timed out')

        self.logger.debug('Payload accepted', extra={'payload': payload})
