"""
SQS Batch Handler - Lambda function consuming the demo queue.

The event source mapping is configured with ``ReportBatchItemFailures``: the
handler returns the identifiers of failed messages only, SQS redelivers those
and moves them to the dead-letter queue once ``maxReceiveCount`` is exceeded.
"""

import asyncio
from typing import Any, Dict, List, Optional

from aws_lambda_powertools.utilities.data_classes import SQSEvent, event_source
from aws_lambda_powertools.utilities.typing import LambdaContext

from batch_service.handlers.models.env_vars import BatchHandlerEnvVars, get_handler_env_vars
from batch_service.handlers.utils.observability import logger, metrics, tracer
from batch_service.logic.batch_processor import BatchMessageProcessor
from batch_service.logic.message_handler import DemoMessageHandler
from batch_service.models.message import QueueMessage
from batch_service.models.output import BatchResult


def build_processor(env_vars: BatchHandlerEnvVars) -> BatchMessageProcessor:
    """Create a batch processor configured from the environment."""
    return BatchMessageProcessor(
        message_handler=DemoMessageHandler(
            simulated_delay_seconds=env_vars.SIMULATED_TIMEOUT_SECONDS,
            logger=logger,
        ),
        logger=logger,
        metrics=metrics,
        max_batch_size=env_vars.MAX_BATCH_SIZE,
        max_receive_count=env_vars.MAX_RECEIVE_COUNT,
    )


def get_time_budget_seconds(context: LambdaContext, env_vars: BatchHandlerEnvVars) -> Optional[float]:
    """
    Compute how long messages may run before the invocation deadline.

    Returns:
        Seconds left once the safety margin is reserved, or None when the
        budget is not enforced
    """
    if not env_vars.time_budget_enforced:
        return None

    remaining_ms = context.get_remaining_time_in_millis() - env_vars.TIME_BUDGET_SAFETY_MARGIN_MS
    return max(remaining_ms, 0) / 1000


@tracer.capture_method
def parse_messages(event: SQSEvent) -> List[QueueMessage]:
    """
    Convert the SQS records into queue messages, preserving delivery order.

    A record without a ``messageId`` cannot be named in the partial batch
    response, so it is logged and skipped instead of failing the whole batch.
    """
    messages: List[QueueMessage] = []
    for record in event.records:
        if not record.raw_event.get('messageId'):
            logger.error(
                'Skipping SQS record without a messageId',
                extra={'event_source_arn': record.raw_event.get('eventSourceARN')},
            )
            continue
        messages.append(QueueMessage.from_sqs_record(record))
    return messages


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(log_event=False)
@event_source(data_class=SQSEvent)
def lambda_handler(event: SQSEvent, context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda handler for SQS batches with partial-failure reporting.

    Args:
        event: SQS event wrapped in the Powertools data class
        context: Lambda context object

    Returns:
        ``{"batchItemFailures": [{"itemIdentifier": ...}, ...]}``
    """
    env_vars = get_handler_env_vars()
    logger.setLevel(env_vars.LOG_LEVEL)

    messages = parse_messages(event)
    tracer.put_annotation('batch_size', len(messages))

    processor = build_processor(env_vars)
    time_budget = get_time_budget_seconds(context, env_vars)

    result: BatchResult = asyncio.run(processor.handle_batch(messages, time_budget_seconds=time_budget))

    logger.info(
        'Returning partial batch response',
        extra={
            'batch_size': len(messages),
            'failed_count': len(result.batch_item_failures),
            'remaining_time_ms': context.get_remaining_time_in_millis(),
        },
    )
    return result.to_response()
