"""
Batch message processor with partial-failure reporting.

Processes every message of an SQS batch concurrently and reports back only the
messages that failed, so SQS redelivers those and deletes the rest. Failures
never escape this module: an exception reaching Lambda would make SQS treat
the whole batch, including the messages that succeeded, as failed.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from aws_lambda_powertools import Logger, Metrics
from aws_lambda_powertools.metrics import MetricUnit

from batch_service.handlers.utils.errors import TimeBudgetExceededError, classify_error
from batch_service.handlers.utils.observability import logger as default_logger
from batch_service.handlers.utils.observability import metrics as default_metrics
from batch_service.handlers.utils.observability import tracer
from batch_service.logic.message_handler import DemoMessageHandler, deserialize_body
from batch_service.models.message import QueueMessage
from batch_service.models.outcome import ErrorClassification, ProcessingOutcome
from batch_service.models.output import BatchResult

MessageHandler = Callable[[Dict[str, Any]], Awaitable[None]]

DEFAULT_MAX_BATCH_SIZE = 10
DEFAULT_MAX_RECEIVE_COUNT = 3


class BatchMessageProcessor:
    """
    Concurrent SQS batch processor.

    Collaborators are injected so the logic can be exercised without a Lambda
    runtime or captured output streams.

    Args:
        message_handler: Coroutine function applied to each deserialized payload
        logger: Structured logger receiving one entry per message
        metrics: Metrics sink for batch level counters
        max_batch_size: Batch size configured on the event source mapping
        max_receive_count: Receive count after which SQS moves a message to the DLQ
    """

    def __init__(
        self,
        message_handler: Optional[MessageHandler] = None,
        logger: Optional[Logger] = None,
        metrics: Optional[Metrics] = None,
        max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
        max_receive_count: int = DEFAULT_MAX_RECEIVE_COUNT,
    ):
        self.logger = logger or default_logger
        self.message_handler = message_handler or DemoMessageHandler(logger=self.logger)
        self.metrics = metrics or default_metrics
        self.max_batch_size = max_batch_size
        self.max_receive_count = max_receive_count

    async def process_one(
        self,
        message: QueueMessage,
        timeout_seconds: Optional[float] = None,
    ) -> ProcessingOutcome:
        """
        Process a single message and convert every error into an outcome.

        Args:
            message: Message to process
            timeout_seconds: Optional bound on the processing time; exceeding it
                is reported as a transient failure

        Returns:
            The processing outcome; this coroutine never raises
        """
        try:
            payload = deserialize_body(message.body)
            if timeout_seconds is None:
                await self.message_handler(payload)
            else:
                await self._run_within_budget(payload, timeout_seconds)

        except Exception as exc:
            classification = classify_error(exc)
            log_extra = {
                'message_id': message.message_id,
                'classification': classification.value,
                'error_type': type(exc).__name__,
                'error': str(exc),
            }
            if classification is ErrorClassification.UNKNOWN:
                self.logger.exception('Error processing message', extra=log_extra)
            else:
                self.logger.error('Error processing message', extra=log_extra)
            return ProcessingOutcome.failed(
                message_id=message.message_id,
                classification=classification,
                error_message=str(exc),
            )

        self.logger.info('Successfully processed message', extra={'message_id': message.message_id})
        return ProcessingOutcome.succeeded(message.message_id)

    async def _run_within_budget(self, payload: Dict[str, Any], timeout_seconds: float) -> None:
        """
        Run the message handler, cancelling it once the budget elapses.

        Only the budget overrun raises TimeBudgetExceededError; errors raised by
        the handler itself, including its own TimeoutError, propagate unchanged.
        """
        task = asyncio.ensure_future(self.message_handler(payload))
        done, _ = await asyncio.wait({task}, timeout=timeout_seconds)
        if not done:
            task.cancel()
            await asyncio.wait({task})
            raise TimeBudgetExceededError(timeout_seconds)
        task.result()

    @tracer.capture_method
    async def handle_batch(
        self,
        messages: Sequence[QueueMessage],
        time_budget_seconds: Optional[float] = None,
    ) -> BatchResult:
        """
        Process a batch concurrently and return the messages to redeliver.

        Args:
            messages: Messages in the order SQS delivered them
            time_budget_seconds: Optional bound applied to every message

        Returns:
            BatchResult listing exactly the failed message identifiers
        """
        batch_size = len(messages)
        self.logger.info('Processing batch', extra={'batch_size': batch_size})
        self.metrics.add_metric(name='BatchSize', unit=MetricUnit.Count, value=batch_size)

        if not messages:
            return BatchResult()

        if batch_size > self.max_batch_size:
            self.logger.warning(
                'Batch exceeds the configured maximum size, processing all messages',
                extra={'batch_size': batch_size, 'max_batch_size': self.max_batch_size},
            )

        results = await asyncio.gather(
            *(self.process_one(message, time_budget_seconds) for message in messages),
            return_exceptions=True,
        )

        outcomes: List[ProcessingOutcome] = []
        for message, result in zip(messages, results):
            if isinstance(result, BaseException):
                # process_one converts errors itself; this only guards the join
                self.logger.error(
                    'Unhandled error escaped message processing',
                    extra={'message_id': message.message_id, 'error': repr(result)},
                )
                result = ProcessingOutcome.failed(
                    message_id=message.message_id,
                    classification=ErrorClassification.UNKNOWN,
                    error_message=repr(result),
                )
            self._report_outcome(message, result)
            outcomes.append(result)

        batch_result = BatchResult.from_outcomes(outcomes)
        failed_count = len(batch_result.batch_item_failures)
        processed_count = sum(1 for outcome in outcomes if outcome.success)

        self.metrics.add_metric(name='ProcessedMessages', unit=MetricUnit.Count, value=processed_count)
        self.metrics.add_metric(name='FailedMessages', unit=MetricUnit.Count, value=failed_count)

        self.logger.info(
            'Batch processing completed',
            extra={
                'batch_size': batch_size,
                'failed_count': failed_count,
                'failed_message_ids': batch_result.failed_ids,
            },
        )
        return batch_result

    def _report_outcome(self, message: QueueMessage, outcome: ProcessingOutcome) -> None:
        if outcome.success:
            self.logger.info('Message acknowledged', extra={'message_id': outcome.message_id})
            return

        classification = outcome.classification
        final_attempt = message.receive_count >= self.max_receive_count
        self.logger.warning(
            f'{classification.value.capitalize()} failure for message {outcome.message_id} - '
            f'{classification.retry_policy}',
            extra={
                'message_id': outcome.message_id,
                'classification': classification.value,
                'receive_count': message.receive_count,
                'max_receive_count': self.max_receive_count,
                'moving_to_dlq': final_attempt,
            },
        )
        self.metrics.add_metric(name=classification.metric_name, unit=MetricUnit.Count, value=1)
