"""
Pytest configuration and shared fixtures for the SQS batch processor.

This module provides common test fixtures and configuration used across
unit, integration, and benchmark tests.
"""

import json
import os
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, List
from unittest.mock import Mock

import pytest

from batch_service.models.message import QueueMessage


# Test environment configuration
@pytest.fixture(scope="session", autouse=True)
def test_environment():
    """Set up test environment variables."""
    os.environ.update({
        "AWS_DEFAULT_REGION": "us-east-1",
        "ENVIRONMENT": "test",
        "POWERTOOLS_SERVICE_NAME": "test-sqs-batch-processor",
        "POWERTOOLS_METRICS_NAMESPACE": "TestSqsBatchProcessor",
        "LOG_LEVEL": "DEBUG",
        "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
        "SIMULATED_TIMEOUT_SECONDS": "0.2",
        "TIME_BUDGET_SAFETY_MARGIN_MS": "1000",
        "ENFORCE_TIME_BUDGET": "true",
        # Re-read the environment on every call so tests can change variables
        "LAMBDA_ENV_MODELER_DISABLE_CACHE": "true",
    })


@dataclass
class FakeLambdaContext:
    """Minimal Lambda context accepted by the Powertools decorators."""

    function_name: str = "test-dlq-demo-function"
    function_version: str = "$LATEST"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:test-dlq-demo-function"
    aws_request_id: str = "test-request-id-123"
    log_group_name: str = "/aws/lambda/test-dlq-demo-function"
    log_stream_name: str = "2024/01/01/[$LATEST]test123"
    remaining_time_ms: int = 30000

    def get_remaining_time_in_millis(self) -> int:
        return self.remaining_time_ms


@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    """Create a fake Lambda context for testing."""
    return FakeLambdaContext()


# SQS event fixtures
def build_sqs_record(body: str, message_id: str = None, receive_count: int = 1) -> Dict[str, Any]:
    """Build a single SQS record in the shape Lambda delivers it."""
    return {
        "messageId": message_id or str(uuid.uuid4()),
        "receiptHandle": "AQEBwJnKyrHigUMZj6rYigCgxlaS3SLy0a",
        "body": body,
        "attributes": {
            "ApproximateReceiveCount": str(receive_count),
            "SentTimestamp": "1704110400000",
            "SenderId": "AIDAIENQZJOLO23YVJ4VO",
            "ApproximateFirstReceiveTimestamp": "1704110400001",
        },
        "messageAttributes": {},
        "md5OfBody": "e4e68fb7bd0e697a0ae8f1bb342846b3",
        "eventSource": "aws:sqs",
        "eventSourceARN": "arn:aws:sqs:us-east-1:123456789012:demo-queue",
        "awsRegion": "us-east-1",
    }


@pytest.fixture
def sqs_event_factory() -> Callable[..., Dict[str, Any]]:
    """Build an SQS event from message bodies; dict bodies are JSON encoded."""

    def create_event(*bodies: Any, receive_count: int = 1) -> Dict[str, Any]:
        records = [
            build_sqs_record(
                body if isinstance(body, str) else json.dumps(body),
                message_id=f"msg-{index}",
                receive_count=receive_count,
            )
            for index, body in enumerate(bodies, start=1)
        ]
        return {"Records": records}

    return create_event


@pytest.fixture
def message_factory() -> Callable[..., QueueMessage]:
    """Build queue messages; dict bodies are JSON encoded."""

    def create_message(body: Any, message_id: str = None, receive_count: int = 1) -> QueueMessage:
        return QueueMessage(
            message_id=message_id or str(uuid.uuid4()),
            body=body if isinstance(body, str) else json.dumps(body),
            receive_count=receive_count,
        )

    return create_message


@pytest.fixture
def mixed_batch(message_factory) -> List[QueueMessage]:
    """The ok / business-error / temporary-error batch."""
    return [
        message_factory({"type": "ok"}, message_id="msg-1"),
        message_factory({"type": "business-error"}, message_id="msg-2"),
        message_factory({"type": "temporary-error"}, message_id="msg-3"),
    ]


@pytest.fixture
def mock_logger() -> Mock:
    """Logging port double that records calls instead of writing output."""
    return Mock()


@pytest.fixture
def mock_metrics() -> Mock:
    """Metrics sink double."""
    return Mock()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow running tests")
    config.addinivalue_line("markers", "benchmark: Performance benchmark tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "benchmark" in str(item.fspath):
            item.add_marker(pytest.mark.benchmark)
