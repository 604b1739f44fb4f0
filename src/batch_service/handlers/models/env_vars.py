"""
Environment variable models for type-safe configuration.

This module defines Pydantic models for the environment variables read by the
SQS batch handler, validated once per invocation through aws-lambda-env-modeler.
"""

from typing import Annotated

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, Field


class BatchHandlerEnvVars(BaseModel):
    """Environment variables for the SQS batch handler."""

    # Environment name (dev, test, staging, prod)
    ENVIRONMENT: Annotated[str, Field(
        description='Deployment environment name',
        pattern=r'^(dev|test|staging|prod)$'
    )] = 'dev'

    # Service name for observability
    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        description='Service name for AWS Powertools'
    )] = 'sqs-batch-processor'

    # Log level for AWS Powertools Logger
    LOG_LEVEL: Annotated[str, Field(
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    # Matches the event source mapping BatchSize
    MAX_BATCH_SIZE: Annotated[int, Field(
        description='Maximum number of records expected in one SQS batch',
        ge=1,
        le=10000
    )] = 10

    # Matches the queue RedrivePolicy maxReceiveCount
    MAX_RECEIVE_COUNT: Annotated[int, Field(
        description='Receive count after which SQS moves a message to the DLQ',
        ge=1,
        le=1000
    )] = 3

    SIMULATED_TIMEOUT_SECONDS: Annotated[float, Field(
        description='Delay of the simulated slow downstream call for "timeout" messages',
        ge=0,
        le=900
    )] = 5.0

    TIME_BUDGET_SAFETY_MARGIN_MS: Annotated[int, Field(
        description='Milliseconds reserved before the Lambda deadline to build the batch response',
        ge=0,
        le=60000
    )] = 1000

    ENFORCE_TIME_BUDGET: Annotated[str, Field(
        description='Bound message processing by the remaining invocation time (true/false)',
        pattern=r'^(true|false)$'
    )] = 'true'

    @property
    def time_budget_enforced(self) -> bool:
        """Check if per-message processing is bounded by the invocation deadline."""
        return self.ENFORCE_TIME_BUDGET.lower() == 'true'


def get_handler_env_vars() -> BatchHandlerEnvVars:
    """
    Get typed environment variables for the batch handler.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=BatchHandlerEnvVars)
