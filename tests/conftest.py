"""Pytest configuration and shared fixtures.

This module provides:
- AWS credential mocking for moto
- A mocked S3 bucket for existence checks
- Elastic Transcoder client stand-ins (moto does not implement its job API)
- Sample job responses
- Environment variable setup
"""

import os
from typing import Any, Callable, Generator
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

# Set dummy AWS credentials BEFORE importing any application code
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"

# Set application environment variables
os.environ["PIPELINE_ID"] = "PIPELINEID"
os.environ["POLL_INTERVAL_MS"] = "0"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["POWERTOOLS_TRACE_DISABLED"] = "true"
os.environ["POWERTOOLS_METRICS_NAMESPACE"] = "AwsTranscode"

INPUT_KEY = "input/test.avi"
OUTPUT_KEY = "output/test.mp4"
JOB_ID = "TESTID"


# =============================================================================
# AWS Fixtures
# =============================================================================


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture(autouse=True)
def reset_aws_clients() -> Generator[None, None, None]:
    """Drop cached boto3 clients so each test builds its own."""
    from src.shared.aws_clients import clear_client_cache

    clear_client_cache()
    yield
    clear_client_cache()


@pytest.fixture
def s3_client(aws_credentials: None) -> Generator[Any, None, None]:
    """Mocked S3 client."""
    with mock_aws():
        yield boto3.client("s3", region_name="us-east-1")


@pytest.fixture
def output_bucket(s3_client: Any) -> str:
    """Create the bucket outputs are checked against."""
    s3_client.create_bucket(Bucket="test-output-bucket")
    return "test-output-bucket"


# =============================================================================
# Elastic Transcoder Fixtures
# =============================================================================


def job(status: str, **output: Any) -> dict[str, Any]:
    """Build a read_job response."""
    response: dict[str, Any] = {"Job": {"Id": JOB_ID, "Status": status}}
    if output:
        response["Job"]["Output"] = output
    return response


@pytest.fixture
def job_progressing() -> dict[str, Any]:
    return job("Progressing")


@pytest.fixture
def job_complete() -> dict[str, Any]:
    return job("Complete", Key=OUTPUT_KEY, DurationMillis=123)


@pytest.fixture
def job_error() -> dict[str, Any]:
    return job("Error", StatusDetail="ERRORDETAILS")


@pytest.fixture
def job_cancelled() -> dict[str, Any]:
    return job("Canceled")


@pytest.fixture
def make_transcoder_client() -> Callable[..., MagicMock]:
    """Factory for Elastic Transcoder client mocks.

    read_job returns the given responses in order.
    """

    def _make(*read_responses: Any) -> MagicMock:
        client = MagicMock(name="elastictranscoder")
        client.create_job.return_value = {"Job": {"Id": JOB_ID}}
        client.read_job.side_effect = list(read_responses)
        return client

    return _make


@pytest.fixture
def no_sleep() -> MagicMock:
    """Sleep replacement that records requested delays."""
    return MagicMock(name="sleep", return_value=None)


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def sample_outputs() -> list[dict[str, Any]]:
    """Outputs in the camelCase shape accepted by transcode()."""
    return [{"key": OUTPUT_KEY, "presetId": "PRESETID"}]


@pytest.fixture
def sample_config() -> dict[str, Any]:
    return {"pipelineId": "PIPELINEID", "pollInterval": 0, "region": "REGIONID"}


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture
def mock_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Set up complete mock environment."""
    env_vars = {
        "AWS_REGION": "us-east-1",
        "PIPELINE_ID": "PIPELINEID",
        "POLL_INTERVAL_MS": "0",
        "CHECK_EXISTS_IN_BUCKET": "",
        "EXISTENCE_CHECK_WORKERS": "2",
        "LOG_LEVEL": "DEBUG",
    }

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    # Clear cached settings
    from src.shared.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def lambda_context() -> MagicMock:
    """Minimal Lambda context for powertools decorators."""
    context = MagicMock()
    context.function_name = "aws-transcode"
    context.memory_limit_in_mb = 128
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:aws-transcode"
    context.aws_request_id = "52fdfc07-2182-154f-163f-5f0f9a621d72"
    return context
