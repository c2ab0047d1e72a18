"""AWS client factories.

Clients are cached per region. Retries are disabled at the botocore level:
a failed job submission or status read is surfaced to the caller as-is.
"""

from functools import lru_cache
from typing import Any

import boto3
from botocore.config import Config

AWS_CONFIG = Config(
    retries={
        "max_attempts": 1,
        "mode": "standard",
    },
    connect_timeout=5,
    read_timeout=30,
)

S3_CONFIG = AWS_CONFIG.merge(Config(signature_version="s3v4"))


@lru_cache(maxsize=8)
def get_elastictranscoder_client(region: str) -> Any:
    """Get cached Elastic Transcoder client.

    Args:
        region: AWS region the pipeline lives in

    Returns:
        boto3 Elastic Transcoder client
    """
    return boto3.client(
        "elastictranscoder",
        region_name=region,
        config=AWS_CONFIG,
    )


@lru_cache(maxsize=8)
def get_s3_client(region: str) -> Any:
    """Get cached S3 client.

    Returns:
        boto3 S3 client using SigV4 signing
    """
    return boto3.client(
        "s3",
        region_name=region,
        config=S3_CONFIG,
    )


def clear_client_cache() -> None:
    """Clear all cached AWS clients.

    Useful for testing when mocking needs to be reset.
    """
    get_elastictranscoder_client.cache_clear()
    get_s3_client.cache_clear()
