"""Skip outputs that already exist in S3.

The check is optimistic: any failure of ``head_object`` (404, access denied,
network error) counts as "does not exist" so transcoding goes ahead.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Sequence

from aws_lambda_powertools import Logger

from ..shared.aws_clients import get_s3_client
from ..shared.config import get_settings
from ..shared.models import TranscodeOutput

logger = Logger(service="existence-filter")


def check_exists(s3_client: Any, bucket: str, key: str) -> bool:
    """Check if an object exists.

    Args:
        s3_client: boto3 S3 client
        bucket: Bucket to look in
        key: Object key

    Returns:
        True if head_object succeeded, False on any error
    """
    try:
        s3_client.head_object(Bucket=bucket, Key=key)
        return True
    except Exception as e:
        logger.debug(
            "Output not found, will transcode",
            extra={"bucket": bucket, "key": key, "error": str(e)},
        )
        return False


def filter_existing(
    outputs: Sequence[TranscodeOutput],
    bucket: str | None,
    s3_client: Any = None,
    max_workers: int | None = None,
) -> list[TranscodeOutput]:
    """Remove outputs that already exist in ``bucket``.

    Checks run concurrently; retained outputs keep their original order.

    Args:
        outputs: Requested outputs
        bucket: Bucket to check; falsy disables filtering
        s3_client: S3 client (cached default client if omitted)
        max_workers: Thread pool size (from settings if omitted)

    Returns:
        Outputs that do not exist yet; may be empty
    """
    if not bucket:
        return list(outputs)

    if s3_client is None:
        s3_client = get_s3_client(get_settings().aws_region)
    if max_workers is None:
        max_workers = get_settings().existence_check_workers

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        exists = list(
            executor.map(lambda output: check_exists(s3_client, bucket, output.key), outputs)
        )

    filtered = [output for output, found in zip(outputs, exists) if not found]

    skipped = [output.key for output, found in zip(outputs, exists) if found]
    if skipped:
        logger.info(
            "Skipping existing outputs",
            extra={"bucket": bucket, "skipped": skipped, "remaining": len(filtered)},
        )

    return filtered
