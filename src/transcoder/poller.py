"""Job status polling.

Each poll re-reads the job from Elastic Transcoder; no status transitions
are derived locally. Reads are strictly sequential and the loop has no
iteration cap or overall timeout.
"""

import time
from typing import Any, Callable

from aws_lambda_powertools import Logger

from ..shared.exceptions import TranscodeCancelledError, TranscodeFailedError
from ..shared.models import JobStatus, ProgressEvent, ProgressListener

logger = Logger(service="job-poller")


def check_job_status(
    client: Any,
    key: str,
    job_id: str,
    on_progress: ProgressListener | None = None,
) -> int | None:
    """Read the job once and classify its status.

    Args:
        client: boto3 Elastic Transcoder client
        key: Input key, used in error messages
        job_id: Job to read
        on_progress: Called with a ProgressEvent for non-terminal statuses

    Returns:
        Output duration in milliseconds if complete, None if still running

    Raises:
        TranscodeFailedError: Job status is "Error"
        TranscodeCancelledError: Job status is "Canceled"
        botocore.exceptions.ClientError: read_job failed
    """
    response = client.read_job(Id=job_id)
    job = response.get("Job", {})
    status = job.get("Status")
    output = job.get("Output") or {}

    if not JobStatus.is_terminal(status):
        logger.debug("Transcode job in progress", extra={"job_id": job_id, "status": status})
        if on_progress is not None:
            on_progress(ProgressEvent(status=status, job_id=job_id))
        return None

    if status == JobStatus.ERROR.value:
        status_detail = output.get("StatusDetail")
        logger.error(
            "Transcode job failed",
            extra={"job_id": job_id, "key": key, "status_detail": status_detail},
        )
        raise TranscodeFailedError(key, job_id=job_id, status_detail=status_detail)

    if status == JobStatus.CANCELED.value:
        logger.warning("Transcode job cancelled", extra={"job_id": job_id, "key": key})
        raise TranscodeCancelledError(key, job_id=job_id)

    duration = output.get("DurationMillis")
    if duration is None:
        # Should not happen for a complete job
        logger.warning("Complete job has no DurationMillis", extra={"job_id": job_id})
        duration = 0
    logger.info(
        "Transcode job complete",
        extra={"job_id": job_id, "key": key, "duration_millis": duration},
    )
    return int(duration)


def wait_for_job(
    client: Any,
    key: str,
    job_id: str,
    poll_interval: float,
    on_progress: ProgressListener | None = None,
    sleep: Callable[[float], Any] = time.sleep,
) -> int:
    """Poll a job until it reaches a terminal status.

    Args:
        client: boto3 Elastic Transcoder client
        key: Input key, used in error messages
        job_id: Job to poll
        poll_interval: Delay before each read in milliseconds
        on_progress: Progress listener
        sleep: Sleep function (seconds), replaceable for tests

    Returns:
        Output duration in milliseconds
    """
    while True:
        sleep(poll_interval / 1000)
        duration = check_job_status(client, key, job_id, on_progress)
        if duration is not None:
            return duration
