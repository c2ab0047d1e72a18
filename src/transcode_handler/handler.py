"""Lambda handler for transcoding an uploaded media file.

Called directly or from Step Functions with the input key and the outputs
to create. Pipeline, existence-check bucket and poll interval default to
the environment settings and may be overridden per event.

Flow:
1. Build the per-call TranscodeConfig
2. Run the transcoder (existence filter, submit, poll)
3. Return the result for the caller
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from ..shared.config import TranscodeConfig, get_settings
from ..shared.exceptions import CANCELLED, TranscodingError
from ..shared.models import ProgressEvent, TranscodeInput
from ..transcoder import Transcoder

logger = Logger(service="transcode-handler")
tracer = Tracer(service="transcode-handler")
metrics = Metrics(service="transcode-handler", namespace="AwsTranscode")


@logger.inject_lambda_context(log_event=True)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Transcode one input into one or more outputs.

    Args:
        event: Transcode request
        context: Lambda context

    Returns:
        Transcode result

    Input event structure:
        {
            "input": "uploads/video.mov" | {"key": "...", "start": 5.0, "duration": 30.0},
            "outputs": [
                {"key": "out/video.mp4", "preset_id": "...", "thumbnail_pattern": "..."}
            ],
            "pipeline_id": "optional override",
            "check_exists_in_bucket": "optional override",
            "poll_interval": 2000  # optional override (ms)
        }

    Output structure:
        {
            "transcoded": true,           # False if every output already existed
            "duration_millis": 123456,    # None when nothing was transcoded
            "input_key": "uploads/video.mov",
            "output_keys": ["out/video.mp4"]
        }
    """
    settings = get_settings()

    source = TranscodeInput.coerce(event["input"])
    outputs = event.get("outputs", [])

    config = TranscodeConfig.from_settings(
        settings,
        pipeline_id=event.get("pipeline_id"),
        check_exists_in_bucket=event.get("check_exists_in_bucket"),
        poll_interval=event.get("poll_interval"),
        on_progress=_log_progress,
    )

    logger.info(
        "Starting transcode",
        extra={
            "input_key": source.key,
            "pipeline_id": config.pipeline_id,
            "output_count": len(outputs),
            "check_exists_in_bucket": config.check_exists_in_bucket,
        },
    )

    try:
        with tracer.provider.in_subsegment("transcode"):
            result = Transcoder(config).transcode(source, outputs)
    except TranscodingError as e:
        logger.error("Transcode did not complete", extra=e.to_dict())
        metrics.add_metric(
            name="TranscodeJobsCancelled" if e.error_code == CANCELLED else "TranscodeJobsFailed",
            unit=MetricUnit.Count,
            value=1,
        )
        raise

    output_keys = [o["key"] for o in outputs]

    if result is False:
        metrics.add_metric(name="TranscodeJobsSkipped", unit=MetricUnit.Count, value=1)
        return {
            "transcoded": False,
            "duration_millis": None,
            "input_key": source.key,
            "output_keys": output_keys,
        }

    metrics.add_metric(name="TranscodeJobsCompleted", unit=MetricUnit.Count, value=1)
    metrics.add_metric(
        name="TranscodedDuration",
        unit=MetricUnit.Milliseconds,
        value=result,
    )

    return {
        "transcoded": True,
        "duration_millis": result,
        "input_key": source.key,
        "output_keys": output_keys,
    }


def _log_progress(event: ProgressEvent) -> None:
    """Log non-terminal job statuses."""
    logger.info(
        "Transcode job progress",
        extra={"job_id": event.job_id, "status": event.status},
    )
