"""Elastic Transcoder CreateJob request builder.

Output structure:
    {
        "Input": {"Key": ..., "TimeSpan": {"StartTime": "5.124", "Duration": "12.988"}},
        "PipelineId": ...,
        "Outputs": [{"Key": ..., "PresetId": ..., "ThumbnailPattern": ...}],
    }

``TimeSpan`` and its members, and ``ThumbnailPattern``, are only present
when they carry a value.
"""

from typing import Any, Sequence

from ..shared.models import TranscodeInput, TranscodeOutput


def format_seconds(value: float) -> str:
    """Format seconds with millisecond precision (e.g. 5.123999 -> '5.124')."""
    return f"{value:.3f}"


def build_time_span(transcode_input: TranscodeInput) -> dict[str, str] | None:
    """Build the TimeSpan clip settings for the input.

    A start of 0 is the same as no start. A duration of 0 is treated as
    not provided.

    Returns:
        TimeSpan dictionary, or None when the whole source is used
    """
    time_span: dict[str, str] = {}

    if transcode_input.start and transcode_input.start > 0:
        time_span["StartTime"] = format_seconds(transcode_input.start)

    if transcode_input.duration:
        time_span["Duration"] = format_seconds(transcode_input.duration)

    return time_span or None


def build_input(transcode_input: TranscodeInput) -> dict[str, Any]:
    """Build the Input section of the job request."""
    job_input: dict[str, Any] = {"Key": transcode_input.key}

    time_span = build_time_span(transcode_input)
    if time_span:
        job_input["TimeSpan"] = time_span

    return job_input


def build_output(output: TranscodeOutput) -> dict[str, str]:
    """Build one entry of the Outputs list."""
    job_output = {
        "Key": output.key,
        "PresetId": output.preset_id,
    }
    if output.thumbnail_pattern:
        job_output["ThumbnailPattern"] = output.thumbnail_pattern
    return job_output


def build_job_params(
    transcode_input: TranscodeInput,
    outputs: Sequence[TranscodeOutput],
    pipeline_id: str,
) -> dict[str, Any]:
    """Build complete CreateJob parameters.

    Args:
        transcode_input: Source object and optional clip range
        outputs: Outputs to create, in submission order
        pipeline_id: Pipeline that defines input/output buckets

    Returns:
        Keyword arguments for ``elastictranscoder.create_job``
    """
    return {
        "Input": build_input(transcode_input),
        "PipelineId": pipeline_id,
        "Outputs": [build_output(output) for output in outputs],
    }
