"""Pydantic models for data validation and serialization.

This module defines the data structures passed through the transcoder:
- Input reference (source object key with optional time span)
- Output descriptors (destination key, preset, thumbnail pattern)
- Job status values and progress events

All models use Pydantic v2 and are immutable once constructed.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field


class JobStatus(str, Enum):
    """Elastic Transcoder job status values."""

    SUBMITTED = "Submitted"
    PROGRESSING = "Progressing"
    COMPLETE = "Complete"
    ERROR = "Error"
    CANCELED = "Canceled"

    @classmethod
    def is_terminal(cls, status: str | None) -> bool:
        """Check whether a reported status ends the job.

        Statuses outside the known set are treated as non-terminal.
        """
        if isinstance(status, JobStatus):
            status = status.value
        return status in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({
    JobStatus.COMPLETE.value,
    JobStatus.ERROR.value,
    JobStatus.CANCELED.value,
})


class TranscodeInput(BaseModel):
    """Source media already uploaded to the pipeline's input bucket.

    ``start`` and ``duration`` are in seconds and may be given independently
    to transcode only part of the source.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(
        min_length=1,
        description="Input object key (bucket is defined by the pipeline)",
    )
    start: float | None = Field(
        default=None,
        ge=0,
        description="Offset into the source in seconds",
    )
    duration: float | None = Field(
        default=None,
        ge=0,
        description="Length of the clip to transcode in seconds",
    )

    @classmethod
    def coerce(cls, value: "str | Mapping[str, Any] | TranscodeInput") -> "TranscodeInput":
        """Normalize a bare key, a mapping or an instance to a TranscodeInput.

        A bare key string is used as-is (no trimming).
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(key=value)
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        raise TypeError(f"Unsupported transcode input: {type(value).__name__}")


class TranscodeOutput(BaseModel):
    """One requested output of a transcode job."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str = Field(
        min_length=1,
        description="Output object key (bucket is defined by the pipeline)",
    )
    preset_id: str = Field(
        min_length=1,
        alias="presetId",
        description="Elastic Transcoder preset to use",
    )
    thumbnail_pattern: str | None = Field(
        default=None,
        alias="thumbnailPattern",
        description="Thumbnail key pattern, e.g. 'output/video_thumb_{count}'",
    )

    @classmethod
    def coerce(cls, value: "Mapping[str, Any] | TranscodeOutput") -> "TranscodeOutput":
        """Normalize a mapping or an instance to a TranscodeOutput."""
        if isinstance(value, cls):
            return value
        return cls.model_validate(dict(value))


class ProgressEvent(BaseModel):
    """Emitted once for every non-terminal status read."""

    model_config = ConfigDict(frozen=True)

    status: str | None = Field(
        description="Job status exactly as reported (e.g. 'Progressing'), None if absent",
    )
    job_id: str | None = Field(
        default=None,
        description="Elastic Transcoder job ID",
    )


# Observer invoked synchronously from the poll loop
ProgressListener = Callable[[ProgressEvent], Any]
