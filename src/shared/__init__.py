"""Shared utilities for the AWS transcoder."""

from .config import Settings, TranscodeConfig, get_settings
from .exceptions import (
    TranscodingError,
    TranscodeFailedError,
    TranscodeCancelledError,
)
from .models import (
    JobStatus,
    TranscodeInput,
    TranscodeOutput,
    ProgressEvent,
    ProgressListener,
)

__all__ = [
    # Config
    "Settings",
    "TranscodeConfig",
    "get_settings",
    # Exceptions
    "TranscodingError",
    "TranscodeFailedError",
    "TranscodeCancelledError",
    # Models
    "JobStatus",
    "TranscodeInput",
    "TranscodeOutput",
    "ProgressEvent",
    "ProgressListener",
]
