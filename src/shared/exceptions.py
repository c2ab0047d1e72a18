"""Custom exception hierarchy for the transcoder.

Terminal job outcomes other than success are raised as subclasses of
TranscodingError so callers can branch on ``error_code``.

Exception hierarchy:
    TranscodingError (base)
    ├── TranscodeFailedError      (job ended in "Error")
    └── TranscodeCancelledError   (job ended in "Canceled")

Failures talking to AWS (job submission, status reads) are not wrapped:
``botocore.exceptions.ClientError`` and ``BotoCoreError`` reach the caller
unchanged.
"""

from typing import Any

TRANSCODE_FAILED = "TRANSCODE_FAILED"
CANCELLED = "CANCELLED"


class TranscodingError(Exception):
    """Base exception for all transcoder errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for metrics/filtering
        details: Additional context as key-value pairs
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    @property
    def code(self) -> str:
        """Short alias for ``error_code``."""
        return self.error_code

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON serialization.

        Returns:
            Dictionary with error_code, error_message, and details.
            Uses 'error_message' rather than 'message' since the logging
            module reserves 'message' internally.
        """
        return {
            "error_code": self.error_code,
            "error_message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.error_code!r}, {self.message!r})"


class TranscodeFailedError(TranscodingError):
    """Raised when a job reaches the "Error" status.

    The job's ``StatusDetail``, when present, is appended to the message on
    its own line.
    """

    def __init__(
        self,
        key: str,
        job_id: str | None = None,
        status_detail: str | None = None,
    ) -> None:
        message = f'Transcode failed for "{key}"'
        if status_detail:
            message = f"{message}\n{status_detail}"
        super().__init__(
            message,
            TRANSCODE_FAILED,
            {"key": key, "job_id": job_id, "status_detail": status_detail},
        )
        self.key = key
        self.job_id = job_id
        self.status_detail = status_detail


class TranscodeCancelledError(TranscodingError):
    """Raised when a job is cancelled outside of this process."""

    def __init__(self, key: str, job_id: str | None = None) -> None:
        super().__init__(
            f'Transcode cancelled for "{key}".',
            CANCELLED,
            {"key": key, "job_id": job_id},
        )
        self.key = key
        self.job_id = job_id
