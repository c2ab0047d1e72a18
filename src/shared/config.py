"""Environment-aware configuration with validation.

Two layers of configuration are used:

- ``Settings``: process-wide defaults loaded from environment variables with
  Pydantic Settings. Validated at first use to fail fast on misconfiguration.
- ``TranscodeConfig``: the immutable per-invocation options passed to
  ``transcode()``. Accepts both snake_case field names and the camelCase
  keys of the job-control API.
"""

from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import ProgressListener

DEFAULT_POLL_INTERVAL_MS = 2000
DEFAULT_REGION = "us-east-1"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Example:
        >>> settings = get_settings()
        >>> print(settings.poll_interval_ms)
        2000
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    aws_region: str = Field(
        default=DEFAULT_REGION,
        alias="AWS_REGION",
        description="AWS region for Elastic Transcoder",
    )

    # Elastic Transcoder
    pipeline_id: str = Field(
        default="",
        alias="PIPELINE_ID",
        description="Elastic Transcoder pipeline to submit jobs to",
    )
    poll_interval_ms: int = Field(
        default=DEFAULT_POLL_INTERVAL_MS,
        ge=0,
        alias="POLL_INTERVAL_MS",
        description="Delay between job status reads in milliseconds",
    )

    # Existence filter
    check_exists_in_bucket: str = Field(
        default="",
        alias="CHECK_EXISTS_IN_BUCKET",
        description="Bucket to check for existing outputs (empty disables the check)",
    )
    existence_check_workers: int = Field(
        default=4,
        ge=1,
        le=32,
        alias="EXISTENCE_CHECK_WORKERS",
        description="Thread pool size for concurrent head_object checks",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )


class TranscodeConfig(BaseModel):
    """Options resolved once per ``transcode()`` call.

    Field names follow Python conventions; the camelCase aliases
    (``checkExistsInBucket``, ``onProgress``, ``pipelineId``, ``pollInterval``)
    are accepted as well.

    Attributes:
        check_exists_in_bucket: If set, outputs already present in this bucket
            are skipped. The bucket is needed because it is built into the
            pipeline and not otherwise known here.
        on_progress: Called once per non-terminal poll with a ``ProgressEvent``.
        pipeline_id: Elastic Transcoder pipeline to use.
        poll_interval: Time between status reads in milliseconds.
        region: Region used for the transcoder client.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="forbid",
    )

    check_exists_in_bucket: str | None = Field(
        default=None,
        alias="checkExistsInBucket",
    )
    on_progress: ProgressListener | None = Field(
        default=None,
        alias="onProgress",
    )
    pipeline_id: str = Field(
        min_length=1,
        alias="pipelineId",
    )
    poll_interval: float = Field(
        default=DEFAULT_POLL_INTERVAL_MS,
        ge=0,
        alias="pollInterval",
    )
    region: str = Field(
        default=DEFAULT_REGION,
        min_length=1,
    )

    @field_validator("check_exists_in_bucket", mode="before")
    @classmethod
    def empty_bucket_disables_check(cls, v: Any) -> Any:
        """Treat an empty bucket name as 'no existence check'."""
        return v or None

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides: Any) -> "TranscodeConfig":
        """Build a config from environment settings, with per-call overrides.

        Args:
            settings: Settings to read defaults from (cached settings if omitted)
            **overrides: Explicit field values; ``None`` values are ignored

        Returns:
            Validated TranscodeConfig
        """
        settings = settings or get_settings()
        values: dict[str, Any] = {
            "check_exists_in_bucket": settings.check_exists_in_bucket or None,
            "pipeline_id": settings.pipeline_id,
            "poll_interval": settings.poll_interval_ms,
            "region": settings.aws_region,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Validated Settings instance

    Raises:
        ValidationError: If environment variables are invalid
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when environment variables change.
    """
    get_settings.cache_clear()
