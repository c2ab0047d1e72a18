"""Transcode controller.

Flow:
1. Normalize the input reference and outputs
2. Drop outputs that already exist (when ``check_exists_in_bucket`` is set)
3. Return False if nothing is left to transcode (no job is submitted)
4. Submit a single Elastic Transcoder job
5. Poll until the job is Complete, Error or Canceled
"""

from collections.abc import Mapping
from typing import Any, Callable, Literal, Sequence

from aws_lambda_powertools import Logger

from ..shared.aws_clients import get_elastictranscoder_client, get_s3_client
from ..shared.config import TranscodeConfig
from ..shared.models import TranscodeInput, TranscodeOutput
from . import poller
from .existence import filter_existing
from .job_params import build_job_params

logger = Logger(service="transcoder")

InputLike = str | Mapping[str, Any] | TranscodeInput
OutputLike = Mapping[str, Any] | TranscodeOutput
ConfigLike = Mapping[str, Any] | TranscodeConfig


class Transcoder:
    """Submit and wait for Elastic Transcoder jobs.

    Clients may be injected; otherwise cached clients for ``config.region``
    are used. A Transcoder holds no job state, so one instance can serve
    concurrent calls.
    """

    def __init__(
        self,
        config: ConfigLike,
        elastictranscoder_client: Any = None,
        s3_client: Any = None,
        sleep: Callable[[float], Any] | None = None,
    ) -> None:
        if isinstance(config, TranscodeConfig):
            self.config = config
        else:
            self.config = TranscodeConfig.model_validate(dict(config))
        self.elastictranscoder = elastictranscoder_client or get_elastictranscoder_client(
            self.config.region
        )
        self._s3 = s3_client
        self._sleep = sleep

    @property
    def s3(self) -> Any:
        # Only needed when the existence check is enabled
        if self._s3 is None:
            self._s3 = get_s3_client(self.config.region)
        return self._s3

    def transcode(
        self,
        transcode_input: InputLike,
        outputs: Sequence[OutputLike],
    ) -> int | Literal[False]:
        """Transcode a media file that has already been uploaded to S3.

        Args:
            transcode_input: Input key, or ``{key, start?, duration?}``
            outputs: List of ``{key, preset_id, thumbnail_pattern?}``

        Returns:
            False if there was nothing to transcode, otherwise the duration of
            the transcoded media in milliseconds

        Raises:
            TranscodeFailedError: Job ended with status "Error"
            TranscodeCancelledError: Job was cancelled
            botocore.exceptions.ClientError: Job submission or status read failed
        """
        source = TranscodeInput.coerce(transcode_input)
        requested = [TranscodeOutput.coerce(output) for output in outputs]

        filtered = self.remove_existing_outputs(requested)
        if not filtered:
            logger.info(
                "Nothing to transcode",
                extra={"key": source.key, "outputs": [o.key for o in requested]},
            )
            return False

        job_id = self.create_job(source, filtered)
        return self.wait_for_job(source.key, job_id)

    def remove_existing_outputs(self, outputs: Sequence[TranscodeOutput]) -> list[TranscodeOutput]:
        """Drop outputs that already exist in ``check_exists_in_bucket``."""
        bucket = self.config.check_exists_in_bucket
        if not bucket:
            return list(outputs)
        return filter_existing(outputs, bucket, s3_client=self.s3)

    def create_job(self, source: TranscodeInput, outputs: Sequence[TranscodeOutput]) -> str:
        """Create a new transcoder job.

        Returns:
            Elastic Transcoder job ID
        """
        params = build_job_params(source, outputs, self.config.pipeline_id)
        logger.debug("Creating elastic transcoder job", extra={"params": params})

        response = self.elastictranscoder.create_job(**params)
        job_id = response["Job"]["Id"]

        logger.info(
            "Transcode job submitted",
            extra={
                "job_id": job_id,
                "key": source.key,
                "pipeline_id": self.config.pipeline_id,
                "outputs": [o.key for o in outputs],
            },
        )
        return job_id

    def wait_for_job(self, key: str, job_id: str) -> int:
        """Wait for the job to finish.

        Returns:
            Duration of the transcoded media in milliseconds
        """
        kwargs: dict[str, Any] = {}
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        return poller.wait_for_job(
            self.elastictranscoder,
            key,
            job_id,
            poll_interval=self.config.poll_interval,
            on_progress=self.config.on_progress,
            **kwargs,
        )


def transcode(
    transcode_input: InputLike,
    outputs: Sequence[OutputLike],
    config: ConfigLike,
    **clients: Any,
) -> int | Literal[False]:
    """Transcode ``transcode_input`` into ``outputs``.

    Example:
        >>> transcode(
        ...     "input/test.avi",
        ...     [{"key": "output/test.mp4", "presetId": "1351620000001-000010"}],
        ...     {"pipelineId": "1111111111111-abcde1"},
        ... )
        123456

    Args:
        transcode_input: Input key, or ``{key, start?, duration?}``
        outputs: Outputs to create
        config: TranscodeConfig or mapping of its fields
        **clients: Optional ``elastictranscoder_client``, ``s3_client``, ``sleep``

    Returns:
        False if nothing needed transcoding, otherwise duration in milliseconds
    """
    return Transcoder(config, **clients).transcode(transcode_input, outputs)
