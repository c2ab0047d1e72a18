"""Transcoder module.

This module drives a single Elastic Transcoder job:
- Existence filter for outputs already in S3
- CreateJob request builder
- Status polling
- Transcoder controller
"""

from .existence import check_exists, filter_existing
from .job_params import build_job_params, format_seconds
from .poller import check_job_status, wait_for_job
from .transcoder import Transcoder, transcode

__all__ = [
    "check_exists",
    "filter_existing",
    "build_job_params",
    "format_seconds",
    "check_job_status",
    "wait_for_job",
    "Transcoder",
    "transcode",
]
