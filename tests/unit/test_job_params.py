"""Unit tests for the CreateJob request builder."""

import pytest

from src.shared.models import TranscodeInput, TranscodeOutput
from src.transcoder.job_params import (
    build_job_params,
    build_output,
    build_time_span,
    format_seconds,
)


class TestFormatSeconds:
    """Tests for fixed-point second formatting."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (5.123999, "5.124"),
            (12.987666, "12.988"),
            (3, "3.000"),
            (0.0004, "0.000"),
        ],
    )
    def test_three_decimal_places(self, value: float, expected: str):
        assert format_seconds(value) == expected


class TestTimeSpan:
    """Tests for TimeSpan construction."""

    def test_start_and_duration(self):
        time_span = build_time_span(TranscodeInput(key="in.avi", start=5.123999, duration=12.987666))

        assert time_span == {"StartTime": "5.124", "Duration": "12.988"}

    def test_duration_only(self):
        """Test a zero start is omitted."""
        time_span = build_time_span(TranscodeInput(key="in.avi", start=0, duration=12.987666))

        assert time_span == {"Duration": "12.988"}
        assert "StartTime" not in time_span

    def test_duration_without_start(self):
        time_span = build_time_span(TranscodeInput(key="in.avi", duration=12.987666))

        assert time_span == {"Duration": "12.988"}

    def test_start_only(self):
        time_span = build_time_span(TranscodeInput(key="in.avi", start=5.123999))

        assert time_span == {"StartTime": "5.124"}
        assert "Duration" not in time_span

    def test_no_time_span(self):
        """Test TimeSpan is omitted for the whole source."""
        assert build_time_span(TranscodeInput(key="in.avi", start=0)) is None
        assert build_time_span(TranscodeInput(key="in.avi")) is None


class TestJobParams:
    """Tests for complete CreateJob parameters."""

    def test_no_time_span_key_for_whole_source(self):
        params = build_job_params(
            TranscodeInput(key="in.avi", start=0),
            [TranscodeOutput(key="out.mp4", preset_id="PRESET")],
            "PIPELINE",
        )

        assert params == {
            "Input": {"Key": "in.avi"},
            "PipelineId": "PIPELINE",
            "Outputs": [{"Key": "out.mp4", "PresetId": "PRESET"}],
        }

    def test_time_span_in_input(self):
        params = build_job_params(
            TranscodeInput(key="in.avi", start=5.123999),
            [TranscodeOutput(key="out.mp4", preset_id="PRESET")],
            "PIPELINE",
        )

        assert params["Input"] == {"Key": "in.avi", "TimeSpan": {"StartTime": "5.124"}}

    def test_outputs_keep_order(self):
        outputs = [
            TranscodeOutput(key=f"out/{name}.mp4", preset_id=f"P-{name}")
            for name in ("c", "a", "b")
        ]

        params = build_job_params(TranscodeInput(key="in.avi"), outputs, "PIPELINE")

        assert [o["Key"] for o in params["Outputs"]] == ["out/c.mp4", "out/a.mp4", "out/b.mp4"]
        assert [o["PresetId"] for o in params["Outputs"]] == ["P-c", "P-a", "P-b"]

    def test_thumbnail_pattern_only_when_provided(self):
        with_thumbs = build_output(
            TranscodeOutput(key="out.mp4", preset_id="PRESET", thumbnail_pattern="thumbs/{count}")
        )
        without_thumbs = build_output(TranscodeOutput(key="out.mp4", preset_id="PRESET"))

        assert with_thumbs["ThumbnailPattern"] == "thumbs/{count}"
        assert "ThumbnailPattern" not in without_thumbs
