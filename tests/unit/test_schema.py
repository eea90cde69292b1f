"""Tests for configuration schema models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from podgrab.config.schema import DEFAULT_SERIES, GrabConfig, SeriesConfig


class TestSeriesConfig:
    """Tests for SeriesConfig model."""

    def test_defaults(self) -> None:
        """Test the capture group defaults to 1."""
        series = SeriesConfig(name="MAG", pattern=r"MAG (\d+)")
        assert series.group == 1

    def test_regex_is_case_insensitive(self) -> None:
        """Test the compiled pattern ignores case."""
        series = SeriesConfig(name="MAG", pattern=r"MAG (\d+)")
        assert series.regex.search("mag 5") is not None

    def test_invalid_regex_raises(self) -> None:
        """Test a pattern that doesn't compile is rejected."""
        with pytest.raises(ValidationError, match="Invalid regular expression"):
            SeriesConfig(name="bad", pattern=r"MAG (\d+")

    def test_group_out_of_range_raises(self) -> None:
        """Test the group index must exist in the pattern."""
        with pytest.raises(ValidationError, match="capture group"):
            SeriesConfig(name="MAG", pattern=r"MAG \d+")

    def test_group_must_be_positive(self) -> None:
        """Test group 0 (the whole match) is not allowed."""
        with pytest.raises(ValidationError):
            SeriesConfig(name="MAG", pattern=r"MAG (\d+)", group=0)

    @pytest.mark.parametrize(
        ("pattern", "name"),
        [
            (r"MAG (\d+)", "MAG"),
            (r"The Magnus Protocol (\d+)", "The Magnus Protocol"),
            (r"(\d+)", r"(\d+)"),
        ],
    )
    def test_from_pattern_names_series(self, pattern: str, name: str) -> None:
        """Test series built from a bare pattern are named after its prefix."""
        series = SeriesConfig.from_pattern(pattern)
        assert series.name == name
        assert series.pattern == pattern


class TestGrabConfig:
    """Tests for GrabConfig model."""

    def test_defaults(self) -> None:
        """Test built-in defaults."""
        config = GrabConfig()

        assert config.output_dir == Path("Downloads")
        assert [s.pattern for s in config.series] == [s.pattern for s in DEFAULT_SERIES]
        assert config.tag_files is True
        assert config.tagger_command == "id3v2"
        assert config.timeout_seconds == 30.0
        assert config.log_level == "WARNING"

    def test_default_series_are_mag_and_protocol(self) -> None:
        """Test the two default series."""
        names = [s.name for s in GrabConfig().series]
        assert names == ["MAG", "The Magnus Protocol"]

    def test_series_from_dicts(self) -> None:
        """Test series can be given as plain mappings."""
        config = GrabConfig(series=[{"name": "Ep", "pattern": r"Episode (\d+)"}])
        assert config.series[0].regex.search("episode 4")

    def test_empty_series_rejected(self) -> None:
        """Test at least one series is required."""
        with pytest.raises(ValidationError, match="At least one series"):
            GrabConfig(series=[])

    def test_output_dir_expands_user(self) -> None:
        """Test ~ is expanded in the output directory."""
        config = GrabConfig(output_dir="~/podcasts")  # type: ignore[arg-type]
        assert "~" not in str(config.output_dir)

    def test_invalid_log_level_rejected(self) -> None:
        """Test unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            GrabConfig(log_level="LOUD")  # type: ignore[arg-type]

    def test_timeout_must_be_positive(self) -> None:
        """Test zero or negative timeouts are rejected."""
        with pytest.raises(ValidationError):
            GrabConfig(timeout_seconds=0)

    def test_timeout_can_be_disabled(self) -> None:
        """Test None disables the network timeout."""
        assert GrabConfig(timeout_seconds=None).timeout_seconds is None
