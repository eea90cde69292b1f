"""Configuration schema models using Pydantic."""

import re
from functools import cached_property
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class SeriesConfig(BaseModel):
    """A run of episodes selected by a title pattern.

    The pattern is searched case-insensitively in each item title and the
    capture group at ``group`` holds the episode number.
    """

    name: str
    pattern: str
    group: int = Field(default=1, ge=1)

    @field_validator("pattern")
    @classmethod
    def _pattern_compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"Invalid regular expression '{value}': {e}") from e
        return value

    @model_validator(mode="after")
    def _group_exists(self) -> "SeriesConfig":
        groups = re.compile(self.pattern).groups
        if self.group > groups:
            raise ValueError(
                f"Pattern '{self.pattern}' has {groups} capture group(s), "
                f"cannot use group {self.group}"
            )
        return self

    @cached_property
    def regex(self) -> re.Pattern[str]:
        """Compiled, case-insensitive title pattern."""
        return re.compile(self.pattern, re.IGNORECASE)

    @classmethod
    def from_pattern(cls, pattern: str) -> "SeriesConfig":
        """Build a series from a bare pattern, named after its literal prefix."""
        name = re.split(r"[(\\\[]", pattern, maxsplit=1)[0].strip() or pattern
        return cls(name=name, pattern=pattern)


DEFAULT_SERIES = [
    SeriesConfig(name="MAG", pattern=r"MAG (\d+)"),
    SeriesConfig(name="The Magnus Protocol", pattern=r"The Magnus Protocol (\d+)"),
]


class GrabConfig(BaseModel):
    """Global Podgrab configuration."""

    output_dir: Path = Field(default=Path("Downloads"))
    series: list[SeriesConfig] = Field(default_factory=lambda: list(DEFAULT_SERIES))

    # Tagging
    tag_files: bool = True
    tagger_command: str = "id3v2"

    # Network
    timeout_seconds: float | None = Field(default=30.0, gt=0)
    user_agent: str = "podgrab"

    log_level: LogLevel = "WARNING"

    @field_validator("output_dir")
    @classmethod
    def _expand_output_dir(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("series")
    @classmethod
    def _series_not_empty(cls, value: list[SeriesConfig]) -> list[SeriesConfig]:
        if not value:
            raise ValueError("At least one series must be configured")
        return value
