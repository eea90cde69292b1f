"""Tests for the id3v2 track tagger."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from podgrab.audio import EpisodeDownloader, TrackTagger
from podgrab.feeds.models import EpisodeInfo
from podgrab.utils.errors import ExternalToolError


@pytest.fixture
def episode() -> EpisodeInfo:
    return EpisodeInfo(
        name='MAG 42 - "Killing Floor"; rm -rf ~ $(whoami)',
        link="https://cdn.example.com/mag42.mp3",
        episode_number=42,
    )


def completed(returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout="", stderr=stderr)


class TestTrackTagger:
    """Tests for TrackTagger."""

    def test_build_command_passes_title_as_single_argument(
        self, tmp_path: Path, episode: EpisodeInfo
    ) -> None:
        """Test shell metacharacters in titles stay inside one argument."""
        target = tmp_path / "MAG 42.mp3"

        cmd = TrackTagger().build_command(target, episode)

        assert cmd == [
            "id3v2",
            "--track",
            "42",
            "--song",
            'MAG 42 - "Killing Floor"; rm -rf ~ $(whoami)',
            str(target),
        ]

    def test_tag_runs_without_shell(self, tmp_path: Path, episode: EpisodeInfo) -> None:
        """Test the tool is run with an argument list and no shell."""
        target = tmp_path / "MAG 42.mp3"

        with patch("podgrab.audio.tagger.subprocess.run", return_value=completed()) as mock_run:
            TrackTagger().tag(target, episode)

        args, kwargs = mock_run.call_args
        assert isinstance(args[0], list)
        assert args[0][0] == "id3v2"
        assert not kwargs.get("shell", False)

    def test_custom_command(self, tmp_path: Path, episode: EpisodeInfo) -> None:
        """Test a different executable can be configured."""
        with patch("podgrab.audio.tagger.subprocess.run", return_value=completed()) as mock_run:
            TrackTagger("/usr/local/bin/id3v2").tag(tmp_path / "a.mp3", episode)

        assert mock_run.call_args[0][0][0] == "/usr/local/bin/id3v2"

    def test_nonzero_exit_raises(self, tmp_path: Path, episode: EpisodeInfo) -> None:
        """Test a failing tool raises ExternalToolError with its stderr."""
        result = completed(returncode=1, stderr="No such file or directory")

        with patch("podgrab.audio.tagger.subprocess.run", return_value=result):
            with pytest.raises(ExternalToolError, match="status 1: No such file"):
                TrackTagger().tag(tmp_path / "missing.mp3", episode)

    def test_missing_tool_raises(self, tmp_path: Path, episode: EpisodeInfo) -> None:
        """Test a missing executable raises ExternalToolError."""
        with patch("podgrab.audio.tagger.subprocess.run", side_effect=FileNotFoundError()):
            with pytest.raises(ExternalToolError, match="not found"):
                TrackTagger().tag(tmp_path / "a.mp3", episode)

    def test_really_missing_executable(self, tmp_path: Path, episode: EpisodeInfo) -> None:
        """Test running a nonexistent program end to end."""
        tagger = TrackTagger("podgrab-no-such-tagger-binary")

        with pytest.raises(ExternalToolError):
            tagger.tag(tmp_path / "a.mp3", episode)

    def test_leading_dash_title_is_not_an_option(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a file saved under a relative output dir can't pose as a flag."""
        monkeypatch.chdir(tmp_path)
        episode = EpisodeInfo(
            name="-D MAG 3", link="https://cdn.example.com/mag3.mp3", episode_number=3
        )
        with httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200))) as client:
            target = EpisodeDownloader(client, output_dir=Path(".")).destination_for(episode)

        cmd = TrackTagger().build_command(target, episode)

        assert not cmd[-1].startswith("-")
        assert cmd[-1] == str(Path.cwd() / "-D MAG 3.mp3")
