"""ID3 track tagging through an external command-line tool."""

import logging
import subprocess
from pathlib import Path

from podgrab.feeds.models import EpisodeInfo
from podgrab.utils.errors import ExternalToolError

logger = logging.getLogger(__name__)


class TrackTagger:
    """Set track number and title on audio files with id3v2.

    The tool is invoked with an argument list, so titles are passed through
    untouched and never interpreted by a shell.
    """

    def __init__(self, command: str = "id3v2") -> None:
        self.command = command

    def build_command(self, file_path: Path, episode: EpisodeInfo) -> list[str]:
        """Argument vector for tagging one file.

        The path is made absolute so a title starting with a dash is never
        read as an option.
        """
        return [
            self.command,
            "--track",
            str(episode.episode_number),
            "--song",
            episode.name,
            str(file_path.absolute()),
        ]

    def tag(self, file_path: Path, episode: EpisodeInfo) -> None:
        """Write track number and title into file_path.

        Raises:
            ExternalToolError: If the tool is missing or exits non-zero
        """
        cmd = self.build_command(file_path, episode)
        logger.debug("Running %s", cmd)

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise ExternalToolError(
                f"Tagging tool '{self.command}' not found. Install it or pass --no-tag."
            ) from e
        except OSError as e:
            raise ExternalToolError(f"Could not run '{self.command}': {e}") from e

        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            message = f"'{self.command}' exited with status {result.returncode}"
            if detail:
                message = f"{message}: {detail}"
            raise ExternalToolError(message)
