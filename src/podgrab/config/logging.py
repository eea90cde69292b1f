"""Logging setup for the Podgrab CLI."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
    level: str = "WARNING",
) -> None:
    """Configure root logging for a CLI run.

    Console records go to stderr through rich so they never mix with the
    progress output on stdout.

    Args:
        verbose: Force DEBUG level
        log_file: Optional file that receives every record at DEBUG level
        level: Console level name when not verbose
    """
    console_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_podgrab", False):
            root.removeHandler(handler)
            handler.close()

    rich_handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=verbose,
    )
    rich_handler.setLevel(console_level)
    rich_handler._podgrab = True  # type: ignore[attr-defined]
    root.addHandler(rich_handler)

    root_level = console_level
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.setLevel(logging.DEBUG)
        file_handler._podgrab = True  # type: ignore[attr-defined]
        root.addHandler(file_handler)
        root_level = logging.DEBUG

    root.setLevel(root_level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
