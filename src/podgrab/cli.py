"""CLI entry point for Podgrab."""

import logging
import sys
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from podgrab.config.logging import setup_logging
from podgrab.config.manager import ConfigManager
from podgrab.config.schema import GrabConfig, SeriesConfig
from podgrab.pipeline import GrabPipeline, RunStats, create_client
from podgrab.utils.errors import ConfigError, PodgrabError, TransportError

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="podgrab",
    help="Download a podcast series from an RSS feed and tag each file with its episode number",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

USAGE_HINT = "Add your Patreon RSS feed URL: podgrab <URL>"


def _version_callback(value: bool) -> None:
    if value:
        from podgrab import __version__

        console.print(f"[bold cyan]Podgrab[/bold cyan] v{__version__}")
        raise typer.Exit()


def _apply_overrides(
    config: GrabConfig,
    output_dir: Path | None,
    series: list[str] | None,
    no_tag: bool,
    tagger: str | None,
    timeout: float | None,
) -> GrabConfig:
    """Layer command-line options over the loaded configuration."""
    updates: dict = {}
    if output_dir is not None:
        updates["output_dir"] = output_dir
    if series:
        updates["series"] = [SeriesConfig.from_pattern(pattern) for pattern in series]
    if no_tag:
        updates["tag_files"] = False
    if tagger is not None:
        updates["tagger_command"] = tagger
    if timeout is not None:
        updates["timeout_seconds"] = timeout
    return config.model_copy(update=updates)


def _print_summary(stats: RunStats, dry_run: bool) -> None:
    table = Table(title="[bold]Summary[/bold]")
    table.add_column("Series", style="cyan", no_wrap=True)
    table.add_column("Matched", justify="right")
    if not dry_run:
        table.add_column("Downloaded", justify="right", style="green")
        table.add_column("Failed", justify="right", style="red")
        table.add_column("Tagged", justify="right", style="green")

    for series in stats.series:
        row = [escape(series.name), str(series.matched)]
        if not dry_run:
            row += [str(series.downloaded), str(series.failed), str(series.tagged)]
        table.add_row(*row)

    console.print()
    console.print(table)


@app.command()
def grab(
    url: str | None = typer.Argument(None, help="RSS feed URL", show_default=False),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-o", help="Directory for downloaded episodes [default: Downloads]"
    ),
    series: list[str] | None = typer.Option(
        None,
        "--series",
        "-s",
        help="Title pattern with one capture group for the episode number (repeatable)",
    ),
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="Path to a config.yaml"
    ),
    no_tag: bool = typer.Option(False, "--no-tag", help="Skip ID3 tagging"),
    tagger: str | None = typer.Option(
        None, "--tagger", help="Tagging executable [default: id3v2]"
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", min=0.1, help="Network timeout in seconds [default: 30]"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="List matching episodes without downloading"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version information and exit",
    ),
) -> None:
    """Download every episode of each series in a feed, in episode order.

    Examples:
        podgrab https://www.patreon.com/rss/example?auth=TOKEN

        podgrab URL --series "Episode (\\d+)" --output-dir ~/Podcasts
    """
    if not url:
        err_console.print(f"[red]✗[/red] {USAGE_HINT}")
        sys.exit(1)

    setup_logging(verbose=verbose, log_file=log_file)

    try:
        config = ConfigManager(config_file).load_config()
        config = _apply_overrides(config, output_dir, series, no_tag, tagger, timeout)
    except ConfigError as e:
        err_console.print(f"[red]✗[/red] {escape(str(e))}")
        sys.exit(1)
    except ValidationError as e:
        err_console.print(f"[red]✗[/red] Invalid --series pattern: {escape(str(e))}")
        sys.exit(1)

    # Console level from config applies once it is loaded
    setup_logging(verbose=verbose, log_file=log_file, level=config.log_level)

    console.print(escape(url), soft_wrap=True, highlight=False)

    try:
        with create_client(config) as client:
            pipeline = GrabPipeline(
                config,
                client,
                console=console,
                error_console=err_console,
                dry_run=dry_run,
                show_progress=console.is_terminal,
            )
            stats = pipeline.run(url)
    except TransportError as e:
        logger.debug("Feed fetch failed", exc_info=True)
        err_console.print(f"[red]✗[/red] Failed to fetch feed: {escape(str(e))}")
        sys.exit(1)
    except PodgrabError as e:
        err_console.print(f"[red]✗[/red] Error: {escape(str(e))}")
        sys.exit(1)

    _print_summary(stats, dry_run)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
