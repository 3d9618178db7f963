"""``nixmonitor render [FILE]`` — live progress display for a build log.

Reads the log line by line (stdin by default), renders one live line per
running activity, and passes plain output through above the display.
Ends cleanly at end of input.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from nixmonitor.cli.commands._input import ensure_readable, open_lines
from nixmonitor.config import settings
from nixmonitor.core.stream import StreamProcessor
from nixmonitor.core.tracker import ActivityTracker
from nixmonitor.errors import TransportDecodeError
from nixmonitor.logging_setup import setup_logging
from nixmonitor.monitor.renderer import RichRenderer


def render_cmd(
    source: Optional[Path] = typer.Argument(
        None,
        help="Log file to read.  Reads stdin when omitted or '-'.",
    ),
    skip_bad_lines: bool = typer.Option(
        False,
        "--skip-bad-lines",
        "-s",
        help="Report and skip malformed protocol lines instead of stopping.",
    ),
    refresh_hz: Optional[float] = typer.Option(
        None,
        "--refresh",
        "-r",
        help="Refresh rate in Hz for the live display.",
    ),
    no_live: bool = typer.Option(
        False,
        "--no-live",
        help="Disable the live region; only print standalone lines.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Level for nixmonitor's own diagnostics (DEBUG, INFO, WARNING, ...).",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Write nixmonitor's own diagnostics to this file.",
    ),
) -> None:
    """Render a build log as a live progress display."""
    overrides: dict[str, object] = {}
    if skip_bad_lines:
        overrides["on_transport_error"] = "skip"
    if refresh_hz is not None:
        overrides["refresh_hz"] = refresh_hz
    if no_live:
        overrides["live"] = False
    if log_level is not None:
        overrides["log_level"] = log_level
    if log_file is not None:
        overrides["log_file"] = log_file
    cfg = settings.model_copy(update=overrides)

    console = Console(stderr=True)
    ensure_readable(source, console)
    setup_logging(cfg.log_level, cfg.log_file, console=console)

    renderer = RichRenderer(
        console=console,
        live=cfg.live and console.is_terminal,
        refresh_hz=cfg.refresh_hz,
    )
    tracker = ActivityTracker(renderer, cfg)
    processor = StreamProcessor(tracker, cfg)

    try:
        with open_lines(source) as lines, renderer:
            processor.run(lines)
    except TransportDecodeError as exc:
        console.print(f"[bold red]Malformed protocol line {processor.stats.lines}:[/bold red] {exc.cause}")
        console.print("[dim]Use --skip-bad-lines to continue past malformed lines.[/dim]")
        raise typer.Exit(code=1)
