"""``nixmonitor decode [FILE]`` — dump decoded events as JSON lines.

A debugging aid for protocol drift: shows exactly how each input line is
classified, and with ``--trace`` which display operations it causes.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from nixmonitor.cli.commands._input import ensure_readable, open_lines
from nixmonitor.config import settings
from nixmonitor.core.tracker import ActivityTracker
from nixmonitor.errors import TransportDecodeError
from nixmonitor.models.events import Event, EventKind
from nixmonitor.monitor.recording import RecordingRenderer
from nixmonitor.protocol.decoder import decode_line

err_console = Console(stderr=True)


def event_to_json(event: Event) -> dict[str, Any]:
    """JSON-ready view of *event*, with the re-encoded wire form when structured."""
    payload: dict[str, Any] = event.model_dump(mode="json")
    if event.event_kind is not EventKind.OUTPUT_LINE:
        payload["wire"] = event.to_wire()
    return payload


def decode_cmd(
    source: Optional[Path] = typer.Argument(
        None,
        help="Log file to read.  Reads stdin when omitted or '-'.",
    ),
    only_structured: bool = typer.Option(
        False,
        "--only-structured",
        "-S",
        help="Omit plain output lines.",
    ),
    trace: bool = typer.Option(
        False,
        "--trace",
        "-t",
        help="Also show the display operations each event causes.",
    ),
) -> None:
    """Print every decoded event as one JSON object per line."""
    ensure_readable(source, err_console)

    renderer = RecordingRenderer()
    tracker = ActivityTracker(renderer, settings) if trace else None

    with open_lines(source) as lines:
        for number, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")
            try:
                event = decode_line(line)
            except TransportDecodeError as exc:
                typer.echo(json.dumps({"error": "transport", "line": number, "detail": str(exc.cause)}))
                raise typer.Exit(code=1)

            if only_structured and event.event_kind is EventKind.OUTPUT_LINE:
                continue

            payload = event_to_json(event)
            if tracker is not None:
                mark = len(renderer.calls)
                tracker.handle(event)
                payload["calls"] = [list(call) for call in renderer.calls[mark:]]
            typer.echo(json.dumps(payload))
