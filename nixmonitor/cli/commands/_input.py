"""Input acquisition shared by the commands."""

from __future__ import annotations

import io
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, TextIO

import typer
from rich.console import Console


def is_stdin(source: Optional[Path]) -> bool:
    return source is None or str(source) == "-"


def ensure_readable(source: Optional[Path], console: Console) -> None:
    """Exit with code 1 if *source* names a file that does not exist."""
    if not is_stdin(source) and not source.is_file():
        console.print(f"[bold red]Input not found:[/bold red] {source}")
        raise typer.Exit(code=1)


@contextmanager
def open_lines(source: Optional[Path]) -> Iterator[TextIO]:
    """Open *source* (or stdin) for line reading.

    Undecodable bytes are kept as lone surrogates instead of failing the
    read; the tracker refuses to display them line by line.
    """
    if is_stdin(source):
        stream = io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors="surrogateescape")
        try:
            yield stream
        finally:
            # Leave the underlying stdin open.
            stream.detach()
    else:
        with source.open(encoding="utf-8", errors="surrogateescape") as handle:
            yield handle
