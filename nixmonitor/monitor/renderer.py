"""Rich terminal renderer for live build progress.

Draws every attached render target as one line inside a ``Rich.Live``
region and prints standalone lines above it.

Line layouts
------------
- BAR     : spinner  **label**  (pos/len)  [progress bar]
- MESSAGE : spinner  [elapsed]  message
- BYTES   : spinner  [done/total bytes]  message
- LOG     : spinner  [elapsed]  **label**: message
"""

from __future__ import annotations

from types import TracebackType

from rich.console import Console, Group, RenderableType
from rich.filesize import decimal
from rich.live import Live
from rich.progress_bar import ProgressBar
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from nixmonitor.monitor.targets import RenderTarget, TargetStyle, TargetTable

_SPINNER_FRAMES: list[str] = list(Spinner("dots").frames)

_LABEL_STYLE = "bold"
_ELAPSED_STYLE = "dim"
_COUNTER_STYLE = "cyan"


def _format_elapsed(seconds: float) -> str:
    seconds = int(seconds)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class RichRenderer(TargetTable):
    """Renders tracked activities as a live multi-line display.

    Parameters
    ----------
    console:
        Rich Console instance.  Defaults to one writing to stderr so the
        display never mixes with piped stdout.
    live:
        Whether to run a ``Rich.Live`` region.  With ``live=False`` targets
        are only drawn on demand via ``render()``, and ``println`` still
        prints.
    refresh_hz:
        Refresh rate of the live region.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        live: bool = True,
        refresh_hz: float = 10.0,
    ) -> None:
        super().__init__()
        self.console = console or Console(stderr=True)
        self._live: Live | None = None
        if live:
            self._live = Live(
                console=self.console,
                get_renderable=self.render,
                refresh_per_second=max(refresh_hz, 0.1),
                transient=True,
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        if self._live is not None:
            self._live.start()

    def stop(self) -> None:
        if self._live is not None:
            self._live.stop()

    def __enter__(self) -> RichRenderer:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Standalone output
    # ------------------------------------------------------------------

    def println(self, text: str) -> None:
        """Print a line above the live region."""
        self.console.print(Text(text), soft_wrap=True)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def render(self) -> RenderableType:
        """Build a renderable of every visible target, top to bottom."""
        return Group(*(self.render_target(t) for t in self.visible_targets()))

    def render_target(self, target: RenderTarget) -> Table:
        """Build the single-line renderable for *target*."""
        grid = Table.grid(expand=True, padding=(0, 1))
        grid.add_column(no_wrap=True)
        spinner = Text(_SPINNER_FRAMES[target.ticks % len(_SPINNER_FRAMES)], style="green")

        if target.style is TargetStyle.BAR:
            grid.add_column(no_wrap=True)
            grid.add_column(no_wrap=True)
            grid.add_column(ratio=1)
            counter = f"({target.position}/{target.total if target.total is not None else '?'})"
            grid.add_row(
                spinner,
                Text(target.label, style=_LABEL_STYLE),
                Text(counter, style=_COUNTER_STYLE),
                ProgressBar(total=target.total, completed=target.position),
            )
            return grid

        grid.add_column(no_wrap=True)
        grid.add_column(ratio=1, no_wrap=True, overflow="ellipsis")

        if target.style is TargetStyle.BYTES:
            total = decimal(target.total) if target.total is not None else "?"
            counter = Text(f"[{decimal(target.position):>10}/{total:>10}]", style=_COUNTER_STYLE)
            grid.add_row(spinner, counter, Text(target.message))
            return grid

        elapsed = Text(f"[{_format_elapsed(target.elapsed)}]", style=_ELAPSED_STYLE)
        if target.style is TargetStyle.LOG:
            body = Text.assemble((target.label, _LABEL_STYLE), ": ", target.message)
        else:
            body = Text(target.message)
        grid.add_row(spinner, elapsed, body)
        return grid
