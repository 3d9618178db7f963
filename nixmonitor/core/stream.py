"""The sequential event loop: lines in, tracker updates out."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel

from nixmonitor.config import MonitorSettings
from nixmonitor.config import settings as default_settings
from nixmonitor.core.tracker import ActivityTracker
from nixmonitor.errors import TransportDecodeError
from nixmonitor.models.events import Event, EventKind
from nixmonitor.protocol.decoder import decode_line

logger = logging.getLogger(__name__)


class StreamStats(BaseModel):
    """Counters for one processed stream."""

    lines: int = 0
    structured: int = 0
    unknown: int = 0
    skipped: int = 0


class StreamProcessor:
    """Feeds input lines, in order, through the decoder into a tracker.

    Transport errors (a prefixed line that is not JSON) either propagate
    and end processing (``on_transport_error="abort"``) or are reported
    and skipped (``"skip"``).  Everything else is absorbed by the tracker.
    """

    def __init__(
        self,
        tracker: ActivityTracker,
        settings: MonitorSettings | None = None,
    ) -> None:
        self.tracker = tracker
        self._settings = settings if settings is not None else default_settings
        self.stats = StreamStats()

    def process_line(self, line: str) -> Event | None:
        """Decode and apply one line.  Returns the event, or ``None`` if skipped."""
        line = line.rstrip("\r\n")
        self.stats.lines += 1
        try:
            event = decode_line(line)
        except TransportDecodeError as exc:
            if not self._settings.skips_bad_lines:
                raise
            self.stats.skipped += 1
            logger.info("Skipping undecodable line %d: %s", self.stats.lines, exc.cause)
            self.tracker.report(f"Undecodable line: {line}")
            return None

        if event.event_kind is EventKind.UNKNOWN_STRUCTURED:
            self.stats.unknown += 1
        elif event.event_kind is not EventKind.OUTPUT_LINE:
            self.stats.structured += 1
        self.tracker.handle(event)
        return event

    def run(self, lines: Iterable[str]) -> StreamStats:
        """Process every line, then tear the tracker down.

        The tracker is closed even when a transport error aborts the run.
        """
        try:
            for line in lines:
                self.process_line(line)
        finally:
            self.tracker.close()
        logger.debug("Stream finished: %s", self.stats)
        return self.stats
