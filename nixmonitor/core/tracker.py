"""Activity lifecycle tracker.

Consumes decoded events strictly in arrival order and drives a
``Renderer``:

- ``Start``  creates a render target per the presentation policy and
  places it under its group parent when one is live.
- ``Result`` ticks the target and applies the update (log line, phase,
  progress).  Progress on a hidden file transfer promotes it to visible.
- ``Stop``   removes the entry and clears its target.
- ``Msg``    prints only severe messages that are not housekeeping noise.

Logical inconsistencies (duplicate start, result for an unknown id) are
reported as standalone lines and the event is dropped.  Nothing here raises
on bad input.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable

from pydantic import BaseModel, SerializeAsAny

from nixmonitor.config import MonitorSettings
from nixmonitor.config import settings as default_settings
from nixmonitor.core.presentation import GroupKind, present
from nixmonitor.errors import PayloadEncodingError
from nixmonitor.models.activities import Activity, ActivityKind
from nixmonitor.models.events import (
    Event,
    EventKind,
    MsgEvent,
    OutputLine,
    ResultEvent,
    StartEvent,
    StopEvent,
    UnknownStructured,
)
from nixmonitor.models.results import BuildLogLine, PostBuildLogLine, Progress, SetPhase
from nixmonitor.models.verbosity import Verbosity
from nixmonitor.monitor.targets import Renderer, TargetHandle
from nixmonitor.utils.text import clean_log_line

logger = logging.getLogger(__name__)


class TrackedActivity(BaseModel):
    """Tracker-owned state of one live activity."""

    activity_id: int
    kind: ActivityKind
    level: Verbosity
    text: str
    activity: SerializeAsAny[Activity]
    handle: TargetHandle
    name: str = ""
    group: GroupKind | None = None  # group this activity is the parent of
    parent_group: GroupKind | None = None  # fixed at creation
    hidden: bool = False


class ActivityTracker:
    """Maps activity ids to render targets for the duration of a run.

    Parameters
    ----------
    renderer:
        The display to drive.
    settings:
        Message filtering and unknown-line behaviour.  Defaults to the
        module-level settings.
    """

    def __init__(self, renderer: Renderer, settings: MonitorSettings | None = None) -> None:
        self._renderer = renderer
        self._settings = settings if settings is not None else default_settings
        self._activities: dict[int, TrackedActivity] = {}
        # Weak links: resolved against _activities on every use.
        self._group_parents: dict[GroupKind, int] = {}
        self._dispatch: dict[EventKind, Callable[..., None]] = {
            EventKind.MSG: self.on_msg,
            EventKind.START: self.on_start,
            EventKind.RESULT: self.on_result,
            EventKind.STOP: self.on_stop,
            EventKind.OUTPUT_LINE: self.on_output_line,
            EventKind.UNKNOWN_STRUCTURED: self.on_unknown,
        }

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def __contains__(self, activity_id: object) -> bool:
        return activity_id in self._activities

    def __len__(self) -> int:
        return len(self._activities)

    def get(self, activity_id: int) -> TrackedActivity | None:
        return self._activities.get(activity_id)

    def active_ids(self) -> list[int]:
        return list(self._activities)

    def display_name(self, activity_id: int) -> str:
        """Cached display name of a live activity, ``""`` if none."""
        tracked = self._activities.get(activity_id)
        return tracked.name if tracked is not None else ""

    def group_parent(self, group: GroupKind | None) -> TrackedActivity | None:
        """The live parent activity of *group*, if any."""
        if group is None:
            return None
        parent_id = self._group_parents.get(group)
        if parent_id is None:
            return None
        tracked = self._activities.get(parent_id)
        if tracked is None or tracked.group is not group:
            return None
        return tracked

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------

    def handle(self, event: Event) -> None:
        """Apply one event."""
        self._dispatch[event.event_kind](event)

    def on_start(self, event: StartEvent) -> None:
        if event.id in self._activities:
            self.report(f"Duplicate id {event.id}")
            return

        presentation = present(event.activity, event.text)
        handle = self._renderer.create(
            presentation.style,
            presentation.label,
            presentation.text,
            not presentation.hidden,
        )
        if not presentation.hidden:
            self._renderer.attach(handle, after=self._parent_handle(presentation.parent_group))

        self._activities[event.id] = TrackedActivity(
            activity_id=event.id,
            kind=event.activity.kind,
            level=event.level,
            text=event.text,
            activity=event.activity,
            handle=handle,
            name=presentation.name,
            group=presentation.registers_group,
            parent_group=presentation.parent_group,
            hidden=presentation.hidden,
        )
        if presentation.registers_group is not None:
            self._group_parents[presentation.registers_group] = event.id
        logger.debug("Started activity %d (%s)", event.id, event.activity.kind.name)

    def on_result(self, event: ResultEvent) -> None:
        tracked = self._activities.get(event.id)
        if tracked is None:
            self.report(f"Missing id {event.id}")
            return

        handle = tracked.handle
        self._renderer.tick(handle)
        result = event.result

        if isinstance(result, (BuildLogLine, PostBuildLogLine)):
            try:
                line = clean_log_line(result.line)
            except PayloadEncodingError as exc:
                logger.warning("Dropped log line for activity %d: %s", event.id, exc)
                return
            self._renderer.set_message(handle, line)
        elif isinstance(result, SetPhase):
            self._renderer.set_label(handle, f"{tracked.name} ({result.phase})")
        elif isinstance(result, Progress):
            self._renderer.set_total(handle, result.expected)
            self._renderer.set_position(handle, result.done)
            if result.done > 0 and self._renderer.is_hidden(handle):
                self._promote(tracked)

    def on_stop(self, event: StopEvent) -> None:
        tracked = self._activities.pop(event.id, None)
        if tracked is None:
            logger.info("Stop for unknown id %d", event.id)
            return
        self._renderer.finish_and_remove(tracked.handle)
        if tracked.group is not None and self._group_parents.get(tracked.group) == event.id:
            del self._group_parents[tracked.group]
        logger.debug("Stopped activity %d", event.id)

    def on_msg(self, event: MsgEvent) -> None:
        if not event.level.is_at_least(self._settings.max_message_level):
            return
        if event.text.startswith(tuple(self._settings.suppressed_prefixes)):
            return
        self._renderer.println(event.text)

    def on_output_line(self, event: OutputLine) -> None:
        self._renderer.println(event.text)

    def on_unknown(self, event: UnknownStructured) -> None:
        line = event.line or json.dumps(event.raw)
        if self._settings.show_unknown:
            self.report(f"Unknown message: {line}")
        else:
            logger.info("Unknown message: %s", line)

    def close(self) -> None:
        """Clear every remaining target.  Called at end of input."""
        for tracked in self._activities.values():
            self._renderer.finish_and_remove(tracked.handle)
        self._activities.clear()
        self._group_parents.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _parent_handle(self, group: GroupKind | None) -> TargetHandle | None:
        parent = self.group_parent(group)
        return parent.handle if parent is not None else None

    def _promote(self, tracked: TrackedActivity) -> None:
        self._renderer.detach(tracked.handle)
        self._renderer.attach(tracked.handle, after=self._parent_handle(tracked.parent_group))
        tracked.hidden = False
        logger.debug("Promoted activity %d", tracked.activity_id)

    def report(self, message: str) -> None:
        """Print a standalone diagnostic line."""
        logger.info(message)
        self._renderer.println(message)
