"""Core event processing.

Modules
-------
presentation
    Per-kind initial presentation policy (style, label, grouping).
tracker
    ``ActivityTracker`` — the stateful registry of live activities that
    drives a ``Renderer``.
stream
    ``StreamProcessor`` — the sequential line -> event -> tracker loop.
"""

from nixmonitor.core.presentation import GroupKind, Presentation, present
from nixmonitor.core.stream import StreamProcessor, StreamStats
from nixmonitor.core.tracker import ActivityTracker, TrackedActivity

__all__ = [
    "ActivityTracker",
    "GroupKind",
    "Presentation",
    "StreamProcessor",
    "StreamStats",
    "TrackedActivity",
    "present",
]
