"""Display side of nixmonitor.

Modules
-------
targets
    The ``Renderer`` protocol the tracker drives, and ``TargetTable``, the
    shared bookkeeping for render targets (handles, order, counters).
renderer
    ``RichRenderer`` draws targets in a ``Rich.Live`` region.
recording
    ``RecordingRenderer`` keeps everything in memory and records calls.
"""

from nixmonitor.monitor.recording import RecordingRenderer
from nixmonitor.monitor.renderer import RichRenderer
from nixmonitor.monitor.targets import (
    Renderer,
    RenderTarget,
    TargetHandle,
    TargetStyle,
    TargetTable,
)

__all__ = [
    "RecordingRenderer",
    "RenderTarget",
    "Renderer",
    "RichRenderer",
    "TargetHandle",
    "TargetStyle",
    "TargetTable",
]
