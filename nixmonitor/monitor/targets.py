"""Render targets and the renderer contract.

A render target is one live display line.  The tracker only ever talks to
the ``Renderer`` protocol; ``TargetTable`` implements the bookkeeping part
of it (handles, display order, counters) so concrete renderers only decide
how to draw and where standalone lines go.
"""

from __future__ import annotations

import itertools
import threading
import time
from enum import Enum
from typing import Protocol

from pydantic import BaseModel, Field

TargetHandle = int


class TargetStyle(str, Enum):
    """How a target line is drawn."""

    BAR = "bar"  # bold label, (pos/len), progress bar
    MESSAGE = "message"  # elapsed, message
    BYTES = "bytes"  # bytes done/total, message
    LOG = "log"  # elapsed, bold label: message


class RenderTarget(BaseModel):
    """Mutable state of one display line."""

    handle: TargetHandle
    style: TargetStyle
    label: str = ""
    message: str = ""
    total: int | None = None
    position: int = 0
    visible: bool = True
    ticks: int = 0
    started_at: float = Field(default_factory=time.monotonic)

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.started_at


class Renderer(Protocol):
    """Capabilities the activity tracker needs from a display."""

    def create(
        self, style: TargetStyle, label: str, text: str, visible: bool
    ) -> TargetHandle: ...

    def attach(self, handle: TargetHandle, after: TargetHandle | None = None) -> None: ...

    def detach(self, handle: TargetHandle) -> None: ...

    def set_message(self, handle: TargetHandle, text: str) -> None: ...

    def set_label(self, handle: TargetHandle, text: str) -> None: ...

    def set_total(self, handle: TargetHandle, n: int) -> None: ...

    def set_position(self, handle: TargetHandle, n: int) -> None: ...

    def tick(self, handle: TargetHandle) -> None: ...

    def is_hidden(self, handle: TargetHandle) -> bool: ...

    def finish_and_remove(self, handle: TargetHandle) -> None: ...

    def println(self, text: str) -> None: ...


class TargetTable:
    """Handle allocation and display ordering shared by concrete renderers.

    ``order`` holds the attached handles top to bottom.  A target created
    with ``visible=False`` stays out of ``order`` until it is attached;
    attaching always makes it visible.

    Every operation on an unknown handle raises ``KeyError``.
    """

    def __init__(self) -> None:
        self._targets: dict[TargetHandle, RenderTarget] = {}
        self._order: list[TargetHandle] = []
        self._handles = itertools.count(1)
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def target(self, handle: TargetHandle) -> RenderTarget:
        return self._targets[handle]

    @property
    def order(self) -> list[TargetHandle]:
        """Attached handles, top to bottom (a copy)."""
        with self._lock:
            return list(self._order)

    def visible_targets(self) -> list[RenderTarget]:
        with self._lock:
            return [
                self._targets[h] for h in self._order if self._targets[h].visible
            ]

    def __contains__(self, handle: object) -> bool:
        return handle in self._targets

    def __len__(self) -> int:
        return len(self._targets)

    # ------------------------------------------------------------------
    # Renderer contract
    # ------------------------------------------------------------------

    def create(
        self, style: TargetStyle, label: str, text: str, visible: bool
    ) -> TargetHandle:
        with self._lock:
            handle = next(self._handles)
            self._targets[handle] = RenderTarget(
                handle=handle,
                style=style,
                label=label,
                message=text,
                visible=visible,
            )
            return handle

    def attach(self, handle: TargetHandle, after: TargetHandle | None = None) -> None:
        with self._lock:
            target = self._targets[handle]
            if handle in self._order:
                self._order.remove(handle)
            if after is not None and after in self._order:
                self._order.insert(self._order.index(after) + 1, handle)
            else:
                self._order.append(handle)
            target.visible = True

    def detach(self, handle: TargetHandle) -> None:
        with self._lock:
            if handle not in self._targets:
                raise KeyError(handle)
            if handle in self._order:
                self._order.remove(handle)

    def set_message(self, handle: TargetHandle, text: str) -> None:
        with self._lock:
            self._targets[handle].message = text

    def set_label(self, handle: TargetHandle, text: str) -> None:
        with self._lock:
            self._targets[handle].label = text

    def set_total(self, handle: TargetHandle, n: int) -> None:
        with self._lock:
            self._targets[handle].total = n

    def set_position(self, handle: TargetHandle, n: int) -> None:
        with self._lock:
            self._targets[handle].position = n

    def tick(self, handle: TargetHandle) -> None:
        with self._lock:
            self._targets[handle].ticks += 1

    def is_hidden(self, handle: TargetHandle) -> bool:
        with self._lock:
            return not self._targets[handle].visible

    def finish_and_remove(self, handle: TargetHandle) -> None:
        with self._lock:
            target = self._targets.pop(handle)
            target.message = ""
            if handle in self._order:
                self._order.remove(handle)
