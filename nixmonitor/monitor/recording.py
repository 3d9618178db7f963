"""In-memory renderer that records every call.

Used by the tests and by ``nixmonitor decode --trace`` to show exactly
which display operations a log produces.
"""

from __future__ import annotations

from typing import Any

from nixmonitor.monitor.targets import TargetHandle, TargetStyle, TargetTable


class RecordingRenderer(TargetTable):
    """A ``Renderer`` that keeps state in memory and logs each call.

    Attributes
    ----------
    calls:
        ``(operation, *args)`` tuples in call order.
    lines:
        Every standalone line passed to ``println``.
    """

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[Any, ...]] = []
        self.lines: list[str] = []

    def calls_named(self, operation: str) -> list[tuple[Any, ...]]:
        return [c for c in self.calls if c[0] == operation]

    def create(
        self, style: TargetStyle, label: str, text: str, visible: bool
    ) -> TargetHandle:
        handle = super().create(style, label, text, visible)
        self.calls.append(("create", handle, style, label, text, visible))
        return handle

    def attach(self, handle: TargetHandle, after: TargetHandle | None = None) -> None:
        super().attach(handle, after)
        self.calls.append(("attach", handle, after))

    def detach(self, handle: TargetHandle) -> None:
        super().detach(handle)
        self.calls.append(("detach", handle))

    def set_message(self, handle: TargetHandle, text: str) -> None:
        super().set_message(handle, text)
        self.calls.append(("set_message", handle, text))

    def set_label(self, handle: TargetHandle, text: str) -> None:
        super().set_label(handle, text)
        self.calls.append(("set_label", handle, text))

    def set_total(self, handle: TargetHandle, n: int) -> None:
        super().set_total(handle, n)
        self.calls.append(("set_total", handle, n))

    def set_position(self, handle: TargetHandle, n: int) -> None:
        super().set_position(handle, n)
        self.calls.append(("set_position", handle, n))

    def tick(self, handle: TargetHandle) -> None:
        super().tick(handle)
        self.calls.append(("tick", handle))

    def finish_and_remove(self, handle: TargetHandle) -> None:
        super().finish_and_remove(handle)
        self.calls.append(("finish_and_remove", handle))

    def println(self, text: str) -> None:
        self.lines.append(text)
        self.calls.append(("println", text))
