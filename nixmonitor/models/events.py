"""Decoded log events — one per input line.

Each event is a frozen Pydantic model tagged with an ``EventKind``.
Structured events can be re-encoded to the JSON object they came from
with ``to_wire()``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, SerializeAsAny

from nixmonitor.models.activities import Activity
from nixmonitor.models.results import Result
from nixmonitor.models.verbosity import Verbosity


class EventKind(str, Enum):
    """The six decoded event types."""

    MSG = "msg"
    START = "start"
    RESULT = "result"
    STOP = "stop"
    OUTPUT_LINE = "output_line"
    UNKNOWN_STRUCTURED = "unknown_structured"


class EventBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_kind: EventKind


class MsgEvent(EventBase):
    """A free log message."""

    event_kind: EventKind = EventKind.MSG
    level: Verbosity
    text: str

    def to_wire(self) -> dict[str, Any]:
        return {"action": "msg", "level": int(self.level), "msg": self.text}


class StartEvent(EventBase):
    """A new activity begins."""

    event_kind: EventKind = EventKind.START
    id: int
    level: Verbosity
    text: str
    activity: SerializeAsAny[Activity]

    def to_wire(self) -> dict[str, Any]:
        return {
            "action": "start",
            "id": self.id,
            "level": int(self.level),
            "text": self.text,
            "type": self.activity.type_code,
            "fields": self.activity.wire_fields(),
        }


class ResultEvent(EventBase):
    """An update to a running activity."""

    event_kind: EventKind = EventKind.RESULT
    id: int
    result: SerializeAsAny[Result]

    def to_wire(self) -> dict[str, Any]:
        return {
            "action": "result",
            "id": self.id,
            "type": self.result.type_code,
            "fields": self.result.wire_fields(),
        }


class StopEvent(EventBase):
    """An activity ends."""

    event_kind: EventKind = EventKind.STOP
    id: int

    def to_wire(self) -> dict[str, Any]:
        return {"action": "stop", "id": self.id}


class OutputLine(EventBase):
    """An unstructured passthrough line."""

    event_kind: EventKind = EventKind.OUTPUT_LINE
    text: str


class UnknownStructured(EventBase):
    """A structured line whose action or shape was not understood.

    ``raw`` is the parsed JSON value; ``line`` is the original input line
    (sentinel included) for diagnostics.
    """

    event_kind: EventKind = EventKind.UNKNOWN_STRUCTURED
    raw: Any
    line: str = ""

    def to_wire(self) -> Any:
        return self.raw


Event = Union[MsgEvent, StartEvent, ResultEvent, StopEvent, OutputLine, UnknownStructured]
