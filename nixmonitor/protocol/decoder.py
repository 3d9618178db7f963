"""Line decoder for the structured build log protocol.

A line is structured only when it starts with ``SENTINEL_PREFIX``; the rest
is a JSON object dispatched on its ``"action"`` key.  ``start`` and
``result`` objects carry a numeric ``"type"`` tag and a positional
``"fields"`` array whose arity and element types depend on the tag.

Outcomes
--------
- no prefix                      -> ``OutputLine`` (verbatim)
- prefix, remainder not JSON     -> ``TransportDecodeError`` raised
- unknown action / bad shape     -> ``UnknownStructured``
- unknown kind tag               -> ``UnknownActivity`` / ``UnknownResult``

Every shape problem goes through one internal exception, ``_ShapeMismatch``,
caught once in ``decode_value``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from enum import IntEnum
from typing import Any, TypeVar

from nixmonitor.errors import TransportDecodeError
from nixmonitor.models.activities import (
    ACTIVITY_TYPE_MAP,
    Activity,
    ActivityKind,
    UnknownActivity,
)
from nixmonitor.models.events import (
    Event,
    MsgEvent,
    OutputLine,
    ResultEvent,
    StartEvent,
    StopEvent,
    UnknownStructured,
)
from nixmonitor.models.positional import PositionalModel
from nixmonitor.models.results import RESULT_TYPE_MAP, Result, ResultKind, UnknownResult
from nixmonitor.models.verbosity import Verbosity

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=PositionalModel)

SENTINEL_PREFIX = "@nix "


class _ShapeMismatch(Exception):
    """A required key is missing or a value has the wrong type."""


# ---------------------------------------------------------------------------
# Typed accessors
# ---------------------------------------------------------------------------


def _is_int(value: Any) -> bool:
    # JSON true/false arrive as bool, which is an int subclass.
    return isinstance(value, int) and not isinstance(value, bool)


def _get_int(obj: dict[str, Any], key: str) -> int:
    value = obj.get(key)
    if not _is_int(value):
        raise _ShapeMismatch(f"{key!r} must be an integer, got {value!r}")
    return value


def _get_str(obj: dict[str, Any], key: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise _ShapeMismatch(f"{key!r} must be a string, got {value!r}")
    return value


def _get_level(obj: dict[str, Any]) -> Verbosity:
    level = Verbosity.from_code(_get_int(obj, "level"))
    if level is None:
        raise _ShapeMismatch(f"unknown verbosity {obj['level']!r}")
    return level


def _get_fields(obj: dict[str, Any]) -> list[Any]:
    fields = obj.get("fields", [])
    if not isinstance(fields, list):
        raise _ShapeMismatch(f"'fields' must be an array, got {fields!r}")
    return fields


# ---------------------------------------------------------------------------
# Positional destructuring
# ---------------------------------------------------------------------------


def _coerce(annotation: Any, value: Any, position: int) -> Any:
    if annotation is str:
        if isinstance(value, str):
            return value
    elif annotation is int:
        if _is_int(value):
            return value
    elif isinstance(annotation, type) and issubclass(annotation, IntEnum):
        if _is_int(value):
            try:
                return annotation(value)
            except ValueError:
                pass
    raise _ShapeMismatch(f"field {position} does not fit {annotation!r}: {value!r}")


def destructure(cls: type[M], fields: list[Any]) -> M:
    """Build *cls* from a positional ``fields`` array.

    The arity must match exactly and each element must match the declared
    type of its position.
    """
    layout = cls.positional_fields()
    if len(fields) != len(layout):
        raise _ShapeMismatch(
            f"{cls.__name__} expects {len(layout)} fields, got {len(fields)}"
        )
    values = {
        name: _coerce(annotation, value, i)
        for i, ((name, annotation), value) in enumerate(zip(layout, fields))
    }
    return cls(**values)


def decode_activity(code: int, fields: list[Any]) -> Activity:
    """Decode the payload of a ``start`` line."""
    kind = ActivityKind.lookup(code)
    if kind is None or kind is ActivityKind.UNKNOWN:
        return UnknownActivity(code=code, fields=fields)
    return destructure(ACTIVITY_TYPE_MAP[kind], fields)


def decode_result(code: int, fields: list[Any]) -> Result:
    """Decode the payload of a ``result`` line."""
    kind = ResultKind.lookup(code)
    if kind is None:
        return UnknownResult(code=code, fields=fields)
    return destructure(RESULT_TYPE_MAP[kind], fields)


# ---------------------------------------------------------------------------
# Action dispatch
# ---------------------------------------------------------------------------


def _decode_msg(obj: dict[str, Any]) -> Event:
    return MsgEvent(level=_get_level(obj), text=_get_str(obj, "msg"))


def _decode_start(obj: dict[str, Any]) -> Event:
    activity = decode_activity(_get_int(obj, "type"), _get_fields(obj))
    return StartEvent(
        id=_get_int(obj, "id"),
        level=_get_level(obj),
        text=_get_str(obj, "text"),
        activity=activity,
    )


def _decode_stop(obj: dict[str, Any]) -> Event:
    return StopEvent(id=_get_int(obj, "id"))


def _decode_result(obj: dict[str, Any]) -> Event:
    result = decode_result(_get_int(obj, "type"), _get_fields(obj))
    return ResultEvent(id=_get_int(obj, "id"), result=result)


_ACTIONS = {
    "msg": _decode_msg,
    "start": _decode_start,
    "stop": _decode_stop,
    "result": _decode_result,
}


def decode_value(value: Any, line: str = "") -> Event:
    """Decode an already-parsed JSON value.  Never raises.

    Anything that is not understood comes back as ``UnknownStructured``.
    """
    try:
        if not isinstance(value, dict):
            raise _ShapeMismatch("payload is not an object")
        action = value.get("action")
        decoder = _ACTIONS.get(action) if isinstance(action, str) else None
        if decoder is None:
            raise _ShapeMismatch(f"unknown action {action!r}")
        return decoder(value)
    except _ShapeMismatch as exc:
        logger.debug("Unrecognised structured line: %s", exc)
        return UnknownStructured(raw=value, line=line)


def decode_line(line: str) -> Event:
    """Decode one input line into an ``Event``.

    Raises
    ------
    TransportDecodeError
        If the line carries the sentinel prefix but the remainder is not
        valid JSON, or nests too deeply to parse.
    """
    if not line.startswith(SENTINEL_PREFIX):
        return OutputLine(text=line)
    try:
        value = json.loads(line[len(SENTINEL_PREFIX):])
    except (json.JSONDecodeError, RecursionError) as exc:
        raise TransportDecodeError(line, exc) from exc
    return decode_value(value, line)


def iter_events(lines: Iterable[str]) -> Iterator[Event]:
    """Decode *lines* in order, dropping trailing newlines."""
    for line in lines:
        yield decode_line(line.rstrip("\r\n"))
