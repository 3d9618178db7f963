"""Exception types raised by nixmonitor.

Only two conditions are ever raised out of the core:

- ``TransportDecodeError`` — a prefixed protocol line whose payload is not
  JSON at all.  This is a transport problem, not protocol drift, so the
  caller decides whether to abort or skip.
- ``PayloadEncodingError`` — a free-text payload that cannot be encoded for
  display.  The tracker absorbs it and keeps the previous message.

Unrecognised kinds, shape mismatches, duplicate ids and orphan updates are
never raised; they degrade to diagnostics.
"""

from __future__ import annotations

import json


class NixMonitorError(RuntimeError):
    """Base class for all nixmonitor errors."""


class TransportDecodeError(NixMonitorError, ValueError):
    """Raised when a prefixed line does not carry valid JSON.

    Parameters
    ----------
    line:
        The full input line, sentinel prefix included.
    cause:
        The underlying error: a ``json.JSONDecodeError``, or a
        ``RecursionError`` when the payload nests too deeply to parse.
    """

    def __init__(self, line: str, cause: Exception) -> None:
        if isinstance(cause, json.JSONDecodeError):
            detail = f"{cause.msg} at column {cause.colno}"
        else:
            detail = str(cause)
        super().__init__(f"Malformed protocol line ({detail}): {line}")
        self.line = line
        self.cause = cause


class PayloadEncodingError(NixMonitorError, UnicodeError):
    """Raised when payload text cannot be encoded as UTF-8."""
