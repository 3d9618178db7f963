"""Structured log protocol decoding.

Modules
-------
decoder
    ``decode_line`` turns one raw input line into an ``Event``.  Lines
    without the ``@nix `` sentinel pass through as ``OutputLine``; anything
    structured but not understood becomes ``UnknownStructured``.
"""

from nixmonitor.protocol.decoder import (
    SENTINEL_PREFIX,
    decode_activity,
    decode_line,
    decode_result,
    decode_value,
    iter_events,
)

__all__ = [
    "SENTINEL_PREFIX",
    "decode_activity",
    "decode_line",
    "decode_result",
    "decode_value",
    "iter_events",
]
