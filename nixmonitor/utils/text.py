"""Free-text payload helpers."""

from __future__ import annotations

from rich.text import Text

from nixmonitor.errors import PayloadEncodingError


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences, keeping the plain text."""
    return Text.from_ansi(text).plain


def ensure_printable(text: str) -> str:
    """Return *text* if it can be encoded as UTF-8.

    Input read with ``errors="surrogateescape"`` carries undecodable bytes as
    lone surrogates; those cannot be displayed.

    Raises
    ------
    PayloadEncodingError
        If *text* contains code points that do not encode.
    """
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PayloadEncodingError(
            f"Payload is not valid UTF-8 at position {exc.start}"
        ) from exc
    return text


def clean_log_line(line: str) -> str:
    """Strip escapes from a build log line and check it is displayable."""
    return ensure_printable(strip_ansi(line))
