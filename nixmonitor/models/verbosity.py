"""Message verbosity levels, most severe first."""

from __future__ import annotations

from enum import IntEnum


class Verbosity(IntEnum):
    """Severity of a log message or activity.

    The integer ordering is load-bearing: ``ERROR`` is the smallest value and
    the most severe, so "at least as severe as X" means ``level <= X``.
    """

    ERROR = 0
    WARN = 1
    NOTICE = 2
    INFO = 3
    TALKATIVE = 4
    CHATTY = 5
    DEBUG = 6
    VOMIT = 7

    @classmethod
    def from_code(cls, code: int) -> Verbosity | None:
        """Return the level for *code*, or ``None`` if it is not defined."""
        try:
            return cls(code)
        except ValueError:
            return None

    def is_at_least(self, threshold: Verbosity) -> bool:
        """Whether this level is as severe as *threshold* or more."""
        return self <= threshold
