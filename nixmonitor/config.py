"""Runtime configuration — environment driven.

Centralized settings using pydantic-settings.  Reads from a .env file and
NIXMONITOR_* environment variables; CLI options override individual fields
via ``model_copy(update=...)``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nixmonitor.models.verbosity import Verbosity


class MonitorSettings(BaseSettings):
    """Settings for decoding and rendering a build log stream.

    Examples
    --------
    Override via environment::

        export NIXMONITOR_LOG_LEVEL=DEBUG
        export NIXMONITOR_ON_TRANSPORT_ERROR=skip
        export NIXMONITOR_SUPPRESSED_PREFIXES='["linking ", "copying "]'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NIXMONITOR_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging (diagnostics about nixmonitor itself, always on stderr or a file)
    log_level: str = "WARNING"
    log_file: Path | None = None

    # Display
    refresh_hz: float = 10.0
    live: bool = True
    show_unknown: bool = True

    # Message filtering: print messages at least this severe
    max_message_level: Verbosity = Verbosity.ERROR
    suppressed_prefixes: list[str] = Field(default_factory=lambda: ["linking "])

    # What to do with a prefixed line that is not JSON
    on_transport_error: Literal["abort", "skip"] = "abort"

    @property
    def skips_bad_lines(self) -> bool:
        return self.on_transport_error == "skip"


# Module-level singleton, import as `from nixmonitor.config import settings`
settings = MonitorSettings()
