"""Shared test fixtures for nixmonitor."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest

from nixmonitor import logging_setup
from nixmonitor.config import MonitorSettings
from nixmonitor.core.tracker import ActivityTracker
from nixmonitor.models.activities import ActivityKind
from nixmonitor.models.events import Event
from nixmonitor.models.results import ResultKind
from nixmonitor.monitor.recording import RecordingRenderer
from nixmonitor.protocol.decoder import decode_line


def nix_line(**payload: Any) -> str:
    """Encode *payload* as a structured protocol line."""
    return "@nix " + json.dumps(payload)


def start_line(
    id: int,
    kind: ActivityKind | int,
    fields: list[Any] | None = None,
    text: str = "",
    level: int = 3,
) -> str:
    payload: dict[str, Any] = {
        "action": "start",
        "id": id,
        "level": level,
        "text": text,
        "type": int(kind),
    }
    if fields is not None:
        payload["fields"] = fields
    return nix_line(**payload)


def result_line(id: int, kind: ResultKind | int, fields: list[Any]) -> str:
    return nix_line(action="result", id=id, type=int(kind), fields=fields)


def stop_line(id: int) -> str:
    return nix_line(action="stop", id=id)


def msg_line(level: int, msg: str) -> str:
    return nix_line(action="msg", level=level, msg=msg)


@pytest.fixture(autouse=True)
def _isolated_logger(monkeypatch):
    """Undo any setup_logging() call made during a test.

    The CLI commands configure the global ``nixmonitor`` logger once per
    process; without this, later tests see their handlers and guard.
    """
    logger = logging_setup.logger
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    saved_propagate = logger.propagate
    monkeypatch.setattr(logging_setup, "_initialized", False)
    yield logger
    for handler in logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)
    logger.propagate = saved_propagate


@pytest.fixture
def monitor_settings() -> MonitorSettings:
    """Settings with defaults only — no .env file, no overrides."""
    return MonitorSettings(_env_file=None)


@pytest.fixture
def renderer() -> RecordingRenderer:
    """Provide a fresh in-memory renderer."""
    return RecordingRenderer()


@pytest.fixture
def tracker(renderer: RecordingRenderer, monitor_settings: MonitorSettings) -> ActivityTracker:
    """Provide a tracker wired to the recording renderer."""
    return ActivityTracker(renderer, monitor_settings)


@pytest.fixture
def feed(tracker: ActivityTracker) -> Callable[..., list[Event]]:
    """Decode each line and apply it to the tracker, in order."""

    def _feed(*lines: str) -> list[Event]:
        events = [decode_line(line) for line in lines]
        for event in events:
            tracker.handle(event)
        return events

    return _feed
