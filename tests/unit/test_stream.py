"""Tests for the sequential stream processor."""

from __future__ import annotations

import pytest

from conftest import msg_line, nix_line, result_line, start_line, stop_line
from nixmonitor.config import MonitorSettings
from nixmonitor.core.stream import StreamProcessor
from nixmonitor.core.tracker import ActivityTracker
from nixmonitor.errors import TransportDecodeError
from nixmonitor.models.activities import ActivityKind
from nixmonitor.models.events import OutputLine, StartEvent
from nixmonitor.models.results import ResultKind
from nixmonitor.monitor.recording import RecordingRenderer

DRV = "/nix/store/abc123-hello-1.0.drv"


def _processor(**overrides) -> tuple[StreamProcessor, RecordingRenderer]:
    renderer = RecordingRenderer()
    settings = MonitorSettings(_env_file=None, **overrides)
    return StreamProcessor(ActivityTracker(renderer, settings), settings), renderer


class TestProcessLine:
    def test_strips_newline(self):
        processor, renderer = _processor()
        event = processor.process_line("hello\n")
        assert event == OutputLine(text="hello")
        assert renderer.lines == ["hello"]

    def test_structured_line_reaches_tracker(self):
        processor, _ = _processor()
        event = processor.process_line(start_line(1, ActivityKind.REALISE) + "\r\n")
        assert isinstance(event, StartEvent)
        assert 1 in processor.tracker


class TestRun:
    def test_full_stream(self):
        processor, renderer = _processor()
        lines = [
            start_line(1, ActivityKind.BUILDS),
            start_line(2, ActivityKind.BUILD, [DRV, "", 1, 1], text="building"),
            result_line(2, ResultKind.BUILD_LOG_LINE, ["compiling"]),
            "unpacking sources",
            msg_line(0, "error: builder failed"),
            nix_line(action="mystery"),
            stop_line(2),
            stop_line(1),
        ]
        stats = processor.run(line + "\n" for line in lines)
        assert stats.lines == 8
        assert stats.structured == 6
        assert stats.unknown == 1
        assert stats.skipped == 0
        assert renderer.lines[:2] == ["unpacking sources", "error: builder failed"]
        assert renderer.lines[2].startswith("Unknown message: ")
        assert len(renderer) == 0

    def test_run_closes_tracker_at_end(self):
        processor, renderer = _processor()
        processor.run([start_line(1, ActivityKind.COPY_PATHS)])
        assert len(processor.tracker) == 0
        assert len(renderer) == 0

    def test_empty_input(self):
        processor, renderer = _processor()
        stats = processor.run([])
        assert stats.lines == 0
        assert renderer.calls == []


class TestTransportErrors:
    def test_abort_propagates_and_closes(self):
        processor, renderer = _processor()
        lines = [start_line(1, ActivityKind.REALISE), "@nix {not json", "never reached"]
        with pytest.raises(TransportDecodeError) as excinfo:
            processor.run(lines)
        assert excinfo.value.line == "@nix {not json"
        assert len(renderer) == 0
        assert "never reached" not in renderer.lines
        assert processor.stats.lines == 2

    def test_skip_reports_and_continues(self):
        processor, renderer = _processor(on_transport_error="skip")
        stats = processor.run(["@nix {not json", "after"])
        assert stats.skipped == 1
        assert renderer.lines == ["Undecodable line: @nix {not json", "after"]

    def test_skipped_line_returns_none(self):
        processor, _ = _processor(on_transport_error="skip")
        assert processor.process_line("@nix ") is None

    def test_deeply_nested_line_is_skippable(self):
        processor, renderer = _processor(on_transport_error="skip")
        deep = "@nix " + "[" * 100_000 + "]" * 100_000
        stats = processor.run([deep, "after"])
        assert stats.skipped == 1
        assert renderer.lines[-1] == "after"

    def test_deeply_nested_line_aborts_with_transport_error(self):
        processor, _ = _processor()
        with pytest.raises(TransportDecodeError):
            processor.run(["@nix " + "{\"a\":" * 100_000 + "1" + "}" * 100_000])
