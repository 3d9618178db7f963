"""Adversarial tests — out-of-order and inconsistent event streams.

The tracker must absorb any sequence of well-formed events without raising,
leave the renderer consistent with its own state, and report each
inconsistency exactly once.
"""

from __future__ import annotations

import random

import pytest

from conftest import msg_line, result_line, start_line, stop_line
from nixmonitor.models.activities import ActivityKind
from nixmonitor.models.results import ResultKind

DRV = "/nix/store/abc123-hello-1.0.drv"
URI = "https://cache.example/nar/abc.nar.xz"

_STARTS = [
    (ActivityKind.COPY_PATHS, []),
    (ActivityKind.BUILDS, []),
    (ActivityKind.FILE_TRANSFER, [URI]),
    (ActivityKind.COPY_PATH, [DRV, "https://cache", "local"]),
    (ActivityKind.BUILD, [DRV, "", 1, 1]),
    (ActivityKind.REALISE, []),
]

_RESULTS = [
    (ResultKind.PROGRESS, [1, 4, 1, 0]),
    (ResultKind.PROGRESS, [0, 4, 0, 0]),
    (ResultKind.BUILD_LOG_LINE, ["\x1b[1mmake\x1b[0m"]),
    (ResultKind.SET_PHASE, ["buildPhase"]),
    (ResultKind.SET_EXPECTED, [101, 3]),
]


def _random_stream(seed: int, length: int = 300) -> list[str]:
    rng = random.Random(seed)
    lines = []
    for _ in range(length):
        activity_id = rng.randint(1, 8)
        roll = rng.random()
        if roll < 0.35:
            kind, fields = rng.choice(_STARTS)
            lines.append(start_line(activity_id, kind, fields))
        elif roll < 0.7:
            kind, fields = rng.choice(_RESULTS)
            lines.append(result_line(activity_id, kind, fields))
        elif roll < 0.95:
            lines.append(stop_line(activity_id))
        else:
            lines.append(msg_line(rng.randint(0, 7), "noise"))
    return lines


def _assert_consistent(tracker, renderer):
    handles = {tracker.get(i).handle for i in tracker.active_ids()}
    assert len(handles) == len(renderer)
    assert all(handle in renderer for handle in handles)
    assert set(renderer.order) <= handles
    for activity_id in tracker.active_ids():
        tracked = tracker.get(activity_id)
        assert renderer.is_hidden(tracked.handle) == tracked.hidden
        assert (tracked.handle in renderer.order) != tracked.hidden


class TestOutOfOrder:
    def test_result_before_start(self, tracker, renderer, feed):
        feed(result_line(1, ResultKind.PROGRESS, [1, 2, 0, 0]), start_line(1, ActivityKind.COPY_PATHS))
        assert renderer.lines == ["Missing id 1"]
        target = renderer.target(tracker.get(1).handle)
        assert (target.position, target.total) == (0, None)

    def test_stop_before_start(self, tracker, renderer, feed):
        feed(stop_line(1), start_line(1, ActivityKind.REALISE))
        assert 1 in tracker
        assert renderer.lines == []

    def test_child_before_group(self, tracker, renderer, feed):
        feed(start_line(1, ActivityKind.BUILD, [DRV, "", 1, 1]), start_line(2, ActivityKind.BUILDS))
        assert renderer.order == [tracker.get(1).handle, tracker.get(2).handle]

    def test_group_stopped_before_children(self, tracker, renderer, feed):
        feed(
            start_line(1, ActivityKind.COPY_PATHS),
            start_line(2, ActivityKind.FILE_TRANSFER, [URI]),
            stop_line(1),
            result_line(2, ResultKind.PROGRESS, [10, 100, 0, 0]),
        )
        assert renderer.order == [tracker.get(2).handle]
        assert renderer.calls_named("attach")[-1] == ("attach", tracker.get(2).handle, None)

    def test_second_group_replaces_first(self, tracker, renderer, feed):
        feed(
            start_line(1, ActivityKind.BUILDS),
            start_line(2, ActivityKind.BUILDS),
            start_line(3, ActivityKind.BUILD, [DRV, "", 1, 1]),
        )
        handles = [tracker.get(i).handle for i in (1, 2, 3)]
        assert renderer.order == [handles[0], handles[1], handles[2]]
        # Stopping the older group must not drop the newer registration.
        feed(stop_line(1))
        assert tracker.group_parent(tracker.get(2).group).activity_id == 2

    def test_repeated_duplicates_each_reported(self, renderer, feed):
        feed(*(start_line(1, ActivityKind.REALISE) for _ in range(4)))
        assert renderer.lines == ["Duplicate id 1"] * 3


class TestRandomStreams:
    @pytest.mark.parametrize("seed", range(10))
    def test_random_stream_stays_consistent(self, tracker, renderer, feed, seed):
        for line in _random_stream(seed):
            feed(line)
            _assert_consistent(tracker, renderer)
        tracker.close()
        assert len(renderer) == 0
        assert len(tracker) == 0

    @pytest.mark.parametrize("seed", range(5))
    def test_diagnostics_match_inconsistencies(self, tracker, renderer, feed, seed):
        live: set[int] = set()
        expected: list[str] = []
        for line in _random_stream(seed):
            event = feed(line)[0]
            kind = event.event_kind.value
            if kind == "start":
                if event.id in live:
                    expected.append(f"Duplicate id {event.id}")
                live.add(event.id)
            elif kind == "result":
                if event.id not in live:
                    expected.append(f"Missing id {event.id}")
            elif kind == "stop":
                live.discard(event.id)
        diagnostics = [line for line in renderer.lines if line.startswith(("Duplicate", "Missing"))]
        assert diagnostics == expected
