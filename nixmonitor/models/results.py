"""Result kinds: incremental updates to a running activity."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, ClassVar

from pydantic import Field

from nixmonitor.models.activities import ActivityKind
from nixmonitor.models.positional import PositionalModel


class ResultKind(IntEnum):
    """Numeric result type tags."""

    FILE_LINKED = 100
    BUILD_LOG_LINE = 101
    UNTRUSTED_PATH = 102
    CORRUPTED_PATH = 103
    SET_PHASE = 104
    PROGRESS = 105
    SET_EXPECTED = 106
    POST_BUILD_LOG_LINE = 107

    @classmethod
    def lookup(cls, code: int) -> ResultKind | None:
        """Return the kind for *code*, or ``None`` if it is not defined."""
        try:
            return cls(code)
        except ValueError:
            return None


class Result(PositionalModel):
    """Base class for result payloads."""

    kind: ClassVar[ResultKind | None] = None

    @property
    def type_code(self) -> int:
        return int(self.kind)


class UnknownResult(Result):
    """A result tag this version does not know."""

    code: int
    fields: list[Any] = Field(default_factory=list)

    @property
    def type_code(self) -> int:
        return self.code

    def wire_fields(self) -> list[Any]:
        return list(self.fields)


class FileLinked(Result):
    kind = ResultKind.FILE_LINKED

    size: int
    blocks: int


class BuildLogLine(Result):
    kind = ResultKind.BUILD_LOG_LINE

    line: str


class UntrustedPath(Result):
    kind = ResultKind.UNTRUSTED_PATH

    path: str


class CorruptedPath(Result):
    kind = ResultKind.CORRUPTED_PATH

    path: str


class SetPhase(Result):
    kind = ResultKind.SET_PHASE

    phase: str


class Progress(Result):
    kind = ResultKind.PROGRESS

    done: int
    expected: int
    running: int
    failed: int


class SetExpected(Result):
    kind = ResultKind.SET_EXPECTED

    activity_type: ActivityKind
    expected: int


class PostBuildLogLine(Result):
    kind = ResultKind.POST_BUILD_LOG_LINE

    line: str


RESULT_TYPE_MAP: dict[ResultKind, type[Result]] = {
    ResultKind.FILE_LINKED: FileLinked,
    ResultKind.BUILD_LOG_LINE: BuildLogLine,
    ResultKind.UNTRUSTED_PATH: UntrustedPath,
    ResultKind.CORRUPTED_PATH: CorruptedPath,
    ResultKind.SET_PHASE: SetPhase,
    ResultKind.PROGRESS: Progress,
    ResultKind.SET_EXPECTED: SetExpected,
    ResultKind.POST_BUILD_LOG_LINE: PostBuildLogLine,
}
