"""Activity kinds and their payloads.

The kind tag space is versioned by the producer and grows over time, so an
unrecognised code is represented (``UnknownActivity``) rather than rejected.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, ClassVar

from pydantic import Field

from nixmonitor.models.positional import PositionalModel


class ActivityKind(IntEnum):
    """Numeric activity type tags."""

    UNKNOWN = 0
    COPY_PATH = 100
    FILE_TRANSFER = 101
    REALISE = 102
    COPY_PATHS = 103
    BUILDS = 104
    BUILD = 105
    OPTIMISE_STORE = 106
    VERIFY_PATHS = 107
    SUBSTITUTE = 108
    QUERY_PATH_INFO = 109
    POST_BUILD_HOOK = 110
    BUILD_WAITING = 111

    @classmethod
    def lookup(cls, code: int) -> ActivityKind | None:
        """Return the kind for *code*, or ``None`` if it is not defined."""
        try:
            return cls(code)
        except ValueError:
            return None

    @classmethod
    def from_code(cls, code: int) -> ActivityKind:
        """Return the kind for *code*, falling back to ``UNKNOWN``."""
        return cls.lookup(code) or cls.UNKNOWN


class Activity(PositionalModel):
    """Base class for activity payloads.  ``kind`` is fixed per subclass."""

    kind: ClassVar[ActivityKind] = ActivityKind.UNKNOWN

    @property
    def type_code(self) -> int:
        """The numeric tag this activity is encoded with."""
        return int(self.kind)


class UnknownActivity(Activity):
    """Kind 0, or a tag this version does not know.

    Keeps the raw code and fields so nothing is lost.
    """

    code: int = 0
    fields: list[Any] = Field(default_factory=list)

    @property
    def type_code(self) -> int:
        return self.code

    def wire_fields(self) -> list[Any]:
        return list(self.fields)


class CopyPath(Activity):
    kind = ActivityKind.COPY_PATH

    path: str
    from_: str
    to: str


class FileTransfer(Activity):
    kind = ActivityKind.FILE_TRANSFER

    uri: str


class Realise(Activity):
    kind = ActivityKind.REALISE


class CopyPaths(Activity):
    kind = ActivityKind.COPY_PATHS


class Builds(Activity):
    kind = ActivityKind.BUILDS


class Build(Activity):
    kind = ActivityKind.BUILD

    path: str
    machine: str
    round: int
    total_rounds: int


class OptimiseStore(Activity):
    kind = ActivityKind.OPTIMISE_STORE


class VerifyPaths(Activity):
    kind = ActivityKind.VERIFY_PATHS


class Substitute(Activity):
    kind = ActivityKind.SUBSTITUTE

    path: str
    uri: str


class QueryPathInfo(Activity):
    kind = ActivityKind.QUERY_PATH_INFO

    path: str
    uri: str


class PostBuildHook(Activity):
    kind = ActivityKind.POST_BUILD_HOOK

    path: str


class BuildWaiting(Activity):
    kind = ActivityKind.BUILD_WAITING

    path: str
    resolved: str


# Registry for decoding by numeric kind.  UNKNOWN is handled separately.
ACTIVITY_TYPE_MAP: dict[ActivityKind, type[Activity]] = {
    ActivityKind.COPY_PATH: CopyPath,
    ActivityKind.FILE_TRANSFER: FileTransfer,
    ActivityKind.REALISE: Realise,
    ActivityKind.COPY_PATHS: CopyPaths,
    ActivityKind.BUILDS: Builds,
    ActivityKind.BUILD: Build,
    ActivityKind.OPTIMISE_STORE: OptimiseStore,
    ActivityKind.VERIFY_PATHS: VerifyPaths,
    ActivityKind.SUBSTITUTE: Substitute,
    ActivityKind.QUERY_PATH_INFO: QueryPathInfo,
    ActivityKind.POST_BUILD_HOOK: PostBuildHook,
    ActivityKind.BUILD_WAITING: BuildWaiting,
}
