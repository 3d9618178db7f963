"""nixmonitor data models — all Pydantic v2; wire values are frozen."""

from nixmonitor.models.activities import (
    ACTIVITY_TYPE_MAP,
    Activity,
    ActivityKind,
    Build,
    Builds,
    BuildWaiting,
    CopyPath,
    CopyPaths,
    FileTransfer,
    OptimiseStore,
    PostBuildHook,
    QueryPathInfo,
    Realise,
    Substitute,
    UnknownActivity,
    VerifyPaths,
)
from nixmonitor.models.events import (
    Event,
    EventKind,
    MsgEvent,
    OutputLine,
    ResultEvent,
    StartEvent,
    StopEvent,
    UnknownStructured,
)
from nixmonitor.models.results import (
    RESULT_TYPE_MAP,
    BuildLogLine,
    CorruptedPath,
    FileLinked,
    PostBuildLogLine,
    Progress,
    Result,
    ResultKind,
    SetExpected,
    SetPhase,
    UnknownResult,
    UntrustedPath,
)
from nixmonitor.models.verbosity import Verbosity

__all__ = [
    # verbosity
    "Verbosity",
    # activities
    "ACTIVITY_TYPE_MAP",
    "Activity",
    "ActivityKind",
    "Build",
    "BuildWaiting",
    "Builds",
    "CopyPath",
    "CopyPaths",
    "FileTransfer",
    "OptimiseStore",
    "PostBuildHook",
    "QueryPathInfo",
    "Realise",
    "Substitute",
    "UnknownActivity",
    "VerifyPaths",
    # results
    "RESULT_TYPE_MAP",
    "BuildLogLine",
    "CorruptedPath",
    "FileLinked",
    "PostBuildLogLine",
    "Progress",
    "Result",
    "ResultKind",
    "SetExpected",
    "SetPhase",
    "UnknownResult",
    "UntrustedPath",
    # events
    "Event",
    "EventKind",
    "MsgEvent",
    "OutputLine",
    "ResultEvent",
    "StartEvent",
    "StopEvent",
    "UnknownStructured",
]
