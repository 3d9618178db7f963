"""Initial presentation policy per activity kind.

Decides, once at ``Start`` time, how an activity is drawn (style, label,
text), whether it starts hidden, which group it registers as parent of,
and which group it is placed under.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from nixmonitor.models.activities import (
    Activity,
    ActivityKind,
    Build,
    CopyPath,
    FileTransfer,
)
from nixmonitor.monitor.targets import TargetStyle
from nixmonitor.utils.paths import label_for


class GroupKind(str, Enum):
    """Well-known grouping activities that act as visual parents."""

    COPY = "copy"
    BUILD = "build"


# Grouping kinds: fixed label, determinate bar, become the group parent.
_GROUP_LABELS: dict[ActivityKind, str] = {
    ActivityKind.COPY_PATHS: "Downloading",
    ActivityKind.BUILDS: "Building",
}

_REGISTERS_GROUP: dict[ActivityKind, GroupKind] = {
    ActivityKind.COPY_PATHS: GroupKind.COPY,
    ActivityKind.BUILDS: GroupKind.BUILD,
}

# Placement: these kinds go right after their group parent when it is live.
PARENT_GROUP: dict[ActivityKind, GroupKind] = {
    ActivityKind.COPY_PATH: GroupKind.COPY,
    ActivityKind.FILE_TRANSFER: GroupKind.COPY,
    ActivityKind.BUILD: GroupKind.BUILD,
}

# Fixed text replacing the start text.
_FIXED_TEXT: dict[ActivityKind, str] = {
    ActivityKind.REALISE: "Realising paths",
}


class Presentation(BaseModel):
    """How a new activity is shown."""

    model_config = ConfigDict(frozen=True)

    style: TargetStyle
    label: str = ""
    text: str = ""
    name: str = ""  # cached display name, used by SetPhase
    hidden: bool = False
    registers_group: GroupKind | None = None
    parent_group: GroupKind | None = None


def present(activity: Activity, text: str) -> Presentation:
    """Return the initial presentation of *activity* started with *text*."""
    kind = activity.kind

    if kind in _GROUP_LABELS:
        return Presentation(
            style=TargetStyle.BAR,
            label=_GROUP_LABELS[kind],
            text=text,
            registers_group=_REGISTERS_GROUP[kind],
        )

    if isinstance(activity, FileTransfer):
        # Numerous and uninteresting until bytes actually move.
        return Presentation(
            style=TargetStyle.BYTES,
            text=activity.uri,
            hidden=True,
            parent_group=PARENT_GROUP[kind],
        )

    if isinstance(activity, CopyPath):
        return Presentation(
            style=TargetStyle.MESSAGE,
            label=label_for(activity.path),
            text=text,
            parent_group=PARENT_GROUP[kind],
        )

    if isinstance(activity, Build):
        name = label_for(activity.path)
        return Presentation(
            style=TargetStyle.LOG,
            label=name,
            text=text,
            name=name,
            parent_group=PARENT_GROUP[kind],
        )

    return Presentation(style=TargetStyle.MESSAGE, text=_FIXED_TEXT.get(kind, text))
