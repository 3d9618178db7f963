"""Store path helpers."""

from __future__ import annotations

_DRV_SUFFIX = ".drv"


def label_for(path: str) -> str:
    """Derive a short display name from a store path.

    Takes the last ``/`` segment, drops the hash up to and including the
    first ``-``, and strips every trailing ``.drv``.  Returns ``""`` when the
    last segment has no ``-``.

    >>> label_for("/nix/store/abc123-hello-1.0.drv")
    'hello-1.0'
    """
    segment = path.rsplit("/", 1)[-1]
    _, sep, name = segment.partition("-")
    if not sep:
        return ""
    while name.endswith(_DRV_SUFFIX):
        name = name[: -len(_DRV_SUFFIX)]
    return name


# Alias matching the store-path terminology.
store_path_base = label_for
