"""Path normalization for display.

Turns raw history values and filesystem paths into the
``(title, path)`` pair shown by the launcher.
"""

from __future__ import annotations

import os
from pathlib import Path


def split_history_path(raw: str) -> tuple[str, str]:
    """Return ``(title, path)`` for a raw workspace history value.

    Everything before the first ``/`` is a non-path prefix and is dropped.
    For ``scheme://authority/path`` values the authority belongs to the
    prefix as well.
    """
    candidate = raw
    scheme, sep, rest = raw.partition("://")
    if sep and "/" not in scheme:
        candidate = rest

    start = candidate.find("/")
    path = candidate[start:] if start >= 0 else ""
    title = path.rstrip("/").split("/")[-1]
    return title, path


def split_fs_path(path: str | os.PathLike[str]) -> tuple[str, str] | None:
    """Return ``(title, path)`` for a filesystem path, or None if it cannot be shown.

    Paths whose bytes are not valid UTF-8 (surrogate-escaped by the OS layer)
    and paths without a final component are rejected.
    """
    path_str = os.fspath(path)
    try:
        path_str.encode("utf-8")
    except UnicodeEncodeError:
        return None

    name = Path(path_str).name
    if not name or name == "..":
        return None
    return name, path_str


__all__ = ["split_fs_path", "split_history_path"]
