"""Project directories under the configured roots.

Lists the immediate, non-hidden subdirectories of every root in
``projects_directories`` and returns them sorted by name.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from alfredzed.core.config import AppConfig
from alfredzed.core.filter import filter_items
from alfredzed.core.items import Item
from alfredzed.core.result import EntryReadError, Err, Ok, Result, collect_ok

logger = logging.getLogger(__name__)


def expand_root(line: str, home: str) -> str:
    """Replace a leading ``~`` with ``home``; other lines are returned unchanged."""
    if line.startswith("~"):
        return line.replace("~", home, 1)
    return line


def resolve_roots(config: AppConfig) -> list[Path]:
    """Configured roots that currently exist as directories."""
    roots: list[Path] = []
    for line in config.projects_roots:
        root = Path(expand_root(line, config.home))
        try:
            usable = root.is_dir()
        except OSError as exc:
            logger.debug("Skipping unreadable project root %s: %s", root, exc)
            continue
        if not usable:
            logger.debug("Skipping missing project root %s", root)
            continue
        roots.append(root)
    return roots


def scan_root(root: Path) -> Iterator[Result[Item, EntryReadError]]:
    """Yield an item for each visible subdirectory of ``root``.

    A root that cannot be enumerated yields nothing.
    """
    try:
        with os.scandir(root) as it:
            for entry in it:
                if entry.name.startswith("."):
                    continue
                try:
                    is_dir = entry.is_dir()
                except OSError as exc:
                    yield Err(
                        EntryReadError(
                            "Cannot inspect entry",
                            context={"path": entry.path, "error": str(exc)},
                        )
                    )
                    continue
                if not is_dir:
                    continue

                item = Item.from_path(entry.path)
                if item is None:
                    yield Err(
                        EntryReadError(
                            "Entry path is not displayable", context={"path": repr(entry.path)}
                        )
                    )
                    continue
                yield Ok(item)
    except OSError as exc:
        logger.debug("Cannot list project root %s: %s", root, exc)


def sort_by_title(items: list[Item]) -> list[Item]:
    """Case-insensitive title order; ties keep their enumeration order."""
    return sorted(items, key=lambda item: item.title.lower())


def list_directories(query: str | None, config: AppConfig) -> list[Item]:
    """Subdirectories of every configured root matching ``query``, sorted by title."""
    items: list[Item] = []
    for root in resolve_roots(config):
        items.extend(collect_ok(scan_root(root)))

    return filter_items(sort_by_title(items), query)


__all__ = [
    "expand_root",
    "list_directories",
    "resolve_roots",
    "scan_root",
    "sort_by_title",
]
