"""Case-insensitive substring filtering shared by both sources."""

from __future__ import annotations

from collections.abc import Iterable

from alfredzed.core.items import Item


def matches(item: Item, needle: str) -> bool:
    return needle in item.title.lower() or needle in item.subtitle.lower()


def filter_items(items: Iterable[Item], query: str | None) -> list[Item]:
    """Keep items whose title or subtitle contains ``query``, ignoring case.

    A missing or empty query keeps everything. Input order is preserved.
    """
    needle = (query or "").lower()
    if not needle:
        return list(items)
    return [item for item in items if matches(item, needle)]


__all__ = ["filter_items", "matches"]
