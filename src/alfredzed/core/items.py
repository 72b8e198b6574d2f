"""Launcher item model.

Items are the rows the launcher renders. Both sources produce them and
the response wraps them into ``{"items": [...]}``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from pydantic import BaseModel, Field

from alfredzed.core.paths import split_fs_path, split_history_path

ICON_TYPE_FILE = "fileicon"
NO_RESULTS_UID = "no-results"
NO_RESULTS_ICON = "icon.png"


@dataclass(frozen=True)
class Workspace:
    """A row of the editor's workspace history."""

    workspace_id: int
    local_paths: str


class Icon(BaseModel):
    path: str
    type: str = Field(default=ICON_TYPE_FILE, description="Icon rendering mode tag.")

    @classmethod
    def for_file(cls, path: str) -> Icon:
        return cls(path=path, type=ICON_TYPE_FILE)


class Item(BaseModel):
    """A selectable launcher result.

    ``valid`` stays unset for ordinary items and is omitted from the JSON,
    which the launcher reads as valid.
    """

    uid: str
    title: str
    subtitle: str
    icon: Icon
    arg: str
    valid: bool | None = None

    @classmethod
    def from_workspace(cls, workspace: Workspace) -> Item:
        title, path = split_history_path(workspace.local_paths)
        return cls(
            uid=str(workspace.workspace_id),
            title=title,
            subtitle=path,
            icon=Icon.for_file(path),
            arg=path,
        )

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> Item | None:
        """Build an item for a directory, or None when the path cannot be displayed."""
        described = split_fs_path(path)
        if described is None:
            return None
        title, path_str = described
        return cls(
            uid=path_str,
            title=title,
            subtitle=path_str,
            icon=Icon.for_file(path_str),
            arg=path_str,
        )


class Response(BaseModel):
    items: list[Item] = Field(default_factory=list)


def no_results_item() -> Item:
    return Item(
        uid=NO_RESULTS_UID,
        title="No results found",
        subtitle="Try a different search term",
        icon=Icon(path=NO_RESULTS_ICON, type=""),
        arg="",
        valid=False,
    )


__all__ = [
    "ICON_TYPE_FILE",
    "NO_RESULTS_UID",
    "Icon",
    "Item",
    "Response",
    "Workspace",
    "no_results_item",
]
