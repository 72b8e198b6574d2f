"""Recent workspaces from the Zed history database.

Reads the ``workspaces`` table read-only, most recent first, and turns
each row into a launcher item. Malformed rows are skipped; a database
that cannot be opened or queried aborts the lookup.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import closing
from pathlib import Path
from typing import Any

from alfredzed.core.config import AppConfig, user_config_root
from alfredzed.core.filter import filter_items
from alfredzed.core.items import Item, Workspace
from alfredzed.core.result import (
    Err,
    Ok,
    Result,
    RowDecodeError,
    StorageUnavailableError,
    collect_ok,
)

logger = logging.getLogger(__name__)

HISTORY_DB_RELATIVE = Path("Zed") / "db" / "0-stable" / "db.sqlite"

DB_FIELD_WORKSPACE_ID = "workspace_id"
DB_FIELD_PATHS = "local_paths"

RECENT_WORKSPACES_SQL = f"""
    SELECT {DB_FIELD_WORKSPACE_ID}, {DB_FIELD_PATHS}
    FROM workspaces
    WHERE {DB_FIELD_PATHS} IS NOT NULL
    ORDER BY timestamp DESC
"""


def history_db_path(config: AppConfig) -> Path:
    """Location of the history database, honouring the ``history_db`` override."""
    if config.history_db is not None:
        return config.history_db.expanduser()
    return user_config_root() / HISTORY_DB_RELATIVE


def open_history_db(path: Path) -> sqlite3.Connection:
    """Open the history database read-only.

    Raises:
        StorageUnavailableError: if the file is missing or cannot be opened.
    """
    try:
        exists = path.is_file()
    except OSError as exc:
        raise StorageUnavailableError(
            "Cannot access Zed history database", context={"path": str(path), "error": str(exc)}
        ) from exc
    if not exists:
        raise StorageUnavailableError(
            "Zed history database not found", context={"path": str(path)}
        )
    uri = f"{path.resolve().as_uri()}?mode=ro"
    try:
        return sqlite3.connect(uri, uri=True)
    except sqlite3.Error as exc:
        raise StorageUnavailableError(
            "Cannot open Zed history database", context={"path": str(path), "error": str(exc)}
        ) from exc


def decode_row(row: tuple[Any, ...]) -> Result[Workspace, RowDecodeError]:
    """Turn a ``(workspace_id, local_paths)`` row into a Workspace."""
    try:
        workspace_id, local_paths = row
    except ValueError:
        return Err(RowDecodeError("Unexpected column count", context={"row": repr(row)}))

    if isinstance(workspace_id, bool) or not isinstance(workspace_id, int):
        return Err(
            RowDecodeError("Workspace id is not an integer", context={"id": repr(workspace_id)})
        )

    if isinstance(local_paths, bytes):
        try:
            local_paths = local_paths.decode("utf-8")
        except UnicodeDecodeError as exc:
            return Err(
                RowDecodeError(
                    "Workspace path is not UTF-8",
                    context={"id": workspace_id, "error": str(exc)},
                )
            )

    if not isinstance(local_paths, str):
        return Err(RowDecodeError("Workspace path is not text", context={"id": workspace_id}))

    return Ok(Workspace(workspace_id=workspace_id, local_paths=local_paths))


def iter_workspace_items(
    rows: Iterable[tuple[Any, ...]],
) -> Iterator[Result[Item, RowDecodeError]]:
    for row in rows:
        yield decode_row(row).map(Item.from_workspace)


def read_recent_workspaces(path: Path) -> list[Item]:
    """Read every decodable workspace from the database at ``path``, newest first."""
    with closing(open_history_db(path)) as conn:
        # Text is decoded per row so one bad value cannot fail the whole query.
        conn.text_factory = bytes
        try:
            rows = conn.execute(RECENT_WORKSPACES_SQL).fetchall()
        except sqlite3.Error as exc:
            raise StorageUnavailableError(
                "Cannot query Zed history database",
                context={"path": str(path), "error": str(exc)},
            ) from exc

    items = collect_ok(iter_workspace_items(rows))
    logger.debug("Read %d of %d workspace rows from %s", len(items), len(rows), path)
    return items


def list_recent_projects(query: str | None, config: AppConfig) -> list[Item]:
    """Recent Zed workspaces matching ``query``, most recent first."""
    items = read_recent_workspaces(history_db_path(config))
    return filter_items(items, query)


__all__ = [
    "HISTORY_DB_RELATIVE",
    "decode_row",
    "history_db_path",
    "iter_workspace_items",
    "list_recent_projects",
    "open_history_db",
    "read_recent_workspaces",
]
