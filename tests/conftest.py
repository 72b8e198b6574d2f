from __future__ import annotations

import sqlite3
import sys
from collections.abc import Callable, Iterable
from contextlib import closing
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

HistoryRow = tuple[Any, Any, str]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def isolate_config(tmp_path: Path, monkeypatch: Any) -> Path:
    """Point config to a temp path and drop launcher variables so tests don't see user state."""
    cfg_path = tmp_path / "config.toml"
    monkeypatch.setenv("ALFREDZED_CONFIG", str(cfg_path))
    for name in ("projects_directories", "ALFREDZED_HISTORY_DB", "ALFREDZED_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return cfg_path


@pytest.fixture
def make_history_db(tmp_path: Path) -> Callable[[Iterable[HistoryRow]], Path]:
    """Build a Zed-style history database holding ``(workspace_id, local_paths, timestamp)`` rows.

    Columns are untyped so tests can store malformed values.
    """

    def _make(rows: Iterable[HistoryRow], name: str = "db.sqlite") -> Path:
        db_path = tmp_path / name
        with closing(sqlite3.connect(db_path)) as conn:
            conn.execute("CREATE TABLE workspaces (workspace_id, local_paths, timestamp)")
            conn.executemany(
                "INSERT INTO workspaces (workspace_id, local_paths, timestamp) VALUES (?, ?, ?)",
                list(rows),
            )
            conn.commit()
        return db_path

    return _make
