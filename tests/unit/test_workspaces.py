"""Tests for core/workspaces.py - recent workspaces from the history database."""

from __future__ import annotations

import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any

import pytest

from alfredzed.core import workspaces
from alfredzed.core.config import AppConfig, load_config
from alfredzed.core.result import (
    ConfigUnavailableError,
    Err,
    Ok,
    RowDecodeError,
    StorageUnavailableError,
)
from alfredzed.core.workspaces import (
    HISTORY_DB_RELATIVE,
    decode_row,
    history_db_path,
    list_recent_projects,
    read_recent_workspaces,
)


def _config_for(db_path: Path, monkeypatch: Any) -> AppConfig:
    monkeypatch.setenv("ALFREDZED_HISTORY_DB", str(db_path))
    config, _ = load_config()
    return config


class TestDecodeRow:
    def test_text_row(self) -> None:
        result = decode_row((7, "/home/u/proj"))
        assert isinstance(result, Ok)
        assert result.value.workspace_id == 7
        assert result.value.local_paths == "/home/u/proj"

    def test_bytes_path_is_decoded(self) -> None:
        result = decode_row((7, b"\x01\x00/home/u/proj"))
        assert isinstance(result, Ok)
        assert result.value.local_paths == "\x01\x00/home/u/proj"

    @pytest.mark.parametrize(
        "row",
        [
            ("seven", "/home/u/proj"),
            (True, "/home/u/proj"),
            (7, b"\xff\xfe/home"),
            (7, 3.5),
            (7,),
        ],
    )
    def test_malformed_rows_are_errors(self, row: tuple[Any, ...]) -> None:
        result = decode_row(row)
        assert isinstance(result, Err)
        assert isinstance(result.error, RowDecodeError)


class TestReadRecentWorkspaces:
    def test_orders_by_timestamp_descending(self, make_history_db: Any) -> None:
        db_path = make_history_db(
            [
                (1, "/home/u/old", "2024-01-01 10:00:00"),
                (2, "/home/u/newest", "2024-03-01 10:00:00"),
                (3, "/home/u/middle", "2024-02-01 10:00:00"),
            ]
        )

        items = read_recent_workspaces(db_path)

        assert [item.uid for item in items] == ["2", "3", "1"]
        assert [item.title for item in items] == ["newest", "middle", "old"]

    def test_skips_null_and_malformed_rows(self, make_history_db: Any) -> None:
        db_path = make_history_db(
            [
                (1, None, "2024-05-01 10:00:00"),
                ("not-an-id", "/home/u/broken", "2024-04-01 10:00:00"),
                (3, b"\xff\xfe/home/u/binary", "2024-03-01 10:00:00"),
                (4, "/home/u/good", "2024-02-01 10:00:00"),
            ]
        )

        items = read_recent_workspaces(db_path)

        assert [item.uid for item in items] == ["4"]

    def test_missing_database_raises_storage_unavailable(self, tmp_path: Path) -> None:
        with pytest.raises(StorageUnavailableError, match="not found"):
            read_recent_workspaces(tmp_path / "missing.sqlite")

    def test_inaccessible_database_raises_storage_unavailable(
        self, tmp_path: Path, monkeypatch: Any
    ) -> None:
        db_path = tmp_path / "locked" / "db.sqlite"

        def _is_file(self: Path) -> bool:
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "is_file", _is_file)

        with pytest.raises(StorageUnavailableError, match="Cannot access"):
            read_recent_workspaces(db_path)

    def test_invalid_database_raises_storage_unavailable(self, tmp_path: Path) -> None:
        bogus = tmp_path / "bogus.sqlite"
        bogus.write_text("this is not a sqlite database" * 10, encoding="utf-8")

        with pytest.raises(StorageUnavailableError):
            read_recent_workspaces(bogus)

    def test_missing_table_raises_storage_unavailable(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.sqlite"
        with closing(sqlite3.connect(empty)) as conn:
            conn.execute("CREATE TABLE other (id INTEGER)")
            conn.commit()

        with pytest.raises(StorageUnavailableError, match="query"):
            read_recent_workspaces(empty)

    def test_database_is_not_modified(self, make_history_db: Any) -> None:
        db_path = make_history_db([(1, "/home/u/proj", "2024-01-01 10:00:00")])
        before = db_path.read_bytes()

        read_recent_workspaces(db_path)

        assert db_path.read_bytes() == before


class TestHistoryDbPath:
    def test_override_wins(self, tmp_path: Path, monkeypatch: Any) -> None:
        config = _config_for(tmp_path / "custom.sqlite", monkeypatch)
        assert history_db_path(config) == tmp_path / "custom.sqlite"

    def test_default_lives_under_user_config_dir(self, tmp_path: Path, monkeypatch: Any) -> None:
        monkeypatch.setattr(workspaces, "user_config_root", lambda: tmp_path)
        config, _ = load_config()

        assert history_db_path(config) == tmp_path / HISTORY_DB_RELATIVE
        assert HISTORY_DB_RELATIVE.as_posix() == "Zed/db/0-stable/db.sqlite"

    def test_unresolvable_config_dir_propagates(self, monkeypatch: Any) -> None:
        def _unavailable() -> Path:
            raise ConfigUnavailableError("Cannot resolve the user configuration directory")

        monkeypatch.setattr(workspaces, "user_config_root", _unavailable)
        config, _ = load_config()

        with pytest.raises(ConfigUnavailableError):
            list_recent_projects(None, config)


class TestListRecentProjects:
    def test_filters_without_reordering(self, make_history_db: Any, monkeypatch: Any) -> None:
        db_path = make_history_db(
            [
                (1, "/home/u/Project2", "2024-03-01 10:00:00"),
                (2, "/home/u/other", "2024-02-01 10:00:00"),
                (3, "/home/u/proj", "2024-01-01 10:00:00"),
            ]
        )
        config = _config_for(db_path, monkeypatch)

        items = list_recent_projects("PRO", config)

        assert [item.title for item in items] == ["Project2", "proj"]

    def test_no_query_returns_everything(self, make_history_db: Any, monkeypatch: Any) -> None:
        db_path = make_history_db(
            [
                (1, "/a/one", "2024-03-01 10:00:00"),
                (2, "/a/two", "2024-02-01 10:00:00"),
            ]
        )
        config = _config_for(db_path, monkeypatch)

        assert len(list_recent_projects(None, config)) == 2
