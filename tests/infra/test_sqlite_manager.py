from __future__ import annotations

from pathlib import Path

from group_forge.infra import SQLiteManager


def test_sqlite_manager_caches_connections_and_creates_schema(tmp_path: Path) -> None:
    manager = SQLiteManager()
    path = tmp_path / "nested" / "groups.db"
    first = manager.connect(path)
    assert manager.connect(path) is first
    tables = {
        row["name"] for row in first.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    }
    assert {"groups", "generation_records"} <= tables
    manager.close_all()


def test_sqlite_manager_reset_removes_file(tmp_path: Path) -> None:
    manager = SQLiteManager()
    path = tmp_path / "groups.db"
    manager.connect(path)
    assert path.exists()
    manager.reset(path)
    assert not path.exists()
    assert manager.connect(path) is not None
    manager.close_all()
