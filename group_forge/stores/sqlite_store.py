"""Persist groups and generation records in SQLite."""

from __future__ import annotations

from pathlib import Path
from threading import Lock

from ..groups import GenerationRecord, GroupSearch, ResolvedGroupWithData
from ..infra.storage import SQLiteManager
from .base import BaseGroupGeneratorStore, BaseGroupStore


class SQLiteGroupStore(BaseGroupStore):
    """Store each group as a JSON payload row."""

    def __init__(self, manager: SQLiteManager, path: Path) -> None:
        self.manager = manager
        self.path = path
        self._lock = Lock()
        self._conn = manager.connect(path)

    def save(self, group: ResolvedGroupWithData) -> None:
        with self._lock:
            with self._conn:
                self._conn.execute(
                    "INSERT INTO groups(name, timestamp, generated_by, payload) VALUES (?, ?, ?, ?)",
                    (group.name, group.timestamp, group.generated_by, group.model_dump_json()),
                )

    def search(self, query: GroupSearch) -> list[ResolvedGroupWithData]:
        sql = "SELECT payload FROM groups WHERE name = ?"
        params: list[object] = [query.group_name]
        if query.timestamp is not None:
            sql += " AND timestamp = ?"
            params.append(query.timestamp)
        sql += " ORDER BY timestamp DESC, id DESC"
        if query.latest:
            sql += " LIMIT 1"
        with self._lock:
            rows = self._conn.execute(sql, params).fetchall()
        return [ResolvedGroupWithData.model_validate_json(row["payload"]) for row in rows]


class SQLiteGroupGeneratorStore(BaseGroupGeneratorStore):
    def __init__(self, manager: SQLiteManager, path: Path) -> None:
        self.manager = manager
        self.path = path
        self._lock = Lock()
        self._conn = manager.connect(path)

    def save(self, record: GenerationRecord) -> None:
        with self._lock:
            with self._conn:
                self._conn.execute(
                    "INSERT INTO generation_records(generator_name, timestamp) VALUES (?, ?)",
                    (record.name, record.timestamp),
                )

    def search(self, generator_name: str, latest: bool = False) -> list[GenerationRecord]:
        sql = (
            "SELECT generator_name, timestamp FROM generation_records "
            "WHERE generator_name = ? ORDER BY timestamp DESC, id DESC"
        )
        if latest:
            sql += " LIMIT 1"
        with self._lock:
            rows = self._conn.execute(sql, (generator_name,)).fetchall()
        return [GenerationRecord(name=row["generator_name"], timestamp=row["timestamp"]) for row in rows]

    def reset(self, generator_name: str) -> None:
        with self._lock:
            with self._conn:
                self._conn.execute(
                    "DELETE FROM generation_records WHERE generator_name = ?", (generator_name,)
                )


__all__ = ["SQLiteGroupGeneratorStore", "SQLiteGroupStore"]
