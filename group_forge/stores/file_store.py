"""File based stores writing one JSON document per group."""

from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path
from threading import Lock

from ..groups import GenerationRecord, GroupSearch, ResolvedGroupWithData
from .base import BaseGroupGeneratorStore, BaseGroupStore, _apply_record_search


def _slug(name: str) -> str:
    return re.sub(r"[^0-9A-Za-z_-]+", "_", name.strip()) or "group"


def _atomic_write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as stream:
            stream.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class FileGroupStore(BaseGroupStore):
    """Write groups to ``<root>/groups/<name>/<timestamp>.json``."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    def _group_dir(self, group_name: str) -> Path:
        return self.root / "groups" / _slug(group_name)

    def save(self, group: ResolvedGroupWithData) -> None:
        path = self._group_dir(group.name) / f"{group.timestamp}.json"
        payload = json.dumps(group.model_dump(mode="json"), ensure_ascii=False, indent=2)
        with self._lock:
            _atomic_write(path, payload)

    def search(self, query: GroupSearch) -> list[ResolvedGroupWithData]:
        directory = self._group_dir(query.group_name)
        if not directory.exists():
            return []
        paths = sorted(directory.glob("*.json"), key=lambda p: int(p.stem), reverse=True)
        if query.timestamp is not None:
            paths = [p for p in paths if int(p.stem) == query.timestamp]
        if query.latest:
            paths = paths[:1]
        return [
            ResolvedGroupWithData.model_validate_json(path.read_text(encoding="utf-8"))
            for path in paths
        ]


class FileGroupGeneratorStore(BaseGroupGeneratorStore):
    """Append generation records to a JSON lines file."""

    def __init__(self, root: Path) -> None:
        self.path = root / "generation_records.jsonl"
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    def _load(self) -> list[GenerationRecord]:
        if not self.path.exists():
            return []
        records = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            if line.strip():
                item = json.loads(line)
                records.append(GenerationRecord(name=item["name"], timestamp=int(item["timestamp"])))
        return records

    def save(self, record: GenerationRecord) -> None:
        line = json.dumps({"name": record.name, "timestamp": record.timestamp})
        with self._lock:
            with self.path.open("a", encoding="utf-8") as stream:
                stream.write(line + "\n")

    def search(self, generator_name: str, latest: bool = False) -> list[GenerationRecord]:
        with self._lock:
            records = self._load()
        return _apply_record_search(records, generator_name, latest)

    def reset(self, generator_name: str) -> None:
        with self._lock:
            kept = [r for r in self._load() if r.name != generator_name]
            text = "".join(json.dumps({"name": r.name, "timestamp": r.timestamp}) + "\n" for r in kept)
            _atomic_write(self.path, text)


__all__ = ["FileGroupGeneratorStore", "FileGroupStore"]
