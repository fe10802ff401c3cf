"""In-process stores used for dry runs and tests."""

from __future__ import annotations

from threading import Lock

from ..groups import GenerationRecord, GroupSearch, ResolvedGroupWithData
from .base import BaseGroupGeneratorStore, BaseGroupStore, _apply_record_search, _apply_search


class MemoryGroupStore(BaseGroupStore):
    def __init__(self) -> None:
        self._groups: list[ResolvedGroupWithData] = []
        self._lock = Lock()

    def save(self, group: ResolvedGroupWithData) -> None:
        with self._lock:
            self._groups.append(group.model_copy(deep=True))

    def search(self, query: GroupSearch) -> list[ResolvedGroupWithData]:
        with self._lock:
            snapshot = list(self._groups)
        return [group.model_copy(deep=True) for group in _apply_search(snapshot, query)]

    @property
    def groups(self) -> list[ResolvedGroupWithData]:
        return list(self._groups)


class MemoryGroupGeneratorStore(BaseGroupGeneratorStore):
    def __init__(self) -> None:
        self._records: list[GenerationRecord] = []
        self._lock = Lock()

    def save(self, record: GenerationRecord) -> None:
        with self._lock:
            self._records.append(record)

    def search(self, generator_name: str, latest: bool = False) -> list[GenerationRecord]:
        with self._lock:
            snapshot = list(self._records)
        return _apply_record_search(snapshot, generator_name, latest)

    def reset(self, generator_name: str) -> None:
        with self._lock:
            self._records = [r for r in self._records if r.name != generator_name]


__all__ = ["MemoryGroupGeneratorStore", "MemoryGroupStore"]
