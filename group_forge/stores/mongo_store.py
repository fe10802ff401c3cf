"""MongoDB store implementation."""

from __future__ import annotations

from ..groups import GenerationRecord, GroupSearch, ResolvedGroupWithData
from .base import BaseGroupGeneratorStore, BaseGroupStore

try:  # noqa: SIM105
    from pymongo import DESCENDING, MongoClient
except Exception as exc:  # noqa: BLE001
    MongoClient = None  # type: ignore[assignment]
    DESCENDING = -1
    _IMPORT_ERROR = exc
else:
    _IMPORT_ERROR = None


def _client(uri: str):
    if MongoClient is None:  # pragma: no cover - import guard
        raise RuntimeError(f"pymongo is required for the mongodb store backend: {_IMPORT_ERROR}")
    return MongoClient(uri)


class MongoGroupStore(BaseGroupStore):
    """Write groups into a MongoDB collection."""

    def __init__(self, uri: str, database: str, collection: str = "groups") -> None:
        self.client = _client(uri)
        self.collection = self.client[database][collection]

    def save(self, group: ResolvedGroupWithData) -> None:
        self.collection.insert_one(group.model_dump(mode="json"))

    def search(self, query: GroupSearch) -> list[ResolvedGroupWithData]:
        criteria: dict[str, object] = {"name": query.group_name}
        if query.timestamp is not None:
            criteria["timestamp"] = query.timestamp
        cursor = self.collection.find(criteria, {"_id": False}).sort("timestamp", DESCENDING)
        if query.latest:
            cursor = cursor.limit(1)
        return [ResolvedGroupWithData.model_validate(doc) for doc in cursor]

    def close(self) -> None:
        self.client.close()


class MongoGroupGeneratorStore(BaseGroupGeneratorStore):
    def __init__(self, uri: str, database: str, collection: str = "generation_records") -> None:
        self.client = _client(uri)
        self.collection = self.client[database][collection]

    def save(self, record: GenerationRecord) -> None:
        self.collection.insert_one({"name": record.name, "timestamp": record.timestamp})

    def search(self, generator_name: str, latest: bool = False) -> list[GenerationRecord]:
        cursor = self.collection.find({"name": generator_name}, {"_id": False}).sort(
            "timestamp", DESCENDING
        )
        if latest:
            cursor = cursor.limit(1)
        return [GenerationRecord(name=doc["name"], timestamp=int(doc["timestamp"])) for doc in cursor]

    def reset(self, generator_name: str) -> None:
        self.collection.delete_many({"name": generator_name})

    def close(self) -> None:
        self.client.close()


__all__ = ["MongoGroupGeneratorStore", "MongoGroupStore"]
