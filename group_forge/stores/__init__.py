"""Store SPI and backends."""

from __future__ import annotations

from ..config import ConfigRepository, GlobalConfig
from ..errors import StoreError
from ..infra import SQLiteManager
from .base import BaseGroupGeneratorStore, BaseGroupStore
from .file_store import FileGroupGeneratorStore, FileGroupStore
from .memory_store import MemoryGroupGeneratorStore, MemoryGroupStore
from .mongo_store import MongoGroupGeneratorStore, MongoGroupStore
from .sqlite_store import SQLiteGroupGeneratorStore, SQLiteGroupStore


def create_stores(
    repository: ConfigRepository,
    storage: SQLiteManager | None = None,
    config: GlobalConfig | None = None,
) -> tuple[BaseGroupStore, BaseGroupGeneratorStore]:
    """Build the group store and generation record store for the configured backend."""

    config = config or repository.load_global_config()
    path = repository.resolve_path(config.store_path)
    if config.store_backend == "sqlite":
        manager = storage or SQLiteManager()
        return SQLiteGroupStore(manager, path), SQLiteGroupGeneratorStore(manager, path)
    if config.store_backend == "file":
        root = path if path.suffix == "" else path.parent
        return FileGroupStore(root), FileGroupGeneratorStore(root)
    if config.store_backend == "mongodb":
        return (
            MongoGroupStore(config.mongo_uri, config.mongo_database),
            MongoGroupGeneratorStore(config.mongo_uri, config.mongo_database),
        )
    if config.store_backend == "memory":
        return MemoryGroupStore(), MemoryGroupGeneratorStore()
    raise StoreError(f"Unsupported store backend: {config.store_backend}")


__all__ = [
    "BaseGroupGeneratorStore",
    "BaseGroupStore",
    "FileGroupGeneratorStore",
    "FileGroupStore",
    "MemoryGroupGeneratorStore",
    "MemoryGroupStore",
    "MongoGroupGeneratorStore",
    "MongoGroupStore",
    "SQLiteGroupGeneratorStore",
    "SQLiteGroupStore",
    "create_stores",
]
