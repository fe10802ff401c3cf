"""Store Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..groups import GenerationRecord, GroupSearch, ResolvedGroupWithData


class BaseGroupStore(ABC):
    """Persist resolved groups and serve them back to generators."""

    @abstractmethod
    def save(self, group: ResolvedGroupWithData) -> None:
        """Persist a single group atomically."""

    @abstractmethod
    def search(self, query: GroupSearch) -> list[ResolvedGroupWithData]:
        """Return matching groups, most recent first."""

    def latest(self, group_name: str) -> ResolvedGroupWithData | None:
        found = self.search(GroupSearch(group_name=group_name, latest=True))
        return found[0] if found else None

    def close(self) -> None:
        """Release underlying resources."""


class BaseGroupGeneratorStore(ABC):
    """Append-only log of successful generator runs."""

    @abstractmethod
    def save(self, record: GenerationRecord) -> None:
        """Append a generation record."""

    @abstractmethod
    def search(self, generator_name: str, latest: bool = False) -> list[GenerationRecord]:
        """Return records for a generator, most recent first."""

    @abstractmethod
    def reset(self, generator_name: str) -> None:
        """Forget every record of a generator."""

    def close(self) -> None:
        """Release underlying resources."""


def _apply_search(
    groups: list[ResolvedGroupWithData], query: GroupSearch
) -> list[ResolvedGroupWithData]:
    matching = [group for group in groups if group.name == query.group_name]
    if query.timestamp is not None:
        matching = [group for group in matching if group.timestamp == query.timestamp]
    # stable sort keeps later saves first among equal timestamps
    matching = sorted(reversed(matching), key=lambda group: group.timestamp, reverse=True)
    return matching[:1] if query.latest else matching


def _apply_record_search(
    records: list[GenerationRecord], generator_name: str, latest: bool
) -> list[GenerationRecord]:
    matching = [record for record in records if record.name == generator_name]
    matching = sorted(reversed(matching), key=lambda record: record.timestamp, reverse=True)
    return matching[:1] if latest else matching


__all__ = ["BaseGroupGeneratorStore", "BaseGroupStore"]
