"""Groups maintained by hand as YAML lists."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..config import ConfigRepository
from ..groups import GenerationContext, GroupWithData

if TYPE_CHECKING:
    from ..stores import BaseGroupStore

LOCAL_LISTS = "local-lists"


class LocalListsGenerator:
    def __init__(self, repository: ConfigRepository) -> None:
        self.repository = repository

    def __call__(self, context: GenerationContext, group_store: "BaseGroupStore") -> list[GroupWithData]:
        return [
            GroupWithData(
                name=local_list.name,
                timestamp=context.timestamp,
                value_type=local_list.value_type,
                account_sources=local_list.account_sources,
                tags=local_list.tags,
                data=dict(local_list.data),
            )
            for local_list in self.repository.list_local_lists()
        ]


__all__ = ["LOCAL_LISTS", "LocalListsGenerator"]
