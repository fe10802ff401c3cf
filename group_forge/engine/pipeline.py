"""Run one generator and hand its enriched groups to the stores."""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Mapping

import structlog

from ..generators.registry import GeneratorLibrary
from ..groups import (
    FetchedData,
    FetchedValue,
    GenerationContext,
    GenerationRecord,
    GroupWithData,
    Properties,
    ResolvedGroupWithData,
)
from ..resolver import GlobalResolver
from ..stores import BaseGroupGeneratorStore, BaseGroupStore
from .additional_data import ETHEREUM_ADDRESS

LoggerFactory = Callable[[str], structlog.BoundLogger]


def _stringify(value: FetchedValue) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_group_data(data: Mapping[str, FetchedValue]) -> FetchedData:
    """Lower-case ethereum address keys and turn every value into a string."""

    formatted: FetchedData = {}
    for key, value in data.items():
        if ETHEREUM_ADDRESS.fullmatch(key):
            key = key.lower()
        formatted[key] = _stringify(value)
    return formatted


def add_additional_data(
    data: FetchedData, additional_data: Mapping[str, FetchedValue] | None
) -> FetchedData:
    """Merge ``additional_data`` over ``data``; additional entries win."""

    if additional_data is None:
        return data
    return {**data, **additional_data}


def compute_properties(data: Mapping[str, FetchedValue]) -> Properties:
    tier_distribution = Counter(_stringify(value) for value in data.values())
    return Properties(accounts_number=len(data), tier_distribution=dict(tier_distribution))


def create_context(timestamp: int | None = None) -> GenerationContext:
    return GenerationContext(timestamp=timestamp if timestamp is not None else int(time.time()))


@dataclass(slots=True)
class GenerationSummary:
    generator_name: str
    timestamp: int | None
    skipped: bool = False
    groups: list[str] = field(default_factory=list)
    accounts: int = 0


class GenerationPipeline:
    """Generate, enrich and persist the groups of one generator."""

    def __init__(
        self,
        library: GeneratorLibrary,
        group_store: BaseGroupStore,
        generator_store: BaseGroupGeneratorStore,
        resolver: GlobalResolver,
        logger_factory: LoggerFactory | None = None,
    ) -> None:
        self.library = library
        self.group_store = group_store
        self.generator_store = generator_store
        self.resolver = resolver
        self._logger_factory = logger_factory or (
            lambda name: structlog.get_logger("group_forge.pipeline").bind(generator=name)
        )

    def run(
        self,
        generator_name: str,
        timestamp: int | None = None,
        additional_data: Mapping[str, FetchedValue] | None = None,
        first_generation_only: bool = False,
    ) -> GenerationSummary:
        generator = self.library[generator_name]
        logger = self._logger_factory(generator_name)

        last_generations = self.generator_store.search(generator_name, latest=True)
        if first_generation_only and last_generations:
            last = last_generations[0]
            logger.info(
                "generation_skipped",
                generated_at=datetime.fromtimestamp(last.timestamp, tz=timezone.utc).isoformat(),
            )
            return GenerationSummary(generator_name, last.timestamp, skipped=True)

        context = create_context(timestamp)
        logger.info("generation_started", timestamp=context.timestamp)
        groups = generator.generate(context, self.group_store)

        summary = GenerationSummary(generator_name, context.timestamp)
        for group in groups:
            self._save_group(group, generator_name, additional_data, logger)
            summary.groups.append(group.name)
            summary.accounts += len(group.data)

        self.generator_store.save(GenerationRecord(name=generator_name, timestamp=context.timestamp))
        logger.info("generation_recorded", timestamp=context.timestamp, groups=len(summary.groups))
        return summary

    def _save_group(
        self,
        group: GroupWithData,
        generator_name: str,
        additional_data: Mapping[str, FetchedValue] | None,
        logger: structlog.BoundLogger,
    ) -> None:
        group.generated_by = generator_name
        if additional_data is not None:
            logger.info("additional_data_inserted", group=group.name, count=len(additional_data))
        group.data = add_additional_data(group.data, additional_data)
        resolved_identifier_data = self.resolver.resolve_all(group.data)
        group.data = format_group_data(group.data)
        group.properties = compute_properties(group.data)

        self.group_store.save(
            ResolvedGroupWithData.model_validate(
                {**group.model_dump(), "resolved_identifier_data": resolved_identifier_data}
            )
        )
        logger.info("group_saved", group=group.name, accounts=len(group.data))


__all__ = [
    "GenerationPipeline",
    "GenerationSummary",
    "add_additional_data",
    "compute_properties",
    "create_context",
    "format_group_data",
]
