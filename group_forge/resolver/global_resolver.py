"""Cross-reference raw group identifiers against known identifier systems."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, Sequence

import structlog

from ..groups import FetchedData


class IdentifierResolver(Protocol):
    """Resolve the identifiers a resolver recognises."""

    def matches(self, identifier: str) -> bool: ...

    def resolve(self, identifiers: FetchedData) -> FetchedData: ...


@dataclass(frozen=True)
class PatternResolver:
    """Accept identifiers matching ``pattern``, optionally lower-cased."""

    name: str
    pattern: re.Pattern[str]
    lower_case: bool = False

    def matches(self, identifier: str) -> bool:
        return self.pattern.fullmatch(identifier) is not None

    def resolve(self, identifiers: FetchedData) -> FetchedData:
        resolved: FetchedData = {}
        for identifier, value in identifiers.items():
            key = identifier.lower() if self.lower_case else identifier
            resolved[key] = value
        return resolved


def default_resolvers() -> list[PatternResolver]:
    return [
        PatternResolver("ethereum", re.compile(r"0x[a-fA-F0-9]{40}"), lower_case=True),
        PatternResolver("twitter", re.compile(r"twitter:[A-Za-z0-9_]+(:\d+)?"), lower_case=True),
        PatternResolver("github", re.compile(r"github:[A-Za-z0-9-]+(:\d+)?"), lower_case=True),
        PatternResolver("ens", re.compile(r"[a-z0-9-]+(\.[a-z0-9-]+)*\.eth"), lower_case=True),
    ]


class GlobalResolver:
    """Dispatch identifiers to the first resolver that recognises them.

    Identifiers nobody recognises are left out of the result. The input
    mapping is never mutated.
    """

    def __init__(
        self,
        resolvers: Sequence[IdentifierResolver] | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.resolvers = list(resolvers) if resolvers is not None else default_resolvers()
        self.logger = logger or structlog.get_logger("group_forge.resolver")

    def resolve_all(self, data: FetchedData) -> FetchedData:
        buckets: list[FetchedData] = [{} for _ in self.resolvers]
        unresolved = 0
        for identifier, value in data.items():
            for index, resolver in enumerate(self.resolvers):
                if resolver.matches(identifier):
                    buckets[index][identifier] = value
                    break
            else:
                unresolved += 1
        resolved: FetchedData = {}
        for resolver, bucket in zip(self.resolvers, buckets):
            if bucket:
                resolved.update(resolver.resolve(bucket))
        if unresolved:
            self.logger.debug("identifiers_unresolved", count=unresolved)
        return resolved


__all__ = ["GlobalResolver", "IdentifierResolver", "PatternResolver", "default_resolvers"]
