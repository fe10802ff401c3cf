"""Generator descriptors and the immutable library they live in."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Iterator

from ..config import GenerationFrequency
from ..errors import UnknownGeneratorError
from ..groups import GenerationContext, GroupWithData

if TYPE_CHECKING:
    from ..stores import BaseGroupStore

GenerateFn = Callable[[GenerationContext, "BaseGroupStore"], list[GroupWithData]]


@dataclass(frozen=True, slots=True)
class GeneratorDescriptor:
    name: str
    generate: GenerateFn = field(repr=False)
    generation_frequency: GenerationFrequency = GenerationFrequency.ONCE
    depends_on: frozenset[str] = frozenset()


class GeneratorLibrary(Mapping[str, GeneratorDescriptor]):
    """Read-only ``name -> descriptor`` mapping, insertion ordered."""

    def __init__(self, generators: Iterable[GeneratorDescriptor] = ()) -> None:
        entries: dict[str, GeneratorDescriptor] = {}
        for descriptor in generators:
            if descriptor.name in entries:
                raise ValueError(f"Duplicate generator name: {descriptor.name}")
            entries[descriptor.name] = descriptor
        for descriptor in entries.values():
            missing = sorted(descriptor.depends_on - entries.keys())
            if missing:
                raise UnknownGeneratorError(
                    f"{descriptor.name} depends on unknown generators: {', '.join(missing)}"
                )
        self._entries = entries

    def __getitem__(self, name: str) -> GeneratorDescriptor:
        try:
            return self._entries[name]
        except KeyError:
            raise UnknownGeneratorError(f"Unknown generator: {name}") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"GeneratorLibrary({list(self._entries)!r})"


__all__ = ["GenerateFn", "GeneratorDescriptor", "GeneratorLibrary"]
