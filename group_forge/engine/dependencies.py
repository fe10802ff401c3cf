"""Execution order of generators from their ``depends_on`` relation."""

from __future__ import annotations

from typing import Iterable

from ..errors import DependencyCycleError
from ..generators.registry import GeneratorLibrary


def levels_of(
    names: Iterable[str],
    library: GeneratorLibrary,
    levels: dict[str, int] | None = None,
    _path: tuple[str, ...] = (),
) -> dict[str, int]:
    """Count visits per generator, dependencies first.

    Each name visits its dependencies recursively, then adds one to its own
    counter. Nothing is memoised: a generator reached through several paths
    is counted once per path, so widely shared dependencies get the highest
    levels. A name already on the current path raises ``DependencyCycleError``.
    """

    levels = {} if levels is None else levels
    for name in names:
        if name in _path:
            raise DependencyCycleError(list(_path[_path.index(name):]) + [name])
        generator = library[name]
        if generator.depends_on:
            levels_of(sorted(generator.depends_on), library, levels, _path + (name,))
        levels[name] = levels.get(name, 0) + 1
    return levels


def execution_order(library: GeneratorLibrary) -> list[tuple[str, int]]:
    """All generators as ``(name, level)`` sorted by level, highest first."""

    levels = levels_of(list(library), library)
    return sorted(levels.items(), key=lambda entry: entry[1], reverse=True)


__all__ = ["execution_order", "levels_of"]
