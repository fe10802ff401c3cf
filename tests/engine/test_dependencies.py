from __future__ import annotations

import pytest

from group_forge.engine import execution_order, levels_of
from group_forge.errors import DependencyCycleError, UnknownGeneratorError
from group_forge.generators import GeneratorDescriptor, GeneratorLibrary


def _noop(_context, _store):
    return []


def _descriptor(name: str, *depends_on: str) -> GeneratorDescriptor:
    return GeneratorDescriptor(name=name, generate=_noop, depends_on=frozenset(depends_on))


def test_independent_generators_all_get_level_one() -> None:
    library = GeneratorLibrary([_descriptor("a"), _descriptor("b"), _descriptor("c")])
    assert levels_of(list(library), library) == {"a": 1, "b": 1, "c": 1}
    assert execution_order(library) == [("a", 1), ("b", 1), ("c", 1)]


def test_levels_accumulate_once_per_path() -> None:
    library = GeneratorLibrary([_descriptor("a"), _descriptor("b", "a"), _descriptor("c", "a", "b")])
    assert levels_of(list(library), library) == {"a": 4, "b": 2, "c": 1}
    assert [name for name, _level in execution_order(library)] == ["a", "b", "c"]


def test_dependency_runs_before_dependent() -> None:
    library = GeneratorLibrary(
        [
            _descriptor("top-100", "influencers"),
            _descriptor("influencers"),
            _descriptor("lists"),
        ]
    )
    order = [name for name, _level in execution_order(library)]
    assert order.index("influencers") < order.index("top-100")


def test_cycle_is_reported() -> None:
    library = GeneratorLibrary([_descriptor("a", "b"), _descriptor("b", "a")])
    with pytest.raises(DependencyCycleError) as excinfo:
        execution_order(library)
    assert excinfo.value.cycle[0] == excinfo.value.cycle[-1]


def test_self_dependency_is_a_cycle() -> None:
    library = GeneratorLibrary([_descriptor("a", "a")])
    with pytest.raises(DependencyCycleError):
        levels_of(["a"], library)


def test_unknown_dependency_rejected_by_library() -> None:
    with pytest.raises(UnknownGeneratorError):
        GeneratorLibrary([_descriptor("a", "missing")])


def test_duplicate_names_rejected() -> None:
    with pytest.raises(ValueError):
        GeneratorLibrary([_descriptor("a"), _descriptor("a")])
