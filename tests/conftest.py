"""Shared fixtures for the Group Forge test-suite."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator

import pytest

from group_forge.config import ConfigLocator, ConfigRepository, GlobalConfig
from group_forge.generators import GeneratorDescriptor, GeneratorLibrary
from group_forge.groups import AccountSource, GenerationContext, GroupWithData, ValueType
from group_forge.stores import MemoryGroupGeneratorStore, MemoryGroupStore


@pytest.fixture(scope="session", autouse=True)
def isolated_home(tmp_path_factory: pytest.TempPathFactory) -> Iterator[Path]:
    # log files and default directories never land inside the checkout
    home = tmp_path_factory.mktemp("group_forge_home")
    previous = os.environ.get("GROUP_FORGE_HOME")
    os.environ["GROUP_FORGE_HOME"] = str(home)
    yield home
    if previous is None:
        os.environ.pop("GROUP_FORGE_HOME", None)
    else:
        os.environ["GROUP_FORGE_HOME"] = previous


@pytest.fixture
def sample_global_config(tmp_path: Path) -> GlobalConfig:
    return GlobalConfig(
        store_backend="memory",
        store_path=tmp_path / "store" / "groups.db",
        lists_dir=tmp_path / "lists",
        show_progress=False,
    )


@pytest.fixture
def temp_config_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterable[ConfigRepository]:
    monkeypatch.setenv("GROUP_FORGE_HOME", str(tmp_path))
    locator = ConfigLocator(project_root=tmp_path)
    repository = ConfigRepository(locator)
    yield repository


@pytest.fixture
def memory_stores() -> tuple[MemoryGroupStore, MemoryGroupGeneratorStore]:
    return MemoryGroupStore(), MemoryGroupGeneratorStore()


@pytest.fixture
def make_group() -> Callable[..., GroupWithData]:
    def _builder(**overrides: Any) -> GroupWithData:
        base: dict[str, Any] = {
            "name": "example-group",
            "timestamp": 1_700_000_000,
            "value_type": ValueType.INFO,
            "account_sources": [AccountSource.ETHEREUM],
            "data": {"0x" + "a" * 40: 1},
        }
        base.update(overrides)
        return GroupWithData(**base)

    return _builder


@pytest.fixture
def static_generator(make_group) -> Callable[..., GeneratorDescriptor]:
    """Descriptor whose generator returns fixed data and records its calls."""

    def _builder(name: str, data: dict | None = None, **options: Any) -> GeneratorDescriptor:
        calls: list[int] = []

        def generate(context: GenerationContext, _store) -> list[GroupWithData]:
            calls.append(context.timestamp)
            group = make_group(name=name, timestamp=context.timestamp)
            if data is not None:
                group.data = dict(data)
            return [group]

        generate.calls = calls  # type: ignore[attr-defined]
        return GeneratorDescriptor(name=name, generate=generate, **options)

    return _builder


@pytest.fixture
def library_of() -> Callable[..., GeneratorLibrary]:
    def _builder(*descriptors: GeneratorDescriptor) -> GeneratorLibrary:
        return GeneratorLibrary(descriptors)

    return _builder
