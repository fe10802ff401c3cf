from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from group_forge.config import GenerationFrequency, LocalListConfig
from group_forge.engine import execution_order
from group_forge.engine.ranked_feed import LeaderboardUser
from group_forge.errors import ConfigError
from group_forge.generators.hive import (
    ETHEREUM_ENS_INFLUENCERS,
    ETHEREUM_INFLUENCERS,
    ETHEREUM_TOP_100,
    EnsInfluencersGenerator,
    EthereumInfluencersGenerator,
    ethereum_top_100,
)
from group_forge.generators.library import build_library
from group_forge.generators.local_list import LOCAL_LISTS, LocalListsGenerator
from group_forge.groups import GenerationContext, ResolvedGroupWithData, Tags, ValueType
from group_forge.stores import MemoryGroupStore


def test_ethereum_influencers_reads_cluster_and_closes_client() -> None:
    reader = MagicMock()
    reader.collect_as_handle_set.return_value = {"twitter:alice:1": 1}
    generator = EthereumInfluencersGenerator(lambda: reader, max_items=200)

    groups = generator(GenerationContext(timestamp=9), MemoryGroupStore())

    reader.collect_as_handle_set.assert_called_once_with("Ethereum", 200)
    reader.client.close.assert_called_once()
    assert len(groups) == 1
    group = groups[0]
    assert group.name == ETHEREUM_INFLUENCERS
    assert group.timestamp == 9
    assert group.value_type is ValueType.SCORE
    assert Tags.TWITTER in group.tags
    assert group.data == {"twitter:alice:1": 1}


def test_top_100_takes_first_hundred_of_latest_group(make_group) -> None:
    store = MemoryGroupStore()
    data = {f"twitter:user{i}:{i}": "1" for i in range(150)}
    group = make_group(name=ETHEREUM_INFLUENCERS, timestamp=1, data=data)
    store.save(ResolvedGroupWithData.model_validate(group.model_dump()))

    groups = ethereum_top_100(GenerationContext(timestamp=2), store)

    assert groups[0].name == ETHEREUM_TOP_100
    assert list(groups[0].data) == [f"twitter:user{i}:{i}" for i in range(100)]
    assert set(groups[0].data.values()) == {1}


def test_top_100_without_source_group_is_empty() -> None:
    assert ethereum_top_100(GenerationContext(timestamp=2), MemoryGroupStore()) == []


def test_local_lists_turn_every_file_into_a_group(temp_config_repository) -> None:
    temp_config_repository.save_local_list(
        LocalListConfig(name="core-team", tags=["CoreTeam"], data={"0x" + "d" * 40: 1})
    )
    temp_config_repository.save_local_list(
        LocalListConfig(name="voters", value_type="Score", account_sources=["github"], data={"github:octo": 4})
    )

    groups = LocalListsGenerator(temp_config_repository)(GenerationContext(timestamp=3), MemoryGroupStore())

    assert [group.name for group in groups] == ["core-team", "voters"]
    assert groups[0].tags == [Tags.CORE_TEAM]
    assert groups[1].value_type is ValueType.SCORE
    assert all(group.timestamp == 3 for group in groups)


def test_bundled_library(temp_config_repository) -> None:
    library = build_library(temp_config_repository, lambda: SimpleNamespace())
    assert set(library) == {ETHEREUM_INFLUENCERS, ETHEREUM_TOP_100, ETHEREUM_ENS_INFLUENCERS, LOCAL_LISTS}
    assert library[ETHEREUM_TOP_100].depends_on == frozenset({ETHEREUM_INFLUENCERS})
    assert library[LOCAL_LISTS].generation_frequency is GenerationFrequency.DAILY
    order = [name for name, _level in execution_order(library)]
    assert order.index(ETHEREUM_INFLUENCERS) < order.index(ETHEREUM_TOP_100)


def test_ens_influencers_keeps_ranked_names(temp_config_repository) -> None:
    temp_config_repository.leaderboard_path("ens-leaderboard").write_text(
        "vitalik.eth: '@VitalikButerin'\nnobody.eth: nobody\nbroken.eth: broken\n", encoding="utf-8"
    )
    reader = MagicMock()
    # failed lookups come back as empty strings
    reader.accounts_within_rank.return_value = ["vitalik.eth", ""]
    generator = EnsInfluencersGenerator(lambda: reader, temp_config_repository, max_rank=50)

    groups = generator(GenerationContext(timestamp=4), MemoryGroupStore())

    users, max_rank = reader.accounts_within_rank.call_args.args
    assert max_rank == 50
    assert LeaderboardUser(ens="vitalik.eth", handle="VitalikButerin") in users
    assert len(users) == 3
    reader.client.close.assert_called_once()
    assert groups[0].name == ETHEREUM_ENS_INFLUENCERS
    assert groups[0].tags == [Tags.ENS, Tags.WEB3_SOCIAL]
    assert groups[0].data == {"vitalik.eth": 1}


def test_ens_influencers_without_leaderboard_skips_the_feed(temp_config_repository) -> None:
    reader = MagicMock()
    generator = EnsInfluencersGenerator(lambda: reader, temp_config_repository)

    assert generator(GenerationContext(timestamp=4), MemoryGroupStore()) == []
    reader.accounts_within_rank.assert_not_called()


def test_local_lists_surface_invalid_files_as_config_errors(temp_config_repository) -> None:
    path = temp_config_repository.list_path("broken")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("name: broken\ntags: [NotATag]\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="broken.yaml"):
        LocalListsGenerator(temp_config_repository)(GenerationContext(timestamp=3), MemoryGroupStore())
