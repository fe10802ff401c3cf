"""Generators backed by the ranked influencer feed."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import structlog

from ..engine.ranked_feed import LeaderboardUser, RankedFeedReader
from ..groups import AccountSource, GenerationContext, GroupWithData, Tags, ValueType

if TYPE_CHECKING:
    from ..config import ConfigRepository
    from ..stores import BaseGroupStore

ETHEREUM_INFLUENCERS = "hive-ethereum-influencers"
ETHEREUM_TOP_100 = "hive-ethereum-top-100"
ETHEREUM_ENS_INFLUENCERS = "hive-ethereum-ens-influencers"
ENS_LEADERBOARD = "ens-leaderboard"

logger = structlog.get_logger("group_forge.generators.hive")


class EthereumInfluencersGenerator:
    """Twitter accounts ranked in the Ethereum cluster."""

    def __init__(self, reader_factory: Callable[[], RankedFeedReader], max_items: int = 1000) -> None:
        self.reader_factory = reader_factory
        self.max_items = max_items

    def __call__(self, context: GenerationContext, group_store: "BaseGroupStore") -> list[GroupWithData]:
        reader = self.reader_factory()
        try:
            data = reader.collect_as_handle_set("Ethereum", self.max_items)
        finally:
            reader.client.close()
        return [
            GroupWithData(
                name=ETHEREUM_INFLUENCERS,
                timestamp=context.timestamp,
                value_type=ValueType.SCORE,
                account_sources=[AccountSource.TWITTER],
                tags=[Tags.TWITTER, Tags.WEB3_SOCIAL],
                data=data,
            )
        ]


def ethereum_top_100(context: GenerationContext, group_store: "BaseGroupStore") -> list[GroupWithData]:
    """First hundred accounts of the latest influencer group, in rank order."""

    source = group_store.latest(ETHEREUM_INFLUENCERS)
    if source is None:
        logger.warning("dependency_group_missing", group=ETHEREUM_INFLUENCERS)
        return []
    top = list(source.data)[:100]
    return [
        GroupWithData(
            name=ETHEREUM_TOP_100,
            timestamp=context.timestamp,
            value_type=ValueType.INFO,
            account_sources=[AccountSource.TWITTER],
            tags=[Tags.TWITTER, Tags.WEB3_SOCIAL],
            data={handle: 1 for handle in top},
        )
    ]


class EnsInfluencersGenerator:
    """ENS names whose Twitter account ranks in the Ethereum cluster.

    Candidates come from the leaderboard file ``leaderboard``, which maps each
    ENS name to its Twitter handle. Lookups run concurrently and candidates
    whose lookup failed or who rank too low are left out.
    """

    def __init__(
        self,
        reader_factory: Callable[[], RankedFeedReader],
        repository: "ConfigRepository",
        leaderboard: str = ENS_LEADERBOARD,
        max_rank: int = 500,
    ) -> None:
        self.reader_factory = reader_factory
        self.repository = repository
        self.leaderboard = leaderboard
        self.max_rank = max_rank

    def __call__(self, context: GenerationContext, group_store: "BaseGroupStore") -> list[GroupWithData]:
        candidates = self.repository.load_leaderboard(self.leaderboard)
        if not candidates:
            logger.warning("leaderboard_empty", leaderboard=self.leaderboard)
            return []
        users = [LeaderboardUser(ens=ens, handle=handle) for ens, handle in candidates.items()]
        reader = self.reader_factory()
        try:
            ranked = reader.accounts_within_rank(users, self.max_rank)
        finally:
            reader.client.close()
        return [
            GroupWithData(
                name=ETHEREUM_ENS_INFLUENCERS,
                timestamp=context.timestamp,
                value_type=ValueType.INFO,
                account_sources=[AccountSource.ETHEREUM],
                tags=[Tags.ENS, Tags.WEB3_SOCIAL],
                data={ens: 1 for ens in ranked if ens},
            )
        ]


__all__ = [
    "ENS_LEADERBOARD",
    "ETHEREUM_ENS_INFLUENCERS",
    "ETHEREUM_INFLUENCERS",
    "ETHEREUM_TOP_100",
    "EnsInfluencersGenerator",
    "EthereumInfluencersGenerator",
    "ethereum_top_100",
]
