"""Assemble the generator library shipped with the package."""

from __future__ import annotations

from typing import Callable

from ..config import ConfigRepository, GenerationFrequency
from ..engine.ranked_feed import RankedFeedReader
from .hive import (
    ETHEREUM_ENS_INFLUENCERS,
    ETHEREUM_INFLUENCERS,
    ETHEREUM_TOP_100,
    EnsInfluencersGenerator,
    EthereumInfluencersGenerator,
    ethereum_top_100,
)
from .local_list import LOCAL_LISTS, LocalListsGenerator
from .registry import GeneratorDescriptor, GeneratorLibrary


def build_library(
    repository: ConfigRepository, reader_factory: Callable[[], RankedFeedReader]
) -> GeneratorLibrary:
    return GeneratorLibrary(
        [
            GeneratorDescriptor(
                name=ETHEREUM_INFLUENCERS,
                generate=EthereumInfluencersGenerator(reader_factory),
                generation_frequency=GenerationFrequency.WEEKLY,
            ),
            GeneratorDescriptor(
                name=ETHEREUM_TOP_100,
                generate=ethereum_top_100,
                generation_frequency=GenerationFrequency.WEEKLY,
                depends_on=frozenset({ETHEREUM_INFLUENCERS}),
            ),
            GeneratorDescriptor(
                name=ETHEREUM_ENS_INFLUENCERS,
                generate=EnsInfluencersGenerator(reader_factory, repository),
                generation_frequency=GenerationFrequency.WEEKLY,
            ),
            GeneratorDescriptor(
                name=LOCAL_LISTS,
                generate=LocalListsGenerator(repository),
                generation_frequency=GenerationFrequency.DAILY,
            ),
        ]
    )


__all__ = ["build_library"]
