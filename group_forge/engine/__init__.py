"""Engine components: fetch → generate → enrich → persist."""

from .additional_data import parse_additional_data
from .dependencies import execution_order, levels_of
from .fetcher import ApiClient, FetchRequest, FetchResponse
from .pipeline import GenerationPipeline, GenerationSummary
from .ranked_feed import LeaderboardUser, RankedFeedReader, RankedSocialAccount
from .thread_pool import BoundedConcurrencyFetcher, ItemOutcome, map_with_concurrency

__all__ = [
    "ApiClient",
    "BoundedConcurrencyFetcher",
    "FetchRequest",
    "FetchResponse",
    "GenerationPipeline",
    "GenerationSummary",
    "ItemOutcome",
    "LeaderboardUser",
    "RankedFeedReader",
    "RankedSocialAccount",
    "execution_order",
    "levels_of",
    "map_with_concurrency",
    "parse_additional_data",
]
