"""Ranked influencer feed: paginated reads and per-account rank lookups."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterator, Sequence

import structlog

from ..errors import FetchError
from ..groups import FetchedData
from ..ui import DownloadStatus
from .fetcher import ApiClient
from .thread_pool import BoundedConcurrencyFetcher

PAGE_SIZE = 50


@dataclass(frozen=True, slots=True)
class RankedSocialAccount:
    id: int
    rank: int
    follower_count: int
    name: str
    handle: str


@dataclass(frozen=True, slots=True)
class LeaderboardUser:
    """An account known by its ENS name and Twitter handle."""

    ens: str
    handle: str


class RankedFeedReader:
    """Read ranked accounts of a collection (a Hive "cluster") page by page."""

    def __init__(
        self,
        client: ApiClient,
        status: DownloadStatus | None = None,
        max_in_flight: int = 10,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.client = client
        self.status = status or DownloadStatus(enabled=False)
        self.max_in_flight = max_in_flight
        self.logger = logger or structlog.get_logger("group_forge.ranked_feed")

    def read(
        self, collection_id: str, max_items: int = 10000, min_followers: int = 0
    ) -> Iterator[RankedSocialAccount]:
        """Yield accounts with ``follower_count >= min_followers`` and ``rank <= max_items``.

        Pages are fetched one after another and at most ``ceil(max_items / 50)``
        pages are requested (always at least one), even when sparse ranks mean
        fewer than ``max_items`` accounts qualified. Each call starts again
        from the first page. A transport or auth error aborts the iteration.
        """

        page_count = max(1, math.ceil(max_items / PAGE_SIZE))
        url = f"{self.client.base_url}influence/clusters/{collection_id}/influencers/"
        downloaded = 0
        try:
            for page in range(page_count):
                payload = self.client.get_json(
                    url, params={"page": page, "sort_by": "rank", "sort_direction": "asc"}
                )
                for raw in payload.get("influencers", []):
                    account = self._to_account(raw)
                    if account.follower_count >= min_followers and account.rank <= max_items:
                        downloaded += 1
                        self.status.update(downloaded)
                        yield account
        finally:
            self.status.close()
        self.logger.info(
            "feed_downloaded", collection=collection_id, pages=page_count, accounts=downloaded
        )

    def collect_as_handle_set(
        self, collection_id: str, max_items: int = 10000, default_value: int = 1
    ) -> FetchedData:
        accounts: FetchedData = {}
        for account in self.read(collection_id, max_items):
            accounts[f"twitter:{account.handle}:{account.id}"] = default_value
        return accounts

    def accounts_within_rank(
        self,
        users: Sequence[LeaderboardUser],
        max_rank: int,
        collection_names: Sequence[str] = ("Ethereum",),
    ) -> list[str]:
        """Return each user's ENS name if ranked below ``max_rank`` in one of the collections.

        Users that are unknown, unranked or whose lookup failed map to ``""``.
        """

        def lookup(user: LeaderboardUser) -> str:
            payload = self.client.get_json(
                f"{self.client.base_url}influence/influencers/twitter:{user.handle}/"
            )
            clusters = payload.get("clusters") or []
            scores = payload.get("latest_scores") or []
            for index, cluster in enumerate(clusters):
                if cluster.get("name") in collection_names and index < len(scores):
                    if int(scores[index]["rank"]) < max_rank:
                        return user.ens
            return ""

        fetcher = BoundedConcurrencyFetcher(
            max_in_flight=self.max_in_flight, thread_name_prefix="hive", logger=self.logger
        )
        return [outcome.unwrap_or("") for outcome in fetcher.map(users, lookup)]

    @staticmethod
    def _to_account(raw: dict[str, Any]) -> RankedSocialAccount:
        try:
            social = raw["identity"]["social_accounts"][0]["social_account"]
            return RankedSocialAccount(
                id=social["id"],
                rank=int(raw["personal_rank"]),
                follower_count=int(social["followers_count"]),
                name=social.get("name", ""),
                handle=social["screen_name"],
            )
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise FetchError(f"Malformed influencer entry: {exc}") from exc


__all__ = ["LeaderboardUser", "PAGE_SIZE", "RankedFeedReader", "RankedSocialAccount"]
