"""Bounded worker pool running one lookup per input item."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Generic, Sequence, TypeVar

import structlog

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class ItemOutcome(Generic[T, R]):
    """Result of one item: either a value or the error it raised."""

    item: T
    value: R | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: R) -> R:
        return self.value if self.error is None else default  # type: ignore[return-value]


class BoundedConcurrencyFetcher:
    """Run ``operation`` over items with at most ``max_in_flight`` calls outstanding.

    Items are queued on a fixed-size executor, so a new item is admitted each
    time a running one completes. Outcomes keep input order regardless of
    completion order. A failing item becomes an error outcome and never aborts
    the batch; there is no cancellation once the batch has started.
    """

    def __init__(
        self,
        max_in_flight: int = 10,
        thread_name_prefix: str = "fetch",
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        if max_in_flight < 1:
            raise ValueError("max_in_flight must be >= 1")
        self.max_in_flight = max_in_flight
        self.thread_name_prefix = thread_name_prefix
        self.logger = logger or structlog.get_logger("group_forge.thread_pool")

    def map(self, items: Sequence[T], operation: Callable[[T], R]) -> list[ItemOutcome[T, R]]:
        if not items:
            return []

        def _guarded(item: T) -> ItemOutcome[T, R]:
            try:
                return ItemOutcome(item=item, value=operation(item))
            except Exception as exc:  # noqa: BLE001
                self.logger.warning("item_failed", item=str(item), error=str(exc))
                return ItemOutcome(item=item, error=exc)

        with ThreadPoolExecutor(
            max_workers=self.max_in_flight, thread_name_prefix=self.thread_name_prefix
        ) as executor:
            futures = [executor.submit(_guarded, item) for item in items]
            return [future.result() for future in futures]


def map_with_concurrency(
    items: Sequence[T], operation: Callable[[T], R], max_in_flight: int
) -> list[ItemOutcome[T, R]]:
    return BoundedConcurrencyFetcher(max_in_flight=max_in_flight).map(items, operation)


__all__ = ["BoundedConcurrencyFetcher", "ItemOutcome", "map_with_concurrency"]
