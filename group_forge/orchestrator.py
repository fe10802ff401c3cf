"""Run every generator of the library in dependency order."""

from __future__ import annotations

from threading import Lock
from typing import Callable, Mapping

from .config import GenerationFrequency
from .engine import GenerationPipeline, GenerationSummary, execution_order
from .groups import FetchedValue
from .logging_conf import configure_logging


class AllGroupsScheduler:
    """Sequential runner over the whole library.

    Generators run one at a time, most depended-upon first, so a generator
    always sees the groups its dependencies just wrote.
    """

    def __init__(self, pipeline: GenerationPipeline) -> None:
        self.pipeline = pipeline
        self.logger = configure_logging().bind(component="orchestrator")
        self._run_lock = Lock()

    @property
    def library(self):
        return self.pipeline.library

    def planned_order(self, frequency: GenerationFrequency | None = None) -> list[str]:
        ordered = execution_order(self.library)
        self.logger.debug("dependency_levels", levels=dict(ordered))
        names = [name for name, _level in ordered]
        if frequency:
            names = [
                name for name in names if self.library[name].generation_frequency == frequency
            ]
        return names

    def run_all(
        self,
        frequency: GenerationFrequency | None = None,
        timestamp: int | None = None,
        additional_data: Mapping[str, FetchedValue] | None = None,
        first_generation_only: bool = False,
        on_generated: Callable[[GenerationSummary], None] | None = None,
    ) -> list[GenerationSummary]:
        names = self.planned_order(frequency)
        self.logger.info(
            "run_all_started",
            frequency=frequency.value if frequency else None,
            generators=len(names),
        )
        summaries: list[GenerationSummary] = []
        # runs triggered from scheduler threads queue up behind each other
        with self._run_lock:
            for name in names:
                summary = self.pipeline.run(
                    name,
                    timestamp=timestamp,
                    additional_data=additional_data,
                    first_generation_only=first_generation_only,
                )
                summaries.append(summary)
                if on_generated is not None:
                    on_generated(summary)
        return summaries


__all__ = ["AllGroupsScheduler"]
