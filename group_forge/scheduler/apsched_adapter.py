"""APScheduler wrapper running the library per generation frequency."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.date import DateTrigger

from ..config import GenerationFrequency, GlobalConfig
from ..logging_conf import configure_logging


class APSchedulerAdapter:
    """Manage one APScheduler job per generation frequency."""

    def __init__(self) -> None:
        self.scheduler = BackgroundScheduler()
        self.logger = configure_logging().bind(component="scheduler")
        self.started = False

    def start(self) -> None:
        if not self.started:
            self.scheduler.start()
            self.started = True
            self.logger.info("apscheduler_started")

    def shutdown(self) -> None:
        if self.started:
            self.scheduler.shutdown(wait=False)
            self.started = False
            self.logger.info("apscheduler_stopped")

    def schedule_frequencies(
        self, config: GlobalConfig, callback: Callable[[GenerationFrequency], None]
    ) -> None:
        """Register every frequency; ``once`` generators run right away."""

        self.schedule_frequency(GenerationFrequency.ONCE, None, callback)
        for frequency, expression in config.schedules.items():
            self.schedule_frequency(frequency, expression, callback)

    def schedule_frequency(
        self,
        frequency: GenerationFrequency,
        expression: str | None,
        callback: Callable[[GenerationFrequency], None],
    ) -> None:
        trigger = self._build_trigger(frequency, expression)
        job_id = f"frequency::{frequency.value}"
        # max_instances=1 keeps runs of one frequency from overlapping
        self.scheduler.add_job(
            callback,
            trigger=trigger,
            id=job_id,
            args=[frequency],
            replace_existing=True,
            max_instances=1,
        )
        self.logger.info("job_scheduled", frequency=frequency.value, expression=expression)

    def remove_frequency(self, frequency: GenerationFrequency) -> None:
        job_id = f"frequency::{frequency.value}"
        try:
            self.scheduler.remove_job(job_id)
        except Exception:  # noqa: BLE001
            self.logger.warning("job_remove_failed", frequency=frequency.value)

    def _build_trigger(self, frequency: GenerationFrequency, expression: str | None):
        if frequency is GenerationFrequency.ONCE:
            return DateTrigger(run_date=datetime.now(timezone.utc))
        if not expression:
            raise ValueError(f"Frequency {frequency.value} requires a cron expression")
        return CronTrigger.from_crontab(expression)

    def list_jobs(self) -> list[dict]:
        jobs = []
        for job in self.scheduler.get_jobs():
            jobs.append(
                {
                    "id": job.id,
                    "next_run_time": getattr(job, "next_run_time", None),
                    "trigger": str(job.trigger),
                }
            )
        return jobs


__all__ = ["APSchedulerAdapter"]
