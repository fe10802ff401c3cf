"""Terminal progress helpers with Rich-based rendering."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.errors import LiveError
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.status import Status


class DownloadStatus:
    """Status line counting items pulled from a paginated feed."""

    def __init__(self, enabled: bool = True, console: Console | None = None, label: str = "downloading") -> None:
        self.console = console or Console()
        # non-interactive consoles stay silent to avoid one line per item
        self.enabled = enabled and self.console.is_terminal
        self.label = label
        self.count = 0
        self._status: Status | None = None

    def update(self, count: int) -> None:
        self.count = count
        if not self.enabled:
            return
        message = f"{self.label} ... ({count})"
        if self._status is None:
            status = self.console.status(message)
            try:
                status.start()
            except LiveError:
                # the console already renders the generate-all progress bar
                self.enabled = False
                return
            self._status = status
        else:
            self._status.update(message)

    def close(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None


@dataclass
class GenerationState:
    total: int
    generated: int = 0
    skipped: int = 0
    current: str | None = None


class GenerationProgress:
    """Progress bar over the generators of a scheduled run."""

    def __init__(self, enabled: bool = True, console: Console | None = None) -> None:
        self.enabled = enabled
        self._console = console
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self.state: GenerationState | None = None

    def start(self, total: int) -> None:
        self.state = GenerationState(total=total)
        if not self.enabled:
            return
        console = self._console or Console()
        if not console.is_terminal:
            self.enabled = False
            return
        self._progress = Progress(
            SpinnerColumn(style="cyan"),
            TextColumn("[bold blue]{task.fields[current]:<32}", justify="left"),
            BarColumn(bar_width=None, complete_style="green", finished_style="green"),
            TaskProgressColumn(show_speed=False),
            TimeElapsedColumn(),
            TextColumn("[green]✓{task.fields[generated]:>3}", justify="right"),
            TextColumn("[yellow]↺{task.fields[skipped]:>3}", justify="right"),
            console=console,
            transient=True,
        )
        try:
            self._progress.__enter__()
        except LiveError:
            self.enabled = False
            self._progress = None
            return
        self._task_id = self._progress.add_task(
            "generate", total=total, current="waiting…", generated=0, skipped=0
        )

    def advance(self, generator_name: str, skipped: bool = False) -> None:
        if not self.state:
            raise RuntimeError("GenerationProgress.start must be called before advance")
        self.state.current = generator_name
        if skipped:
            self.state.skipped += 1
        else:
            self.state.generated += 1
        if self._progress is not None and self._task_id is not None:
            self._progress.update(
                self._task_id,
                advance=1,
                current=generator_name,
                generated=self.state.generated,
                skipped=self.state.skipped,
            )

    def close(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress.__exit__(None, None, None)
            self._progress = None
        self._task_id = None


__all__ = ["DownloadStatus", "GenerationProgress", "GenerationState"]
