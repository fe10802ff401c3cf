"""Typer CLI entrypoint for Group Forge."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from typing import Optional, Sequence

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .config import ConfigRepository, GenerationFrequency, GlobalConfig
from .engine import (
    ApiClient,
    GenerationPipeline,
    GenerationSummary,
    RankedFeedReader,
    execution_order,
    parse_additional_data,
)
from .errors import AdditionalDataFormatError, GroupForgeError
from .generators import GeneratorLibrary
from .generators.library import build_library
from .groups import FetchedData
from .logging_conf import app_log_path, available_generator_logs, configure_logging, generator_logger, tail_log
from .orchestrator import AllGroupsScheduler
from .resolver import GlobalResolver
from .scheduler import APSchedulerAdapter
from .stores import BaseGroupGeneratorStore, BaseGroupStore, create_stores
from .ui import DownloadStatus, GenerationProgress

app = typer.Typer(
    help="Group Forge command line",
    no_args_is_help=True,
    rich_markup_mode=None,
)
generators_app = typer.Typer(
    name="generators",
    help="Inspect the generator library",
    no_args_is_help=True,
    rich_markup_mode=None,
)
log_app = typer.Typer(
    name="log",
    help="Read log files",
    no_args_is_help=True,
    rich_markup_mode=None,
)

console = Console()


@dataclass
class AppState:
    repository: ConfigRepository
    config: GlobalConfig
    library: GeneratorLibrary
    pipeline: GenerationPipeline
    orchestrator: AllGroupsScheduler
    scheduler: APSchedulerAdapter
    group_store: BaseGroupStore
    generator_store: BaseGroupGeneratorStore


def build_state(verbose: bool) -> AppState:
    configure_logging(verbose=verbose)
    repository = ConfigRepository()
    config = repository.load_global_config()
    group_store, generator_store = create_stores(repository, config=config)

    def reader_factory() -> RankedFeedReader:
        return RankedFeedReader(
            ApiClient(config.hive),
            status=DownloadStatus(enabled=config.show_progress, console=console),
            max_in_flight=config.fetch_concurrency,
        )

    library = build_library(repository, reader_factory)
    pipeline = GenerationPipeline(
        library,
        group_store,
        generator_store,
        GlobalResolver(),
        logger_factory=lambda name: generator_logger(name, verbose),
    )
    return AppState(
        repository=repository,
        config=config,
        library=library,
        pipeline=pipeline,
        orchestrator=AllGroupsScheduler(pipeline),
        scheduler=APSchedulerAdapter(),
        group_store=group_store,
        generator_store=generator_store,
    )


def _get_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if state is None:
        state = build_state(verbose=False)
        ctx.obj = state
    return state


def _parse_additional_option(value: Optional[str]) -> FetchedData | None:
    if value is None:
        return None
    try:
        return parse_additional_data(value)
    except AdditionalDataFormatError as exc:
        raise typer.BadParameter(str(exc), param_hint="--additional-data") from exc


def _progress_default_enabled() -> bool:
    return bool(getattr(sys.stdout, "isatty", lambda: False)())


def _render_generators_table(library: GeneratorLibrary) -> Table:
    table = Table(title=f"Generators · {len(library)}", box=box.SIMPLE_HEAD)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Frequency", style="magenta")
    table.add_column("Depends on", style="yellow", overflow="fold")
    table.add_column("Level", style="green", justify="right")
    for name, level in execution_order(library):
        generator = library[name]
        table.add_row(
            name,
            generator.generation_frequency.value,
            ", ".join(sorted(generator.depends_on)) or "-",
            str(level),
        )
    return table


def _render_summaries_table(summaries: Sequence[GenerationSummary]) -> Table:
    table = Table(title="Generation results", box=box.SIMPLE_HEAD)
    table.add_column("Generator", style="cyan", no_wrap=True)
    table.add_column("Status", style="magenta")
    table.add_column("Groups", style="green", justify="right")
    table.add_column("Accounts", style="green", justify="right")
    for summary in summaries:
        table.add_row(
            summary.generator_name,
            "skipped" if summary.skipped else "generated",
            str(len(summary.groups)),
            str(summary.accounts),
        )
    return table


app.add_typer(generators_app, name="generators", help="List generators and their dependency levels")
app.add_typer(log_app, name="log", help="Show log files")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging", is_flag=True),
) -> None:
    ctx.obj = build_state(verbose)


@generators_app.command("list", help="List generators in execution order.")
def generators_list(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    try:
        console.print(_render_generators_table(state.library))
    except GroupForgeError as exc:
        console.print(str(exc), style="red")
        raise typer.Exit(code=1) from exc


@app.command("generate", help="Run a single generator.")
def generate(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Generator name."),
    timestamp: Optional[int] = typer.Option(None, "--timestamp", help="Unix timestamp of the generation."),
    additional_data: Optional[str] = typer.Option(
        None, "--additional-data", help="Extra accounts: 0xaddress=value,0xaddress"
    ),
    first_generation_only: bool = typer.Option(
        False, "--first-generation-only", help="Skip if the generator already ran.", is_flag=True
    ),
) -> None:
    extra = _parse_additional_option(additional_data)
    state = _get_state(ctx)
    try:
        summary = state.pipeline.run(
            name,
            timestamp=timestamp,
            additional_data=extra,
            first_generation_only=first_generation_only,
        )
    except GroupForgeError as exc:
        console.print(str(exc), style="red")
        raise typer.Exit(code=1) from exc
    console.print(_render_summaries_table([summary]))


@app.command("generate-all", help="Run every generator in dependency order.")
def generate_all(
    ctx: typer.Context,
    frequency: Optional[GenerationFrequency] = typer.Option(
        None, "--frequency", help="Only run generators with this frequency.", case_sensitive=False
    ),
    timestamp: Optional[int] = typer.Option(None, "--timestamp", help="Unix timestamp of the generation."),
    additional_data: Optional[str] = typer.Option(
        None, "--additional-data", help="Extra accounts: 0xaddress=value,0xaddress"
    ),
    first_generation_only: bool = typer.Option(
        False, "--first-generation-only", help="Skip generators that already ran.", is_flag=True
    ),
    quiet: bool = typer.Option(False, "--quiet", help="Only print totals.", is_flag=True),
) -> None:
    extra = _parse_additional_option(additional_data)
    state = _get_state(ctx)
    progress = GenerationProgress(enabled=_progress_default_enabled() and not quiet, console=console)
    try:
        planned = state.orchestrator.planned_order(frequency)
        progress.start(len(planned))
        summaries = state.orchestrator.run_all(
            frequency=frequency,
            timestamp=timestamp,
            additional_data=extra,
            first_generation_only=first_generation_only,
            on_generated=lambda s: progress.advance(s.generator_name, skipped=s.skipped),
        )
    except GroupForgeError as exc:
        console.print(str(exc), style="red")
        raise typer.Exit(code=1) from exc
    finally:
        progress.close()
    if quiet:
        generated = sum(1 for s in summaries if not s.skipped)
        console.print(f"Done: {generated} generated, {len(summaries) - generated} skipped")
        return
    console.print(_render_summaries_table(summaries))


@app.command("history", help="Show the latest runs of a generator.")
def history(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Generator name."),
    limit: int = typer.Option(20, "--limit", min=1, help="Number of runs to show."),
) -> None:
    state = _get_state(ctx)
    records = state.generator_store.search(name)[:limit]
    if not records:
        console.print(f"{name} has never been generated.", style="yellow")
        return
    table = Table(title=f"{name} runs", box=box.SIMPLE_HEAD)
    table.add_column("Timestamp", style="cyan", justify="right")
    table.add_column("UTC", style="green")
    for record in records:
        table.add_row(
            str(record.timestamp),
            time.strftime("%Y-%m-%d %H:%M:%S", time.gmtime(record.timestamp)),
        )
    console.print(table)


@app.command("reset", help="Forget the runs of a generator so it is generated again.")
def reset(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Generator name."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation.", is_flag=True),
) -> None:
    state = _get_state(ctx)
    if name not in state.library:
        console.print(f"Unknown generator: {name}", style="red")
        raise typer.Exit(code=1)
    if not yes and not typer.confirm(f"Forget every run of `{name}`?", default=False):
        raise typer.Exit(code=0)
    state.generator_store.reset(name)
    console.print(f"{name} history cleared.", style="green")


@app.command("serve", help="Run generators on their configured schedules.")
def serve(ctx: typer.Context) -> None:
    state = _get_state(ctx)

    def _run(frequency: GenerationFrequency) -> None:
        try:
            # once generators only run when they have never been generated
            state.orchestrator.run_all(
                frequency=frequency,
                first_generation_only=frequency is GenerationFrequency.ONCE,
            )
        except GroupForgeError as exc:
            state.orchestrator.logger.error("scheduled_run_failed", frequency=frequency.value, error=str(exc))

    state.scheduler.schedule_frequencies(state.config, _run)
    state.scheduler.start()
    table = Table(title="Scheduled runs", box=box.SIMPLE_HEAD)
    table.add_column("Job", style="cyan", no_wrap=True)
    table.add_column("Trigger", style="magenta", overflow="fold")
    table.add_column("Next run", style="green")
    for job in state.scheduler.list_jobs():
        table.add_row(job["id"], job["trigger"], str(job["next_run_time"] or "-"))
    console.print(table)
    console.print("Scheduler running, press Ctrl+C to stop.", style="green")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        console.print("Stopping scheduler…", style="yellow")
    finally:
        state.scheduler.shutdown()
        state.group_store.close()
        state.generator_store.close()


@log_app.command("tail", help="Print the last lines of a log file.")
def log_tail(
    generator: Optional[str] = typer.Option(None, "--generator", help="Per-generator log to read."),
    lines: int = typer.Option(50, "--lines", "-n", min=1, help="Number of lines."),
) -> None:
    if generator:
        matches = [path for path in available_generator_logs() if path.stem == generator]
        if not matches:
            console.print(f"No log for generator {generator}.", style="yellow")
            raise typer.Exit(code=1)
        path = matches[0]
    else:
        path = app_log_path()
    for line in tail_log(path, lines):
        console.print(line.rstrip("\n"), markup=False, highlight=False)


__all__ = ["AppState", "app", "build_state"]
