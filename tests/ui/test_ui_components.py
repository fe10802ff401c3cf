from __future__ import annotations

import io

import pytest
from rich.console import Console

from group_forge.ui import DownloadStatus, GenerationProgress


def test_generation_progress_counts() -> None:
    progress = GenerationProgress(enabled=False)
    progress.start(total=3)
    progress.advance("a")
    progress.advance("b", skipped=True)
    progress.advance("c")
    progress.close()
    assert progress.state.total == 3
    assert progress.state.generated == 2
    assert progress.state.skipped == 1
    assert progress.state.current == "c"


def test_generation_progress_requires_start() -> None:
    progress = GenerationProgress(enabled=False)
    with pytest.raises(RuntimeError):
        progress.advance("a")


def test_generation_progress_disables_itself_off_terminal() -> None:
    progress = GenerationProgress(enabled=True, console=Console(file=io.StringIO()))
    progress.start(total=1)
    assert not progress.enabled
    progress.advance("a")
    progress.close()


def test_download_status_is_silent_off_terminal() -> None:
    stream = io.StringIO()
    status = DownloadStatus(enabled=True, console=Console(file=stream))
    status.update(1)
    status.update(2)
    status.close()
    assert not status.enabled
    assert status.count == 2
    assert stream.getvalue() == ""


def test_download_status_shares_console_with_running_progress() -> None:
    console = Console(file=io.StringIO(), force_terminal=True)
    progress = GenerationProgress(enabled=True, console=console)
    progress.start(total=1)
    status = DownloadStatus(enabled=True, console=console)
    try:
        status.update(1)
        status.update(5)
    finally:
        status.close()
        progress.close()
    assert status.console is console
    assert status.count == 5
