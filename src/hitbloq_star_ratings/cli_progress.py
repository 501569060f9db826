"""Rich progress display for a pool rating run.

One bar covers the whole pool. A trailing column names the leaderboard being rated.
"""

from __future__ import annotations

from typing_extensions import override

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
)

from .protocols import ProgressReporter


class CliProgressReporter(ProgressReporter):
    """Progress bar over a pool's leaderboards."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console
        self.progress: Progress | None = None
        self.task_id: TaskID | None = None

    @override
    def start(self, label: str, total: int | None) -> None:
        self.finish()
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeRemainingColumn(),
            TextColumn("[dim]{task.fields[current]}"),
            console=self.console,
            transient=True,
        )
        self.progress.start()
        self.task_id = self.progress.add_task(label, total=total, current="")

    @override
    def describe(self, detail: str) -> None:
        if self.progress is None or self.task_id is None:
            return
        self.progress.update(self.task_id, current=detail)

    @override
    def advance(self, count: int) -> None:
        if self.progress is None or self.task_id is None:
            return
        self.progress.advance(self.task_id, count)

    @override
    def finish(self) -> None:
        if self.progress is None:
            return
        self.progress.stop()
        self.progress = None
        self.task_id = None
