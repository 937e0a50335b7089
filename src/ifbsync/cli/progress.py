"""Terminal progress for ``ifbsync sync``."""

from __future__ import annotations

from types import TracebackType
from typing import ClassVar

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from ifbsync.engine.progress import Phase, SyncProgress


class RichSyncProgress(SyncProgress):
    """One Rich task row per sync phase, drawn on stderr.

    Counting phases get a bar sized to their candidate count; Resolve and
    Fetch spin until they finish and are then shown as complete. A failed
    phase keeps its row, marked with a cross, and the error is echoed below.

    Must be entered before the sync starts::

        with RichSyncProgress() as progress:
            IfbSync.from_config(config, progress=progress).sync_table(data, "Visits", "visit_id")
    """

    _STYLES: ClassVar[dict[str, str]] = {
        Phase.RESOLVE: "cyan",
        Phase.FETCH: "cyan",
        Phase.INSERT: "green",
        Phase.DELETE: "red",
        Phase.UPDATE: "blue",
    }

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description:>10}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self._console,
        )
        self._task_ids: dict[str, RichTaskID] = {}

    def __enter__(self) -> RichSyncProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def phase_start(self, phase: str, total: int | None = None) -> None:
        style = self._STYLES.get(phase, "white")
        self._task_ids[phase] = self._progress.add_task(f"[{style}]{phase}[/]", total=total)

    def item_done(self, phase: str, count: int = 1) -> None:
        if phase in self._task_ids:
            self._progress.advance(self._task_ids[phase], count)

    def phase_done(self, phase: str) -> None:
        if phase not in self._task_ids:
            return
        task_id = self._task_ids[phase]
        task = self._progress.tasks[task_id]
        done = task.total if task.total is not None else max(task.completed, 1)
        self._progress.update(task_id, total=done, completed=done)

    def phase_error(self, phase: str, error: BaseException) -> None:
        if phase not in self._task_ids:
            return
        self._progress.update(self._task_ids[phase], description=f"[red]✗ {phase}[/]")
        self._progress.console.print(f"[red]{phase} failed:[/] {error}", markup=True, highlight=False)
