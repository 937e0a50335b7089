"""Tests for RichSyncProgress and NullSyncProgress."""

from __future__ import annotations

import io

from rich.console import Console

from ifbsync.cli.progress import RichSyncProgress
from ifbsync.engine.progress import NullSyncProgress, SyncProgress


def _quiet_console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


class TestNullSyncProgress:
    def test_implements_protocol(self) -> None:
        assert issubclass(NullSyncProgress, SyncProgress)

    def test_phase_lifecycle_is_noop(self) -> None:
        progress = NullSyncProgress()
        progress.phase_start("Fetch")
        progress.item_done("Fetch", 3)
        progress.phase_done("Fetch")
        progress.phase_error("Fetch", RuntimeError("x"))


class TestRichSyncProgress:
    def test_context_manager(self) -> None:
        progress = RichSyncProgress(_quiet_console())
        with progress as p:
            assert p is progress

    def test_determinate_phase_completes(self) -> None:
        with RichSyncProgress(_quiet_console()) as progress:
            progress.phase_start("Insert", total=3)
            progress.item_done("Insert", 3)
            progress.phase_done("Insert")
            task = progress._progress.tasks[progress._task_ids["Insert"]]
            assert task.completed == 3

    def test_indeterminate_phase_is_closed_out(self) -> None:
        with RichSyncProgress(_quiet_console()) as progress:
            progress.phase_start("Fetch")
            progress.phase_done("Fetch")
            task = progress._progress.tasks[progress._task_ids["Fetch"]]
            assert task.total == 1
            assert task.completed == 1

    def test_unknown_phase_events_are_ignored(self) -> None:
        with RichSyncProgress(_quiet_console()) as progress:
            progress.item_done("Unknown")
            progress.phase_done("Unknown")
            progress.phase_error("Unknown", RuntimeError("x"))

    def test_phase_error_marks_task(self) -> None:
        with RichSyncProgress(_quiet_console()) as progress:
            progress.phase_start("Update", total=2)
            progress.phase_error("Update", RuntimeError("x"))
            task = progress._progress.tasks[progress._task_ids["Update"]]
            assert "Update" in task.description
            assert "✗" in task.description
