"""Phase events emitted by :class:`~ifbsync.engine.engine.SyncEngine`.

A sync walks the phases in :class:`Phase` order. Counting phases (Insert,
Delete, Update) announce their candidate count in ``phase_start``; Resolve and
Fetch start with ``total=None`` because the amount of work is not known up
front.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum


class Phase(StrEnum):
    RESOLVE = "Resolve"
    FETCH = "Fetch"
    INSERT = "Insert"
    DELETE = "Delete"
    UPDATE = "Update"


class SyncProgress(ABC):
    """Receives phase lifecycle events from one sync."""

    @abstractmethod
    def phase_start(self, phase: str, total: int | None = None) -> None:
        """*phase* begins; *total* is its candidate count when known."""

    @abstractmethod
    def item_done(self, phase: str, count: int = 1) -> None:
        """*count* more records were handled by *phase*."""

    @abstractmethod
    def phase_done(self, phase: str) -> None: ...

    @abstractmethod
    def phase_error(self, phase: str, error: BaseException) -> None:
        """*phase* stopped on *error*; the engine re-raises it afterwards."""


class NullSyncProgress(SyncProgress):
    def phase_start(self, phase: str, total: int | None = None) -> None:
        return None

    def item_done(self, phase: str, count: int = 1) -> None:
        return None

    def phase_done(self, phase: str) -> None:
        return None

    def phase_error(self, phase: str, error: BaseException) -> None:
        return None
