"""Provider adapter contract.

A provider performs the raw remote calls the sync engine depends on. Every call
is blocking; retry and backoff belong to the transport, never to the engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from types import TracebackType
from typing import Any

from ifbsync.contracts.page import ElementInput, PageSummary


class Provider(ABC):
    def __enter__(self) -> Provider:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    @abstractmethod
    def list_pages(self) -> list[PageSummary]:
        """Return every page of the profile."""

    @abstractmethod
    def get_page(self, page_id: int) -> dict[str, Any]:
        """Return the full page resource."""

    @abstractmethod
    def create_page(self, name: str, label: str) -> int:
        """Create an empty page and return its id."""

    @abstractmethod
    def create_element(self, page_id: int, element: ElementInput) -> int:
        """Create an element on *page_id* and return its id."""

    @abstractmethod
    def list_elements(self, page_id: int, fields: Sequence[str] | None = None) -> list[dict[str, Any]]:
        """Return the page's elements.

        Each element carries at least ``name`` and ``data_type``; *fields* asks
        for extra attributes (``None`` means all of them).
        """

    @abstractmethod
    def fetch_records(
        self,
        page_id: int,
        fields: Sequence[str],
        *,
        limit: int,
        offset: int = 0,
        since_id: int = 0,
    ) -> list[dict[str, Any]]:
        """Return one batch of records with ``id > since_id``.

        The batch must be the *limit* lowest ids above *since_id*; callers
        advance the cursor to the largest id in the batch, so any other
        selection skips records. Order within the batch is not guaranteed.
        Each row holds ``id`` and the requested *fields*.
        """

    @abstractmethod
    def create_records(self, page_id: int, rows: Sequence[dict[str, Any]]) -> list[int]:
        """Create records and return their ids."""

    @abstractmethod
    def update_records(self, page_id: int, updates: Sequence[tuple[int, dict[str, Any]]]) -> list[int]:
        """Apply ``(record_id, values)`` updates and return the updated ids."""

    @abstractmethod
    def delete_records(self, page_id: int, record_ids: Sequence[int]) -> list[int]:
        """Delete records and return the deleted ids."""

    @abstractmethod
    def get_option_list(self, option_list_id: int) -> dict[str, Any]:
        """Return an option list resource (at least ``id`` and ``name``)."""
