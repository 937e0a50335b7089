"""Dry-run provider: real reads, simulated writes."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Sequence
from types import TracebackType
from typing import Any

from ifbsync.contracts.exceptions import ProviderError
from ifbsync.contracts.page import ElementInput, PageSummary
from ifbsync.contracts.provider import Provider

logger = logging.getLogger(__name__)

_PLACEHOLDER_ID_BASE = 900_000_000


class DryRunProvider(Provider):
    """Provider that never writes to the remote service.

    Reads are forwarded to *source* when one is given; without a source the
    profile looks empty. Pages and elements "created" during the run live in
    memory so later reads in the same run see them. Record writes are logged
    and answered with placeholder ids.
    """

    def __init__(self, source: Provider | None = None) -> None:
        self._source = source
        self._ids = itertools.count(_PLACEHOLDER_ID_BASE + 1)
        self._pages: dict[int, PageSummary] = {}
        self._elements: dict[int, list[dict[str, Any]]] = {}
        self.writes: list[tuple[str, int, int]] = []

    def __enter__(self) -> DryRunProvider:
        if self._source is not None:
            self._source.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._source is not None:
            self._source.__exit__(exc_type, exc_val, exc_tb)

    def list_pages(self) -> list[PageSummary]:
        pages = self._source.list_pages() if self._source is not None else []
        return [*pages, *self._pages.values()]

    def get_page(self, page_id: int) -> dict[str, Any]:
        if page_id in self._pages:
            return self._pages[page_id].model_dump()
        if self._source is None:
            raise ProviderError(f"Page not found: {page_id}")
        return self._source.get_page(page_id)

    def create_page(self, name: str, label: str) -> int:
        page_id = next(self._ids)
        self._pages[page_id] = PageSummary(id=page_id, name=name, label=label)
        self._elements[page_id] = []
        self._record_write("create_page", page_id, 1)
        return page_id

    def create_element(self, page_id: int, element: ElementInput) -> int:
        if page_id not in self._elements:
            raise ProviderError(f"[dry-run] cannot add elements to existing page {page_id}")
        element_id = next(self._ids)
        self._elements[page_id].append({"id": element_id, **element.model_dump(mode="json")})
        self._record_write("create_element", page_id, 1)
        return element_id

    def list_elements(self, page_id: int, fields: Sequence[str] | None = None) -> list[dict[str, Any]]:
        if page_id in self._elements:
            return [dict(element) for element in self._elements[page_id]]
        if self._source is None:
            raise ProviderError(f"Page not found: {page_id}")
        return self._source.list_elements(page_id, fields)

    def fetch_records(
        self,
        page_id: int,
        fields: Sequence[str],
        *,
        limit: int,
        offset: int = 0,
        since_id: int = 0,
    ) -> list[dict[str, Any]]:
        if page_id in self._pages or self._source is None:
            return []
        return self._source.fetch_records(page_id, fields, limit=limit, offset=offset, since_id=since_id)

    def create_records(self, page_id: int, rows: Sequence[dict[str, Any]]) -> list[int]:
        self._record_write("create_records", page_id, len(rows))
        return [next(self._ids) for _ in rows]

    def update_records(self, page_id: int, updates: Sequence[tuple[int, dict[str, Any]]]) -> list[int]:
        self._record_write("update_records", page_id, len(updates))
        return [record_id for record_id, _ in updates]

    def delete_records(self, page_id: int, record_ids: Sequence[int]) -> list[int]:
        self._record_write("delete_records", page_id, len(record_ids))
        return list(record_ids)

    def get_option_list(self, option_list_id: int) -> dict[str, Any]:
        if self._source is None:
            raise ProviderError(f"Option list not found: {option_list_id}")
        return self._source.get_option_list(option_list_id)

    def _record_write(self, operation: str, page_id: int, count: int) -> None:
        self.writes.append((operation, page_id, count))
        logger.info("[dry-run] %s on page %d (%d item(s)) skipped", operation, page_id, count)
