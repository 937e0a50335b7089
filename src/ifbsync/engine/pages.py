"""Locate a page by normalized name, creating it from a dataset when absent."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ifbsync.contracts.dataset import ColumnKind, LocalDataset
from ifbsync.contracts.exceptions import InvariantViolation, PageCreationError, ProviderError
from ifbsync.contracts.page import RemoteField, RemotePage
from ifbsync.contracts.provider import Provider
from ifbsync.engine.schema import default_label, elements_for_dataset, normalize_name

logger = logging.getLogger(__name__)


class PageResolver:
    """Resolve a target page and its schema.

    Resolution is idempotent in effect: once a page exists under a normalized
    name every later call reuses it. Two callers racing on the same name can
    still both create a page; serializing them is the caller's job.
    """

    def __init__(self, provider: Provider) -> None:
        self._provider = provider

    def resolve(
        self,
        form_name: str,
        dataset: LocalDataset,
        kinds: Mapping[str, ColumnKind],
        *,
        label: str | None = None,
    ) -> tuple[RemotePage, bool]:
        """Return ``(page, created)`` for *form_name*."""
        name = normalize_name(form_name)
        matches = [page for page in self._provider.list_pages() if page.name == name]
        if len(matches) > 1:
            ids = ", ".join(str(page.id) for page in matches)
            raise InvariantViolation(f"Page name {name!r} matches several pages: {ids}")

        created = False
        if matches:
            page_id = matches[0].id
            page_label = matches[0].label or label or default_label(name)
        else:
            logger.info("Form %s does not yet exist.", name)
            page_label = label or default_label(name)
            page_id = self.create(name, page_label, dataset, kinds)
            created = True

        if page_id <= 0:
            raise InvariantViolation(f"Resolved page id for {name!r} is not positive: {page_id}")

        fields = self.fetch_schema(page_id)
        return RemotePage(id=page_id, name=name, label=page_label, fields=fields), created

    def create(self, name: str, label: str, dataset: LocalDataset, kinds: Mapping[str, ColumnKind]) -> int:
        """Create a page with one element per dataset column; return its id."""
        # Map every column before the first remote call.
        elements = elements_for_dataset(dataset, kinds)

        try:
            page_id = self._provider.create_page(name, label)
        except ProviderError as exc:
            raise PageCreationError(f"Failed to create page {name!r}: {exc}") from exc
        if page_id <= 0:
            raise InvariantViolation(f"Created page id for {name!r} is not positive: {page_id}")

        for element in elements:
            try:
                self._provider.create_element(page_id, element)
            except ProviderError as exc:
                raise PageCreationError(
                    f"Failed to create element {element.name!r} on page {name!r} ({page_id}): {exc}"
                ) from exc
        logger.info("Created page %s (%d) with %d element(s)", name, page_id, len(elements))
        return page_id

    def fetch_schema(self, page_id: int) -> list[RemoteField]:
        elements = self._provider.list_elements(page_id, fields=["label"])
        return [
            RemoteField(name=element["name"], data_type=int(element.get("data_type") or 0), label=element.get("label"))
            for element in elements
        ]
