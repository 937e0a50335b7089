"""Drive the paginated records endpoint to exhaustion."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence

from ifbsync.contracts.exceptions import InvariantViolation
from ifbsync.contracts.page import RemoteRecord
from ifbsync.contracts.provider import Provider

logger = logging.getLogger(__name__)


def iter_record_batches(
    provider: Provider,
    page_id: int,
    fields: Sequence[str],
    *,
    page_size: int,
) -> Iterator[list[RemoteRecord]]:
    """Yield record batches until the page is exhausted.

    The cursor is the largest record id seen so far, so rows within a batch
    may arrive in any order, but each batch must hold the lowest ids above the
    cursor (see :meth:`Provider.fetch_records`). A batch shorter than
    *page_size* ends the walk.
    """
    since_id = 0
    while True:
        rows = provider.fetch_records(page_id, fields, limit=page_size, offset=0, since_id=since_id)
        if not rows:
            return
        batch = [_to_record(row) for row in rows]
        yield batch
        if len(batch) < page_size:
            return
        highest = max(record.id for record in batch)
        if highest <= since_id:
            raise InvariantViolation(f"Record fetch for page {page_id} did not advance past id {since_id}")
        since_id = highest


def fetch_all_records(
    provider: Provider,
    page_id: int,
    fields: Sequence[str],
    *,
    page_size: int,
    on_batch: Callable[[list[RemoteRecord]], None] | None = None,
) -> list[RemoteRecord]:
    """Collect every record of *page_id*; *on_batch* sees each batch as it lands."""
    records: list[RemoteRecord] = []
    for batch in iter_record_batches(provider, page_id, fields, page_size=page_size):
        records.extend(batch)
        if on_batch is not None:
            on_batch(batch)
        logger.debug("Fetched %d record(s) from page %d (%d so far)", len(batch), page_id, len(records))
    return records


def _to_record(row: dict) -> RemoteRecord:
    if "id" not in row:
        raise InvariantViolation(f"Fetched record has no id: {row!r}")
    values = {key: value for key, value in row.items() if key != "id"}
    return RemoteRecord(id=int(row["id"]), values=values)
