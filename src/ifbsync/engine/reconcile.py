"""Pure reconciliation between a local dataset and a remote snapshot.

Nothing here performs I/O: given local rows, remote records and the uid the
functions below return the field intersection and the mutation set, so the
diff can be tested without a provider.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from ifbsync.contracts.dataset import LocalDataset
from ifbsync.contracts.exceptions import DuplicateIdentifier
from ifbsync.contracts.page import MutationSet, RecordUpdate, RemoteRecord
from ifbsync.engine.normalize import to_text

logger = logging.getLogger(__name__)


def compute_field_intersection(local_columns: Sequence[str], remote_fields: Iterable[str]) -> list[str]:
    """Names present on both sides, in local column order."""
    remote = set(remote_fields)
    return [column for column in local_columns if column in remote]


def comparable(value: Any) -> str:
    """Canonical text used to compare a local value with a remote one.

    ``None`` and the empty string compare equal.
    """
    text = to_text(value)
    return "" if text is None else text


def index_local(rows: Sequence[dict[str, Any]], uid: str) -> dict[str, dict[str, Any]]:
    """Map uid value to row; duplicated uid values are an input error."""
    index: dict[str, dict[str, Any]] = {}
    duplicates: dict[str, None] = {}
    for row in rows:
        key = comparable(row.get(uid))
        if key in index:
            duplicates.setdefault(key, None)
            continue
        index[key] = row
    if duplicates:
        raise DuplicateIdentifier(uid, list(duplicates))
    return index


def index_remote(records: Iterable[RemoteRecord], uid: str) -> dict[str, RemoteRecord]:
    """Map uid value to record; on duplicates the lowest record id wins."""
    index: dict[str, RemoteRecord] = {}
    for record in sorted(records, key=lambda r: r.id):
        key = comparable(record.values.get(uid))
        kept = index.setdefault(key, record)
        if kept is not record:
            logger.warning("Remote records %d and %d share %s=%r; using %d", kept.id, record.id, uid, key, kept.id)
    return index


def project(row: dict[str, Any], fields: Sequence[str]) -> dict[str, Any]:
    return {field: row.get(field) for field in fields}


def diff_fields(local_row: dict[str, Any], record: RemoteRecord, fields: Sequence[str], uid: str) -> dict[str, Any]:
    """Local values of the fields that differ from the same-uid remote record."""
    return {
        field: local_row.get(field)
        for field in fields
        if field != uid and comparable(local_row.get(field)) != comparable(record.values.get(field))
    }


def plan_mutations(
    dataset: LocalDataset,
    remote: Sequence[RemoteRecord],
    uid: str,
    fields: Sequence[str],
    *,
    update: bool = True,
    delete: bool = False,
) -> MutationSet:
    """Partition rows into inserts, updates and deletes keyed by *uid*.

    *dataset* must already be normalized with lower-case column names, and
    *fields* must be the field intersection (which contains *uid*).

    Output order is deterministic: inserts and updates follow the local row
    order, deletes follow ascending record id.
    """
    local_rows = dataset.records()
    local_index = index_local(local_rows, uid)
    fields = list(fields)

    if not remote:
        return MutationSet(fields=fields, to_insert=[project(row, fields) for row in local_rows])

    remote_index = index_remote(remote, uid)
    to_insert = [project(row, fields) for key, row in local_index.items() if key not in remote_index]

    to_delete: list[RemoteRecord] = []
    if delete:
        to_delete = sorted(
            (record for record in remote if comparable(record.values.get(uid)) not in local_index),
            key=lambda r: r.id,
        )

    to_update: list[RecordUpdate] = []
    if update:
        for key, row in local_index.items():
            record = remote_index.get(key)
            if record is None:
                continue
            changed = diff_fields(row, record, fields, uid)
            if changed:
                to_update.append(RecordUpdate(record_id=record.id, uid_value=key, values=changed))

    return MutationSet(fields=fields, to_insert=to_insert, to_update=to_update, to_delete=to_delete)
