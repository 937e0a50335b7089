"""Core sync pipeline engine."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from ifbsync.contracts.dataset import ColumnKind, LocalDataset
from ifbsync.contracts.exceptions import MissingIdentifierColumn
from ifbsync.contracts.page import MutationSet, RemotePage, RemoteRecord
from ifbsync.contracts.provider import Provider
from ifbsync.contracts.sync import SyncResult
from ifbsync.engine.fetch import fetch_all_records
from ifbsync.engine.normalize import column_kinds, normalize_dataset
from ifbsync.engine.pages import PageResolver
from ifbsync.engine.progress import NullSyncProgress, Phase, SyncProgress
from ifbsync.engine.reconcile import compute_field_intersection, plan_mutations
from ifbsync.engine.schema import ELEMENT_TYPES_BY_KIND

logger = logging.getLogger(__name__)


class SyncEngine:
    """Bring a remote page in line with a local dataset.

    Phases run in order: Resolve, Fetch, Insert, Delete, Update. Each phase
    logs its candidate count before mutating anything, so after a failure the
    last logged count shows how far the sync got. Nothing is rolled back:
    records inserted before a later failure stay on the page.

    At most one sync per page may run at a time; the engine takes no locks.
    """

    def __init__(
        self,
        provider: Provider,
        *,
        page_size: int = 1000,
        dry_run: bool = False,
        progress: SyncProgress | None = None,
    ) -> None:
        self._provider = provider
        self._page_size = page_size
        self._dry_run = dry_run
        self._progress: SyncProgress = progress or NullSyncProgress()
        self._resolver = PageResolver(provider)

    def sync(
        self,
        dataset: LocalDataset,
        form_name: str,
        uid: str,
        *,
        label: str | None = None,
        update: bool = True,
        delete: bool = False,
    ) -> SyncResult:
        uid = uid.lower()
        if dataset.find_column(uid) is None:
            raise MissingIdentifierColumn(uid, "local")

        kinds = column_kinds(dataset)
        normalized = normalize_dataset(dataset, kinds).with_lowercase_columns()

        with self._phase(Phase.RESOLVE):
            page, created = self._resolver.resolve(form_name, dataset, kinds, label=label)

        if uid not in page.field_names:
            raise MissingIdentifierColumn(uid, "remote")
        fields = compute_field_intersection(normalized.columns, page.field_names)
        self._check_field_types(page, fields, {column.lower(): kind for column, kind in kinds.items()})
        logger.debug("Syncing fields %s into %s (%d)", ",".join(fields), page.name, page.id)

        remote = self._fetch(page, fields)
        mutations = plan_mutations(normalized, remote, uid, fields, update=update, delete=delete)

        result = SyncResult(
            page_id=page.id,
            page_name=page.name,
            page_created=created,
            fields=fields,
            remote_records=len(remote),
            dry_run=self._dry_run,
        )
        result.inserted = self._insert(page, mutations)
        if delete:
            result.deleted = self._delete(page, mutations)
        if update:
            result.updated = self._update(page, mutations)
        return result

    def _fetch(self, page: RemotePage, fields: list[str]) -> list[RemoteRecord]:
        with self._phase(Phase.FETCH):
            records = fetch_all_records(
                self._provider,
                page.id,
                fields,
                page_size=self._page_size,
                on_batch=lambda batch: self._progress.item_done(Phase.FETCH, len(batch)),
            )
        logger.info("Fetched %d existing record(s) from %s", len(records), page.name)
        return records

    def _insert(self, page: RemotePage, mutations: MutationSet) -> int:
        rows = mutations.to_insert
        logger.info("%d new records will be added to %s", len(rows), page.name)
        with self._phase(Phase.INSERT, total=len(rows)):
            if rows:
                self._provider.create_records(page.id, rows)
                self._progress.item_done(Phase.INSERT, len(rows))
        return len(rows)

    def _delete(self, page: RemotePage, mutations: MutationSet) -> int:
        record_ids = [record.id for record in mutations.to_delete]
        logger.info("%d records will be removed from %s", len(record_ids), page.name)
        with self._phase(Phase.DELETE, total=len(record_ids)):
            if record_ids:
                self._provider.delete_records(page.id, record_ids)
                self._progress.item_done(Phase.DELETE, len(record_ids))
        return len(record_ids)

    def _update(self, page: RemotePage, mutations: MutationSet) -> int:
        updates = [(update.record_id, update.values) for update in mutations.to_update]
        logger.info("%d records will be updated in %s", len(updates), page.name)
        with self._phase(Phase.UPDATE, total=len(updates)):
            if updates:
                self._provider.update_records(page.id, updates)
                self._progress.item_done(Phase.UPDATE, len(updates))
        return len(updates)

    @staticmethod
    def _check_field_types(page: RemotePage, fields: list[str], kinds: dict[str, ColumnKind]) -> None:
        remote_types = {field.name: field.data_type for field in page.fields}
        for name in fields:
            expected = ELEMENT_TYPES_BY_KIND.get(kinds.get(name))
            if expected is not None and remote_types.get(name) != expected:
                logger.warning(
                    "Field %s is %s locally but data_type %s on %s; values are sent unchanged",
                    name,
                    kinds.get(name),
                    remote_types.get(name),
                    page.name,
                )

    @contextmanager
    def _phase(self, phase: Phase, total: int | None = None) -> Iterator[None]:
        self._progress.phase_start(phase, total=total)
        try:
            yield
        except BaseException as exc:
            self._progress.phase_error(phase, exc)
            raise
        self._progress.phase_done(phase)
