"""SDK composition root for ifbsync."""

from __future__ import annotations

from pathlib import Path
from zoneinfo import ZoneInfo

from ifbsync.auth import create_token_resolver
from ifbsync.contracts.config import IfbSyncConfig
from ifbsync.contracts.dataset import LocalDataset
from ifbsync.contracts.provider import Provider
from ifbsync.contracts.sync import SyncResult
from ifbsync.data import DatasetLoader
from ifbsync.engine import SyncEngine
from ifbsync.engine.normalize import column_kinds
from ifbsync.engine.pages import PageResolver
from ifbsync.engine.progress import SyncProgress
from ifbsync.engine.schema import default_label, normalize_name
from ifbsync.providers.dry_run import DryRunProvider
from ifbsync.providers.factory import create_provider
from ifbsync.renderers import MetadataReporter


def load_dataset(path: str | Path, *, datetime_columns: list[str] | None = None) -> LocalDataset:
    """Load a dataset from a JSON or CSV file."""
    return DatasetLoader().load(path, datetime_columns=datetime_columns or ())


class IfbSync:
    """ifbsync SDK public API.

    Args:
        config: Connection settings.
        provider: Provider to use instead of building one from *config*
            (the caller keeps ownership; it is entered for each call).
        progress: Optional progress observer handed to the sync engine.
    """

    def __init__(
        self,
        *,
        config: IfbSyncConfig,
        provider: Provider | None = None,
        progress: SyncProgress | None = None,
    ) -> None:
        self._config = config
        self._provider = provider
        self._progress = progress

    @classmethod
    def from_config(cls, config: IfbSyncConfig, *, progress: SyncProgress | None = None) -> IfbSync:
        return cls(config=config, progress=progress)

    def sync_table(
        self,
        data: LocalDataset,
        form_name: str,
        uid: str,
        *,
        label: str | None = None,
        update: bool = True,
        delete: bool = False,
        dry_run: bool = False,
    ) -> SyncResult:
        """Sync *data* into the page named *form_name*, creating it if needed.

        Rows are matched on *uid*. New rows are inserted; rows whose fields
        differ are updated when *update* is set; remote rows missing locally are
        deleted only when *delete* is set. With *dry_run* every write is
        simulated and only the counts are reported.
        """
        with self._open_provider(dry_run=dry_run) as provider:
            engine = SyncEngine(
                provider,
                page_size=self._config.page_size,
                dry_run=dry_run,
                progress=self._progress,
            )
            return engine.sync(data, form_name, uid, label=label, update=update, delete=delete)

    def data2form(self, name: str, data: LocalDataset, *, label: str | None = None) -> int:
        """Create a page shaped like *data* (one element per column); return its id."""
        page_name = normalize_name(name)
        with self._open_provider(dry_run=False) as provider:
            return PageResolver(provider).create(page_name, label or default_label(page_name), data, column_kinds(data))

    def form_metadata(self, page_id: int, filename: str | Path, *, subforms: bool = True) -> Path:
        """Write a Markdown metadata report for *page_id* (and its subforms)."""
        with self._open_provider(dry_run=False) as provider:
            reporter = MetadataReporter(provider, tz=ZoneInfo(self._config.timezone))
            path, _ = reporter.write(page_id, filename, subforms=subforms)
        return path

    def _open_provider(self, *, dry_run: bool) -> Provider:
        if self._provider is not None:
            return DryRunProvider(source=self._provider) if dry_run else self._provider
        token = create_token_resolver(self._config).resolve()
        return create_provider("dry-run" if dry_run else "ifb", config=self._config, token=token)
