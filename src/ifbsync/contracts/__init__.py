"""Public contracts for ifbsync."""

from ifbsync.contracts.config import MAX_PAGE_SIZE, IfbSyncConfig
from ifbsync.contracts.dataset import TEMPORAL_KINDS, ColumnKind, LocalDataset
from ifbsync.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    DatasetLoadError,
    DuplicateIdentifier,
    IfbSyncError,
    InvariantViolation,
    MissingIdentifierColumn,
    PageCreationError,
    ProviderError,
    SyncError,
    UnsupportedColumnType,
)
from ifbsync.contracts.page import (
    ELEMENT_TYPE_LABELS,
    ElementInput,
    ElementType,
    MutationSet,
    PageSummary,
    RecordUpdate,
    RemoteField,
    RemotePage,
    RemoteRecord,
)
from ifbsync.contracts.provider import Provider
from ifbsync.contracts.sync import SyncResult

__all__ = [
    "ELEMENT_TYPE_LABELS",
    "MAX_PAGE_SIZE",
    "TEMPORAL_KINDS",
    "AuthenticationError",
    "ColumnKind",
    "ConfigError",
    "DatasetLoadError",
    "DuplicateIdentifier",
    "ElementInput",
    "ElementType",
    "IfbSyncConfig",
    "IfbSyncError",
    "InvariantViolation",
    "LocalDataset",
    "MissingIdentifierColumn",
    "MutationSet",
    "PageCreationError",
    "PageSummary",
    "Provider",
    "ProviderError",
    "RecordUpdate",
    "RemoteField",
    "RemotePage",
    "RemoteRecord",
    "SyncError",
    "SyncResult",
    "UnsupportedColumnType",
]
