"""Public API surface for ifbsync."""

__version__ = "0.1.0"

from ifbsync.auth import create_token_resolver
from ifbsync.config import load_config
from ifbsync.contracts.config import IfbSyncConfig
from ifbsync.contracts.dataset import ColumnKind, LocalDataset
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
from ifbsync.contracts.page import ELEMENT_TYPE_LABELS, ElementType, MutationSet, RemotePage
from ifbsync.contracts.provider import Provider
from ifbsync.contracts.sync import SyncResult
from ifbsync.engine import SyncEngine, SyncProgress, compute_field_intersection, normalize_name, plan_mutations
from ifbsync.providers import create_provider
from ifbsync.sdk import IfbSync, load_dataset

__all__ = [
    "ELEMENT_TYPE_LABELS",
    "AuthenticationError",
    "ColumnKind",
    "ConfigError",
    "DatasetLoadError",
    "DuplicateIdentifier",
    "ElementType",
    "IfbSync",
    "IfbSyncConfig",
    "IfbSyncError",
    "InvariantViolation",
    "LocalDataset",
    "MissingIdentifierColumn",
    "MutationSet",
    "PageCreationError",
    "Provider",
    "ProviderError",
    "RemotePage",
    "SyncEngine",
    "SyncError",
    "SyncProgress",
    "SyncResult",
    "UnsupportedColumnType",
    "__version__",
    "compute_field_intersection",
    "create_provider",
    "create_token_resolver",
    "load_config",
    "load_dataset",
    "normalize_name",
    "plan_mutations",
]
