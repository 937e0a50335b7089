"""Custom exception hierarchy for ifbsync.

All ifbsync exceptions inherit from :class:`IfbSyncError`, making it easy
to catch any library error with a single ``except`` clause while still allowing
callers to handle specific failure modes.

None of these errors roll back remote writes that were already issued: a sync
that fails in the update phase leaves its inserted records in place.
"""

from __future__ import annotations


class IfbSyncError(Exception):
    """Base exception for all ifbsync errors."""


class ConfigError(IfbSyncError):
    """Raised when the configuration file is missing or invalid."""


class DatasetLoadError(IfbSyncError):
    """Raised when a local dataset cannot be read or parsed."""


class AuthenticationError(IfbSyncError):
    """Raised when no usable access token is available or the API rejects it."""


class ProviderError(IfbSyncError):
    """Raised when a provider API call fails unexpectedly."""


class SyncError(IfbSyncError):
    """Raised when the sync engine encounters a non-recoverable failure."""


class MissingIdentifierColumn(SyncError):
    """Raised when the uid column is absent from the local data or the remote page.

    Attributes:
        uid: The normalized identifier column name.
        side: Either ``"local"`` or ``"remote"``.
    """

    def __init__(self, uid: str, side: str) -> None:
        self.uid = uid
        self.side = side
        source = "source data" if side == "local" else "IFB page"
        super().__init__(f"UID column {uid!r} is missing from {source}")


class DuplicateIdentifier(SyncError):
    """Raised when local rows share an identifier value.

    Attributes:
        uid: The identifier column name.
        values: The duplicated identifier values, in first-seen order.
    """

    def __init__(self, uid: str, values: list[str]) -> None:
        self.uid = uid
        self.values = values
        shown = ", ".join(values[:5])
        more = f" (+{len(values) - 5} more)" if len(values) > 5 else ""
        super().__init__(f"UID column {uid!r} has duplicate values in source data: {shown}{more}")


class UnsupportedColumnType(SyncError):
    """Raised when a column's value kind has no remote element type.

    Attributes:
        column: Column name.
        kind: The inferred (or declared) column kind.
    """

    def __init__(self, column: str, kind: str) -> None:
        self.column = column
        self.kind = kind
        super().__init__(
            f"Column {column!r} has unsupported kind {kind!r}; cast it to text, number, datetime or boolean, or drop it"
        )


class PageCreationError(SyncError):
    """Raised when the remote service rejects page or element creation."""


class InvariantViolation(SyncError):
    """Raised when a collaborator breaks its contract (e.g. a non-positive page id)."""
