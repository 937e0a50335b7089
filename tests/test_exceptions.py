"""Tests for the ifbsync exception hierarchy."""

from __future__ import annotations

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


class TestExceptionHierarchy:
    def test_all_exceptions_inherit_from_ifb_sync_error(self) -> None:
        for exc_type in (ConfigError, DatasetLoadError, AuthenticationError, ProviderError, SyncError):
            assert issubclass(exc_type, IfbSyncError)

    def test_sync_failures_are_sync_errors(self) -> None:
        for exc_type in (
            MissingIdentifierColumn,
            DuplicateIdentifier,
            UnsupportedColumnType,
            PageCreationError,
            InvariantViolation,
        ):
            assert issubclass(exc_type, SyncError)


class TestMessages:
    def test_missing_identifier_names_side(self) -> None:
        local = MissingIdentifierColumn("survey_id", "local")
        remote = MissingIdentifierColumn("survey_id", "remote")

        assert str(local) == "UID column 'survey_id' is missing from source data"
        assert str(remote) == "UID column 'survey_id' is missing from IFB page"
        assert remote.side == "remote"

    def test_duplicate_identifier_truncates_value_list(self) -> None:
        exc = DuplicateIdentifier("id", [str(i) for i in range(8)])

        assert exc.values == [str(i) for i in range(8)]
        assert "0, 1, 2, 3, 4 (+3 more)" in str(exc)

    def test_unsupported_column_type_carries_column_and_kind(self) -> None:
        exc = UnsupportedColumnType("day", "date")

        assert (exc.column, exc.kind) == ("day", "date")
        assert "'day'" in str(exc)
