"""Local tabular dataset contract."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ColumnKind(StrEnum):
    """Value kind of a local column."""

    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    DATETIME = "datetime"
    DATE = "date"
    TIME = "time"
    BOOLEAN = "boolean"
    UNKNOWN = "unknown"


TEMPORAL_KINDS = frozenset({ColumnKind.DATETIME, ColumnKind.DATE, ColumnKind.TIME})


@dataclass(frozen=True)
class LocalDataset:
    """An ordered table of named columns.

    Rows are stored as mappings keyed by column name. Columns missing from a row
    read as ``None``. ``kinds`` optionally pins the kind of a column instead of
    inferring it from values (useful for all-null columns).

    The dataset is never mutated by ifbsync; transformations return new instances.
    """

    columns: tuple[str, ...]
    rows: tuple[Mapping[str, Any], ...] = ()
    kinds: Mapping[str, ColumnKind] = field(default_factory=dict)

    def __post_init__(self) -> None:
        lowered = [name.lower() for name in self.columns]
        if len(set(lowered)) != len(lowered):
            raise ValueError(f"column names must be unique case-insensitively: {list(self.columns)}")
        unknown = set(self.kinds) - set(self.columns)
        if unknown:
            raise ValueError(f"kinds declared for unknown columns: {sorted(unknown)}")

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        *,
        columns: Sequence[str] | None = None,
        kinds: Mapping[str, ColumnKind] | None = None,
    ) -> LocalDataset:
        """Build a dataset from row mappings.

        When *columns* is omitted, the column order is the first-seen key order
        across all records.
        """
        rows = tuple(dict(record) for record in records)
        if columns is None:
            seen: dict[str, None] = {}
            for row in rows:
                for key in row:
                    seen.setdefault(key, None)
            columns = list(seen)
        return cls(columns=tuple(columns), rows=rows, kinds=dict(kinds or {}))

    def __len__(self) -> int:
        return len(self.rows)

    def find_column(self, name: str) -> str | None:
        """Return the actual column name matching *name* case-insensitively."""
        wanted = name.lower()
        for column in self.columns:
            if column.lower() == wanted:
                return column
        return None

    def values(self, column: str) -> list[Any]:
        return [row.get(column) for row in self.rows]

    def records(self) -> list[dict[str, Any]]:
        """Rows as plain dicts holding every column, in column order."""
        return [{column: row.get(column) for column in self.columns} for row in self.rows]

    def with_lowercase_columns(self) -> LocalDataset:
        """Return a copy whose column names (and row keys) are lower-cased."""
        mapping = {column: column.lower() for column in self.columns}
        return LocalDataset(
            columns=tuple(mapping[column] for column in self.columns),
            rows=tuple({mapping[column]: row.get(column) for column in self.columns} for row in self.rows),
            kinds={mapping[column]: kind for column, kind in self.kinds.items()},
        )
