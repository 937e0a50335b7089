"""Column kind inference and value normalization.

Values sent to the records API are either whole-second epoch numbers (for
temporal columns) or text (for everything else). Each column is classified on
its own; a dataset mixing temporal and non-temporal columns keeps both forms.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any

from ifbsync.contracts.dataset import TEMPORAL_KINDS, ColumnKind, LocalDataset

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _value_kind(value: Any) -> ColumnKind:
    # bool before int, datetime before date: both are subclasses.
    if isinstance(value, bool):
        return ColumnKind.BOOLEAN
    if isinstance(value, int):
        return ColumnKind.INTEGER
    if isinstance(value, float | Decimal):
        return ColumnKind.FLOAT
    if isinstance(value, datetime):
        return ColumnKind.DATETIME
    if isinstance(value, date):
        return ColumnKind.DATE
    if isinstance(value, time):
        return ColumnKind.TIME
    if isinstance(value, str):
        return ColumnKind.TEXT
    return ColumnKind.UNKNOWN


def infer_kind(values: Iterable[Any]) -> ColumnKind:
    """Infer a column kind from its values, ignoring ``None``.

    Integers mixed with floats widen to ``FLOAT`` and dates mixed with
    datetimes to ``DATETIME``. An all-null column is ``TEXT`` and any other
    mixture is ``UNKNOWN``.
    """
    kinds = {_value_kind(value) for value in values if value is not None}
    if not kinds:
        return ColumnKind.TEXT
    if kinds == {ColumnKind.INTEGER, ColumnKind.FLOAT}:
        return ColumnKind.FLOAT
    if kinds == {ColumnKind.DATETIME, ColumnKind.DATE}:
        return ColumnKind.DATETIME
    if len(kinds) == 1:
        return kinds.pop()
    return ColumnKind.UNKNOWN


def column_kinds(dataset: LocalDataset) -> dict[str, ColumnKind]:
    """Kind of every column: declared kinds win over inferred ones."""
    return {column: dataset.kinds.get(column) or infer_kind(dataset.values(column)) for column in dataset.columns}


def is_temporal(kind: ColumnKind) -> bool:
    return kind in TEMPORAL_KINDS


def to_epoch(value: Any) -> int | None:
    """Convert a temporal value to whole seconds.

    Naive datetimes are read as UTC, dates as midnight UTC, and times as
    seconds since midnight.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return math.floor((value - _EPOCH).total_seconds())
    if isinstance(value, date):
        return math.floor((datetime(value.year, value.month, value.day, tzinfo=timezone.utc) - _EPOCH).total_seconds())
    if isinstance(value, time):
        return value.hour * 3600 + value.minute * 60 + value.second
    raise TypeError(f"not a temporal value: {value!r}")


def to_text(value: Any) -> str | None:
    """Render a value the way the records API expects text."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Decimal):
        if value.is_nan():
            return None
        if value == value.to_integral_value():
            return str(int(value))
        return str(value)
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    return str(value)


def normalize_dataset(dataset: LocalDataset, kinds: dict[str, ColumnKind] | None = None) -> LocalDataset:
    """Return a copy with temporal columns as epoch seconds and the rest as text."""
    kinds = kinds if kinds is not None else column_kinds(dataset)
    converters = {
        column: to_epoch if is_temporal(kinds[column]) else to_text for column in dataset.columns
    }
    rows = tuple(
        {column: converters[column](row.get(column)) for column in dataset.columns} for row in dataset.rows
    )
    return LocalDataset(columns=dataset.columns, rows=rows, kinds=dataset.kinds)
