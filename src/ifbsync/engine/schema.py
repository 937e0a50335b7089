"""Name normalization and local-to-remote schema mapping."""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

from ifbsync.contracts.dataset import ColumnKind, LocalDataset
from ifbsync.contracts.exceptions import UnsupportedColumnType
from ifbsync.contracts.page import ElementInput, ElementType

_SEPARATOR_RUN = re.compile(r"[\W_]+")

ELEMENT_TYPES_BY_KIND: Mapping[ColumnKind, ElementType] = MappingProxyType(
    {
        ColumnKind.TEXT: ElementType.TEXT,
        ColumnKind.INTEGER: ElementType.NUMBER,
        ColumnKind.FLOAT: ElementType.NUMBER,
        ColumnKind.DATETIME: ElementType.DATE_TIME,
        ColumnKind.BOOLEAN: ElementType.TOGGLE,
    }
)


def normalize_name(name: str) -> str:
    """Lower-case *name* and collapse punctuation/whitespace runs to one ``_``.

    >>> normalize_name("My   Survey!")
    'my_survey'
    """
    normalized = _SEPARATOR_RUN.sub("_", name).strip("_").lower()
    if not normalized:
        raise ValueError(f"name {name!r} is empty after normalization")
    return normalized


def default_label(name: str) -> str:
    """``"fish_count"`` -> ``"Fish Count"``."""
    return name.replace("_", " ").title()


def element_type_for(kind: ColumnKind, *, column: str = "?") -> ElementType:
    try:
        return ELEMENT_TYPES_BY_KIND[kind]
    except KeyError:
        raise UnsupportedColumnType(column, str(kind)) from None


def elements_for_dataset(
    dataset: LocalDataset,
    kinds: Mapping[str, ColumnKind],
    labels: Mapping[str, str] | None = None,
) -> list[ElementInput]:
    """Build one element per column, preserving column order.

    Every column is mapped before anything is returned, so an unsupported
    column fails the whole schema rather than a partially built one.
    """
    labels = labels or {}
    return [
        ElementInput(
            name=column.lower(),
            label=labels.get(column) or default_label(column),
            data_type=element_type_for(kinds[column], column=column),
        )
        for column in dataset.columns
    ]
