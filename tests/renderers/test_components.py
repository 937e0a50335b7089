from __future__ import annotations

from zoneinfo import ZoneInfo

import pytest

from ifbsync.renderers.components import cell, is_blank, local_time, markdown_table


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, True), ("", True), ("  ", True), ([], True), (0, False), ("x", False)],
)
def test_is_blank(value: object, expected: bool) -> None:
    assert is_blank(value) is expected


def test_cell_escapes_pipes_and_newlines() -> None:
    assert cell("a|b\nc") == "a\\|b<br>c"


def test_markdown_table() -> None:
    table = markdown_table(("Attribute", "Value"), [("name", "fish"), ("id", 3)])

    assert table.splitlines() == [
        "| Attribute | Value |",
        "|---|---|",
        "| name | fish |",
        "| id | 3 |",
    ]


def test_local_time_converts_zone() -> None:
    rendered = local_time("2024-05-01T08:30:00+00:00", ZoneInfo("America/Los_Angeles"))

    assert rendered == "2024-05-01 01:30:00 PDT"


def test_local_time_passes_through_non_timestamps() -> None:
    tz = ZoneInfo("UTC")

    assert local_time("not a date", tz) == "not a date"
    assert local_time(12, tz) == 12
