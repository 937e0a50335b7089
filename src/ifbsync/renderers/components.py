"""Reusable Markdown components for metadata reports."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo


def is_blank(value: Any) -> bool:
    """True for values a report should leave out (``None``, ``""``, empty lists)."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list | dict):
        return not value
    return False


def cell(value: Any) -> str:
    """Render a value as a single Markdown table cell."""
    text = str(value)
    return text.replace("|", "\\|").replace("\r\n", "<br>").replace("\n", "<br>")


def markdown_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    """Render a pipe table.

    Args:
        headers: Column headers.
        rows: Row values, one sequence per row.

    Returns:
        Markdown table string without a trailing newline.
    """
    lines = [
        "| " + " | ".join(cell(h) for h in headers) + " |",
        "|" + "|".join("---" for _ in headers) + "|",
    ]
    lines.extend("| " + " | ".join(cell(v) for v in row) + " |" for row in rows)
    return "\n".join(lines)


def local_time(value: Any, tz: ZoneInfo) -> Any:
    """Convert an ISO-8601 timestamp to *tz*; other values pass through."""
    if not isinstance(value, str):
        return value
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return value
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=ZoneInfo("UTC"))
    return parsed.astimezone(tz).strftime("%Y-%m-%d %H:%M:%S %Z")
