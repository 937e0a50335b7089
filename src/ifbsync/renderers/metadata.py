"""Markdown metadata reports for a page and its subforms."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from ifbsync.contracts.page import ELEMENT_TYPE_LABELS, ElementType
from ifbsync.contracts.provider import Provider
from ifbsync.renderers.components import is_blank, local_time, markdown_table

logger = logging.getLogger(__name__)

_DATE_ATTRIBUTES = ("created_date", "modified_date")


def report_path(filename: str | Path) -> Path:
    """Append ``.md`` unless the name already ends in ``.md`` or ``.Rmd``."""
    path = Path(filename)
    if path.suffix in (".md", ".Rmd"):
        return path
    return path.with_name(path.name + ".md")


class MetadataReporter:
    """Build a Markdown document describing a page, its elements and subforms.

    Subforms are walked through an explicit stack: each page id is rendered at
    most once, so circular subform references terminate. Pages appear in
    depth-first order, children in element order.

    Args:
        provider: Source of page, element and option-list resources.
        type_labels: Read-only mapping of element ``data_type`` codes to labels.
        tz: Zone used to render ``created_date`` / ``modified_date``.
    """

    def __init__(
        self,
        provider: Provider,
        *,
        type_labels: Mapping[int, str] = ELEMENT_TYPE_LABELS,
        tz: ZoneInfo | None = None,
    ) -> None:
        self._provider = provider
        self._type_labels = type_labels
        self._tz = tz or ZoneInfo("UTC")
        self._option_lists: dict[int, str] = {}

    def write(self, page_id: int, filename: str | Path, *, subforms: bool = True) -> tuple[Path, list[int]]:
        """Render the report to *filename* (overwriting it).

        Returns:
            The written path and the page ids in the order they were rendered.
        """
        path = report_path(filename)
        text, visited = self.render(page_id, subforms=subforms)
        path.write_text(text, encoding="utf-8")
        logger.info("Wrote metadata for %d page(s) to %s", len(visited), path)
        return path, visited

    def render(self, page_id: int, *, subforms: bool = True) -> tuple[str, list[int]]:
        sections: list[str] = []
        visited: list[int] = []
        seen: set[int] = set()
        stack: list[tuple[int, bool]] = [(page_id, False)]

        while stack:
            current, is_sub = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            visited.append(current)

            section, children = self._render_page(current, is_sub=is_sub)
            sections.append(section)
            if subforms:
                stack.extend((child, True) for child in reversed(children) if child not in seen)

        return "\n".join(sections), visited

    def _render_page(self, page_id: int, *, is_sub: bool) -> tuple[str, list[int]]:
        page = self._provider.get_page(page_id)
        elements = self._provider.list_elements(page_id)
        title = "Sub Form" if is_sub else "Parent Form"

        lines = [f"# {title}: {page.get('label') or page.get('name') or page_id}", ""]
        lines.append(markdown_table(("Attribute", "Value"), self._attributes(page)))
        lines.extend(["", "## Element Details", ""])

        children: list[int] = []
        for element in sorted(elements, key=lambda e: (e.get("sort_order") is None, e.get("sort_order") or 0)):
            if _as_int(element.get("data_type")) == ElementType.SUBFORM and element.get("data_size"):
                children.append(int(element["data_size"]))
            lines.append(f"### {element.get('label') or element.get('name')}")
            lines.append("")
            lines.append(markdown_table(("Attribute", "Value"), self._element_attributes(element)))
            lines.append("")
        return "\n".join(lines), children

    def _attributes(self, resource: dict[str, Any]) -> list[tuple[str, Any]]:
        rows = []
        for key, value in resource.items():
            if is_blank(value):
                continue
            if key in _DATE_ATTRIBUTES:
                value = local_time(value, self._tz)
            rows.append((key, value))
        return rows

    def _element_attributes(self, element: dict[str, Any]) -> list[tuple[str, Any]]:
        rows = []
        for key, value in self._attributes(element):
            if key == "data_type":
                value = self._type_labels.get(_as_int(value), f"Unknown ({value})")
            elif key == "optionlist_id" and value:
                value = self._option_list_name(int(value))
            rows.append((key, value))
        return rows

    def _option_list_name(self, option_list_id: int) -> str:
        if option_list_id not in self._option_lists:
            option_list = self._provider.get_option_list(option_list_id)
            self._option_lists[option_list_id] = option_list.get("name") or str(option_list_id)
        return self._option_lists[option_list_id]


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
