"""iFormBuilder provider adapter (REST API v60)."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from types import TracebackType
from typing import Any

import httpx

from ifbsync.contracts.exceptions import ProviderError
from ifbsync.contracts.page import ElementInput, PageSummary
from ifbsync.contracts.provider import Provider
from ifbsync.providers.ifb.client import IfbClient

_LOG = logging.getLogger(__name__)

_LIST_LIMIT = 100
_RECORD_WRITE_LIMIT = 1000
_DELETE_CHUNK = 100

ELEMENT_ATTRIBUTES = (
    "name",
    "label",
    "description",
    "data_type",
    "data_size",
    "optionlist_id",
    "sort_order",
    "required",
    "reference_id_1",
    "reference_id_2",
    "reference_id_3",
    "reference_id_4",
    "reference_id_5",
    "attachment_link",
    "read_only",
    "priority",
    "keyboard_type",
    "dynamic_value",
    "condition_value",
    "client_validation",
    "is_disabled",
    "on_change",
    "created_date",
    "created_by",
    "modified_date",
    "modified_by",
    "widget_type",
    "sub_data_type",
)
"""Element attributes requested when a caller asks for all of them."""


class IfbProvider(Provider):
    def __init__(
        self,
        *,
        base_url: str,
        profile_id: int,
        token: str,
        timeout_s: float = 60.0,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._profile_id = profile_id
        self._client = IfbClient(
            base_url,
            token,
            timeout_s=timeout_s,
            max_retries=max_retries,
            transport=transport,
        )

    def __enter__(self) -> IfbProvider:
        self._client.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._client.close()

    @property
    def _profile_path(self) -> str:
        return f"/profiles/{self._profile_id}"

    def _page_path(self, page_id: int) -> str:
        return f"{self._profile_path}/pages/{page_id}"

    def list_pages(self) -> list[PageSummary]:
        rows = self._list_all(f"{self._profile_path}/pages", fields="name,label")
        return [PageSummary.model_validate(row) for row in rows]

    def get_page(self, page_id: int) -> dict[str, Any]:
        return self._expect_object(self._client.request("GET", self._page_path(page_id)), "page")

    def create_page(self, name: str, label: str) -> int:
        payload = self._client.request("POST", f"{self._profile_path}/pages", json={"name": name, "label": label})
        return self._require_id(payload, "create_page")

    def create_element(self, page_id: int, element: ElementInput) -> int:
        payload = self._client.request(
            "POST",
            f"{self._page_path(page_id)}/elements",
            json=element.model_dump(mode="json"),
        )
        return self._require_id(payload, "create_element")

    def list_elements(self, page_id: int, fields: Sequence[str] | None = None) -> list[dict[str, Any]]:
        wanted = ELEMENT_ATTRIBUTES if fields is None else ("name", "data_type", *fields)
        return self._list_all(f"{self._page_path(page_id)}/elements", fields=",".join(dict.fromkeys(wanted)))

    def fetch_records(
        self,
        page_id: int,
        fields: Sequence[str],
        *,
        limit: int,
        offset: int = 0,
        since_id: int = 0,
    ) -> list[dict[str, Any]]:
        # ":<" sorts ascending so the batch holds the lowest ids above the cursor.
        grammar = ",".join([f'id(>"{since_id}"):<', *(field for field in fields if field != "id")])
        payload = self._client.request(
            "GET",
            f"{self._page_path(page_id)}/records",
            params={"fields": grammar, "limit": limit, "offset": offset},
        )
        return self._expect_list(payload, "records")

    def create_records(self, page_id: int, rows: Sequence[dict[str, Any]]) -> list[int]:
        created: list[int] = []
        for start in range(0, len(rows), _RECORD_WRITE_LIMIT):
            chunk = rows[start : start + _RECORD_WRITE_LIMIT]
            body = [{"fields": self._record_fields(row, skip_empty=True)} for row in chunk]
            payload = self._client.request("POST", f"{self._page_path(page_id)}/records", json=body)
            created.extend(self._ids(payload, "create_records"))
            _LOG.debug("Created %d record(s) on page %d", len(chunk), page_id)
        return created

    def update_records(self, page_id: int, updates: Sequence[tuple[int, dict[str, Any]]]) -> list[int]:
        updated: list[int] = []
        for start in range(0, len(updates), _RECORD_WRITE_LIMIT):
            chunk = updates[start : start + _RECORD_WRITE_LIMIT]
            body = [
                {"id": record_id, "fields": self._record_fields(values, skip_empty=False)}
                for record_id, values in chunk
            ]
            payload = self._client.request("PUT", f"{self._page_path(page_id)}/records", json=body)
            updated.extend(self._ids(payload, "update_records"))
        return updated

    def delete_records(self, page_id: int, record_ids: Sequence[int]) -> list[int]:
        deleted: list[int] = []
        for start in range(0, len(record_ids), _DELETE_CHUNK):
            chunk = record_ids[start : start + _DELETE_CHUNK]
            selector = "|".join(f'="{record_id}"' for record_id in chunk)
            payload = self._client.request(
                "DELETE",
                f"{self._page_path(page_id)}/records",
                params={"fields": f"id({selector})", "limit": len(chunk)},
            )
            deleted.extend(self._ids(payload, "delete_records"))
        return deleted

    def get_option_list(self, option_list_id: int) -> dict[str, Any]:
        payload = self._client.request("GET", f"{self._profile_path}/optionlists/{option_list_id}")
        return self._expect_object(payload, "option list")

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _list_all(self, path: str, *, fields: str) -> list[dict[str, Any]]:
        rows: list[dict[str, Any]] = []
        offset = 0
        while True:
            payload = self._client.request(
                "GET", path, params={"fields": fields, "limit": _LIST_LIMIT, "offset": offset}
            )
            batch = self._expect_list(payload, path)
            rows.extend(batch)
            if len(batch) < _LIST_LIMIT:
                return rows
            offset += _LIST_LIMIT

    @staticmethod
    def _record_fields(values: dict[str, Any], *, skip_empty: bool) -> list[dict[str, Any]]:
        fields = []
        for name, value in values.items():
            if value is None:
                if skip_empty:
                    continue
                value = ""
            fields.append({"element_name": name, "value": value})
        return fields

    @staticmethod
    def _require_id(payload: Any, operation: str) -> int:
        if not isinstance(payload, dict) or "id" not in payload:
            raise ProviderError(f"{operation} response has no id: {payload!r}")
        return int(payload["id"])

    @classmethod
    def _ids(cls, payload: Any, operation: str) -> list[int]:
        if isinstance(payload, dict):
            payload = [payload]
        return [cls._require_id(item, operation) for item in cls._expect_list(payload, operation)]

    @staticmethod
    def _expect_list(payload: Any, what: str) -> list[dict[str, Any]]:
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise ProviderError(f"Expected a JSON array for {what}, got {type(payload).__name__}")
        return payload

    @staticmethod
    def _expect_object(payload: Any, what: str) -> dict[str, Any]:
        if not isinstance(payload, dict):
            raise ProviderError(f"Expected a JSON object for {what}, got {type(payload).__name__}")
        return payload
