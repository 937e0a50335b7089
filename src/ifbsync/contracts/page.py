"""Remote page, element and record contracts."""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, Field


class ElementType(IntEnum):
    """iFormBuilder element ``data_type`` codes."""

    TEXT = 1
    NUMBER = 2
    DATE = 3
    TIME = 4
    DATE_TIME = 5
    TOGGLE = 6
    SELECT = 7
    PICK_LIST = 8
    MULTI_SELECT = 9
    RANGE = 10
    IMAGE = 11
    SIGNATURE = 12
    SOUND = 13
    MANATEE_WORKS = 15
    LABEL = 16
    DIVIDER = 17
    SUBFORM = 18
    TEXT_AREA = 19
    PHONE = 20
    SSN = 21
    EMAIL = 22
    ZIP_CODE = 23
    ASSIGN_TO = 24
    UNIQUE_ID = 25
    DRAWING = 28
    MAGSTRIPE = 30
    RFID = 31
    ATTACHMENT = 32
    READ_ONLY = 33
    IMAGE_LABEL = 35
    LOCATION = 37
    SOCKET_SCANNER = 38
    LINEA_PRO = 39
    ETI_THERMOMETER = 42
    ESRI = 44
    THIRD_PARTY = 45
    COUNTER = 46
    TIMER = 47


ELEMENT_TYPE_LABELS: MappingProxyType[int, str] = MappingProxyType(
    {
        ElementType.TEXT: "Text",
        ElementType.NUMBER: "Number",
        ElementType.DATE: "Date",
        ElementType.TIME: "Time",
        ElementType.DATE_TIME: "Date-Time",
        ElementType.TOGGLE: "Toggle",
        ElementType.SELECT: "Select",
        ElementType.PICK_LIST: "Pick List",
        ElementType.MULTI_SELECT: "Multi-Select",
        ElementType.RANGE: "Range",
        ElementType.IMAGE: "Image",
        ElementType.SIGNATURE: "Signature",
        ElementType.SOUND: "Sound",
        ElementType.MANATEE_WORKS: "Manatee Works",
        ElementType.LABEL: "Label",
        ElementType.DIVIDER: "Divider",
        ElementType.SUBFORM: "Subform",
        ElementType.TEXT_AREA: "Text Area",
        ElementType.PHONE: "Phone",
        ElementType.SSN: "SSN",
        ElementType.EMAIL: "Email",
        ElementType.ZIP_CODE: "Zip Code",
        ElementType.ASSIGN_TO: "Assign To",
        ElementType.UNIQUE_ID: "Unique ID",
        ElementType.DRAWING: "Drawing",
        ElementType.MAGSTRIPE: "Magstripe",
        ElementType.RFID: "RFID",
        ElementType.ATTACHMENT: "Attachment",
        ElementType.READ_ONLY: "Read Only",
        ElementType.IMAGE_LABEL: "Image Label",
        ElementType.LOCATION: "Location",
        ElementType.SOCKET_SCANNER: "Socket Scanner",
        ElementType.LINEA_PRO: "Linea Pro",
        ElementType.ETI_THERMOMETER: "ETI Thermometer",
        ElementType.ESRI: "ESRI",
        ElementType.THIRD_PARTY: "3rd Party",
        ElementType.COUNTER: "Counter",
        ElementType.TIMER: "Timer",
    }
)
"""Read-only display labels for element data types, built once at import."""


class PageSummary(BaseModel):
    """Entry of the profile page listing."""

    id: int
    name: str
    label: str | None = None


class RemoteField(BaseModel):
    """Field descriptor of a remote page (an element)."""

    name: str
    data_type: int
    label: str | None = None


class RemotePage(BaseModel):
    """A resolved remote page and its schema."""

    id: int
    name: str
    label: str
    fields: list[RemoteField] = Field(default_factory=list)

    @property
    def field_names(self) -> list[str]:
        return [field.name for field in self.fields]


class ElementInput(BaseModel):
    """Payload for creating an element on a page."""

    name: str
    label: str
    description: str = ""
    data_type: ElementType


class RemoteRecord(BaseModel):
    """A fetched remote record: its id plus the requested field values."""

    id: int
    values: dict[str, Any] = Field(default_factory=dict)


class RecordUpdate(BaseModel):
    """Changed field values for one existing remote record."""

    record_id: int
    uid_value: str
    values: dict[str, Any]


class MutationSet(BaseModel):
    """The three disjoint mutation groups derived once per sync."""

    fields: list[str]
    to_insert: list[dict[str, Any]] = Field(default_factory=list)
    to_update: list[RecordUpdate] = Field(default_factory=list)
    to_delete: list[RemoteRecord] = Field(default_factory=list)
