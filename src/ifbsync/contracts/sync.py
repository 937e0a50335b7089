"""Models for sync results."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SyncResult(BaseModel):
    """Value returned by :meth:`SyncEngine.sync`.

    Counts are candidate counts: they are computed (and logged) before the
    corresponding mutation is attempted. ``updated`` and ``deleted`` stay zero
    when the matching flag is off.
    """

    page_id: int
    page_name: str
    page_created: bool = False
    fields: list[str] = Field(default_factory=list)
    remote_records: int = 0
    inserted: int = 0
    updated: int = 0
    deleted: int = 0
    dry_run: bool = False
