"""Configuration contracts."""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator, model_validator

MAX_PAGE_SIZE = 1000
"""Largest record batch the records API returns per request."""


class IfbSyncConfig(BaseModel):
    """Connection and behaviour settings for a sync run.

    Attributes:
        server_name: iFormBuilder server name (``<server_name>.iformbuilder.com``).
        profile_id: Profile that owns the pages.
        auth: Token source, either ``"env"`` (``IFB_ACCESS_TOKEN``) or ``"token"``.
        token: Access token, required when ``auth == "token"``.
        page_size: Record batch size used when fetching remote records.
        timeout_s: Per-request HTTP timeout in seconds.
        max_retries: Transport-level retries for transient HTTP failures.
        timezone: IANA zone used to render dates in metadata reports.
    """

    server_name: str
    profile_id: int = Field(gt=0)
    auth: str = "env"
    token: str | None = None
    page_size: int = Field(default=MAX_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    timeout_s: float = Field(default=60.0, gt=0)
    max_retries: int = Field(default=3, ge=0, le=10)
    timezone: str = "UTC"

    model_config = {"frozen": True}

    @field_validator("server_name")
    @classmethod
    def validate_server_name(cls, value: str) -> str:
        value = value.strip()
        if not value or "/" in value or "." in value:
            raise ValueError("server_name must be the bare server name, e.g. 'acme'")
        return value

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {value}") from exc
        return value

    @model_validator(mode="after")
    def validate_auth_token(self) -> IfbSyncConfig:
        token = (self.token or "").strip()
        if self.auth == "token":
            if not token:
                raise ValueError("token auth requires a non-empty token")
            return self
        if token:
            raise ValueError("token must be unset when auth is not 'token'")
        if self.auth not in {"env", "token"}:
            raise ValueError("auth must be one of: env, token")
        return self

    @property
    def base_url(self) -> str:
        return f"https://{self.server_name}.iformbuilder.com/exzact/api/v60"
