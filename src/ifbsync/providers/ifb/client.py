"""Thin httpx wrapper around the iFormBuilder REST API."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from ifbsync.contracts.exceptions import AuthenticationError, ProviderError
from ifbsync.providers.ifb._retrying_transport import RetryingTransport

logger = logging.getLogger(__name__)


class IfbClient:
    """JSON-over-HTTP client bound to one server and access token.

    Use as a context manager so the underlying connection pool is closed::

        with IfbClient(base_url, token) as client:
            pages = client.request("GET", "/profiles/1/pages")
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout_s: float = 60.0,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> IfbClient:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def open(self) -> None:
        if self._client is not None:
            return
        self._client = httpx.Client(
            base_url=self._base_url,
            headers={"Authorization": f"Bearer {self._token}", "Accept": "application/json"},
            timeout=self._timeout_s,
            transport=RetryingTransport(transport=self._transport, max_retries=self._max_retries),
        )

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises:
            AuthenticationError: On HTTP 401/403.
            ProviderError: On any other HTTP or transport failure.
        """
        if self._client is None:
            raise ProviderError("IfbClient is not open; use it as a context manager")
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = self._client.request(method, path, params=params, json=json)
        except httpx.TransportError as exc:
            raise ProviderError(f"{method} {path} failed: {exc}") from exc

        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"iFormBuilder rejected the access token ({response.status_code}) for {method} {path}"
            )
        if response.is_error:
            raise ProviderError(f"{method} {path} failed with HTTP {response.status_code}: {response.text[:500]}")
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(f"{method} {path} returned invalid JSON") from exc
