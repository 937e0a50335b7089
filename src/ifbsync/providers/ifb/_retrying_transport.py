"""Blocking httpx transport that retries transient iFormBuilder failures."""

from __future__ import annotations

import logging
import random
import time

import httpx

_LOG = logging.getLogger(__name__)

# Rate limiting and gateway errors; other statuses are returned as-is.
_RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})
# Methods that may be resent after a gateway error or a failed read.
_IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})
_UNSENT_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout)
_MAX_BACKOFF_S = 4.0
_JITTER_S = 0.25


class RetryingTransport(httpx.BaseTransport):
    """Retry 429/502/503/504 responses and transport errors.

    Non-idempotent requests (record creation is a POST) are only retried on
    429 and on connect failures, where the request never reached the server.

    Each retry waits ``min(4, 2**attempt)`` seconds plus jitter, preceded by
    the server's ``Retry-After`` delay when one is sent. After *max_retries*
    retries the last response is returned, or the last transport error is
    raised. These are the only retries in ifbsync; the sync engine never
    repeats a call.
    """

    def __init__(
        self,
        *,
        transport: httpx.BaseTransport | None = None,
        max_retries: int = 3,
    ) -> None:
        self._transport = transport or httpx.HTTPTransport()
        self._max_retries = max_retries

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        attempt = 0
        while True:
            try:
                response = self._transport.handle_request(request)
            except httpx.TransportError as exc:
                if attempt >= self._max_retries or not self._can_resend(request, exc):
                    raise
                _LOG.warning("%s %s failed: %s", request.method, request.url.path, exc)
                self._sleep_backoff(attempt)
                attempt += 1
                continue

            if attempt >= self._max_retries or not self._should_retry(request, response.status_code):
                return response

            _LOG.warning("%s %s returned HTTP %d", request.method, request.url.path, response.status_code)
            delay = self._parse_retry_after(response)
            response.close()
            if delay > 0:
                time.sleep(delay)
            self._sleep_backoff(attempt)
            attempt += 1

    def close(self) -> None:
        self._transport.close()

    @staticmethod
    def _can_resend(request: httpx.Request, exc: httpx.TransportError) -> bool:
        return request.method in _IDEMPOTENT_METHODS or isinstance(exc, _UNSENT_ERRORS)

    @staticmethod
    def _should_retry(request: httpx.Request, status_code: int) -> bool:
        if status_code not in _RETRYABLE_STATUS_CODES:
            return False
        return status_code == 429 or request.method in _IDEMPOTENT_METHODS

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float:
        # Only the delta-seconds form is honoured; HTTP dates are ignored.
        try:
            return max(0.0, float(response.headers.get("Retry-After", "0")))
        except ValueError:
            return 0.0

    @staticmethod
    def _sleep_backoff(attempt: int) -> None:
        seconds = min(_MAX_BACKOFF_S, float(2**attempt)) + random.uniform(0.0, _JITTER_S)
        _LOG.warning("Retrying iFormBuilder request in %.1fs (retry %d)", seconds, attempt + 1)
        time.sleep(seconds)
