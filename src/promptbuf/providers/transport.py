"""Blocking HTTP POST used by every provider adapter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120.0


@dataclass(frozen=True)
class HttpResponse:
    """Status code and raw body of a finished request."""

    status: int
    body: bytes | str = b""

    @property
    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8", errors="replace")
        return self.body


class HttpTransport(Protocol):
    def post(self, url: str, headers: dict[str, str], body: dict[str, Any]) -> HttpResponse:
        """POST ``body`` as JSON and return the response.

        Raises:
            TransportError: Connection, DNS or timeout failure.
        """
        ...


class HttpxTransport:
    """HttpTransport backed by ``httpx.post``."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._timeout = timeout

    def post(self, url: str, headers: dict[str, str], body: dict[str, Any]) -> HttpResponse:
        import httpx

        from promptbuf.providers.base import TransportError

        try:
            resp = httpx.post(url, headers=headers, json=body, timeout=self._timeout)
        except (httpx.TransportError, httpx.InvalidURL, OSError) as e:
            log.warning("POST %s failed: %s", url, e)
            raise TransportError(f"Could not reach {url}: {e}") from e
        return HttpResponse(status=resp.status_code, body=resp.content)
