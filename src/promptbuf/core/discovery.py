"""Find a reachable local Ollama endpoint.

The result is computed once per resolver and cached, including a negative
result. The module-level default resolver makes that once per process.
"""

from __future__ import annotations

import ipaddress
import logging
import os
import socket
import threading
import time
from collections.abc import Callable, Sequence
from urllib.parse import urlsplit

log = logging.getLogger(__name__)

ENV_OVERRIDE = "PROMPTBUF_OLLAMA_URL"

FALLBACK_URLS: tuple[str, ...] = (
    "http://localhost:11434/",
    "http://127.0.0.1:11434/",
    "http://host.docker.internal:11434/",
)

PROBE_TIMEOUT = 0.2  # seconds


def _lookup(host: str, port: int, timeout: float) -> str | None:
    """Resolve ``host`` to one address, giving up after ``timeout`` seconds.

    ``getaddrinfo`` has no timeout of its own, so name lookups run on a
    daemon thread that is abandoned if it overruns.
    """
    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        pass

    found: list[str] = []

    def run() -> None:
        try:
            infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
        except OSError:
            return
        if infos:
            found.append(infos[0][4][0])

    worker = threading.Thread(target=run, name=f"probe-lookup-{host}", daemon=True)
    worker.start()
    worker.join(timeout)
    return found[0] if found else None


def tcp_probe(url: str, timeout: float = PROBE_TIMEOUT) -> bool:
    """Check whether something accepts TCP connections at the URL's host:port.

    The timeout bounds name lookup and connect together. Never raises; any
    failure counts as "not live".
    """
    deadline = time.monotonic() + timeout
    try:
        parts = urlsplit(url)
        host = parts.hostname
        if not host:
            return False
        port = parts.port or (443 if parts.scheme == "https" else 80)
        address = _lookup(host, port, timeout)
        if address is None:
            log.debug("Probe could not resolve %s in time", host)
            return False
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return False
        with socket.create_connection((address, port), timeout=remaining):
            return True
    except Exception:
        log.debug("Probe failed for %s", url, exc_info=True)
        return False


class EndpointResolver:
    """Resolve the local service URL: env override > configured URL > fallbacks."""

    def __init__(
        self,
        configured_url: str | None = None,
        fallback_urls: Sequence[str] = FALLBACK_URLS,
        probe: Callable[[str], bool] | None = None,
    ) -> None:
        self._configured_url = configured_url
        self._fallback_urls = tuple(fallback_urls)
        self._probe = probe or tcp_probe
        self._lock = threading.Lock()
        self._resolved = False
        self._url: str | None = None

    def resolve(self) -> str | None:
        """Return the endpoint URL, or None if nothing is reachable."""
        if self._resolved:
            return self._url
        with self._lock:
            if not self._resolved:
                self._url = self._discover()
                self._resolved = True
        return self._url

    def reset(self) -> None:
        """Forget the cached result so the next resolve() probes again."""
        with self._lock:
            self._resolved = False
            self._url = None

    def _discover(self) -> str | None:
        override = os.environ.get(ENV_OVERRIDE)
        if override:
            log.info("Using %s=%s", ENV_OVERRIDE, override)
            return override

        if self._configured_url and self._probe(self._configured_url):
            log.info("Local service found at configured URL %s", self._configured_url)
            return self._configured_url

        for url in self._fallback_urls:
            if self._probe(url):
                log.info("Local service found at %s", url)
                return url

        log.warning("No local service reachable (tried %d candidates)", len(self._fallback_urls))
        return None


_default_lock = threading.Lock()
_default: EndpointResolver | None = None


def default_resolver(configured_url: str | None = None) -> EndpointResolver:
    """Return the process-wide resolver, creating it on first use.

    Only the first caller's ``configured_url`` is used.
    """
    global _default
    with _default_lock:
        if _default is None:
            _default = EndpointResolver(configured_url=configured_url)
        return _default


def resolve_endpoint(configured_url: str | None = None) -> str | None:
    """Resolve the local service URL through the process-wide resolver."""
    return default_resolver(configured_url).resolve()


def reset_default_resolver() -> None:
    """Drop the process-wide resolver (tests, config reloads)."""
    global _default
    with _default_lock:
        _default = None
