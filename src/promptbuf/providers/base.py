"""Chat provider protocol, error taxonomy and shared helpers.

Each adapter turns the uniform message sequence into one provider's request
body, makes a single blocking POST through an ``HttpTransport``, and pulls
the reply text back out of that provider's JSON envelope.

Cloud API access requires an API key from the provider:
- OpenAI: https://platform.openai.com/api-keys ($OPENAI_API_KEY)
- Anthropic: https://console.anthropic.com/settings/keys ($ANTHROPIC_API_KEY)
- Ollama: no key, runs locally (default localhost:11434)
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from promptbuf.core.models import Message
from promptbuf.providers.transport import HttpResponse

log = logging.getLogger(__name__)

API_KEY_ENV: dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


# --- Errors ---


class ProviderError(Exception):
    """Base error for anything that goes wrong talking to a provider."""

    kind = "provider_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EndpointUnavailable(ProviderError):
    """No reachable local service."""

    kind = "endpoint_unavailable"


class AuthMissing(ProviderError):
    """Required API key is not configured."""

    kind = "auth_missing"


class TransportError(ProviderError):
    """Connection, DNS or timeout failure."""

    kind = "transport_error"


class MalformedResponse(ProviderError):
    """Response body is not JSON or lacks the expected field."""

    kind = "malformed_response"


class UnknownProvider(ProviderError):
    """Configured provider is not one we know how to talk to."""

    kind = "unknown_provider"


class APIError(ProviderError):
    """Provider answered with a non-2xx status."""

    kind = "api_error"

    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.status = status


# --- Protocol ---


@dataclass
class ProviderInfo:
    """Display metadata for a provider."""

    name: str
    display_name: str
    requires_api_key: bool
    key_url: str = ""


@runtime_checkable
class ChatProvider(Protocol):
    """Contract shared by the Ollama, OpenAI and Anthropic adapters."""

    @property
    def name(self) -> str:
        """Provider ID: 'ollama', 'openai', 'anthropic'."""
        ...

    @property
    def info(self) -> ProviderInfo:
        """Provider metadata."""
        ...

    def send(
        self,
        messages: Sequence[Message],
        system: str | None = None,
        model: str | None = None,
    ) -> str:
        """Send the conversation and return the reply text.

        Args:
            messages: Conversation so far, oldest first. Not modified.
            system: System prompt, if any.
            model: Model override; the adapter's default when None.

        Raises:
            ProviderError: One of its subclasses, never retried.
        """
        ...

    def is_available(self) -> bool:
        """Check if the provider is configured and reachable."""
        ...


# --- Helpers ---


def get_api_key(provider: str) -> str | None:
    """Look up an API key: environment first, then the system keyring."""
    env_name = API_KEY_ENV.get(provider)
    if env_name:
        value = os.environ.get(env_name)
        if value:
            return value
    try:
        import keyring

        return keyring.get_password("promptbuf", f"{provider}_api_key")
    except Exception:
        return None


def check_status(resp: HttpResponse, provider: str) -> None:
    """Raise APIError for anything outside 2xx."""
    if 200 <= resp.status < 300:
        return
    snippet = resp.text[:200]
    log.warning("%s returned HTTP %d", provider, resp.status)
    raise APIError(f"{provider} API error ({resp.status}): {snippet}", status=resp.status)


def decode_json(resp: HttpResponse, provider: str) -> Any:
    """Parse the response body as JSON."""
    try:
        return json.loads(resp.text)
    except ValueError as e:
        raise MalformedResponse(f"{provider} returned invalid JSON: {e}") from e
