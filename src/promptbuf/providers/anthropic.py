"""Anthropic adapter: Messages API over plain HTTP."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from promptbuf.core.models import Message, ProviderConfig
from promptbuf.providers.base import (
    AuthMissing,
    MalformedResponse,
    ProviderInfo,
    check_status,
    decode_json,
    get_api_key,
)
from promptbuf.providers.transport import HttpTransport, HttpxTransport

log = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_BASE_URL = "https://api.anthropic.com"
API_VERSION = "2023-06-01"
MAX_TOKENS = 4096


def build_body(
    messages: Sequence[Message],
    system: str | None,
    model: str,
) -> dict[str, Any]:
    """Build the Messages API body. ``system`` is left out entirely when empty."""
    body: dict[str, Any] = {
        "messages": [m.to_dict() for m in messages],
        "model": model,
        "max_tokens": MAX_TOKENS,
    }
    if system:
        body["system"] = system
    return body


class AnthropicAPI:
    """Send messages to Claude via the Anthropic Messages API."""

    def __init__(
        self,
        config: ProviderConfig | None = None,
        transport: HttpTransport | None = None,
    ) -> None:
        config = config or ProviderConfig(provider="anthropic")
        self._model = config.model or DEFAULT_MODEL
        self._api_key = config.api_key or get_api_key("anthropic")
        self._base_url = (config.base_url or DEFAULT_BASE_URL).rstrip("/")
        self._transport = transport or HttpxTransport()

    @property
    def name(self) -> str:
        return "anthropic"

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(
            name="anthropic",
            display_name="Claude (Anthropic)",
            requires_api_key=True,
            key_url="https://console.anthropic.com/settings/keys",
        )

    def send(
        self,
        messages: Sequence[Message],
        system: str | None = None,
        model: str | None = None,
    ) -> str:
        if not self._api_key:
            raise AuthMissing(
                "No API key configured for Anthropic.\n"
                "Claude API access requires an Anthropic API key "
                "(separate from a Claude Pro subscription).\n"
                "Get your key at: https://console.anthropic.com/settings/keys\n"
                "Then export it as ANTHROPIC_API_KEY."
            )

        use_model = model or self._model
        url = f"{self._base_url}/v1/messages"
        log.debug("POST %s (model=%s, %d messages)", url, use_model, len(messages))

        resp = self._transport.post(
            url,
            {
                "x-api-key": self._api_key,
                "anthropic-version": API_VERSION,
                "content-type": "application/json",
            },
            build_body(messages, system, use_model),
        )
        check_status(resp, "Anthropic")
        data = decode_json(resp, "Anthropic")

        # {"content": [{"type": "text", "text": "..."}]}
        try:
            text = data["content"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponse("Anthropic response has no content[0].text") from e
        if not isinstance(text, str):
            raise MalformedResponse("Anthropic content[0].text is not text")
        return text

    def is_available(self) -> bool:
        return bool(self._api_key)
