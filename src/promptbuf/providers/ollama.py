"""Ollama adapter: local /api/generate with one flattened prompt."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from promptbuf.core.discovery import EndpointResolver, default_resolver
from promptbuf.core.models import Message, ProviderConfig
from promptbuf.providers.base import (
    EndpointUnavailable,
    MalformedResponse,
    ProviderInfo,
    check_status,
    decode_json,
)
from promptbuf.providers.transport import HttpTransport, HttpxTransport

log = logging.getLogger(__name__)

DEFAULT_MODEL = "llama3.1:8b"


def build_prompt(messages: Sequence[Message], system: str | None) -> str:
    """Flatten system prompt and conversation into the single prompt field."""
    encoded = json.dumps([m.to_dict() for m in messages], ensure_ascii=False)
    return f"SYSTEM PROMPT: {system or ''} MESSAGES: {encoded}"


class OllamaLocal:
    """Send messages to a local Ollama instance. No API key needed.

    The generate endpoint takes one prompt string rather than structured
    turns, so the whole conversation is JSON-encoded into it.
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        transport: HttpTransport | None = None,
        resolver: EndpointResolver | None = None,
    ) -> None:
        config = config or ProviderConfig(provider="ollama")
        self._model = config.model or DEFAULT_MODEL
        self._transport = transport or HttpxTransport()
        self._resolver = resolver or default_resolver(config.base_url)

    @property
    def name(self) -> str:
        return "ollama"

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(
            name="ollama",
            display_name="Ollama (local)",
            requires_api_key=False,
        )

    @property
    def base_url(self) -> str | None:
        return self._resolver.resolve()

    def send(
        self,
        messages: Sequence[Message],
        system: str | None = None,
        model: str | None = None,
    ) -> str:
        base_url = self._resolver.resolve()
        if not base_url:
            raise EndpointUnavailable(
                "Ollama is not reachable. Start it with 'ollama serve' "
                "or set PROMPTBUF_OLLAMA_URL."
            )

        url = f"{base_url.rstrip('/')}/api/generate"
        use_model = model or self._model
        log.debug("POST %s (model=%s, %d messages)", url, use_model, len(messages))

        resp = self._transport.post(
            url,
            {"Content-Type": "application/json"},
            {
                "prompt": build_prompt(messages, system),
                "stream": False,
                "model": use_model,
            },
        )
        check_status(resp, "Ollama")
        data = decode_json(resp, "Ollama")

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise MalformedResponse("Ollama response has no 'response' field")
        return text

    def is_available(self) -> bool:
        return self._resolver.resolve() is not None
