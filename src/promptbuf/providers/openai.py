"""OpenAI adapter: Chat Completions over plain HTTP."""

from __future__ import annotations

import logging
from collections.abc import Sequence

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

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_BASE_URL = "https://api.openai.com"

# Models that accept a dedicated system role. Others get the system prompt
# folded into a leading user message.
SYSTEM_ROLE_MODELS = frozenset({
    "gpt-3.5-turbo",
    "gpt-4",
    "gpt-4-turbo",
    "gpt-4o",
    "gpt-4o-mini",
    "gpt-4.1",
    "gpt-4.1-mini",
})

SYSTEM_PROMPT_MARKER = "SYSTEM_PROMPT: "

# UTF-8 punctuation that was decoded as cp1252 somewhere upstream
_MOJIBAKE: tuple[tuple[str, str], ...] = (
    ("â€”", "—"),  # em dash
    ("â€“", "–"),  # en dash
    ("â€œ", "“"),  # left double quote
    ("â€\u009d", "”"),  # right double quote
    ("â€˜", "‘"),  # left single quote
    ("â€™", "’"),  # right single quote
    ("â€¦", "…"),  # ellipsis
)


def fix_mojibake(text: str) -> str:
    """Repair the mis-decoded dash, quote and ellipsis sequences."""
    for bad, good in _MOJIBAKE:
        text = text.replace(bad, good)
    return text


def build_messages(
    messages: Sequence[Message],
    system: str | None,
    model: str,
) -> list[dict[str, str]]:
    """Convert to the Chat Completions ``messages`` array."""
    api_messages = [m.to_dict() for m in messages]
    if not system:
        return api_messages
    if model in SYSTEM_ROLE_MODELS:
        head = {"role": "system", "content": system}
    else:
        head = {"role": "user", "content": SYSTEM_PROMPT_MARKER + system}
    return [head, *api_messages]


class OpenAIAPI:
    """Send messages to the OpenAI Chat Completions API."""

    def __init__(
        self,
        config: ProviderConfig | None = None,
        transport: HttpTransport | None = None,
    ) -> None:
        config = config or ProviderConfig(provider="openai")
        self._model = config.model or DEFAULT_MODEL
        self._api_key = config.api_key or get_api_key("openai")
        self._base_url = (config.base_url or DEFAULT_BASE_URL).rstrip("/")
        self._transport = transport or HttpxTransport()

    @property
    def name(self) -> str:
        return "openai"

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(
            name="openai",
            display_name="ChatGPT (OpenAI)",
            requires_api_key=True,
            key_url="https://platform.openai.com/api-keys",
        )

    def send(
        self,
        messages: Sequence[Message],
        system: str | None = None,
        model: str | None = None,
    ) -> str:
        if not self._api_key:
            raise AuthMissing(
                "No API key configured for OpenAI.\n"
                "Get your key at: https://platform.openai.com/api-keys\n"
                "Then export it as OPENAI_API_KEY."
            )

        use_model = model or self._model
        url = f"{self._base_url}/v1/chat/completions"
        log.debug("POST %s (model=%s, %d messages)", url, use_model, len(messages))

        resp = self._transport.post(
            url,
            {
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
            {
                "messages": build_messages(messages, system, use_model),
                "model": use_model,
            },
        )
        check_status(resp, "OpenAI")
        data = decode_json(resp, "OpenAI")

        # {"choices": [{"message": {"content": "..."}}]}
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponse("OpenAI response has no choices[0].message.content") from e
        if not isinstance(content, str):
            raise MalformedResponse("OpenAI choices[0].message.content is not text")
        return fix_mojibake(content)

    def is_available(self) -> bool:
        return bool(self._api_key)
