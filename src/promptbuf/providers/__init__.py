"""LLM provider adapters: Ollama (local), OpenAI, Anthropic.

All three are plain blocking HTTP calls, one request per turn. No streaming,
no retries.
"""

from promptbuf.providers.base import (
    APIError,
    AuthMissing,
    ChatProvider,
    EndpointUnavailable,
    MalformedResponse,
    ProviderError,
    ProviderInfo,
    TransportError,
    UnknownProvider,
)
from promptbuf.providers.registry import get_provider, list_providers, resolve_kind

__all__ = [
    "APIError",
    "AuthMissing",
    "ChatProvider",
    "EndpointUnavailable",
    "MalformedResponse",
    "ProviderError",
    "ProviderInfo",
    "TransportError",
    "UnknownProvider",
    "get_provider",
    "list_providers",
    "resolve_kind",
]
