"""Provider registry: provider kind -> adapter class."""

from __future__ import annotations

import logging

from promptbuf.core.models import ProviderConfig, ProviderKind
from promptbuf.providers.anthropic import AnthropicAPI
from promptbuf.providers.base import ChatProvider, UnknownProvider
from promptbuf.providers.ollama import OllamaLocal
from promptbuf.providers.openai import OpenAIAPI
from promptbuf.providers.transport import HttpTransport

log = logging.getLogger(__name__)

_PROVIDERS: dict[ProviderKind, type] = {
    ProviderKind.OLLAMA: OllamaLocal,
    ProviderKind.OPENAI: OpenAIAPI,
    ProviderKind.ANTHROPIC: AnthropicAPI,
}


def resolve_kind(name: str) -> ProviderKind:
    """Map a configured provider name to its kind.

    Raises:
        UnknownProvider: Name is not one of the registered providers.
    """
    try:
        return ProviderKind((name or "").strip().lower())
    except ValueError:
        available = ", ".join(list_providers())
        raise UnknownProvider(f"Unknown provider '{name}'. Available: {available}") from None


def get_provider(
    config: ProviderConfig,
    transport: HttpTransport | None = None,
) -> ChatProvider:
    """Get a provider instance for the configured kind.

    Args:
        config: Provider settings; ``config.provider`` selects the adapter.
        transport: HTTP transport override, mainly for tests.

    Returns:
        Configured adapter.

    Raises:
        UnknownProvider: Unknown provider name.
    """
    kind = resolve_kind(config.provider)
    cls = _PROVIDERS[kind]
    log.debug("Using provider %s", kind.value)
    return cls(config, transport=transport)


def list_providers() -> list[str]:
    """Return all available provider names."""
    return sorted(kind.value for kind in _PROVIDERS)
