"""Route a chat request to the configured provider and tidy the reply."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from promptbuf.core.models import Message, ProviderConfig
from promptbuf.providers.base import ChatProvider
from promptbuf.providers.registry import get_provider
from promptbuf.providers.transport import HttpTransport

log = logging.getLogger(__name__)


class ChatDispatcher:
    """Picks the adapter for ``config.provider`` and delegates to it."""

    def __init__(
        self,
        config: ProviderConfig,
        transport: HttpTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self._provider: ChatProvider | None = None

    @property
    def provider(self) -> ChatProvider:
        """The adapter, created on first use.

        Raises:
            UnknownProvider: ``config.provider`` is not a known kind.
        """
        if self._provider is None:
            self._provider = get_provider(self.config, transport=self._transport)
        return self._provider

    def chat(self, system: str | None, messages: Sequence[Message]) -> str:
        """Send ``messages`` with ``system`` and return the stripped reply.

        Raises:
            ProviderError: Any adapter or configuration failure.
        """
        provider = self.provider
        log.info("Sending %d messages to %s", len(messages), provider.name)
        reply = provider.send(messages, system=system, model=self.config.model)
        return reply.strip()
