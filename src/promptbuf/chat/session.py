"""One chat conversation tied to an editor buffer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from promptbuf.chat.dispatcher import ChatDispatcher
from promptbuf.core.models import Message, Role, assistant, user

log = logging.getLogger(__name__)

_HEADINGS = {
    Role.USER: "## User",
    Role.ASSISTANT: "## Assistant",
    Role.SYSTEM: "## System",
}


@dataclass
class ChatSession:
    """Growing message history plus the system prompt used for every turn.

    Messages always alternate user/assistant, starting with user. A turn is
    only recorded once the reply has arrived, so a failed request leaves the
    history exactly as it was.
    """

    dispatcher: ChatDispatcher
    system_prompt: str = ""
    buffer_id: object = None
    messages: list[Message] = field(default_factory=list)

    @property
    def exchanges(self) -> int:
        """Number of completed user/assistant turns."""
        return len(self.messages) // 2

    def send(self, prompt: str) -> str:
        """Send ``prompt`` as the next user turn and record the reply.

        Raises:
            ProviderError: Request failed; history is unchanged.
        """
        question = user(prompt)
        reply = self.dispatcher.chat(self.system_prompt, [*self.messages, question])
        self.messages.extend([question, assistant(reply)])
        log.debug("Session %r now has %d exchanges", self.buffer_id, self.exchanges)
        return reply

    def transcript(self) -> str:
        """Render the conversation as text for the chat buffer."""
        blocks = [f"{_HEADINGS[m.role]}\n\n{m.content}" for m in self.messages]
        return "\n\n".join(blocks)
