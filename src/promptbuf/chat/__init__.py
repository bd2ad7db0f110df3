"""Chat dispatch and per-buffer chat sessions."""

from promptbuf.chat.dispatcher import ChatDispatcher
from promptbuf.chat.session import ChatSession

__all__ = ["ChatDispatcher", "ChatSession"]
