"""Core data models for promptbuf."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# --- Enums ---


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ProviderKind(str, Enum):
    OLLAMA = "ollama"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


# --- Core Models ---


@dataclass(frozen=True)
class Message:
    """A single turn in a conversation."""

    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True)
class ProviderConfig:
    """Which backend to talk to, and how. Fixed for the lifetime of a request.

    ``provider`` is kept as the raw configured string so that a typo in
    config.yaml surfaces as ``UnknownProvider`` at dispatch time instead of
    failing while the config is loaded.
    """

    provider: str = ProviderKind.OLLAMA.value
    model: str | None = None
    base_url: str | None = None
    api_key: str | None = None

    def __repr__(self) -> str:
        key = "set" if self.api_key else "unset"
        return (
            f"ProviderConfig(provider={self.provider!r}, model={self.model!r}, "
            f"base_url={self.base_url!r}, api_key=<{key}>)"
        )


def user(content: str) -> Message:
    return Message(role=Role.USER, content=content)


def assistant(content: str) -> Message:
    return Message(role=Role.ASSISTANT, content=content)


def build_messages(
    prompt: str,
    include_selection: bool = False,
    selection: str | None = None,
) -> list[Message]:
    """Build the message sequence for a one-shot request.

    The selection, when included and non-empty, always comes first so the
    model reads the context before the instruction.
    """
    if include_selection and selection:
        return [user(selection), user(prompt)]
    return [user(prompt)]
