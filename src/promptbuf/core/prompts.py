"""System prompt construction for editor requests."""

from __future__ import annotations

PERSONA = (
    "You are a careful programming assistant working inside the user's text editor. "
    "Your reply is inserted into the buffer as-is."
)

_CONTEXT_LINE = "The user is editing a file in {context} mode."

TASK_INSTRUCTIONS: dict[str, str] = {
    "ask": (
        "Answer the user's question concisely. "
        "Put any code in fenced code blocks."
    ),
    "replace": (
        "Rewrite the provided selection according to the user's instruction. "
        "Reply with the replacement code in a single fenced code block and "
        "keep any explanation short."
    ),
    "insert": (
        "Write the code the user asks for so it can be inserted at the cursor. "
        "Reply with a fenced code block and keep any explanation short."
    ),
    "chat": (
        "You are having a conversation with the user. "
        "Refer back to earlier turns when it helps."
    ),
}


def task_instructions(task: str) -> str:
    """Return the instruction text for a named editor task."""
    try:
        return TASK_INSTRUCTIONS[task]
    except KeyError:
        known = ", ".join(sorted(TASK_INSTRUCTIONS))
        raise KeyError(f"Unknown task {task!r}. Known tasks: {known}") from None


def build_system_message(context: str, instructions: str = "") -> str:
    """Join persona, editing context and task instructions into one system prompt.

    Args:
        context: The caller's editing context, usually the language mode or
            file type (``"python"``, ``"markdown"``).
        instructions: Task-specific instructions appended last.

    Returns:
        Newline-joined system prompt.
    """
    parts = [PERSONA, _CONTEXT_LINE.format(context=context or "plain text"), instructions]
    return "\n".join(parts)
