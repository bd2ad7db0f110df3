"""Invert markdown: turn a fenced-code reply into source with commented prose."""

from __future__ import annotations

_FENCE = "```"

# mode / extension -> (prefix, suffix)
COMMENT_SYNTAX: dict[str, tuple[str, str]] = {
    "python": ("# ", ""),
    "py": ("# ", ""),
    "ruby": ("# ", ""),
    "rb": ("# ", ""),
    "sh": ("# ", ""),
    "bash": ("# ", ""),
    "shell": ("# ", ""),
    "yaml": ("# ", ""),
    "yml": ("# ", ""),
    "toml": ("# ", ""),
    "perl": ("# ", ""),
    "r": ("# ", ""),
    "javascript": ("// ", ""),
    "js": ("// ", ""),
    "typescript": ("// ", ""),
    "ts": ("// ", ""),
    "java": ("// ", ""),
    "go": ("// ", ""),
    "rust": ("// ", ""),
    "rs": ("// ", ""),
    "cpp": ("// ", ""),
    "c++": ("// ", ""),
    "csharp": ("// ", ""),
    "cs": ("// ", ""),
    "kotlin": ("// ", ""),
    "swift": ("// ", ""),
    "php": ("// ", ""),
    "c": ("/* ", " */"),
    "css": ("/* ", " */"),
    "html": ("<!-- ", " -->"),
    "xml": ("<!-- ", " -->"),
    "markdown": ("<!-- ", " -->"),
    "md": ("<!-- ", " -->"),
    "sql": ("-- ", ""),
    "lua": ("-- ", ""),
    "haskell": ("-- ", ""),
    "hs": ("-- ", ""),
    "elisp": (";; ", ""),
    "emacs-lisp": (";; ", ""),
    "el": (";; ", ""),
    "lisp": (";; ", ""),
    "clojure": (";; ", ""),
    "scheme": (";; ", ""),
    "tex": ("% ", ""),
    "latex": ("% ", ""),
    "erlang": ("% ", ""),
    "vim": ('" ', ""),
}

DEFAULT_COMMENT_SYNTAX = ("# ", "")


def is_fence(line: str) -> bool:
    """True for a code fence delimiter, with or without a language tag."""
    return line.lstrip().startswith(_FENCE)


def comment_syntax(mode: str | None) -> tuple[str, str]:
    """Look up the line-comment syntax for a language mode or file extension.

    Accepts editor-style names too (``python-mode``, ``.js``).
    """
    if not mode:
        return DEFAULT_COMMENT_SYNTAX
    key = mode.strip().lower().lstrip(".")
    if key.endswith("-mode"):
        key = key[: -len("-mode")]
    if key.endswith("-ts"):
        key = key[: -len("-ts")]
    return COMMENT_SYNTAX.get(key, DEFAULT_COMMENT_SYNTAX)


def invert(text: str, prefix: str, suffix: str = "") -> str:
    """Keep fenced code as-is and turn everything around it into comments.

    Fence lines are dropped. Lines outside a fence become
    ``prefix + line + suffix``. Text without any fence is returned unchanged,
    as is the empty string. An unterminated fence is not an error: lines after
    the last fence follow whichever state the scan ended in.

    Args:
        text: Model reply, usually markdown.
        prefix: Comment opener for the target file type, e.g. ``"# "``.
        suffix: Comment closer, e.g. ``" */"``; empty for line comments.

    Returns:
        The inverted text, lines joined with ``"\\n"``.
    """
    lines = text.split("\n")
    if not any(is_fence(line) for line in lines):
        return text

    out: list[str] = []
    in_code = False
    for line in lines:
        if is_fence(line):
            in_code = not in_code
            continue
        out.append(line if in_code else f"{prefix}{line}{suffix}")
    return "\n".join(out)
