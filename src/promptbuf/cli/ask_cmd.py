"""CLI command: promptbuf ask, one prompt, one reply on stdout."""

from __future__ import annotations

from typing import TextIO

import click

from promptbuf.chat.dispatcher import ChatDispatcher
from promptbuf.core.config import provider_config
from promptbuf.core.markdown import comment_syntax, invert
from promptbuf.core.models import build_messages
from promptbuf.core.prompts import TASK_INSTRUCTIONS, build_system_message, task_instructions
from promptbuf.providers.base import ProviderError
from promptbuf.providers.registry import list_providers


@click.command("ask")
@click.argument("prompt")
@click.option(
    "--selection-file",
    "-s",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="Include the selected text read from FILE ('-' for stdin).",
)
@click.option("--mode", default="text", help="Language mode of the buffer (python, c, ...).")
@click.option(
    "--task",
    "-t",
    type=click.Choice(sorted(TASK_INSTRUCTIONS)),
    default="ask",
    help="Which editor action the reply is for.",
)
@click.option(
    "--provider",
    "-p",
    default=None,
    type=click.Choice(list_providers()),
    help="LLM provider (default: from config).",
)
@click.option("--model", "-m", default=None, help="Override the default model.")
@click.option(
    "--invert",
    "do_invert",
    is_flag=True,
    help="Keep fenced code and comment out the prose around it.",
)
@click.pass_context
def ask_cmd(
    ctx: click.Context,
    prompt: str,
    selection_file: TextIO | None,
    mode: str,
    task: str,
    provider: str | None,
    model: str | None,
    do_invert: bool,
) -> None:
    """Send PROMPT (and optionally a selection) and print the reply."""
    config = ctx.obj["config"]
    selection = selection_file.read() if selection_file is not None else None

    messages = build_messages(
        prompt,
        include_selection=selection_file is not None,
        selection=selection,
    )
    system = build_system_message(mode, task_instructions(task))
    dispatcher = ChatDispatcher(provider_config(config, provider=provider, model=model))

    try:
        reply = dispatcher.chat(system, messages)
    except ProviderError as e:
        raise click.ClickException(f"[{e.kind}] {e.message}") from e

    if do_invert:
        prefix, suffix = comment_syntax(mode)
        reply = invert(reply, prefix, suffix)
    click.echo(reply)
