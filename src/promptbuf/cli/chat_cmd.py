"""CLI command: promptbuf chat, interactive multi-turn session."""

from __future__ import annotations

import click

from promptbuf.chat.dispatcher import ChatDispatcher
from promptbuf.chat.session import ChatSession
from promptbuf.core.config import provider_config
from promptbuf.core.prompts import build_system_message, task_instructions
from promptbuf.providers.base import AuthMissing, ProviderError, UnknownProvider
from promptbuf.providers.registry import list_providers


@click.command("chat")
@click.option("--mode", default="text", help="Language mode the conversation is about.")
@click.option(
    "--provider",
    "-p",
    default=None,
    type=click.Choice(list_providers()),
    help="LLM provider (default: from config).",
)
@click.option("--model", "-m", default=None, help="Override the default model.")
@click.option("--transcript", is_flag=True, help="Print the whole conversation on exit.")
@click.pass_context
def chat_cmd(
    ctx: click.Context,
    mode: str,
    provider: str | None,
    model: str | None,
    transcript: bool,
) -> None:
    """Start an interactive chat. Type 'quit' or 'exit' to stop."""
    config = ctx.obj["config"]
    pc = provider_config(config, provider=provider, model=model)
    session = ChatSession(
        dispatcher=ChatDispatcher(pc),
        system_prompt=build_system_message(mode, task_instructions("chat")),
    )

    click.echo(f"Chatting with {pc.provider}" + (f" ({pc.model})" if pc.model else ""))
    click.echo("Type your message (or 'quit'/'exit' to stop).\n")

    while True:
        try:
            user_input = click.prompt("You", prompt_suffix="> ")
        except (EOFError, KeyboardInterrupt, click.Abort):
            click.echo("\nChat ended.")
            break

        if user_input.strip().lower() in ("quit", "exit", "q"):
            click.echo("Chat ended.")
            break

        try:
            reply = session.send(user_input)
        except (AuthMissing, UnknownProvider) as e:
            # nothing will change on the next turn
            raise click.ClickException(f"[{e.kind}] {e.message}") from e
        except ProviderError as e:
            click.echo(f"Error [{e.kind}]: {e.message}", err=True)
            continue

        click.echo(f"\nAssistant: {reply}\n")

    if transcript and session.messages:
        click.echo("")
        click.echo(session.transcript())
