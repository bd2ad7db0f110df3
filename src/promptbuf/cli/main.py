"""CLI entry point for promptbuf."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from promptbuf import __version__
from promptbuf.cli.ask_cmd import ask_cmd
from promptbuf.cli.chat_cmd import chat_cmd
from promptbuf.cli.invert_cmd import invert_cmd
from promptbuf.cli.providers_cmd import providers_cmd
from promptbuf.core.config import load_config


def _setup_logging(level_name: str) -> None:
    # stderr only; stdout carries the reply for the editor
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler()],
    )


@click.group()
@click.version_option(version=__version__, prog_name="promptbuf")
@click.option(
    "--config",
    "config_file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to config.yaml (default: $PROMPTBUF_CONFIG or ~/.config/promptbuf).",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(ctx: click.Context, config_file: Path | None, verbose: bool) -> None:
    """promptbuf: send editor text to an LLM and print the reply."""
    config = load_config(config_file)
    _setup_logging("debug" if verbose else str(config.get("log_level", "warning")))
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


cli.add_command(ask_cmd)
cli.add_command(chat_cmd)
cli.add_command(invert_cmd)
cli.add_command(providers_cmd)


if __name__ == "__main__":
    cli()
