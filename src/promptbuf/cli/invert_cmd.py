"""CLI command: promptbuf invert, stdin to stdout markdown inversion."""

from __future__ import annotations

import click

from promptbuf.core.markdown import comment_syntax, invert


@click.command("invert")
@click.option("--mode", default=None, help="Language mode used to pick the comment syntax.")
@click.option("--prefix", default=None, help="Comment prefix (overrides --mode).")
@click.option("--suffix", default=None, help="Comment suffix (overrides --mode).")
def invert_cmd(mode: str | None, prefix: str | None, suffix: str | None) -> None:
    """Comment out prose around fenced code read from stdin."""
    default_prefix, default_suffix = comment_syntax(mode)
    text = click.get_text_stream("stdin").read()
    result = invert(
        text,
        default_prefix if prefix is None else prefix,
        default_suffix if suffix is None else suffix,
    )
    click.echo(result, nl=False)
