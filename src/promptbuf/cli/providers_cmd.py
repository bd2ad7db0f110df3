"""CLI command: promptbuf providers, show what is configured and reachable."""

from __future__ import annotations

import click

from promptbuf.core.config import provider_config
from promptbuf.providers.base import ProviderError
from promptbuf.providers.registry import get_provider, list_providers


@click.command("providers")
@click.pass_context
def providers_cmd(ctx: click.Context) -> None:
    """List providers, whether each is usable, and the default."""
    config = ctx.obj["config"]
    default = provider_config(config).provider

    for name in list_providers():
        try:
            provider = get_provider(provider_config(config, provider=name))
        except ProviderError as e:
            click.echo(f"  {name:<10} error: {e.message}")
            continue

        info = provider.info
        marker = "*" if name == default else " "
        if info.requires_api_key:
            status = "key set" if provider.is_available() else f"no key ({info.key_url})"
        else:
            url = getattr(provider, "base_url", None)
            status = f"reachable at {url}" if url else "not reachable"
        click.echo(f"{marker} {name:<10} {info.display_name:<20} {status}")
