"""Configuration loader for promptbuf."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from promptbuf.core.models import ProviderConfig

log = logging.getLogger(__name__)

DEFAULTS: dict = {
    "llm": {
        "provider": "ollama",
        "model": None,
    },
    "ollama": {
        "base_url": "http://localhost:11434/",
        "model": "llama3.1:8b",
    },
    "openai": {
        "model": "gpt-4o-mini",
    },
    "anthropic": {
        "model": "claude-sonnet-4-20250514",
    },
    "log_level": "warning",
}


def config_path() -> Path:
    """Return the path to config.yaml: $PROMPTBUF_CONFIG > ~/.config/promptbuf."""
    env_path = os.environ.get("PROMPTBUF_CONFIG")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return Path("~/.config/promptbuf/config.yaml").expanduser()


def load_config(path: Path | None = None) -> dict:
    """Load config.yaml and merge with defaults.

    Args:
        path: Explicit path to config.yaml. If None, uses default location.

    Returns:
        Merged configuration dict.
    """
    if path is None:
        path = config_path()

    user_config: dict = {}
    if path.exists():
        try:
            raw = path.read_text(encoding="utf-8")
            user_config = yaml.safe_load(raw) or {}
        except Exception:
            log.warning("Failed to read config at %s, using defaults", path, exc_info=True)

    if not isinstance(user_config, dict):
        log.warning("Config at %s is not a mapping, using defaults", path)
        user_config = {}

    return _deep_merge(DEFAULTS, user_config)


def provider_config(
    config: dict,
    provider: str | None = None,
    model: str | None = None,
) -> ProviderConfig:
    """Resolve the effective provider settings for one request.

    Explicit arguments win over ``llm.*``, which wins over the provider's own
    section. ``llm.model`` only applies to the provider named in
    ``llm.provider``, so switching providers falls back to that provider's
    model. API keys are not read from config; adapters look them up in the
    environment.
    """
    llm = config.get("llm", {}) or {}
    default_name = (llm.get("provider") or "ollama").strip().lower()
    name = (provider or default_name).strip().lower()
    section = config.get(name, {}) or {}
    llm_model = llm.get("model") if name == default_name else None
    return ProviderConfig(
        provider=name,
        model=model or llm_model or section.get("model"),
        base_url=section.get("base_url"),
    )


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
