"""Tests for promptbuf.core.config."""

from pathlib import Path

from promptbuf.core.config import DEFAULTS, _deep_merge, config_path, load_config, provider_config


class TestDeepMerge:
    def test_simple_override(self):
        base = {"a": 1, "b": 2}
        override = {"b": 3}
        result = _deep_merge(base, override)
        assert result == {"a": 1, "b": 3}

    def test_nested_merge(self):
        base = {"llm": {"provider": "ollama", "model": None}}
        override = {"llm": {"provider": "openai"}}
        result = _deep_merge(base, override)
        assert result["llm"]["provider"] == "openai"
        assert result["llm"]["model"] is None

    def test_does_not_mutate_base(self):
        base = {"a": {"b": 1}}
        override = {"a": {"b": 2}}
        _deep_merge(base, override)
        assert base["a"]["b"] == 1


class TestLoadConfig:
    def test_returns_defaults_when_no_file(self, tmp_path: Path):
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config["llm"]["provider"] == DEFAULTS["llm"]["provider"]
        assert config["ollama"]["base_url"] == DEFAULTS["ollama"]["base_url"]

    def test_loads_and_merges(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("llm:\n  provider: anthropic\n")

        config = load_config(config_file)
        assert config["llm"]["provider"] == "anthropic"
        # Defaults preserved for unset keys
        assert config["anthropic"]["model"] == DEFAULTS["anthropic"]["model"]

    def test_handles_empty_file(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        config = load_config(config_file)
        assert config["llm"] == DEFAULTS["llm"]

    def test_handles_corrupt_yaml(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(": : : invalid yaml [[[")

        config = load_config(config_file)
        assert "llm" in config

    def test_handles_non_mapping(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- just\n- a list\n")

        config = load_config(config_file)
        assert config["llm"] == DEFAULTS["llm"]

    def test_env_path(self, tmp_path: Path, monkeypatch):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("log_level: debug\n")
        monkeypatch.setenv("PROMPTBUF_CONFIG", str(config_file))

        assert config_path() == config_file.resolve()
        assert load_config()["log_level"] == "debug"


class TestProviderConfig:
    def test_defaults_to_ollama(self):
        pc = provider_config(DEFAULTS)
        assert pc.provider == "ollama"
        assert pc.model == "llama3.1:8b"
        assert pc.base_url == "http://localhost:11434/"
        assert pc.api_key is None

    def test_explicit_provider_and_model(self):
        pc = provider_config(DEFAULTS, provider="OpenAI", model="gpt-4o")
        assert pc.provider == "openai"
        assert pc.model == "gpt-4o"

    def test_provider_section_model(self):
        pc = provider_config(DEFAULTS, provider="anthropic")
        assert pc.model == "claude-sonnet-4-20250514"

    def test_llm_model_overrides_section(self):
        config = _deep_merge(DEFAULTS, {"llm": {"provider": "openai", "model": "gpt-4"}})
        assert provider_config(config).model == "gpt-4"

    def test_unknown_provider_kept_verbatim(self):
        config = _deep_merge(DEFAULTS, {"llm": {"provider": "mistral"}})
        pc = provider_config(config)
        assert pc.provider == "mistral"
        assert pc.model is None

    def test_llm_model_not_carried_to_other_provider(self, tmp_path: Path):
        cfg = tmp_path / "config.yaml"
        cfg.write_text("llm:\n  provider: ollama\n  model: llama3.1:70b\n", encoding="utf-8")
        config = load_config(cfg)

        assert provider_config(config).model == "llama3.1:70b"
        assert provider_config(config, provider="ollama").model == "llama3.1:70b"
        assert provider_config(config, provider="openai").model == "gpt-4o-mini"
        assert provider_config(config, provider="anthropic").model == "claude-sonnet-4-20250514"

    def test_llm_model_matches_provider_case_insensitively(self):
        config = _deep_merge(DEFAULTS, {"llm": {"provider": "OpenAI", "model": "gpt-4"}})
        assert provider_config(config, provider="openai").model == "gpt-4"
