"""Tests for promptbuf.chat.dispatcher."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from promptbuf.chat.dispatcher import ChatDispatcher
from promptbuf.core.discovery import ENV_OVERRIDE, reset_default_resolver
from promptbuf.core.models import ProviderConfig, user
from promptbuf.providers.base import AuthMissing, UnknownProvider
from promptbuf.providers.transport import HttpResponse


class TestChatDispatcher:
    def test_unknown_provider_no_network(self):
        transport = MagicMock()
        dispatcher = ChatDispatcher(ProviderConfig(provider="mistral"), transport=transport)

        with pytest.raises(UnknownProvider) as exc_info:
            dispatcher.chat("sys", [user("hi")])

        assert exc_info.value.kind == "unknown_provider"
        transport.post.assert_not_called()

    @patch("promptbuf.chat.dispatcher.get_provider")
    def test_delegates_and_strips(self, mock_get):
        provider = MagicMock()
        provider.name = "openai"
        provider.send.return_value = "\n  answer \n\n"
        mock_get.return_value = provider

        config = ProviderConfig(provider="openai", model="gpt-4o")
        messages = [user("hi")]
        result = ChatDispatcher(config).chat("sys", messages)

        assert result == "answer"
        provider.send.assert_called_once_with(messages, system="sys", model="gpt-4o")

    @patch("promptbuf.chat.dispatcher.get_provider")
    def test_provider_created_once(self, mock_get):
        mock_get.return_value.send.return_value = "x"
        dispatcher = ChatDispatcher(ProviderConfig(provider="openai"))
        dispatcher.chat(None, [user("a")])
        dispatcher.chat(None, [user("b")])
        assert mock_get.call_count == 1

    def test_adapter_errors_propagate(self):
        transport = MagicMock()
        with patch("promptbuf.providers.anthropic.get_api_key", return_value=None):
            dispatcher = ChatDispatcher(ProviderConfig(provider="anthropic"), transport=transport)
            with pytest.raises(AuthMissing):
                dispatcher.chat("sys", [user("hi")])
        transport.post.assert_not_called()


class TestOllamaEndToEnd:
    @pytest.fixture(autouse=True)
    def _fresh_resolver(self, monkeypatch):
        monkeypatch.delenv(ENV_OVERRIDE, raising=False)
        reset_default_resolver()
        yield
        reset_default_resolver()

    def test_chat_through_ollama(self):
        transport = MagicMock()
        transport.post.return_value = HttpResponse(
            status=200, body=json.dumps({"response": "  hello back  "}).encode()
        )

        with patch(
            "promptbuf.core.discovery.tcp_probe",
            side_effect=lambda url: url == "http://localhost:11434/",
        ):
            dispatcher = ChatDispatcher(
                ProviderConfig(provider="ollama", base_url="http://localhost:11434/"),
                transport=transport,
            )
            result = dispatcher.chat("sys", [user("hi")])

        assert result == "hello back"
        url, headers, body = transport.post.call_args.args
        assert url == "http://localhost:11434/api/generate"
        assert "SYSTEM PROMPT: sys" in body["prompt"]
        assert '[{"role": "user", "content": "hi"}]' in body["prompt"]
        assert body["stream"] is False
