"""Tests for promptbuf.providers.transport."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from promptbuf.providers.base import TransportError
from promptbuf.providers.transport import HttpResponse, HttpxTransport


class TestHttpResponse:
    def test_text_from_bytes(self):
        assert HttpResponse(200, "héllo".encode("utf-8")).text == "héllo"

    def test_text_from_str(self):
        assert HttpResponse(200, "ok").text == "ok"


class TestHttpxTransport:
    @patch("httpx.post")
    def test_post_sends_json(self, mock_post):
        mock_resp = MagicMock()
        mock_resp.status_code = 201
        mock_resp.content = b'{"ok": true}'
        mock_post.return_value = mock_resp

        resp = HttpxTransport(timeout=5.0).post("http://h/x", {"A": "b"}, {"k": 1})

        assert resp == HttpResponse(status=201, body=b'{"ok": true}')
        mock_post.assert_called_once_with(
            "http://h/x", headers={"A": "b"}, json={"k": 1}, timeout=5.0
        )

    @patch("httpx.post")
    def test_non_2xx_is_returned_not_raised(self, mock_post):
        mock_resp = MagicMock()
        mock_resp.status_code = 500
        mock_resp.content = b"boom"
        mock_post.return_value = mock_resp

        assert HttpxTransport().post("http://h/x", {}, {}).status == 500

    @patch("httpx.post")
    def test_connect_error(self, mock_post):
        mock_post.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(TransportError, match="Could not reach"):
            HttpxTransport().post("http://h/x", {}, {})

    @patch("httpx.post")
    def test_timeout(self, mock_post):
        mock_post.side_effect = httpx.TimeoutException("timeout")

        with pytest.raises(TransportError):
            HttpxTransport().post("http://h/x", {}, {})

    @patch("httpx.post")
    def test_invalid_url(self, mock_post):
        mock_post.side_effect = httpx.InvalidURL("Invalid port: '99999'")

        with pytest.raises(TransportError, match="Could not reach"):
            HttpxTransport().post("http://h:99999/x", {}, {})

