"""Tests for the Discord delivery client (httpx MockTransport, no network)."""

from __future__ import annotations

import json

import httpx
import pytest

from notion_relay.discord import DiscordClient
from notion_relay.errors import DiscordDeliveryError

CHANNEL = "123456789012345678"


def make_client(handler) -> DiscordClient:
    return DiscordClient("dummy-token", transport=httpx.MockTransport(handler))


class TestSendMessage:
    def test_posts_to_channel_with_bot_auth(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": "m1"})

        with make_client(handler) as client:
            response = client.send_message(CHANNEL, {"content": "hi"})

        assert response.status_code == 200
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == f"https://discord.com/api/v10/channels/{CHANNEL}/messages"
        assert request.headers["Authorization"] == "Bot dummy-token"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"content": "hi"}

    def test_custom_base_url(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(204)

        client = DiscordClient(
            "t", base_url="http://localhost:9000/api/", transport=httpx.MockTransport(handler)
        )
        client.send_message("1", {"content": "x"})
        client.close()
        assert seen == ["http://localhost:9000/api/channels/1/messages"]


class TestDeliveryErrors:
    def test_non_2xx_uses_discord_message(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"code": 50001, "message": "Missing Access"})

        with make_client(handler) as client:
            with pytest.raises(DiscordDeliveryError) as exc_info:
                client.send_message(CHANNEL, {"content": "hi"})

        assert exc_info.value.status_code == 403
        assert str(exc_info.value) == "Discord API error: 403 - Missing Access"

    def test_non_json_error_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>bad gateway</html>")

        with make_client(handler) as client:
            with pytest.raises(DiscordDeliveryError) as exc_info:
                client.send_message(CHANNEL, {"content": "hi"})

        assert exc_info.value.status_code == 502
        assert "Bad Gateway" in str(exc_info.value)

    def test_transport_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with make_client(handler) as client:
            with pytest.raises(DiscordDeliveryError) as exc_info:
                client.send_message(CHANNEL, {"content": "hi"})

        assert exc_info.value.status_code is None
        assert "Failed to connect to Discord" in str(exc_info.value)
