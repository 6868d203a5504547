"""
Web API Endpoint Tests
======================
Integration tests for the relay endpoints. Discord is faked with an
httpx MockTransport; nothing leaves the process.

Usage:
    pip install notion-relay[test]
    pytest tests/web_api/test_endpoints.py -v
"""
import json

import httpx
import pytest


# Skip entire module if FastAPI not installed
pytest.importorskip("fastapi")


from fastapi.testclient import TestClient
from notion_relay.discord import DiscordClient
from notion_relay.web_api.config import Settings, get_settings
from notion_relay.web_api.main import app
from notion_relay.web_api.routers.webhook import get_discord_client

CHANNEL_ID = "1234567890123456789"


def webhook_body(properties=None, url="https://www.notion.so/Test-abc"):
    if properties is None:
        properties = {
            "name": {
                "id": "title",
                "type": "title",
                "title": [
                    {
                        "type": "text",
                        "text": {"content": "Test", "link": None},
                        "annotations": {
                            "bold": False,
                            "italic": False,
                            "strikethrough": False,
                            "underline": False,
                            "code": False,
                            "color": "default",
                        },
                        "plain_text": "Test",
                        "href": None,
                    }
                ],
            },
            "done": {"id": "a%3Ab", "type": "checkbox", "checkbox": True},
        }
    data = {"object": "page", "id": "abc", "properties": properties}
    if url is not None:
        data["url"] = url
    return {"source": {"type": "automation"}, "data": data}


class FakeDiscord:
    """Records requests and answers with a fixed response."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body if body is not None else {"id": "1"}
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    def payloads(self):
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def settings():
    return Settings(DISCORD_BOT_TOKEN="dummy-token", MESSAGE_LAYOUT="text")


@pytest.fixture
def discord():
    return FakeDiscord()


@pytest.fixture
def client(settings, discord):
    """Create test client with settings and Discord transport overridden."""

    def _client():
        with DiscordClient(
            settings.DISCORD_BOT_TOKEN,
            transport=httpx.MockTransport(discord.handler),
        ) as c:
            yield c

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_discord_client] = _client
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================================
# ROOT / HEALTH ENDPOINTS
# ============================================================================

class TestHealthEndpoint:
    """Tests for GET /, /health and /ready"""

    def test_root_returns_ok(self, client):
        """Root endpoint answers with message: ok."""
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["message"] == "ok"

    def test_health_returns_ok_status(self, client):
        """Health endpoint returns status: ok and a version."""
        data = client.get("/health").json()
        assert data["status"] == "ok"
        assert "version" in data

    def test_ready_with_token(self, client):
        """Ready once a bot token is configured."""
        response = client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_no_cors_headers(self, client):
        """Server-to-server only: browser origins get no CORS grant."""
        response = client.get("/health", headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in response.headers

    def test_not_ready_without_token(self, client, settings):
        """503 while DISCORD_BOT_TOKEN is empty."""
        settings.DISCORD_BOT_TOKEN = ""
        response = client.get("/ready")
        assert response.status_code == 503


# ============================================================================
# WEBHOOK ENDPOINT
# ============================================================================

class TestWebhookEndpoint:
    """Tests for POST /{channel_id}"""

    def test_responds_with_204(self, client, discord):
        """A valid webhook is relayed and answered with 204 No Content."""
        response = client.post(f"/{CHANNEL_ID}", json=webhook_body())
        assert response.status_code == 204
        assert response.content == b""
        assert len(discord.requests) == 1

    def test_posts_to_channel_with_bot_token(self, client, discord):
        """Exactly one authenticated POST to the channel messages URL."""
        client.post(f"/{CHANNEL_ID}", json=webhook_body())
        request = discord.requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"https://discord.com/api/v10/channels/{CHANNEL_ID}/messages"
        assert request.headers["Authorization"] == "Bot dummy-token"
        assert request.headers["Content-Type"] == "application/json"

    def test_text_message_content(self, client, discord):
        """Title, properties in order, then the page URL."""
        client.post(f"/{CHANNEL_ID}?title=New%20row", json=webhook_body())
        assert discord.payloads() == [
            {"content": "New row\nname: Test\ndone: ✅\nhttps://www.notion.so/Test-abc"}
        ]

    def test_no_properties(self, client, discord):
        """An empty properties map still produces a message."""
        client.post(f"/{CHANNEL_ID}", json=webhook_body(properties={}, url=None))
        assert discord.payloads() == [{"content": "[No properties to display]"}]

    def test_unknown_property_type_is_relayed(self, client, discord):
        """Unknown variants degrade to a placeholder, not an error."""
        body = webhook_body(properties={"x": {"type": "weird_new_type", "foo": 1}})
        response = client.post(f"/{CHANNEL_ID}", json=body)
        assert response.status_code == 204
        assert "weird_new_type" in discord.payloads()[0]["content"]

    def test_layout_query_parameter(self, client, discord):
        """layout=embed_fields sends an embed with one field per property."""
        client.post(f"/{CHANNEL_ID}?layout=embed_fields", json=webhook_body())
        embed = discord.payloads()[0]["embeds"][0]
        assert embed["title"] == "Test"
        assert [f["name"] for f in embed["fields"]] == ["name", "done"]

    def test_configured_layout(self, client, discord, settings):
        """MESSAGE_LAYOUT applies when no layout is requested."""
        settings.MESSAGE_LAYOUT = "embed_description"
        client.post(f"/{CHANNEL_ID}", json=webhook_body())
        embed = discord.payloads()[0]["embeds"][0]
        assert embed["description"] == "name: Test\ndone: ✅"


# ============================================================================
# ERRORS
# ============================================================================

class TestWebhookErrors:
    """Boundary failures surface as non-2xx JSON responses"""

    def test_invalid_channel_id_returns_422(self, client, discord):
        response = client.post("/not-a-channel", json=webhook_body())
        assert response.status_code == 422
        assert discord.requests == []

    def test_missing_data_returns_422(self, client, discord):
        response = client.post(f"/{CHANNEL_ID}", json={"properties": {}})
        assert response.status_code == 422
        assert discord.requests == []

    def test_invalid_layout_returns_422(self, client):
        response = client.post(f"/{CHANNEL_ID}?layout=carousel", json=webhook_body())
        assert response.status_code == 422

    def test_discord_error_returns_502(self, client, discord):
        discord.status_code = 403
        discord.body = {"code": 50001, "message": "Missing Access"}
        response = client.post(f"/{CHANNEL_ID}", json=webhook_body())
        assert response.status_code == 502
        assert response.json() == {"error": "Discord API error: 403 - Missing Access"}

    def test_missing_token_returns_500(self):
        """Without the override the real dependency checks the token."""
        app.dependency_overrides[get_settings] = lambda: Settings(DISCORD_BOT_TOKEN="")
        try:
            response = TestClient(app).post(f"/{CHANNEL_ID}", json=webhook_body())
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 500
        assert response.json() == {"error": "DISCORD_BOT_TOKEN is not set"}
