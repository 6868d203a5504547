"""
Discord delivery client.

One authenticated POST per message; no retries.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from notion_relay.errors import DiscordDeliveryError

logger = logging.getLogger(__name__)

DISCORD_API_BASE = "https://discord.com/api/v10"
DEFAULT_TIMEOUT = 10.0


class DiscordClient:
    """
    Posts messages to Discord channels with a bot token.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DISCORD_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            token: Discord bot token (without the ``Bot`` prefix)
            base_url: API root, versioned
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bot {token}",
                "Content-Type": "application/json",
            },
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.client.close()

    def channel_messages_url(self, channel_id: str) -> str:
        return f"{self.base_url}/channels/{channel_id}/messages"

    def send_message(self, channel_id: str, message: Mapping[str, Any]) -> httpx.Response:
        """
        Post *message* to a channel.

        Returns:
            The Discord response (2xx)

        Raises:
            DiscordDeliveryError: On a non-2xx response or a transport failure
        """
        url = self.channel_messages_url(channel_id)
        try:
            response = self.client.post(url, json=dict(message))
        except httpx.RequestError as e:
            logger.error("Failed to reach Discord for channel %s: %s", channel_id, e)
            raise DiscordDeliveryError(f"Failed to connect to Discord: {e}") from e

        if response.is_success:
            logger.debug("Delivered message to channel %s (%d)", channel_id, response.status_code)
            return response

        detail = _error_message(response)
        logger.error("Discord API error for channel %s: %s %s", channel_id, response.status_code, detail)
        raise DiscordDeliveryError(
            f"Discord API error: {response.status_code} - {detail}",
            status_code=response.status_code,
        )


def _error_message(response: httpx.Response) -> str:
    """Pull ``message`` out of a Discord error body, falling back to the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase or "unknown error"
