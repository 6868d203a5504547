"""Exceptions raised at the relay's boundaries.

The formatter never raises; these cover configuration and delivery.
"""

from __future__ import annotations


class NotionRelayError(Exception):
    """Base class for all notion_relay errors."""


class ConfigurationError(NotionRelayError):
    """A required setting (e.g. the bot token) is missing."""


class DiscordDeliveryError(NotionRelayError):
    """Discord rejected the message or could not be reached.

    ``status_code`` is None when the request never got a response.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
