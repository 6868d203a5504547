"""notion_relay — forward Notion database webhooks to Discord channels."""

__all__ = [
    "__version__",
    "format_property",
    "format_record",
    "format_record_text",
    "build_message",
    "parse_property",
    "Record",
    "DiscordClient",
    "NotionRelayError",
    "ConfigurationError",
    "DiscordDeliveryError",
]
__version__ = "0.1.0"

from notion_relay.errors import (  # noqa: E402, F401
    ConfigurationError,
    DiscordDeliveryError,
    NotionRelayError,
)
from notion_relay.formatter import format_property  # noqa: E402, F401
from notion_relay.message import (  # noqa: E402, F401
    build_message,
    format_record,
    format_record_text,
)
from notion_relay.model.parse import parse_property  # noqa: E402, F401
from notion_relay.model.record import Record  # noqa: E402, F401
from notion_relay.discord import DiscordClient  # noqa: E402, F401
