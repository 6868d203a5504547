"""
Webhook Router
==============
Receives a Notion webhook and relays the page to a Discord channel.
"""
import logging
from typing import Iterator, Optional

from fastapi import APIRouter, Depends, Path, Query, Response

from notion_relay.contracts.load import MESSAGE_SCHEMA, validate_instance
from notion_relay.discord import DiscordClient
from notion_relay.errors import ConfigurationError
from notion_relay.message import build_message
from notion_relay.model import MessageLayout
from notion_relay.model.record import Record
from notion_relay.web_api.config import Settings, get_settings
from notion_relay.web_api.schemas.webhook import ErrorResponse, NotionWebhook

logger = logging.getLogger(__name__)

router = APIRouter()

# Discord snowflake ids
CHANNEL_ID_PATTERN = r"^\d{17,20}$"


def get_discord_client(settings: Settings = Depends(get_settings)) -> Iterator[DiscordClient]:
    """Yield a client for the duration of one request."""
    if not settings.DISCORD_BOT_TOKEN:
        raise ConfigurationError("DISCORD_BOT_TOKEN is not set")
    with DiscordClient(
        settings.DISCORD_BOT_TOKEN,
        base_url=settings.DISCORD_API_BASE,
        timeout=settings.DISCORD_TIMEOUT,
    ) as client:
        yield client


@router.post(
    "/{channel_id}",
    status_code=204,
    response_class=Response,
    responses={500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
def relay_webhook(
    body: NotionWebhook,
    channel_id: str = Path(..., pattern=CHANNEL_ID_PATTERN, description="Discord channel id"),
    title: Optional[str] = Query(default=None, description="Message title, used verbatim"),
    layout: Optional[MessageLayout] = Query(default=None, description="Message layout"),
    settings: Settings = Depends(get_settings),
    client: DiscordClient = Depends(get_discord_client),
):
    """
    Format the page's properties and post them to a Discord channel.

    - **channel_id**: Discord channel to post into
    - **title**: Optional first line / embed title
    - **layout**: text, embed_fields or embed_description
    """
    record = Record.from_dict(body.data.model_dump())
    message = build_message(
        record,
        title=title,
        layout=layout or settings.MESSAGE_LAYOUT,
        max_dump_length=settings.MAX_DIAGNOSTIC_LENGTH or None,
    )
    if settings.VALIDATE_MESSAGES:
        validate_instance(message, MESSAGE_SCHEMA)

    logger.info(
        "Relaying %d properties to channel %s",
        len(record.properties),
        channel_id,
    )
    client.send_message(channel_id, message)
    return Response(status_code=204)
