"""
notion_relay.message
====================

Assemble a formatted record into a Discord message payload.

Three layouts (see ``MessageLayout``):

  - ``text``: plain ``content``: title, ``name: value`` lines, page URL
  - ``embed_fields``: one embed, one field per property, link button
  - ``embed_description``: one embed, property lines as the description

All Discord length limits are enforced here: single values are
truncated, and fields that would push an embed past its total length
are dropped and counted in the footer.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from notion_relay.formatter import DEFAULT_MAX_DUMP_LENGTH, format_property
from notion_relay.model import MessageLayout
from notion_relay.model.property import PropertyValue
from notion_relay.model.record import Record
from notion_relay.utils.json_norm import truncate

NO_PROPERTIES = "[No properties to display]"
UNNAMED_PROPERTY = "[Unnamed]"
LINK_BUTTON_LABEL = "Open in Notion"

# Discord API limits
MAX_CONTENT_LENGTH = 2000
MAX_EMBED_TITLE_LENGTH = 256
MAX_EMBED_DESCRIPTION_LENGTH = 4096
MAX_FIELD_NAME_LENGTH = 256
MAX_FIELD_VALUE_LENGTH = 1024
MAX_FOOTER_LENGTH = 2048
MAX_FIELDS = 25
MAX_EMBED_LENGTH = 6000

# Room kept for the "+N more properties not shown" footer.
_FOOTER_RESERVE = 64

EMBED_COLOR = 0x2F3437  # Notion's dark grey

# Discord component constants
_ACTION_ROW = 1
_BUTTON = 2
_LINK_STYLE = 5


def format_record(
    properties: Mapping[str, PropertyValue | Any],
    *,
    max_dump_length: int | None = DEFAULT_MAX_DUMP_LENGTH,
) -> list[tuple[str, str]]:
    """One ``(name, formatted value)`` pair per property, in mapping order."""
    return [
        (str(name), format_property(value, max_dump_length=max_dump_length))
        for name, value in properties.items()
    ]


def format_record_text(
    properties: Mapping[str, PropertyValue | Any],
    *,
    max_dump_length: int | None = DEFAULT_MAX_DUMP_LENGTH,
) -> str:
    """``name: value`` lines joined by newlines."""
    lines = [
        f"{name}: {value}"
        for name, value in format_record(properties, max_dump_length=max_dump_length)
    ]
    return "\n".join(lines) or NO_PROPERTIES


def _link_button(url: str) -> list[dict[str, Any]]:
    return [
        {
            "type": _ACTION_ROW,
            "components": [
                {"type": _BUTTON, "style": _LINK_STYLE, "label": LINK_BUTTON_LABEL, "url": url},
            ],
        }
    ]


def _embed_title(record: Record, title: str | None, max_dump_length: int | None) -> str:
    if title:
        return title
    prop = record.title_property()
    if prop is None:
        return ""
    return format_property(prop, max_dump_length=max_dump_length)


def _text_message(record: Record, title: str | None, max_dump_length: int | None) -> dict[str, Any]:
    parts = [
        title,
        format_record_text(record.properties, max_dump_length=max_dump_length),
        record.url,
    ]
    content = "\n".join(part for part in parts if part)
    return {"content": truncate(content, MAX_CONTENT_LENGTH)}


def _embed_message(
    record: Record,
    title: str | None,
    max_dump_length: int | None,
    *,
    with_fields: bool,
) -> dict[str, Any]:
    embed: dict[str, Any] = {"color": EMBED_COLOR}

    embed_title = _embed_title(record, title, max_dump_length)
    if embed_title:
        embed["title"] = truncate(embed_title, MAX_EMBED_TITLE_LENGTH)
    if record.url:
        embed["url"] = record.url

    if with_fields:
        pairs = format_record(record.properties, max_dump_length=max_dump_length)
        if pairs:
            # Title, fields and footer together stay within MAX_EMBED_LENGTH.
            budget = MAX_EMBED_LENGTH - len(embed.get("title", "")) - _FOOTER_RESERVE
            fields = []
            for name, value in pairs[:MAX_FIELDS]:
                field = {
                    "name": truncate(name or UNNAMED_PROPERTY, MAX_FIELD_NAME_LENGTH),
                    "value": truncate(value, MAX_FIELD_VALUE_LENGTH),
                    "inline": False,
                }
                size = len(field["name"]) + len(field["value"])
                if size > budget:
                    break
                budget -= size
                fields.append(field)
            embed["fields"] = fields
            hidden = len(pairs) - len(fields)
            if hidden > 0:
                embed["footer"] = {
                    "text": truncate(f"+{hidden} more properties not shown", MAX_FOOTER_LENGTH)
                }
        else:
            embed["description"] = NO_PROPERTIES
    else:
        embed["description"] = truncate(
            format_record_text(record.properties, max_dump_length=max_dump_length),
            MAX_EMBED_DESCRIPTION_LENGTH,
        )

    message: dict[str, Any] = {"embeds": [embed]}
    if record.url:
        message["components"] = _link_button(record.url)
    return message


def build_message(
    record: Record,
    *,
    title: str | None = None,
    layout: MessageLayout | str = MessageLayout.TEXT,
    max_dump_length: int | None = DEFAULT_MAX_DUMP_LENGTH,
) -> dict[str, Any]:
    """Build the JSON body for ``POST /channels/{id}/messages``.

    *title* is used verbatim; it is never run through the formatter.
    """
    layout = MessageLayout(layout)
    if layout is MessageLayout.TEXT:
        return _text_message(record, title, max_dump_length)
    return _embed_message(
        record,
        title,
        max_dump_length,
        with_fields=layout is MessageLayout.EMBED_FIELDS,
    )
