"""Enums shared across the model, formatter and message layers."""

from __future__ import annotations

from enum import Enum


class PropertyType(str, Enum):
    """Type tags of Notion page properties the formatter understands."""

    TITLE = "title"
    RICH_TEXT = "rich_text"
    URL = "url"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    DATE = "date"
    CHECKBOX = "checkbox"
    NUMBER = "number"
    STATUS = "status"
    CREATED_TIME = "created_time"
    LAST_EDITED_TIME = "last_edited_time"
    CREATED_BY = "created_by"
    LAST_EDITED_BY = "last_edited_by"
    PEOPLE = "people"
    UNIQUE_ID = "unique_id"
    RELATION = "relation"
    FORMULA = "formula"
    FILES = "files"
    ROLLUP = "rollup"


class RichTextType(str, Enum):
    """Kinds of rich-text run."""

    TEXT = "text"
    MENTION = "mention"
    EQUATION = "equation"


class MentionType(str, Enum):
    """Sub-kinds of a mention run."""

    USER = "user"
    DATE = "date"
    PAGE = "page"
    DATABASE = "database"
    LINK_PREVIEW = "link_preview"
    TEMPLATE_MENTION = "template_mention"


class FormulaType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


class RollupType(str, Enum):
    NUMBER = "number"
    DATE = "date"
    ARRAY = "array"


class FileType(str, Enum):
    """Where a file attachment lives."""

    FILE = "file"            # hosted by Notion, signed URL
    EXTERNAL = "external"


class MessageLayout(str, Enum):
    """How a record is laid out in the outgoing Discord message."""

    TEXT = "text"
    EMBED_FIELDS = "embed_fields"
    EMBED_DESCRIPTION = "embed_description"
