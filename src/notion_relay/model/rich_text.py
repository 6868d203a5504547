"""Rich-text runs and the mentions they may carry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from . import MentionType, RichTextType
from .date import DateRange
from .user import User


# ── mentions ────────────────────────────────────────────────────────


class Mention:
    """Base for every parsed mention payload."""

    __slots__ = ()
    TYPE: ClassVar[str]


@dataclass(frozen=True, slots=True)
class UserMention(Mention):
    TYPE: ClassVar[str] = MentionType.USER.value

    user: User | None


@dataclass(frozen=True, slots=True)
class DateMention(Mention):
    TYPE: ClassVar[str] = MentionType.DATE.value

    date: DateRange | None


@dataclass(frozen=True, slots=True)
class PageMention(Mention):
    TYPE: ClassVar[str] = MentionType.PAGE.value

    id: str


@dataclass(frozen=True, slots=True)
class DatabaseMention(Mention):
    TYPE: ClassVar[str] = MentionType.DATABASE.value

    id: str


@dataclass(frozen=True, slots=True)
class LinkPreviewMention(Mention):
    TYPE: ClassVar[str] = MentionType.LINK_PREVIEW.value

    url: str


@dataclass(frozen=True, slots=True)
class TemplateMention(Mention):
    """``@today``, ``@now`` and ``@me`` placeholders inside templates."""

    TYPE: ClassVar[str] = MentionType.TEMPLATE_MENTION.value


@dataclass(frozen=True, slots=True)
class UnsupportedMention(Mention):
    TYPE: ClassVar[str] = "unsupported"

    type: str
    raw: Any = field(default=None, compare=False)


# ── runs ────────────────────────────────────────────────────────────


class RichText:
    """Base for every parsed rich-text run."""

    __slots__ = ()
    TYPE: ClassVar[str]


@dataclass(frozen=True, slots=True)
class TextRun(RichText):
    TYPE: ClassVar[str] = RichTextType.TEXT.value

    content: str
    link_url: str | None = None
    plain_text: str = ""


@dataclass(frozen=True, slots=True)
class MentionRun(RichText):
    TYPE: ClassVar[str] = RichTextType.MENTION.value

    mention: Mention
    plain_text: str = ""


@dataclass(frozen=True, slots=True)
class EquationRun(RichText):
    TYPE: ClassVar[str] = RichTextType.EQUATION.value

    expression: str
    plain_text: str = ""


@dataclass(frozen=True, slots=True)
class UnsupportedRun(RichText):
    TYPE: ClassVar[str] = "unsupported"

    type: str
    raw: Any = field(default=None, compare=False)
