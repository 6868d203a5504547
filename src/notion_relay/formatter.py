"""
notion_relay.formatter
======================

Render Notion property values as short display strings.

``format_property`` is total: every variant, including ones Notion adds
after this code was written, renders to a non-empty string.  Absent data
becomes a bracketed sentinel such as ``[No URL]``; unknown variants
become an ``[Unsupported ...]`` placeholder embedding a bounded JSON dump
of the payload.  Nothing here raises, logs at INFO, or touches I/O.

Usage::

    from notion_relay.formatter import format_property

    format_property({"type": "checkbox", "checkbox": True})   # "✅"
    format_property({"type": "url", "url": None})             # "[No URL]"
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from notion_relay.model.date import DateRange
from notion_relay.model.parse import MAX_NESTING_DEPTH, parse_property
from notion_relay.model.property import (
    CheckboxProperty,
    CreatedByProperty,
    CreatedTimeProperty,
    DateProperty,
    DepthExceededProperty,
    EmailProperty,
    FileObject,
    FilesProperty,
    FormulaBoolean,
    FormulaDate,
    FormulaNumber,
    FormulaProperty,
    FormulaString,
    LastEditedByProperty,
    LastEditedTimeProperty,
    MultiSelectProperty,
    NumberProperty,
    PeopleProperty,
    PhoneNumberProperty,
    PropertyValue,
    RelationProperty,
    RichTextProperty,
    RollupArray,
    RollupDate,
    RollupNumber,
    RollupProperty,
    SelectProperty,
    StatusProperty,
    TitleProperty,
    UniqueIdProperty,
    UnsupportedProperty,
    UrlProperty,
)
from notion_relay.model.rich_text import (
    DatabaseMention,
    DateMention,
    EquationRun,
    LinkPreviewMention,
    Mention,
    MentionRun,
    PageMention,
    RichText,
    TemplateMention,
    TextRun,
    UnsupportedRun,
    UserMention,
)
from notion_relay.model.user import User, UserProfile
from notion_relay.utils.json_norm import bounded_json_dumps

NOTION_BASE_URL = "https://www.notion.so/"

CHECKED = "✅"
UNCHECKED = "❌"

# ── sentinels ───────────────────────────────────────────────────────

EMPTY_TITLE = "[Empty Title]"
EMPTY_TEXT = "[Empty Text]"
NO_URL = "[No URL]"
NO_EMAIL = "[No Email]"
NO_PHONE = "[No Phone]"
NO_SELECTION = "[No Selection]"
NO_SELECTIONS = "[No Selections]"
NO_DATE = "[No Date]"
INVALID_DATE = "[Invalid Date]"
NO_NUMBER = "[No Number]"
NO_STATUS = "[No Status]"
NO_TIME = "[No Time]"
NO_USER = "[No User]"
NO_PEOPLE = "[No People]"
NO_ID = "[No ID]"
NO_RELATIONS = "[No Relations]"
NO_FILES = "[No Files]"
UNNAMED_FILE = "[Unnamed File]"
NO_FORMULA_STRING = "[No Formula String]"
NO_FORMULA_NUMBER = "[No Formula Number]"
NO_FORMULA_BOOLEAN = "[No Formula Boolean]"
UNSUPPORTED_FORMULA = "[Unsupported Formula Type]"
NO_ROLLUP_NUMBER = "[No Rollup Number]"
EMPTY_ROLLUP_ARRAY = "[Empty Rollup Array]"
UNSUPPORTED_ROLLUP = "[Unsupported Rollup Type]"
UNSUPPORTED_MENTION = "[Unsupported Mention Type]"
MAX_DEPTH_EXCEEDED = "[Max Depth Exceeded]"

DEFAULT_MAX_DEPTH = MAX_NESTING_DEPTH
DEFAULT_MAX_DUMP_LENGTH = 1000

LIST_SEPARATOR = ", "


@dataclass(frozen=True, slots=True)
class FormatOptions:
    """Limits applied while rendering one value."""

    max_depth: int = DEFAULT_MAX_DEPTH
    max_dump_length: int | None = DEFAULT_MAX_DUMP_LENGTH


# ── shared sub-formatters ───────────────────────────────────────────


def format_number(value: int | float) -> str:
    """Render a number the way Notion displays it (``3.0`` → ``"3"``)."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def format_date(date: DateRange | None) -> str:
    if date is None:
        return NO_DATE
    if not date.start:
        return INVALID_DATE
    if date.end:
        return f"{date.start} - {date.end}"
    return date.start


def format_user(user: User | None) -> str:
    """Display name for full profiles, id for everything else."""
    if user is None:
        return NO_USER
    if isinstance(user, UserProfile) and user.name:
        return user.name
    return user.id or NO_USER


def _join(parts: Iterable[str], sentinel: str) -> str:
    return LIST_SEPARATOR.join(parts) or sentinel


def _markdown_link(label: str, url: str) -> str:
    return f"[{label}]({url})"


def _notion_url(object_id: str) -> str:
    return NOTION_BASE_URL + object_id.replace("-", "")


# ── rich text ───────────────────────────────────────────────────────


def _mention_user(mention: UserMention, plain_text: str) -> str:
    return format_user(mention.user)


def _mention_date(mention: DateMention, plain_text: str) -> str:
    return format_date(mention.date)


def _mention_page(mention: PageMention, plain_text: str) -> str:
    url = _notion_url(mention.id)
    return _markdown_link(plain_text or url, url)


def _mention_database(mention: DatabaseMention, plain_text: str) -> str:
    url = _notion_url(mention.id)
    return _markdown_link(plain_text or url, url)


def _mention_link_preview(mention: LinkPreviewMention, plain_text: str) -> str:
    return _markdown_link(plain_text or mention.url, mention.url)


def _mention_template(mention: TemplateMention, plain_text: str) -> str:
    return plain_text


_MENTION_RENDERERS: dict[type[Mention], Callable[[Any, str], str]] = {
    UserMention: _mention_user,
    DateMention: _mention_date,
    PageMention: _mention_page,
    DatabaseMention: _mention_database,
    LinkPreviewMention: _mention_link_preview,
    TemplateMention: _mention_template,
}


def format_rich_text(run: RichText, *, max_dump_length: int | None = DEFAULT_MAX_DUMP_LENGTH) -> str:
    """Render one rich-text run as a Markdown fragment (may be empty)."""
    if isinstance(run, TextRun):
        if run.link_url:
            return _markdown_link(run.content, run.link_url)
        return run.content
    if isinstance(run, MentionRun):
        renderer = _MENTION_RENDERERS.get(type(run.mention))
        if renderer is None:
            return UNSUPPORTED_MENTION
        return renderer(run.mention, run.plain_text)
    if isinstance(run, EquationRun):
        return run.plain_text or run.expression
    raw = run.raw if isinstance(run, UnsupportedRun) else run
    return f"[Unsupported Rich Text Type: {bounded_json_dumps(raw, limit=max_dump_length)}]"


def _runs(runs: Iterable[RichText], options: FormatOptions) -> str:
    return "".join(
        format_rich_text(run, max_dump_length=options.max_dump_length) for run in runs
    )


# ── property renderers ──────────────────────────────────────────────
#
# Each renderer takes (value, options, depth) and returns a non-empty string.


def _title(prop: TitleProperty, options: FormatOptions, depth: int) -> str:
    return _runs(prop.runs, options) or EMPTY_TITLE


def _rich_text(prop: RichTextProperty, options: FormatOptions, depth: int) -> str:
    return _runs(prop.runs, options) or EMPTY_TEXT


def _url(prop: UrlProperty, options: FormatOptions, depth: int) -> str:
    return prop.url or NO_URL


def _email(prop: EmailProperty, options: FormatOptions, depth: int) -> str:
    return prop.email or NO_EMAIL


def _phone_number(prop: PhoneNumberProperty, options: FormatOptions, depth: int) -> str:
    return prop.phone_number or NO_PHONE


def _select(prop: SelectProperty, options: FormatOptions, depth: int) -> str:
    return (prop.option.name if prop.option else "") or NO_SELECTION


def _multi_select(prop: MultiSelectProperty, options: FormatOptions, depth: int) -> str:
    return _join((opt.name for opt in prop.options if opt.name), NO_SELECTIONS)


def _status(prop: StatusProperty, options: FormatOptions, depth: int) -> str:
    return (prop.option.name if prop.option else "") or NO_STATUS


def _date(prop: DateProperty, options: FormatOptions, depth: int) -> str:
    return format_date(prop.date)


def _checkbox(prop: CheckboxProperty, options: FormatOptions, depth: int) -> str:
    return CHECKED if prop.checked else UNCHECKED


def _number(prop: NumberProperty, options: FormatOptions, depth: int) -> str:
    return NO_NUMBER if prop.number is None else format_number(prop.number)


def _created_time(prop: CreatedTimeProperty, options: FormatOptions, depth: int) -> str:
    return prop.timestamp or NO_TIME


def _last_edited_time(prop: LastEditedTimeProperty, options: FormatOptions, depth: int) -> str:
    return prop.timestamp or NO_TIME


def _created_by(prop: CreatedByProperty, options: FormatOptions, depth: int) -> str:
    return format_user(prop.user)


def _last_edited_by(prop: LastEditedByProperty, options: FormatOptions, depth: int) -> str:
    return format_user(prop.user)


def _people(prop: PeopleProperty, options: FormatOptions, depth: int) -> str:
    return _join((format_user(user) for user in prop.people), NO_PEOPLE)


def _unique_id(prop: UniqueIdProperty, options: FormatOptions, depth: int) -> str:
    if prop.number is None:
        return NO_ID
    if not prop.prefix:
        return str(prop.number)
    return f"{prop.prefix}-{prop.number}"


def _relation(prop: RelationProperty, options: FormatOptions, depth: int) -> str:
    return _join(prop.ids, NO_RELATIONS)


def _formula(prop: FormulaProperty, options: FormatOptions, depth: int) -> str:
    result = prop.result
    if isinstance(result, FormulaString):
        return result.value or NO_FORMULA_STRING
    if isinstance(result, FormulaNumber):
        return NO_FORMULA_NUMBER if result.value is None else format_number(result.value)
    if isinstance(result, FormulaBoolean):
        if result.value is None:
            return NO_FORMULA_BOOLEAN
        return CHECKED if result.value else UNCHECKED
    if isinstance(result, FormulaDate):
        return format_date(result.date)
    return UNSUPPORTED_FORMULA


def _file(file: FileObject) -> str:
    if file.url:
        return _markdown_link(file.name or file.url, file.url)
    return file.name or UNNAMED_FILE


def _files(prop: FilesProperty, options: FormatOptions, depth: int) -> str:
    return _join((_file(f) for f in prop.files), NO_FILES)


def _rollup(prop: RollupProperty, options: FormatOptions, depth: int) -> str:
    result = prop.result
    if isinstance(result, RollupNumber):
        return NO_ROLLUP_NUMBER if result.value is None else format_number(result.value)
    if isinstance(result, RollupDate):
        return format_date(result.date)
    if isinstance(result, RollupArray):
        if not result.items:
            return EMPTY_ROLLUP_ARRAY
        return LIST_SEPARATOR.join(_render(item, options, depth + 1) for item in result.items)
    return UNSUPPORTED_ROLLUP


def _unsupported(prop: UnsupportedProperty, options: FormatOptions, depth: int) -> str:
    dump = bounded_json_dumps(prop.raw, limit=options.max_dump_length)
    return f"[Unsupported Type: {prop.type}: {dump}]"


RENDERERS: dict[type[PropertyValue], Callable[[Any, FormatOptions, int], str]] = {
    TitleProperty: _title,
    RichTextProperty: _rich_text,
    UrlProperty: _url,
    EmailProperty: _email,
    PhoneNumberProperty: _phone_number,
    SelectProperty: _select,
    MultiSelectProperty: _multi_select,
    StatusProperty: _status,
    DateProperty: _date,
    CheckboxProperty: _checkbox,
    NumberProperty: _number,
    CreatedTimeProperty: _created_time,
    LastEditedTimeProperty: _last_edited_time,
    CreatedByProperty: _created_by,
    LastEditedByProperty: _last_edited_by,
    PeopleProperty: _people,
    UniqueIdProperty: _unique_id,
    RelationProperty: _relation,
    FormulaProperty: _formula,
    FilesProperty: _files,
    RollupProperty: _rollup,
    UnsupportedProperty: _unsupported,
    DepthExceededProperty: lambda prop, options, depth: MAX_DEPTH_EXCEEDED,
}


def _render(prop: PropertyValue, options: FormatOptions, depth: int) -> str:
    if depth > options.max_depth:
        return MAX_DEPTH_EXCEEDED
    renderer = RENDERERS.get(type(prop))
    if renderer is None:
        # A PropertyValue subclass nobody registered a renderer for.
        tag = getattr(prop, "TYPE", type(prop).__name__)
        return _unsupported(UnsupportedProperty(type=tag, raw=repr(prop)), options, depth)
    return renderer(prop, options, depth)


def format_property(
    value: PropertyValue | Any,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_dump_length: int | None = DEFAULT_MAX_DUMP_LENGTH,
) -> str:
    """Render one property value as a display string.

    *value* may be a parsed :class:`PropertyValue` or the raw webhook
    dict.  The result is never empty and the call never raises.
    """
    options = FormatOptions(max_depth=max_depth, max_dump_length=max_dump_length)
    return _render(parse_property(value, max_depth=max_depth), options, 0)
