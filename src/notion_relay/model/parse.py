"""Turn raw webhook JSON into the typed model.

Every public function here is total: it never raises for JSON-shaped
input.  Unknown tags, and payloads whose shape cannot be read, come back
as the matching ``Unsupported*`` variant carrying the raw payload.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from . import FileType, FormulaType, MentionType, PropertyType, RichTextType, RollupType
from .date import DateRange
from .property import (
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
    FormulaResult,
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
    RollupResult,
    SelectOption,
    SelectProperty,
    StatusProperty,
    TitleProperty,
    UniqueIdProperty,
    UnsupportedFormula,
    UnsupportedProperty,
    UnsupportedRollup,
    UrlProperty,
)
from .rich_text import (
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
    UnsupportedMention,
    UnsupportedRun,
    UserMention,
)
from .user import User, UserProfile, UserReference

logger = logging.getLogger(__name__)

# Shape errors a malformed payload can trigger while being read.
_SHAPE_ERRORS = (KeyError, TypeError, ValueError, AttributeError, OverflowError)

# Rollup arrays may nest other rollups; anything deeper than this is not read.
MAX_NESTING_DEPTH = 16


# ── small readers ───────────────────────────────────────────────────


def _mapping(value: Any) -> Mapping[str, Any] | None:
    """Return *value* if it is a JSON object, None if null, else raise."""
    if value is None:
        return None
    if isinstance(value, Mapping):
        return value
    raise TypeError(f"expected object, got {type(value).__name__}")


def _items(value: Any) -> list[Any]:
    """Return *value* as a list; null reads as empty."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    raise TypeError(f"expected array, got {type(value).__name__}")


def _str(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    raise TypeError(f"expected string, got {type(value).__name__}")


def _number(value: Any) -> int | float | None:
    if value is None:
        return None
    # bool is an int subclass; Notion never sends one as a number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected number, got {type(value).__name__}")
    return value


def _payload(raw: Mapping[str, Any], key: str) -> Any:
    """The variant-specific payload lives under the key named by the tag."""
    return raw.get(key)


# ── users / dates / options ─────────────────────────────────────────


def parse_user(raw: Any) -> User | None:
    """Parse a user object.

    Full user objects always carry ``type`` (``person`` or ``bot``);
    partial ones only ``object`` and ``id``.  That key is the
    discriminant.
    """
    obj = _mapping(raw)
    if obj is None:
        return None
    user_id = _str(obj.get("id")) or ""
    user_type = obj.get("type")
    if user_type is not None:
        return UserProfile(id=user_id, type=str(user_type), name=_str(obj.get("name")))
    return UserReference(id=user_id)


def parse_date(raw: Any) -> DateRange | None:
    obj = _mapping(raw)
    if obj is None:
        return None
    return DateRange(
        start=_str(obj.get("start")),
        end=_str(obj.get("end")),
        time_zone=_str(obj.get("time_zone")),
    )


def _parse_option(raw: Any) -> SelectOption | None:
    obj = _mapping(raw)
    if obj is None:
        return None
    return SelectOption(name=_str(obj.get("name")) or "", color=_str(obj.get("color")))


def _parse_file(raw: Any) -> FileObject:
    obj = _mapping(raw) or {}
    file_type = _str(obj.get("type")) or ""
    url = None
    if file_type in (FileType.FILE.value, FileType.EXTERNAL.value):
        url = _str((_mapping(obj.get(file_type)) or {}).get("url"))
    return FileObject(name=_str(obj.get("name")) or "", type=file_type, url=url)


# ── rich text ───────────────────────────────────────────────────────


def _mention_user(raw: Mapping[str, Any]) -> Mention:
    return UserMention(user=parse_user(raw.get("user")))


def _mention_date(raw: Mapping[str, Any]) -> Mention:
    return DateMention(date=parse_date(raw.get("date")))


def _mention_page(raw: Mapping[str, Any]) -> Mention:
    return PageMention(id=_str(_mapping(raw["page"])["id"]) or "")


def _mention_database(raw: Mapping[str, Any]) -> Mention:
    return DatabaseMention(id=_str(_mapping(raw["database"])["id"]) or "")


def _mention_link_preview(raw: Mapping[str, Any]) -> Mention:
    return LinkPreviewMention(url=_str(_mapping(raw["link_preview"])["url"]) or "")


def _mention_template(raw: Mapping[str, Any]) -> Mention:
    return TemplateMention()


_MENTION_PARSERS: dict[str, Callable[[Mapping[str, Any]], Mention]] = {
    MentionType.USER.value: _mention_user,
    MentionType.DATE.value: _mention_date,
    MentionType.PAGE.value: _mention_page,
    MentionType.DATABASE.value: _mention_database,
    MentionType.LINK_PREVIEW.value: _mention_link_preview,
    MentionType.TEMPLATE_MENTION.value: _mention_template,
}


def parse_mention(raw: Any) -> Mention:
    """Parse the ``mention`` object of a mention run."""
    if not isinstance(raw, Mapping):
        return UnsupportedMention(type=type(raw).__name__, raw=raw)
    tag = str(raw.get("type"))
    parser = _MENTION_PARSERS.get(tag)
    if parser is None:
        return UnsupportedMention(type=tag, raw=raw)
    try:
        return parser(raw)
    except _SHAPE_ERRORS as exc:
        logger.debug("Unreadable %s mention: %s", tag, exc)
        return UnsupportedMention(type=tag, raw=raw)


def parse_rich_text(raw: Any) -> RichText:
    """Parse one rich-text run."""
    if not isinstance(raw, Mapping):
        return UnsupportedRun(type=type(raw).__name__, raw=raw)
    tag = str(raw.get("type"))
    try:
        plain_text = _str(raw.get("plain_text")) or ""
        if tag == RichTextType.TEXT.value:
            text = _mapping(raw["text"])
            link = _mapping(text.get("link"))
            return TextRun(
                content=_str(text.get("content")) or "",
                link_url=_str(link.get("url")) if link else None,
                plain_text=plain_text,
            )
        if tag == RichTextType.MENTION.value:
            return MentionRun(mention=parse_mention(raw["mention"]), plain_text=plain_text)
        if tag == RichTextType.EQUATION.value:
            equation = _mapping(raw.get("equation")) or {}
            return EquationRun(
                expression=_str(equation.get("expression")) or "",
                plain_text=plain_text,
            )
    except _SHAPE_ERRORS as exc:
        logger.debug("Unreadable %s rich-text run: %s", tag, exc)
    return UnsupportedRun(type=tag, raw=raw)


def _runs(value: Any) -> tuple[RichText, ...]:
    return tuple(parse_rich_text(item) for item in _items(value))


# ── formula / rollup ────────────────────────────────────────────────


def _parse_formula(raw: Any) -> FormulaResult:
    obj = _mapping(raw) or {}
    tag = str(obj.get("type"))
    if tag == FormulaType.STRING.value:
        return FormulaString(value=_str(obj.get("string")))
    if tag == FormulaType.NUMBER.value:
        return FormulaNumber(value=_number(obj.get("number")))
    if tag == FormulaType.BOOLEAN.value:
        value = obj.get("boolean")
        if value is not None and not isinstance(value, bool):
            raise TypeError(f"expected boolean, got {type(value).__name__}")
        return FormulaBoolean(value=value)
    if tag == FormulaType.DATE.value:
        return FormulaDate(date=parse_date(obj.get("date")))
    return UnsupportedFormula(type=tag)


def _parse_rollup(raw: Any, depth: int, max_depth: int) -> RollupResult:
    obj = _mapping(raw) or {}
    tag = str(obj.get("type"))
    if tag == RollupType.NUMBER.value:
        return RollupNumber(value=_number(obj.get("number")))
    if tag == RollupType.DATE.value:
        return RollupDate(date=parse_date(obj.get("date")))
    if tag == RollupType.ARRAY.value:
        array = obj.get("array")
        if array is None:
            return RollupArray(items=None)
        return RollupArray(
            items=tuple(
                parse_property(item, depth=depth + 1, max_depth=max_depth)
                for item in _items(array)
            )
        )
    return UnsupportedRollup(type=tag)


# ── properties ──────────────────────────────────────────────────────


def _unique_id(raw: Mapping[str, Any]) -> PropertyValue:
    payload = _mapping(_payload(raw, "unique_id")) or {}
    number = _number(payload.get("number"))
    if number is not None and number != int(number):
        raise ValueError(f"unique_id number is not integral: {number!r}")
    return UniqueIdProperty(
        number=int(number) if number is not None else None,
        prefix=_str(payload.get("prefix")),
    )


def _relation(raw: Mapping[str, Any]) -> PropertyValue:
    ids = []
    for item in _items(_payload(raw, "relation")):
        ref = _mapping(item)
        if ref and ref.get("id"):
            ids.append(str(ref["id"]))
    return RelationProperty(ids=tuple(ids), has_more=bool(raw.get("has_more")))


def _checkbox(raw: Mapping[str, Any]) -> PropertyValue:
    return CheckboxProperty(checked=bool(_payload(raw, "checkbox")))


_PROPERTY_PARSERS: dict[str, Callable[[Mapping[str, Any]], PropertyValue]] = {
    PropertyType.TITLE.value: lambda raw: TitleProperty(runs=_runs(_payload(raw, "title"))),
    PropertyType.RICH_TEXT.value: lambda raw: RichTextProperty(
        runs=_runs(_payload(raw, "rich_text"))
    ),
    PropertyType.URL.value: lambda raw: UrlProperty(url=_str(_payload(raw, "url"))),
    PropertyType.EMAIL.value: lambda raw: EmailProperty(email=_str(_payload(raw, "email"))),
    PropertyType.PHONE_NUMBER.value: lambda raw: PhoneNumberProperty(
        phone_number=_str(_payload(raw, "phone_number"))
    ),
    PropertyType.SELECT.value: lambda raw: SelectProperty(
        option=_parse_option(_payload(raw, "select"))
    ),
    PropertyType.MULTI_SELECT.value: lambda raw: MultiSelectProperty(
        options=tuple(
            opt
            for opt in (_parse_option(item) for item in _items(_payload(raw, "multi_select")))
            if opt is not None
        )
    ),
    PropertyType.STATUS.value: lambda raw: StatusProperty(
        option=_parse_option(_payload(raw, "status"))
    ),
    PropertyType.DATE.value: lambda raw: DateProperty(date=parse_date(_payload(raw, "date"))),
    PropertyType.CHECKBOX.value: _checkbox,
    PropertyType.NUMBER.value: lambda raw: NumberProperty(
        number=_number(_payload(raw, "number"))
    ),
    PropertyType.CREATED_TIME.value: lambda raw: CreatedTimeProperty(
        timestamp=_str(_payload(raw, "created_time"))
    ),
    PropertyType.LAST_EDITED_TIME.value: lambda raw: LastEditedTimeProperty(
        timestamp=_str(_payload(raw, "last_edited_time"))
    ),
    PropertyType.CREATED_BY.value: lambda raw: CreatedByProperty(
        user=parse_user(_payload(raw, "created_by"))
    ),
    PropertyType.LAST_EDITED_BY.value: lambda raw: LastEditedByProperty(
        user=parse_user(_payload(raw, "last_edited_by"))
    ),
    PropertyType.PEOPLE.value: lambda raw: PeopleProperty(
        people=tuple(
            user
            for user in (parse_user(item) for item in _items(_payload(raw, "people")))
            if user is not None
        )
    ),
    PropertyType.UNIQUE_ID.value: _unique_id,
    PropertyType.RELATION.value: _relation,
    PropertyType.FORMULA.value: lambda raw: FormulaProperty(
        result=_parse_formula(_payload(raw, "formula"))
    ),
    PropertyType.FILES.value: lambda raw: FilesProperty(
        files=tuple(_parse_file(item) for item in _items(_payload(raw, "files")))
    ),
}


def _rollup(raw: Mapping[str, Any], depth: int, max_depth: int) -> PropertyValue:
    return RollupProperty(
        result=_parse_rollup(_payload(raw, "rollup"), depth, max_depth),
        function=_str((_mapping(_payload(raw, "rollup")) or {}).get("function")),
    )


# Parsers for variants that can contain further property values.
_NESTED_PARSERS: dict[str, Callable[[Mapping[str, Any], int, int], PropertyValue]] = {
    PropertyType.ROLLUP.value: _rollup,
}


def parse_property(
    raw: Any, *, depth: int = 0, max_depth: int = MAX_NESTING_DEPTH
) -> PropertyValue:
    """Parse one value of a page's ``properties`` map.

    Already-parsed values are returned unchanged.  A value sitting deeper
    than *max_depth* levels of rollup nesting is not read at all and
    comes back as :class:`DepthExceededProperty`.
    """
    if isinstance(raw, PropertyValue):
        return raw
    if depth > max_depth:
        return DepthExceededProperty()
    if not isinstance(raw, Mapping):
        return UnsupportedProperty(type=type(raw).__name__, raw=raw)
    tag = str(raw.get("type"))
    try:
        nested = _NESTED_PARSERS.get(tag)
        if nested is not None:
            return nested(raw, depth, max_depth)
        parser = _PROPERTY_PARSERS.get(tag)
        if parser is None:
            logger.debug("Unsupported property type %r", tag)
            return UnsupportedProperty(type=tag, raw=raw)
        return parser(raw)
    except _SHAPE_ERRORS as exc:
        logger.debug("Unreadable %s property: %s", tag, exc)
        return UnsupportedProperty(type=tag, raw=raw)


def parse_properties(raw: Mapping[str, Any]) -> dict[str, PropertyValue]:
    """Parse a whole ``properties`` map, keeping its insertion order."""
    return {str(name): parse_property(value) for name, value in raw.items()}
