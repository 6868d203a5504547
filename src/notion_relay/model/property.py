"""PropertyValue — one parsed entry of a Notion page's ``properties`` map.

Each variant is a frozen dataclass tagged with the Notion type string in
``TYPE``.  The set is closed: anything the parser cannot map onto one of
these classes becomes an :class:`UnsupportedProperty` carrying the raw
payload, so the formatter always has something to render.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from . import FormulaType, PropertyType, RollupType
from .date import DateRange
from .rich_text import RichText
from .user import User


class PropertyValue:
    """Base for every parsed field value."""

    __slots__ = ()
    TYPE: ClassVar[str]


@dataclass(frozen=True, slots=True)
class SelectOption:
    name: str
    color: str | None = None


@dataclass(frozen=True, slots=True)
class FileObject:
    """A file attachment; ``url`` is None for types the API added later."""

    name: str
    type: str
    url: str | None = None


# ── formula results ─────────────────────────────────────────────────


class FormulaResult:
    __slots__ = ()
    TYPE: ClassVar[str]


@dataclass(frozen=True, slots=True)
class FormulaString(FormulaResult):
    TYPE: ClassVar[str] = FormulaType.STRING.value

    value: str | None


@dataclass(frozen=True, slots=True)
class FormulaNumber(FormulaResult):
    TYPE: ClassVar[str] = FormulaType.NUMBER.value

    value: int | float | None


@dataclass(frozen=True, slots=True)
class FormulaBoolean(FormulaResult):
    TYPE: ClassVar[str] = FormulaType.BOOLEAN.value

    value: bool | None


@dataclass(frozen=True, slots=True)
class FormulaDate(FormulaResult):
    TYPE: ClassVar[str] = FormulaType.DATE.value

    date: DateRange | None


@dataclass(frozen=True, slots=True)
class UnsupportedFormula(FormulaResult):
    TYPE: ClassVar[str] = "unsupported"

    type: str


# ── rollup results ──────────────────────────────────────────────────


class RollupResult:
    __slots__ = ()
    TYPE: ClassVar[str]


@dataclass(frozen=True, slots=True)
class RollupNumber(RollupResult):
    TYPE: ClassVar[str] = RollupType.NUMBER.value

    value: int | float | None


@dataclass(frozen=True, slots=True)
class RollupDate(RollupResult):
    TYPE: ClassVar[str] = RollupType.DATE.value

    date: DateRange | None


@dataclass(frozen=True, slots=True)
class RollupArray(RollupResult):
    """Aggregated values of the related pages, each a full PropertyValue."""

    TYPE: ClassVar[str] = RollupType.ARRAY.value

    items: tuple[PropertyValue, ...] | None


@dataclass(frozen=True, slots=True)
class UnsupportedRollup(RollupResult):
    TYPE: ClassVar[str] = "unsupported"

    type: str


# ── property variants ───────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class TitleProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.TITLE.value

    runs: tuple[RichText, ...] = ()


@dataclass(frozen=True, slots=True)
class RichTextProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.RICH_TEXT.value

    runs: tuple[RichText, ...] = ()


@dataclass(frozen=True, slots=True)
class UrlProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.URL.value

    url: str | None = None


@dataclass(frozen=True, slots=True)
class EmailProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.EMAIL.value

    email: str | None = None


@dataclass(frozen=True, slots=True)
class PhoneNumberProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.PHONE_NUMBER.value

    phone_number: str | None = None


@dataclass(frozen=True, slots=True)
class SelectProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.SELECT.value

    option: SelectOption | None = None


@dataclass(frozen=True, slots=True)
class MultiSelectProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.MULTI_SELECT.value

    options: tuple[SelectOption, ...] = ()


@dataclass(frozen=True, slots=True)
class StatusProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.STATUS.value

    option: SelectOption | None = None


@dataclass(frozen=True, slots=True)
class DateProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.DATE.value

    date: DateRange | None = None


@dataclass(frozen=True, slots=True)
class CheckboxProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.CHECKBOX.value

    checked: bool = False


@dataclass(frozen=True, slots=True)
class NumberProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.NUMBER.value

    number: int | float | None = None


@dataclass(frozen=True, slots=True)
class CreatedTimeProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.CREATED_TIME.value

    timestamp: str | None = None


@dataclass(frozen=True, slots=True)
class LastEditedTimeProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.LAST_EDITED_TIME.value

    timestamp: str | None = None


@dataclass(frozen=True, slots=True)
class CreatedByProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.CREATED_BY.value

    user: User | None = None


@dataclass(frozen=True, slots=True)
class LastEditedByProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.LAST_EDITED_BY.value

    user: User | None = None


@dataclass(frozen=True, slots=True)
class PeopleProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.PEOPLE.value

    people: tuple[User, ...] = ()


@dataclass(frozen=True, slots=True)
class UniqueIdProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.UNIQUE_ID.value

    number: int | None = None
    prefix: str | None = None


@dataclass(frozen=True, slots=True)
class RelationProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.RELATION.value

    ids: tuple[str, ...] = ()
    has_more: bool = False


@dataclass(frozen=True, slots=True)
class FormulaProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.FORMULA.value

    result: FormulaResult


@dataclass(frozen=True, slots=True)
class FilesProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.FILES.value

    files: tuple[FileObject, ...] = ()


@dataclass(frozen=True, slots=True)
class RollupProperty(PropertyValue):
    TYPE: ClassVar[str] = PropertyType.ROLLUP.value

    result: RollupResult
    function: str | None = None


@dataclass(frozen=True, slots=True)
class UnsupportedProperty(PropertyValue):
    """Anything the parser could not map onto a known variant."""

    TYPE: ClassVar[str] = "unsupported"

    type: str
    raw: Any = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class DepthExceededProperty(PropertyValue):
    """Placeholder for a value nested past the parser's depth limit."""

    TYPE: ClassVar[str] = "depth_exceeded"


# Every concrete variant, in the order the Notion API documents them.
PROPERTY_VARIANTS: tuple[type[PropertyValue], ...] = (
    TitleProperty,
    RichTextProperty,
    UrlProperty,
    EmailProperty,
    PhoneNumberProperty,
    SelectProperty,
    MultiSelectProperty,
    StatusProperty,
    DateProperty,
    CheckboxProperty,
    NumberProperty,
    CreatedTimeProperty,
    LastEditedTimeProperty,
    CreatedByProperty,
    LastEditedByProperty,
    PeopleProperty,
    UniqueIdProperty,
    RelationProperty,
    FormulaProperty,
    FilesProperty,
    RollupProperty,
    UnsupportedProperty,
    DepthExceededProperty,
)
