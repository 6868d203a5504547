"""Date values shared by date properties, formula/rollup results and mentions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DateRange:
    """A Notion date object.

    ``start`` and ``end`` are kept as the ISO 8601 strings the API sends;
    the formatter never reinterprets them.
    """

    start: str | None
    end: str | None = None
    time_zone: str | None = None
