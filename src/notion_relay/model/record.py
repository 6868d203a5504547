"""Record — the page a webhook notification is about."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .parse import parse_properties
from .property import PropertyValue, TitleProperty


@dataclass(frozen=True, slots=True)
class Record:
    """A Notion page reduced to what the relay needs.

    ``properties`` keeps the webhook's key order, which is display order.
    """

    properties: dict[str, PropertyValue] = field(default_factory=dict)
    url: str | None = None
    id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Record":
        """Build from a page object (the ``data`` member of a webhook body)."""
        raw_properties = data.get("properties") or {}
        if not isinstance(raw_properties, Mapping):
            raise TypeError("page 'properties' must be an object")
        return cls(
            properties=parse_properties(raw_properties),
            url=data.get("url") or None,
            id=data.get("id") or None,
        )

    @classmethod
    def from_webhook(cls, body: Mapping[str, Any]) -> "Record":
        """Accept a full webhook body, a bare page, or a bare properties map."""
        if isinstance(body.get("data"), Mapping):
            return cls.from_dict(body["data"])
        if "properties" in body:
            return cls.from_dict(body)
        return cls(properties=parse_properties(body))

    def title_property(self) -> TitleProperty | None:
        """The page's title column; every Notion database has exactly one."""
        for value in self.properties.values():
            if isinstance(value, TitleProperty):
                return value
        return None
