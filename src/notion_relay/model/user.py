"""User references as they appear in people, created_by and mention payloads."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserProfile:
    """A full user object: carries a ``type`` (``person`` or ``bot``)."""

    id: str
    type: str
    name: str | None = None


@dataclass(frozen=True, slots=True)
class UserReference:
    """A partial user object: the API only returned the id."""

    id: str


User = UserProfile | UserReference
