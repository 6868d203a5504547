"""Shared utilities for notion_relay."""

from notion_relay.utils.json_norm import (
    bounded_json_dumps,
    stable_json_dump,
    stable_json_dumps,
    truncate,
)
from notion_relay.utils.exit_codes import ExitCode

__all__ = [
    "ExitCode",
    "bounded_json_dumps",
    "stable_json_dump",
    "stable_json_dumps",
    "truncate",
]
