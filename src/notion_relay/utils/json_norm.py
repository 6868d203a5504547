"""JSON serialization helpers shared by the formatter and the CLI.

Guarantees:
  - ``stable_json_dumps``: sorted keys, UTF-8, trailing newline
  - ``bounded_json_dumps``: source key order, capped length
  - Dataclasses → dicts, unknown objects → ``str``
  - Nesting is cut off at ``MAX_NESTING`` levels
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import IO, Any, Mapping

# Marker appended to anything cut short.
ELLIPSIS = "..."

# Deepest container level written out; anything below becomes ELLIPSIS.
MAX_NESTING = 32


def _to_builtin(obj: Any, depth: int = 0) -> Any:
    """Convert common non-JSON types into JSON-safe builtins.

    Containers nested deeper than ``MAX_NESTING`` are replaced by ``...``.
    """
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, Enum):
        return obj.value
    if depth >= MAX_NESTING:
        return ELLIPSIS
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _to_builtin(getattr(obj, f.name), depth + 1) for f in fields(obj)}
    if isinstance(obj, Mapping):
        return {str(k): _to_builtin(v, depth + 1) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_to_builtin(v, depth + 1) for v in obj]
    return str(obj)


def truncate(text: str, limit: int | None) -> str:
    """Cut *text* to at most *limit* characters, ending in ``...`` when cut.

    ``None`` or a non-positive limit means unbounded.
    """
    if limit is None or limit <= 0 or len(text) <= limit:
        return text
    if limit <= len(ELLIPSIS):
        return text[:limit]
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def bounded_json_dumps(obj: Any, *, limit: int | None = None, indent: int | None = 2) -> str:
    """Pretty JSON in the payload's own key order, capped at *limit* characters."""
    s = json.dumps(_to_builtin(obj), indent=indent, ensure_ascii=False)
    return truncate(s, limit)


def stable_json_dumps(obj: Any, *, indent: int | None = 2) -> str:
    """Canonical JSON used for CLI output: sorted keys plus newline at EOF."""
    s = json.dumps(
        _to_builtin(obj),
        indent=indent,
        sort_keys=True,
        ensure_ascii=False,
    )
    return s + "\n"


def stable_json_dump(obj: Any, fp: IO[str], *, indent: int | None = 2) -> None:
    fp.write(stable_json_dumps(obj, indent=indent))
