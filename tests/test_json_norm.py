"""Tests for the JSON helpers used by the CLI and the diagnostic fallback."""

import json
from dataclasses import dataclass

from notion_relay.model import MessageLayout
from notion_relay.utils.json_norm import (
    ELLIPSIS,
    MAX_NESTING,
    bounded_json_dumps,
    stable_json_dump,
    stable_json_dumps,
    truncate,
)


def test_stable_json_dumps_sorts_keys_and_adds_newline():
    s = stable_json_dumps({"b": 1, "a": 2})
    assert s.endswith("\n")
    assert s.index('"a"') < s.index('"b"')


def test_stable_json_dumps_keeps_unicode():
    assert "✅" in stable_json_dumps({"x": "✅"})


def test_stable_json_dumps_converts_dataclasses_and_enums():
    @dataclass
    class Point:
        x: int
        layout: MessageLayout

    obj = json.loads(stable_json_dumps(Point(1, MessageLayout.TEXT)))
    assert obj == {"x": 1, "layout": "text"}


def test_stable_json_dump_writes_to_file_like(tmp_path):
    out = tmp_path / "x.json"
    with out.open("w", encoding="utf-8") as f:
        stable_json_dump({"b": 1, "a": 2}, f)
    txt = out.read_text(encoding="utf-8")
    assert txt.endswith("\n")
    assert '"a"' in txt and '"b"' in txt


def test_bounded_json_dumps_keeps_source_order():
    s = bounded_json_dumps({"type": "x", "a": 1})
    assert s.index('"type"') < s.index('"a"')


def test_bounded_json_dumps_caps_length():
    s = bounded_json_dumps({"blob": "z" * 500}, limit=50)
    assert len(s) == 50
    assert s.endswith("...")


def test_truncate_unbounded():
    assert truncate("abcdef", None) == "abcdef"
    assert truncate("abcdef", 0) == "abcdef"


def test_truncate_tiny_limit_keeps_prefix():
    assert truncate("abcdef", 2) == "ab"


def test_truncate_short_text_untouched():
    assert truncate("abc", 3) == "abc"


def test_bounded_json_dumps_cuts_off_deep_nesting():
    deep = "leaf"
    for _ in range(2000):
        deep = {"x": [deep]}
    obj = json.loads(bounded_json_dumps(deep, indent=None))
    levels = 0
    while isinstance(obj, (dict, list)):
        obj = obj["x"] if isinstance(obj, dict) else obj[0]
        levels += 1
    assert levels == MAX_NESTING
    assert obj == ELLIPSIS
