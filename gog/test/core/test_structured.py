"""Tests for gog.core.structured."""

from __future__ import annotations

from gog.core.structured import as_str_dict, get_int, get_str, get_table, is_str_dict


def test_is_str_dict() -> None:
    assert is_str_dict({"a": 1})
    assert not is_str_dict({1: "a"})
    assert not is_str_dict(["a"])


def test_as_str_dict() -> None:
    assert as_str_dict({"jira": "ABC-1"}) == {"jira": "ABC-1"}
    assert as_str_dict("ABC-1") is None


def test_get_str_keeps_empty_values() -> None:
    assert get_str({"tag_prefix": ""}, "tag_prefix") == ""
    assert get_str({"tag_prefix": " v "}, "tag_prefix") == "v"
    assert get_str({"tag_prefix": 1}, "tag_prefix") is None
    assert get_str({}, "tag_prefix") is None


def test_get_int_rejects_bool() -> None:
    assert get_int({"test_count": 3}, "test_count") == 3
    assert get_int({"test_count": True}, "test_count") is None
    assert get_int({"test_count": "3"}, "test_count") is None


def test_get_table() -> None:
    assert get_table({"logging": {"level": "INFO"}}, "logging") == {"level": "INFO"}
    assert get_table({"logging": "INFO"}, "logging") is None
