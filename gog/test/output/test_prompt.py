"""Tests for gog.output.prompt."""

from __future__ import annotations

import pytest

from gog.output.prompt import ScriptedConfirm, StaticConfirm, TyperConfirm


def test_static_confirm() -> None:
    assert StaticConfirm().confirm("continue?") is True
    assert StaticConfirm(False).confirm("continue?") is False


def test_scripted_confirm_records_questions() -> None:
    confirm = ScriptedConfirm(answers=[True, False])

    assert confirm.confirm("first?") is True
    assert confirm.confirm("second?") is False
    assert confirm.confirm("third?") is False
    assert confirm.asked == ["first?", "second?", "third?"]


def test_typer_confirm_defaults_to_no(monkeypatch: pytest.MonkeyPatch) -> None:
    import typer

    seen: dict[str, object] = {}

    def fake_confirm(text: str, default: bool = True) -> bool:
        seen["text"] = text
        seen["default"] = default
        return default

    monkeypatch.setattr(typer, "confirm", fake_confirm)

    assert TyperConfirm().confirm("continue with feature release?") is False
    assert seen == {"text": "continue with feature release?", "default": False}
