"""Tests for gog.feature.simple_push."""

from __future__ import annotations

from pathlib import Path

import pytest

from gog.core.result import Err, Ok
from gog.errors import Cancelled
from gog.feature.model import Feature, FeatureStore
from gog.feature.simple_push import next_build_number, simple_push
from gog.git.snapshot import RepositorySnapshot, build_snapshot
from gog.output.console import MockConsole
from gog.output.prompt import ScriptedConfirm, StaticConfirm
from gog.test.fakes import FakeGit


def _snapshot(git: FakeGit, console: MockConsole) -> RepositorySnapshot:
    result = build_snapshot(git, fallback_prefix="v", console=console)
    assert isinstance(result, Ok)
    git.calls.clear()
    return result.value


class TestNextBuildNumber:
    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ("main Test Build (4)", 5),
            ("main fix login (12)", 13),
            ("main Test Build (0)  ", 1),
            ("initial commit", 0),
            ("release (v2)", 0),
            ("", 0),
            (None, 0),
        ],
    )
    def test_parses_trailing_number(self, message: str | None, expected: int) -> None:
        assert next_build_number(message) == expected


class TestSimplePush:
    def test_numbers_from_last_commit(self, tmp_path: Path) -> None:
        git = FakeGit(path=tmp_path, logs={"main": ["main Test Build (4)"]})
        console = MockConsole()
        snapshot = _snapshot(git, console)

        result = simple_push(git, snapshot, None, console=console, confirm=StaticConfirm(True))

        assert result == Ok("main Test Build (5)")
        assert ("commit", "main Test Build (5)") in git.calls

    def test_with_message(self, tmp_path: Path) -> None:
        git = FakeGit(path=tmp_path, logs={"main": ["initial commit"]})
        console = MockConsole()
        snapshot = _snapshot(git, console)

        result = simple_push(git, snapshot, "fix login", console=console, confirm=StaticConfirm(True))

        assert result == Ok("main fix login (0)")

    def test_unreadable_log_starts_at_zero(self, tmp_path: Path) -> None:
        git = FakeGit(path=tmp_path)
        git.fail(
            "recent_commit_messages",
            message="fatal: your current branch 'main' does not have any commits yet",
            returncode=128,
        )
        console = MockConsole()
        snapshot = _snapshot(git, console)

        result = simple_push(git, snapshot, None, console=console, confirm=StaticConfirm(True))

        assert result == Ok("main Test Build (0)")

    def test_active_feature_asks_first(self, tmp_path: Path) -> None:
        git = FakeGit(path=tmp_path)
        FeatureStore(tmp_path).save(Feature(jira="ABC-123", comment="x"))
        console = MockConsole()
        snapshot = _snapshot(git, console)
        confirm = ScriptedConfirm(answers=[False])

        result = simple_push(git, snapshot, None, console=console, confirm=confirm)

        assert result == Err(Cancelled("simple push"))
        assert len(confirm.asked) == 1
        assert git.mutations() == []
