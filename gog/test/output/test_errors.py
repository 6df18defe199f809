"""Tests for gog.output.errors."""

from __future__ import annotations

from pathlib import Path

import pytest

from gog.core.errors import ErrorCode
from gog.errors import (
    AggregationError,
    BranchDeleteError,
    Cancelled,
    ChangeHistoryEmpty,
    CollisionError,
    ExternalProcessError,
    FeatureNotFound,
    FormatError,
    GogError,
    InvalidState,
    NotARepository,
    PersistenceError,
)
from gog.git.repository import GitError
from gog.output.console import MockConsole, Style
from gog.output.errors import error_exit_code, print_error

GIT_ERROR = GitError(
    command="rebase ABC-1",
    message="CONFLICT (content): Merge conflict in app.py",
    returncode=1,
)


class TestPrintError:
    def test_git_failure_shows_diagnostic(self) -> None:
        console = MockConsole()

        print_error(ExternalProcessError(operation="rebase commits of ABC-1", error=GIT_ERROR), console)

        assert console.outputs[0].style == Style.ERROR
        assert console.outputs[0].message == "error: failed to rebase commits of ABC-1 (git rebase ABC-1, exit 1)"
        assert console.outputs[1].message == "git: CONFLICT (content): Merge conflict in app.py"
        assert console.outputs[1].style == Style.DIM

    def test_hint(self) -> None:
        console = MockConsole()

        print_error(ChangeHistoryEmpty("ABC-1"), console)

        assert console.has_error()
        assert console.find("hint: push a change first")

    def test_cancelled_is_not_an_error(self) -> None:
        console = MockConsole()

        print_error(Cancelled("feature release"), console)

        assert not console.has_error()
        assert console.messages == ["info: safely exiting feature release"]

    def test_branch_delete_names_side(self) -> None:
        console = MockConsole()

        print_error(BranchDeleteError(branch="ABC-1", side="remote", error=GIT_ERROR), console)

        assert "remote branch ABC-1" in console.outputs[0].message


class TestExitCode:
    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (Cancelled("feature creation"), ErrorCode.OK),
            (FormatError(what="feature identifier", value="abc", expected="ABC-1"), ErrorCode.USER_ERROR),
            (CollisionError(what="branch", name="ABC-1"), ErrorCode.USER_ERROR),
            (InvalidState(message="wrong branch"), ErrorCode.USER_ERROR),
            (FeatureNotFound(Path(".gog/feature.json")), ErrorCode.USER_ERROR),
            (ChangeHistoryEmpty("ABC-1"), ErrorCode.USER_ERROR),
            (NotARepository(Path("/tmp")), ErrorCode.ENV_ERROR),
            (ExternalProcessError(operation="push", error=GIT_ERROR), ErrorCode.GIT_ERROR),
            (AggregationError(reason="could not determine default branch"), ErrorCode.GIT_ERROR),
            (BranchDeleteError(branch="ABC-1", side="local", error=GIT_ERROR), ErrorCode.GIT_ERROR),
            (
                PersistenceError(operation="write the changelog", path=Path("CHANGELOG.md"), reason="denied"),
                ErrorCode.IO_ERROR,
            ),
        ],
    )
    def test_mapping(self, error: GogError, code: ErrorCode) -> None:
        assert error_exit_code(error) == int(code)
