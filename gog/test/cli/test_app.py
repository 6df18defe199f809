from __future__ import annotations

import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from gog import __version__
from gog.cli.app import app
from gog.cli.context import ASSUME_YES_ENV, CLIContext
from gog.core.config import LOG_LEVEL_ENV, AppConfig
from gog.output.console import MockConsole
from gog.output.prompt import StaticConfirm
from gog.test.fakes import FakeGit

runner = CliRunner()


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_help_lists_commands_but_not_aliases() -> None:
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for command in ("feature", "push", "finish", "simple-push", "abandon", "status", "config"):
        assert command in result.output
    assert " feat " not in result.output


def test_status_runs_through_app(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gog.cli.commands.status as status_cmd

    console = MockConsole()
    ctx = CLIContext(
        repo=FakeGit(path=tmp_path),
        config=AppConfig(),
        config_path=tmp_path / "config.toml",
        console=console,
        confirm=StaticConfirm(True),
    )
    monkeypatch.setattr(status_cmd, "build_context", lambda: ctx)

    result = runner.invoke(app, ["status"])

    assert result.exit_code == 0
    assert console.find("feature: not started")


def test_global_flags_set_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gog.cli.commands.status as status_cmd

    monkeypatch.setenv(LOG_LEVEL_ENV, "INFO")
    monkeypatch.setenv(ASSUME_YES_ENV, "0")
    ctx = CLIContext(
        repo=FakeGit(path=tmp_path),
        config=AppConfig(),
        config_path=tmp_path / "config.toml",
        console=MockConsole(),
        confirm=StaticConfirm(True),
    )
    monkeypatch.setattr(status_cmd, "build_context", lambda: ctx)

    result = runner.invoke(app, ["-v", "-y", "status"])

    assert result.exit_code == 0
    assert os.environ[LOG_LEVEL_ENV] == "DEBUG"
    assert os.environ[ASSUME_YES_ENV] == "1"
