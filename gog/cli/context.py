from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from gog.core.config import AppConfig, config_path, load_or_create_config
from gog.core.errors import ErrorCode
from gog.core.result import Err
from gog.feature.workflow import FeatureWorkflow
from gog.git.repository import GitBackend, Repository
from gog.output.console import ConsoleProtocol, LogLevel, RichConsole
from gog.output.prompt import ConfirmProtocol, StaticConfirm, TyperConfirm

ASSUME_YES_ENV = "GOG_ASSUME_YES"


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo: GitBackend
    config: AppConfig
    config_path: Path
    console: ConsoleProtocol
    confirm: ConfirmProtocol

    def workflow(self) -> FeatureWorkflow:
        return FeatureWorkflow(
            self.repo,
            config=self.config,
            console=self.console,
            confirm=self.confirm,
        )


def build_context() -> CLIContext:
    path = config_path()
    config_result = load_or_create_config(path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config = config_result.value
    console = RichConsole(LogLevel.parse(config.effective_log_level()))
    confirm: ConfirmProtocol = (
        StaticConfirm(True) if os.environ.get(ASSUME_YES_ENV) == "1" else TyperConfirm()
    )

    return CLIContext(
        repo=Repository(Path.cwd()),
        config=config,
        config_path=path,
        console=console,
        confirm=confirm,
    )
