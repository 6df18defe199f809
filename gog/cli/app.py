from __future__ import annotations

import os

import typer

from gog import __version__
from gog.cli.commands.config_cmd import config_app
from gog.cli.commands.feature_cmd import abandon, feature
from gog.cli.commands.finish_cmd import finish
from gog.cli.commands.push_cmd import push, simple_push
from gog.cli.commands.status import status
from gog.cli.context import ASSUME_YES_ENV
from gog.core.config import LOG_LEVEL_ENV


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Feature-branch release workflow for git repositories.",
)


# Commands (each with its short alias)
app.command()(feature)
app.command("feat", hidden=True)(feature)
app.command()(push)
app.command("p", hidden=True)(push)
app.command()(finish)
app.command("fin", hidden=True)(finish)
app.command("simple-push")(simple_push)
app.command("sp", hidden=True)(simple_push)
app.command()(abandon)
app.command()(status)

# Sub-apps
app.add_typer(config_app, name="config")


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to every confirmation."),
) -> None:
    del version
    if verbose:
        os.environ[LOG_LEVEL_ENV] = "DEBUG"
    if yes:
        os.environ[ASSUME_YES_ENV] = "1"


def main() -> None:
    app()
