"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from gog.core.result import Err, Result
from gog.errors import GogError
from gog.feature.model import Feature, FeatureStore
from gog.git.snapshot import RepositorySnapshot, build_snapshot
from gog.output.errors import error_exit_code, print_error

if TYPE_CHECKING:
    from gog.cli.context import CLIContext


def exit_on_error[T](result: Result[T, GogError], ctx: CLIContext) -> T:
    """Return the value, or print the error and exit with its code.

    This helper reduces boilerplate for the common pattern:
        match result:
            case Err(e):
                print_error(e, ctx.console)
                raise typer.Exit(code=error_exit_code(e))
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        print_error(result.error, ctx.console)
        raise typer.Exit(code=error_exit_code(result.error))
    return result.value


def load_snapshot(ctx: CLIContext) -> RepositorySnapshot:
    snapshot = exit_on_error(
        build_snapshot(ctx.repo, fallback_prefix=ctx.config.tag_prefix, console=ctx.console),
        ctx,
    )
    ctx.console.debug(f"repository snapshot: {snapshot.describe()}")
    return snapshot


def load_feature(ctx: CLIContext, snapshot: RepositorySnapshot) -> Feature:
    feature = exit_on_error(FeatureStore(snapshot.project_root).load(), ctx)
    ctx.console.debug(f"loaded feature: {feature}")
    return feature


def join_words(words: list[str] | None) -> str:
    """Positional words joined back into one message."""
    return " ".join(words or []).strip()
