"""Push commands - publish work in progress."""

from __future__ import annotations

import typer

from gog.cli.commands._helpers import exit_on_error, join_words, load_feature, load_snapshot
from gog.cli.context import build_context
from gog.feature.simple_push import simple_push as run_simple_push


def push(
    message: list[str] | None = typer.Argument(None, help="Commit message (default: numbered test build)"),
) -> None:
    """Commit and push the active feature's changes."""
    ctx = build_context()
    snapshot = load_snapshot(ctx)
    current = load_feature(ctx, snapshot)

    pushed = exit_on_error(ctx.workflow().push(snapshot, current, join_words(message) or None), ctx)
    ctx.console.success(f"Successfully pushed changes to feature {pushed.jira}!")


def simple_push(
    message: list[str] | None = typer.Argument(None, help="Commit message (default: numbered test build)"),
) -> None:
    """Commit and push the current branch without feature tracking."""
    ctx = build_context()
    snapshot = load_snapshot(ctx)

    commit_message = exit_on_error(
        run_simple_push(
            ctx.repo,
            snapshot,
            join_words(message) or None,
            console=ctx.console,
            confirm=ctx.confirm,
        ),
        ctx,
    )
    ctx.console.success(f"Pushed {snapshot.current_branch}: {commit_message}")
