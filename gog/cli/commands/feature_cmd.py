"""Feature commands - start and abandon a feature branch."""

from __future__ import annotations

import typer

from gog.cli.commands._helpers import exit_on_error, join_words, load_feature, load_snapshot
from gog.cli.context import build_context
from gog.feature.model import Feature


def feature(
    jira: str = typer.Argument(..., help="Ticket identifier, e.g. JIRA-0023 (also the branch name)"),
    comment: list[str] = typer.Argument(..., help="Human-readable description of the feature"),
    prefix: str = typer.Option(
        "",
        "--prefix",
        help="Version prefix for this feature, overriding the configured one",
    ),
    from_feature: bool = typer.Option(
        False,
        "--from-feature",
        help="Branch from the current branch instead of the updated default branch",
    ),
) -> None:
    """Start a feature: create its branch and tracking metadata."""
    ctx = build_context()
    snapshot = load_snapshot(ctx)

    started = exit_on_error(
        ctx.workflow().start(
            snapshot,
            Feature(jira=jira, comment=join_words(comment), custom_prefix=prefix),
            from_feature=from_feature,
        ),
        ctx,
    )
    ctx.console.success(f"Successfully created feature {started.jira}!")


def abandon() -> None:
    """Abandon the active feature: delete its branch and metadata."""
    ctx = build_context()
    snapshot = load_snapshot(ctx)
    current = load_feature(ctx, snapshot)

    if not ctx.confirm.confirm(f"delete feature {current.jira} and its branch everywhere?"):
        ctx.console.info("safely exiting feature abandon")
        return

    exit_on_error(ctx.workflow().abandon(snapshot, current), ctx)
    ctx.console.success(f"Abandoned feature {current.jira}")
