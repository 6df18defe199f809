"""Finish command - release the active feature."""

from __future__ import annotations

import typer

from gog.cli.commands._helpers import exit_on_error, load_feature, load_snapshot
from gog.cli.context import build_context
from gog.feature.workflow import FinishOptions, parse_bump_level


def finish(
    major: bool = typer.Option(False, "--major", help="Incompatible API changes"),
    minor: bool = typer.Option(False, "--minor", help="Backwards compatible functionality"),
    patch: bool = typer.Option(False, "--patch", help="Backwards compatible bug fixes"),
    squash: bool = typer.Option(
        False,
        "--squash",
        help="Squash-merge the feature into one commit instead of rebasing",
    ),
    no_changelog: bool = typer.Option(False, "--no-changelog", help="Skip the changelog entry"),
    no_tag: bool = typer.Option(
        False,
        "--no-tag",
        help="Skip release tags (and therefore the changelog entry)",
    ),
) -> None:
    """Release the active feature: changelog, fold into default, tag, clean up."""
    ctx = build_context()
    level = exit_on_error(parse_bump_level(major=major, minor=minor, patch=patch), ctx)
    snapshot = load_snapshot(ctx)
    current = load_feature(ctx, snapshot)

    release = exit_on_error(
        ctx.workflow().finish(
            snapshot,
            current,
            FinishOptions(level=level, squash=squash, changelog=not no_changelog, tag=not no_tag),
        ),
        ctx,
    )

    if release.tagged:
        ctx.console.print(f"  {release.previous} -> {release.tag} ({release.major_tag})")
    if release.changelog_path is not None:
        ctx.console.print(f"  changelog: {release.changelog_path}")
    ctx.console.success(f"Successfully created new feature release for {current.jira}!")
