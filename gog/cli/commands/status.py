"""Status command - show the repository snapshot and the active feature."""

from __future__ import annotations

from gog.cli.commands._helpers import exit_on_error, load_snapshot
from gog.cli.context import build_context
from gog.core.result import Err
from gog.errors import FeatureNotFound
from gog.feature.model import FeatureState, FeatureStore
from gog.output.console import Style


def status() -> None:
    """Show project, branches, latest release and the active feature."""
    ctx = build_context()
    snapshot = load_snapshot(ctx)
    console = ctx.console

    console.header(snapshot.project_name)
    console.print(f"  root:           {snapshot.project_root}")
    console.print(f"  version prefix: {snapshot.version_prefix or '(none)'}")
    console.print(f"  default branch: {snapshot.default_branch}")
    console.print(f"  current branch: {snapshot.current_branch}")
    console.print(f"  latest release: {snapshot.latest_release}")
    console.newline()

    store = FeatureStore(snapshot.project_root)
    loaded = store.load()
    if isinstance(loaded, Err) and isinstance(loaded.error, FeatureNotFound):
        console.print(f"feature: {FeatureState.NOT_STARTED}", Style.DIM)
        return

    current = exit_on_error(loaded, ctx)
    console.print(f"feature: {current.jira} ({store.state()})")
    console.print(f"  comment:     {current.comment}")
    console.print(f"  prefix:      {current.tag_prefix(ctx.config.tag_prefix) or '(none)'}")
    console.print(f"  test builds: {current.test_count}")
    if snapshot.current_branch.name != current.branch_name:
        console.warning(f"not on the feature branch ({current.branch_name})")
