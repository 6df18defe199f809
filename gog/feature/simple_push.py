"""Push the current branch without feature tracking.

Commits are numbered from the trailing "(N)" of the last commit message:

    main Test Build (4)  ->  main Test Build (5)
"""

from __future__ import annotations

import re

from gog.core.result import Err, Ok, Result
from gog.errors import Cancelled, GogError
from gog.git.repository import GitBackend
from gog.git.snapshot import RepositorySnapshot
from gog.output.console import ConsoleProtocol
from gog.output.prompt import ConfirmProtocol

from .model import FeatureStore
from .workflow import publish_changes

__all__ = ["next_build_number", "simple_push"]

_BUILD_NUMBER_RE = re.compile(r"\((\d+)\)\s*$")


def next_build_number(last_message: str | None) -> int:
    """One more than the trailing build number, or 0 when there is none."""
    if not last_message:
        return 0
    match = _BUILD_NUMBER_RE.search(last_message)
    if match is None:
        return 0
    return int(match.group(1)) + 1


def simple_push(
    repo: GitBackend,
    snapshot: RepositorySnapshot,
    message: str | None,
    *,
    console: ConsoleProtocol,
    confirm: ConfirmProtocol,
) -> Result[str, GogError]:
    """Commit everything as the next numbered build and push. Returns the commit message."""
    store = FeatureStore(snapshot.project_root)
    if store.exists():
        console.warning("a gog feature is active in this project; consider `gog push` instead")
        if not confirm.confirm("continue with simple push?"):
            return Err(Cancelled("simple push"))

    recent = repo.recent_commit_messages(1)
    if isinstance(recent, Err):
        # A branch with no commits yet has no build number to continue from.
        console.debug(f"could not read the last commit message: {recent.error}")
        last = None
    else:
        last = recent.value[0] if recent.value else None

    number = next_build_number(last)
    branch = snapshot.current_branch
    text = (message or "").strip()
    commit_message = f"{branch} {text} ({number})" if text else f"{branch} Test Build ({number})"
    console.debug(f"simple push of {branch} as build {number}")

    published = publish_changes(repo, branch, commit_message, console)
    if isinstance(published, Err):
        return published
    return Ok(commit_message)
