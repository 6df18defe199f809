"""Git operations module.

This module provides abstractions for git operations:
- Repository: the git command-line client behind the GitBackend protocol
- Branch: what git reported about one branch name
- RepositorySnapshot: per-command repository facts, gathered in parallel

Usage:
    from gog.git import Repository, build_snapshot

    repo = Repository(Path.cwd())
    result = build_snapshot(repo, fallback_prefix="v", console=console)
    if isinstance(result, Ok):
        print(f"Latest release: {result.value.latest_release}")
"""

from gog.git.branch import (
    Branch,
    delete_branch,
    has_uncommitted_changes,
    related_history,
    resolve_branch,
)
from gog.git.repository import (
    GitBackend,
    GitError,
    GitStatus,
    Repository,
    StatusEntry,
)
from gog.git.snapshot import RepositorySnapshot, SnapshotError, build_snapshot

__all__ = [
    # Repository
    "GitBackend",
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
    # Branch
    "Branch",
    "delete_branch",
    "has_uncommitted_changes",
    "related_history",
    "resolve_branch",
    # Snapshot
    "RepositorySnapshot",
    "SnapshotError",
    "build_snapshot",
]
