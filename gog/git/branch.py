"""Branch descriptor.

A Branch is an immutable snapshot of what git reported about one branch
name at the moment it was resolved. Nothing refreshes it: after a checkout,
create or delete the caller resolves the name again.
"""

from __future__ import annotations

from dataclasses import dataclass

from gog.core.result import Err, Ok, Result
from gog.errors import BranchDeleteError
from gog.output.console import ConsoleProtocol

from .repository import GitBackend, GitError

__all__ = [
    "Branch",
    "delete_branch",
    "exists_locally",
    "exists_remotely",
    "has_uncommitted_changes",
    "related_history",
    "resolve_branch",
]


@dataclass(frozen=True, slots=True)
class Branch:
    """A named branch and where it existed when resolved."""

    name: str
    local_exists: bool = False
    remote_exists: bool = False

    @property
    def exists(self) -> bool:
        return self.local_exists or self.remote_exists

    def __str__(self) -> str:
        return self.name


def exists_locally(repo: GitBackend, name: str) -> bool:
    result = repo.local_branches()
    return isinstance(result, Ok) and name in result.value


def exists_remotely(repo: GitBackend, name: str) -> bool:
    """True if the remote has a head with this name.

    An unreachable or missing remote counts as "no match", never an error.
    """
    result = repo.remote_branches()
    return isinstance(result, Ok) and name in result.value


def resolve_branch(repo: GitBackend, name: str, console: ConsoleProtocol | None = None) -> Branch:
    branch = Branch(
        name=name,
        local_exists=exists_locally(repo, name),
        remote_exists=exists_remotely(repo, name),
    )
    if console is not None:
        console.debug(
            f"resolved branch {name}: local={branch.local_exists} remote={branch.remote_exists}"
        )
    return branch


def has_uncommitted_changes(repo: GitBackend) -> Result[bool, GitError]:
    """True if the index holds an added, modified, deleted or renamed path."""
    result = repo.status()
    if isinstance(result, Err):
        return result
    return Ok(result.value.has_staged_changes)


def related_history(repo: GitBackend, branch: Branch) -> Result[tuple[str, ...], GitError]:
    """First-parent commit lines whose message mentions the branch name."""
    return repo.log_first_parent(branch.name)


def delete_branch(
    repo: GitBackend, branch: Branch, console: ConsoleProtocol | None = None
) -> Result[None, BranchDeleteError]:
    """Delete the local ref, then the remote one if the remote had it."""
    if branch.local_exists:
        local = repo.delete_local_branch(branch.name)
        if isinstance(local, Err):
            return Err(BranchDeleteError(branch=branch.name, side="local", error=local.error))
        if console is not None:
            console.debug(f"deleted local branch: {branch.name}")

    if branch.remote_exists:
        remote = repo.delete_remote_branch(branch.name)
        if isinstance(remote, Err):
            return Err(
                BranchDeleteError(
                    branch=branch.name,
                    side="remote",
                    error=remote.error,
                    local_deleted=branch.local_exists,
                )
            )
        if console is not None:
            console.debug(f"deleted remote branch: {branch.name}")

    return Ok(None)
