"""Error payloads for the feature workflow.

Each kind is a frozen dataclass with a human-readable `message` and an
optional `hint`. For failures of an external git command the hint carries
git's own diagnostic text verbatim, so the CLI can show both the high-level
explanation and what git actually said.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from gog.git.repository import GitError

__all__ = [
    "AggregationError",
    "BranchDeleteError",
    "Cancelled",
    "ChangeHistoryEmpty",
    "CollisionError",
    "ExternalProcessError",
    "FeatureNotFound",
    "FormatError",
    "GogError",
    "InvalidState",
    "NotARepository",
    "PersistenceError",
]


@dataclass(frozen=True, slots=True)
class NotARepository:
    path: Path

    @property
    def message(self) -> str:
        return f"the current directory ({self.path}) is not a valid git repository"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class FormatError:
    """A feature identifier, version string or prefix is malformed."""

    what: str
    value: str
    expected: str

    @property
    def message(self) -> str:
        return f"invalid {self.what} {self.value!r}"

    @property
    def hint(self) -> str | None:
        return f"expected {self.expected}"


@dataclass(frozen=True, slots=True)
class CollisionError:
    """Something the operation would create already exists."""

    what: str
    name: str
    hint: str | None = None

    @property
    def message(self) -> str:
        return f"{self.what} {self.name} already exists"


@dataclass(frozen=True, slots=True)
class ExternalProcessError:
    """A git command failed while performing `operation`."""

    operation: str
    error: GitError

    @property
    def message(self) -> str:
        return f"failed to {self.operation} (git {self.error.command}, exit {self.error.returncode})"

    @property
    def hint(self) -> str | None:
        return self.error.message or None


@dataclass(frozen=True, slots=True)
class AggregationError:
    """The repository snapshot could not be assembled."""

    reason: str
    error: GitError | None = None

    @property
    def message(self) -> str:
        return f"failed to read repository state: {self.reason}"

    @property
    def hint(self) -> str | None:
        if self.error is None:
            return None
        return self.error.message or None


@dataclass(frozen=True, slots=True)
class ChangeHistoryEmpty:
    branch: str

    @property
    def message(self) -> str:
        return f"no commits mentioning {self.branch} were found to summarize in the changelog"

    @property
    def hint(self) -> str | None:
        return "push a change first (gog push)"


@dataclass(frozen=True, slots=True)
class FeatureNotFound:
    path: Path

    @property
    def message(self) -> str:
        return f"feature file not found ({self.path}); there may not be a gog feature on this branch"

    @property
    def hint(self) -> str | None:
        return "start one with: gog feature <JIRA-ID> <comment>"


@dataclass(frozen=True, slots=True)
class InvalidState:
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class PersistenceError:
    """Reading or writing a gog-managed file failed.

    `cleanup` holds the failure of the compensating action, if one was
    attempted and also failed.
    """

    operation: str
    path: Path
    reason: str
    cleanup: GogError | None = None

    @property
    def message(self) -> str:
        text = f"failed to {self.operation} ({self.path}): {self.reason}"
        if self.cleanup is not None:
            text += f"; cleanup also failed: {self.cleanup.message}"
        return text

    @property
    def hint(self) -> str | None:
        if self.cleanup is not None:
            return self.cleanup.hint
        return None


@dataclass(frozen=True, slots=True)
class BranchDeleteError:
    """Deleting a branch failed on one side.

    `local_deleted` records whether the local ref was removed before a
    remote failure.
    """

    branch: str
    side: Literal["local", "remote"]
    error: GitError
    local_deleted: bool = False

    @property
    def message(self) -> str:
        if self.side == "remote":
            text = f"failed to delete remote branch {self.branch}; "
            if self.local_deleted:
                return text + "the local branch is already gone, remove the remote one manually"
            return text + "remove it manually"
        return f"failed to delete local branch {self.branch}"

    @property
    def hint(self) -> str | None:
        return self.error.message or None


@dataclass(frozen=True, slots=True)
class Cancelled:
    """The operator declined a confirmation prompt."""

    operation: str

    @property
    def message(self) -> str:
        return f"safely exiting {self.operation}"

    @property
    def hint(self) -> str | None:
        return None


GogError = (
    NotARepository
    | FormatError
    | CollisionError
    | ExternalProcessError
    | AggregationError
    | ChangeHistoryEmpty
    | FeatureNotFound
    | InvalidState
    | PersistenceError
    | BranchDeleteError
    | Cancelled
)
