"""Repository snapshot.

build_snapshot gathers the repository facts one gog command needs (project
name, tag prefix, default and current branch, latest release) with five
independent git queries run in parallel. Either every query succeeds and a
complete snapshot is returned, or the first failure is returned and no
snapshot exists.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from gog.core.result import Err, Ok, Result
from gog.errors import AggregationError, NotARepository
from gog.output.console import ConsoleProtocol
from gog.release.semver import Version, latest_release, tag_prefix_of

from .branch import Branch, resolve_branch
from .repository import GitBackend, GitError

__all__ = ["RepositorySnapshot", "SnapshotError", "build_snapshot"]

SnapshotError = NotARepository | AggregationError


@dataclass(slots=True)
class RepositorySnapshot:
    """Repository facts for the duration of one command.

    Only `feature_branch` changes after construction, when the workflow
    creates or checks out the feature branch.
    When the repository has no tags `version_prefix` is the configured
    fallback and `prefix_from_tags` is False.
    """

    project_name: str
    project_root: Path
    version_prefix: str
    default_branch: Branch
    current_branch: Branch
    latest_release: Version
    prefix_from_tags: bool = True
    feature_branch: Branch | None = None

    def set_feature_branch(self, branch: Branch) -> None:
        self.feature_branch = branch

    def describe(self) -> str:
        return (
            f"project={self.project_name} prefix={self.version_prefix!r} "
            f"default={self.default_branch} current={self.current_branch} "
            f"latest={self.latest_release}"
        )


def build_snapshot(
    repo: GitBackend,
    *,
    fallback_prefix: str,
    console: ConsoleProtocol,
) -> Result[RepositorySnapshot, SnapshotError]:
    """Query git concurrently and assemble a snapshot.

    Args:
        repo: Backend to query
        fallback_prefix: Tag prefix to assume when the repository has no tags
        console: Receives debug output for each finished query
    """
    if not repo.is_repository():
        return Err(NotARepository(repo.path))

    executor = ThreadPoolExecutor(max_workers=5, thread_name_prefix="gog-snapshot")
    try:
        root_f = executor.submit(_project_root, repo)
        prefix_f = executor.submit(_version_prefix, repo)
        default_f = executor.submit(_default_branch, repo, console)
        current_f = executor.submit(_current_branch, repo, console)
        latest_f = executor.submit(_latest_release, repo)

        labels: dict[Future[Any], str] = {
            root_f: "project root",
            prefix_f: "version prefix",
            default_f: "default branch",
            current_f: "current branch",
            latest_f: "latest release tag",
        }
        for future in as_completed(labels):
            result = future.result()
            label = labels[future]
            if isinstance(result, Err):
                error: GitError = result.error
                console.debug(f"error occurred when capturing {label}: {error}")
                return Err(AggregationError(reason=f"could not determine {label}", error=error))
            console.debug(f"completed {label} with result: {result.value}")
    finally:
        # In-flight git processes run to completion on their own; nothing waits for them.
        executor.shutdown(wait=False, cancel_futures=True)

    root = _value(root_f)
    recorded_prefix = _value(prefix_f)
    snapshot = RepositorySnapshot(
        project_name=root.name.strip(),
        project_root=root,
        version_prefix=fallback_prefix if recorded_prefix is None else recorded_prefix,
        default_branch=_value(default_f),
        current_branch=_value(current_f),
        latest_release=_value(latest_f),
        prefix_from_tags=recorded_prefix is not None,
    )

    for label, value in (
        ("project name", snapshot.project_name),
        ("default branch", snapshot.default_branch.name),
        ("current branch", snapshot.current_branch.name),
    ):
        if not value:
            return Err(AggregationError(reason=f"{label} came back empty"))

    console.debug(f"initialized repository snapshot: {snapshot.describe()}")
    return Ok(snapshot)


def _value[T](future: Future[Result[T, GitError]]) -> T:
    result = future.result()
    if isinstance(result, Err):
        raise AssertionError(f"unexpected failed query after aggregation: {result.error}")
    return result.value


def _project_root(repo: GitBackend) -> Result[Path, GitError]:
    return repo.project_root()


def _version_prefix(repo: GitBackend) -> Result[str | None, GitError]:
    """Prefix of the most recent tag; None when the repository has no tags."""
    result = repo.latest_tag_name()
    if isinstance(result, Err):
        return result
    if result.value is None:
        return Ok(None)
    return Ok(tag_prefix_of(result.value))


def _default_branch(repo: GitBackend, console: ConsoleProtocol) -> Result[Branch, GitError]:
    return _resolved(repo.default_branch, repo, console)


def _current_branch(repo: GitBackend, console: ConsoleProtocol) -> Result[Branch, GitError]:
    return _resolved(repo.current_branch, repo, console)


def _resolved(
    query: Callable[[], Result[str, GitError]],
    repo: GitBackend,
    console: ConsoleProtocol,
) -> Result[Branch, GitError]:
    result = query()
    if isinstance(result, Err):
        return result
    name = result.value.strip()
    if not name:
        return Ok(Branch(name=""))
    return Ok(resolve_branch(repo, name, console))


def _latest_release(repo: GitBackend) -> Result[Version, GitError]:
    """Highest release tag merged into the default branch (0.0.0 if none)."""
    default = repo.default_branch()
    if isinstance(default, Err):
        return default
    if not default.value:
        return Ok(latest_release(()))
    tags = repo.merged_tags(default.value)
    if isinstance(tags, Err):
        return tags
    return Ok(latest_release(tags.value))
