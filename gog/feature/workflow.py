"""Feature workflow state machine.

    NotStarted --start--> Active --push--> Active
                          Active --finish--> Released
                          Active --abandon--> Abandoned

Each transition is an ordered series of git calls. The first failure stops
the transition and is returned with the operation that failed; nothing is
retried and, apart from the documented compensation in `start`, nothing is
rolled back. The repository is left in the state of the last successful
step so the operator can inspect and fix it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path

from gog.core.config import AppConfig
from gog.core.result import Err, Ok, Result
from gog.errors import (
    Cancelled,
    ChangeHistoryEmpty,
    CollisionError,
    ExternalProcessError,
    GogError,
    InvalidState,
)
from gog.git.branch import (
    Branch,
    delete_branch,
    has_uncommitted_changes,
    related_history,
    resolve_branch,
)
from gog.git.repository import GitBackend, GitError
from gog.git.snapshot import RepositorySnapshot
from gog.output.console import ConsoleProtocol
from gog.output.prompt import ConfirmProtocol
from gog.release.changelog import (
    CHANGELOG_FILENAME,
    merge_entry,
    read_changelog,
    render_entry,
    write_changelog,
)
from gog.release.semver import BumpLevel, Version

from .model import Feature, FeatureStore, new_feature

__all__ = [
    "FeatureWorkflow",
    "FinishOptions",
    "Release",
    "parse_bump_level",
    "publish_changes",
    "pull_latest",
]


@dataclass(frozen=True, slots=True)
class FinishOptions:
    """How a feature is released.

    Without tags there is no version to record, so no changelog entry is
    written either.
    """

    level: BumpLevel
    squash: bool = False
    changelog: bool = True
    tag: bool = True
    released_at: datetime | None = None

    @property
    def writes_changelog(self) -> bool:
        return self.changelog and self.tag


@dataclass(frozen=True, slots=True)
class Release:
    """What a finished feature produced."""

    feature: Feature
    previous: Version
    version: Version
    changelog_path: Path | None
    tagged: bool = True

    @property
    def tag(self) -> str:
        return self.version.render()

    @property
    def major_tag(self) -> str:
        return self.version.render_major()


def parse_bump_level(*, major: bool, minor: bool, patch: bool) -> Result[BumpLevel, InvalidState]:
    """Exactly one of major/minor/patch must be chosen."""
    chosen = [
        level
        for level, flag in ((BumpLevel.MAJOR, major), (BumpLevel.MINOR, minor), (BumpLevel.PATCH, patch))
        if flag
    ]
    if len(chosen) != 1:
        return Err(
            InvalidState(
                message="specify exactly one of major, minor or patch for this feature release",
                hint="re-run with --major, --minor or --patch",
            )
        )
    return Ok(chosen[0])


def _git_step[T](result: Result[T, GitError], operation: str) -> Result[T, ExternalProcessError]:
    return result.map_err(lambda error: ExternalProcessError(operation=operation, error=error))


def pull_latest(repo: GitBackend, console: ConsoleProtocol) -> Result[None, GogError]:
    """Fetch tags, then pull the checked-out branch."""
    fetched = _git_step(repo.fetch_tags(), "fetch tags from the remote")
    if isinstance(fetched, Err):
        return fetched
    console.debug(f"fetched tags from remote: {fetched.value}")

    pulled = _git_step(repo.pull(), "pull changes from the remote")
    if isinstance(pulled, Err):
        return pulled
    console.debug(f"pulled changes from remote: {pulled.value}")
    return Ok(None)


def publish_changes(
    repo: GitBackend,
    branch: Branch,
    message: str,
    console: ConsoleProtocol,
) -> Result[bool, GogError]:
    """Stage everything, commit if anything is staged, and push the branch.

    A branch without a remote counterpart is pushed with upstream tracking;
    otherwise the remote is pulled first. Returns whether a commit was made.
    """
    staged = _git_step(repo.stage_all(), f"stage current changes for {branch}")
    if isinstance(staged, Err):
        return staged

    pending = _git_step(has_uncommitted_changes(repo), "inspect the working tree")
    if isinstance(pending, Err):
        return pending

    committed = pending.value
    if committed:
        console.debug(f"uncommitted changes found, committing them with message: {message}")
        commit = _git_step(repo.commit(message), f"commit current changes for {branch}")
        if isinstance(commit, Err):
            return commit
    else:
        console.warning(f"No un-committed changes were found for the current branch ({branch}).")

    if branch.remote_exists:
        pulled = pull_latest(repo, console)
        if isinstance(pulled, Err):
            return pulled
        pushed = _git_step(repo.push(), f"push {branch} to the remote")
    else:
        console.debug(f"{branch} has no remote branch yet, pushing with upstream tracking")
        pushed = _git_step(repo.push(set_upstream=branch.name), f"push {branch} to the remote")
    if isinstance(pushed, Err):
        return pushed

    return Ok(committed)


class FeatureWorkflow:
    """Drives one feature through start, push, finish or abandon.

    Attributes:
        repo: Git backend all side effects go through
        config: User configuration (tag prefix)
        console: Progress and diagnostics
        confirm: Asked before continuing against a prefix mismatch
    """

    def __init__(
        self,
        repo: GitBackend,
        *,
        config: AppConfig,
        console: ConsoleProtocol,
        confirm: ConfirmProtocol,
    ) -> None:
        self.repo = repo
        self.config = config
        self.console = console
        self.confirm = confirm

    def store(self, snapshot: RepositorySnapshot) -> FeatureStore:
        return FeatureStore(snapshot.project_root)

    # ------------------------------------------------------------------
    # start
    # ------------------------------------------------------------------

    def start(
        self,
        snapshot: RepositorySnapshot,
        feature: Feature,
        *,
        from_feature: bool = False,
    ) -> Result[Feature, GogError]:
        """Create the feature branch and its metadata record.

        Validation and collision checks all happen before the first git
        call that changes anything.
        """
        valid = new_feature(feature.jira, feature.comment, feature.custom_prefix)
        if isinstance(valid, Err):
            return valid
        feature = valid.value

        store = self.store(snapshot)
        if store.metadata_exists():
            return Err(
                CollisionError(
                    what="gog metadata directory",
                    name=str(store.metadata_dir),
                    hint="there could already be a feature here",
                )
            )

        if not self._confirm_prefix(snapshot, feature, "feature creation"):
            self.console.info(
                "to use the project's existing prefix, pass it with --prefix"
            )
            return Err(Cancelled("feature creation"))

        branch = resolve_branch(self.repo, feature.branch_name, self.console)
        if branch.exists:
            where = "locally" if branch.local_exists else "on the remote"
            return Err(
                CollisionError(
                    what="branch",
                    name=branch.name,
                    hint=f"a branch with this name exists {where}",
                )
            )

        if not from_feature:
            default = snapshot.default_branch.name
            checkout = _git_step(self.repo.checkout(default), f"checkout default branch {default}")
            if isinstance(checkout, Err):
                return checkout
            pulled = pull_latest(self.repo, self.console)
            if isinstance(pulled, Err):
                return pulled

        created = _git_step(
            self.repo.checkout(branch.name, create=True),
            f"create or checkout new feature branch {branch.name}",
        )
        if isinstance(created, Err):
            return created

        feature_branch = resolve_branch(self.repo, branch.name, self.console)
        snapshot.set_feature_branch(feature_branch)

        saved = store.save(feature)
        if isinstance(saved, Err):
            self.console.error(f"failed to create feature tracking file: {saved.error.reason}")
            cleanup = self._undo_start(snapshot, feature_branch, store)
            return Err(replace(saved.error, cleanup=cleanup))

        self.console.debug(f"created feature: {feature}")
        return Ok(feature)

    def _undo_start(
        self,
        snapshot: RepositorySnapshot,
        branch: Branch,
        store: FeatureStore,
    ) -> GogError | None:
        """Best effort: back to the default branch, drop the new branch and metadata."""
        default = snapshot.default_branch.name
        checkout = _git_step(self.repo.checkout(default), f"checkout default branch {default}")
        if isinstance(checkout, Err):
            self.console.error(f"failed to exit cleanly: {checkout.error.message}")
            return checkout.error

        deleted = delete_branch(self.repo, branch, self.console)
        if isinstance(deleted, Err):
            self.console.error(f"failed to exit cleanly: {deleted.error.message}")
            return deleted.error

        removed = store.remove()
        if isinstance(removed, Err):
            self.console.error(f"failed to exit cleanly: {removed.error.message}")
            return removed.error

        self.console.debug(f"removed partially created feature {branch}")
        return None

    # ------------------------------------------------------------------
    # push
    # ------------------------------------------------------------------

    def push(
        self,
        snapshot: RepositorySnapshot,
        feature: Feature,
        message: str | None = None,
    ) -> Result[Feature, GogError]:
        """Commit and push a test build of the feature.

        Without a message the commit is named "<id> Test Build (<n>)" and
        the test-build counter is incremented and saved before staging, so
        the updated record is part of the commit.
        """
        on_branch = self._require_feature_branch(snapshot, feature)
        if isinstance(on_branch, Err):
            return on_branch
        snapshot.set_feature_branch(snapshot.current_branch)

        text = (message or "").strip()
        if text:
            commit_message = f"{feature.jira} {text}"
        else:
            commit_message = f"{feature.jira} Test Build ({feature.test_count})"
            feature = feature.next_test_build()
            saved = self.store(snapshot).save(feature)
            if isinstance(saved, Err):
                return saved
            self.console.debug(
                f"updated test build count from {feature.test_count - 1} -> {feature.test_count}"
            )

        published = publish_changes(self.repo, snapshot.current_branch, commit_message, self.console)
        if isinstance(published, Err):
            return published

        return Ok(feature)

    # ------------------------------------------------------------------
    # finish
    # ------------------------------------------------------------------

    def finish(
        self,
        snapshot: RepositorySnapshot,
        feature: Feature,
        options: FinishOptions,
    ) -> Result[Release, GogError]:
        """Version, changelog, fold into the default branch, tag, clean up.

        The changelog and the metadata removal are committed on the feature
        branch before it is folded in, and the tags are created only after,
        so they point at released history.
        """
        on_branch = self._require_feature_branch(snapshot, feature)
        if isinstance(on_branch, Err):
            return on_branch
        branch = snapshot.current_branch
        snapshot.set_feature_branch(branch)

        if not self._confirm_prefix(snapshot, feature, "feature release"):
            return Err(Cancelled("feature release"))

        previous = snapshot.latest_release
        version = previous.bump(options.level).with_prefix(feature.tag_prefix(self.config.tag_prefix))
        self.console.debug(f"bumping {options.level} release: {previous} -> {version}")

        if options.tag:
            exists = _git_step(self.repo.tag_exists(version.render()), "list existing tags")
            if isinstance(exists, Err):
                return exists
            if exists.value:
                return Err(
                    CollisionError(
                        what="release tag",
                        name=version.render(),
                        hint="release tags are never overwritten",
                    )
                )

        changelog_path: Path | None = None
        if options.writes_changelog:
            history = _git_step(related_history(self.repo, branch), f"read the commit log of {branch}")
            if isinstance(history, Err):
                return history
            if not history.value:
                return Err(ChangeHistoryEmpty(branch.name))

            written = self._write_changelog(snapshot, feature, version, history.value, options)
            if isinstance(written, Err):
                return written
            changelog_path = written.value

        removed = self.store(snapshot).remove()
        if isinstance(removed, Err):
            return removed

        published = publish_changes(self.repo, branch, f"{feature.jira} {feature.comment}", self.console)
        if isinstance(published, Err):
            return published

        default = snapshot.default_branch.name
        checkout = _git_step(self.repo.checkout(default), f"checkout default branch {default}")
        if isinstance(checkout, Err):
            return checkout
        pulled = pull_latest(self.repo, self.console)
        if isinstance(pulled, Err):
            return pulled

        folded = self._fold_into_default(feature, options.squash)
        if isinstance(folded, Err):
            return folded

        if options.tag:
            tagged = self._create_release_tags(feature, version)
            if isinstance(tagged, Err):
                return tagged

        pushed = _git_step(self.repo.push(), f"push the release to {default}")
        if isinstance(pushed, Err):
            return pushed
        if options.tag:
            pushed_tags = _git_step(self.repo.push_tags(force=True), "publish release tags to the remote")
            if isinstance(pushed_tags, Err):
                return pushed_tags

        deleted = delete_branch(self.repo, resolve_branch(self.repo, branch.name, self.console), self.console)
        if isinstance(deleted, Err):
            return deleted

        return Ok(
            Release(
                feature=feature,
                previous=previous,
                version=version,
                changelog_path=changelog_path,
                tagged=options.tag,
            )
        )

    def _write_changelog(
        self,
        snapshot: RepositorySnapshot,
        feature: Feature,
        version: Version,
        changes: tuple[str, ...],
        options: FinishOptions,
    ) -> Result[Path, GogError]:
        path = snapshot.project_root / CHANGELOG_FILENAME
        document = read_changelog(path)
        if isinstance(document, Err):
            return document
        entry = render_entry(
            version=version,
            feature_id=feature.jira,
            comment=feature.comment,
            changes=changes,
            added=options.level.adds_functionality,
            released_at=options.released_at,
        )
        written = write_changelog(path, merge_entry(document.value, entry))
        if isinstance(written, Err):
            return written
        self.console.debug(f"wrote changelog entry for {version} to {path}")
        return Ok(path)

    def _fold_into_default(self, feature: Feature, squash: bool) -> Result[None, GogError]:
        name = feature.branch_name
        if not squash:
            rebased = _git_step(self.repo.rebase(name), f"rebase commits of {name} into the new release")
            if isinstance(rebased, Err):
                return rebased
            return Ok(None)

        merged = _git_step(self.repo.merge_squash(name), f"squash-merge {name}")
        if isinstance(merged, Err):
            return merged
        committed = _git_step(
            self.repo.commit(f"{feature.jira} {feature.comment}"),
            f"commit the squashed changes of {name}",
        )
        if isinstance(committed, Err):
            return committed
        return Ok(None)

    def _create_release_tags(self, feature: Feature, version: Version) -> Result[None, GogError]:
        """Full version tag (never forced), then the floating major tag (always forced)."""
        for tag, force in ((version.render(), False), (version.render_major(), True)):
            message = f"({tag}): {feature.jira} {feature.comment}"
            created = _git_step(
                self.repo.create_tag(tag, message, force=force),
                f"create release tag {tag}",
            )
            if isinstance(created, Err):
                return created
            self.console.debug(f"created release tag ({tag}) for feature: {feature}")
        return Ok(None)

    # ------------------------------------------------------------------
    # abandon
    # ------------------------------------------------------------------

    def abandon(self, snapshot: RepositorySnapshot, feature: Feature) -> Result[None, GogError]:
        """Drop the feature: leave its branch, delete it everywhere, remove metadata."""
        default = snapshot.default_branch.name
        if snapshot.current_branch.name == feature.branch_name:
            checkout = _git_step(self.repo.checkout(default), f"checkout default branch {default}")
            if isinstance(checkout, Err):
                return checkout

        branch = resolve_branch(self.repo, feature.branch_name, self.console)
        snapshot.set_feature_branch(branch)
        deleted = delete_branch(self.repo, branch, self.console)
        if isinstance(deleted, Err):
            return deleted

        removed = self.store(snapshot).remove()
        if isinstance(removed, Err):
            return removed

        self.console.debug(f"abandoned feature {feature.jira}")
        return Ok(None)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _require_feature_branch(
        self, snapshot: RepositorySnapshot, feature: Feature
    ) -> Result[None, InvalidState]:
        if snapshot.current_branch.name != feature.branch_name:
            return Err(
                InvalidState(
                    message=(
                        f"current branch {snapshot.current_branch} is not the feature branch "
                        f"{feature.branch_name}"
                    ),
                    hint=f"git checkout {feature.branch_name}",
                )
            )
        return Ok(None)

    def _confirm_prefix(
        self, snapshot: RepositorySnapshot, feature: Feature, operation: str
    ) -> bool:
        """Ask before continuing when the feature's prefix differs from the project's.

        A project without tags has no recorded prefix, so any prefix matches.
        """
        prefix = feature.tag_prefix(self.config.tag_prefix)
        if not snapshot.prefix_from_tags or prefix == snapshot.version_prefix:
            return True

        self.console.warning(
            "feature version prefix specified does not match existing prefix for this git project "
            f"('{prefix}' != '{snapshot.version_prefix}')"
        )
        if not self.confirm.confirm(f"continue with {operation}?"):
            return False
        self.console.info(f"continuing with {operation} against warning")
        return True
