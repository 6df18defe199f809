"""Repository backend: the narrow interface gog uses to talk to git.

GitBackend lists every git interaction the workflow needs. Repository
implements it by running the git binary and interpreting its text output;
tests substitute an in-memory double. All methods that can fail return
Result values, never raise.

Usage:
    repo = Repository(Path("/path/to/project"))
    match repo.current_branch():
        case Ok(name):
            print(f"On {name}")
        case Err(e):
            print(f"git failed: {e.message}")
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from gog.core.result import Err, Ok, Result
from gog.platform.process import ProcessError
from gog.platform.process import run as run_process

__all__ = [
    "GitBackend",
    "GitError",
    "GitStatus",
    "REMOTE",
    "Repository",
    "StatusEntry",
    "mentions",
    "parse_status",
]

REMOTE = "origin"

# git exits 128 for "fatal" conditions such as "No names found" from describe.
_GIT_FATAL = 128

_HEAD_BRANCH_RE = re.compile(r"^\s*HEAD branch:\s*(\S+)\s*$", re.MULTILINE)

_LOG_FORMAT = "`%h` - %s"

# remote-show and error text are parsed, so keep git from translating them
_GIT_ENV = {"LC_ALL": "C"}


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand line that failed (e.g. "push --tags")
        message: git's own diagnostic output
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1

    def __str__(self) -> str:
        text = f"git {self.command} failed (exit {self.returncode})"
        if self.message:
            text += f": {self.message}"
        return text


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single entry in `git status --porcelain`.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str

    @property
    def is_staged(self) -> bool:
        """True if the index column records an add, modify, delete or rename."""
        return self.xy[0] in "AMDR"

    @property
    def is_untracked(self) -> bool:
        return self.xy == "??"


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Parsed working tree status."""

    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        return len(self.entries) == 0

    @property
    def staged(self) -> list[StatusEntry]:
        return [e for e in self.entries if e.is_staged]

    @property
    def has_staged_changes(self) -> bool:
        return any(e.is_staged for e in self.entries)


def parse_status(output: str) -> GitStatus:
    """Parse `git status --porcelain=v1` output."""
    entries: list[StatusEntry] = []
    for line in output.splitlines():
        if len(line) < 4:
            continue
        entries.append(StatusEntry(xy=line[:2], path=line[3:]))
    return GitStatus(entries=tuple(entries))


class GitBackend(Protocol):
    """Every git interaction gog performs."""

    path: Path

    def is_repository(self) -> bool: ...

    def project_root(self) -> Result[Path, GitError]: ...

    def status(self) -> Result[GitStatus, GitError]: ...

    def local_branches(self) -> Result[tuple[str, ...], GitError]: ...

    def remote_branches(self) -> Result[tuple[str, ...], GitError]: ...

    def current_branch(self) -> Result[str, GitError]: ...

    def default_branch(self) -> Result[str, GitError]: ...

    def latest_tag_name(self) -> Result[str | None, GitError]: ...

    def merged_tags(self, branch: str) -> Result[tuple[str, ...], GitError]: ...

    def tag_exists(self, name: str) -> Result[bool, GitError]: ...

    def fetch_tags(self) -> Result[str, GitError]: ...

    def pull(self) -> Result[str, GitError]: ...

    def checkout(self, branch: str, *, create: bool = False) -> Result[str, GitError]: ...

    def stage_all(self) -> Result[str, GitError]: ...

    def commit(self, message: str) -> Result[str, GitError]: ...

    def push(self, *, set_upstream: str | None = None) -> Result[str, GitError]: ...

    def push_tags(self, *, force: bool = True) -> Result[str, GitError]: ...

    def create_tag(self, name: str, message: str, *, force: bool = False) -> Result[str, GitError]: ...

    def rebase(self, onto: str) -> Result[str, GitError]: ...

    def merge_squash(self, branch: str) -> Result[str, GitError]: ...

    def delete_local_branch(self, name: str) -> Result[str, GitError]: ...

    def delete_remote_branch(self, name: str) -> Result[str, GitError]: ...

    def log_first_parent(self, contains: str) -> Result[tuple[str, ...], GitError]: ...

    def recent_commit_messages(self, count: int) -> Result[tuple[str, ...], GitError]: ...


class Repository:
    """GitBackend implemented by running the git binary.

    Attributes:
        path: Directory git is run from (anywhere inside the work tree)
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def is_repository(self) -> bool:
        return isinstance(self._run(["status", "--porcelain"]), Ok)

    def project_root(self) -> Result[Path, GitError]:
        result = self._git(["rev-parse", "--show-toplevel"])
        if isinstance(result, Err):
            return result
        return Ok(Path(result.value.strip()))

    def status(self) -> Result[GitStatus, GitError]:
        result = self._git(["status", "--porcelain=v1"], strip=False)
        if isinstance(result, Err):
            return result
        return Ok(parse_status(result.value))

    def local_branches(self) -> Result[tuple[str, ...], GitError]:
        result = self._git(["branch", "--list", "--format=%(refname:short)"])
        if isinstance(result, Err):
            return result
        return Ok(_lines(result.value))

    def remote_branches(self) -> Result[tuple[str, ...], GitError]:
        result = self._git(["ls-remote", "--heads", REMOTE])
        if isinstance(result, Err):
            return result
        names: list[str] = []
        for line in _lines(result.value):
            ref = line.split()[-1]
            names.append(ref.removeprefix("refs/heads/"))
        return Ok(tuple(names))

    def current_branch(self) -> Result[str, GitError]:
        # Empty on a detached HEAD.
        return self._git(["branch", "--show-current"])

    def default_branch(self) -> Result[str, GitError]:
        result = self._git(["remote", "show", REMOTE])
        if isinstance(result, Err):
            return result
        match = _HEAD_BRANCH_RE.search(result.value)
        return Ok(match.group(1) if match else "")

    def latest_tag_name(self) -> Result[str | None, GitError]:
        result = self._git(["describe", "--tags", "--abbrev=0"])
        if isinstance(result, Err):
            if result.error.returncode == _GIT_FATAL:
                return Ok(None)
            return result
        return Ok(result.value or None)

    def merged_tags(self, branch: str) -> Result[tuple[str, ...], GitError]:
        result = self._git(["tag", "--merged", branch])
        if isinstance(result, Err):
            if result.error.returncode == _GIT_FATAL:
                return Ok(())
            return result
        return Ok(_lines(result.value))

    def tag_exists(self, name: str) -> Result[bool, GitError]:
        result = self._git(["tag", "--list", name])
        if isinstance(result, Err):
            return result
        return Ok(name in _lines(result.value))

    def fetch_tags(self) -> Result[str, GitError]:
        return self._git(["fetch", "--tags", "--force"])

    def pull(self) -> Result[str, GitError]:
        return self._git(["pull"])

    def checkout(self, branch: str, *, create: bool = False) -> Result[str, GitError]:
        args = ["checkout", "-b", branch] if create else ["checkout", branch]
        return self._git(args)

    def stage_all(self) -> Result[str, GitError]:
        return self._git(["add", "-A"])

    def commit(self, message: str) -> Result[str, GitError]:
        return self._git(["commit", "-m", message])

    def push(self, *, set_upstream: str | None = None) -> Result[str, GitError]:
        args = ["push"]
        if set_upstream is not None:
            args += ["--set-upstream", REMOTE, set_upstream]
        return self._git(args)

    def push_tags(self, *, force: bool = True) -> Result[str, GitError]:
        args = ["push", "--tags"]
        if force:
            args.append("--force")
        return self._git(args)

    def create_tag(self, name: str, message: str, *, force: bool = False) -> Result[str, GitError]:
        args = ["tag", "-a", name]
        if force:
            args.append("--force")
        args += ["-m", message]
        return self._git(args)

    def rebase(self, onto: str) -> Result[str, GitError]:
        return self._git(["rebase", onto])

    def merge_squash(self, branch: str) -> Result[str, GitError]:
        return self._git(["merge", "--squash", branch])

    def delete_local_branch(self, name: str) -> Result[str, GitError]:
        return self._git(["branch", "-D", name])

    def delete_remote_branch(self, name: str) -> Result[str, GitError]:
        return self._git(["push", REMOTE, "--delete", name])

    def log_first_parent(self, contains: str) -> Result[tuple[str, ...], GitError]:
        result = self._git(["log", "--first-parent", f"--format={_LOG_FORMAT}"])
        if isinstance(result, Err):
            return result
        return Ok(tuple(line for line in _lines(result.value) if mentions(line, contains)))

    def recent_commit_messages(self, count: int) -> Result[tuple[str, ...], GitError]:
        result = self._git(["log", f"-{count}", "--pretty=%s"])
        if isinstance(result, Err):
            return result
        return Ok(_lines(result.value))

    def _git(self, args: list[str], *, strip: bool = True) -> Result[str, GitError]:
        """Run git and fold a process failure into a GitError."""
        result = self._run(args)
        match result:
            case Err(e):
                message = e.diagnostic if e.started else f"could not run git: {e.diagnostic}"
                return Err(
                    GitError(
                        command=" ".join(args[:2]),
                        message=message,
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout.strip() if strip else stdout)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(["git", *args], cwd=self.path, env=_GIT_ENV)


def mentions(line: str, name: str) -> bool:
    """True if `name` appears in `line` as a whole word, so ABC-1 does not match ABC-12."""
    return re.search(rf"(?<!\w){re.escape(name)}(?!\w)", line) is not None


def _lines(output: str) -> tuple[str, ...]:
    return tuple(line.strip() for line in output.splitlines() if line.strip())
