"""Run external commands, capturing output into a Result.

Every process gog starts goes through `run`. A non-zero exit is returned as
an Err holding both captured streams, since git prints some failures (merge
conflicts, rejected pushes) on stdout rather than stderr.

There is no timeout. A git command that hangs, for example on a credential
prompt, hangs the tool.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from gog.core.result import Err, Ok, Result

__all__ = ["NOT_STARTED", "ProcessError", "run"]

# returncode used when the executable could not be started at all
NOT_STARTED = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that exited non-zero or never started."""

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def started(self) -> bool:
        return self.returncode != NOT_STARTED

    @property
    def diagnostic(self) -> str:
        """The most useful captured text: stderr, else stdout."""
        return self.stderr.strip() or self.stdout.strip()

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown += " ..."
        return f"{shown} failed (exit {self.returncode})"


def _environment(overrides: Mapping[str, str] | None) -> dict[str, str] | None:
    if not overrides:
        return None
    return {**os.environ, **overrides}


def run(
    cmd: list[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
) -> Result[str, ProcessError]:
    """Run `cmd` in `cwd` and return its stdout.

    `env` entries are laid over the current environment rather than
    replacing it.
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=_environment(env),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command, NOT_STARTED, "", str(e)))

    if proc.returncode == 0:
        return Ok(proc.stdout)
    return Err(ProcessError(command, proc.returncode, proc.stdout, proc.stderr))
