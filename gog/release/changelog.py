"""Changelog rendering and merging.

CHANGELOG.md is a Keep-a-Changelog header followed by release entries,
newest first. Each entry starts with a line "## [ <version> ] - <time>".
Merging replaces whatever precedes the first entry with the canonical
header and inserts the new entry above all existing ones, which are kept
verbatim.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from gog.core.result import Err, Ok, Result
from gog.errors import PersistenceError
from gog.platform.files import atomic_write_text, read_text_if_exists

from .semver import Version

__all__ = [
    "CHANGELOG_FILENAME",
    "HEADER",
    "merge_entry",
    "read_changelog",
    "render_entry",
    "write_changelog",
]

CHANGELOG_FILENAME = "CHANGELOG.md"

HEADER = (
    "# Changelog\n"
    "All notable changes to this project will be documented in this file.\n"
    "\n"
    "The format is based on [Keep a Changelog](https://keepachangelog.com/en/1.0.0/)\n"
    "and this project adheres to [Semantic Versioning](https://semver.org/spec/v2.0.0.html).\n"
    "\n"
)

_ENTRY_RE = re.compile(r"^## \[")

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def render_entry(
    *,
    version: Version,
    feature_id: str,
    comment: str,
    changes: Sequence[str],
    added: bool,
    released_at: datetime | None = None,
) -> str:
    """Render one release entry, terminated by a blank line."""
    when = (released_at or datetime.now(UTC)).astimezone(UTC)
    lines = [
        f"## [ {version.render()} ] - {when.strftime(_TIMESTAMP_FORMAT)}",
        "",
        f"> {feature_id} {comment}".rstrip(),
        "",
        "### Added" if added else "### Changed",
        "",
    ]
    lines.extend(f"- {change}" for change in changes)
    return "\n".join(lines) + "\n\n"


def merge_entry(document: str, entry: str) -> str:
    """Insert entry above the existing entries of document.

    Anything before the first entry line is dropped and replaced by HEADER,
    so the header appears exactly once however many times this runs.
    """
    lines = document.splitlines()
    existing: list[str] = []
    for index, line in enumerate(lines):
        if _ENTRY_RE.match(line):
            existing = lines[index:]
            break

    merged = HEADER + entry
    if existing:
        merged += "\n".join(existing) + "\n"
    return merged


def read_changelog(path: Path) -> Result[str, PersistenceError]:
    """Current changelog text; a missing file reads as empty."""
    try:
        return Ok(read_text_if_exists(path) or "")
    except (OSError, UnicodeDecodeError) as e:
        return Err(PersistenceError(operation="read the changelog", path=path, reason=str(e)))


def write_changelog(path: Path, text: str) -> Result[None, PersistenceError]:
    try:
        atomic_write_text(path, text)
    except OSError as e:
        return Err(PersistenceError(operation="write the changelog", path=path, reason=str(e)))
    return Ok(None)
