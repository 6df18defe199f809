"""The Feature record and its on-disk store.

A feature is persisted as <project-root>/.gog/feature.json:

    {"jira": "ABC-123", "comment": "add retry logic", "custom_prefix": "", "test_count": 0}

The metadata directory lives inside the work tree, so it is committed with
the feature's test builds and its removal is committed on finish.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, replace
from enum import StrEnum
from pathlib import Path

from gog.core.config import is_valid_tag_prefix
from gog.core.result import Err, Ok, Result
from gog.core.structured import as_str_dict, get_int, get_str
from gog.errors import FeatureNotFound, FormatError, PersistenceError
from gog.platform.files import atomic_write_text, read_text_if_exists, remove_tree

__all__ = [
    "FEATURE_FILENAME",
    "Feature",
    "FeatureState",
    "FeatureStore",
    "METADATA_DIRNAME",
    "new_feature",
    "validate_feature_id",
]

METADATA_DIRNAME = ".gog"
FEATURE_FILENAME = "feature.json"

FEATURE_ID_RE = re.compile(r"^[A-Z][A-Z0-9]*-[0-9]+$")


class FeatureState(StrEnum):
    NOT_STARTED = "not started"
    ACTIVE = "active"
    RELEASED = "released"
    ABANDONED = "abandoned"


@dataclass(frozen=True, slots=True)
class Feature:
    """One unit of work: a ticket id bound 1:1 to a branch of the same name."""

    jira: str
    comment: str
    custom_prefix: str = ""
    test_count: int = 0

    @property
    def branch_name(self) -> str:
        return self.jira

    def next_test_build(self) -> Feature:
        return replace(self, test_count=self.test_count + 1)

    def tag_prefix(self, configured: str) -> str:
        """The custom prefix when one was given at start, else the configured one."""
        return self.custom_prefix or configured

    def to_dict(self) -> dict[str, object]:
        return {
            "jira": self.jira,
            "comment": self.comment,
            "custom_prefix": self.custom_prefix,
            "test_count": self.test_count,
        }

    def __str__(self) -> str:
        return f"{self.jira} {self.comment}"


def validate_feature_id(jira: str) -> Result[str, FormatError]:
    if FEATURE_ID_RE.match(jira) is None:
        return Err(
            FormatError(
                what="feature identifier",
                value=jira,
                expected="an uppercase ticket key, a dash and a number, e.g. 'JIRA-0023'",
            )
        )
    return Ok(jira)


def new_feature(jira: str, comment: str, custom_prefix: str = "") -> Result[Feature, FormatError]:
    valid = validate_feature_id(jira)
    if isinstance(valid, Err):
        return valid
    if custom_prefix and not is_valid_tag_prefix(custom_prefix):
        return Err(
            FormatError(
                what="version prefix",
                value=custom_prefix,
                expected="letters optionally followed by a dash, e.g. 'v' or 'rel-'",
            )
        )
    return Ok(Feature(jira=jira, comment=comment.strip(), custom_prefix=custom_prefix))


class FeatureStore:
    """Reads and writes the feature record of one project."""

    def __init__(self, project_root: Path) -> None:
        self.project_root = project_root

    @property
    def metadata_dir(self) -> Path:
        return self.project_root / METADATA_DIRNAME

    @property
    def path(self) -> Path:
        return self.metadata_dir / FEATURE_FILENAME

    def metadata_exists(self) -> bool:
        return self.metadata_dir.exists()

    def exists(self) -> bool:
        return self.path.is_file()

    def state(self) -> FeatureState:
        """ACTIVE while a record exists; released and abandoned features leave none."""
        return FeatureState.ACTIVE if self.exists() else FeatureState.NOT_STARTED

    def load(self) -> Result[Feature, FeatureNotFound | PersistenceError]:
        try:
            text = read_text_if_exists(self.path)
        except (OSError, UnicodeDecodeError) as e:
            return Err(self._error("read the feature file", str(e)))
        if text is None:
            return Err(FeatureNotFound(self.path))

        try:
            obj: object = json.loads(text)
        except json.JSONDecodeError as e:
            return Err(self._error("parse the feature file", f"invalid JSON: {e}"))

        data = as_str_dict(obj)
        if data is None:
            return Err(self._error("parse the feature file", "root must be a JSON object"))

        jira = get_str(data, "jira")
        if not jira:
            return Err(self._error("parse the feature file", "missing jira"))

        test_count = get_int(data, "test_count")
        if test_count is None or test_count < 0:
            test_count = 0

        return Ok(
            Feature(
                jira=jira,
                comment=get_str(data, "comment") or "",
                custom_prefix=get_str(data, "custom_prefix") or "",
                test_count=test_count,
            )
        )

    def save(self, feature: Feature) -> Result[None, PersistenceError]:
        try:
            atomic_write_text(self.path, json.dumps(feature.to_dict()) + "\n")
        except OSError as e:
            return Err(self._error("write the feature file", str(e)))
        return Ok(None)

    def remove(self) -> Result[None, PersistenceError]:
        """Delete the whole metadata directory (no-op when absent)."""
        try:
            remove_tree(self.metadata_dir)
        except OSError as e:
            return Err(
                PersistenceError(
                    operation="remove the gog metadata directory",
                    path=self.metadata_dir,
                    reason=str(e),
                )
            )
        return Ok(None)

    def _error(self, operation: str, reason: str) -> PersistenceError:
        return PersistenceError(operation=operation, path=self.path, reason=reason)
