"""Version numbers for release tags.

A release tag is an optional letter prefix (optionally ending in a dash)
followed by MAJOR.MINOR.PATCH: "v1.2.0", "rel-3.0.1", "0.4.2". The prefix
is presentation only; ordering and equality use the numeric triple.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import StrEnum

from gog.core.result import Err, Ok, Result
from gog.errors import FormatError

__all__ = [
    "BumpLevel",
    "Version",
    "ZERO",
    "is_release_tag",
    "latest_release",
    "parse_version",
    "tag_prefix_of",
]

_VERSION_RE = re.compile(r"^(?P<prefix>[a-zA-Z]*-?)(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)$")
_PREFIX_RE = re.compile(r"^[a-zA-Z]*-?")


class BumpLevel(StrEnum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    @property
    def adds_functionality(self) -> bool:
        """Major and minor releases are changelogged as "Added", patches as "Changed"."""
        return self is not BumpLevel.PATCH


@dataclass(frozen=True, slots=True, order=True)
class Version:
    major: int
    minor: int
    patch: int
    prefix: str = field(default="", compare=False)

    def bump(self, level: BumpLevel) -> Version:
        match level:
            case BumpLevel.MAJOR:
                return self.bump_major()
            case BumpLevel.MINOR:
                return self.bump_minor()
            case BumpLevel.PATCH:
                return self.bump_patch()

    def bump_major(self) -> Version:
        return replace(self, major=self.major + 1, minor=0, patch=0)

    def bump_minor(self) -> Version:
        return replace(self, minor=self.minor + 1, patch=0)

    def bump_patch(self) -> Version:
        return replace(self, patch=self.patch + 1)

    def with_prefix(self, prefix: str) -> Version:
        return replace(self, prefix=prefix)

    def render(self) -> str:
        return f"{self.prefix}{self.major}.{self.minor}.{self.patch}"

    def render_major(self) -> str:
        """Floating major tag, e.g. "v2.x"."""
        return f"{self.prefix}{self.major}.x"

    def without_prefix(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        return self.render()


ZERO = Version(0, 0, 0)


def parse_version(text: str) -> Result[Version, FormatError]:
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return Err(
            FormatError(
                what="version",
                value=text,
                expected="[prefix]MAJOR.MINOR.PATCH, e.g. v1.2.0",
            )
        )
    return Ok(
        Version(
            major=int(m.group("major")),
            minor=int(m.group("minor")),
            patch=int(m.group("patch")),
            prefix=m.group("prefix"),
        )
    )


def is_release_tag(tag: str) -> bool:
    return _VERSION_RE.match(tag.strip()) is not None


def tag_prefix_of(tag: str) -> str:
    """Leading prefix of a tag name ("v1.2.0" -> "v", "1.0.0" -> "")."""
    m = _PREFIX_RE.match(tag.strip())
    return m.group(0) if m else ""


def latest_release(tags: tuple[str, ...] | list[str]) -> Version:
    """Highest release among tags; ZERO when none of them is a release tag."""
    latest = ZERO
    for tag in tags:
        parsed = parse_version(tag)
        if isinstance(parsed, Ok) and parsed.value > latest:
            latest = parsed.value
    return latest
