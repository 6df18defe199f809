"""Release versioning and changelog."""

from .changelog import HEADER, merge_entry, read_changelog, render_entry, write_changelog
from .semver import BumpLevel, Version, latest_release, parse_version, tag_prefix_of

__all__ = [
    "BumpLevel",
    "HEADER",
    "Version",
    "latest_release",
    "merge_entry",
    "parse_version",
    "read_changelog",
    "render_entry",
    "tag_prefix_of",
    "write_changelog",
]
