"""Tests for gog.platform.files."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from gog.platform.files import atomic_write_text, read_text_if_exists, remove_tree


def test_creates_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / ".gog" / "feature.json"

    atomic_write_text(target, '{"jira": "ABC-1"}\n')

    assert target.read_text(encoding="utf-8") == '{"jira": "ABC-1"}\n'


def test_replaces_existing_content(tmp_path: Path) -> None:
    target = tmp_path / "CHANGELOG.md"
    target.write_text("old", encoding="utf-8")

    atomic_write_text(target, "new")

    assert target.read_text(encoding="utf-8") == "new"


def test_leaves_no_temp_files(tmp_path: Path) -> None:
    atomic_write_text(tmp_path / "CHANGELOG.md", "text")

    assert [p.name for p in tmp_path.iterdir()] == ["CHANGELOG.md"]


def test_keeps_newlines_verbatim(tmp_path: Path) -> None:
    target = tmp_path / "CHANGELOG.md"

    atomic_write_text(target, "a\nb\n")

    assert target.read_bytes() == b"a\nb\n"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
def test_keeps_existing_permissions(tmp_path: Path) -> None:
    target = tmp_path / "CHANGELOG.md"
    target.write_text("old", encoding="utf-8")
    os.chmod(target, 0o644)

    atomic_write_text(target, "new")

    assert target.stat().st_mode & 0o777 == 0o644


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
def test_new_file_is_not_private(tmp_path: Path) -> None:
    target = tmp_path / "CHANGELOG.md"
    umask = os.umask(0o022)
    try:
        atomic_write_text(target, "text")
    finally:
        os.umask(umask)

    assert target.stat().st_mode & 0o777 == 0o644


class TestReadTextIfExists:
    def test_missing(self, tmp_path: Path) -> None:
        assert read_text_if_exists(tmp_path / "CHANGELOG.md") is None

    def test_present(self, tmp_path: Path) -> None:
        target = tmp_path / "CHANGELOG.md"
        target.write_text("# Changelog\n", encoding="utf-8")

        assert read_text_if_exists(target) == "# Changelog\n"


class TestRemoveTree:
    def test_removes_nested_content(self, tmp_path: Path) -> None:
        metadata = tmp_path / ".gog"
        (metadata / "sub").mkdir(parents=True)
        (metadata / "feature.json").write_text("{}", encoding="utf-8")

        assert remove_tree(metadata) is True
        assert not metadata.exists()

    def test_missing_is_not_an_error(self, tmp_path: Path) -> None:
        assert remove_tree(tmp_path / ".gog") is False
