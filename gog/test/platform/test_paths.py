"""Tests for gog.platform.paths."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from gog.platform import paths


@pytest.fixture(autouse=True)
def _fresh_cache() -> Iterator[None]:
    paths.clear_caches()
    yield
    paths.clear_caches()


@pytest.mark.skipif(sys.platform == "win32", reason="XDG lookup is POSIX only")
class TestUserConfigDir:
    def test_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert paths.user_config_dir() == tmp_path / "gog"

    def test_home_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert paths.user_config_dir() == tmp_path / ".config" / "gog"

    def test_cached_until_cleared(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "a"))
        first = paths.user_config_dir()
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "b"))

        assert paths.user_config_dir() == first
        paths.clear_caches()
        assert paths.user_config_dir() == tmp_path / "b" / "gog"
