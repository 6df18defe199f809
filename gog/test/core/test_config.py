"""Tests for gog.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from gog.core.config import (
    LOG_LEVEL_ENV,
    AppConfig,
    is_valid_tag_prefix,
    load_config,
    load_or_create_config,
    save_config,
)
from gog.core.result import Err, Ok


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.tag_prefix == "v"
        assert config.log_level == "INFO"

    def test_frozen(self) -> None:
        config = AppConfig()
        with pytest.raises(AttributeError):
            config.tag_prefix = "rel-"  # type: ignore[misc]

    def test_with_tag_prefix_returns_copy(self) -> None:
        config = AppConfig()
        changed = config.with_tag_prefix("rel-")
        assert changed.tag_prefix == "rel-"
        assert config.tag_prefix == "v"

    def test_with_log_level_normalizes(self) -> None:
        assert AppConfig().with_log_level("debug").log_level == "DEBUG"

    def test_from_dict(self) -> None:
        result = AppConfig.from_dict({"logging": {"level": "warn"}, "application": {"tag_prefix": "rel-"}})
        assert result == Ok(AppConfig(tag_prefix="rel-", log_level="WARN"))

    def test_from_dict_empty_prefix_is_allowed(self) -> None:
        result = AppConfig.from_dict({"application": {"tag_prefix": ""}})
        assert result == Ok(AppConfig(tag_prefix=""))

    def test_from_dict_missing_sections(self) -> None:
        assert AppConfig.from_dict({}) == Ok(AppConfig())

    def test_from_dict_bad_level(self) -> None:
        result = AppConfig.from_dict({"logging": {"level": "LOUD"}})
        assert isinstance(result, Err)
        assert "logging.level" in result.error

    def test_from_dict_bad_prefix(self) -> None:
        result = AppConfig.from_dict({"application": {"tag_prefix": "v1"}})
        assert isinstance(result, Err)

    def test_env_overrides_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
        assert AppConfig(log_level="ERROR").effective_log_level() == "DEBUG"

    def test_invalid_env_is_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV, "chatty")
        assert AppConfig(log_level="WARN").effective_log_level() == "WARN"


class TestTagPrefix:
    @pytest.mark.parametrize("prefix", ["", "v", "V", "rel-", "release"])
    def test_valid(self, prefix: str) -> None:
        assert is_valid_tag_prefix(prefix)

    @pytest.mark.parametrize("prefix", ["v1", "--", "rel--", "v.", "-v", "v "])
    def test_invalid(self, prefix: str) -> None:
        assert not is_valid_tag_prefix(prefix)


class TestLoadConfig:
    def test_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "gog" / "config.toml"
        config = AppConfig(tag_prefix="rel-", log_level="DEBUG")

        assert save_config(config, path) == Ok(None)

        assert load_config(path) == Ok(config)

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "missing.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[logging\nlevel = ", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[application]\ntag_prefix = "1.x"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid config" in result.error.message


class TestLoadOrCreate:
    def test_creates_defaults_on_first_use(self, tmp_path: Path) -> None:
        path = tmp_path / "gog" / "config.toml"

        result = load_or_create_config(path)

        assert result == Ok(AppConfig())
        assert path.exists()
        assert load_config(path) == Ok(AppConfig())

    def test_reads_existing(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[logging]\nlevel = "ERROR"\n', encoding="utf-8")

        assert load_or_create_config(path) == Ok(AppConfig(log_level="ERROR"))

    def test_uses_user_config_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from gog.platform import paths

        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        monkeypatch.delenv("APPDATA", raising=False)
        paths.clear_caches()
        try:
            result = load_or_create_config()
        finally:
            paths.clear_caches()

        assert isinstance(result, Ok)
        assert (tmp_path / "gog" / "config.toml").exists()
