"""Typed user configuration.

gog keeps one small TOML file per user:

    <user-config-dir>/config.toml

    [logging]
    level = "INFO"

    [application]
    tag_prefix = "v"

The file is created with these defaults on first use. The loaded AppConfig
is built once by the CLI entry point and passed down explicitly.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from gog.platform.files import atomic_write_text
from gog.platform.paths import user_config_dir

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "AppConfig",
    "ConfigError",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_TAG_PREFIX",
    "LOG_LEVELS",
    "LOG_LEVEL_ENV",
    "config_path",
    "is_valid_tag_prefix",
    "load_config",
    "load_or_create_config",
    "save_config",
]

DEFAULT_TAG_PREFIX = "v"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")
LOG_LEVEL_ENV = "GOG_LOG_LEVEL"

_TAG_PREFIX_RE = re.compile(r"^[a-zA-Z]*-?$")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded, parsed or written."""

    message: str
    path: Path | None = None


def is_valid_tag_prefix(prefix: str) -> bool:
    """A prefix is letters optionally followed by one dash ("v", "rel-", "")."""
    return _TAG_PREFIX_RE.match(prefix) is not None


@dataclass(frozen=True, slots=True)
class AppConfig:
    """User-level settings."""

    tag_prefix: str = DEFAULT_TAG_PREFIX
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Result[AppConfig, str]:
        logging: StrDict = get_table(data, "logging") or {}
        application: StrDict = get_table(data, "application") or {}

        level = (get_str(logging, "level") or DEFAULT_LOG_LEVEL).upper()
        if level not in LOG_LEVELS:
            return Err(f"invalid logging.level {level!r} (expected one of {', '.join(LOG_LEVELS)})")

        prefix = get_str(application, "tag_prefix")
        if prefix is None:
            prefix = DEFAULT_TAG_PREFIX
        if not is_valid_tag_prefix(prefix):
            return Err(f"invalid application.tag_prefix {prefix!r}")

        return Ok(cls(tag_prefix=prefix, log_level=level))

    def with_tag_prefix(self, prefix: str) -> AppConfig:
        return replace(self, tag_prefix=prefix)

    def with_log_level(self, level: str) -> AppConfig:
        return replace(self, log_level=level.upper())

    def effective_log_level(self) -> str:
        """Configured level, overridden by GOG_LOG_LEVEL when that is valid."""
        env = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
        if env in LOG_LEVELS:
            return env
        return self.log_level

    def to_toml(self) -> str:
        return (
            "# gog configuration\n"
            "\n"
            "[logging]\n"
            f'level = "{self.log_level}"\n'
            "\n"
            "[application]\n"
            f'tag_prefix = "{self.tag_prefix}"\n'
        )


def config_path() -> Path:
    return user_config_dir() / "config.toml"


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[AppConfig, ConfigError]:
    """Load and validate configuration from a TOML file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    parsed = AppConfig.from_dict(result.value)
    if isinstance(parsed, Err):
        return Err(ConfigError(f"Invalid config: {parsed.error}", path=path))
    return Ok(parsed.value)


def save_config(config: AppConfig, path: Path | None = None) -> Result[None, ConfigError]:
    target = path or config_path()
    try:
        atomic_write_text(target, config.to_toml())
    except OSError as e:
        return Err(ConfigError(f"Could not write {target}: {e}", path=target))
    return Ok(None)


def load_or_create_config(path: Path | None = None) -> Result[AppConfig, ConfigError]:
    """Load the user config, writing the defaults file first if it is missing."""
    target = path or config_path()
    if not target.exists():
        defaults = AppConfig()
        saved = save_config(defaults, target)
        if isinstance(saved, Err):
            return saved
        return Ok(defaults)
    return load_config(target)
