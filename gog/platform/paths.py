"""Per-user directory lookup."""

from __future__ import annotations

import os
import sys
from functools import lru_cache
from pathlib import Path

__all__ = ["APP_NAME", "user_config_dir"]

APP_NAME = "gog"


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """Directory holding gog's user-level config.toml.

    Location: $XDG_CONFIG_HOME/gog or ~/.config/gog (Linux/macOS),
    %APPDATA%/gog (Windows).
    """
    if sys.platform == "win32":
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return Path.home() / "AppData" / "Roaming" / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def clear_caches() -> None:
    """Forget cached paths (tests change XDG_CONFIG_HOME)."""
    user_config_dir.cache_clear()
