"""Where grepo keeps its per-user files.

Only the config directory matters: ``$XDG_CONFIG_HOME/grepo`` (or
``~/.config/grepo``) on Linux and macOS, ``%APPDATA%\\grepo`` on Windows.
Lookups are cached; tests that change the environment call ``clear_caches``.
"""

from __future__ import annotations

import os
import sys
from functools import lru_cache
from pathlib import Path

__all__ = [
    "APP_NAME",
    "clear_caches",
    "home",
    "is_windows",
    "user_config_dir",
]

APP_NAME = "grepo"


def is_windows() -> bool:
    # sys.platform rather than platform.system(): the latter can be slow on Windows.
    return sys.platform.startswith(("win32", "cygwin", "msys"))


@lru_cache(maxsize=1)
def home() -> Path:
    """The user's home directory, honouring HOME / USERPROFILE overrides."""
    env_name = "USERPROFILE" if is_windows() else "HOME"
    override = os.environ.get(env_name)
    return Path(override) if override else Path.home()


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    if is_windows():
        app_data = os.environ.get("APPDATA")
        root = Path(app_data) if app_data else home() / "AppData" / "Roaming"
    else:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        root = Path(xdg) if xdg else home() / ".config"
    return root / APP_NAME


def clear_caches() -> None:
    home.cache_clear()
    user_config_dir.cache_clear()
