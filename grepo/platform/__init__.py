"""OS-facing helpers: config location, atomic writes, subprocesses."""

from .files import atomic_write_text
from .paths import clear_caches, home, is_windows, user_config_dir
from .process import ProcessError, run

__all__ = [
    "ProcessError",
    "atomic_write_text",
    "clear_caches",
    "home",
    "is_windows",
    "run",
    "user_config_dir",
]
