"""Error presentation utilities.

Centralized error wording and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from grepo.core.config import ConfigCorrupt, PersistError
from grepo.core.errors import ErrorCode
from grepo.core.watchset import (
    AlreadyWatched,
    BaseDirNotFound,
    BaseDirNotSet,
    NotWatched,
    PathNotFound,
    RepoNotFound,
    WatchError,
)
from grepo.output.console import Style

if TYPE_CHECKING:
    from grepo.output.console import ConsoleProtocol

__all__ = ["GrepoError", "describe_error", "error_exit_code", "print_error"]

GrepoError = WatchError | PersistError | ConfigCorrupt


def describe_error(error: GrepoError) -> str:
    match error:
        case RepoNotFound(ident=ident, path=path):
            return f"{ident}: not a git repository ({path})"
        case AlreadyWatched(repo=repo):
            return f"{repo.name}: already watched ({repo.path})"
        case NotWatched(ident=ident):
            return f"{ident}: not in the watch list"
        case BaseDirNotSet():
            return "base directory is not set"
        case BaseDirNotFound(path=path):
            return f"base directory not found: {path}"
        case PathNotFound(path=path):
            return f"not a directory: {path}"
        case PersistError(message=message) | ConfigCorrupt(message=message):
            return message
    return str(error)


def _hint(error: GrepoError) -> str | None:
    match error:
        case BaseDirNotSet():
            return "run: grepo base-dir <path>"
        case BaseDirNotFound():
            return "check the path, or point grepo elsewhere with: grepo base-dir <path>"
        case NotWatched():
            return "see the watch list with: grepo watch list"
    return None


def print_error(error: GrepoError, console: ConsoleProtocol) -> None:
    """Print an error and its hint, if any."""
    console.error(describe_error(error))
    hint = _hint(error)
    if hint:
        console.print(f"hint: {hint}", Style.DIM)


def error_exit_code(error: GrepoError) -> int:
    match error:
        case RepoNotFound() | AlreadyWatched() | NotWatched():
            return int(ErrorCode.USER_ERROR)
        case BaseDirNotSet() | PathNotFound():
            return int(ErrorCode.USER_ERROR)
        case BaseDirNotFound():
            return int(ErrorCode.ENV_ERROR)
        case PersistError() | ConfigCorrupt():
            return int(ErrorCode.IO_ERROR)
    return int(ErrorCode.USER_ERROR)
