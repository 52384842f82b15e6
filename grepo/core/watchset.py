"""Watch list mutations.

Each operation takes a Config and returns a new Config (or an error); the
input is never modified, so a failed operation leaves the watch list exactly
as it was. Persisting the result is the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from grepo.core.config import Config, RepoRef, canonical_path
from grepo.core.result import Err, Ok, Result
from grepo.git.multi import BaseDirNotFound, scan_repos
from grepo.git.repository import GitProtocol

__all__ = [
    "AlreadyWatched",
    "BaseDirNotFound",
    "BaseDirNotSet",
    "NotWatched",
    "PathNotFound",
    "RepoNotFound",
    "ScanChanges",
    "WatchError",
    "add_watch",
    "clear_watch",
    "diff_scan",
    "remove_watch",
    "replace_from_scan",
    "resolve_repo_path",
    "set_base_dir",
]


@dataclass(frozen=True, slots=True)
class RepoNotFound:
    """The identifier does not lead to a git working tree."""

    ident: str
    path: Path


@dataclass(frozen=True, slots=True)
class AlreadyWatched:
    repo: RepoRef


@dataclass(frozen=True, slots=True)
class NotWatched:
    ident: str


@dataclass(frozen=True, slots=True)
class BaseDirNotSet:
    pass


@dataclass(frozen=True, slots=True)
class PathNotFound:
    path: Path


WatchError = (
    RepoNotFound | AlreadyWatched | NotWatched | BaseDirNotSet | BaseDirNotFound | PathNotFound
)


def _repo_location(config: Config, ident: str, cwd: Path | None) -> Path:
    candidate = Path(ident).expanduser()
    if not candidate.is_absolute():
        anchor = config.base_dir if config.base_dir is not None else (cwd or Path.cwd())
        candidate = anchor / candidate
    return candidate


def resolve_repo_path(config: Config, ident: str, cwd: Path | None = None) -> Path:
    """Canonical path for a user-supplied repo name or path.

    Relative identifiers are taken relative to the base directory, or to
    ``cwd`` (default: the process working directory) when no base directory
    is configured.
    """
    return canonical_path(_repo_location(config, ident, cwd))


def add_watch(
    config: Config,
    ident: str,
    git: GitProtocol,
    *,
    cwd: Path | None = None,
) -> Result[Config, RepoNotFound | AlreadyWatched]:
    """Append a repository to the watch list.

    Args:
        config: Current config
        ident: Directory name under the base dir, or a path
        git: Collaborator used to validate the working tree
        cwd: Anchor for relative identifiers when no base dir is set

    Returns:
        Ok(new config) with the repo appended, Err(RepoNotFound) if ident is
        not a working tree, Err(AlreadyWatched) if its path is already listed
    """
    location = _repo_location(config, ident, cwd)
    path = canonical_path(location)

    for repo in config.repos:
        if repo.path == path:
            return Err(AlreadyWatched(repo=repo))

    try:
        found = path.is_dir() and git.is_working_tree(path)
    except OSError:
        found = False
    if not found:
        return Err(RepoNotFound(ident=ident, path=path))

    # Named after the entry the user typed, even if it is a symlink.
    return Ok(config.with_repos((*config.repos, RepoRef.from_path(location))))


def remove_watch(
    config: Config, ident: str, *, cwd: Path | None = None
) -> Result[Config, NotWatched]:
    """Drop every watched repo whose name or path matches ident."""
    try:
        path: Path | None = resolve_repo_path(config, ident, cwd)
    except (OSError, RuntimeError):
        path = None
    kept = tuple(r for r in config.repos if r.name != ident and r.path != path)
    if len(kept) == len(config.repos):
        return Err(NotWatched(ident=ident))
    return Ok(config.with_repos(kept))


def clear_watch(config: Config) -> Config:
    return config.with_repos(())


def replace_from_scan(
    config: Config, git: GitProtocol
) -> Result[Config, BaseDirNotSet | BaseDirNotFound]:
    """Replace the whole watch list with the repos found under the base dir.

    Destructive: entries outside the base directory are dropped. Use
    ``diff_scan`` to show the user what will change before saving.
    """
    if config.base_dir is None:
        return Err(BaseDirNotSet())

    match scan_repos(config.base_dir, git):
        case Err(error):
            return Err(error)
        case Ok(found):
            return Ok(config.with_repos(found))


@dataclass(frozen=True, slots=True)
class ScanChanges:
    """What replacing the watch list with a scan result would do."""

    added: tuple[RepoRef, ...]
    dropped: tuple[RepoRef, ...]
    kept: tuple[RepoRef, ...]

    @property
    def has_drops(self) -> bool:
        return bool(self.dropped)


def diff_scan(before: Config, after: Config) -> ScanChanges:
    before_paths = {r.path for r in before.repos}
    after_paths = {r.path for r in after.repos}
    return ScanChanges(
        added=tuple(r for r in after.repos if r.path not in before_paths),
        dropped=tuple(r for r in before.repos if r.path not in after_paths),
        kept=tuple(r for r in after.repos if r.path in before_paths),
    )


def set_base_dir(config: Config, path: Path) -> Result[Config, PathNotFound]:
    """Point the config at a new base directory. The watch list is untouched."""
    try:
        resolved = canonical_path(path)
    except (OSError, RuntimeError):
        return Err(PathNotFound(path=path))
    if not resolved.is_dir():
        return Err(PathNotFound(path=resolved))
    return Ok(config.with_base_dir(resolved))
