"""Watch list operations: load, mutate, save.

One call = one invocation's worth of work. The config is read once, changed
in memory by ``grepo.core.watchset`` and written back atomically. A failed
name in a multi-name add/remove is reported and skipped; the rest still
applies.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from grepo.core.config import Config, ConfigStore, PersistError, RepoRef
from grepo.core.result import Err, Ok, Result
from grepo.core.watchset import (
    AlreadyWatched,
    BaseDirNotFound,
    BaseDirNotSet,
    NotWatched,
    PathNotFound,
    RepoNotFound,
    ScanChanges,
    add_watch,
    clear_watch,
    diff_scan,
    remove_watch,
    replace_from_scan,
    set_base_dir,
)
from grepo.git.repository import GitProtocol
from grepo.output.console import ConsoleProtocol, Style
from grepo.output.errors import describe_error

__all__ = ["WatchChange", "WatchService", "split_names"]


@dataclass(frozen=True, slots=True)
class WatchChange:
    """Result of a multi-name add or remove.

    Attributes:
        config: Config after the successful part was applied and saved
        applied: Identifiers that were added/removed
        failed: Per-identifier errors, in argument order
    """

    config: Config
    applied: tuple[str, ...] = ()
    failed: tuple[RepoNotFound | AlreadyWatched | NotWatched, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failed


def split_names(values: Iterable[str]) -> list[str]:
    """Accept both `a b c` and `a,b,c` spellings; drops blanks."""
    names: list[str] = []
    for value in values:
        for part in value.split(","):
            part = part.strip()
            if part:
                names.append(part)
    return names


class WatchService:
    """Manage the base directory and the watch list."""

    def __init__(
        self,
        *,
        store: ConfigStore,
        git: GitProtocol,
        console: ConsoleProtocol,
        confirm: Callable[[str], bool] | None = None,
    ) -> None:
        self._store = store
        self._git = git
        self._console = console
        self._confirm = confirm

    def load(self) -> Config:
        return self._store.load_or_default(self._console)

    def _save(self, config: Config) -> Result[Config, PersistError]:
        match self._store.save(config):
            case Err(error):
                return Err(error)
            case Ok(_):
                return Ok(config)

    # -------------------------------------------------------------------------
    # Base directory
    # -------------------------------------------------------------------------

    def base_dir(self) -> Path | None:
        return self.load().base_dir

    def set_base_dir(self, path: Path) -> Result[Config, PathNotFound | PersistError]:
        config = self.load()
        previous = config.base_dir
        match set_base_dir(config, path):
            case Err(error):
                return Err(error)
            case Ok(updated):
                saved = self._save(updated)
                if isinstance(saved, Ok):
                    before = str(previous) if previous else "(unset)"
                    self._console.success(f"base directory: {before} -> {updated.base_dir}")
                return saved

    # -------------------------------------------------------------------------
    # Watch list
    # -------------------------------------------------------------------------

    def list_watched(self) -> list[RepoRef]:
        return list(self.load().repos)

    def add(
        self,
        idents: Sequence[str],
        *,
        reset: bool = False,
        cwd: Path | None = None,
    ) -> Result[WatchChange, PersistError]:
        """Add repos by name or path; ``reset`` clears the list first."""
        config = self.load()
        if reset:
            config = clear_watch(config)

        applied: list[str] = []
        failed: list[RepoNotFound | AlreadyWatched] = []
        for ident in split_names(idents):
            match add_watch(config, ident, self._git, cwd=cwd):
                case Ok(updated):
                    config = updated
                    applied.append(ident)
                    self._console.success(f"watching {config.repos[-1].name}")
                case Err(error):
                    failed.append(error)
                    self._console.warning(f"skipping {describe_error(error)}")

        return self._finish(config, applied, failed, changed=bool(applied) or reset)

    def remove(
        self, idents: Sequence[str], *, cwd: Path | None = None
    ) -> Result[WatchChange, PersistError]:
        config = self.load()
        applied: list[str] = []
        failed: list[NotWatched] = []
        for ident in split_names(idents):
            match remove_watch(config, ident, cwd=cwd):
                case Ok(updated):
                    config = updated
                    applied.append(ident)
                    self._console.success(f"no longer watching {ident}")
                case Err(error):
                    failed.append(error)
                    self._console.warning(describe_error(error))

        return self._finish(config, applied, failed, changed=bool(applied))

    def _finish(
        self,
        config: Config,
        applied: list[str],
        failed: Sequence[RepoNotFound | AlreadyWatched | NotWatched],
        *,
        changed: bool,
    ) -> Result[WatchChange, PersistError]:
        if changed:
            saved = self._save(config)
            if isinstance(saved, Err):
                return saved
        return Ok(WatchChange(config=config, applied=tuple(applied), failed=tuple(failed)))

    # -------------------------------------------------------------------------
    # Scan
    # -------------------------------------------------------------------------

    def scan_and_replace(
        self, *, assume_yes: bool = False
    ) -> Result[Config | None, BaseDirNotSet | BaseDirNotFound | PersistError]:
        """Replace the watch list with the working trees under the base dir.

        Shows what would be added and dropped, then asks for confirmation
        unless ``assume_yes``. Returns Ok(None) if the user declined.
        """
        config = self.load()
        result = replace_from_scan(config, self._git)
        if isinstance(result, Err):
            return result
        updated = result.value

        changes = diff_scan(config, updated)
        self._report_changes(changes, config.base_dir)

        if not assume_yes:
            prompt = (
                f"Replace the watched repos with the {len(updated.repos)} found in "
                f"{config.base_dir}?"
            )
            if self._confirm is None or not self._confirm(prompt):
                self._console.info("watch list unchanged")
                return Ok(None)

        saved = self._save(updated)
        if isinstance(saved, Ok):
            self._console.success(f"watching {len(updated.repos)} repos")
        return saved

    def _report_changes(self, changes: ScanChanges, base_dir: Path | None) -> None:
        self._console.header(f"Scan of {base_dir}")
        for repo in changes.kept:
            self._console.print(f"  = {repo.name}", Style.DIM)
        for repo in changes.added:
            self._console.print(f"  + {repo.name}", Style.SUCCESS)
        for repo in changes.dropped:
            self._console.print(f"  - {repo.name} ({repo.path})", Style.WARNING)
        if changes.has_drops:
            self._console.warning(
                f"{len(changes.dropped)} watched repo(s) will be dropped from the watch list"
            )
