"""Persisted grepo settings: the base directory and the watch list.

The config lives in a single TOML file:

    base_dir = "/home/me/src"

    [[repos]]
    name = "api"
    path = "/home/me/src/api"

Older files stored ``repos`` as a plain list of directory names relative to
``base_dir``; those are still accepted and resolved on load.

The file is read once per invocation and written back atomically, so an
interrupted save never leaves a truncated config behind.
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, cast

from grepo.platform.files import atomic_write_text
from grepo.platform.paths import user_config_dir

from .result import Err, Ok, Result

if TYPE_CHECKING:
    from grepo.output.console import ConsoleProtocol

__all__ = [
    "CONFIG_ENV_VAR",
    "Config",
    "ConfigCorrupt",
    "ConfigStore",
    "PersistError",
    "RepoRef",
    "canonical_path",
    "default_config_path",
]

CONFIG_ENV_VAR = "GREPO_CONFIG"
CONFIG_FILE_NAME = "config.toml"


@dataclass(frozen=True, slots=True)
class ConfigCorrupt:
    """The config file exists but could not be read or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PersistError:
    """The config file could not be written."""

    message: str
    path: Path | None = None


def canonical_path(path: Path) -> Path:
    """Absolute, user-expanded, symlink-resolved form of path."""
    return path.expanduser().resolve()


@dataclass(frozen=True, slots=True)
class RepoRef:
    """A watched repository.

    Attributes:
        name: Display name, the directory basename
        path: Canonical absolute path of the working tree
    """

    name: str
    path: Path

    @classmethod
    def from_path(cls, path: Path) -> RepoRef:
        """Name the repo after the directory entry the user sees.

        A symlinked checkout keeps the link name; only ``path`` follows the
        link to the canonical location.
        """
        resolved = canonical_path(path)
        shown = Path(os.path.normpath(path.expanduser().absolute())).name
        return cls(name=shown or resolved.name, path=resolved)


def _dedupe(repos: Iterable[RepoRef]) -> tuple[RepoRef, ...]:
    seen: set[Path] = set()
    out: list[RepoRef] = []
    for repo in repos:
        if repo.path in seen:
            continue
        seen.add(repo.path)
        out.append(repo)
    return tuple(out)


@dataclass(frozen=True, slots=True)
class Config:
    """Base directory plus the ordered watch list.

    ``repos`` never holds two entries with the same canonical path; every
    constructor path below goes through ``_dedupe``.
    """

    base_dir: Path | None = None
    repos: tuple[RepoRef, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "repos", _dedupe(self.repos))

    @property
    def names(self) -> list[str]:
        return [r.name for r in self.repos]

    def is_watched(self, path: Path) -> bool:
        return any(r.path == path for r in self.repos)

    def with_repos(self, repos: Iterable[RepoRef]) -> Config:
        return replace(self, repos=tuple(repos))

    def with_base_dir(self, base_dir: Path | None) -> Config:
        return replace(self, base_dir=base_dir)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Build a Config from parsed TOML.

        Raises:
            ValueError: If the structure does not describe a config.
        """
        base_str = _text(data, "base_dir")
        base_dir = canonical_path(Path(base_str)) if base_str else None

        entries = data.get("repos", [])
        if not isinstance(entries, list):
            raise ValueError("repos must be an array")
        repos = [_parse_repo_entry(entry, base_dir) for entry in cast(list[object], entries)]

        return cls(base_dir=base_dir, repos=tuple(repos))

    def to_toml(self) -> str:
        lines: list[str] = []
        if self.base_dir is not None:
            lines.append(f"base_dir = {_toml_str(self.base_dir.as_posix())}")
        for repo in self.repos:
            lines.append("")
            lines.append("[[repos]]")
            lines.append(f"name = {_toml_str(repo.name)}")
            lines.append(f"path = {_toml_str(repo.path.as_posix())}")
        return "\n".join(lines) + "\n"


def _text(table: Mapping[str, object], key: str) -> str | None:
    """Stripped string at key; None when absent or blank.

    Raises:
        ValueError: If the value is present but not a string.
    """
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value.strip() or None


def _parse_repo_entry(entry: object, base_dir: Path | None) -> RepoRef:
    # Legacy format: bare directory name under base_dir.
    if isinstance(entry, str):
        name = entry.strip()
        if not name:
            raise ValueError("empty repo entry")
        candidate = Path(name).expanduser()
        if not candidate.is_absolute():
            if base_dir is None:
                raise ValueError(f"repo '{name}' is relative but base_dir is not set")
            candidate = base_dir / candidate
        return RepoRef.from_path(candidate)

    if not isinstance(entry, dict):
        raise ValueError("repo entries must be tables or strings")
    table = cast(dict[str, object], entry)
    path_str = _text(table, "path")
    if path_str is None:
        raise ValueError("repo entry is missing 'path'")
    ref = RepoRef.from_path(Path(path_str))
    name = _text(table, "name")
    if name and name != ref.name:
        ref = RepoRef(name=name, path=ref.path)
    return ref


def _toml_str(value: str) -> str:
    # JSON string escapes are a subset of TOML basic-string escapes.
    return json.dumps(value, ensure_ascii=False).replace("\x7f", "\\u007f")


def default_config_path() -> Path:
    """Config location: $GREPO_CONFIG, else <user-config-dir>/config.toml."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return user_config_dir() / CONFIG_FILE_NAME


class ConfigStore:
    """Loads and saves Config to a TOML file.

    Attributes:
        path: Location of the config file
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else default_config_path()

    def load(self) -> Result[Config, ConfigCorrupt]:
        """Read the config file.

        A missing file is a fresh install and yields the default Config.
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return Ok(Config())
        except OSError as e:
            return Err(ConfigCorrupt(f"Error reading {self.path}: {e}", path=self.path))

        try:
            data = tomllib.loads(raw.decode("utf-8"))
        except tomllib.TOMLDecodeError as e:
            return Err(ConfigCorrupt(f"Invalid TOML syntax: {e}", path=self.path))
        except UnicodeDecodeError as e:
            return Err(ConfigCorrupt(f"Invalid UTF-8 in config: {e}", path=self.path))

        try:
            return Ok(Config.from_dict(data))
        except (OSError, RuntimeError, ValueError) as e:
            return Err(ConfigCorrupt(f"Invalid config structure: {e}", path=self.path))

    def load_or_default(self, console: ConsoleProtocol) -> Config:
        """Load the config, falling back to an empty one with a warning."""
        match self.load():
            case Ok(config):
                return config
            case Err(error):
                console.warning(f"{error.message} ({self.path})")
                console.warning("using an empty configuration")
                return Config()

    def save(self, config: Config) -> Result[None, PersistError]:
        try:
            atomic_write_text(self.path, config.to_toml())
        except OSError as e:
            return Err(PersistError(f"Could not write {self.path}: {e}", path=self.path))
        return Ok(None)
