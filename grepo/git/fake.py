"""In-memory ``GitProtocol`` for tests.

Repositories are registered by path; anything not registered is "not a
working tree". Each fake repo can be told to fail, to be on a detached HEAD,
or to answer slowly.

Usage:
    git = FakeGit()
    git.add(tmp_path / "api", branches=["main", "fix/login"])
    assert git.list_branches(tmp_path / "api") == Ok(["main", "fix/login"])
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from pathlib import Path

from grepo.core.config import canonical_path
from grepo.core.result import Err, Ok, Result
from grepo.git.repository import Commit, GitError

__all__ = ["FakeGit", "FakeRepo"]


def _default_branches() -> list[str]:
    return ["main"]


def _no_commits() -> list[Commit]:
    return []


@dataclass
class FakeRepo:
    """Canned answers for one repository.

    Attributes:
        branches: Local branches, in listing order
        current: Checked-out branch; None means detached HEAD
        commits: Commits, newest first
        error: If set, every query fails with this message
        delay: Seconds each query sleeps before answering
    """

    branches: list[str] = field(default_factory=_default_branches)
    current: str | None = "main"
    commits: list[Commit] = field(default_factory=_no_commits)
    error: str | None = None
    delay: float = 0.0


@dataclass
class FakeGit:
    repos: dict[Path, FakeRepo] = field(default_factory=dict[Path, FakeRepo])
    calls: list[tuple[str, Path]] = field(default_factory=list[tuple[str, Path]])
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def add(self, path: Path, **kwargs: object) -> FakeRepo:
        """Register a repo at path, creating the directory."""
        path.mkdir(parents=True, exist_ok=True)
        repo = FakeRepo(**kwargs)  # type: ignore[arg-type]
        self.repos[canonical_path(path)] = repo
        return repo

    def forget(self, path: Path) -> None:
        self.repos.pop(canonical_path(path), None)

    def _lookup(self, command: str, path: Path) -> Result[FakeRepo, GitError]:
        with self._lock:
            self.calls.append((command, path))
        repo = self.repos.get(canonical_path(path))
        if repo is None:
            return Err(
                GitError(command=command, message=f"not a git repository: {path}", returncode=128)
            )
        if repo.delay:
            time.sleep(repo.delay)
        if repo.error is not None:
            return Err(GitError(command=command, message=repo.error, returncode=128))
        return Ok(repo)

    def is_working_tree(self, path: Path) -> bool:
        return canonical_path(path) in self.repos

    def current_branch(self, path: Path) -> Result[str, GitError]:
        found = self._lookup("symbolic-ref", path)
        if isinstance(found, Err):
            return found
        if found.value.current is None:
            return Err(GitError(command="symbolic-ref", message="detached HEAD"))
        return Ok(found.value.current)

    def list_branches(self, path: Path) -> Result[list[str], GitError]:
        found = self._lookup("for-each-ref", path)
        if isinstance(found, Err):
            return found
        return Ok(list(found.value.branches))

    def list_commits(self, path: Path) -> Result[list[Commit], GitError]:
        found = self._lookup("log", path)
        if isinstance(found, Err):
            return found
        return Ok(list(found.value.commits))
