"""Read-only git access.

This module is the version-control collaborator of grepo: everything grepo
knows about a repository comes through ``GitProtocol``. The production
implementation, ``GitCli``, shells out to ``git``; tests substitute an
in-memory fake.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.current_branch():
        case Ok(branch):
            print(f"On {branch}")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from grepo.core.result import Err, Ok, Result
from grepo.platform.process import ProcessError
from grepo.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

# Field and record separators for `git log` output.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"

__all__ = [
    "Commit",
    "GitCli",
    "GitError",
    "GitProtocol",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class Commit:
    """A single commit as returned by ``git log``.

    Attributes:
        hash: Full commit hash
        author: Author name
        message: Full commit message (subject and body)
    """

    hash: str
    author: str
    message: str

    @property
    def summary(self) -> str:
        """First line of the message."""
        return self.message.split("\n", 1)[0].strip()

    @property
    def short_hash(self) -> str:
        return self.hash[:10]


class GitProtocol(Protocol):
    """Version-control queries grepo needs, keyed by repository path."""

    def is_working_tree(self, path: Path) -> bool:
        """True if path is the root of a git working tree."""
        ...

    def current_branch(self, path: Path) -> Result[str, GitError]:
        """Branch HEAD points at. Detached HEAD is an error."""
        ...

    def list_branches(self, path: Path) -> Result[list[str], GitError]:
        """Local branch names in git's listing order."""
        ...

    def list_commits(self, path: Path) -> Result[list[Commit], GitError]:
        """Commits reachable from HEAD, newest first."""
        ...


class Repository:
    """Read-only queries against a single repository.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Cheap check: a .git directory (or gitfile for worktrees) is present."""
        return (self.path / ".git").exists()

    def is_working_tree(self) -> bool:
        """Check that git itself accepts this directory as a working tree.

        A directory that cannot be read is not a working tree.
        """
        try:
            if not self.path.is_dir() or not self.exists():
                return False
        except OSError:
            return False
        match self._run(["rev-parse", "--is-inside-work-tree"]):
            case Ok(stdout):
                return stdout.strip() == "true"
            case Err(_):
                return False

    def current_branch(self) -> Result[str, GitError]:
        """Get current branch name.

        Uses `git symbolic-ref` so an unborn branch in a fresh repo is still
        reported by name.

        Returns:
            Ok(branch) on success
            Err(GitError) on detached HEAD or failure
        """
        match self._run(["symbolic-ref", "--short", "-q", "HEAD"]):
            case Ok(stdout):
                return Ok(stdout.strip())
            case Err(e):
                message = e.stderr.strip()
                if e.returncode == 1 and not message:
                    message = "detached HEAD"
                return Err(
                    GitError(
                        command="symbolic-ref",
                        message=message or "could not read HEAD",
                        returncode=e.returncode,
                    )
                )

    def branches(self) -> Result[list[str], GitError]:
        """List local branches."""
        result = self._run(["for-each-ref", "--format=%(refname:short)", "refs/heads/"])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="for-each-ref",
                        message=e.stderr.strip() or "listing branches failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def commits(self) -> Result[list[Commit], GitError]:
        """List commits reachable from HEAD, newest first.

        A repository without any commit yields an empty list.
        """
        fmt = f"--format=%H{_FIELD_SEP}%an{_FIELD_SEP}%B{_RECORD_SEP}"
        result = self._run(["log", fmt])
        match result:
            case Err(e):
                if "does not have any commits" in e.stderr:
                    return Ok([])
                return Err(
                    GitError(
                        command="log",
                        message=e.stderr.strip() or "reading log failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(self._parse_log(stdout))

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )

    def _parse_log(self, output: str) -> list[Commit]:
        commits: list[Commit] = []
        for record in output.split(_RECORD_SEP):
            record = record.strip("\n")
            if not record.strip():
                continue
            parts = record.split(_FIELD_SEP, 2)
            if len(parts) != 3:
                continue
            sha, author, message = parts
            commits.append(Commit(hash=sha.strip(), author=author, message=message.strip()))
        return commits


class GitCli:
    """``GitProtocol`` implementation backed by the git executable."""

    def is_working_tree(self, path: Path) -> bool:
        return Repository(path).is_working_tree()

    def current_branch(self, path: Path) -> Result[str, GitError]:
        return Repository(path).current_branch()

    def list_branches(self, path: Path) -> Result[list[str], GitError]:
        return Repository(path).branches()

    def list_commits(self, path: Path) -> Result[list[Commit], GitError]:
        return Repository(path).commits()
