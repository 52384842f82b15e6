"""Multi-repository operations.

Two things happen across many repositories at once:

- ``scan_repos`` discovers working trees directly under a base directory;
- ``dispatch`` runs one read-only inspection against every watched repo.

Usage:
    from grepo.git.multi import BranchSearch, dispatch, scan_repos

    outcomes = dispatch(config.repos, BranchSearch("fix/"), GitCli())
    for outcome in outcomes:
        print(outcome.repo.name, outcome.ok)
"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Literal

from grepo.core.config import RepoRef
from grepo.core.result import Err, Ok, Result
from grepo.git.repository import Commit, GitError, GitProtocol

__all__ = [
    "DEFAULT_MAX_WORKERS",
    "BaseDirNotFound",
    "BranchSearch",
    "CommitSearch",
    "CurrentBranch",
    "InspectionError",
    "InspectionRequest",
    "ListBranches",
    "Payload",
    "RepoOutcome",
    "SearchScope",
    "dispatch",
    "inspect_repo",
    "scan_repos",
]

DEFAULT_MAX_WORKERS = 8


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class SearchScope(Enum):
    """Which commit field a commit search looks at."""

    MESSAGE = auto()
    AUTHOR = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class CurrentBranch:
    """Which branch each repo is on."""


@dataclass(frozen=True, slots=True)
class ListBranches:
    """Every local branch of each repo."""


@dataclass(frozen=True, slots=True)
class BranchSearch:
    """Branches whose name contains ``pattern`` (case-sensitive)."""

    pattern: str


@dataclass(frozen=True, slots=True)
class CommitSearch:
    """Commits whose message or author contains ``pattern``."""

    pattern: str
    scope: SearchScope = SearchScope.MESSAGE


InspectionRequest = CurrentBranch | ListBranches | BranchSearch | CommitSearch


# -----------------------------------------------------------------------------
# Outcomes
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BaseDirNotFound:
    """The base directory is missing or not a directory."""

    path: Path


@dataclass(frozen=True, slots=True)
class InspectionError:
    """Why a single repository could not be inspected.

    Attributes:
        kind: not_a_repo (path gone or no longer a working tree),
            git_failed (the git query returned an error),
            crashed (the git query raised unexpectedly)
        message: Human-readable reason
    """

    kind: Literal["not_a_repo", "git_failed", "crashed"]
    message: str

    @classmethod
    def from_git(cls, error: GitError) -> InspectionError:
        return cls(kind="git_failed", message=f"git {error.command}: {error.message}")


Payload = str | list[str] | list[Commit]


@dataclass(frozen=True, slots=True)
class RepoOutcome:
    """Result of inspecting one repository.

    The payload depends on the request: a branch name for CurrentBranch,
    a list of branch names for ListBranches/BranchSearch, a list of commits
    for CommitSearch.
    """

    repo: RepoRef
    result: Result[Payload, InspectionError]

    @property
    def ok(self) -> bool:
        return isinstance(self.result, Ok)

    @property
    def error(self) -> InspectionError | None:
        if isinstance(self.result, Err):
            return self.result.error
        return None


# -----------------------------------------------------------------------------
# Scanning
# -----------------------------------------------------------------------------


def scan_repos(base_dir: Path, git: GitProtocol) -> Result[list[RepoRef], BaseDirNotFound]:
    """Find working trees directly under base_dir (depth 1).

    Args:
        base_dir: Directory whose children are candidate repos
        git: Collaborator used to confirm each candidate

    Returns:
        Ok(repos) sorted by directory name (case-insensitive, exact name as
        tie-breaker), or Err(BaseDirNotFound)
    """
    if not base_dir.is_dir():
        return Err(BaseDirNotFound(path=base_dir))

    try:
        children = list(base_dir.iterdir())
    except OSError:
        return Err(BaseDirNotFound(path=base_dir))

    repos: list[RepoRef] = []
    for child in children:
        try:
            found = child.is_dir() and git.is_working_tree(child)
        except OSError:
            # Unreadable entries (lost+found and the like) are skipped.
            continue
        if found:
            repos.append(RepoRef.from_path(child))

    return Ok(sorted(repos, key=lambda r: (r.name.casefold(), r.name)))


# -----------------------------------------------------------------------------
# Dispatch
# -----------------------------------------------------------------------------


def _query(
    repo: RepoRef, request: InspectionRequest, git: GitProtocol
) -> Result[Payload, GitError]:
    match request:
        case CurrentBranch():
            return git.current_branch(repo.path)
        case ListBranches() | BranchSearch():
            return git.list_branches(repo.path)
        case CommitSearch():
            return git.list_commits(repo.path)


def inspect_repo(repo: RepoRef, request: InspectionRequest, git: GitProtocol) -> RepoOutcome:
    """Run one request against one repo. Never raises for repo-level failures."""
    try:
        if not git.is_working_tree(repo.path):
            return RepoOutcome(
                repo=repo,
                result=Err(
                    InspectionError(
                        kind="not_a_repo", message=f"not a git working tree: {repo.path}"
                    )
                ),
            )
        result = _query(repo, request, git)
    except Exception as e:  # noqa: BLE001
        return RepoOutcome(
            repo=repo,
            result=Err(InspectionError(kind="crashed", message=f"{type(e).__name__}: {e}")),
        )

    match result:
        case Ok(payload):
            return RepoOutcome(repo=repo, result=Ok(payload))
        case Err(error):
            return RepoOutcome(repo=repo, result=Err(InspectionError.from_git(error)))


def dispatch(
    repos: Iterable[RepoRef],
    request: InspectionRequest,
    git: GitProtocol,
    *,
    max_workers: int | None = None,
) -> list[RepoOutcome]:
    """Inspect every repo concurrently, one task per repo.

    Outcomes come back in the order of ``repos``, whatever order the tasks
    finish in. A failing repo yields an Err outcome and never stops the
    others. On interrupt, queued tasks are cancelled and the interrupt is
    re-raised.

    Args:
        repos: Watched repositories, in watch-list order
        request: What to ask each repository
        git: Version-control collaborator
        max_workers: Thread count; defaults to min(8, number of repos).
            1 runs sequentially on the calling thread.

    Returns:
        One RepoOutcome per repo, same order as input
    """
    repo_list = list(repos)
    if not repo_list:
        return []

    workers = max_workers if max_workers is not None else min(DEFAULT_MAX_WORKERS, len(repo_list))
    workers = max(1, min(workers, len(repo_list)))

    if workers == 1:
        return [inspect_repo(repo, request, git) for repo in repo_list]

    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="grepo")
    try:
        futures: list[Future[RepoOutcome]] = [
            executor.submit(inspect_repo, repo, request, git) for repo in repo_list
        ]
        outcomes = [future.result() for future in futures]
    except BaseException:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown(wait=True)
    return outcomes
