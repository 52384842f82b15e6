"""Merge per-repo outcomes into one ordered report.

Rows follow the watch-list order of repositories; inside a repository they
keep the order git returned (branch listing order, newest commit first).
A repository that failed contributes exactly one error row so the user sees
it in the report instead of it silently disappearing. A repository with no
match contributes no row at all.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import cast

from grepo.core.config import RepoRef
from grepo.core.result import Err, Ok
from grepo.git.multi import (
    BranchSearch,
    CommitSearch,
    CurrentBranch,
    InspectionRequest,
    ListBranches,
    Payload,
    RepoOutcome,
    SearchScope,
)
from grepo.git.repository import Commit

__all__ = [
    "AggregatedReport",
    "ReportRow",
    "ReportStatus",
    "RowStatus",
    "build_report",
    "match_branches",
    "match_commits",
]


class RowStatus(Enum):
    OK = auto()
    ERROR = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ReportStatus(Enum):
    """Overall result of a batch: every repo answered, or some failed."""

    OK = auto()
    PARTIAL = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class ReportRow:
    """One line of a report.

    Attributes:
        repo: Repository display name
        item: Branch name, commit hash, or the error message on error rows
        detail: Commit summary for commit rows, empty otherwise
        status: OK or ERROR
        path: Repository path
    """

    repo: str
    item: str
    detail: str = ""
    status: RowStatus = RowStatus.OK
    path: Path | None = None

    @property
    def is_error(self) -> bool:
        return self.status == RowStatus.ERROR


def _empty_rows() -> tuple[ReportRow, ...]:
    return ()


@dataclass(frozen=True, slots=True)
class AggregatedReport:
    """Ordered rows for one request across the whole watch list."""

    request: InspectionRequest
    rows: tuple[ReportRow, ...] = field(default_factory=_empty_rows)
    repo_count: int = 0
    failed: tuple[RepoRef, ...] = ()

    @property
    def status(self) -> ReportStatus:
        return ReportStatus.PARTIAL if self.failed else ReportStatus.OK

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def matches(self) -> list[ReportRow]:
        return [r for r in self.rows if not r.is_error]

    @property
    def errors(self) -> list[ReportRow]:
        return [r for r in self.rows if r.is_error]


def match_branches(branches: Iterable[str], pattern: str) -> list[str]:
    """Branches containing pattern as a literal, case-sensitive substring."""
    return [b for b in branches if pattern in b]


def match_commits(commits: Iterable[Commit], pattern: str, scope: SearchScope) -> list[Commit]:
    """Commits whose message (or author) contains pattern."""
    if scope == SearchScope.AUTHOR:
        return [c for c in commits if pattern in c.author]
    return [c for c in commits if pattern in c.message]


def _rows_for(request: InspectionRequest, repo: RepoRef, payload: Payload) -> list[ReportRow]:
    # The payload shape is fixed by the request kind, see dispatch().
    match request:
        case CurrentBranch():
            return [ReportRow(repo=repo.name, item=cast(str, payload), path=repo.path)]
        case ListBranches():
            branches = cast(list[str], payload)
            return [ReportRow(repo=repo.name, item=b, path=repo.path) for b in branches]
        case BranchSearch(pattern=pattern):
            branches = cast(list[str], payload)
            return [
                ReportRow(repo=repo.name, item=b, path=repo.path)
                for b in match_branches(branches, pattern)
            ]
        case CommitSearch(pattern=pattern, scope=scope):
            commits = cast(list[Commit], payload)
            return [
                ReportRow(repo=repo.name, item=c.hash, detail=c.summary, path=repo.path)
                for c in match_commits(commits, pattern, scope)
            ]
    return []


def build_report(request: InspectionRequest, outcomes: Sequence[RepoOutcome]) -> AggregatedReport:
    """Turn dispatcher outcomes into report rows.

    No deduplication across repos: the same branch name in two repos is
    two distinct rows.
    """
    rows: list[ReportRow] = []
    failed: list[RepoRef] = []

    for outcome in outcomes:
        match outcome.result:
            case Ok(payload):
                rows.extend(_rows_for(request, outcome.repo, payload))
            case Err(error):
                failed.append(outcome.repo)
                rows.append(
                    ReportRow(
                        repo=outcome.repo.name,
                        item=error.message,
                        status=RowStatus.ERROR,
                        path=outcome.repo.path,
                    )
                )

    return AggregatedReport(
        request=request,
        rows=tuple(rows),
        repo_count=len(outcomes),
        failed=tuple(failed),
    )
