"""Tests for grepo.core.report."""

from __future__ import annotations

from pathlib import Path

from grepo.core.config import RepoRef
from grepo.core.report import (
    ReportStatus,
    RowStatus,
    build_report,
    match_branches,
    match_commits,
)
from grepo.core.result import Err, Ok
from grepo.git.multi import (
    BranchSearch,
    CommitSearch,
    CurrentBranch,
    InspectionError,
    ListBranches,
    RepoOutcome,
    SearchScope,
)
from grepo.git.repository import Commit

BROKE = Commit(hash="a" * 40, author="Alice", message="fix: broke build\n\nlong body")
FEATURE = Commit(hash="b" * 40, author="Bob", message="add feature")


def _repo(name: str) -> RepoRef:
    return RepoRef(name=name, path=Path("/src") / name)


def _failed(name: str, message: str = "boom") -> RepoOutcome:
    error = InspectionError(kind="git_failed", message=message)
    return RepoOutcome(repo=_repo(name), result=Err(error))


class TestMatching:
    def test_branch_substring_order_preserving(self) -> None:
        branches = ["main", "feature/ma-fix", "develop"]
        assert match_branches(branches, "ma") == ["main", "feature/ma-fix"]

    def test_branch_match_is_case_sensitive(self) -> None:
        assert match_branches(["Main", "main"], "ma") == ["main"]

    def test_branch_match_is_literal(self) -> None:
        assert match_branches(["fix-1", "fix.1"], "fix.") == ["fix.1"]

    def test_commit_message(self) -> None:
        assert match_commits([BROKE, FEATURE], "broke", SearchScope.MESSAGE) == [BROKE]

    def test_commit_message_searches_body(self) -> None:
        assert match_commits([BROKE, FEATURE], "long body", SearchScope.MESSAGE) == [BROKE]

    def test_commit_author(self) -> None:
        assert match_commits([BROKE, FEATURE], "Bob", SearchScope.AUTHOR) == [FEATURE]
        assert match_commits([BROKE, FEATURE], "broke", SearchScope.AUTHOR) == []


class TestBuildReport:
    def test_current_branch_keeps_failed_repos(self) -> None:
        outcomes = [
            RepoOutcome(repo=_repo("r1"), result=Ok("main")),
            _failed("r2", "not a git working tree"),
            RepoOutcome(repo=_repo("r3"), result=Ok("develop")),
        ]

        report = build_report(CurrentBranch(), outcomes)

        assert [(r.repo, r.item, r.status) for r in report.rows] == [
            ("r1", "main", RowStatus.OK),
            ("r2", "not a git working tree", RowStatus.ERROR),
            ("r3", "develop", RowStatus.OK),
        ]
        assert report.status == ReportStatus.PARTIAL
        assert report.failed == (_repo("r2"),)
        assert report.repo_count == 3

    def test_all_ok_status(self) -> None:
        report = build_report(CurrentBranch(), [RepoOutcome(repo=_repo("r1"), result=Ok("main"))])
        assert report.status == ReportStatus.OK
        assert report.ok

    def test_branch_search_groups_by_repo_order(self) -> None:
        outcomes = [
            RepoOutcome(repo=_repo("web"), result=Ok(["main", "fix/a"])),
            RepoOutcome(repo=_repo("api"), result=Ok(["develop"])),
            RepoOutcome(repo=_repo("cli"), result=Ok(["fix/b", "main"])),
        ]

        report = build_report(BranchSearch("ma"), outcomes)

        assert [(r.repo, r.item) for r in report.rows] == [("web", "main"), ("cli", "main")]
        assert report.status == ReportStatus.OK

    def test_no_matches_is_not_an_error(self) -> None:
        report = build_report(
            BranchSearch("zzz"), [RepoOutcome(repo=_repo("web"), result=Ok(["main"]))]
        )
        assert report.rows == ()
        assert report.ok

    def test_same_branch_in_two_repos_is_two_rows(self) -> None:
        outcomes = [
            RepoOutcome(repo=_repo("a"), result=Ok(["main"])),
            RepoOutcome(repo=_repo("b"), result=Ok(["main"])),
        ]
        report = build_report(ListBranches(), outcomes)
        assert [(r.repo, r.item) for r in report.rows] == [("a", "main"), ("b", "main")]

    def test_commit_search_rows(self) -> None:
        outcomes = [RepoOutcome(repo=_repo("api"), result=Ok([BROKE, FEATURE]))]

        report = build_report(CommitSearch("broke"), outcomes)

        assert len(report.rows) == 1
        row = report.rows[0]
        assert (row.repo, row.item, row.detail) == ("api", BROKE.hash, "fix: broke build")
        assert report.matches == [row]
        assert report.errors == []

    def test_error_rows_for_search_failures(self) -> None:
        report = build_report(CommitSearch("x", SearchScope.AUTHOR), [_failed("api")])
        assert len(report.errors) == 1
        assert report.errors[0].is_error
