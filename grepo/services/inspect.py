"""Cross-repo reports: current branch, branch listing, branch and commit search."""

from __future__ import annotations

from grepo.core.config import Config
from grepo.core.report import AggregatedReport, build_report
from grepo.git.multi import (
    BranchSearch,
    CommitSearch,
    CurrentBranch,
    InspectionRequest,
    ListBranches,
    SearchScope,
    dispatch,
)
from grepo.git.repository import GitProtocol
from grepo.output.console import ConsoleProtocol

__all__ = ["InspectService"]


class InspectService:
    """Run one read-only request across every watched repo.

    Per-repo failures end up as error rows in the report; nothing here
    raises for a single broken repository.
    """

    def __init__(
        self,
        *,
        git: GitProtocol,
        console: ConsoleProtocol,
        max_workers: int | None = None,
    ) -> None:
        self._git = git
        self._console = console
        self._max_workers = max_workers

    def run(self, config: Config, request: InspectionRequest) -> AggregatedReport:
        if not config.repos:
            self._console.warning("no repositories are watched")
            return AggregatedReport(request=request)

        outcomes = dispatch(config.repos, request, self._git, max_workers=self._max_workers)
        report = build_report(request, outcomes)
        if report.failed:
            names = ", ".join(r.name for r in report.failed)
            failed = len(report.failed)
            self._console.warning(f"{failed} of {report.repo_count} repos failed: {names}")
        return report

    def current_branch_report(self, config: Config) -> AggregatedReport:
        return self.run(config, CurrentBranch())

    def branch_list_report(self, config: Config) -> AggregatedReport:
        return self.run(config, ListBranches())

    def branch_search_report(self, config: Config, pattern: str) -> AggregatedReport:
        return self.run(config, BranchSearch(pattern))

    def commit_search_report(
        self, config: Config, pattern: str, scope: SearchScope = SearchScope.MESSAGE
    ) -> AggregatedReport:
        return self.run(config, CommitSearch(pattern, scope))
