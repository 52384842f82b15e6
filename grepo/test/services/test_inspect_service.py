"""Tests for grepo.services.inspect."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from grepo.core.config import Config, RepoRef
from grepo.core.report import ReportStatus
from grepo.git.fake import FakeGit
from grepo.git.multi import SearchScope
from grepo.git.repository import Commit
from grepo.output.console import MockConsole
from grepo.services.inspect import InspectService


@pytest.fixture
def config(tmp_path: Path, fake_git: FakeGit) -> Config:
    base = tmp_path / "src"
    fake_git.add(base / "r1", branches=["main", "feature/ma-fix", "develop"])
    fake_git.add(
        base / "r2",
        current="develop",
        commits=[
            Commit(hash="1" * 40, author="Alice", message="fix: broke build\n\ndetails"),
            Commit(hash="2" * 40, author="Bob", message="add feature"),
        ],
    )
    fake_git.add(base / "r3", current=None)
    repos = tuple(RepoRef.from_path(base / n) for n in ("r1", "r2", "r3"))
    return Config(base_dir=base.resolve(), repos=repos)


def test_current_branch_report(fake_git: FakeGit, config: Config) -> None:
    console = MockConsole()
    service = InspectService(git=fake_git, console=console)

    report = service.current_branch_report(config)

    assert [(r.repo, r.item) for r in report.matches] == [("r1", "main"), ("r2", "develop")]
    assert [(r.repo, r.item) for r in report.errors] == [("r3", "git symbolic-ref: detached HEAD")]
    assert report.status == ReportStatus.PARTIAL
    assert console.find("1 of 3 repos failed: r3")


def test_current_branch_report_is_repeatable(fake_git: FakeGit, config: Config) -> None:
    service = InspectService(git=fake_git, console=MockConsole())

    assert service.current_branch_report(config) == service.current_branch_report(config)


def test_branch_search_report(fake_git: FakeGit, config: Config) -> None:
    service = InspectService(git=fake_git, console=MockConsole(), max_workers=1)

    report = service.branch_search_report(config, "ma")

    r1_rows = [r.item for r in report.matches if r.repo == "r1"]
    assert r1_rows == ["main", "feature/ma-fix"]


def test_branch_list_report(fake_git: FakeGit, config: Config) -> None:
    service = InspectService(git=fake_git, console=MockConsole())

    report = service.branch_list_report(config)

    r1_rows = [r.item for r in report.matches if r.repo == "r1"]
    assert r1_rows == ["main", "feature/ma-fix", "develop"]


def test_commit_search_by_message(fake_git: FakeGit, config: Config) -> None:
    service = InspectService(git=fake_git, console=MockConsole())

    report = service.commit_search_report(config, "broke")

    assert [(r.repo, r.item, r.detail) for r in report.matches] == [
        ("r2", "1" * 40, "fix: broke build")
    ]


def test_commit_search_by_author(fake_git: FakeGit, config: Config) -> None:
    service = InspectService(git=fake_git, console=MockConsole())

    report = service.commit_search_report(config, "Bob", SearchScope.AUTHOR)

    assert [r.detail for r in report.matches] == ["add feature"]


def test_deleted_repo_becomes_error_row(fake_git: FakeGit, config: Config) -> None:
    r2 = config.repos[1].path
    fake_git.forget(r2)
    shutil.rmtree(r2)
    service = InspectService(git=fake_git, console=MockConsole())

    report = service.current_branch_report(config.with_repos(config.repos[:2]))

    assert [(r.repo, r.is_error) for r in report.rows] == [("r1", False), ("r2", True)]


def test_empty_watch_list_warns(fake_git: FakeGit) -> None:
    console = MockConsole()
    service = InspectService(git=fake_git, console=console)

    report = service.current_branch_report(Config())

    assert report.rows == ()
    assert report.ok
    assert console.find("no repositories are watched")
