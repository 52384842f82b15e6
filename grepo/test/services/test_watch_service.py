"""Tests for grepo.services.watch."""

from __future__ import annotations

from pathlib import Path

import pytest

from grepo.core.config import Config, ConfigStore, PersistError, RepoRef
from grepo.core.result import Err, Ok, Result
from grepo.core.watchset import (
    AlreadyWatched,
    BaseDirNotSet,
    NotWatched,
    PathNotFound,
    RepoNotFound,
)
from grepo.git.fake import FakeGit
from grepo.output.console import MockConsole
from grepo.services.watch import WatchChange, WatchService, split_names


@pytest.fixture
def base(tmp_path: Path) -> Path:
    base = tmp_path / "src"
    base.mkdir()
    return base


@pytest.fixture
def store(tmp_path: Path) -> ConfigStore:
    return ConfigStore(tmp_path / "grepo.toml")


@pytest.fixture
def console() -> MockConsole:
    return MockConsole()


def _service(
    store: ConfigStore,
    git: FakeGit,
    console: MockConsole,
    answer: bool | None = None,
) -> WatchService:
    confirm = None if answer is None else (lambda _prompt: answer)
    return WatchService(store=store, git=git, console=console, confirm=confirm)


def _change(result: Result[WatchChange, PersistError]) -> WatchChange:
    assert isinstance(result, Ok)
    return result.value


def test_split_names() -> None:
    assert split_names(["api,web", " cli ", "", "a,,b"]) == ["api", "web", "cli", "a", "b"]


class TestBaseDir:
    def test_set_base_dir_persists(
        self, store: ConfigStore, fake_git: FakeGit, console: MockConsole, base: Path
    ) -> None:
        service = _service(store, fake_git, console)

        result = service.set_base_dir(base)

        assert isinstance(result, Ok)
        assert service.base_dir() == base.resolve()
        assert console.has_success()

    def test_set_base_dir_missing_path(
        self, store: ConfigStore, fake_git: FakeGit, console: MockConsole, tmp_path: Path
    ) -> None:
        service = _service(store, fake_git, console)

        result = service.set_base_dir(tmp_path / "nope")

        assert isinstance(result, Err)
        assert isinstance(result.error, PathNotFound)
        assert not store.path.exists()


class TestAdd:
    def test_add_by_name_under_base_dir(
        self, store: ConfigStore, fake_git: FakeGit, console: MockConsole, base: Path
    ) -> None:
        fake_git.add(base / "api")
        fake_git.add(base / "web")
        service = _service(store, fake_git, console)
        service.set_base_dir(base)

        change = _change(service.add(["api,web"]))

        assert change.ok
        assert change.applied == ("api", "web")
        assert [r.name for r in service.list_watched()] == ["api", "web"]

    def test_add_skips_invalid_and_keeps_valid(
        self, store: ConfigStore, fake_git: FakeGit, console: MockConsole, base: Path
    ) -> None:
        fake_git.add(base / "api")
        (base / "notes").mkdir()
        service = _service(store, fake_git, console)
        service.set_base_dir(base)

        change = _change(service.add(["notes", "api"]))

        assert change.applied == ("api",)
        assert len(change.failed) == 1
        assert isinstance(change.failed[0], RepoNotFound)
        assert [r.name for r in service.list_watched()] == ["api"]
        assert console.find("skipping notes")

    def test_add_twice_reports_already_watched(
        self, store: ConfigStore, fake_git: FakeGit, console: MockConsole, base: Path
    ) -> None:
        fake_git.add(base / "api")
        service = _service(store, fake_git, console)
        service.set_base_dir(base)
        service.add(["api"])

        change = _change(service.add(["api"]))

        assert change.applied == ()
        assert isinstance(change.failed[0], AlreadyWatched)
        assert [r.name for r in service.list_watched()] == ["api"]

    def test_add_with_reset_replaces_list(
        self, store: ConfigStore, fake_git: FakeGit, console: MockConsole, base: Path
    ) -> None:
        fake_git.add(base / "api")
        fake_git.add(base / "web")
        service = _service(store, fake_git, console)
        service.set_base_dir(base)
        service.add(["api"])

        change = _change(service.add(["web"], reset=True))

        assert change.ok
        assert [r.name for r in service.list_watched()] == ["web"]

    def test_add_surfaces_persist_error(
        self,
        store: ConfigStore,
        fake_git: FakeGit,
        console: MockConsole,
        base: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        fake_git.add(base / "api")
        service = _service(store, fake_git, console)
        service.set_base_dir(base)

        def fail_save(_config: Config) -> Err[PersistError]:
            return Err(PersistError(message="disk full", path=store.path))

        monkeypatch.setattr(store, "save", fail_save)

        result = service.add(["api"])

        assert result == Err(PersistError(message="disk full", path=store.path))


class TestRemove:
    def test_remove_by_name(
        self, store: ConfigStore, fake_git: FakeGit, console: MockConsole, base: Path
    ) -> None:
        fake_git.add(base / "api")
        fake_git.add(base / "web")
        service = _service(store, fake_git, console)
        service.set_base_dir(base)
        service.add(["api", "web"])

        change = _change(service.remove(["api"]))

        assert change.ok
        assert [r.name for r in service.list_watched()] == ["web"]

    def test_remove_unwatched_leaves_list(
        self, store: ConfigStore, fake_git: FakeGit, console: MockConsole, base: Path
    ) -> None:
        fake_git.add(base / "api")
        service = _service(store, fake_git, console)
        service.set_base_dir(base)
        service.add(["api"])
        saved = store.path.read_text(encoding="utf-8")

        change = _change(service.remove(["ghost"]))

        assert change.failed == (NotWatched(ident="ghost"),)
        assert [r.name for r in service.list_watched()] == ["api"]
        assert store.path.read_text(encoding="utf-8") == saved


class TestScan:
    def test_scan_without_base_dir(
        self, store: ConfigStore, fake_git: FakeGit, console: MockConsole
    ) -> None:
        service = _service(store, fake_git, console)

        assert service.scan_and_replace(assume_yes=True) == Err(BaseDirNotSet())

    def test_scan_picks_up_new_repo(
        self, store: ConfigStore, fake_git: FakeGit, console: MockConsole, base: Path
    ) -> None:
        fake_git.add(base / "a")
        fake_git.add(base / "b")
        service = _service(store, fake_git, console)
        service.set_base_dir(base)
        service.scan_and_replace(assume_yes=True)

        fake_git.add(base / "c")
        result = service.scan_and_replace(assume_yes=True)

        assert isinstance(result, Ok)
        assert [r.name for r in service.list_watched()] == ["a", "b", "c"]

    def test_scan_drops_entries_outside_base_dir(
        self,
        store: ConfigStore,
        fake_git: FakeGit,
        console: MockConsole,
        base: Path,
        tmp_path: Path,
    ) -> None:
        fake_git.add(base / "a")
        outside = tmp_path / "elsewhere" / "x"
        fake_git.add(outside)
        store.save(Config(base_dir=base.resolve(), repos=(RepoRef.from_path(outside),)))
        service = _service(store, fake_git, console)

        service.scan_and_replace(assume_yes=True)

        assert [r.name for r in service.list_watched()] == ["a"]
        assert console.has_warning()
        assert console.find("- x")

    def test_scan_drops_repo_that_stopped_being_a_working_tree(
        self, store: ConfigStore, fake_git: FakeGit, console: MockConsole, base: Path
    ) -> None:
        fake_git.add(base / "a")
        fake_git.add(base / "b")
        service = _service(store, fake_git, console)
        service.set_base_dir(base)
        service.scan_and_replace(assume_yes=True)
        fake_git.forget(base / "b")
        console.clear()

        service.scan_and_replace(assume_yes=True)

        assert [r.name for r in service.list_watched()] == ["a"]
        assert console.find("warning: 1 watched repo(s) will be dropped from the watch list")
        assert not console.find("not under the base directory")


    def test_scan_declined_keeps_list(
        self, store: ConfigStore, fake_git: FakeGit, console: MockConsole, base: Path
    ) -> None:
        fake_git.add(base / "a")
        service = _service(store, fake_git, console, answer=False)
        service.set_base_dir(base)

        result = service.scan_and_replace()

        assert result == Ok(None)
        assert service.list_watched() == []

    def test_scan_without_prompt_callback_does_not_write(
        self, store: ConfigStore, fake_git: FakeGit, console: MockConsole, base: Path
    ) -> None:
        fake_git.add(base / "a")
        service = _service(store, fake_git, console)
        service.set_base_dir(base)

        assert service.scan_and_replace() == Ok(None)
        assert service.list_watched() == []


def test_corrupt_config_falls_back_with_warning(
    store: ConfigStore, fake_git: FakeGit, console: MockConsole
) -> None:
    store.path.write_text("base_dir = [", encoding="utf-8")
    service = _service(store, fake_git, console)

    assert service.list_watched() == []
    assert console.has_warning()
