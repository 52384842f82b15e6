from __future__ import annotations

import os
from pathlib import Path

import pytest

from grepo.git.fake import FakeGit
from grepo.platform.paths import clear_caches


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point grepo at a config file inside tmp_path."""
    config_home = tmp_path / "config-home"
    if os.name == "nt":
        monkeypatch.setenv("APPDATA", str(config_home))
    else:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    path = tmp_path / "grepo.toml"
    monkeypatch.setenv("GREPO_CONFIG", str(path))
    clear_caches()
    return path
