from __future__ import annotations

from dataclasses import dataclass

import typer

from grepo.core.config import Config, ConfigStore
from grepo.git.repository import GitCli, GitProtocol
from grepo.output.console import RichConsole
from grepo.services.inspect import InspectService
from grepo.services.watch import WatchService


@dataclass(frozen=True, slots=True)
class CLIContext:
    store: ConfigStore
    git: GitProtocol
    console: RichConsole

    def load_config(self) -> Config:
        return self.store.load_or_default(self.console)

    def watch_service(self) -> WatchService:
        return WatchService(
            store=self.store,
            git=self.git,
            console=self.console,
            confirm=lambda msg: typer.confirm(msg, default=False),
        )

    def inspect_service(self, *, jobs: int | None = None) -> InspectService:
        return InspectService(git=self.git, console=self.console, max_workers=jobs)


def build_context() -> CLIContext:
    return CLIContext(
        store=ConfigStore(),
        git=GitCli(),
        console=RichConsole(),
    )
