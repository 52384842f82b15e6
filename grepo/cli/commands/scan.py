from __future__ import annotations

import typer

from grepo.cli.commands._helpers import unwrap_or_exit
from grepo.cli.context import build_context


def scan_base_dir(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Replace the watch list with the repos found in the base directory.

    Repos watched from outside the base directory are dropped.
    """
    ctx = build_context()
    updated = unwrap_or_exit(ctx.watch_service().scan_and_replace(assume_yes=yes), ctx)
    if updated is not None:
        ctx.console.print(f"watched repos: {', '.join(updated.names) or '(none)'}")
