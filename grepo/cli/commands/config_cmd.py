"""Base directory and config file commands."""

from __future__ import annotations

from pathlib import Path

import typer

from grepo.cli.commands._helpers import unwrap_or_exit
from grepo.cli.context import build_context
from grepo.cli.render import render_config


def base_dir(
    path: Path | None = typer.Argument(
        None, help="New base directory (omit to show the current one)"
    ),
) -> None:
    """Show or set the directory that holds your repos."""
    ctx = build_context()
    service = ctx.watch_service()

    if path is None:
        current = service.base_dir()
        if current is None:
            ctx.console.print("(unset)")
            ctx.console.print("hint: run `grepo base-dir <path>`")
        else:
            ctx.console.print(str(current))
        return

    unwrap_or_exit(service.set_base_dir(path), ctx)


def show_config() -> None:
    """Show the saved settings."""
    ctx = build_context()
    render_config(ctx.load_config(), str(ctx.store.path), ctx.console.rich)


def config_path() -> None:
    """Show the location of the config file."""
    ctx = build_context()
    ctx.console.print(str(ctx.store.path))
