"""Watch list commands."""

from __future__ import annotations

import typer

from grepo.cli.commands._helpers import exit_with_code, unwrap_or_exit
from grepo.cli.context import build_context
from grepo.cli.render import render_watch_list
from grepo.core.errors import ErrorCode

watch_app = typer.Typer(no_args_is_help=True, help="Manage the watched repos.")


@watch_app.command("add")
def add(
    names: list[str] = typer.Argument(
        ..., help="Repo directory names under the base dir, or paths (comma-separated ok)"
    ),
    reset: bool = typer.Option(
        False, "--reset", help="Clear the watch list first, keeping only these repos"
    ),
) -> None:
    """Add repos to the watch list."""
    ctx = build_context()
    change = unwrap_or_exit(ctx.watch_service().add(names, reset=reset), ctx)
    ctx.console.print(f"watched repos: {', '.join(change.config.names) or '(none)'}")
    if not change.ok:
        exit_with_code(int(ErrorCode.USER_ERROR))


@watch_app.command("remove")
def remove(
    names: list[str] = typer.Argument(..., help="Repo names or paths (comma-separated ok)"),
) -> None:
    """Remove repos from the watch list."""
    ctx = build_context()
    change = unwrap_or_exit(ctx.watch_service().remove(names), ctx)
    ctx.console.print(f"watched repos: {', '.join(change.config.names) or '(none)'}")
    if not change.ok:
        exit_with_code(int(ErrorCode.USER_ERROR))


@watch_app.command("list")
def list_watched() -> None:
    """List the watched repos."""
    ctx = build_context()
    render_watch_list(ctx.watch_service().list_watched(), ctx.console.rich)
