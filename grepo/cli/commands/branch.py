"""Branch reports across all watched repos."""

from __future__ import annotations

import typer

from grepo.cli.commands._helpers import JOBS_HELP, exit_for_report
from grepo.cli.context import build_context
from grepo.cli.render import render_report

branch_app = typer.Typer(no_args_is_help=True, help="Branches across watched repos.")


@branch_app.command("curr")
def curr(
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help=JOBS_HELP),
) -> None:
    """Show the branch each watched repo is on."""
    ctx = build_context()
    report = ctx.inspect_service(jobs=jobs).current_branch_report(ctx.load_config())
    render_report(report, ctx.console.rich)
    exit_for_report(report)


@branch_app.command("list")
def list_branches(
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help=JOBS_HELP),
) -> None:
    """List every local branch of every watched repo."""
    ctx = build_context()
    report = ctx.inspect_service(jobs=jobs).branch_list_report(ctx.load_config())
    render_report(report, ctx.console.rich)
    exit_for_report(report)


@branch_app.command("search")
def search(
    pattern: str = typer.Argument(..., help="Text to look for in branch names (case-sensitive)"),
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help=JOBS_HELP),
) -> None:
    """Find branches whose name contains PATTERN."""
    ctx = build_context()
    report = ctx.inspect_service(jobs=jobs).branch_search_report(ctx.load_config(), pattern)
    render_report(report, ctx.console.rich)
    exit_for_report(report)
