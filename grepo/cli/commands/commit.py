"""Commit search across all watched repos."""

from __future__ import annotations

import typer

from grepo.cli.commands._helpers import JOBS_HELP, exit_for_report
from grepo.cli.context import build_context
from grepo.cli.render import render_report
from grepo.git.multi import SearchScope

commit_app = typer.Typer(no_args_is_help=True, help="Commits across watched repos.")


@commit_app.command("search")
def search(
    pattern: str = typer.Argument(..., help="Text to look for (case-sensitive)"),
    author: bool = typer.Option(
        False, "--author", "-a", help="Match the author name instead of the message"
    ),
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help=JOBS_HELP),
) -> None:
    """Find commits whose message (or author) contains PATTERN."""
    ctx = build_context()
    scope = SearchScope.AUTHOR if author else SearchScope.MESSAGE
    report = ctx.inspect_service(jobs=jobs).commit_search_report(
        ctx.load_config(), pattern, scope
    )
    render_report(report, ctx.console.rich)
    exit_for_report(report)
