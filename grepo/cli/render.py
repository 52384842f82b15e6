"""Rich rendering of reports and the watch list."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from grepo.core.config import Config, RepoRef
from grepo.core.report import AggregatedReport, ReportRow
from grepo.git.multi import BranchSearch, CommitSearch, CurrentBranch, ListBranches

_HASH_WIDTH = 10


def _title(report: AggregatedReport) -> str:
    match report.request:
        case CurrentBranch():
            return "Current branches"
        case ListBranches():
            return "Branches"
        case BranchSearch(pattern=pattern):
            return f"Branches matching '{pattern}'"
        case CommitSearch(pattern=pattern, scope=scope):
            return f"Commits with '{pattern}' in {scope}"
    return "Report"


def _error_cells(row: ReportRow, columns: int) -> list[Text]:
    cells = [Text(row.repo, style="bold red"), Text(f"error: {row.item}", style="red")]
    cells.extend(Text("") for _ in range(columns - 2))
    return cells


def report_table(report: AggregatedReport) -> Table:
    is_commit = isinstance(report.request, CommitSearch)
    table = Table(title=escape(_title(report)), title_justify="left", show_lines=False)
    table.add_column("Repo", style="bold", no_wrap=True)
    if is_commit:
        table.add_column("Commit", style="yellow", no_wrap=True)
        table.add_column("Summary")
    else:
        table.add_column("Branch", style="blue")

    columns = 3 if is_commit else 2
    for row in report.rows:
        if row.is_error:
            table.add_row(*_error_cells(row, columns))
        elif is_commit:
            table.add_row(Text(row.repo), Text(row.item[:_HASH_WIDTH]), Text(row.detail))
        else:
            table.add_row(Text(row.repo), Text(row.item))
    return table


def render_report(report: AggregatedReport, console: Console) -> None:
    if report.repo_count == 0:
        return
    if not report.rows:
        title = escape(_title(report))
        console.print(f"[dim]{title}: no matches in {report.repo_count} repos[/dim]")
        return
    console.print(report_table(report))


def render_watch_list(repos: list[RepoRef], console: Console) -> None:
    if not repos:
        console.print("[dim]No repos watched[/dim]")
        return
    table = Table(title="Watched repos", title_justify="left")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Path", style="dim")
    for repo in repos:
        table.add_row(Text(repo.name), Text(str(repo.path)))
    console.print(table)


def render_config(config: Config, path: str, console: Console) -> None:
    console.print(f"[bold]config:[/bold] {escape(path)}")
    base = escape(str(config.base_dir)) if config.base_dir else "[dim](unset)[/dim]"
    console.print(f"[bold]base_dir:[/bold] {base}")
    render_watch_list(list(config.repos), console)
