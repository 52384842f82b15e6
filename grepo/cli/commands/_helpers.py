"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from grepo.core.errors import ErrorCode
from grepo.core.report import AggregatedReport
from grepo.core.result import Err, Ok, Result
from grepo.output.errors import GrepoError, error_exit_code, print_error

if TYPE_CHECKING:
    from grepo.cli.context import CLIContext


T = TypeVar("T")

JOBS_HELP = "Repos inspected in parallel (default: up to 8)."


def unwrap_or_exit(result: Result[T, GrepoError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit with its code."""
    match result:
        case Ok(value):
            return value
        case Err(error):
            print_error(error, ctx.console)
            raise typer.Exit(code=error_exit_code(error))
    raise AssertionError("unreachable")


def exit_for_report(report: AggregatedReport) -> None:
    """Exit with PARTIAL_FAILURE if any repo in the report failed."""
    if not report.ok:
        exit_with_code(int(ErrorCode.PARTIAL_FAILURE))


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)
