from __future__ import annotations

import os
from pathlib import Path

import typer

from grepo import __version__
from grepo.cli.commands.branch import branch_app
from grepo.cli.commands.commit import commit_app
from grepo.cli.commands.config_cmd import base_dir, config_path, show_config
from grepo.cli.commands.scan import scan_base_dir
from grepo.cli.commands.watch import watch_app
from grepo.core.config import CONFIG_ENV_VAR


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Organize and search branches and commits across many git repos.",
)


# Commands
app.command("base-dir")(base_dir)
app.command("show-config")(show_config)
app.command("config-path")(config_path)
app.command("scan-base-dir")(scan_base_dir)
app.command("sbd", hidden=True)(scan_base_dir)

# Sub-apps
app.add_typer(watch_app, name="watch")
app.add_typer(watch_app, name="w", hidden=True)
app.add_typer(branch_app, name="branch")
app.add_typer(branch_app, name="b", hidden=True)
app.add_typer(commit_app, name="commit")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False, "--version", callback=_print_version, is_eager=True, help="Show version and exit."
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help=f"Config file to use (default: ${CONFIG_ENV_VAR} or the user config dir)",
    ),
) -> None:
    if config is not None:
        os.environ[CONFIG_ENV_VAR] = str(config.expanduser())


def main() -> None:
    app()
