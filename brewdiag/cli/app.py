from __future__ import annotations

import os
from pathlib import Path

import typer

from brewdiag import __version__
from brewdiag.cli.commands.doctor import doctor
from brewdiag.cli.commands.preflight import preflight
from brewdiag.cli.context import CONFIG_ENV_VAR
from brewdiag.core.errors import ErrorCode

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    invoke_without_command=True,
)

# Commands
app.command()(doctor)
app.command()(preflight)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: ~/.config/brewdiag/config.toml)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    if config is not None:
        path = config.expanduser()
        if not path.is_file():
            typer.echo(f"error: --config '{path}' is not a file", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        os.environ[CONFIG_ENV_VAR] = str(path)


def main() -> None:
    app()
