from __future__ import annotations

from pathlib import Path

import typer

from coderesult import __version__
from coderesult.cli.commands.codes import codes
from coderesult.cli.commands.format_cmd import format_result
from coderesult.core.config import CATALOG_ENV_VAR


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(codes)
app.command("format")(format_result)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    catalog: Path | None = typer.Option(
        None,
        "--catalog",
        help=f"Trait catalog file (default: ${CATALOG_ENV_VAR}, then ./coderesult.toml)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    # Read back by build_context() in each command.
    ctx.obj = catalog

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def main() -> None:
    app()
