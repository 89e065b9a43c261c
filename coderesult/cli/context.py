from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from coderesult.core.config import ConfigCode, TraitCatalog, catalog_path, load_catalog
from coderesult.core.errors import ErrorCode, ExitResult
from coderesult.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    catalog: TraitCatalog
    console: ConsoleProtocol


def _exit_code_for(code: ConfigCode) -> ErrorCode:
    if code in (ConfigCode.NOT_FOUND, ConfigCode.PERMISSION_DENIED):
        return ErrorCode.IO_ERROR
    return ErrorCode.ENV_ERROR


def build_context(catalog_file: Path | None = None) -> CLIContext:
    result, catalog = load_catalog(catalog_path(catalog_file))
    if result.is_failure():
        exit_result = ExitResult.wrap(result, _exit_code_for(result.error_code))
        typer.echo(f"error: {exit_result.format()}", err=True)
        raise typer.Exit(code=int(exit_result.error_code))

    return CLIContext(catalog=catalog, console=RichConsole())
