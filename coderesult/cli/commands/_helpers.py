"""Shared helpers for CLI commands."""

from __future__ import annotations

from enum import IntEnum
from typing import NoReturn

import typer

from coderesult.cli.context import CLIContext
from coderesult.core.errors import ErrorCode, ExitResult
from coderesult.core.trait import EnumTrait


def exit_with(ctx: CLIContext, result: ExitResult) -> NoReturn:
    """Print a failing exit result and leave with its code."""
    ctx.console.result(result)
    raise typer.Exit(code=int(result.error_code))


def require_trait(ctx: CLIContext, name: str) -> EnumTrait[IntEnum]:
    trait = ctx.catalog.get(name)
    if trait is None:
        failure = ExitResult(ErrorCode.USER_ERROR) << f"unknown trait '{name}'"
        if len(ctx.catalog):
            failure << f"; available: {', '.join(ctx.catalog.names())}"
        exit_with(ctx, failure)
    return trait


def require_code(ctx: CLIContext, trait: EnumTrait[IntEnum], name: str) -> IntEnum:
    code = trait.lookup(name)
    if code is None:
        exit_with(ctx, ExitResult(ErrorCode.USER_ERROR) << f"unknown {trait} code '{name}'")
    return code
