from __future__ import annotations

from typing import Any

import typer

from coderesult.cli.commands._helpers import exit_with, require_code, require_trait
from coderesult.cli.context import CLIContext, build_context
from coderesult.core.errors import ErrorCode, ExitResult
from coderesult.core.result import Result, result_type


def format_result(
    app_ctx: typer.Context,
    trait: str = typer.Argument(..., help="Trait of the innermost result"),
    code: str = typer.Argument(..., help="Code name or numeric value"),
    message: str | None = typer.Option(None, "--message", "-m", help="Text appended to the result"),
    via: list[str] | None = typer.Option(
        None,
        "--via",
        help="Wrap the result into TRAIT:CODE (repeatable, innermost first)",
    ),
) -> None:
    """Build a result and print its formatted cause chain."""
    ctx = build_context(app_ctx.obj)

    found = require_trait(ctx, trait)
    result = result_type(found)(require_code(ctx, found, code))
    if message:
        result << message

    for layer in via or []:
        result = _wrap(ctx, result, layer)

    ctx.console.result(result)


def _wrap(ctx: CLIContext, inner: Result[Any], layer: str) -> Result[Any]:
    trait_name, sep, code_name = layer.rpartition(":")
    if not sep or not trait_name or not code_name:
        failure = ExitResult(ErrorCode.USER_ERROR) << f"--via expects TRAIT:CODE, got '{layer}'"
        exit_with(ctx, failure)

    outer = require_trait(ctx, trait_name)
    return result_type(outer).wrap(inner, require_code(ctx, outer, code_name))
