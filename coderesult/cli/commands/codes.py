from __future__ import annotations

import typer

from coderesult.cli.commands._helpers import require_trait
from coderesult.cli.context import CLIContext, build_context
from coderesult.output.console import Style


def codes(
    app_ctx: typer.Context,
    trait: str | None = typer.Argument(None, help="Trait to list codes for (default: all traits)"),
) -> None:
    """List catalog traits, or the codes of one trait."""
    ctx = build_context(app_ctx.obj)
    if trait is None:
        _print_traits(ctx)
        return

    found = require_trait(ctx, trait)
    ctx.console.header(trait)
    for member in found.members():
        marks: list[str] = []
        if member == found.success:
            marks.append("success")
        if member == found.default_error:
            marks.append("default")
        suffix = f" [{', '.join(marks)}]" if marks else ""
        style = Style.SUCCESS if member == found.success else Style.DEFAULT
        line = f"{int(member):>4}  {member.name}: {found.code_to_string(member)}{suffix}"
        ctx.console.print(line, style)


def _print_traits(ctx: CLIContext) -> None:
    catalog = ctx.catalog
    if not len(catalog):
        ctx.console.warning(f"no traits declared in {catalog.path}")
        return

    ctx.console.print(f"catalog: {catalog.path}", Style.DIM)
    ctx.console.header("Traits")
    for name in catalog.names():
        trait = catalog.get(name)
        if trait is None:
            continue
        ctx.console.print(f"{name}: {len(trait.members())} codes, success {trait.success.name}")
