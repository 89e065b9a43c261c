from __future__ import annotations

from pathlib import Path

import pytest
import typer

from coderesult.cli.context import CLIContext
from coderesult.core.errors import ErrorCode
from coderesult.output.console import Style

from ._catalog import app_context, make_ctx, outputs


def test_codes_lists_traits(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import coderesult.cli.commands.codes as codes_cmd

    ctx = make_ctx(tmp_path)
    monkeypatch.setattr(codes_cmd, "build_context", lambda _catalog_file: ctx)

    codes_cmd.codes(app_context(), trait=None)

    console = outputs(ctx)
    assert "Traits" in console.messages
    assert "loader: 2 codes, success LOADED" in console.messages
    assert "storage: 3 codes, success OK" in console.messages


def test_codes_lists_one_trait(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import coderesult.cli.commands.codes as codes_cmd

    ctx = make_ctx(tmp_path)
    monkeypatch.setattr(codes_cmd, "build_context", lambda _catalog_file: ctx)

    codes_cmd.codes(app_context(), trait="storage")

    console = outputs(ctx)
    assert console.messages == [
        "storage",
        "   0  OK: ok [success]",
        "   1  NOT_FOUND: not found",
        "   2  IO: i/o failure [default]",
    ]
    assert console.outputs[1].style == Style.SUCCESS


def test_codes_unknown_trait_exits(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import coderesult.cli.commands.codes as codes_cmd

    ctx = make_ctx(tmp_path)
    monkeypatch.setattr(codes_cmd, "build_context", lambda _catalog_file: ctx)

    with pytest.raises(typer.Exit) as exc:
        codes_cmd.codes(app_context(), trait="network")

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert outputs(ctx).messages == [
        "Code 1: user error (unknown trait 'network'; available: loader, storage)"
    ]


def test_codes_empty_catalog_warns(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import coderesult.cli.commands.codes as codes_cmd

    ctx = make_ctx(tmp_path, text="")
    monkeypatch.setattr(codes_cmd, "build_context", lambda _catalog_file: ctx)

    codes_cmd.codes(app_context(), trait=None)

    console = outputs(ctx)
    assert len(console.outputs) == 1
    assert console.outputs[0].style == Style.WARNING
    assert "no traits declared" in console.outputs[0].message


def test_codes_passes_catalog_option(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import coderesult.cli.commands.codes as codes_cmd

    ctx = make_ctx(tmp_path)
    requested: list[Path | None] = []

    def fake_build_context(catalog_file: Path | None) -> CLIContext:
        requested.append(catalog_file)
        return ctx

    monkeypatch.setattr(codes_cmd, "build_context", fake_build_context)

    codes_cmd.codes(app_context(tmp_path / "flag.toml"), trait=None)

    assert requested == [tmp_path / "flag.toml"]
