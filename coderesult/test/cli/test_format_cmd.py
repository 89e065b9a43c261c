from __future__ import annotations

from pathlib import Path

import pytest
import typer

from coderesult.core.errors import ErrorCode
from coderesult.output.console import Style

from ._catalog import app_context, make_ctx, outputs


def _run(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, **kwargs: object) -> list[str]:
    import coderesult.cli.commands.format_cmd as format_cmd

    ctx = make_ctx(tmp_path)
    monkeypatch.setattr(format_cmd, "build_context", lambda _catalog_file: ctx)

    params: dict[str, object] = {"message": None, "via": None}
    params.update(kwargs)
    format_cmd.format_result(app_context(), **params)  # type: ignore[arg-type]
    return outputs(ctx).messages


def test_format_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    messages = _run(tmp_path, monkeypatch, trait="storage", code="NOT_FOUND")
    assert messages == ["Code 1: not found"]


def test_format_with_message(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    messages = _run(
        tmp_path, monkeypatch, trait="storage", code="not_found", message="file.txt"
    )
    assert messages == ["Code 1: not found (file.txt)"]


def test_format_by_numeric_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    messages = _run(tmp_path, monkeypatch, trait="storage", code="2")
    assert messages == ["Code 2: i/o failure"]


def test_format_success_hides_message(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import coderesult.cli.commands.format_cmd as format_cmd

    ctx = make_ctx(tmp_path)
    monkeypatch.setattr(format_cmd, "build_context", lambda _catalog_file: ctx)

    format_cmd.format_result(
        app_context(), trait="storage", code="OK", message="ignored", via=None
    )

    assert outputs(ctx).outputs[0].message == "Success"
    assert outputs(ctx).outputs[0].style == Style.SUCCESS


def test_format_via_chain(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    messages = _run(
        tmp_path,
        monkeypatch,
        trait="storage",
        code="NOT_FOUND",
        message="file.txt",
        via=["loader:OPEN_FAILED", "storage:IO"],
    )
    assert messages == [
        "Code 2: i/o failure (Code 3: cannot open (Code 1: not found (file.txt)))"
    ]


def test_format_via_success_stays_success(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    messages = _run(tmp_path, monkeypatch, trait="storage", code="OK", via=["loader:OPEN_FAILED"])
    assert messages == ["Success"]


@pytest.mark.parametrize(
    ("kwargs", "expected"),
    [
        ({"trait": "network", "code": "OK"}, "unknown trait 'network'"),
        ({"trait": "storage", "code": "GONE"}, "unknown storage code 'GONE'"),
        ({"trait": "storage", "code": "IO", "via": ["loader"]}, "--via expects TRAIT:CODE"),
        ({"trait": "storage", "code": "IO", "via": ["loader:"]}, "--via expects TRAIT:CODE"),
        ({"trait": "storage", "code": "IO", "via": ["cache:MISS"]}, "unknown trait 'cache'"),
    ],
)
def test_format_user_errors(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    kwargs: dict[str, object],
    expected: str,
) -> None:
    import coderesult.cli.commands.format_cmd as format_cmd

    ctx = make_ctx(tmp_path)
    monkeypatch.setattr(format_cmd, "build_context", lambda _catalog_file: ctx)

    params: dict[str, object] = {"message": None, "via": None}
    params.update(kwargs)
    with pytest.raises(typer.Exit) as exc:
        format_cmd.format_result(app_context(), **params)  # type: ignore[arg-type]

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert outputs(ctx).has_error()
    assert expected in outputs(ctx).text
