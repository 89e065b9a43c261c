from __future__ import annotations

from ._utils import iter_python_files, matches_prefix, package_root, parse_imports


def test_core_does_not_import_outer_layers() -> None:
    root = package_root()
    forbidden = ("coderesult.cli", "coderesult.output", "typer", "rich")
    offenders: list[str] = []

    for file_path in iter_python_files(root / "core"):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if any(matches_prefix(item.module, prefix) for prefix in forbidden):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")

    assert not offenders, "core -> outer layer dependency violations:\n" + "\n".join(offenders)


def test_output_does_not_import_cli() -> None:
    root = package_root()
    offenders: list[str] = []

    for file_path in iter_python_files(root / "output"):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if matches_prefix(item.module, "coderesult.cli"):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")

    assert not offenders, "output -> cli dependency violations:\n" + "\n".join(offenders)
