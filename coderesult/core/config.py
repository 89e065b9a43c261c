"""Trait catalogs declared in TOML.

A catalog file declares one error trait per `[traits.<name>]` table:

    [traits.storage]
    success = "OK"
    default_error = "IO"

    [traits.storage.codes]
    OK = 0
    NOT_FOUND = { value = 1, description = "not found" }
    IO = { value = 2, description = "i/o failure" }

Every code becomes a member of a generated `IntEnum`. Codes given as a bare
integer are described by their name. `default_error` is optional and falls
back to the first declared code that is not the success code.

Loading never raises: failures come back as a `ConfigResult`.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, cast

from .result import Result, result_type
from .structured import StrDict, as_int, as_str_dict, get_int, get_str, get_table
from .trait import EnumTrait

__all__ = [
    "CATALOG_ENV_VAR",
    "CONFIG_TRAIT",
    "DEFAULT_CATALOG_NAME",
    "ConfigCode",
    "ConfigResult",
    "TraitCatalog",
    "catalog_path",
    "load_catalog",
    "parse_catalog",
]

CATALOG_ENV_VAR = "CODERESULT_CATALOG"
DEFAULT_CATALOG_NAME = "coderesult.toml"


class ConfigCode(IntEnum):
    """Outcomes of loading a catalog."""

    OK = 0
    NOT_FOUND = 1
    PERMISSION_DENIED = 2
    INVALID_TOML = 3
    INVALID_STRUCTURE = 4


CONFIG_TRAIT = EnumTrait(
    ConfigCode,
    success=ConfigCode.OK,
    default_error=ConfigCode.INVALID_STRUCTURE,
    descriptions={
        ConfigCode.NOT_FOUND: "catalog file not found",
        ConfigCode.PERMISSION_DENIED: "permission denied reading catalog",
        ConfigCode.INVALID_TOML: "invalid TOML syntax",
        ConfigCode.INVALID_STRUCTURE: "invalid catalog structure",
    },
    name="config",
)


class ConfigResult(Result[ConfigCode]):
    trait = CONFIG_TRAIT


type CodeTrait = EnumTrait[IntEnum]


@dataclass(frozen=True, slots=True)
class TraitCatalog:
    """Named error traits loaded from a catalog file."""

    traits: Mapping[str, CodeTrait] = field(default_factory=dict)
    path: Path | None = None

    def get(self, name: str) -> CodeTrait | None:
        return self.traits.get(name)

    def names(self) -> list[str]:
        return sorted(self.traits)

    def result_type(self, name: str) -> type[Result[Any]] | None:
        """Result class bound to the named trait, or None if unknown."""
        trait = self.traits.get(name)
        if trait is None:
            return None
        return result_type(trait)

    def __contains__(self, name: object) -> bool:
        return name in self.traits

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self.traits)


def catalog_path(explicit: Path | None = None) -> Path:
    """Resolve the catalog location.

    Order: explicit path, then $CODERESULT_CATALOG, then ./coderesult.toml.
    """
    if explicit is not None:
        return explicit.expanduser()
    env = os.environ.get(CATALOG_ENV_VAR)
    if env:
        return Path(env).expanduser()
    return Path.cwd() / DEFAULT_CATALOG_NAME


def _invalid(where: str, problem: str) -> ConfigResult:
    return ConfigResult(ConfigCode.INVALID_STRUCTURE) << f"{where}: {problem}"


def _parse_toml(path: Path) -> tuple[ConfigResult, StrDict]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data = as_str_dict(tomllib.loads(content.decode("utf-8")))
    except FileNotFoundError:
        return ConfigResult(ConfigCode.NOT_FOUND) << path, {}
    except PermissionError:
        return ConfigResult(ConfigCode.PERMISSION_DENIED) << path, {}
    except IsADirectoryError:
        return ConfigResult(ConfigCode.NOT_FOUND) << f"{path} is a directory", {}
    except tomllib.TOMLDecodeError as e:
        return ConfigResult(ConfigCode.INVALID_TOML) << f"{path}: {e}", {}
    except UnicodeDecodeError as e:
        return ConfigResult(ConfigCode.INVALID_TOML) << f"{path}: {e}", {}

    if data is None:
        return _invalid(str(path), "root must be a table"), {}
    return ConfigResult.success(), data


def _parse_code(where: str, raw: object) -> tuple[ConfigResult, int, str | None]:
    value = as_int(raw)
    if value is not None:
        return ConfigResult.success(), value, None

    table = as_str_dict(raw)
    if table is None:
        return _invalid(where, "expected an integer or a table with 'value'"), 0, None

    value = get_int(table, "value")
    if value is None:
        return _invalid(where, "'value' must be an integer"), 0, None

    description = table.get("description")
    if description is not None and not isinstance(description, str):
        return _invalid(where, "'description' must be a string"), 0, None
    return ConfigResult.success(), value, description


def _parse_trait(name: str, table: StrDict) -> tuple[ConfigResult, CodeTrait | None]:
    where = f"traits.{name}"
    codes = get_table(table, "codes")
    if not codes:
        return _invalid(f"{where}.codes", "expected a non-empty table"), None

    members: list[tuple[str, int]] = []
    descriptions: dict[str, str] = {}
    seen_values: dict[int, str] = {}
    for code_name, raw in codes.items():
        code_where = f"{where}.codes.{code_name}"
        if not code_name.isidentifier() or code_name.startswith("_"):
            problem = "code names must be identifiers not starting with '_'"
            return _invalid(code_where, problem), None

        result, value, description = _parse_code(code_where, raw)
        if result.is_failure():
            return result, None
        if value in seen_values:
            return _invalid(code_where, f"value {value} already used by {seen_values[value]}"), None

        seen_values[value] = code_name
        members.append((code_name, value))
        if description:
            descriptions[code_name] = description

    success_name = get_str(table, "success")
    if success_name is None:
        return _invalid(where, "'success' must name one of its codes"), None
    if success_name not in codes:
        return _invalid(where, f"success code '{success_name}' is not declared"), None

    default_name = get_str(table, "default_error")
    if default_name is None:
        default_name = next((n for n, _ in members if n != success_name), success_name)
    elif default_name not in codes:
        return _invalid(where, f"default_error code '{default_name}' is not declared"), None

    enum_name = "".join(part.capitalize() for part in name.replace("-", "_").split("_")) + "Code"
    try:
        codes_enum = cast(type[IntEnum], IntEnum(enum_name, members))
    except (TypeError, ValueError) as e:
        return _invalid(f"{where}.codes", f"cannot define codes ({e})"), None
    trait = EnumTrait(
        codes_enum,
        success=codes_enum[success_name],
        default_error=codes_enum[default_name],
        descriptions={codes_enum[n]: d for n, d in descriptions.items()},
        name=name,
    )
    return ConfigResult.success(), trait


def parse_catalog(
    data: Mapping[str, object], path: Path | None = None
) -> tuple[ConfigResult, TraitCatalog]:
    """Build a catalog from already-parsed TOML data.

    Returns:
        The parse result and the catalog. The catalog is empty when the
        result is a failure.
    """
    traits_table = get_table(data, "traits")
    if traits_table is None:
        if "traits" in data:
            return _invalid("traits", "expected a table"), TraitCatalog(path=path)
        return ConfigResult.success(), TraitCatalog(path=path)

    traits: dict[str, CodeTrait] = {}
    for name, raw in traits_table.items():
        table = as_str_dict(raw)
        if table is None:
            return _invalid(f"traits.{name}", "expected a table"), TraitCatalog(path=path)
        result, trait = _parse_trait(name, table)
        if trait is None:
            return result, TraitCatalog(path=path)
        traits[name] = trait

    return ConfigResult.success(), TraitCatalog(traits=traits, path=path)


def load_catalog(path: Path) -> tuple[ConfigResult, TraitCatalog]:
    """Load and parse a trait catalog from a TOML file.

    Args:
        path: Path to the catalog file.

    Returns:
        The load result and the catalog. The catalog is empty when the
        result is a failure; structure failures name the offending file.
    """
    result, data = _parse_toml(path)
    if result.is_failure():
        return result, TraitCatalog(path=path)

    result, catalog = parse_catalog(data, path=path)
    if result.is_failure():
        result << f" in {path}"
    return result, catalog
