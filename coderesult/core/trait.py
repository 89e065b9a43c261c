"""Error trait contract.

An error trait describes one domain's vocabulary of result codes: which code
means success, which code a result gets when none is given, and how each code
reads to a human. A `Result` is bound to exactly one trait.

Usage:
    class StorageCode(IntEnum):
        OK = 0
        NOT_FOUND = 1
        BAD_FORMAT = 2

    STORAGE_TRAIT = EnumTrait(
        StorageCode,
        success=StorageCode.OK,
        default_error=StorageCode.BAD_FORMAT,
        descriptions={StorageCode.NOT_FOUND: "not found"},
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Protocol, runtime_checkable

__all__ = [
    "EnumTrait",
    "ErrorTrait",
]


@runtime_checkable
class ErrorTrait[C](Protocol):
    """Protocol every error trait implements.

    A trait can be any object (an instance, a module-level singleton, or a
    class with class attributes and a static method) exposing these members.
    """

    @property
    def success(self) -> C:
        """The unique code meaning "no error"."""
        ...

    @property
    def default_error(self) -> C:
        """The code a result holds when constructed without one."""
        ...

    def code_to_string(self, code: C) -> str:
        """Describe a code.

        Must be total: every value, including ones the domain never emits,
        gets a description.
        """
        ...


@dataclass(frozen=True, slots=True, eq=False)
class EnumTrait[E: IntEnum]:
    """Error trait over an `IntEnum`.

    Attributes:
        codes: The enum holding every code of the domain.
        success: Member meaning success.
        default_error: Member used when a result is built without a code.
        descriptions: Optional per-member descriptions. Members without an
            entry are described by their name, lower-cased with spaces.
        name: Display name; defaults to the enum's name.

    Traits compare by identity: two traits are the same vocabulary only if
    they are the same object.
    """

    codes: type[E]
    success: E
    default_error: E
    descriptions: Mapping[E, str] = field(default_factory=dict)
    name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", self.codes.__name__)

    def code_to_string(self, code: E) -> str:
        description = self.descriptions.get(code)
        if description is not None:
            return description
        try:
            member = self.codes(int(code))
        except ValueError:
            return f"unknown {self.name} code {int(code)}"
        return member.name.lower().replace("_", " ")

    def members(self) -> list[E]:
        """All codes, in declaration order."""
        return list(self.codes)

    def lookup(self, name: str) -> E | None:
        """Find a code by member name or numeric value.

        An exact name match wins; otherwise names match case-insensitively.
        """
        key = name.strip()
        if key.lstrip("-").isdigit():
            try:
                return self.codes(int(key))
            except ValueError:
                return None
        exact = self.codes.__members__.get(key)
        if exact is not None:
            return exact
        for member in self.codes:
            if member.name.lower() == key.lower():
                return member
        return None

    def __str__(self) -> str:
        return self.name
