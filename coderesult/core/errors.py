"""Exit codes for the command line, expressed as an error trait.

`ErrorCode` maps to shell exit codes. `ExitResult` is the result type the
CLI works with: any lower-layer result is wrapped into it before the process
exits, so the final message carries the whole cause chain.
"""

from __future__ import annotations

from enum import IntEnum

from .result import Result
from .trait import EnumTrait

__all__ = ["EXIT_TRAIT", "ErrorCode", "ExitResult"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (unknown trait or code, bad argument)
    - 2: Environment error (invalid catalog)
    - 5: I/O error (catalog missing or unreadable)
    - 70: Internal error (anything unexpected)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    IO_ERROR = 5
    INTERNAL_ERROR = 70

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")


EXIT_TRAIT = EnumTrait(
    ErrorCode,
    success=ErrorCode.OK,
    default_error=ErrorCode.INTERNAL_ERROR,
    name="exit",
)


class ExitResult(Result[ErrorCode]):
    trait = EXIT_TRAIT
