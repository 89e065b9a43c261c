"""Trait-parameterized result codes with chained error context."""

from .core import EnumTrait, ErrorTrait, Result, result_type

__version__ = "0.1.0"

__all__ = [
    "EnumTrait",
    "ErrorTrait",
    "Result",
    "__version__",
    "result_type",
]
