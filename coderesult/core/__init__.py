"""Core domain types: error traits and the result type."""

from .config import ConfigCode, ConfigResult, TraitCatalog, load_catalog
from .errors import EXIT_TRAIT, ErrorCode, ExitResult
from .result import Result, result_type
from .trait import EnumTrait, ErrorTrait

__all__ = [
    # config
    "ConfigCode",
    "ConfigResult",
    "TraitCatalog",
    "load_catalog",
    # errors
    "EXIT_TRAIT",
    "ErrorCode",
    "ExitResult",
    # result
    "Result",
    "result_type",
    # trait
    "EnumTrait",
    "ErrorTrait",
]
