"""Result type carrying a domain error code and a diagnostic message.

A `Result` holds exactly one code from its error trait plus a message that
only ever grows. Results are returned, never raised: callers check
`is_failure()` at each call site and, when crossing a layer boundary,
re-code the failure into their own vocabulary with `wrap()`. The lower
layer's formatted text is kept in the new message, so a failure reads as a
chain from the outermost layer down to the root cause.

Usage:
    class StorageResult(Result[StorageCode]):
        trait = STORAGE_TRAIT

    class LoaderResult(Result[LoaderCode]):
        trait = LOADER_TRAIT

    def open_file(path: str) -> StorageResult:
        if not exists(path):
            return StorageResult(StorageCode.NOT_FOUND) << path
        return StorageResult.success()

    def load(path: str) -> LoaderResult:
        return LoaderResult.wrap(open_file(path), LoaderCode.OPEN_FAILED)

    load("file.txt").format()
    # 'Code 3: cannot open (Code 1: not found (file.txt))'
"""

from __future__ import annotations

import threading
from enum import Enum, auto
from typing import Any, ClassVar, Self, SupportsInt, cast

from .trait import ErrorTrait

__all__ = [
    "Result",
    "result_type",
]

SUCCESS_TEXT = "Success"
CHAIN_SEPARATOR = ": "


class _Missing(Enum):
    """Marker for "argument not given" where any code value is legal."""

    MISSING = auto()


MISSING = _Missing.MISSING


class Result[C: SupportsInt]:
    """A code from one error trait, plus an accumulated message.

    `Result` itself is not bound to a trait. Bind one by subclassing and
    setting `trait`, or get a bound class from `result_type(trait)`.

    Equality compares codes only: two results with the same code and
    different messages are equal.
    """

    __slots__ = ("_error_code", "_message", "_shared")

    trait: ClassVar[ErrorTrait[Any]]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        trait = cls.__dict__.get("trait")
        if trait is not None:
            with _bound_lock:
                _bound_types.setdefault(id(trait), (trait, cls))

    def __init__(self, code: C | _Missing = MISSING) -> None:
        trait = _bound_trait(type(self))
        self._error_code: C = trait.default_error if code is MISSING else code
        self._message = ""
        self._shared = False

    @classmethod
    def wrap(
        cls,
        inner: Result[Any],
        failure_code: C,
        success_code: C | _Missing = MISSING,
    ) -> Self:
        """Re-code a result of any trait into this trait.

        Args:
            inner: The lower-layer result.
            failure_code: Code used if `inner` is a failure. The formatted
                `inner` becomes the message.
            success_code: Code used if `inner` is a success. Defaults to
                this trait's success code. The message stays empty.

        Returns:
            A new result of this class.
        """
        if inner.is_failure():
            wrapped = cls(failure_code)
            wrapped.append(inner)
            return wrapped
        if success_code is MISSING:
            return cls(_bound_trait(cls).success)
        return cls(success_code)

    @classmethod
    def success(cls) -> Self:
        """Return the shared success result of this class.

        Created on first use and read-only: appending to it raises TypeError.
        Use `copy()` to get a result that can be appended to.

        The instance is cached per class. `result_type(trait)` returns the
        first class bound to `trait`, so there is one success instance per
        trait unless the same trait is bound by two separate subclasses.
        """
        instance = _success_instances.get(cls)
        if instance is None:
            with _success_lock:
                instance = _success_instances.get(cls)
                if instance is None:
                    instance = cls(_bound_trait(cls).success)
                    instance._shared = True
                    _success_instances[cls] = instance
        return cast(Self, instance)

    @property
    def error_code(self) -> C:
        """The stored code. Equals the success code for a success result."""
        return self._error_code

    @property
    def message(self) -> str:
        """The raw accumulated message, possibly empty."""
        return self._message

    def get_error_code(self) -> C:
        return self._error_code

    def get_message(self) -> str:
        return self._message

    def is_success(self) -> bool:
        return self._error_code == self.trait.success

    def is_failure(self) -> bool:
        return not self.is_success()

    def append(self, value: object) -> Self:
        """Append a value to the message.

        A `Result` (of any trait) is appended as its `format()` output,
        preceded by ": " when the message is not empty. Anything else is
        appended as `str(value)` with no separator.

        Returns:
            A copy of this result taken after the append. The append itself
            is kept on this result.

        Raises:
            TypeError: If this is the shared `success()` instance.
        """
        if self._shared:
            raise TypeError(
                f"{type(self).__name__}.success() is shared and read-only; append to a copy()"
            )

        match value:
            case Result():
                if self._message:
                    self._message += CHAIN_SEPARATOR
                self._message += value.format()
            case _:
                self._message += str(value)
        return self.copy()

    __lshift__ = append

    def format(self) -> str:
        """Render the result for humans.

        "Success" for any success result, whatever its message. Otherwise
        "Code <n>: <description>", followed by " (<message>)" if the message
        is not empty.
        """
        if self.is_success():
            return SUCCESS_TEXT

        text = f"Code {int(self._error_code)}: {self.trait.code_to_string(self._error_code)}"
        if self._message:
            text += f" ({self._message})"
        return text

    def copy(self) -> Self:
        """Return an independent result with the same code and message."""
        duplicate = type(self)(self._error_code)
        duplicate._message = self._message
        return duplicate

    def __copy__(self) -> Self:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, object]) -> Self:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        if other.trait is not self.trait:
            return NotImplemented
        return bool(self._error_code == other._error_code)

    def __hash__(self) -> int:
        return hash((id(self.trait), self._error_code))

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._error_code!r}, message={self._message!r})"


_success_lock = threading.Lock()
_success_instances: dict[type[Result[Any]], Result[Any]] = {}

# Reentrant: class creation inside result_type() runs __init_subclass__.
_bound_lock = threading.RLock()
_bound_types: dict[int, tuple[ErrorTrait[Any], type[Result[Any]]]] = {}


def _bound_trait(cls: type[Result[Any]]) -> ErrorTrait[Any]:
    trait = getattr(cls, "trait", None)
    if trait is None:
        raise TypeError(
            f"{cls.__name__} is not bound to an error trait; "
            "subclass it with a 'trait' attribute or use result_type(trait)"
        )
    return trait


def _type_label(trait: object) -> str:
    label = getattr(trait, "name", "") or getattr(trait, "__name__", "") or type(trait).__name__
    label = str(label)
    return label[:1].upper() + label[1:]


def result_type(trait: ErrorTrait[Any]) -> type[Result[Any]]:
    """Return the `Result` subclass bound to `trait`.

    The same class is returned for the same trait object on every call, so
    `result_type(t).success()` is one shared instance per trait. If a
    subclass already binds `trait`, the first such subclass is returned.
    """
    entry = _bound_types.get(id(trait))
    if entry is None:
        with _bound_lock:
            entry = _bound_types.get(id(trait))
            if entry is None:
                # Registers itself through __init_subclass__. The registry keeps
                # the trait alive so its id() is never reused by another object.
                type(
                    f"{_type_label(trait)}Result",
                    (Result,),
                    {"__slots__": (), "trait": trait, "__module__": __name__},
                )
                entry = _bound_types[id(trait)]
    return entry[1]
