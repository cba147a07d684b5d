"""
Type definitions for typecheck.

Provides the UNDEFINED sentinel, ParseError, the Sanitized marker,
a minimal Result type (Ok/Err) and type aliases.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, NoReturn, TypeVar

T = TypeVar("T")


class Undefined(Enum):
    """
    Sentinel for an absent value.

    A missing object key is seen by checkers as UNDEFINED, which keeps it
    apart from None (JSON null).
    """

    UNDEFINED = "undefined"

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = Undefined.UNDEFINED


# Type aliases
PathSegment = str | int
Path = tuple[PathSegment, ...]
Predicate = Callable[[Any], bool]
Message = str | Callable[[Any], str]


class ParseError(Exception):
    """
    A validation fault at a location inside the input.

    Args:
        field: Keys (str) and indices (int) leading to the fault.
               Empty for whole-value errors.
        message: Human-readable description, e.g. "expected string".
    """

    def __init__(self, field: Path, message: str):
        super().__init__(message)
        self.field: Path = tuple(field)
        self.message = message

    def __repr__(self) -> str:
        return f"ParseError(field={self.field!r}, message={self.message!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParseError):
            return (self.field, self.message) == (other.field, other.message)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.field, self.message))


class SchemaDepthError(ParseError):
    """Raised when validation nests deeper than the configured max_depth."""


@dataclass(frozen=True, slots=True)
class Sanitized(Generic[T]):
    """Output of Checker.sanitize(); marks a value as already cleaned."""

    value: T


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a sanitized value."""

    value: T
    errors: list[ParseError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Err:
    """Failure result containing every collected ParseError."""

    errors: list[ParseError]
    value: None = None

    @property
    def success(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Raise the first collected error."""
        raise self.errors[0]

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


ParseResult = Ok[T] | Err
