"""
Terminal checkers: primitives, literals, class instances and nominal types.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, TypeVar

from .context import ErrorContext
from .core import Checker
from .types import UNDEFINED, Predicate

T = TypeVar("T")

LITERAL_TYPES = (str, int, float, bool, type(None), type(UNDEFINED))


@dataclass(frozen=True, slots=True)
class PrimitiveChecker(Checker[T]):
    """Kind test such as "is a string". Sanitize is identity."""

    name: str
    predicate: Predicate

    def _check(self, value: Any, ctx: ErrorContext) -> bool:
        if self.predicate(value):
            return True
        ctx.add_error(f"expected {self.name}")
        return False

    def to_type_string(self, nested: bool = False) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class LiteralChecker(Checker[T]):
    """Exactly one value. Bools never match ints, None only matches None."""

    value: T

    def __post_init__(self) -> None:
        if not isinstance(self.value, LITERAL_TYPES):
            raise TypeError(
                f"Cannot use {type(self.value).__name__} as a literal value"
            )

    def _check(self, value: Any, ctx: ErrorContext) -> bool:
        if _strict_equals(value, self.value):
            return True
        ctx.add_error(f"expected {self.to_type_string()}")
        return False

    def _sanitize(self, value: Any) -> T:
        return self.value

    def to_type_string(self, nested: bool = False) -> str:
        return format_literal(self.value)


@dataclass(frozen=True, slots=True)
class ClassChecker(Checker[T]):
    """isinstance() test against a class."""

    cls: type

    def _check(self, value: Any, ctx: ErrorContext) -> bool:
        if isinstance(value, self.cls):
            return True
        ctx.add_error(f"expected {self.cls.__name__}")
        return False

    def to_type_string(self, nested: bool = False) -> str:
        return self.cls.__name__


@dataclass(frozen=True, slots=True)
class NominalChecker(Checker[T]):
    """
    Named predicate for values that don't decompose structurally.

    Usage:
        nominal(lambda v: isinstance(v, str) and "@" in v, "Email")
    """

    predicate: Predicate
    name: str

    def _check(self, value: Any, ctx: ErrorContext) -> bool:
        if self.predicate(value):
            return True
        ctx.add_error(f"expected {self.name}")
        return False

    def to_type_string(self, nested: bool = False) -> str:
        return self.name


def _strict_equals(value: Any, expected: Any) -> bool:
    if expected is None or expected is UNDEFINED:
        return value is expected
    if isinstance(expected, bool) or isinstance(value, bool):
        return value is expected
    if isinstance(expected, str):
        return isinstance(value, str) and value == expected
    return isinstance(value, (int, float)) and value == expected


def format_literal(value: Any) -> str:
    """Render a literal the way it is written in a type expression."""
    if isinstance(value, str):
        return f'"{value}"'
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isnan(value):
        return "NaN"
    if isinstance(value, float) and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
