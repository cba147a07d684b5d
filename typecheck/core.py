"""
Core checker classes for typecheck.

Provides the Checker base class, refinements, the optional marker and the
structural combinators (array, tuple, object, union, intersection).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar

from .context import ErrorContext, new_context
from .types import UNDEFINED, Message, Predicate, Sanitized

T = TypeVar("T")

DEFAULT_REFINE_MESSAGE = "invalid value"


class Checker(ABC, Generic[T]):
    """
    Immutable validation node.

    check() reports faults into an ErrorContext and returns a bool,
    sanitize() rebuilds an already-checked value, to_type_string() renders
    the schema. Subclasses implement _check() and, when they rebuild
    values, _sanitize().
    """

    __slots__ = ()

    def check(self, value: Any, ctx: ErrorContext | None = None) -> bool:
        """
        Validate a value.

        Args:
            value: The value to inspect
            ctx: Context receiving errors. Without one, errors go to a
                 scratch context and are discarded, so a bare check()
                 inside a predicate never reports into the enclosing parse().
        """
        if ctx is None:
            ctx = new_context()
        with ctx.descend():
            return self._check(value, ctx)

    def sanitize(self, value: T) -> Sanitized[T]:
        """Rebuild a value for which check() returned True."""
        return Sanitized(self._sanitize(value))

    @abstractmethod
    def _check(self, value: Any, ctx: ErrorContext) -> bool: ...

    def _sanitize(self, value: Any) -> Any:
        return value

    @abstractmethod
    def to_type_string(self, nested: bool = False) -> str:
        """
        Render the schema as a type expression.

        Args:
            nested: True when rendered inside another type expression, in
                    which case unions and intersections are parenthesized.
        """

    def refine(self, predicate: Predicate, message: Message | None = None) -> Refinement[T]:
        """
        Layer a predicate on top of this checker.

        Usage:
            string.refine(lambda s: len(s) > 0, "must not be empty")
            number.refine(lambda n: n > 0, lambda n: f"{n} is not positive")
        """
        return Refinement(base=self, predicate=predicate, message=message)

    def __or__(self, other: Any) -> UnionChecker:
        """
        Combine with OR logic.

        Usage:
            string | number
        """
        if not isinstance(other, Checker):
            return NotImplemented
        if isinstance(self, UnionChecker):
            return UnionChecker(alternatives=(*self.alternatives, other))
        return UnionChecker(alternatives=(self, other))

    def __and__(self, other: Any) -> IntersectionChecker:
        """
        Combine with AND logic.

        Usage:
            object({"id": number}) & object({"name": string})
        """
        if not isinstance(other, Checker):
            return NotImplemented
        if isinstance(self, IntersectionChecker):
            return IntersectionChecker(checkers=(*self.checkers, other))
        return IntersectionChecker(checkers=(self, other))

    def __str__(self) -> str:
        return self.to_type_string()


@dataclass(frozen=True, slots=True)
class Refinement(Checker[T]):
    """A base checker plus a predicate run only once the base passes."""

    base: Checker[T]
    predicate: Predicate
    message: Message | None = None

    def _check(self, value: Any, ctx: ErrorContext) -> bool:
        if not self.base.check(value, ctx):
            return False
        if self.predicate(value):
            return True
        ctx.add_error(self._message_for(value))
        return False

    def _message_for(self, value: Any) -> str:
        if self.message is None:
            return DEFAULT_REFINE_MESSAGE
        if callable(self.message):
            return self.message(value)
        return self.message

    def _sanitize(self, value: Any) -> Any:
        return self.base.sanitize(value).value

    def to_type_string(self, nested: bool = False) -> str:
        return self.base.to_type_string(nested=nested)


@dataclass(frozen=True, slots=True)
class OptionalWrapper(Generic[T]):
    """
    Marks an object field that may be absent.

    Not a checker: only ObjectChecker knows how to interpret it.
    """

    optional: Checker[T]


def _merge_passing(checkers: Iterable[Checker[Any]], value: Any) -> Any:
    """
    Sanitize value with every checker that accepts it.

    Plain dict outputs are shallow-merged in order, later ones winning on
    shared keys. Any other output is returned as soon as it is produced.
    """
    merged: dict[str, Any] = {}
    for checker in checkers:
        if not checker.check(value, new_context()):
            continue
        sanitized = checker.sanitize(value).value
        if type(sanitized) is not dict:
            return sanitized
        merged.update(sanitized)
    return merged


@dataclass(frozen=True, slots=True)
class ArrayChecker(Checker[list[T]]):
    """Homogeneous sequence. Stops at the first invalid element."""

    items: Checker[T]

    def _check(self, value: Any, ctx: ErrorContext) -> bool:
        if not isinstance(value, (list, tuple)):
            ctx.add_error("expected array")
            return False

        for i, item in enumerate(value):
            with ctx.at(i):
                if not self.items.check(item, ctx):
                    return False

        return True

    def _sanitize(self, value: Any) -> list[T]:
        return [self.items.sanitize(item).value for item in value]

    def to_type_string(self, nested: bool = False) -> str:
        return self.items.to_type_string(nested=True) + "[]"


@dataclass(frozen=True, slots=True)
class TupleChecker(Checker[list[Any]]):
    """Fixed-length positional sequence. Reports every bad position."""

    items: tuple[Checker[Any], ...]

    def _check(self, value: Any, ctx: ErrorContext) -> bool:
        if not isinstance(value, (list, tuple)):
            ctx.add_error("expected array")
            return False

        if len(value) != len(self.items):
            ctx.add_error(f"expected array of length {len(self.items)}")
            return False

        ok = True
        for i, (checker, item) in enumerate(zip(self.items, value)):
            with ctx.at(i):
                if not checker.check(item, ctx):
                    ok = False

        return ok

    def _sanitize(self, value: Any) -> list[Any]:
        return [
            checker.sanitize(item).value for checker, item in zip(self.items, value)
        ]

    def to_type_string(self, nested: bool = False) -> str:
        return (
            "[" + ", ".join(c.to_type_string(nested=True) for c in self.items) + "]"
        )


@dataclass(frozen=True, slots=True)
class ObjectChecker(Checker[dict[str, Any]]):
    """Keyed mapping with declared fields. Reports every bad field."""

    fields: dict[str, Checker[Any] | OptionalWrapper[Any]]

    def __hash__(self) -> int:
        return hash(tuple(self.fields.items()))

    def _check(self, value: Any, ctx: ErrorContext) -> bool:
        if not isinstance(value, Mapping):
            ctx.add_error("expected object")
            return False

        ok = True
        for key, entry in self.fields.items():
            item = value.get(key, UNDEFINED)
            if isinstance(entry, OptionalWrapper):
                if item is UNDEFINED:
                    continue
                entry = entry.optional

            with ctx.at(key):
                if not entry.check(item, ctx):
                    ok = False

        return ok

    def _sanitize(self, value: Any) -> dict[str, Any]:
        result: dict[str, Any] = {}

        for key, entry in self.fields.items():
            item = value.get(key, UNDEFINED)
            if isinstance(entry, OptionalWrapper):
                if item is UNDEFINED:
                    continue
                entry = entry.optional
            result[key] = entry.sanitize(item).value

        return result

    def to_type_string(self, nested: bool = False) -> str:
        if not self.fields:
            return "{}"

        parts = []
        for key, entry in self.fields.items():
            if isinstance(entry, OptionalWrapper):
                parts.append(f" {key}?: {entry.optional.to_type_string()};")
            else:
                parts.append(f" {key}: {entry.to_type_string()};")
        return "{" + "".join(parts) + " }"


@dataclass(frozen=True, slots=True)
class UnionChecker(Checker[Any]):
    """
    Passes when any alternative passes.

    Errors from failed alternatives are rolled back; when every alternative
    fails a single "expected A | B" error is reported instead.
    """

    alternatives: tuple[Checker[Any], ...]

    def _check(self, value: Any, ctx: ErrorContext) -> bool:
        for checker in self.alternatives:
            mark = ctx.mark()
            if checker.check(value, ctx):
                return True
            ctx.rollback(mark)

        ctx.add_error(f"expected {self.to_type_string()}")
        return False

    def _sanitize(self, value: Any) -> Any:
        return _merge_passing(self.alternatives, value)

    def to_type_string(self, nested: bool = False) -> str:
        result = " | ".join(c.to_type_string(nested=True) for c in self.alternatives)
        return f"({result})" if nested else result


@dataclass(frozen=True, slots=True)
class IntersectionChecker(Checker[Any]):
    """Passes when every operand passes. All operands always run."""

    checkers: tuple[Checker[Any], ...]

    def _check(self, value: Any, ctx: ErrorContext) -> bool:
        results = [checker.check(value, ctx) for checker in self.checkers]
        return all(results)

    def _sanitize(self, value: Any) -> Any:
        return _merge_passing(self.checkers, value)

    def to_type_string(self, nested: bool = False) -> str:
        result = " & ".join(c.to_type_string(nested=True) for c in self.checkers)
        return f"({result})" if nested else result
