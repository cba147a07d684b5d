"""
Built-in checkers and combinator factories for typecheck.

Several names mirror the type expressions they build (string, any, tuple,
object, enum) and shadow builtins inside this module; Python keywords get
a trailing underscore (or_, and_, class_).
"""

from __future__ import annotations

import builtins
from collections.abc import Mapping
from typing import Any, Callable

from .checkers import ClassChecker, LiteralChecker, NominalChecker, PrimitiveChecker
from .core import (
    ArrayChecker,
    Checker,
    IntersectionChecker,
    ObjectChecker,
    OptionalWrapper,
    TupleChecker,
    UnionChecker,
)
from .types import UNDEFINED


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


string: Checker[str] = PrimitiveChecker(name="string", predicate=lambda x: isinstance(x, str))
number: Checker[float] = PrimitiveChecker(name="number", predicate=_is_number)
boolean: Checker[bool] = PrimitiveChecker(name="boolean", predicate=lambda x: isinstance(x, bool))
null: Checker[None] = PrimitiveChecker(name="null", predicate=lambda x: x is None)
undefined: Checker[Any] = PrimitiveChecker(name="undefined", predicate=lambda x: x is UNDEFINED)
any: Checker[Any] = PrimitiveChecker(name="any", predicate=lambda _: True)
unknown: Checker[Any] = PrimitiveChecker(name="unknown", predicate=lambda _: True)


def to_checker(v: Any) -> Checker[Any]:
    """
    Coerce shorthand to a checker.

    Conversion rules:
        Checker -> pass through
        dict -> object() with recursive conversion
        [x] -> array(x)
        str / bool / int / float -> string / boolean / number
        None / NoneType -> null
        other class -> class_()
    """
    if isinstance(v, Checker):
        return v

    if isinstance(v, OptionalWrapper):
        raise TypeError("optional() is only valid as an object field")

    if isinstance(v, dict):
        return object(v)

    if isinstance(v, list):
        if len(v) != 1:
            raise ValueError("List shorthand takes exactly one item checker")
        return array(v[0])

    if v is None or v is type(None):
        return null
    if v is str:
        return string
    if v is bool:
        return boolean
    if v is int or v is float:
        return number

    if isinstance(v, type):
        return class_(v)

    raise TypeError(f"Cannot convert {type(v).__name__} to checker")


def literal(value: Any) -> Checker[Any]:
    """
    Match exactly one value.

    Usage:
        literal("active")
        literal(42)
        literal(None)
    """
    return LiteralChecker(value=value)


def enum(*values: Any) -> Checker[Any]:
    """
    Match any one of several literal values.

    Usage:
        enum("red", "green", "blue")
    """
    return or_(*(literal(v) for v in values))


def optional(checker: Any) -> OptionalWrapper[Any]:
    """
    Allow an object field to be absent, validate it if present.

    Usage:
        object({"name": string, "email": optional(string)})
    """
    return OptionalWrapper(optional=to_checker(checker))


def array(items: Any) -> Checker[list[Any]]:
    """
    Sequence whose every element matches items.

    Usage:
        array(string)
        array({"id": number})
    """
    return ArrayChecker(items=to_checker(items))


def tuple(*items: Any) -> Checker[list[Any]]:
    """
    Fixed-length sequence with one checker per position.

    Usage:
        tuple(string, number)
    """
    return TupleChecker(items=builtins.tuple(to_checker(i) for i in items))


def object(fields: Mapping[str, Any]) -> Checker[dict[str, Any]]:
    """
    Mapping with declared fields. Undeclared keys are dropped on sanitize.

    Usage:
        object({
            "name": string,
            "age": number,
            "email": optional(string),
        })
    """
    converted: dict[str, Checker[Any] | OptionalWrapper[Any]] = {}

    for key, v in fields.items():
        if not isinstance(key, str):
            raise TypeError(f"Object field names must be strings, got {key!r}")
        converted[key] = v if isinstance(v, OptionalWrapper) else to_checker(v)

    return ObjectChecker(fields=converted)


def or_(*alternatives: Any) -> Checker[Any]:
    """
    Union: at least one alternative must pass.

    Usage:
        or_(string, number)
        string | number
    """
    if not alternatives:
        raise ValueError("or_() requires at least one checker")
    return UnionChecker(alternatives=builtins.tuple(to_checker(a) for a in alternatives))


def and_(*checkers: Any) -> Checker[Any]:
    """
    Intersection: every operand must pass. Later operands win on shared
    keys when sanitizing.

    Usage:
        and_(object({"id": number}), object({"name": string}))
    """
    if not checkers:
        raise ValueError("and_() requires at least one checker")
    return IntersectionChecker(checkers=builtins.tuple(to_checker(c) for c in checkers))


def nullable(checker: Any) -> Checker[Any]:
    """Shorthand for or_(checker, null)."""
    return or_(checker, null)


def class_(cls: type) -> Checker[Any]:
    """
    Instance of a class.

    Usage:
        class_(datetime)
    """
    if not isinstance(cls, type):
        raise TypeError(f"class_() expects a class, got {type(cls).__name__}")
    return ClassChecker(cls=cls)


def nominal(predicate: Callable[[Any], bool], name: str) -> Checker[Any]:
    """
    Named predicate for domain values such as ranged numbers or branded
    strings.

    Usage:
        nominal(lambda v: isinstance(v, int) and v > 0, "PositiveInt")
    """
    return NominalChecker(predicate=predicate, name=name)


def is_checker(v: Any) -> bool:
    return isinstance(v, Checker)


def is_optional_wrapper(v: Any) -> bool:
    return isinstance(v, OptionalWrapper)
