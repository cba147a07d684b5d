"""
Schema operations for typecheck.

Provides parse(), parse_json() and to_pydantic().
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any, Callable
from typing import Literal as TypingLiteral
from typing import Optional as TypingOptional
from typing import Union as TypingUnion

from pydantic import AfterValidator, ConfigDict, create_model

from .checkers import ClassChecker, LiteralChecker, NominalChecker, PrimitiveChecker
from .context import error_context
from .core import (
    ArrayChecker,
    Checker,
    ObjectChecker,
    OptionalWrapper,
    Refinement,
    TupleChecker,
    UnionChecker,
)
from .types import UNDEFINED, Err, Ok, ParseError, ParseResult
from .validators import to_checker

logger = logging.getLogger(__name__)

JSON_DECODE_ERROR = "Failed to parse JSON"


def parse(schema: Any, value: Any) -> ParseResult[Any]:
    """
    Validate a value against a schema and sanitize it.

    Args:
        schema: A checker, or shorthand accepted by to_checker()
        value: The value to validate

    Returns:
        Ok(sanitized) if validation passes
        Err([ParseError, ...]) if validation fails

    Usage:
        schema = object({"name": string, "age": number})
        result = parse(schema, {"name": "Alice", "age": 30, "extra": True})
        result.unwrap()  # {"name": "Alice", "age": 30}
    """
    checker = to_checker(schema)

    with error_context() as ctx:
        passed = checker.check(value, ctx)

    if not passed:
        errors = list(ctx.errors)
        if not errors:
            # Third-party checkers may fail without reporting
            errors.append(ParseError((), f"expected {checker.to_type_string()}"))
        logger.debug(
            "Value rejected by %s with %d error(s)", checker.to_type_string(), len(errors)
        )
        return Err(errors)

    return Ok(checker.sanitize(value).value)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant {name}")


def parse_json(schema: Any, text: str | bytes) -> ParseResult[Any]:
    """
    Decode JSON text and parse() the result.

    Malformed text yields a single "Failed to parse JSON" error with an
    empty field path; the schema is not consulted. NaN and Infinity are
    rejected, as is nesting too deep for the decoder.
    """
    try:
        decoded = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        logger.debug("JSON decoding failed: %s", e)
        return Err([ParseError((), JSON_DECODE_ERROR)])

    return parse(schema, decoded)


def to_pydantic(name: str, schema: Any) -> type:
    """
    Compile an object schema to a Pydantic model.

    Args:
        name: Name of the generated model class
        schema: An object() checker or dict shorthand

    Returns:
        A Pydantic BaseModel subclass

    Usage:
        User = to_pydantic("User", object({
            "name": string,
            "email": optional(string),
        }))
        user = User(name="Alice")
    """
    checker = to_checker(schema)
    if not isinstance(checker, ObjectChecker):
        raise TypeError("Schema must be an object")

    return _compile_model(name, checker)


def _compile_model(name: str, checker: ObjectChecker) -> type:
    fields: dict[str, Any] = {}

    for key, entry in checker.fields.items():
        if isinstance(entry, OptionalWrapper):
            annotation = _to_annotation(entry.optional, f"{name}_{key}")
            fields[key] = (TypingOptional[annotation], None)
        else:
            fields[key] = (_to_annotation(entry, f"{name}_{key}"), ...)

    return create_model(
        name, __config__=ConfigDict(arbitrary_types_allowed=True), **fields
    )


def _to_annotation(checker: Checker[Any], name: str) -> Any:
    """Translate a checker into a type annotation Pydantic understands."""
    match checker:
        case PrimitiveChecker(name="string"):
            return str
        case PrimitiveChecker(name="number"):
            return float
        case PrimitiveChecker(name="boolean"):
            return bool
        case PrimitiveChecker(name="null"):
            return None
        case PrimitiveChecker(name="any" | "unknown"):
            return Any
        case LiteralChecker(value=value) if value is not UNDEFINED:
            return TypingLiteral[value]
        case ArrayChecker(items=items):
            return list[_to_annotation(items, name)]  # type: ignore[misc]
        case TupleChecker(items=items):
            return tuple[tuple(_to_annotation(c, name) for c in items)]  # type: ignore[misc]
        case ObjectChecker():
            return _compile_model(name, checker)
        case UnionChecker(alternatives=alternatives):
            return TypingUnion[tuple(_to_annotation(c, name) for c in alternatives)]
        case Refinement(base=base):
            return Annotated[
                _to_annotation(base, name),
                AfterValidator(_predicate_validator(checker.predicate, checker._message_for)),
            ]
        case NominalChecker(name=nominal_name):
            return Annotated[
                Any,
                AfterValidator(
                    _predicate_validator(checker.predicate, lambda _: f"expected {nominal_name}")
                ),
            ]
        case ClassChecker(cls=cls):
            return cls

    raise TypeError(f"Cannot compile {checker.to_type_string()} to a Pydantic type")


def _predicate_validator(
    predicate: Callable[[Any], bool], message: Callable[[Any], str]
) -> Callable[[Any], Any]:
    def validate(value: Any) -> Any:
        if not predicate(value):
            raise ValueError(message(value))
        return value

    return validate
