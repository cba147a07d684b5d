"""
typecheck - composable runtime schema validation.

Usage:
    from typecheck import object, optional, string, number, array, parse

    schema = object({
        "name": string,
        "age": number.refine(lambda n: n >= 0, "must not be negative"),
        "tags": array(string),
        "email": optional(string),
    })

    result = parse(schema, data)
    if result.success:
        result.value        # sanitized: declared keys only, declared order
    else:
        result.errors       # [ParseError(field=("age",), message=...), ...]

    schema.to_type_string()
    # '{ name: string; age: number; tags: string[]; email?: string; }'
"""

from .context import (
    ErrorContext,
    active_context,
    error_context,
    get_max_depth,
    validation_context,
)
from .core import Checker, OptionalWrapper
from .schema import parse, parse_json, to_pydantic
from .types import (
    UNDEFINED,
    Err,
    Ok,
    ParseError,
    ParseResult,
    Path,
    Sanitized,
    SchemaDepthError,
)
from .validators import (
    and_,
    any,
    array,
    boolean,
    class_,
    enum,
    is_checker,
    is_optional_wrapper,
    literal,
    nominal,
    null,
    nullable,
    number,
    object,
    optional,
    or_,
    string,
    to_checker,
    tuple,
    undefined,
    unknown,
)

__all__ = [
    # Result types
    "Ok",
    "Err",
    "ParseResult",
    "ParseError",
    "SchemaDepthError",
    "Sanitized",
    "Path",
    "UNDEFINED",
    # Core
    "Checker",
    "OptionalWrapper",
    "to_checker",
    "is_checker",
    "is_optional_wrapper",
    # Primitives
    "string",
    "number",
    "boolean",
    "null",
    "undefined",
    "any",
    "unknown",
    # Combinators
    "literal",
    "enum",
    "optional",
    "array",
    "tuple",
    "object",
    "or_",
    "and_",
    "nullable",
    "class_",
    "nominal",
    # Schema
    "parse",
    "parse_json",
    "to_pydantic",
    # Context
    "ErrorContext",
    "error_context",
    "active_context",
    "validation_context",
    "get_max_depth",
]
