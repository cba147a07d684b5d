"""
Tests for primitive, literal, class and nominal checkers.
"""

from datetime import date, datetime

import pytest

from typecheck import (
    UNDEFINED,
    Checker,
    ErrorContext,
    ParseError,
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
    parse,
    string,
    to_checker,
    undefined,
    unknown,
)


def errors_of(checker, value):
    ctx = ErrorContext()
    assert not checker.check(value, ctx)
    return ctx.errors


class TestPrimitives:
    def test_string(self):
        assert string.check("hello")
        assert string.check("")
        assert not string.check(1)
        assert not string.check(None)

    def test_number(self):
        assert number.check(0)
        assert number.check(-5)
        assert number.check(3.14)
        assert not number.check("5")
        assert not number.check(True)

    def test_boolean(self):
        assert boolean.check(True)
        assert boolean.check(False)
        assert not boolean.check(0)
        assert not boolean.check("true")

    def test_null_and_undefined(self):
        assert null.check(None)
        assert not null.check(UNDEFINED)
        assert not null.check(0)
        assert not null.check("")

        assert undefined.check(UNDEFINED)
        assert not undefined.check(None)
        assert not undefined.check(0)

    def test_any_and_unknown_accept_everything(self):
        for value in ("x", 1, None, UNDEFINED, [1], {"a": 1}, Point(0, 0)):
            assert any.check(value)
            assert unknown.check(value)

    def test_sanitize_is_identity(self):
        payload = {"a": [1, 2]}
        assert any.sanitize(payload).value is payload
        assert string.sanitize("x").value == "x"
        assert number.sanitize(4.5).value == 4.5

    def test_error_messages(self):
        assert errors_of(string, 1) == [ParseError((), "expected string")]
        assert errors_of(number, "1") == [ParseError((), "expected number")]
        assert errors_of(boolean, 1) == [ParseError((), "expected boolean")]
        assert errors_of(null, "x") == [ParseError((), "expected null")]
        assert errors_of(undefined, None) == [ParseError((), "expected undefined")]

    def test_undefined_is_falsy(self):
        assert not UNDEFINED
        assert repr(UNDEFINED) == "UNDEFINED"


class TestLiteral:
    def test_string_literal(self):
        hi = literal("hi")
        assert hi.check("hi")
        assert not hi.check("bye")
        assert not hi.check(0)
        assert not hi.check(None)
        assert not hi.check(UNDEFINED)
        assert hi.sanitize("hi").value == "hi"

    def test_bool_never_matches_int(self):
        assert literal(1).check(1)
        assert not literal(1).check(True)
        assert not literal(True).check(1)
        assert literal(True).check(True)
        assert not literal(0).check(False)

    def test_number_literal_matches_int_and_float(self):
        assert literal(2).check(2.0)
        assert literal(2.5).check(2.5)
        assert not literal(2).check("2")

    def test_none_literal(self):
        assert literal(None).check(None)
        assert not literal(None).check(UNDEFINED)

    def test_error_message_uses_type_string(self):
        result = parse(literal("active"), "inactive")
        assert result.errors == [ParseError((), 'expected "active"')]

    def test_unsupported_literal(self):
        with pytest.raises(TypeError):
            literal([1, 2])


class TestEnum:
    def test_enum(self):
        colors = enum("red", "green", 2)
        assert colors.check("red")
        assert colors.check(2)
        assert not colors.check("blue")
        assert not colors.check(3)

    def test_enum_single_error(self):
        result = parse(object({"type": enum("user", "admin")}), {"type": "guest"})
        assert result.errors == [ParseError(("type",), 'expected "user" | "admin"')]


class TestNullable:
    def test_nullable(self):
        maybe = nullable(string)
        assert maybe.check("hello")
        assert maybe.check(None)
        assert not maybe.check(UNDEFINED)
        assert not maybe.check(123)


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


class TestClass:
    def test_instances(self):
        points = class_(Point)
        assert points.check(Point(1, 2))
        assert not points.check({"x": 1, "y": 2})
        assert not points.check(None)

    def test_subclass_instances(self):
        assert class_(date).check(datetime(2024, 1, 1))

    def test_sanitize_is_identity(self):
        p = Point(1, 2)
        assert class_(Point).sanitize(p).value is p

    def test_type_string_and_error(self):
        assert class_(Point).to_type_string() == "Point"
        result = parse(object({"origin": class_(Point)}), {"origin": "nowhere"})
        assert result.errors == [ParseError(("origin",), "expected Point")]

    def test_rejects_non_class(self):
        with pytest.raises(TypeError):
            class_(Point(1, 2))


class TestNominal:
    positive = nominal(
        lambda v: isinstance(v, (int, float)) and not isinstance(v, bool) and v > 0,
        "PositiveNumber",
    )

    def test_predicate(self):
        assert self.positive.check(5)
        assert not self.positive.check(0)
        assert not self.positive.check(-5)
        assert not self.positive.check("5")

    def test_sanitize_and_type_string(self):
        assert self.positive.sanitize(5).value == 5
        assert self.positive.to_type_string() == "PositiveNumber"

    def test_error_message(self):
        for value in (-5, 0, "not a number"):
            result = parse(self.positive, value)
            assert result.errors == [ParseError((), "expected PositiveNumber")]

    def test_in_array(self):
        result = parse(array(self.positive), [1, 5, -2, 10])
        assert result.errors == [ParseError((2,), "expected PositiveNumber")]


class TestToChecker:
    def test_passthrough(self):
        assert to_checker(string) is string

    def test_builtin_types(self):
        assert to_checker(str) is string
        assert to_checker(int) is number
        assert to_checker(float) is number
        assert to_checker(bool) is boolean
        assert to_checker(None) is null
        assert to_checker(type(None)) is null

    def test_dict_and_list(self):
        checker = to_checker({"name": str, "tags": [str]})
        assert checker.to_type_string() == "{ name: string; tags: string[]; }"
        assert checker.check({"name": "a", "tags": ["x"]})
        assert not checker.check({"name": "a", "tags": [1]})

    def test_class(self):
        assert to_checker(Point).check(Point(0, 0))

    def test_invalid(self):
        with pytest.raises(TypeError):
            to_checker(42)
        with pytest.raises(ValueError):
            to_checker([str, int])
        with pytest.raises(TypeError):
            to_checker(optional(string))

    def test_predicates(self):
        assert is_checker(string)
        assert is_checker(object({"x": string}))
        assert not is_checker("not a checker")
        assert not is_checker(None)
        assert not is_checker({})

        assert is_optional_wrapper(optional(string))
        assert not is_optional_wrapper(string)
        assert not is_optional_wrapper(None)

    def test_checkers_are_immutable(self):
        with pytest.raises(AttributeError):
            string.name = "text"  # type: ignore[misc]
        assert isinstance(string, Checker)
