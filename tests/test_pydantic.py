"""
Tests for to_pydantic().
"""

from datetime import date

import pytest
from pydantic import ValidationError

from typecheck import (
    and_,
    array,
    boolean,
    class_,
    enum,
    nominal,
    nullable,
    number,
    object,
    optional,
    string,
    to_pydantic,
    tuple,
    undefined,
)


class TestToPydantic:
    def test_simple_model(self):
        User = to_pydantic("User", object({"name": string, "age": number}))
        user = User(name="Alice", age=30)
        assert user.name == "Alice"
        assert user.age == 30
        assert User.__name__ == "User"

    def test_optional_fields(self):
        User = to_pydantic("User", object({"name": string, "email": optional(string)}))
        user = User(name="Alice")
        assert user.email is None

    def test_required_fields(self):
        User = to_pydantic("User", {"name": str})
        with pytest.raises(ValidationError):
            User()

    def test_nested_and_collections(self):
        Order = to_pydantic(
            "Order",
            object(
                {
                    "customer": object({"id": number, "vip": boolean}),
                    "items": array(string),
                    "position": tuple(number, number),
                    "note": nullable(string),
                }
            ),
        )
        order = Order(customer={"id": 1, "vip": False}, items=["a"], position=[1, 2], note=None)
        assert order.customer.vip is False
        assert order.items == ["a"]
        assert order.position == (1, 2)

        with pytest.raises(ValidationError):
            Order(customer={"id": 1}, items=[], position=[1, 2], note=None)

    def test_literals(self):
        Job = to_pydantic("Job", object({"state": enum("queued", "done")}))
        assert Job(state="done").state == "done"
        with pytest.raises(ValidationError):
            Job(state="lost")

    def test_refinements(self):
        Account = to_pydantic(
            "Account",
            object({"balance": number.refine(lambda n: n >= 0, "must not be negative")}),
        )
        assert Account(balance=10).balance == 10
        with pytest.raises(ValidationError, match="must not be negative"):
            Account(balance=-1)

    def test_nominal_and_class(self):
        Event = to_pydantic(
            "Event",
            object(
                {
                    "slug": nominal(lambda v: isinstance(v, str) and v.islower(), "Slug"),
                    "day": class_(date),
                }
            ),
        )
        event = Event(slug="launch", day=date(2024, 1, 1))
        assert event.day == date(2024, 1, 1)
        with pytest.raises(ValidationError, match="expected Slug"):
            Event(slug="Launch", day=date(2024, 1, 1))

    def test_unsupported(self):
        with pytest.raises(TypeError):
            to_pydantic("Bad", array(string))
        with pytest.raises(TypeError):
            to_pydantic("Bad", object({"x": and_(object({}), object({}))}))
        with pytest.raises(TypeError):
            to_pydantic("Bad", object({"x": undefined}))
