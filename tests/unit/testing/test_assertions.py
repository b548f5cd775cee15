# =============================================================================
# fieldmatch -- ASSERTION HELPERS AND PYTEST PLUGIN -- Unit Tests
# File:   tests/unit/testing/test_assertions.py
# =============================================================================

from dataclasses import dataclass, field
from typing import List, Optional
from unittest import mock

import pytest

from fieldmatch.core import MatcherRegistry, nested_field, repeated_field, scalar_field
from fieldmatch.testing import (
    ExpectedRecord,
    assert_matches,
    assert_record_matches,
    expect_record,
    failure_message,
)
from fieldmatch.testing.plugin import pytest_assertrepr_compare


@dataclass
class Point:
    x: Optional[int] = None
    y: Optional[int] = None


@dataclass
class Shape:
    name: Optional[str] = None
    origin: Optional[Point] = None
    tags: List[str] = field(default_factory=list)


@pytest.fixture
def shapes() -> MatcherRegistry:
    reg = MatcherRegistry()
    reg.declare_record(
        "Shape", scalar_field("name"), nested_field("origin", "Point"), repeated_field("tags"),
    )
    reg.declare_record("Point", scalar_field("x"), scalar_field("y"))
    reg.build()
    return reg


# ---------------------------------------------------------------------------
# SECTION 1 -- assert_matches
# ---------------------------------------------------------------------------

class TestAssertMatches:

    def test_match_returns_result(self, shapes):
        result = assert_matches(shapes.matcher("Point"), Point(1, 2), Point(1, 2))
        assert result.matched

    def test_mismatch_raises_with_rendered_records(self, shapes):
        with pytest.raises(AssertionError) as info:
            assert_matches(
                shapes.matcher("Point"), Point(1, 2), Point(1, 3), shapes.printer("Point"),
            )
        assert str(info.value) == (
            "Point: 1 field mismatch(es)\n"
            "  y: expected 2, got 3\n"
            "Expected: Point: { x: 1, y: 2 }\n"
            "Actual:   Point: { x: 1, y: 3 }"
        )

    def test_without_printer_uses_repr(self, shapes):
        with pytest.raises(AssertionError, match=r"Expected: Point\(x=1, y=2\)"):
            assert_matches(shapes.matcher("Point"), Point(1, 2), Point(0, 2))

    def test_registry_shortcut(self, shapes):
        expected = Shape(name="sq", origin=Point(0, 0), tags=["a"])
        actual = Shape(name="sq", origin=Point(0, 1), tags=["a"])
        with pytest.raises(AssertionError) as info:
            assert_record_matches(shapes, "Shape", expected, actual)
        message = str(info.value)
        assert "origin.y: expected 0, got 1" in message
        assert "Actual:   Shape: { name: 'sq', origin: Point: { x: 0, y: 1 }, tags: ['a'] }" in message

    def test_failure_message_layout(self, shapes):
        result = shapes.test("Point", Point(1), Point(2))
        lines = failure_message(result, Point(1), Point(2), shapes.printer("Point")).splitlines()
        assert lines[0] == "Point: 1 field mismatch(es)"
        assert lines[-2] == "Expected: Point: { x: 1 }"
        assert lines[-1] == "Actual:   Point: { x: 2 }"


# ---------------------------------------------------------------------------
# SECTION 2 -- ExpectedRecord
# ---------------------------------------------------------------------------

class TestExpectedRecord:

    def test_equality_with_matching_actual(self, shapes):
        expected = shapes.matcher("Point").eq(Point(1, 2))
        assert Point(1, 2) == expected
        assert expected == Point(1, 2)
        assert expected != Point(1, 3)

    def test_ignores_undeclared_attributes(self, shapes):
        actual = Point(1, 2)
        actual.extra = "ignored"
        assert expect_record(shapes, "Point", Point(1, 2)) == actual

    def test_explain(self, shapes):
        expected = expect_record(shapes, "Point", Point(1, 2))
        assert expected.explain(Point(1, 2)) == ""
        assert "y: expected 2, got 5" in expected.explain(Point(1, 5))

    def test_repr_uses_printer(self, shapes):
        assert repr(expect_record(shapes, "Point", Point(1))) == "EqPoint(Point: { x: 1 })"

    def test_unhashable(self, shapes):
        with pytest.raises(TypeError):
            hash(expect_record(shapes, "Point", Point(1)))

    def test_printer_type_must_agree(self, shapes):
        with pytest.raises(ValueError, match="cannot describe"):
            ExpectedRecord(shapes.matcher("Point"), Point(1), shapes.printer("Shape"))

    def test_two_bound_records_not_compared_structurally(self, shapes):
        left = expect_record(shapes, "Point", Point(1))
        right = expect_record(shapes, "Point", Point(1))
        assert left != right

    def test_mock_call_assertion(self, shapes):
        sink = mock.Mock()
        sink.send(Shape(name="tri", tags=["x", "y"]))
        sink.send.assert_called_once_with(
            expect_record(shapes, "Shape", Shape(name="tri", tags=["x", "y"]))
        )

    def test_mock_call_assertion_failure(self, shapes):
        sink = mock.Mock()
        sink.send(Shape(name="tri", tags=["y", "x"]))
        with pytest.raises(AssertionError):
            sink.send.assert_called_once_with(
                expect_record(shapes, "Shape", Shape(name="tri", tags=["x", "y"]))
            )


# ---------------------------------------------------------------------------
# SECTION 3 -- pytest_assertrepr_compare
# ---------------------------------------------------------------------------

class TestAssertReprHook:

    def test_explains_mismatch_either_side(self, shapes):
        expected = expect_record(shapes, "Point", Point(1, 2))
        right = pytest_assertrepr_compare(None, "==", Point(1, 3), expected)
        left = pytest_assertrepr_compare(None, "==", expected, Point(1, 3))
        assert right == left
        assert right[0] == "Point records differ"
        assert "  y: expected 2, got 3" in right

    def test_no_output_on_match(self, shapes):
        expected = expect_record(shapes, "Point", Point(1, 2))
        assert pytest_assertrepr_compare(None, "==", Point(1, 2), expected) is None

    def test_other_operators_ignored(self, shapes):
        expected = expect_record(shapes, "Point", Point(1, 2))
        assert pytest_assertrepr_compare(None, "!=", Point(1, 3), expected) is None

    def test_unrelated_operands_ignored(self):
        assert pytest_assertrepr_compare(None, "==", 1, 2) is None
