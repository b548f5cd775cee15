# =============================================================================
# fieldmatch -- SCALAR EQUALITY -- Unit Tests
# File:   tests/unit/core/test_scalar_equality.py
# =============================================================================

import math

import numpy as np
import pytest

from fieldmatch.core.scalar_equality import float_bits, render_scalar, scalars_equal
from fieldmatch.utils.constants import FLOAT_MODE_BITWISE, FLOAT_MODE_NATURAL


# ---------------------------------------------------------------------------
# float_bits
# ---------------------------------------------------------------------------

class TestFloatBits:

    def test_eight_bytes_big_endian(self):
        assert float_bits(1.0) == b"\x3f\xf0\x00\x00\x00\x00\x00\x00"

    def test_signed_zero_differs(self):
        assert float_bits(0.0) != float_bits(-0.0)

    def test_accepts_numpy_float(self):
        assert float_bits(np.float64(2.5)) == float_bits(2.5)


# ---------------------------------------------------------------------------
# Natural mode
# ---------------------------------------------------------------------------

class TestNaturalMode:

    @pytest.mark.parametrize("expected, actual", [
        (1, 1),
        ("abc", "abc"),
        (b"\x00\x01", b"\x00\x01"),
        (None, None),
        (True, True),
        (0.0, -0.0),
    ])
    def test_equal_values(self, expected, actual):
        assert scalars_equal(expected, actual, FLOAT_MODE_NATURAL) is True

    @pytest.mark.parametrize("expected, actual", [
        (1, 2),
        ("abc", "abd"),
        (None, 0),
        (0.1 + 0.2, 0.3),
    ])
    def test_unequal_values(self, expected, actual):
        assert scalars_equal(expected, actual, FLOAT_MODE_NATURAL) is False

    def test_no_tolerance(self):
        assert scalars_equal(1.0, math.nextafter(1.0, 2.0), FLOAT_MODE_NATURAL) is False

    def test_same_nan_object_is_equal(self):
        nan = float("nan")
        assert scalars_equal(nan, nan, FLOAT_MODE_NATURAL) is True

    def test_distinct_nan_objects_differ(self):
        assert scalars_equal(float("nan"), float("nan"), FLOAT_MODE_NATURAL) is False


# ---------------------------------------------------------------------------
# Bitwise mode
# ---------------------------------------------------------------------------

class TestBitwiseMode:

    def test_signed_zero_differs(self):
        assert scalars_equal(0.0, -0.0, FLOAT_MODE_BITWISE) is False

    def test_distinct_nan_objects_equal(self):
        assert scalars_equal(float("nan"), float("nan"), FLOAT_MODE_BITWISE) is True

    def test_non_float_values_use_equality(self):
        assert scalars_equal(3, 3, FLOAT_MODE_BITWISE) is True
        assert scalars_equal("x", "y", FLOAT_MODE_BITWISE) is False

    def test_int_and_float_compared_naturally(self):
        # Bit patterns only apply when both sides are floats.
        assert scalars_equal(1, 1.0, FLOAT_MODE_BITWISE) is True


# ---------------------------------------------------------------------------
# numpy values
# ---------------------------------------------------------------------------

class TestNumpyValues:

    def test_equal_arrays(self):
        assert scalars_equal(np.array([1, 2, 3]), np.array([1, 2, 3]), FLOAT_MODE_NATURAL)

    def test_element_difference(self):
        assert not scalars_equal(np.array([1, 2, 3]), np.array([1, 2, 4]), FLOAT_MODE_NATURAL)

    def test_shape_difference(self):
        assert not scalars_equal(np.zeros((2, 2)), np.zeros(4), FLOAT_MODE_NATURAL)

    def test_array_against_list(self):
        assert scalars_equal(np.array([1, 2]), [1, 2], FLOAT_MODE_NATURAL)

    def test_bitwise_float_arrays_check_dtype(self):
        left = np.array([1.0, 2.0], dtype=np.float64)
        right = np.array([1.0, 2.0], dtype=np.float32)
        assert scalars_equal(left, right, FLOAT_MODE_NATURAL) is True
        assert scalars_equal(left, right, FLOAT_MODE_BITWISE) is False

    def test_bitwise_float_arrays_signed_zero(self):
        assert not scalars_equal(np.array([0.0]), np.array([-0.0]), FLOAT_MODE_BITWISE)

    def test_numpy_scalar_against_python_scalar(self):
        assert scalars_equal(np.int64(5), 5, FLOAT_MODE_NATURAL) is True


# ---------------------------------------------------------------------------
# render_scalar
# ---------------------------------------------------------------------------

class TestRenderScalar:

    @pytest.mark.parametrize("value, text", [
        (5, "5"),
        ("abc", "'abc'"),
        (None, "None"),
        (1.5, "1.5"),
        (b"\x01", "b'\\x01'"),
    ])
    def test_python_values(self, value, text):
        assert render_scalar(value) == text

    def test_numpy_scalar_rendered_as_python_value(self):
        assert render_scalar(np.int64(7)) == "7"

    def test_numpy_array(self):
        assert render_scalar(np.array([1, 2, 3])) == "[1, 2, 3]"
