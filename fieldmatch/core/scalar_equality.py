# fieldmatch/core/scalar_equality.py
# Exact scalar comparison and scalar rendering shared by matchers and printers.
#
# No tolerance-based comparison exists in this module: math.isclose(),
# numpy.allclose() and pytest.approx() are not used anywhere in fieldmatch.
# Two comparison modes are supported (see fieldmatch.utils.constants):
#   natural -- the scalar's own == operator.
#   bitwise -- floats compared by big-endian IEEE 754 byte sequence, which
#              separates +0.0 from -0.0 and equates identical NaN payloads.
# In both modes an object always equals itself, so every matcher is
# reflexive even for NaN-valued fields.

import struct
from typing import Any

import numpy as np

from fieldmatch.utils.constants import FLOAT_MODE_BITWISE


def float_bits(value: float) -> bytes:
    """Return the 8-byte big-endian IEEE 754 representation of value."""
    return struct.pack(">d", float(value))


def _is_float(value: Any) -> bool:
    return isinstance(value, (float, np.floating))


def _arrays_equal(expected: Any, actual: Any, float_mode: str) -> bool:
    left = np.asarray(expected)
    right = np.asarray(actual)
    if left.shape != right.shape:
        return False
    if (
        float_mode == FLOAT_MODE_BITWISE
        and (left.dtype.kind == "f" or right.dtype.kind == "f")
    ):
        return (
            left.dtype == right.dtype
            and np.ascontiguousarray(left).tobytes() == np.ascontiguousarray(right).tobytes()
        )
    return bool(np.array_equal(left, right))


def scalars_equal(expected: Any, actual: Any, float_mode: str) -> bool:
    """
    Exact equality of two scalar field values.

    numpy arrays held in a scalar field compare as whole values (shape and
    every element), never through the element-wise == operator.
    """
    if expected is actual:
        return True
    if isinstance(expected, np.ndarray) or isinstance(actual, np.ndarray):
        return _arrays_equal(expected, actual, float_mode)
    if float_mode == FLOAT_MODE_BITWISE and _is_float(expected) and _is_float(actual):
        return float_bits(expected) == float_bits(actual)
    return bool(expected == actual)


def render_scalar(value: Any) -> str:
    """Deterministic diagnostic text for a scalar value."""
    if isinstance(value, np.ndarray):
        return np.array2string(value, separator=", ")
    if isinstance(value, np.generic):
        return repr(value.item())
    return repr(value)
