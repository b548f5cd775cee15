"""
Test-side helpers for fieldmatch matchers and printers.
"""

from .assertions import (
    ExpectedRecord,
    assert_matches,
    assert_record_matches,
    expect_record,
    failure_message,
)

__all__ = [
    "ExpectedRecord",
    "assert_matches",
    "assert_record_matches",
    "expect_record",
    "failure_message",
]
