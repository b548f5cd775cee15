# fieldmatch/utils/constants.py
# Version: 1.0.0
# Shared literals for matchers, printers and the registry.
#
# Standard import pattern:
#   from fieldmatch.utils.constants import (
#       FLOAT_MODE_NATURAL,
#       FLOAT_MODE_BITWISE,
#       REASON_VALUE_MISMATCH,
#       REASON_LENGTH_MISMATCH,
#       REASON_PRESENCE_MISMATCH,
#   )


# ---------------------------------------------------------------------------
# SCALAR COMPARISON MODES
# ---------------------------------------------------------------------------
# natural -- Python equality operator. 0.0 == -0.0, NaN != NaN unless the
#            same object is compared with itself.
# bitwise -- big-endian IEEE 754 bit pattern. 0.0 != -0.0, identical NaN
#            payloads compare equal.
# No tolerance-based mode exists.

FLOAT_MODE_NATURAL: str = "natural"
FLOAT_MODE_BITWISE: str = "bitwise"
FLOAT_MODES: frozenset = frozenset({FLOAT_MODE_NATURAL, FLOAT_MODE_BITWISE})


# ---------------------------------------------------------------------------
# MISMATCH REASON CODES
# ---------------------------------------------------------------------------

REASON_VALUE_MISMATCH:    str = "VALUE_MISMATCH"
REASON_LENGTH_MISMATCH:   str = "LENGTH_MISMATCH"
REASON_PRESENCE_MISMATCH: str = "PRESENCE_MISMATCH"

MISMATCH_REASONS: frozenset = frozenset({
    REASON_VALUE_MISMATCH,
    REASON_LENGTH_MISMATCH,
    REASON_PRESENCE_MISMATCH,
})


# ---------------------------------------------------------------------------
# RENDERING TOKENS
# ---------------------------------------------------------------------------

DEFAULT_FIELD_SEPARATOR: str = ", "
ABSENT_TOKEN:            str = "<absent>"
PRESENT_TOKEN:           str = "<present>"
OPEN_BRACE:              str = "{ "
CLOSE_BRACE:             str = " }"
EMPTY_BODY:              str = "{ }"


# ---------------------------------------------------------------------------
# REGISTRY EVENT TYPES
# ---------------------------------------------------------------------------

EVENT_RECORD_DECLARED:    str = "RECORD_DECLARED"
EVENT_BUILD_STARTED:      str = "BUILD_STARTED"
EVENT_ARTIFACT_BUILT:     str = "ARTIFACT_BUILT"
EVENT_BUILD_COMPLETED:    str = "BUILD_COMPLETED"
EVENT_CONSTRUCTION_ERROR: str = "CONSTRUCTION_ERROR"
