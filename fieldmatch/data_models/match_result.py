# fieldmatch/data_models/match_result.py
# MatchResult and FieldMismatch data classes returned by Matcher.test().

import dataclasses
from dataclasses import dataclass
from typing import Optional

from fieldmatch.utils.constants import MISMATCH_REASONS, REASON_LENGTH_MISMATCH


@dataclass(frozen=True)
class FieldMismatch:
    """
    Record of a single declared field that differed.

    Fields:
      path        -- location relative to the matched record, e.g. "bar.aa",
                     "items[2]" or "repeated_bar[1].aa".
      field_name  -- name of the differing leaf field.
      reason      -- one of the REASON_* codes in fieldmatch.utils.constants.
      expected    -- rendered expected value.
      actual      -- rendered actual value.
      index       -- element index within the outermost repeated field on
                     the path. For a length mismatch of that field itself,
                     the first index held by only one side. None when no
                     repeated field is involved.
      detail      -- optional free-text elaboration.
    """
    path:       str
    field_name: str
    reason:     str
    expected:   str
    actual:     str
    index:      Optional[int] = None
    detail:     str = ""

    def __post_init__(self) -> None:
        if self.reason not in MISMATCH_REASONS:
            raise ValueError(
                f"FieldMismatch: reason must be one of {sorted(MISMATCH_REASONS)}; "
                f"got: {self.reason!r}"
            )

    def under(self, prefix: str) -> "FieldMismatch":
        """Return a copy whose path is nested below prefix."""
        if not self.path:
            path = prefix
        elif self.path.startswith("["):
            path = prefix + self.path
        else:
            path = prefix + "." + self.path
        return dataclasses.replace(self, path=path)

    def describe(self) -> str:
        # Empty path: length mismatch of a sequence compared via test_pairwise().
        location = self.path or "<sequence>"
        if self.reason == REASON_LENGTH_MISMATCH:
            text = f"{location}: length differs (expected {self.expected}, got {self.actual})"
        else:
            text = f"{location}: expected {self.expected}, got {self.actual}"
        if self.detail:
            text += f" [{self.detail}]"
        return text


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of one Matcher invocation.

    Fields:
      type_name   -- record type the matcher was built for.
      matched     -- True iff every declared field matched.
      mismatches  -- tuple of FieldMismatch, in declaration order. Empty on match.

    Truthiness follows `matched`, so a result can be asserted directly.
    """
    type_name:  str
    matched:    bool
    mismatches: tuple = ()

    def __bool__(self) -> bool:
        return self.matched

    @property
    def first_mismatch(self) -> Optional[FieldMismatch]:
        return self.mismatches[0] if self.mismatches else None

    def failed_fields(self) -> tuple:
        """Top-level declared field names that failed, de-duplicated, in order."""
        seen = []
        for mismatch in self.mismatches:
            head = mismatch.path.split(".", 1)[0].split("[", 1)[0]
            if head not in seen:
                seen.append(head)
        return tuple(seen)

    def explain(self) -> str:
        if self.matched:
            return ""
        lines = [f"{self.type_name}: {len(self.mismatches)} field mismatch(es)"]
        for mismatch in self.mismatches:
            lines.append("  " + mismatch.describe())
        return "\n".join(lines)
