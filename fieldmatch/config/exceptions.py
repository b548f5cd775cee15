# fieldmatch/config/exceptions.py
# Version: 1.0.0

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fieldmatch.config.match_config import ConfigValidationResult


class ConfigViolationError(Exception):
    """
    Raised when validate_match_config() reports violations.

    Attributes
    ----------
    result : ConfigValidationResult
    violations : tuple
    """

    def __init__(self, result: "ConfigValidationResult") -> None:
        self.result = result
        self.violations = result.violations
        lines = [
            f"Match configuration rejected: "
            f"{len(result.violations)} violation(s) detected.",
        ]
        for v in result.violations:
            lines.append(f"  [{v.rule_id}] {v.field_name}: {v.message}")
        super().__init__("\n".join(lines))
