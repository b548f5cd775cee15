# fieldmatch/config/__init__.py
# Version: 1.0.0

from fieldmatch.config.match_config import (
    DEFAULT_MATCH_CONFIG,
    ConfigValidationResult,
    ConfigViolation,
    MatchConfig,
    require_valid_config,
    validate_match_config,
)
from fieldmatch.config.exceptions import ConfigViolationError

__all__ = [
    "DEFAULT_MATCH_CONFIG",
    "MatchConfig",
    "ConfigViolation",
    "ConfigValidationResult",
    "validate_match_config",
    "require_valid_config",
    "ConfigViolationError",
]
