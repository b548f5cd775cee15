# fieldmatch/config/match_config.py
# Version: 1.0.0
# Comparison and rendering options shared by matchers and printers.

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Optional

from fieldmatch.config.exceptions import ConfigViolationError
from fieldmatch.utils.constants import (
    DEFAULT_FIELD_SEPARATOR,
    FLOAT_MODE_NATURAL,
    FLOAT_MODES,
)


@dataclass(frozen=True)
class MatchConfig:
    """
    Options applied uniformly to every artifact built from one configuration.

    Fields
    ------
    float_mode            : "natural" (Python ==) or "bitwise" (IEEE 754 bits).
    stop_at_first         : Stop comparing a record at its first differing field.
    max_rendered_elements : Truncate rendered repeated fields after this many
                            elements. None renders every element.
    field_separator       : Separator placed between rendered fields.
    """
    float_mode:            str           = FLOAT_MODE_NATURAL
    stop_at_first:         bool          = False
    max_rendered_elements: Optional[int] = None
    field_separator:       str           = DEFAULT_FIELD_SEPARATOR

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "MatchConfig":
        """Build a config from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ValueError(
                f"MatchConfig: unknown option(s) {unknown}; known options: {sorted(known)}"
            )
        return require_valid_config(cls(**dict(mapping)))


@dataclass(frozen=True)
class ConfigViolation:
    rule_id:        str
    field_name:     str
    observed_value: object
    message:        str


@dataclass(frozen=True)
class ConfigValidationResult:
    is_valid:         bool
    violations:       tuple
    validated_fields: tuple


def validate_match_config(config: MatchConfig) -> ConfigValidationResult:
    violations: List[ConfigViolation] = []
    validated_fields: List[str] = []

    validated_fields.append("float_mode")
    if config.float_mode not in FLOAT_MODES:
        violations.append(ConfigViolation("CFG-01", "float_mode", config.float_mode,
            f"float_mode must be one of {sorted(FLOAT_MODES)}; got: {config.float_mode!r}."))

    validated_fields.append("stop_at_first")
    if not isinstance(config.stop_at_first, bool):
        violations.append(ConfigViolation("CFG-02", "stop_at_first", config.stop_at_first,
            f"stop_at_first must be a bool; got: {type(config.stop_at_first).__name__}."))

    validated_fields.append("max_rendered_elements")
    limit = config.max_rendered_elements
    if limit is not None:
        if isinstance(limit, bool) or not isinstance(limit, int):
            violations.append(ConfigViolation("CFG-03", "max_rendered_elements", limit,
                f"max_rendered_elements must be None or an int; got: {type(limit).__name__}."))
        elif limit < 1:
            violations.append(ConfigViolation("CFG-03", "max_rendered_elements", limit,
                f"max_rendered_elements must be >= 1; got: {limit}."))

    validated_fields.append("field_separator")
    if not isinstance(config.field_separator, str) or not config.field_separator:
        violations.append(ConfigViolation("CFG-04", "field_separator", config.field_separator,
            "field_separator must be a non-empty string."))

    return ConfigValidationResult(
        is_valid=len(violations) == 0,
        violations=tuple(violations),
        validated_fields=tuple(validated_fields),
    )


def require_valid_config(config: Optional[MatchConfig]) -> MatchConfig:
    """Return the config (or the default) if valid; raise ConfigViolationError otherwise."""
    if config is None:
        return DEFAULT_MATCH_CONFIG
    if not isinstance(config, MatchConfig):
        raise TypeError(f"config must be a MatchConfig; got: {type(config).__name__}")
    result = validate_match_config(config)
    if not result.is_valid:
        raise ConfigViolationError(result)
    return config


DEFAULT_MATCH_CONFIG: MatchConfig = MatchConfig()
