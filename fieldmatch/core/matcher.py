# =============================================================================
# fieldmatch v1.0.0 -- MATCHER GENERATOR
# File:   fieldmatch/core/matcher.py
# =============================================================================
#
# SCOPE
# -----
# Builds a structural equality Matcher for one record type from its
# FieldAccessorSet. Nested and repeated-nested fields delegate to the
# already-built Matcher of the nested type; repeated fields are compared
# pairwise (element i against element i, equal length required).
#
# CONTRACT
# --------
#   - A record matches iff every declared field matches. Undeclared fields
#     are never read.
#   - Comparison is exact. See fieldmatch.core.scalar_equality.
#   - A mismatch is a normal result (MatchResult.matched is False), never
#     an exception.
#   - Matchers are immutable after construction and hold no per-call
#     state; concurrent use is safe.
#   - No logging, no I/O.
#
# Canonical import:
#   from fieldmatch.core.matcher import Matcher, build_matcher
#
# =============================================================================

from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from fieldmatch.config.match_config import MatchConfig, require_valid_config
from fieldmatch.core.exceptions import ConstructionError, DependencyOrderError
from fieldmatch.core.field_accessor import FieldAccessorSet, FieldDescriptor, FieldKind
from fieldmatch.core.scalar_equality import render_scalar, scalars_equal
from fieldmatch.data_models.match_result import FieldMismatch, MatchResult
from fieldmatch.utils.constants import (
    ABSENT_TOKEN,
    PRESENT_TOKEN,
    REASON_LENGTH_MISMATCH,
    REASON_PRESENCE_MISMATCH,
    REASON_VALUE_MISMATCH,
)

MatcherResolver = Callable[[str], "Matcher"]


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    return list(value)


def _presence_token(present: bool) -> str:
    return PRESENT_TOKEN if present else ABSENT_TOKEN


class Matcher:
    """
    Deep equality predicate for one record type.

    Build through build_matcher() or MatcherRegistry, not directly.
    """

    def __init__(
        self,
        accessor_set: FieldAccessorSet,
        nested:       Mapping[str, "Matcher"],
        config:       MatchConfig,
        resolver:     Optional[MatcherResolver],
    ) -> None:
        self._accessor_set = accessor_set
        self._nested = MappingProxyType(dict(nested))
        self._config = config
        self._resolver = resolver

    # -----------------------------------------------------------------------
    # Introspection
    # -----------------------------------------------------------------------

    @property
    def type_name(self) -> str:
        return self._accessor_set.type_name

    @property
    def accessor_set(self) -> FieldAccessorSet:
        return self._accessor_set

    @property
    def config(self) -> MatchConfig:
        return self._config

    def __repr__(self) -> str:
        return f"Matcher({self.type_name!r}, fields={list(self._accessor_set.names())})"

    # -----------------------------------------------------------------------
    # Public comparison API
    # -----------------------------------------------------------------------

    def test(self, expected: Any, actual: Any) -> MatchResult:
        """
        Compare two records of this type field by field.

        Returns
        -------
        MatchResult : matched is True iff every declared field matched.
                      mismatches lists each differing field (or only the
                      first, when config.stop_at_first is set).
        """
        if expected is actual:
            # Extractors may build a fresh value per read (properties,
            # protobuf getters, numpy elements), so identity is decided here.
            return MatchResult(type_name=self.type_name, matched=True)
        mismatches: List[FieldMismatch] = []
        for descriptor in self._accessor_set:
            found = self._compare_field(descriptor, expected, actual)
            if found:
                mismatches.extend(found)
                if self._config.stop_at_first:
                    break
        return MatchResult(
            type_name=self.type_name,
            matched=not mismatches,
            mismatches=tuple(mismatches),
        )

    def matches(self, expected: Any, actual: Any) -> bool:
        return self.test(expected, actual).matched

    def __call__(self, expected: Any, actual: Any) -> bool:
        return self.matches(expected, actual)

    def test_pairwise(self, expected: Sequence[Any], actual: Sequence[Any]) -> MatchResult:
        """
        Compare two sequences of records of this type element by element.

        Paths in the result are index-relative ("[1].aa").
        """
        mismatches = self._compare_records(_as_list(expected), _as_list(actual), field_name="")
        return MatchResult(
            type_name=self.type_name,
            matched=not mismatches,
            mismatches=tuple(mismatches),
        )

    def eq(self, expected: Any, printer: Any = None) -> "ExpectedRecord":
        """Bind an expected record; the result compares equal to matching actuals."""
        from fieldmatch.testing.assertions import ExpectedRecord

        return ExpectedRecord(self, expected, printer=printer)

    # -----------------------------------------------------------------------
    # Field comparison
    # -----------------------------------------------------------------------

    def _nested_matcher(self, descriptor: FieldDescriptor) -> "Matcher":
        if descriptor.forward:
            return self._resolver(descriptor.nested_type)
        return self._nested[descriptor.nested_type]

    def _compare_field(
        self,
        descriptor: FieldDescriptor,
        expected:   Any,
        actual:     Any,
    ) -> List[FieldMismatch]:
        expected_value = descriptor.extract(expected)
        actual_value = descriptor.extract(actual)
        if expected_value is actual_value:
            return []
        kind = descriptor.kind

        if kind is FieldKind.SCALAR:
            if scalars_equal(expected_value, actual_value, self._config.float_mode):
                return []
            return [FieldMismatch(
                path=descriptor.name,
                field_name=descriptor.name,
                reason=REASON_VALUE_MISMATCH,
                expected=render_scalar(expected_value),
                actual=render_scalar(actual_value),
            )]

        if kind is FieldKind.NESTED:
            # Protobuf getters return a default instance for an unset
            # submessage, so absence comes from the presence check.
            expected_present = expected_value is not None and descriptor.is_present(expected)
            actual_present = actual_value is not None and descriptor.is_present(actual)
            if not expected_present and not actual_present:
                return []
            if expected_present != actual_present:
                return [FieldMismatch(
                    path=descriptor.name,
                    field_name=descriptor.name,
                    reason=REASON_PRESENCE_MISMATCH,
                    expected=_presence_token(expected_present),
                    actual=_presence_token(actual_present),
                )]
            result = self._nested_matcher(descriptor).test(expected_value, actual_value)
            return [m.under(descriptor.name) for m in result.mismatches]

        expected_items = _as_list(expected_value)
        actual_items = _as_list(actual_value)
        if kind is FieldKind.REPEATED_SCALAR:
            found = self._compare_scalars(expected_items, actual_items, descriptor.name)
        else:
            found = self._nested_matcher(descriptor)._compare_records(
                expected_items, actual_items, descriptor.name
            )
        return [m.under(descriptor.name) for m in found]

    def _length_mismatch(
        self,
        expected_items: List[Any],
        actual_items:   List[Any],
        field_name:     str,
    ) -> FieldMismatch:
        common = min(len(expected_items), len(actual_items))
        side = "expected" if len(expected_items) > common else "actual"
        return FieldMismatch(
            path="",
            field_name=field_name,
            reason=REASON_LENGTH_MISMATCH,
            expected=str(len(expected_items)),
            actual=str(len(actual_items)),
            index=common,
            detail=f"first unpaired element is {side}[{common}]",
        )

    def _compare_scalars(
        self,
        expected_items: List[Any],
        actual_items:   List[Any],
        field_name:     str,
    ) -> List[FieldMismatch]:
        mismatches: List[FieldMismatch] = []
        if len(expected_items) != len(actual_items):
            mismatches.append(self._length_mismatch(expected_items, actual_items, field_name))
            if self._config.stop_at_first:
                return mismatches
        for index, (e, a) in enumerate(zip(expected_items, actual_items)):
            if scalars_equal(e, a, self._config.float_mode):
                continue
            mismatches.append(FieldMismatch(
                path=f"[{index}]",
                field_name=field_name,
                reason=REASON_VALUE_MISMATCH,
                expected=render_scalar(e),
                actual=render_scalar(a),
                index=index,
            ))
            if self._config.stop_at_first:
                break
        return mismatches

    def _compare_records(
        self,
        expected_items: List[Any],
        actual_items:   List[Any],
        field_name:     str,
    ) -> List[FieldMismatch]:
        """Pairwise comparison of records of this matcher's type."""
        mismatches: List[FieldMismatch] = []
        if len(expected_items) != len(actual_items):
            mismatches.append(self._length_mismatch(expected_items, actual_items, field_name))
            if self._config.stop_at_first:
                return mismatches
        for index, (e, a) in enumerate(zip(expected_items, actual_items)):
            result = self.test(e, a)
            if result.matched:
                continue
            for inner in result.mismatches:
                mismatches.append(_at_index(inner, index))
            if self._config.stop_at_first:
                break
        return mismatches


def _at_index(mismatch: FieldMismatch, index: int) -> FieldMismatch:
    # Outer repeated levels are applied last, so the outermost index wins.
    return dataclasses.replace(mismatch.under(f"[{index}]"), index=index)


# =============================================================================
# BUILDER
# =============================================================================

def build_matcher(
    accessor_set:    FieldAccessorSet,
    nested_matchers: Optional[Mapping[str, Matcher]] = None,
    *,
    config:   Optional[MatchConfig] = None,
    resolver: Optional[MatcherResolver] = None,
) -> Matcher:
    """
    Build the Matcher for one record type.

    Parameters
    ----------
    accessor_set    : Declared fields of the record type.
    nested_matchers : Already-built matchers keyed by type name. Must contain
                      every eagerly referenced nested type.
    config          : MatchConfig; validated. Defaults to DEFAULT_MATCH_CONFIG.
    resolver        : type name -> Matcher, consulted at call time for
                      forward references. Required if any field is forward.

    Raises
    ------
    DependencyOrderError : An eagerly referenced nested matcher is missing.
    ConstructionError    : Forward references declared without a resolver.
    ConfigViolationError : The config is invalid.
    """
    config = require_valid_config(config)
    available: Mapping[str, Matcher] = nested_matchers or {}
    selected: Dict[str, Matcher] = {}

    for descriptor in accessor_set:
        if not descriptor.kind.is_nested:
            continue
        if descriptor.forward:
            if resolver is None:
                raise ConstructionError(
                    "ConstructionError: record type '" + accessor_set.type_name
                    + "' field '" + descriptor.name
                    + "' is a forward reference but no resolver was supplied",
                    type_name=accessor_set.type_name,
                    field_name=descriptor.name,
                )
            continue
        nested = available.get(descriptor.nested_type)
        if nested is None:
            raise DependencyOrderError(
                accessor_set.type_name, descriptor.name, descriptor.nested_type
            )
        selected[descriptor.nested_type] = nested

    return Matcher(accessor_set, selected, config, resolver)
