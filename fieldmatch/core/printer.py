# =============================================================================
# fieldmatch v1.0.0 -- PRINTER GENERATOR
# File:   fieldmatch/core/printer.py
# =============================================================================
#
# SCOPE
# -----
# Builds a diagnostic Printer for one record type from its FieldAccessorSet.
# Only present fields are rendered (repeated fields: non-empty), in
# declaration order. Nested values delegate to the nested type's Printer.
#
# OUTPUT FORMAT
# -------------
#   Foo: { a: 1, bar: Bar: { aa: 5 }, items: [1, 2, 3] }
#   Foo: { }                      -- no present field
#   Foo: <absent>                 -- None passed instead of a record
#
# render() never raises for a legal record instance. Printers are immutable
# after construction and safe to call concurrently. No logging, no I/O.
#
# Canonical import:
#   from fieldmatch.core.printer import Printer, build_printer
#
# =============================================================================

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from fieldmatch.config.match_config import MatchConfig, require_valid_config
from fieldmatch.core.exceptions import ConstructionError, DependencyOrderError
from fieldmatch.core.field_accessor import FieldAccessorSet, FieldDescriptor, FieldKind
from fieldmatch.core.scalar_equality import render_scalar
from fieldmatch.utils.constants import (
    ABSENT_TOKEN,
    CLOSE_BRACE,
    EMPTY_BODY,
    OPEN_BRACE,
)

PrinterResolver = Callable[[str], "Printer"]


class Printer:
    """
    Diagnostic renderer for one record type.

    Build through build_printer() or MatcherRegistry, not directly.
    """

    def __init__(
        self,
        accessor_set: FieldAccessorSet,
        nested:       Mapping[str, "Printer"],
        config:       MatchConfig,
        resolver:     Optional[PrinterResolver],
    ) -> None:
        self._accessor_set = accessor_set
        self._nested = MappingProxyType(dict(nested))
        self._config = config
        self._resolver = resolver

    @property
    def type_name(self) -> str:
        return self._accessor_set.type_name

    @property
    def accessor_set(self) -> FieldAccessorSet:
        return self._accessor_set

    def __repr__(self) -> str:
        return f"Printer({self.type_name!r}, fields={list(self._accessor_set.names())})"

    def __call__(self, value: Any) -> str:
        return self.render(value)

    def render(self, value: Any) -> str:
        if value is None:
            return f"{self.type_name}: {ABSENT_TOKEN}"
        parts: List[str] = []
        for descriptor in self._accessor_set:
            if not descriptor.is_present(value):
                continue
            parts.append(f"{descriptor.name}: {self._render_field(descriptor, value)}")
        if not parts:
            return f"{self.type_name}: {EMPTY_BODY}"
        body = self._config.field_separator.join(parts)
        return f"{self.type_name}: {OPEN_BRACE}{body}{CLOSE_BRACE}"

    def render_sequence(self, values: Any) -> str:
        """Render a sequence of records of this type as a bracketed list."""
        return self._render_list(list(values), self.render)

    # -----------------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------------

    def _nested_printer(self, descriptor: FieldDescriptor) -> "Printer":
        if descriptor.forward:
            return self._resolver(descriptor.nested_type)
        return self._nested[descriptor.nested_type]

    def _render_field(self, descriptor: FieldDescriptor, record: Any) -> str:
        value = descriptor.extract(record)
        kind = descriptor.kind
        if kind is FieldKind.SCALAR:
            return render_scalar(value)
        if kind is FieldKind.NESTED:
            return self._nested_printer(descriptor).render(value)
        if kind is FieldKind.REPEATED_SCALAR:
            return self._render_list(list(value), render_scalar)
        return self._nested_printer(descriptor).render_sequence(value)

    def _render_list(self, items: List[Any], render_one: Callable[[Any], str]) -> str:
        limit = self._config.max_rendered_elements
        shown = items if limit is None else items[:limit]
        rendered = [render_one(item) for item in shown]
        hidden = len(items) - len(shown)
        if hidden:
            rendered.append(f"... (+{hidden} more)")
        return "[" + ", ".join(rendered) + "]"


# =============================================================================
# BUILDER
# =============================================================================

def build_printer(
    accessor_set:    FieldAccessorSet,
    nested_printers: Optional[Mapping[str, Printer]] = None,
    *,
    config:   Optional[MatchConfig] = None,
    resolver: Optional[PrinterResolver] = None,
) -> Printer:
    """
    Build the Printer for one record type.

    Same dependency rules as build_matcher(): every eagerly referenced nested
    printer must already exist in nested_printers; forward references need a
    resolver.

    Raises
    ------
    DependencyOrderError : An eagerly referenced nested printer is missing.
    ConstructionError    : Forward references declared without a resolver.
    ConfigViolationError : The config is invalid.
    """
    config = require_valid_config(config)
    available: Mapping[str, Printer] = nested_printers or {}
    selected: Dict[str, Printer] = {}

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

    return Printer(accessor_set, selected, config, resolver)
