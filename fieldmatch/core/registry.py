# =============================================================================
# fieldmatch v1.0.0 -- MATCHER REGISTRY
# File:   fieldmatch/core/registry.py
# =============================================================================
#
# SCOPE
# -----
# Holds every declared record type of a schema and builds their Matchers
# and Printers once, in topological order of the "contains a field of type"
# relation. Nested types are always built before their containers.
#
# LIFECYCLE
# ---------
#   1. declare() record types, in any order.
#   2. build() -- validates references, orders, builds, freezes.
#      Any ConstructionError aborts the whole build; no artifact of a failed
#      build is ever visible.
#   3. matcher() / printer() lookups. The registry never changes again, so
#      artifacts may be used concurrently.
#
# FORWARD REFERENCES
# ------------------
# A nested field declared with forward=True is left out of the ordering and
# resolved lazily through the frozen registry at call time. This is the only
# way to describe recursive record types.
#
# TIMESTAMPS
# ----------
# declare(), declare_record() and build() accept the event timestamp from
# the caller and pass it to EventLogger unchanged. When it is omitted the
# registry stamps the event with datetime.now(timezone.utc). This is the
# only place in fieldmatch that reads the wall clock; EventLogger itself
# never does.
#
# =============================================================================

from __future__ import annotations

from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from fieldmatch.config.match_config import MatchConfig, require_valid_config
from fieldmatch.core.exceptions import (
    ConstructionError,
    CyclicDependencyError,
    DependencyOrderError,
    FieldDeclarationError,
    RegistryStateError,
)
from fieldmatch.core.field_accessor import FieldAccessorSet, FieldDescriptor, declare_record
from fieldmatch.core.logging_layer import EventLogger
from fieldmatch.core.matcher import Matcher, build_matcher
from fieldmatch.core.printer import Printer, build_printer
from fieldmatch.data_models.match_result import MatchResult
from fieldmatch.utils.constants import (
    EVENT_ARTIFACT_BUILT,
    EVENT_BUILD_COMPLETED,
    EVENT_BUILD_STARTED,
    EVENT_CONSTRUCTION_ERROR,
    EVENT_RECORD_DECLARED,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MatcherRegistry:
    """
    Registry of record types keyed by type name.

    Parameters
    ----------
    config       : MatchConfig applied to every artifact. Validated here.
    event_logger : Destination for construction events. A private
                   EventLogger is created when omitted.
    """

    def __init__(
        self,
        config:       Optional[MatchConfig] = None,
        event_logger: Optional[EventLogger] = None,
    ) -> None:
        self._config: MatchConfig = require_valid_config(config)
        self._events: EventLogger = event_logger if event_logger is not None else EventLogger()
        self._declared: Dict[str, FieldAccessorSet] = {}
        self._matchers: Mapping[str, Matcher] = MappingProxyType({})
        self._printers: Mapping[str, Printer] = MappingProxyType({})
        self._order: Tuple[str, ...] = ()
        self._built: bool = False

    # -----------------------------------------------------------------------
    # Declaration
    # -----------------------------------------------------------------------

    def declare(
        self,
        accessor_set: FieldAccessorSet,
        timestamp: Optional[datetime] = None,
    ) -> FieldAccessorSet:
        if not isinstance(accessor_set, FieldAccessorSet):
            raise FieldDeclarationError(
                "FieldDeclarationError: declare() expects a FieldAccessorSet; got: "
                + repr(accessor_set)
            )
        if self._built:
            raise RegistryStateError(
                "RegistryStateError: cannot declare '" + accessor_set.type_name
                + "' after the registry has been built",
                type_name=accessor_set.type_name,
            )
        if accessor_set.type_name in self._declared:
            raise FieldDeclarationError(
                "FieldDeclarationError: record type '" + accessor_set.type_name
                + "' is already declared",
                type_name=accessor_set.type_name,
            )
        self._declared[accessor_set.type_name] = accessor_set
        self._events.log_event(
            EVENT_RECORD_DECLARED,
            {"type_name": accessor_set.type_name, "fields": len(accessor_set)},
            timestamp or _now(),
        )
        return accessor_set

    def declare_record(
        self,
        type_name: str,
        *fields: FieldDescriptor,
        timestamp: Optional[datetime] = None,
    ) -> FieldAccessorSet:
        return self.declare(declare_record(type_name, *fields), timestamp=timestamp)

    # -----------------------------------------------------------------------
    # Ordering
    # -----------------------------------------------------------------------

    def build_order(self) -> Tuple[str, ...]:
        """
        Topological order of declared types, nested before container.

        Ties are broken by declaration order, so the result is deterministic.

        Raises
        ------
        DependencyOrderError  : A field references an undeclared type.
        CyclicDependencyError : Eager references form a cycle.
        """
        self._check_references()

        placed: List[str] = []
        placed_set = set()
        pending = list(self._declared)
        while pending:
            ready = next(
                (
                    name for name in pending
                    if all(dep in placed_set for dep in self._declared[name].dependencies())
                ),
                None,
            )
            if ready is None:
                raise CyclicDependencyError(self._find_cycle(pending))
            pending.remove(ready)
            placed.append(ready)
            placed_set.add(ready)
        return tuple(placed)

    def _check_references(self) -> None:
        for accessor_set in self._declared.values():
            for descriptor in accessor_set:
                if descriptor.kind.is_nested and descriptor.nested_type not in self._declared:
                    raise DependencyOrderError(
                        accessor_set.type_name, descriptor.name, descriptor.nested_type
                    )

    def _find_cycle(self, pending: List[str]) -> List[str]:
        # Every pending type has an unplaced eager dependency, so following
        # such dependencies from any pending type must revisit a type.
        pending_set = set(pending)
        path: List[str] = []
        current = pending[0]
        while current not in path:
            path.append(current)
            current = next(
                dep for dep in self._declared[current].dependencies() if dep in pending_set
            )
        return path[path.index(current):]

    # -----------------------------------------------------------------------
    # Build
    # -----------------------------------------------------------------------

    def build(self, timestamp: Optional[datetime] = None) -> Tuple[str, ...]:
        """
        Build every Matcher and Printer and freeze the registry.

        Returns the build order. Calling build() again returns the same order.
        """
        if self._built:
            return self._order

        ts = timestamp or _now()
        self._events.log_event(EVENT_BUILD_STARTED, {"types": len(self._declared)}, ts)

        matchers: Dict[str, Matcher] = {}
        printers: Dict[str, Printer] = {}
        try:
            order = self.build_order()
            for type_name in order:
                accessor_set = self._declared[type_name]
                matchers[type_name] = build_matcher(
                    accessor_set, matchers, config=self._config, resolver=self._resolve_matcher,
                )
                printers[type_name] = build_printer(
                    accessor_set, printers, config=self._config, resolver=self._resolve_printer,
                )
                self._events.log_event(
                    EVENT_ARTIFACT_BUILT,
                    {"type_name": type_name, "fields": len(accessor_set)},
                    ts,
                )
        except ConstructionError as exc:
            self._events.log_event(
                EVENT_CONSTRUCTION_ERROR,
                {
                    "error": exc.__class__.__name__,
                    "type_name": exc.type_name,
                    "field_name": exc.field_name,
                    "message": exc.message,
                },
                ts,
            )
            raise

        self._matchers = MappingProxyType(matchers)
        self._printers = MappingProxyType(printers)
        self._order = order
        self._built = True
        self._events.log_event(EVENT_BUILD_COMPLETED, {"order": ",".join(order)}, ts)
        return self._order

    # -----------------------------------------------------------------------
    # Lookup
    # -----------------------------------------------------------------------

    def matcher(self, type_name: str) -> Matcher:
        self._require_built(type_name)
        return self._matchers[type_name]

    def printer(self, type_name: str) -> Printer:
        self._require_built(type_name)
        return self._printers[type_name]

    def test(self, type_name: str, expected: Any, actual: Any) -> MatchResult:
        return self.matcher(type_name).test(expected, actual)

    def render(self, type_name: str, value: Any) -> str:
        return self.printer(type_name).render(value)

    def _resolve_matcher(self, type_name: str) -> Matcher:
        return self.matcher(type_name)

    def _resolve_printer(self, type_name: str) -> Printer:
        return self.printer(type_name)

    def _require_built(self, type_name: str) -> None:
        if not self._built:
            raise RegistryStateError(
                "RegistryStateError: registry must be built before looking up '"
                + type_name + "'",
                type_name=type_name,
            )
        if type_name not in self._matchers:
            raise RegistryStateError(
                "RegistryStateError: record type '" + type_name + "' is not declared",
                type_name=type_name,
            )

    # -----------------------------------------------------------------------
    # Introspection
    # -----------------------------------------------------------------------

    @property
    def config(self) -> MatchConfig:
        return self._config

    @property
    def events(self) -> EventLogger:
        return self._events

    @property
    def is_built(self) -> bool:
        return self._built

    def type_names(self) -> Tuple[str, ...]:
        return tuple(self._declared)

    def accessor_set(self, type_name: str) -> FieldAccessorSet:
        try:
            return self._declared[type_name]
        except KeyError:
            raise RegistryStateError(
                "RegistryStateError: record type '" + type_name + "' is not declared",
                type_name=type_name,
            ) from None

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._declared

    def __len__(self) -> int:
        return len(self._declared)
