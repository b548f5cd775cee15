# =============================================================================
# fieldmatch v1.0.0 -- FIELD ACCESSOR SET
# File:   fieldmatch/core/field_accessor.py
# =============================================================================
#
# SCOPE
# -----
# Declarative description of a record type: an ordered set of
# (name, kind, extractor, presence-check) descriptors. Leaf module: no
# dependency on matchers, printers or the registry.
#
# Record objects are opaque. The only capabilities assumed are
#   - attribute access by field name (or a caller-supplied extractor),
#   - a presence check (protobuf HasField, has_<name>(), or "is not None").
#
# Canonical import:
#   from fieldmatch.core.field_accessor import (
#       FieldKind, FieldDescriptor, FieldAccessorSet,
#       scalar_field, nested_field, repeated_field, repeated_nested_field,
#       declare_record,
#   )
#
# =============================================================================

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, Optional, Tuple, Union

from fieldmatch.core.exceptions import FieldDeclarationError


# =============================================================================
# SECTION 1 -- FIELD KINDS
# =============================================================================

class FieldKind(Enum):
    SCALAR          = "scalar"
    NESTED          = "nested"
    REPEATED_SCALAR = "repeated_scalar"
    REPEATED_NESTED = "repeated_nested"

    @property
    def is_repeated(self) -> bool:
        return self in (FieldKind.REPEATED_SCALAR, FieldKind.REPEATED_NESTED)

    @property
    def is_nested(self) -> bool:
        return self in (FieldKind.NESTED, FieldKind.REPEATED_NESTED)


# =============================================================================
# SECTION 2 -- DEFAULT EXTRACTOR AND PRESENCE CHECK
# =============================================================================

def attribute_extractor(name: str) -> Callable[[Any], Any]:
    """Return an extractor reading attribute `name` from a record."""
    return operator.attrgetter(name)


def default_presence(name: str) -> Callable[[Any], bool]:
    """
    Return a presence check for field `name`.

    Resolution order
    ----------------
    1. record.HasField(name) when the record exposes it (protobuf messages).
       Fields without presence tracking make HasField raise ValueError; such
       a field is present iff its value differs from the zero default.
    2. record.has_<name>() when the record exposes it.
    3. Otherwise the field is present iff its value is not None.
    """
    has_method = "has_" + name

    def _is_present(record: Any) -> bool:
        has_field = getattr(record, "HasField", None)
        if callable(has_field):
            try:
                return bool(has_field(name))
            except ValueError:
                return bool(getattr(record, name))
        legacy = getattr(record, has_method, None)
        if callable(legacy):
            return bool(legacy())
        return getattr(record, name) is not None

    return _is_present


def _always_present(record: Any) -> bool:
    return True


def _presence_for(
    name: str,
    extractor: Optional[Callable[[Any], Any]],
) -> Callable[[Any], bool]:
    # A custom extractor need not read an attribute called `name`.
    if extractor is None:
        return default_presence(name)
    return lambda record: extractor(record) is not None


# =============================================================================
# SECTION 3 -- FIELD DESCRIPTOR
# =============================================================================

@dataclass(frozen=True)
class FieldDescriptor:
    """
    Immutable description of one declared field.

    Fields
    ------
    name        : Field label, used for extraction defaults, printing and
                  mismatch paths. Non-empty.
    kind        : FieldKind.
    extractor   : record -> value (or sequence, for repeated kinds).
    presence    : record -> bool. Ignored for repeated kinds, whose presence
                  is "sequence is non-empty".
    nested_type : Record type name of the nested value. Required for the
                  nested kinds, empty otherwise.
    forward     : Resolve the nested artifact lazily through the registry.
                  Only meaningful for nested kinds; used to break cycles in
                  recursive record types.
    """
    name:        str
    kind:        FieldKind
    extractor:   Callable[[Any], Any] = field(compare=False, repr=False)
    presence:    Callable[[Any], bool] = field(compare=False, repr=False)
    nested_type: str = ""
    forward:     bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise FieldDeclarationError(
                "FieldDeclarationError: field name must be a non-empty string; got: "
                + repr(self.name)
            )
        if not isinstance(self.kind, FieldKind):
            raise FieldDeclarationError(
                "FieldDeclarationError: field '" + self.name
                + "' kind must be a FieldKind; got: " + repr(self.kind),
                field_name=self.name,
            )
        if not callable(self.extractor) or not callable(self.presence):
            raise FieldDeclarationError(
                "FieldDeclarationError: field '" + self.name
                + "' extractor and presence must be callable",
                field_name=self.name,
            )
        if self.kind.is_nested and not self.nested_type:
            raise FieldDeclarationError(
                "FieldDeclarationError: nested field '" + self.name
                + "' requires a nested_type",
                field_name=self.name,
            )
        if not self.kind.is_nested and self.nested_type:
            raise FieldDeclarationError(
                "FieldDeclarationError: field '" + self.name + "' of kind "
                + self.kind.value + " cannot name a nested_type",
                field_name=self.name,
            )
        if self.forward and not self.kind.is_nested:
            raise FieldDeclarationError(
                "FieldDeclarationError: only nested fields can be forward references; field '"
                + self.name + "' is " + self.kind.value,
                field_name=self.name,
            )

    def extract(self, record: Any) -> Any:
        return self.extractor(record)

    def is_present(self, record: Any) -> bool:
        if self.kind.is_repeated:
            value = self.extract(record)
            return value is not None and len(value) > 0
        return bool(self.presence(record))


# =============================================================================
# SECTION 4 -- COMBINATORS
# =============================================================================

NestedRef = Union[str, Any]


def _nested_type_name(ref: NestedRef) -> str:
    """Accept a type name or any object exposing `type_name` (accessor set, matcher, printer)."""
    if isinstance(ref, str):
        return ref
    name = getattr(ref, "type_name", None)
    if isinstance(name, str) and name:
        return name
    raise FieldDeclarationError(
        "FieldDeclarationError: nested type reference must be a type name or expose "
        "'type_name'; got: " + repr(ref)
    )


def scalar_field(
    name: str,
    *,
    extractor: Optional[Callable[[Any], Any]] = None,
    presence: Optional[Callable[[Any], bool]] = None,
) -> FieldDescriptor:
    return FieldDescriptor(
        name=name,
        kind=FieldKind.SCALAR,
        extractor=extractor or attribute_extractor(name),
        presence=presence or _presence_for(name, extractor),
    )


def nested_field(
    name: str,
    nested_type: NestedRef,
    *,
    extractor: Optional[Callable[[Any], Any]] = None,
    presence: Optional[Callable[[Any], bool]] = None,
    forward: bool = False,
) -> FieldDescriptor:
    return FieldDescriptor(
        name=name,
        kind=FieldKind.NESTED,
        extractor=extractor or attribute_extractor(name),
        presence=presence or _presence_for(name, extractor),
        nested_type=_nested_type_name(nested_type),
        forward=forward,
    )


def repeated_field(
    name: str,
    *,
    extractor: Optional[Callable[[Any], Any]] = None,
) -> FieldDescriptor:
    return FieldDescriptor(
        name=name,
        kind=FieldKind.REPEATED_SCALAR,
        extractor=extractor or attribute_extractor(name),
        presence=_always_present,
    )


def repeated_nested_field(
    name: str,
    nested_type: NestedRef,
    *,
    extractor: Optional[Callable[[Any], Any]] = None,
    forward: bool = False,
) -> FieldDescriptor:
    return FieldDescriptor(
        name=name,
        kind=FieldKind.REPEATED_NESTED,
        extractor=extractor or attribute_extractor(name),
        presence=_always_present,
        nested_type=_nested_type_name(nested_type),
        forward=forward,
    )


# =============================================================================
# SECTION 5 -- FIELD ACCESSOR SET
# =============================================================================

@dataclass(frozen=True)
class FieldAccessorSet:
    """
    Ordered, named field list of one record type.

    Declaration order drives printing only; equality never depends on it.
    An empty field list is legal: every pair of records matches and the
    printer emits the type name with an empty body.
    """
    type_name: str
    fields:    Tuple[FieldDescriptor, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.type_name, str) or not self.type_name:
            raise FieldDeclarationError(
                "FieldDeclarationError: type_name must be a non-empty string; got: "
                + repr(self.type_name)
            )
        descriptors = tuple(self.fields)
        seen = set()
        for descriptor in descriptors:
            if not isinstance(descriptor, FieldDescriptor):
                raise FieldDeclarationError(
                    "FieldDeclarationError: record type '" + self.type_name
                    + "' expects FieldDescriptor entries; got: " + repr(descriptor),
                    type_name=self.type_name,
                )
            if descriptor.name in seen:
                raise FieldDeclarationError(
                    "FieldDeclarationError: record type '" + self.type_name
                    + "' declares field '" + descriptor.name + "' more than once",
                    type_name=self.type_name,
                    field_name=descriptor.name,
                )
            seen.add(descriptor.name)
        object.__setattr__(self, "fields", descriptors)

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def names(self) -> Tuple[str, ...]:
        return tuple(d.name for d in self.fields)

    def field(self, name: str) -> FieldDescriptor:
        for descriptor in self.fields:
            if descriptor.name == name:
                return descriptor
        raise KeyError(f"{self.type_name} has no declared field {name!r}")

    def dependencies(self) -> Tuple[str, ...]:
        """Nested type names referenced eagerly, in declaration order, de-duplicated."""
        return self._nested_types(forward=False)

    def forward_dependencies(self) -> Tuple[str, ...]:
        return self._nested_types(forward=True)

    def _nested_types(self, forward: bool) -> Tuple[str, ...]:
        names = []
        for descriptor in self.fields:
            if descriptor.kind.is_nested and descriptor.forward is forward:
                if descriptor.nested_type not in names:
                    names.append(descriptor.nested_type)
        return tuple(names)


def declare_record(type_name: str, *fields: FieldDescriptor) -> FieldAccessorSet:
    """
    Declare a record type from field combinators.

    Example
    -------
        BAR = declare_record("Bar", scalar_field("aa"))
        FOO = declare_record(
            "Foo",
            scalar_field("a"),
            repeated_field("b"),
            nested_field("bar", BAR),
            repeated_nested_field("repeated_bar", BAR),
        )
    """
    return FieldAccessorSet(type_name=type_name, fields=tuple(fields))
