# fieldmatch/core/__init__.py
# Field accessor sets, matcher/printer generators and the registry.

from .exceptions import (
    FieldMatchError,
    FieldDeclarationError,
    ConstructionError,
    DependencyOrderError,
    CyclicDependencyError,
    RegistryStateError,
)
from .field_accessor import (
    FieldKind,
    FieldDescriptor,
    FieldAccessorSet,
    attribute_extractor,
    default_presence,
    scalar_field,
    nested_field,
    repeated_field,
    repeated_nested_field,
    declare_record,
)
from .scalar_equality import float_bits, render_scalar, scalars_equal
from .logging_layer import Event, EventFilter, EventLogger, LoggingError
from .matcher import Matcher, build_matcher
from .printer import Printer, build_printer
from .registry import MatcherRegistry

__all__ = [
    # Exceptions
    "FieldMatchError",
    "FieldDeclarationError",
    "ConstructionError",
    "DependencyOrderError",
    "CyclicDependencyError",
    "RegistryStateError",
    # Field accessor set
    "FieldKind",
    "FieldDescriptor",
    "FieldAccessorSet",
    "attribute_extractor",
    "default_presence",
    "scalar_field",
    "nested_field",
    "repeated_field",
    "repeated_nested_field",
    "declare_record",
    # Scalar comparison
    "float_bits",
    "render_scalar",
    "scalars_equal",
    # Logging
    "Event",
    "EventFilter",
    "EventLogger",
    "LoggingError",
    # Generators
    "Matcher",
    "build_matcher",
    "Printer",
    "build_printer",
    # Registry
    "MatcherRegistry",
]
