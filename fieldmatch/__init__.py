# fieldmatch/__init__.py
# Declarative structural equality matchers and diagnostic printers for
# hierarchical typed records.
#
# Canonical import:
#   from fieldmatch import MatcherRegistry, scalar_field, nested_field
#
#   registry = MatcherRegistry()
#   registry.declare_record("Bar", scalar_field("aa"))
#   registry.declare_record("Foo", scalar_field("a"), nested_field("bar", "Bar"))
#   registry.build()
#   registry.matcher("Foo").test(expected, actual)

__version__ = "1.0.0"

from fieldmatch.core import (
    FieldMatchError,
    FieldDeclarationError,
    ConstructionError,
    DependencyOrderError,
    CyclicDependencyError,
    RegistryStateError,
    FieldKind,
    FieldDescriptor,
    FieldAccessorSet,
    scalar_field,
    nested_field,
    repeated_field,
    repeated_nested_field,
    declare_record,
    Matcher,
    build_matcher,
    Printer,
    build_printer,
    MatcherRegistry,
)
from fieldmatch.config import MatchConfig, DEFAULT_MATCH_CONFIG, ConfigViolationError
from fieldmatch.data_models import FieldMismatch, MatchResult

__all__ = [
    "__version__",
    # Exceptions
    "FieldMatchError",
    "FieldDeclarationError",
    "ConstructionError",
    "DependencyOrderError",
    "CyclicDependencyError",
    "RegistryStateError",
    "ConfigViolationError",
    # Declaration
    "FieldKind",
    "FieldDescriptor",
    "FieldAccessorSet",
    "scalar_field",
    "nested_field",
    "repeated_field",
    "repeated_nested_field",
    "declare_record",
    # Artifacts
    "Matcher",
    "build_matcher",
    "Printer",
    "build_printer",
    "MatcherRegistry",
    # Results and configuration
    "FieldMismatch",
    "MatchResult",
    "MatchConfig",
    "DEFAULT_MATCH_CONFIG",
]
