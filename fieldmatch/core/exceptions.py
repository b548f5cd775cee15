# =============================================================================
# fieldmatch v1.0.0 -- EXCEPTION HIERARCHY
# File:   fieldmatch/core/exceptions.py
# =============================================================================
#
# SCOPE
# -----
# Construction-time and registry-state errors. Comparison mismatches are
# never exceptions; they are reported through MatchResult.
# All exceptions are pure value objects: no side effects, no logging,
# no I/O of any kind.
#
# EXCEPTION HIERARCHY
# -------------------
#   FieldMatchError(Exception)                   -- base; never raised directly
#     FieldDeclarationError(FieldMatchError)     -- malformed descriptor / accessor set
#     ConstructionError(FieldMatchError)         -- artifact cannot be built
#       DependencyOrderError(ConstructionError)  -- nested artifact not available yet
#       CyclicDependencyError(ConstructionError) -- cycle among eager references
#     RegistryStateError(FieldMatchError)        -- frozen / unbuilt registry, unknown type
#
# MESSAGE CONTRACT
# ----------------
# Every exception message is:
#   - Deterministic: identical inputs -> identical message string.
#   - Explicit: record type and field name included whenever known.
#   - Non-empty.
#
# =============================================================================

from __future__ import annotations

from typing import Sequence


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class FieldMatchError(Exception):
    """
    Base class for all fieldmatch exceptions.

    Never raised directly. Use a concrete subclass.

    Attributes:
        message:     Human-readable description. Always non-empty.
        type_name:   Record type the error refers to, or empty string.
        field_name:  Field the error refers to, or empty string.
    """

    def __init__(
        self,
        message:    str,
        type_name:  str = "",
        field_name: str = "",
    ) -> None:
        if not isinstance(message, str) or not message:
            raise ValueError(
                "FieldMatchError: message must be a non-empty string"
            )
        if not isinstance(type_name, str) or not isinstance(field_name, str):
            raise ValueError(
                "FieldMatchError: type_name and field_name must be strings"
            )
        super().__init__(message)
        self.message:    str = message
        self.type_name:  str = type_name
        self.field_name: str = field_name

    def __repr__(self) -> str:
        return (
            self.__class__.__name__
            + "(type_name=" + repr(self.type_name)
            + ", field_name=" + repr(self.field_name)
            + ", message=" + repr(self.message)
            + ")"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldMatchError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.type_name == other.type_name
            and self.field_name == other.field_name
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.type_name, self.field_name))


# =============================================================================
# CONCRETE EXCEPTIONS
# =============================================================================

class FieldDeclarationError(FieldMatchError):
    """
    Raised when a field descriptor or accessor set is malformed.

    Examples: empty field name, duplicate field name within one record type,
    nested kind without a nested type, a record type declared twice.
    """


class ConstructionError(FieldMatchError):
    """
    Raised when a Matcher or Printer cannot be built.

    Construction errors are fatal to initialisation: no partially built
    artifact is ever returned.
    """


class DependencyOrderError(ConstructionError):
    """
    Raised when a container's artifact is built before the artifact of a
    record type it contains, or when the contained type was never declared.

    Attributes:
        dependency:  Name of the missing nested record type.
    """

    def __init__(self, type_name: str, field_name: str, dependency: str) -> None:
        message = (
            "DependencyOrderError: record type '" + type_name
            + "' field '" + field_name
            + "' references '" + dependency
            + "', which has not been built"
        )
        super().__init__(message, type_name=type_name, field_name=field_name)
        self.dependency: str = dependency


class CyclicDependencyError(ConstructionError):
    """
    Raised when eager nested references form a cycle.

    Recursive record types must mark at least one reference in the cycle
    as forward (resolved lazily through the registry).

    Attributes:
        cycle:  Record type names participating in the cycle, sorted.
    """

    def __init__(self, cycle: Sequence[str]) -> None:
        members = tuple(sorted(cycle))
        message = (
            "CyclicDependencyError: record types "
            + ", ".join(repr(name) for name in members)
            + " reference each other without a forward declaration"
        )
        super().__init__(message, type_name=members[0] if members else "")
        self.cycle: tuple = members


class RegistryStateError(FieldMatchError):
    """
    Raised on registry misuse: declaring after build, looking up artifacts
    before build, or looking up a record type that was never declared.
    """
