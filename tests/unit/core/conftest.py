from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import List, Optional

import pytest

from fieldmatch.core import (
    MatcherRegistry,
    nested_field,
    repeated_field,
    repeated_nested_field,
    scalar_field,
)


@dataclass
class Bar:
    aa: Optional[int] = None


@dataclass
class Foo:
    a: Optional[int] = None
    b: List[float] = field(default_factory=list)
    bar: Optional[Bar] = None
    repeated_bar: List[Bar] = field(default_factory=list)
    note: Optional[str] = None  # never declared; must not affect matching


@dataclass
class Outer:
    label: Optional[str] = None
    foo: Optional[Foo] = None
    foos: List[Foo] = field(default_factory=list)


@pytest.fixture
def records() -> SimpleNamespace:
    return SimpleNamespace(Bar=Bar, Foo=Foo, Outer=Outer)


@pytest.fixture
def registry() -> MatcherRegistry:
    """Built registry for Bar <- Foo <- Outer, declared container-first."""
    reg = MatcherRegistry()
    reg.declare_record(
        "Outer",
        scalar_field("label"),
        nested_field("foo", "Foo"),
        repeated_nested_field("foos", "Foo"),
    )
    reg.declare_record(
        "Foo",
        scalar_field("a"),
        repeated_field("b"),
        nested_field("bar", "Bar"),
        repeated_nested_field("repeated_bar", "Bar"),
    )
    reg.declare_record("Bar", scalar_field("aa"))
    reg.build()
    return reg


@pytest.fixture
def foo_matcher(registry):
    return registry.matcher("Foo")


@pytest.fixture
def foo_printer(registry):
    return registry.printer("Foo")
