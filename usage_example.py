# usage_example.py
# Minimal usage example for fieldmatch.
# This file is not part of the fieldmatch package. For reference only.
#
# Registry gate check:
#   python -m fieldmatch.verification.registry_gate usage_example:REGISTRY

from dataclasses import dataclass, field
from typing import List, Optional

from fieldmatch import (
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


# Declarations may appear in any order; build() orders Bar before Foo.
REGISTRY = MatcherRegistry()
REGISTRY.declare_record(
    "Foo",
    scalar_field("a"),
    repeated_field("b"),
    nested_field("bar", "Bar"),
    repeated_nested_field("repeated_bar", "Bar"),
)
REGISTRY.declare_record("Bar", scalar_field("aa"))


if __name__ == "__main__":
    REGISTRY.build()
    match_foo = REGISTRY.matcher("Foo")
    print_foo = REGISTRY.printer("Foo")

    expected = Foo(a=1, bar=Bar(aa=5), repeated_bar=[Bar(aa=1), Bar(aa=2)])
    actual = Foo(a=1, bar=Bar(aa=6), repeated_bar=[Bar(aa=1), Bar(aa=3)])

    result = match_foo.test(expected, actual)
    print(result.matched)
    print(result.explain())
    print(print_foo.render(expected))

# Expected output:
# False
# Foo: 2 field mismatch(es)
#   bar.aa: expected 5, got 6
#   repeated_bar[1].aa: expected 2, got 3
# Foo: { a: 1, bar: Bar: { aa: 5 }, repeated_bar: [Bar: { aa: 1 }, Bar: { aa: 2 }] }
