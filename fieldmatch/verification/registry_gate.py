#!/usr/bin/env python3
# =============================================================================
# fieldmatch v1.0.0 -- REGISTRY GATE
# File:   fieldmatch/verification/registry_gate.py
# =============================================================================
#
# PURPOSE
# -------
# Initialisation check for schemas declared with MatcherRegistry. Imports
# each target, builds it, and reports the build order. A dependency-order
# violation or cycle fails here, at build time, instead of surfacing as a
# failing test.
#
# Usage:
#   python -m fieldmatch.verification.registry_gate mypkg.schema:REGISTRY [...]
#
# A target names a MatcherRegistry attribute, or a zero-argument callable
# returning one.
#
# Exit codes:
#   0 -- every registry built.
#   1 -- CONSTRUCTION_ERROR: dependency order violation, cycle, bad declaration.
#   2 -- IMPORT_FAILURE: module or attribute could not be loaded.
#   3 -- INVALID_TARGET: target is malformed or is not a registry.
#
# No I/O beyond stdout/stderr.
# =============================================================================

from __future__ import annotations

import argparse
import importlib
import sys
from typing import List, Optional, Sequence

from fieldmatch.core.exceptions import FieldMatchError
from fieldmatch.core.registry import MatcherRegistry

GATE_RESULTS = {
    "PASS":               0,
    "CONSTRUCTION_ERROR": 1,
    "IMPORT_FAILURE":     2,
    "INVALID_TARGET":     3,
}


class GateFailure(Exception):
    """A target failed the gate. Carries the GATE_RESULTS key."""

    def __init__(self, result: str, target: str, detail: str) -> None:
        super().__init__(f"{result}: {target}: {detail}")
        self.result = result
        self.target = target
        self.detail = detail

    @property
    def exit_code(self) -> int:
        return GATE_RESULTS[self.result]


def load_registry(target: str) -> MatcherRegistry:
    """
    Resolve "module:attribute" to a MatcherRegistry.

    Raises GateFailure (IMPORT_FAILURE or INVALID_TARGET).
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise GateFailure("INVALID_TARGET", target, "expected 'module:attribute'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise GateFailure("IMPORT_FAILURE", target, str(exc)) from exc
    except FieldMatchError as exc:
        # Schema modules usually declare their record types at import time.
        raise GateFailure("CONSTRUCTION_ERROR", target, exc.message) from exc
    except Exception as exc:
        # SyntaxError, NameError, ... raised while executing the module.
        raise GateFailure(
            "IMPORT_FAILURE", target, f"{type(exc).__name__}: {exc}"
        ) from exc

    obj = module
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise GateFailure("IMPORT_FAILURE", target, str(exc)) from exc

    if not isinstance(obj, MatcherRegistry) and callable(obj):
        try:
            obj = obj()
        except FieldMatchError as exc:
            raise GateFailure("CONSTRUCTION_ERROR", target, exc.message) from exc
    if not isinstance(obj, MatcherRegistry):
        raise GateFailure(
            "INVALID_TARGET", target,
            f"expected a MatcherRegistry, got {type(obj).__name__}",
        )
    return obj


def check_target(target: str) -> tuple:
    """Load and build one target. Returns the build order."""
    registry = load_registry(target)
    try:
        return registry.build()
    except FieldMatchError as exc:
        raise GateFailure("CONSTRUCTION_ERROR", target, exc.message) from exc


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build fieldmatch registries and fail on construction errors.",
        prog="python -m fieldmatch.verification.registry_gate",
    )
    parser.add_argument(
        "targets",
        nargs="+",
        help="Registries to check, as module:attribute.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    failures: List[GateFailure] = []

    for target in args.targets:
        try:
            order = check_target(target)
        except GateFailure as failure:
            failures.append(failure)
            print(f"REGISTRY-GATE FAIL  {failure}", file=sys.stderr)
            continue
        print(f"REGISTRY-GATE PASS  {target}  types={len(order)}  order={','.join(order)}")

    if failures:
        # Most severe result wins: construction errors before load problems.
        return min(failure.exit_code for failure in failures)
    return 0


if __name__ == "__main__":
    sys.exit(main())
