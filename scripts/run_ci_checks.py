#!/usr/bin/env python3
# =============================================================================
# fieldmatch v1.0.0 -- CI CHECKS RUNNER
# File:   scripts/run_ci_checks.py
# =============================================================================
#
# PURPOSE
# -------
# Runs the CI gate in two sequential stages:
#   Stage 1: pytest (all tests)
#   Stage 2: registry gate for every module:attribute target given on the
#            command line (skipped when none is given)
#
# Exit codes:
#   0 -- All stages passed.
#   1 -- Stage 1 (pytest) failed.
#   2 -- Stage 2 (registry gate) failed.
#
# Usage:
#   python scripts/run_ci_checks.py [mypkg.schema:REGISTRY ...]
# =============================================================================

from __future__ import annotations

import subprocess
import sys
import pathlib

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
_REPO_ROOT = pathlib.Path(__file__).parent.parent
_PYTHON    = sys.executable


def _separator(char: str = "=", width: int = 72) -> str:
    return char * width


def _run(cmd: list[str], label: str) -> int:
    """
    Run a subprocess command, stream stdout/stderr live, return exit code.
    """
    print(_separator())
    print(f"CI STAGE: {label}")
    print(f"CMD:      {' '.join(cmd)}")
    print(_separator("-"))
    sys.stdout.flush()

    proc = subprocess.run(
        cmd,
        cwd=str(_REPO_ROOT),
    )
    return proc.returncode


def main(argv: list[str]) -> int:
    print(_separator())
    print("FIELDMATCH CI GATE -- starting")
    print(_separator())
    sys.stdout.flush()

    pytest_rc = _run([_PYTHON, "-m", "pytest"], "pytest")
    if pytest_rc != 0:
        print(_separator())
        print(f"CI RESULT: FAIL  [stage=pytest  exit_code={pytest_rc}]")
        print(_separator())
        sys.stdout.flush()
        return 1

    print(_separator("-"))
    print("CI STAGE pytest: PASS")
    sys.stdout.flush()

    if not argv:
        print("CI STAGE registry-gate: SKIPPED (no targets)")
    else:
        gate_rc = _run(
            [_PYTHON, "-m", "fieldmatch.verification.registry_gate", *argv],
            "registry gate",
        )
        if gate_rc != 0:
            print(_separator())
            print(f"CI RESULT: FAIL  [stage=registry-gate  exit_code={gate_rc}]")
            print(_separator())
            sys.stdout.flush()
            return 2
        print(_separator("-"))
        print("CI STAGE registry-gate: PASS")

    print(_separator())
    print("CI RESULT: PASS")
    print(_separator())
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
