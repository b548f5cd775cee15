# fieldmatch/verification/__init__.py
# Build-time checks for declared schemas.
#
# ENTRY POINT:
#   python -m fieldmatch.verification.registry_gate module:attribute [...]

from .registry_gate import (
    GATE_RESULTS,
    GateFailure,
    check_target,
    load_registry,
    main as run_registry_gate,
)

__all__ = [
    "GATE_RESULTS",
    "GateFailure",
    "check_target",
    "load_registry",
    "run_registry_gate",
]
