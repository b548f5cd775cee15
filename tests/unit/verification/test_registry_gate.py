# =============================================================================
# fieldmatch -- REGISTRY GATE -- Unit Tests
# File:   tests/unit/verification/test_registry_gate.py
# =============================================================================
#
# Each test writes a throwaway schema module under tmp_path with a unique
# module name, so module-level registries are never shared between tests.
# =============================================================================

import importlib
import itertools
import textwrap

import pytest

from fieldmatch.core import MatcherRegistry
from fieldmatch.verification import (
    GATE_RESULTS,
    GateFailure,
    check_target,
    load_registry,
    run_registry_gate,
)

_GOOD_SCHEMA = """
    from fieldmatch import MatcherRegistry, nested_field, scalar_field

    REGISTRY = MatcherRegistry()
    REGISTRY.declare_record("Foo", scalar_field("a"), nested_field("bar", "Bar"))
    REGISTRY.declare_record("Bar", scalar_field("aa"))

    def make_registry():
        reg = MatcherRegistry()
        reg.declare_record("Bar", scalar_field("aa"))
        return reg

    NOT_A_REGISTRY = 42
"""

_CYCLIC_SCHEMA = """
    from fieldmatch import MatcherRegistry, nested_field

    REGISTRY = MatcherRegistry()
    REGISTRY.declare_record("Ping", nested_field("pong", "Pong"))
    REGISTRY.declare_record("Pong", nested_field("ping", "Ping"))
"""

_BROKEN_DECLARATION = """
    from fieldmatch import MatcherRegistry, scalar_field

    REGISTRY = MatcherRegistry()
    REGISTRY.declare_record("Foo", scalar_field("a"), scalar_field("a"))
"""

_SYNTAX_ERROR_SCHEMA = """
    from fieldmatch import MatcherRegistry

    REGISTRY = MatcherRegistry(
"""

_NAME_ERROR_SCHEMA = """
    from fieldmatch import MatcherRegistry

    REGISTRY = MatcherRegistry()
    REGISTRY.declare_record("Foo", undefined_field("a"))
"""

_counter = itertools.count()


@pytest.fixture
def schema_module(tmp_path, monkeypatch):
    """Write source to a fresh importable module and return its name."""
    monkeypatch.syspath_prepend(str(tmp_path))

    def _write(source: str) -> str:
        name = f"gate_schema_{next(_counter)}"
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(source))
        importlib.invalidate_caches()
        return name

    return _write


# ---------------------------------------------------------------------------
# load_registry
# ---------------------------------------------------------------------------

class TestLoadRegistry:

    def test_attribute(self, schema_module):
        module = schema_module(_GOOD_SCHEMA)
        registry = load_registry(f"{module}:REGISTRY")
        assert isinstance(registry, MatcherRegistry)
        assert registry.type_names() == ("Foo", "Bar")

    def test_factory_callable(self, schema_module):
        module = schema_module(_GOOD_SCHEMA)
        assert load_registry(f"{module}:make_registry").type_names() == ("Bar",)

    @pytest.mark.parametrize("target", ["no_colon", ":REGISTRY", "module:"])
    def test_malformed_target(self, target):
        with pytest.raises(GateFailure) as info:
            load_registry(target)
        assert info.value.result == "INVALID_TARGET"
        assert info.value.exit_code == 3

    def test_missing_module(self):
        with pytest.raises(GateFailure) as info:
            load_registry("fieldmatch_no_such_module_xyz:REGISTRY")
        assert info.value.result == "IMPORT_FAILURE"

    def test_missing_attribute(self, schema_module):
        module = schema_module(_GOOD_SCHEMA)
        with pytest.raises(GateFailure) as info:
            load_registry(f"{module}:MISSING")
        assert info.value.exit_code == GATE_RESULTS["IMPORT_FAILURE"]

    def test_not_a_registry(self, schema_module):
        module = schema_module(_GOOD_SCHEMA)
        with pytest.raises(GateFailure) as info:
            load_registry(f"{module}:NOT_A_REGISTRY")
        assert info.value.result == "INVALID_TARGET"
        assert "int" in info.value.detail

    def test_declaration_error_at_import(self, schema_module):
        module = schema_module(_BROKEN_DECLARATION)
        with pytest.raises(GateFailure) as info:
            load_registry(f"{module}:REGISTRY")
        assert info.value.result == "CONSTRUCTION_ERROR"
        assert "more than once" in info.value.detail

    def test_syntax_error_at_import(self, schema_module):
        module = schema_module(_SYNTAX_ERROR_SCHEMA)
        with pytest.raises(GateFailure) as info:
            load_registry(f"{module}:REGISTRY")
        assert info.value.result == "IMPORT_FAILURE"
        assert info.value.exit_code == 2
        assert info.value.detail.startswith("SyntaxError")

    def test_name_error_at_import(self, schema_module):
        module = schema_module(_NAME_ERROR_SCHEMA)
        with pytest.raises(GateFailure) as info:
            load_registry(f"{module}:REGISTRY")
        assert info.value.result == "IMPORT_FAILURE"
        assert "undefined_field" in info.value.detail


# ---------------------------------------------------------------------------
# check_target
# ---------------------------------------------------------------------------

class TestCheckTarget:

    def test_builds_in_dependency_order(self, schema_module):
        module = schema_module(_GOOD_SCHEMA)
        assert check_target(f"{module}:REGISTRY") == ("Bar", "Foo")

    def test_cycle_is_construction_error(self, schema_module):
        module = schema_module(_CYCLIC_SCHEMA)
        with pytest.raises(GateFailure) as info:
            check_target(f"{module}:REGISTRY")
        assert info.value.exit_code == GATE_RESULTS["CONSTRUCTION_ERROR"]
        assert "CyclicDependencyError" in info.value.detail


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------

class TestMain:

    def test_pass(self, schema_module, capsys):
        module = schema_module(_GOOD_SCHEMA)
        assert run_registry_gate([f"{module}:REGISTRY"]) == 0
        out = capsys.readouterr().out
        assert f"REGISTRY-GATE PASS  {module}:REGISTRY  types=2  order=Bar,Foo" in out

    def test_fail_reports_to_stderr(self, schema_module, capsys):
        module = schema_module(_CYCLIC_SCHEMA)
        assert run_registry_gate([f"{module}:REGISTRY"]) == 1
        captured = capsys.readouterr()
        assert "REGISTRY-GATE FAIL  CONSTRUCTION_ERROR" in captured.err
        assert captured.out == ""

    def test_most_severe_result_wins(self, schema_module):
        good = schema_module(_GOOD_SCHEMA)
        cyclic = schema_module(_CYCLIC_SCHEMA)
        argv = [f"{good}:NOT_A_REGISTRY", "missing_module_xyz:R", f"{cyclic}:REGISTRY"]
        assert run_registry_gate(argv) == 1

    def test_load_failures_only(self):
        assert run_registry_gate(["missing_module_xyz:R", "bad-target"]) == 2

    def test_broken_module_exits_with_import_failure(self, schema_module, capsys):
        module = schema_module(_SYNTAX_ERROR_SCHEMA)
        assert run_registry_gate([f"{module}:REGISTRY"]) == 2
        assert "REGISTRY-GATE FAIL  IMPORT_FAILURE" in capsys.readouterr().err

    def test_no_targets_is_usage_error(self):
        with pytest.raises(SystemExit):
            run_registry_gate([])
