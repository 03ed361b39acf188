"""Tests for the data models in data/."""

import sys
import types
import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest
from pydantic import ValidationError

from dynfunc.data import (
    CompilationResult,
    CompiledUnit,
    Diagnostic,
    DiagnosticSeverity,
    InvocationResult,
    ReferenceSet,
    TypeTag,
    UnitMetadata,
    ValidationOutcome,
    ValidationRule,
    hash_source,
    matches_tag,
    tag_for_annotation,
)


def _unit() -> CompiledUnit:
    metadata = UnitMetadata(name="unit_a", source_hash=hash_source("VALUE = 1\n"))
    return CompiledUnit(types.ModuleType("unit_a"), "VALUE = 1\n", metadata)


def test_diagnostic_format_is_one_based():
    diagnostic = Diagnostic(code="SyntaxError", message="expected ':'", line=3, column=26)
    assert diagnostic.format() == "Error (SyntaxError): expected ':' at line 4"
    assert diagnostic.is_error


def test_diagnostic_validation():
    with pytest.raises(ValidationError):
        Diagnostic(code="", message="x")
    with pytest.raises(ValidationError):
        Diagnostic(code="E", message="x", line=-1)


def test_diagnostic_warning_escalation():
    warning = Diagnostic(code="SyntaxWarning", message="x", severity=DiagnosticSeverity.WARNING)
    assert not warning.is_error
    assert Diagnostic(
        code="SyntaxWarning", message="x", severity=DiagnosticSeverity.WARNING, escalated=True
    ).is_error


def test_compilation_result_success():
    unit = _unit()
    result = CompilationResult.succeeded(unit)

    assert result.success
    assert result.unit is unit
    assert result.error_message == ""
    assert repr(unit) == "CompiledUnit(name='unit_a')"


def test_compilation_result_failure_message():
    result = CompilationResult.failed(
        [
            Diagnostic(code="SyntaxError", message="first", line=0),
            Diagnostic(code="NameError", message="second", line=4),
        ]
    )

    assert not result.success
    assert result.unit is None
    assert result.error_message == (
        "Error (SyntaxError): first at line 1\nError (NameError): second at line 5"
    )


def test_compilation_result_invariants():
    with pytest.raises(ValidationError):
        CompilationResult(success=True)
    with pytest.raises(ValidationError):
        CompilationResult(
            success=True, unit=_unit(), diagnostics=[Diagnostic(code="E", message="x")]
        )
    with pytest.raises(ValidationError):
        CompilationResult(success=False)
    with pytest.raises(ValidationError):
        CompilationResult(
            success=False, unit=_unit(), diagnostics=[Diagnostic(code="E", message="x")]
        )


def test_reference_set():
    references = ReferenceSet(modules=frozenset({"math", "urllib.request"}))
    references.add_loaded("math", sys.modules["math"])
    import urllib.request

    references.add_loaded("urllib.request", urllib.request)

    assert "math" in references
    assert "json" not in references
    assert len(references) == 2
    assert references.bindings() == {"math": sys.modules["math"], "urllib": sys.modules["urllib"]}


def test_validation_outcome():
    assert ValidationOutcome.success().valid
    outcome = ValidationOutcome.failed(ValidationRule.ARITY, "too many")
    assert not outcome.valid
    assert outcome.rule == ValidationRule.ARITY
    assert outcome.reason == "too many"


def test_invocation_result():
    assert InvocationResult.ok(3).value == 3
    failed = InvocationResult.failed("boom", "RuntimeError")
    assert not failed.success
    assert failed.value is None
    assert failed.error_type == "RuntimeError"


@pytest.mark.parametrize(
    "annotation, tag",
    [
        (bool, TypeTag.BOOL),
        (int, TypeTag.INT),
        (float, TypeTag.FLOAT),
        (Decimal, TypeTag.DECIMAL),
        (str, TypeTag.STR),
        (datetime, TypeTag.DATETIME),
        (date, TypeTag.DATE),
        (time, TypeTag.TIME),
        (timedelta, TypeTag.TIMEDELTA),
        (uuid.UUID, TypeTag.UUID),
        (None, TypeTag.NONE),
        (list, TypeTag.OTHER),
        ("int", TypeTag.INT),
        ("decimal.Decimal", TypeTag.DECIMAL),
        ("List[int]", TypeTag.OTHER),
    ],
)
def test_tag_for_annotation(annotation, tag):
    assert tag_for_annotation(annotation) == tag


def test_matches_tag():
    assert matches_tag(1, TypeTag.INT)
    assert matches_tag(1, TypeTag.FLOAT)
    assert not matches_tag(1.0, TypeTag.INT)
    assert not matches_tag(True, TypeTag.INT)
    assert matches_tag(True, TypeTag.BOOL)
    assert not matches_tag(1, TypeTag.BOOL)
    assert matches_tag(date(2024, 1, 1), TypeTag.DATE)
    assert not matches_tag(datetime(2024, 1, 1), TypeTag.DATE)
    assert matches_tag(uuid.uuid4(), TypeTag.UUID)
    assert not matches_tag("x", TypeTag.OTHER)
    assert not matches_tag(None, TypeTag.ANY)


if __name__ == "__main__":
    pytest.main(sys.argv)
