"""Tests for compile/backends/python_backend.py."""

import sys
import types

import pytest

from dynfunc.compile import PythonBackend
from dynfunc.compile.utils import unit_filename
from dynfunc.data import DiagnosticSeverity, ReferenceSet
from dynfunc.errors import LoadError


def _references(*names: str) -> ReferenceSet:
    references = ReferenceSet(modules=frozenset(names))
    for name in names:
        references.add_loaded(name, sys.modules[name])
    return references


def test_emit_returns_code_object():
    backend = PythonBackend()
    emitted = backend.emit("def f() -> int:\n    return 1\n", "unit_emit_ok")

    assert emitted.success
    assert isinstance(emitted.artifact, types.CodeType)
    assert emitted.artifact.co_filename == unit_filename("unit_emit_ok")
    assert emitted.diagnostics == []
    assert emitted.errors == []


def test_emit_syntax_error():
    backend = PythonBackend()
    emitted = backend.emit("x = 1\ny = (\n", "unit_emit_error")

    assert not emitted.success
    assert emitted.artifact is None
    assert len(emitted.errors) == 1
    assert emitted.errors[0].code == "SyntaxError"


def test_emit_null_bytes():
    backend = PythonBackend()
    emitted = backend.emit("x = 1\x00\n", "unit_emit_null")

    assert not emitted.success
    assert emitted.errors[0].code in ("ValueError", "SyntaxError")


def test_emit_warning_diagnostic():
    backend = PythonBackend()
    emitted = backend.emit("def f(x: int) -> bool:\n    return x is 1\n", "unit_emit_warning")

    assert emitted.success
    assert emitted.errors == []
    warning = emitted.diagnostics[0]
    assert warning.code == "SyntaxWarning"
    assert warning.severity == DiagnosticSeverity.WARNING
    assert not warning.escalated
    assert not warning.is_error


def test_emit_escalated_warning():
    backend = PythonBackend(warnings_as_errors=True)
    emitted = backend.emit("def f(x: int) -> bool:\n    return x is 1\n", "unit_emit_escalated")

    assert not emitted.success
    assert emitted.errors[0].escalated


def test_load_binds_references():
    backend = PythonBackend(register_modules=False)
    source = "def hypot(a: float, b: float) -> float:\n    return math.hypot(a, b)\n"
    emitted = backend.emit(source, "unit_load_ok")
    module = backend.load(emitted.artifact, source, "unit_load_ok", _references("math"))

    assert module.__name__ == "unit_load_ok"
    assert module.math is sys.modules["math"]
    assert module.hypot(3.0, 4.0) == 5.0
    assert "unit_load_ok" not in sys.modules


def test_load_registers_module():
    backend = PythonBackend(register_modules=True)
    source = "VALUE = 3\n"
    emitted = backend.emit(source, "unit_load_registered")
    module = backend.load(emitted.artifact, source, "unit_load_registered", ReferenceSet())

    assert sys.modules["unit_load_registered"] is module
    sys.modules.pop("unit_load_registered")


def test_load_error_carries_diagnostic():
    backend = PythonBackend(register_modules=True)
    source = "a = 1\nb = 2\nc = a / 0\n"
    emitted = backend.emit(source, "unit_load_error")

    with pytest.raises(LoadError) as excinfo:
        backend.load(emitted.artifact, source, "unit_load_error", ReferenceSet())

    assert "unit_load_error" not in sys.modules
    diagnostics = excinfo.value.diagnostics
    assert len(diagnostics) == 1
    assert diagnostics[0].code == "ZeroDivisionError"
    assert diagnostics[0].line == 2
    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)


def test_traceback_shows_snippet_line():
    import traceback

    backend = PythonBackend(register_modules=False)
    source = "def fail() -> int:\n    raise ValueError('bad input')\n"
    emitted = backend.emit(source, "unit_traceback")
    module = backend.load(emitted.artifact, source, "unit_traceback", ReferenceSet())

    with pytest.raises(ValueError) as excinfo:
        module.fail()
    rendered = "".join(traceback.format_exception(excinfo.type, excinfo.value, excinfo.tb))
    assert "raise ValueError('bad input')" in rendered


if __name__ == "__main__":
    pytest.main(sys.argv)
