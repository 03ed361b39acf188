"""Backend compiling snippets with the CPython bytecode compiler."""

from __future__ import annotations

import ast
import linecache
import sys
import threading
import traceback
import types
import warnings
from typing import Any, ClassVar, List, Set, Tuple

from dynfunc.compile.backend import CompilerBackend, EmitResult
from dynfunc.compile.utils import unit_filename
from dynfunc.data import Diagnostic, DiagnosticSeverity, ReferenceSet
from dynfunc.errors import LoadError
from dynfunc.logging import get_logger

logger = get_logger("PythonBackend")

# warnings.catch_warnings swaps process-wide state
_warnings_lock = threading.Lock()


class PythonBackend(CompilerBackend):
    """Compile snippets with :func:`ast.parse` and :func:`compile`, load them with ``exec``.

    Syntax errors become error diagnostics. Syntax and deprecation warnings raised while
    compiling become warning diagnostics, escalated to errors when
    ``warnings_as_errors`` is set. An exception escaping the module body while loading,
    ``SystemExit`` included, becomes a single error diagnostic located at the innermost
    snippet line.
    """

    name: ClassVar[str] = "python"

    _WARNING_CATEGORIES: ClassVar[Tuple[type, ...]] = (SyntaxWarning, DeprecationWarning)
    """Warning categories reported as diagnostics."""

    def __init__(self, warnings_as_errors: bool = False, register_modules: bool = True) -> None:
        """Initialize the backend.

        Parameters
        ----------
        warnings_as_errors : bool
            Escalate compiler warnings to error diagnostics. Default is False.
        register_modules : bool
            Register loaded units in ``sys.modules``. Default is True.
        """
        self._warnings_as_errors = warnings_as_errors
        self._register_modules = register_modules

    def emit(self, source: str, unit_name: str) -> EmitResult:
        filename = unit_filename(unit_name)
        diagnostics: List[Diagnostic] = []
        code = None
        with _warnings_lock, warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            try:
                tree = ast.parse(source, filename=filename)
                code = compile(tree, filename, "exec", dont_inherit=True)
            except SyntaxError as e:
                diagnostics.append(self._syntax_error_diagnostic(e))
            except ValueError as e:
                # Source containing null bytes
                diagnostics.append(Diagnostic(code=type(e).__name__, message=str(e)))

        diagnostics.extend(self._warning_diagnostics(caught, filename))
        return EmitResult(artifact=code, diagnostics=diagnostics)

    def load(
        self, artifact: Any, source: str, unit_name: str, references: ReferenceSet
    ) -> types.ModuleType:
        filename = unit_filename(unit_name)
        module = types.ModuleType(unit_name)
        module.__file__ = filename
        module.__dict__.update(references.bindings())

        # Tracebacks raised from snippet functions show the snippet lines
        linecache.cache[filename] = (len(source), None, source.splitlines(True), filename)
        if self._register_modules:
            sys.modules[unit_name] = module

        try:
            exec(artifact, module.__dict__)
        except (Exception, SystemExit) as e:
            if self._register_modules:
                sys.modules.pop(unit_name, None)
            linecache.cache.pop(filename, None)
            diagnostic = Diagnostic(
                code=type(e).__name__,
                message=str(e) or type(e).__name__,
                line=self._innermost_line(e, filename),
            )
            raise LoadError(f"Failed to load unit '{unit_name}': {e}", [diagnostic]) from e

        logger.debug(f"Loaded unit '{unit_name}' with {len(references.loaded)} references")
        return module

    @staticmethod
    def _syntax_error_diagnostic(error: SyntaxError) -> Diagnostic:
        line = (error.lineno or 1) - 1
        column = (error.offset or 1) - 1
        return Diagnostic(
            code=type(error).__name__,
            message=error.msg or str(error),
            line=max(line, 0),
            column=max(column, 0),
        )

    def _warning_diagnostics(
        self, caught: List[warnings.WarningMessage], filename: str
    ) -> List[Diagnostic]:
        diagnostics: List[Diagnostic] = []
        seen: Set[Tuple[str, str, int]] = set()
        for warning in caught:
            if not issubclass(warning.category, self._WARNING_CATEGORIES):
                continue
            if warning.filename != filename:
                continue
            key = (warning.category.__name__, str(warning.message), warning.lineno or 1)
            if key in seen:
                continue
            seen.add(key)
            diagnostics.append(
                Diagnostic(
                    code=warning.category.__name__,
                    message=str(warning.message),
                    line=max((warning.lineno or 1) - 1, 0),
                    severity=DiagnosticSeverity.WARNING,
                    escalated=self._warnings_as_errors,
                )
            )
        return diagnostics

    @staticmethod
    def _innermost_line(error: BaseException, filename: str) -> int:
        """Zero-based line of the innermost traceback frame inside the snippet."""
        line = 0
        for frame in traceback.extract_tb(error.__traceback__):
            if frame.filename == filename and frame.lineno:
                line = frame.lineno - 1
        if isinstance(error, SyntaxError) and error.filename == filename and error.lineno:
            line = error.lineno - 1
        return line
