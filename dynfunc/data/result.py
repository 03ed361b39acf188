"""Result records returned by compilation, validation and invocation."""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import ConfigDict, Field, model_validator

from .reference import ReferenceSet
from .unit import CompiledUnit
from .utils import BaseModelWithDocstrings, NonEmptyString


class DiagnosticSeverity(str, Enum):
    """Severity of a compiler diagnostic."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Diagnostic(BaseModelWithDocstrings):
    """A problem reported by the compiler backend."""

    code: NonEmptyString
    """The diagnostic identifier (e.g. 'SyntaxError', 'SyntaxWarning')."""
    message: str
    """The human-readable message."""
    line: int = Field(default=0, ge=0)
    """Zero-based line of the start of the reported location."""
    column: int = Field(default=0, ge=0)
    """Zero-based column of the start of the reported location."""
    severity: DiagnosticSeverity = DiagnosticSeverity.ERROR
    """The reported severity."""
    escalated: bool = False
    """Whether a warning was escalated to an error by configuration."""

    @property
    def is_error(self) -> bool:
        return self.severity == DiagnosticSeverity.ERROR or self.escalated

    def format(self) -> str:
        """Render the diagnostic as ``Error (<code>): <message> at line <N>``, N one-based."""
        return f"Error ({self.code}): {self.message} at line {self.line + 1}"


class CompilationResult(BaseModelWithDocstrings):
    """Outcome of compiling a snippet.

    On success the unit is present and there are no diagnostics. On failure the unit is
    absent and at least one error diagnostic explains why.
    """

    model_config = ConfigDict(use_attribute_docstrings=True, arbitrary_types_allowed=True)

    success: bool
    """Whether the snippet compiled and loaded."""
    unit: Optional[CompiledUnit] = None
    """The loaded unit, present only on success."""
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    """Error diagnostics in source order, present only on failure."""
    references: Optional[ReferenceSet] = None
    """The references the snippet was compiled against."""

    @model_validator(mode="after")
    def _validate_outcome(self) -> "CompilationResult":
        """Check that success and failure carry the fields they promise.

        Raises
        ------
        ValueError
            If a success has no unit or has diagnostics, or a failure has a unit or none.
        """
        if self.success:
            if self.unit is None:
                raise ValueError("A successful compilation must carry a unit")
            if self.diagnostics:
                raise ValueError("A successful compilation must not carry diagnostics")
        else:
            if self.unit is not None:
                raise ValueError("A failed compilation must not carry a unit")
            if not self.diagnostics:
                raise ValueError("A failed compilation must carry at least one diagnostic")
        return self

    @classmethod
    def succeeded(
        cls, unit: CompiledUnit, references: Optional[ReferenceSet] = None
    ) -> "CompilationResult":
        return cls(success=True, unit=unit, references=references)

    @classmethod
    def failed(
        cls, diagnostics: List[Diagnostic], references: Optional[ReferenceSet] = None
    ) -> "CompilationResult":
        return cls(success=False, diagnostics=diagnostics, references=references)

    @property
    def error_message(self) -> str:
        """All diagnostics formatted one per line, in source order. Empty on success."""
        return "\n".join(diagnostic.format() for diagnostic in self.diagnostics)


class ValidationRule(str, Enum):
    """Signature rules, in the order they are checked."""

    STATELESS = "stateless"
    RETURN_TYPE = "return_type"
    ARITY = "arity"
    PARAMETER_TYPE = "parameter_type"


class ValidationOutcome(BaseModelWithDocstrings):
    """Whether an entry point may be adapted into a typed callable."""

    valid: bool
    """True if every rule passed."""
    reason: str = ""
    """Why the first failing rule failed. Empty when valid."""
    rule: Optional[ValidationRule] = None
    """The first failing rule, or None when valid."""

    @classmethod
    def success(cls) -> "ValidationOutcome":
        return cls(valid=True)

    @classmethod
    def failed(cls, rule: ValidationRule, reason: str) -> "ValidationOutcome":
        return cls(valid=False, rule=rule, reason=reason)


class InvocationResult(BaseModelWithDocstrings):
    """Outcome of one guarded call."""

    success: bool
    """Whether the call returned normally."""
    value: Any = None
    """The returned value. None on failure."""
    error_message: str = ""
    """The message of the fault raised by the call. Empty on success."""
    error_type: Optional[str] = None
    """Class name of the fault raised by the call."""

    @classmethod
    def ok(cls, value: Any) -> "InvocationResult":
        return cls(success=True, value=value)

    @classmethod
    def failed(cls, error_message: str, error_type: Optional[str] = None) -> "InvocationResult":
        return cls(success=False, error_message=error_message, error_type=error_type)
