"""Exception hierarchy for dynfunc.

Compilation failures and invocation faults are reported as data
(:class:`~dynfunc.data.CompilationResult`, :class:`~dynfunc.data.InvocationResult`).
The exceptions below are raised for API misuse: bad preconditions and callables that
cannot be built for an entry point.
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from dynfunc.data import Diagnostic


class DynfuncError(Exception):
    """Base class of all dynfunc errors."""


class EmptySourceError(DynfuncError, ValueError):
    """Raised when the source text or the source path is absent, empty or whitespace."""


class AdaptError(DynfuncError, TypeError):
    """Raised when an entry point cannot be adapted into a typed callable."""


class UnsupportedShapeError(AdaptError):
    """Raised when the entry point uses a parameter or return shape outside the whitelist."""


class ArityExceededError(UnsupportedShapeError):
    """Raised when the entry point declares more parameters than any callable shape holds."""


class ShapeMismatchError(AdaptError):
    """Raised when a typed adapt does not match the shape the caller asked for."""


class InvocationError(DynfuncError):
    """Raised by a typed callable while it is being invoked."""


class ArgumentMismatchError(InvocationError, TypeError):
    """Raised when the supplied arguments do not fit the callable's slots."""


class ReturnTypeMismatchError(InvocationError, TypeError):
    """Raised when the snippet function returns a value outside its declared return type."""


class LoadError(DynfuncError):
    """Raised by a compiler backend when a compiled unit cannot be loaded.

    The orchestrator turns it into a failed compilation result carrying ``diagnostics``.
    """

    def __init__(self, message: str, diagnostics: Optional[List["Diagnostic"]] = None) -> None:
        super().__init__(message)
        self.diagnostics = list(diagnostics or [])
