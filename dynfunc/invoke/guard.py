"""Guarded invocation: runtime faults come back as data."""

from __future__ import annotations

from typing import Any, Callable, Optional

from dynfunc.data import InvocationResult
from dynfunc.errors import InvocationError
from dynfunc.logging import get_logger

logger = get_logger("ExecutionGuard")


def _root_cause(error: BaseException) -> BaseException:
    """Unwrap invocation wrappers that carry the original fault as their cause."""
    while isinstance(error, InvocationError) and error.__cause__ is not None:
        error = error.__cause__
    return error


def invoke(callable_: Optional[Callable[..., Any]], *args: Any) -> InvocationResult:
    """Call a callable and report the outcome as an :class:`InvocationResult`.

    Any exception raised by the call is captured, including ``SystemExit`` raised by
    ``sys.exit()``. ``KeyboardInterrupt`` propagates. When the exception wraps the
    original fault, the original fault's message is reported.

    Parameters
    ----------
    callable_ : Optional[Callable[..., Any]]
        The callable, usually a :class:`~dynfunc.invoke.TypedCallable`.
    args : Any
        Positional arguments for the call.

    Returns
    -------
    InvocationResult
        The returned value, or the fault's message and type.

    Raises
    ------
    ValueError
        If ``callable_`` is None.
    """
    if callable_ is None:
        raise ValueError("callable must not be None")

    try:
        value = callable_(*args)
    except (Exception, SystemExit) as e:
        cause = _root_cause(e)
        logger.debug(f"Invocation of {callable_!r} failed: {type(cause).__name__}: {cause}")
        return InvocationResult.failed(str(cause) or type(cause).__name__, type(cause).__name__)
    return InvocationResult.ok(value)
