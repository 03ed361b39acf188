"""Process-wide entry points of dynfunc.

The functions here operate on a shared :class:`Compiler` whose rule registry is the
process-wide detection rule registry. Rules registered with :func:`register_rule`
affect every later compilation through this module.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from .compile import Compiler, RuleRegistry
from .data import CompilationResult, CompiledUnit, EntryPoint, InvocationResult
from .invoke import TypedCallable
from .invoke import adapt as _adapt
from .invoke import adapt_typed as _adapt_typed
from .invoke import invoke as _invoke
from .invoke import list_entry_points as _list_entry_points

_global_compiler: Optional[Compiler] = None
_global_compiler_lock = threading.Lock()


def get_compiler() -> Compiler:
    """Get the global Compiler instance, creating it with the built-in rules on first use.

    Returns
    -------
    Compiler
        The global compiler.
    """
    global _global_compiler
    if _global_compiler is None:
        with _global_compiler_lock:
            if _global_compiler is None:
                _global_compiler = Compiler(registry=RuleRegistry.with_builtin_rules())
    return _global_compiler


def set_compiler(compiler: Optional[Compiler]) -> None:
    """Set the global Compiler instance.

    Parameters
    ----------
    compiler : Optional[Compiler]
        The compiler to use, or None to recreate the default one on next use.
    """
    global _global_compiler
    with _global_compiler_lock:
        _global_compiler = compiler


def get_rule_registry() -> RuleRegistry:
    """The detection rule registry of the global compiler."""
    return get_compiler().resolver.registry


def compile(source: Optional[str]) -> CompilationResult:
    """Compile snippet text with the global compiler. See :meth:`Compiler.compile`."""
    return get_compiler().compile(source)


def compile_from_path(path: Optional[Union[str, Path]]) -> CompilationResult:
    """Compile a snippet file with the global compiler. See :meth:`Compiler.compile_from_path`."""
    return get_compiler().compile_from_path(path)


def list_entry_points(unit: Optional[CompiledUnit]) -> List[EntryPoint]:
    return _list_entry_points(unit)


def adapt(entry_point: Optional[EntryPoint]) -> TypedCallable:
    return _adapt(entry_point)


def adapt_typed(entry_point: Optional[EntryPoint], shape: Any) -> Callable[..., Any]:
    return _adapt_typed(entry_point, shape)


def invoke(callable_: Optional[Callable[..., Any]], *args: Any) -> InvocationResult:
    return _invoke(callable_, *args)


def register_rule(module: str, namespace_pattern: str, *type_patterns: str) -> None:
    """Register detection rules for a module in the process-wide registry.

    See :meth:`RuleRegistry.register_rule`.
    """
    get_rule_registry().register_rule(module, namespace_pattern, *type_patterns)
