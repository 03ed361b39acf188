"""Enumeration of the entry points a compiled unit exposes."""

from __future__ import annotations

import ast
import inspect
import typing
from typing import Any, Callable, Dict, List, Optional, Tuple

from dynfunc.data import CompiledUnit, EntryPoint, ParameterKind, ParameterSpec, tag_for_annotation
from dynfunc.logging import get_logger

logger = get_logger("EntryPointCatalog")


def _render_annotation(annotation: Any) -> str:
    if annotation is inspect.Parameter.empty:
        return "<empty>"
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, type):
        return annotation.__qualname__
    return repr(annotation).replace("typing.", "")


def _resolve_hints(function: Callable[..., Any]) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(function)
    except Exception as e:
        # Unresolvable forward references; fall back to the raw annotations
        logger.debug(f"Cannot resolve type hints of '{function.__qualname__}': {e}")
        return {}


def _declaration_lines(source: str) -> Dict[str, int]:
    """Line of the last top-level ``def`` or ``class`` statement binding each name."""
    lines: Dict[str, int] = {}
    try:
        tree = ast.parse(source)
    except SyntaxError as e:
        logger.debug(f"Cannot parse unit source for declaration order: {e}")
        return lines
    for node in tree.body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            lines[node.name] = node.lineno
    return lines


def describe_function(function: Callable[..., Any], owner: Optional[str] = None) -> EntryPoint:
    """Build the entry point describing a snippet function.

    Parameters
    ----------
    function : Callable[..., Any]
        A plain function, or the function wrapped by a ``staticmethod``.
    owner : Optional[str]
        The top-level class declaring the function, or None for module functions.

    Returns
    -------
    EntryPoint
        The entry point, bound to ``function``.
    """
    signature = inspect.signature(function)
    hints = _resolve_hints(function)

    parameters: List[ParameterSpec] = []
    for name, param in signature.parameters.items():
        annotation = hints.get(name, param.annotation)
        parameters.append(
            ParameterSpec(
                name=name,
                type=tag_for_annotation(annotation),
                annotation=_render_annotation(annotation),
                kind=ParameterKind(param.kind.name.lower()),
            )
        )

    return_annotation = hints.get("return", signature.return_annotation)
    entry_point = EntryPoint(
        name=function.__name__,
        qualname=f"{owner}.{function.__name__}" if owner else function.__name__,
        owner=owner,
        parameters=parameters,
        return_type=tag_for_annotation(return_annotation),
        return_annotation=_render_annotation(return_annotation),
        is_static=True,
    )
    return entry_point.bind(function)


def list_entry_points(unit: Optional[CompiledUnit]) -> List[EntryPoint]:
    """List the entry points of a compiled unit in declaration order.

    Entry points are the public functions defined at module level by the snippet, and
    the public ``staticmethod``s declared directly in the snippet's public top-level
    classes. Imported names and ``_``-prefixed names are skipped. The list is not
    filtered on whether an entry point can be adapted.

    Parameters
    ----------
    unit : Optional[CompiledUnit]
        The compiled unit.

    Returns
    -------
    List[EntryPoint]
        The entry points, in the order the snippet declares them.

    Raises
    ------
    ValueError
        If ``unit`` is None.
    """
    if unit is None:
        raise ValueError("unit must not be None")

    module = unit.module
    positions = _declaration_lines(unit.source)
    declared: List[Tuple[float, str, Any]] = []
    for name, obj in vars(module).items():
        if name.startswith("_") or getattr(obj, "__module__", None) != module.__name__:
            continue
        if inspect.isfunction(obj) and obj.__name__ == name:
            declared.append((positions.get(name, obj.__code__.co_firstlineno), name, obj))
        elif inspect.isclass(obj) and obj.__name__ == name:
            declared.append((positions.get(name, float("inf")), name, obj))

    # Module globals keep the slot of a same-named reference bound before the body ran
    declared.sort(key=lambda item: item[0])

    entry_points: List[EntryPoint] = []
    for _, name, obj in declared:
        if inspect.isfunction(obj):
            entry_points.append(describe_function(obj))
            continue
        for attr_name, attr in vars(obj).items():
            if attr_name.startswith("_") or not isinstance(attr, staticmethod):
                continue
            entry_points.append(describe_function(attr.__func__, owner=name))
    return entry_points
