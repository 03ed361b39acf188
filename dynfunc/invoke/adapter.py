"""Typed, fixed-arity callables bound to snippet entry points."""

from __future__ import annotations

import typing
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple, Type

from dynfunc.data import EntryPoint, TypeTag, ValidationRule, matches_tag, tag_for_annotation
from dynfunc.errors import (
    AdaptError,
    ArgumentMismatchError,
    ArityExceededError,
    ReturnTypeMismatchError,
    ShapeMismatchError,
    UnsupportedShapeError,
)
from dynfunc.logging import get_logger

from .validator import MAX_PARAMETERS, is_valid_callable_shape, validate

logger = get_logger("CallableAdapter")

MAX_SLOTS = MAX_PARAMETERS + 1
"""Parameter slots plus the return slot of the widest callable shape."""


class TypedCallable:
    """A callable bound to one entry point, with fixed parameter and return slots.

    Concrete shapes ``Func0`` ... ``Func16`` fix :attr:`ARITY`. Each call checks the
    argument count and the argument types against the slots, calls the snippet function
    and checks the returned value against the return slot. The slots never change after
    construction.
    """

    ARITY: ClassVar[int]
    """Number of parameter slots."""

    entry_point: EntryPoint
    """A copy of the entry point the callable is bound to."""

    _function: Callable[..., Any]
    """The snippet function."""
    _parameter_types: Tuple[TypeTag, ...]
    _return_type: TypeTag

    def __init__(self, entry_point: EntryPoint) -> None:
        if entry_point.function is None:
            raise AdaptError(f"Entry point '{entry_point.qualname}' is not bound to a function")
        if entry_point.arity != self.ARITY:
            raise AdaptError(
                f"{type(self).__name__} takes {self.ARITY} parameters, "
                f"'{entry_point.qualname}' declares {entry_point.arity}"
            )
        self.entry_point = entry_point.model_copy(deep=True).bind(entry_point.function)
        self._function = entry_point.function
        self._parameter_types = tuple(entry_point.parameter_types)
        self._return_type = entry_point.return_type

    @property
    def parameter_types(self) -> Tuple[TypeTag, ...]:
        return self._parameter_types

    @property
    def return_type(self) -> TypeTag:
        return self._return_type

    @property
    def slot_types(self) -> Tuple[TypeTag, ...]:
        """Parameter types followed by the return type."""
        return self._parameter_types + (self._return_type,)

    def matches(self, parameter_types: Tuple[TypeTag, ...], return_type: TypeTag) -> bool:
        return tuple(parameter_types) == self._parameter_types and return_type == self._return_type

    def __call__(self, *args: Any) -> Any:
        if len(args) != self.ARITY:
            raise ArgumentMismatchError(
                f"{self.entry_point.qualname}() takes {self.ARITY} arguments, got {len(args)}"
            )
        for index, (value, tag) in enumerate(zip(args, self._parameter_types)):
            if not matches_tag(value, tag):
                param = self.entry_point.parameters[index]
                raise ArgumentMismatchError(
                    f"Argument {param.name} of {self.entry_point.qualname}() must be "
                    f"{tag.value}, got {type(value).__name__}"
                )

        value = self._function(*args)
        if not matches_tag(value, self._return_type):
            raise ReturnTypeMismatchError(
                f"{self.entry_point.qualname}() must return {self._return_type.value}, "
                f"got {type(value).__name__}"
            )
        return value

    def __repr__(self) -> str:
        slots = ", ".join(tag.value for tag in self.slot_types)
        return f"{type(self).__name__}[{slots}]({self.entry_point.qualname})"


def _make_shape(arity: int) -> Type[TypedCallable]:
    return type(
        f"Func{arity}",
        (TypedCallable,),
        {
            "ARITY": arity,
            "__doc__": f"Typed callable with {arity} parameter slots and one return slot.",
            "__module__": __name__,
        },
    )


_CALLABLE_SHAPES: Dict[int, Type[TypedCallable]] = {
    arity + 1: _make_shape(arity) for arity in range(MAX_PARAMETERS + 1)
}
"""Callable shapes keyed by slot count (parameters + 1)."""


def get_callable_shape(slot_count: int) -> Optional[Type[TypedCallable]]:
    """Get the callable shape holding ``slot_count`` slots, parameters plus return.

    Returns
    -------
    Optional[Type[TypedCallable]]
        The shape, or None when no shape has that many slots.
    """
    return _CALLABLE_SHAPES.get(slot_count)


def adapt(entry_point: Optional[EntryPoint]) -> TypedCallable:
    """Build a typed callable bound to an entry point.

    The shape is selected by slot count and instantiated with the entry point's
    parameter and return types. Adapting the same entry point twice yields two
    independent callables.

    Parameters
    ----------
    entry_point : Optional[EntryPoint]
        The entry point to adapt.

    Returns
    -------
    TypedCallable
        The callable.

    Raises
    ------
    ValueError
        If ``entry_point`` is None.
    ArityExceededError
        If the entry point declares more parameters than the widest shape holds.
    UnsupportedShapeError
        If any other signature rule fails.
    """
    if entry_point is None:
        raise ValueError("entry_point must not be None")

    outcome = validate(entry_point)
    if not outcome.valid:
        message = f"Entry point '{entry_point.qualname}' cannot be adapted: {outcome.reason}"
        if outcome.rule == ValidationRule.ARITY:
            raise ArityExceededError(message)
        raise UnsupportedShapeError(message)

    shape = get_callable_shape(entry_point.arity + 1)
    if shape is None:
        raise ArityExceededError(
            f"No callable shape holds {entry_point.arity + 1} slots, the limit is {MAX_SLOTS}"
        )
    callable_ = shape(entry_point)
    logger.debug(f"Adapted {callable_!r}")
    return callable_


def adapt_typed(entry_point: Optional[EntryPoint], shape: Any) -> Callable[..., Any]:
    """Build a typed callable and check it against the shape the caller expects.

    Parameters
    ----------
    entry_point : Optional[EntryPoint]
        The entry point to adapt.
    shape : Any
        The expected shape as a ``Callable[[T1, ..., Tn], R]`` annotation, e.g.
        ``Callable[[int, int], int]``.

    Returns
    -------
    Callable[..., Any]
        The callable, typed as ``shape``.

    Raises
    ------
    AdaptError
        If ``shape`` is not an exact ``Callable[[...], R]`` annotation.
    ShapeMismatchError
        If the entry point's parameter or return types differ from ``shape``.

    Examples
    --------
    >>> square = adapt_typed(entry_point, Callable[[int], int])
    >>> square(5)
    25
    """
    if not is_valid_callable_shape(shape):
        raise AdaptError(f"Expected an exact Callable[[...], R] shape, got {shape!r}")

    callable_ = adapt(entry_point)
    parameter_annotations, return_annotation = typing.get_args(shape)
    expected_parameters = tuple(tag_for_annotation(arg) for arg in parameter_annotations)
    expected_return = tag_for_annotation(return_annotation)
    if not callable_.matches(expected_parameters, expected_return):
        raise ShapeMismatchError(
            f"Cannot cast {callable_!r} to "
            f"Func{len(expected_parameters)}"
            f"[{', '.join(tag.value for tag in expected_parameters + (expected_return,))}]"
        )
    return typing.cast(Callable[..., Any], callable_)
