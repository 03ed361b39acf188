"""Signature rules deciding which entry points can become typed callables."""

from __future__ import annotations

import collections.abc
import typing
from typing import Any, FrozenSet

from dynfunc.data import EntryPoint, TypeTag, ValidationOutcome, ValidationRule

MAX_PARAMETERS = 16
"""The most parameters a typed callable can hold."""

ALLOWED_TYPES: FrozenSet[TypeTag] = frozenset(
    {
        TypeTag.BOOL,
        TypeTag.INT,
        TypeTag.FLOAT,
        TypeTag.DECIMAL,
        TypeTag.STR,
        TypeTag.DATETIME,
        TypeTag.DATE,
        TypeTag.TIME,
        TypeTag.TIMEDELTA,
        TypeTag.UUID,
    }
)
"""Primitive shapes allowed as parameters and return values. Collections and other
reference-shaped values are excluded: a typed callable cannot check them losslessly."""


def is_allowed_type(tag: TypeTag) -> bool:
    return tag in ALLOWED_TYPES


def validate(entry_point: EntryPoint) -> ValidationOutcome:
    """Check an entry point against the signature rules.

    Rules are checked in order and the first failing one decides the reason:

    1. The entry point is callable without an instance.
    2. The return type is in the whitelist.
    3. There are at most ``MAX_PARAMETERS`` parameters.
    4. Every parameter is positional and its type is in the whitelist.

    Parameters
    ----------
    entry_point : EntryPoint
        The entry point to check.

    Returns
    -------
    ValidationOutcome
        Valid, or the first failing rule and why it failed.
    """
    if not entry_point.is_static:
        return ValidationOutcome.failed(
            ValidationRule.STATELESS, f"'{entry_point.qualname}' requires an instance"
        )

    if not is_allowed_type(entry_point.return_type):
        return ValidationOutcome.failed(
            ValidationRule.RETURN_TYPE,
            f"Return type {entry_point.return_annotation} is not allowed, only primitive "
            f"types and str are supported",
        )

    if entry_point.arity > MAX_PARAMETERS:
        return ValidationOutcome.failed(
            ValidationRule.ARITY,
            f"Parameter count exceeds the limit of {MAX_PARAMETERS}, got {entry_point.arity}",
        )

    for param in entry_point.parameters:
        if not param.is_positional:
            return ValidationOutcome.failed(
                ValidationRule.PARAMETER_TYPE,
                f"Parameter {param.name} is {param.kind.value.replace('_', ' ')}, only "
                f"positional parameters are supported",
            )
        if not is_allowed_type(param.type):
            return ValidationOutcome.failed(
                ValidationRule.PARAMETER_TYPE,
                f"Parameter {param.name} of type {param.annotation} is not allowed, only "
                f"primitive types and str are supported",
            )

    return ValidationOutcome.success()


def is_valid_callable_shape(shape: Any) -> bool:
    """Check whether ``shape`` names an exact callable shape.

    A valid shape is ``Callable[[T1, ..., Tn], R]`` with an explicit parameter list of at
    most ``MAX_PARAMETERS`` entries. ``Callable[..., R]`` and bare ``Callable`` are not
    exact and are rejected.
    """
    if typing.get_origin(shape) is not collections.abc.Callable:
        return False
    args = typing.get_args(shape)
    if len(args) != 2 or not isinstance(args[0], list):
        return False
    return len(args[0]) <= MAX_PARAMETERS
