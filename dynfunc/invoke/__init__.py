"""Entry point discovery, signature validation, typed adaptation and guarded invocation."""

from .adapter import (
    MAX_SLOTS,
    TypedCallable,
    adapt,
    adapt_typed,
    get_callable_shape,
)
from .catalog import describe_function, list_entry_points
from .guard import invoke
from .validator import (
    ALLOWED_TYPES,
    MAX_PARAMETERS,
    is_allowed_type,
    is_valid_callable_shape,
    validate,
)

__all__ = [
    "ALLOWED_TYPES",
    "MAX_PARAMETERS",
    "MAX_SLOTS",
    "TypedCallable",
    "adapt",
    "adapt_typed",
    "describe_function",
    "get_callable_shape",
    "invoke",
    "is_allowed_type",
    "is_valid_callable_shape",
    "list_entry_points",
    "validate",
]
