"""Strong-typed descriptions of entry point signatures."""

from __future__ import annotations

import datetime
import decimal
import inspect
import uuid
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import Field, PrivateAttr

from .utils import BaseModelWithDocstrings, NonEmptyString


class TypeTag(str, Enum):
    """Primitive-shaped tag for a parameter or return annotation.

    Annotations that do not map onto one of the primitive tags are tagged ``OTHER``;
    missing annotations are tagged ``ANY``.
    """

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    COMPLEX = "complex"
    DECIMAL = "decimal"
    STR = "str"
    BYTES = "bytes"
    DATETIME = "datetime"
    DATE = "date"
    TIME = "time"
    TIMEDELTA = "timedelta"
    UUID = "uuid"
    NONE = "none"
    ANY = "any"
    OTHER = "other"


# bool before int and datetime before date: both are subclasses of the later entry.
_TAG_BY_TYPE: List[Tuple[type, TypeTag]] = [
    (bool, TypeTag.BOOL),
    (int, TypeTag.INT),
    (float, TypeTag.FLOAT),
    (complex, TypeTag.COMPLEX),
    (decimal.Decimal, TypeTag.DECIMAL),
    (str, TypeTag.STR),
    (bytes, TypeTag.BYTES),
    (datetime.datetime, TypeTag.DATETIME),
    (datetime.date, TypeTag.DATE),
    (datetime.time, TypeTag.TIME),
    (datetime.timedelta, TypeTag.TIMEDELTA),
    (uuid.UUID, TypeTag.UUID),
]

_TAG_BY_NAME: Dict[str, TypeTag] = {
    "bool": TypeTag.BOOL,
    "int": TypeTag.INT,
    "float": TypeTag.FLOAT,
    "complex": TypeTag.COMPLEX,
    "Decimal": TypeTag.DECIMAL,
    "decimal.Decimal": TypeTag.DECIMAL,
    "str": TypeTag.STR,
    "bytes": TypeTag.BYTES,
    "datetime": TypeTag.DATETIME,
    "datetime.datetime": TypeTag.DATETIME,
    "date": TypeTag.DATE,
    "datetime.date": TypeTag.DATE,
    "time": TypeTag.TIME,
    "datetime.time": TypeTag.TIME,
    "timedelta": TypeTag.TIMEDELTA,
    "datetime.timedelta": TypeTag.TIMEDELTA,
    "UUID": TypeTag.UUID,
    "uuid.UUID": TypeTag.UUID,
    "None": TypeTag.NONE,
}


def tag_for_annotation(annotation: Any) -> TypeTag:
    """Map a resolved annotation (or its source string) onto a :class:`TypeTag`.

    Only exact types are recognized; subclasses and generic aliases such as
    ``List[int]`` are tagged ``OTHER``.
    """
    if annotation is inspect.Parameter.empty or annotation is inspect.Signature.empty:
        return TypeTag.ANY
    if annotation is None or annotation is type(None):
        return TypeTag.NONE
    if isinstance(annotation, str):
        return _TAG_BY_NAME.get(annotation.strip(), TypeTag.OTHER)
    for python_type, tag in _TAG_BY_TYPE:
        if annotation is python_type:
            return tag
    return TypeTag.OTHER


def python_types_for(tag: TypeTag) -> Tuple[type, ...]:
    """Return the runtime types accepted for a value tagged ``tag``.

    ``FLOAT`` also accepts ``int`` and ``COMPLEX`` accepts both, following the
    numeric tower. ``NONE`` accepts only ``None``; ``ANY`` and ``OTHER`` accept nothing
    because they are never adapted.
    """
    if tag == TypeTag.FLOAT:
        return (float, int)
    if tag == TypeTag.COMPLEX:
        return (complex, float, int)
    if tag == TypeTag.NONE:
        return (type(None),)
    for python_type, candidate in _TAG_BY_TYPE:
        if candidate == tag:
            return (python_type,)
    return ()


def matches_tag(value: Any, tag: TypeTag) -> bool:
    """Check whether a runtime value fits a primitive tag.

    ``bool`` never satisfies a numeric tag and ``datetime`` never satisfies ``DATE``.
    """
    accepted = python_types_for(tag)
    if not accepted:
        return False
    if isinstance(value, bool) and tag != TypeTag.BOOL:
        return False
    if isinstance(value, datetime.datetime) and tag == TypeTag.DATE:
        return False
    return isinstance(value, accepted)


class ParameterKind(str, Enum):
    """How a parameter may be supplied. Mirrors :class:`inspect.Parameter` kinds."""

    POSITIONAL_ONLY = "positional_only"
    POSITIONAL_OR_KEYWORD = "positional_or_keyword"
    VAR_POSITIONAL = "var_positional"
    KEYWORD_ONLY = "keyword_only"
    VAR_KEYWORD = "var_keyword"


class ParameterSpec(BaseModelWithDocstrings):
    """One declared parameter of an entry point."""

    name: NonEmptyString
    """The parameter name as declared in the snippet."""
    type: TypeTag
    """The primitive tag of the parameter annotation."""
    annotation: str = "<empty>"
    """The annotation rendered as text, for messages."""
    kind: ParameterKind = ParameterKind.POSITIONAL_OR_KEYWORD
    """How the parameter is passed."""

    @property
    def is_positional(self) -> bool:
        return self.kind in (ParameterKind.POSITIONAL_ONLY, ParameterKind.POSITIONAL_OR_KEYWORD)


class EntryPoint(BaseModelWithDocstrings):
    """A discoverable, publicly callable function inside a compiled unit.

    The model carries the signature as plain data. The function object itself is held
    in a private attribute and exposed through :attr:`function`.
    """

    name: NonEmptyString
    """The function name (e.g. 'add')."""
    qualname: NonEmptyString
    """The qualified name inside the unit (e.g. 'Calculator.add')."""
    owner: Optional[str] = Field(default=None)
    """Name of the top-level class declaring the function, or None for module functions."""
    parameters: List[ParameterSpec] = Field(default_factory=list)
    """Declared parameters in order."""
    return_type: TypeTag
    """The primitive tag of the return annotation."""
    return_annotation: str = "<empty>"
    """The return annotation rendered as text, for messages."""
    is_static: bool = True
    """Whether the function can be called without an instance."""

    _function: Optional[Callable[..., Any]] = PrivateAttr(default=None)

    @property
    def parameter_types(self) -> List[TypeTag]:
        """The ordered parameter tags."""
        return [param.type for param in self.parameters]

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def function(self) -> Optional[Callable[..., Any]]:
        """The bound snippet function, or None if the entry point was built from data only."""
        return self._function

    def bind(self, function: Callable[..., Any]) -> "EntryPoint":
        """Attach the snippet function this entry point describes. Returns self."""
        self._function = function
        return self
