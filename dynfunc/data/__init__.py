"""Data layer with strongly-typed models for dynfunc."""

from .reference import ReferenceSet
from .result import (
    CompilationResult,
    Diagnostic,
    DiagnosticSeverity,
    InvocationResult,
    ValidationOutcome,
    ValidationRule,
)
from .signature import (
    EntryPoint,
    ParameterKind,
    ParameterSpec,
    TypeTag,
    matches_tag,
    python_types_for,
    tag_for_annotation,
)
from .unit import CompiledUnit, UnitMetadata
from .utils import hash_source

__all__ = [
    # Reference types
    "ReferenceSet",
    # Result types
    "CompilationResult",
    "Diagnostic",
    "DiagnosticSeverity",
    "InvocationResult",
    "ValidationOutcome",
    "ValidationRule",
    # Signature types
    "EntryPoint",
    "ParameterKind",
    "ParameterSpec",
    "TypeTag",
    "matches_tag",
    "python_types_for",
    "tag_for_annotation",
    # Unit types
    "CompiledUnit",
    "UnitMetadata",
    "hash_source",
]
