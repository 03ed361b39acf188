from dynfunc.api import (
    adapt,
    adapt_typed,
    compile,
    compile_from_path,
    get_compiler,
    get_rule_registry,
    invoke,
    list_entry_points,
    register_rule,
    set_compiler,
)
from dynfunc.compile import (
    Compiler,
    CompilerBackend,
    CompilerConfig,
    DetectionRule,
    PythonBackend,
    ReferenceResolver,
    RuleRegistry,
)
from dynfunc.data import (
    CompilationResult,
    CompiledUnit,
    Diagnostic,
    DiagnosticSeverity,
    EntryPoint,
    InvocationResult,
    ParameterSpec,
    ReferenceSet,
    TypeTag,
    ValidationOutcome,
    ValidationRule,
)
from dynfunc.errors import (
    AdaptError,
    ArgumentMismatchError,
    ArityExceededError,
    DynfuncError,
    EmptySourceError,
    InvocationError,
    LoadError,
    ReturnTypeMismatchError,
    ShapeMismatchError,
    UnsupportedShapeError,
)
from dynfunc.invoke import TypedCallable, validate
from dynfunc.logging import configure_logging, get_logger

__all__ = [
    # Main API
    "compile",
    "compile_from_path",
    "list_entry_points",
    "adapt",
    "adapt_typed",
    "invoke",
    "register_rule",
    "validate",
    "get_compiler",
    "set_compiler",
    "get_rule_registry",
    # Compiler types
    "Compiler",
    "CompilerBackend",
    "CompilerConfig",
    "DetectionRule",
    "PythonBackend",
    "ReferenceResolver",
    "RuleRegistry",
    "TypedCallable",
    # Data types
    "CompilationResult",
    "CompiledUnit",
    "Diagnostic",
    "DiagnosticSeverity",
    "EntryPoint",
    "InvocationResult",
    "ParameterSpec",
    "ReferenceSet",
    "TypeTag",
    "ValidationOutcome",
    "ValidationRule",
    # Errors
    "AdaptError",
    "ArgumentMismatchError",
    "ArityExceededError",
    "DynfuncError",
    "EmptySourceError",
    "InvocationError",
    "LoadError",
    "ReturnTypeMismatchError",
    "ShapeMismatchError",
    "UnsupportedShapeError",
    "configure_logging",
    "get_logger",
]
