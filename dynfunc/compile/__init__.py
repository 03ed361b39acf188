"""Compiler subsystem package.

This package turns snippet text into loaded units. It includes:
- RuleRegistry / DetectionRule: heuristics mapping snippet text to module references
- ReferenceResolver: detects and loads the references a snippet needs
- CompilerBackend: abstract base class for the compile-and-load step
- PythonBackend: the CPython implementation of CompilerBackend
- Compiler: the orchestrator returning CompilationResult

The typical workflow is:
1. Create a compiler: compiler = Compiler()
2. Compile a snippet: result = compiler.compile(source)
3. On success, enumerate result.unit with dynfunc.invoke.list_entry_points
"""

from .backend import CompilerBackend, EmitResult
from .backends import PythonBackend
from .builtin_rules import BASE_REFERENCES, BUILTIN_RULES
from .compiler import Compiler
from .config import CompilerConfig
from .resolver import (
    ModuleLoader,
    ReferenceResolver,
    analyze_used_types,
    extract_import_statements,
    infer_modules_from_usage,
)
from .rules import DetectionRule, RuleRegistry, api_rule

__all__ = [
    "BASE_REFERENCES",
    "BUILTIN_RULES",
    "Compiler",
    "CompilerBackend",
    "CompilerConfig",
    "DetectionRule",
    "EmitResult",
    "ModuleLoader",
    "PythonBackend",
    "ReferenceResolver",
    "RuleRegistry",
    "analyze_used_types",
    "api_rule",
    "extract_import_statements",
    "infer_modules_from_usage",
]
