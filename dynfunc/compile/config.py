"""Configuration for the compilation orchestrator."""

from __future__ import annotations

from typing import List

from pydantic import Field

from dynfunc.data.utils import BaseModelWithDocstrings
from dynfunc.env import get_dynfunc_register_modules, get_dynfunc_warnings_as_errors

from .builtin_rules import BASE_REFERENCES


class CompilerConfig(BaseModelWithDocstrings):
    """Configuration for compiling snippets.

    Boolean switches default to the DYNFUNC_* environment variables read in
    :mod:`dynfunc.env`.
    """

    base_references: List[str] = Field(default_factory=lambda: list(BASE_REFERENCES))
    """Modules every snippet is compiled against, regardless of detection."""
    warnings_as_errors: bool = Field(default_factory=get_dynfunc_warnings_as_errors)
    """Escalate compiler warnings (e.g. SyntaxWarning) to error diagnostics."""
    register_modules: bool = Field(default_factory=get_dynfunc_register_modules)
    """Register loaded units in ``sys.modules`` under their unit name."""
    unit_prefix: str = Field(default="dynfunc_snippet_", pattern=r"^[A-Za-z_]\w*$")
    """Prefix of the module name given to every compiled unit."""
