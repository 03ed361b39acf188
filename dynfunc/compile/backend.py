"""Abstract base class for compiler backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, ClassVar, List, Optional

from dynfunc.data import Diagnostic, ReferenceSet


@dataclass
class EmitResult:
    """What a backend produced from the snippet text, before loading."""

    artifact: Optional[Any]
    """The loadable artifact (e.g. a code object), or None when compilation failed."""
    diagnostics: List[Diagnostic] = field(default_factory=list)
    """Every diagnostic reported, including warnings that were not escalated."""

    @property
    def errors(self) -> List[Diagnostic]:
        """Diagnostics at error severity, including escalated warnings, in source order."""
        errors = [diagnostic for diagnostic in self.diagnostics if diagnostic.is_error]
        return sorted(errors, key=lambda diagnostic: (diagnostic.line, diagnostic.column))

    @property
    def success(self) -> bool:
        return self.artifact is not None and not self.errors


class CompilerBackend(ABC):
    """Abstract base class for turning snippet text into a loaded module.

    A backend works in two steps. :meth:`emit` compiles the text into an in-memory
    artifact or reports diagnostics; :meth:`load` executes the artifact into a fresh
    module whose namespace already holds the resolved references.

    Subclasses must implement all its abstract methods.
    """

    name: ClassVar[str] = "abstract"
    """Short backend identifier recorded in unit metadata."""

    @abstractmethod
    def emit(self, source: str, unit_name: str) -> EmitResult:
        """Compile the snippet text into an in-memory artifact.

        Parameters
        ----------
        source : str
            The snippet text.
        unit_name : str
            The module name the unit will be loaded under.

        Returns
        -------
        EmitResult
            The artifact, or None with diagnostics explaining the failure.
        """
        ...

    @abstractmethod
    def load(
        self, artifact: Any, source: str, unit_name: str, references: ReferenceSet
    ) -> ModuleType:
        """Load an emitted artifact into the process.

        Parameters
        ----------
        artifact : Any
            The artifact returned by :meth:`emit`.
        source : str
            The snippet text the artifact was compiled from.
        unit_name : str
            The module name to load the unit under.
        references : ReferenceSet
            The resolved references to expose to the unit.

        Returns
        -------
        ModuleType
            The loaded module.

        Raises
        ------
        LoadError
            If executing the unit fails. The error carries diagnostics.
        """
        ...
