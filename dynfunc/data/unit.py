"""Loaded units produced by a successful compilation."""

from __future__ import annotations

from types import ModuleType
from typing import Any, Dict, FrozenSet, List

from pydantic import Field

from .utils import BaseModelWithDocstrings, NonEmptyString


class UnitMetadata(BaseModelWithDocstrings):
    """Metadata about a compiled unit.

    This class stores information about how a unit was compiled: its module name, the
    hash of the source it was compiled from and the references it was compiled against.
    """

    name: NonEmptyString
    """The module name the unit was loaded under (e.g. 'dynfunc_snippet_3fa2b1c4d5e6_0')."""
    source_hash: NonEmptyString
    """SHA-256 hex digest of the snippet text."""
    references: FrozenSet[str] = Field(default_factory=frozenset)
    """Module references that were bound into the unit namespace."""
    skipped_references: List[str] = Field(default_factory=list)
    """Detected references that could not be loaded and were left out."""
    misc: Dict[str, Any] = Field(default_factory=dict)
    """Miscellaneous metadata. Contents vary by backend."""


class CompiledUnit:
    """A loaded, executable module compiled from a snippet.

    A CompiledUnit is owned by the :class:`~dynfunc.data.CompilationResult` that names
    it. The underlying module stays in process memory for as long as it is referenced,
    and for the life of the process when the backend registers it in ``sys.modules``.
    """

    metadata: UnitMetadata
    """Metadata about the compilation that produced the unit."""

    _module: ModuleType
    """The loaded module."""
    _source: str
    """The snippet text the module was compiled from."""

    def __init__(self, module: ModuleType, source: str, metadata: UnitMetadata) -> None:
        self._module = module
        self._source = source
        self.metadata = metadata

    @property
    def module(self) -> ModuleType:
        return self._module

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def source(self) -> str:
        return self._source

    def __repr__(self) -> str:
        return f"CompiledUnit(name={self.metadata.name!r})"
