"""The set of module references inferred for a snippet."""

from __future__ import annotations

import sys
from types import ModuleType
from typing import Dict, FrozenSet

from pydantic import Field, PrivateAttr

from .utils import BaseModelWithDocstrings


class ReferenceSet(BaseModelWithDocstrings):
    """Module names a snippet needs in order to compile, plus the outcome of loading them.

    A ReferenceSet is produced fresh for every compilation and never persisted. The
    loaded module objects are held privately; use :meth:`bindings` to get the global
    names a backend should expose to the snippet.
    """

    modules: FrozenSet[str] = Field(default_factory=frozenset)
    """Every detected module name, including the base set."""
    skipped: Dict[str, str] = Field(default_factory=dict)
    """Detected module names that could not be loaded, mapped to the loader's error message."""

    _loaded: Dict[str, ModuleType] = PrivateAttr(default_factory=dict)

    @property
    def loaded(self) -> Dict[str, ModuleType]:
        """Module objects keyed by their full dotted name."""
        return self._loaded

    def add_loaded(self, name: str, module: ModuleType) -> None:
        self._loaded[name] = module

    def bindings(self) -> Dict[str, ModuleType]:
        """Global names under which the loaded modules are visible to a snippet.

        A dotted reference such as ``urllib.request`` is bound under its top-level
        package name, the same name an ``import urllib.request`` statement would bind.
        """
        result: Dict[str, ModuleType] = {}
        for name, module in sorted(self._loaded.items()):
            top_level = name.split(".", 1)[0]
            if top_level == name:
                result[top_level] = module
            else:
                result.setdefault(top_level, sys.modules.get(top_level, module))
        return result

    def __contains__(self, name: object) -> bool:
        return name in self.modules

    def __len__(self) -> int:
        return len(self.modules)
