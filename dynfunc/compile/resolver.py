"""Heuristic inference of the module references a snippet needs."""

from __future__ import annotations

import importlib
import re
from types import ModuleType
from typing import Callable, Iterable, Optional, Set

from dynfunc.data import ReferenceSet
from dynfunc.logging import get_logger

from .builtin_rules import BASE_REFERENCES, TYPE_INFERENCE, USED_TYPE_FAMILIES
from .rules import RuleRegistry

logger = get_logger("ReferenceResolver")

ModuleLoader = Callable[[str], ModuleType]
"""Resolves a module name to a loaded module, raising on failure."""

_IMPORT = re.compile(r"^import\s+(.+)$")
_FROM_IMPORT = re.compile(r"^from\s+([\w.]+)\s+import\b")

_TYPE_INFERENCE = [(re.compile(pattern), module) for pattern, module in TYPE_INFERENCE]
_USED_TYPE_FAMILIES = [
    (re.compile(pattern, re.IGNORECASE), namespace) for pattern, namespace in USED_TYPE_FAMILIES
]


def extract_import_statements(code: str) -> Set[str]:
    """Extract the module paths named by ``import`` and ``from ... import`` declarations.

    The scan is line oriented; a declaration ends at a newline or a ``;``. Aliases are
    dropped and relative imports are ignored.

    Parameters
    ----------
    code : str
        The snippet text.

    Returns
    -------
    Set[str]
        Declared module paths, e.g. ``{"collections.abc", "json"}``.
    """
    declared: Set[str] = set()
    for line in code.splitlines():
        line = line.split("#", 1)[0]
        for statement in line.split(";"):
            statement = statement.strip()
            match = _FROM_IMPORT.match(statement)
            if match:
                if not match.group(1).startswith("."):
                    declared.add(match.group(1))
                continue
            match = _IMPORT.match(statement)
            if match:
                for item in match.group(1).split(","):
                    name = item.strip().split(" as ", 1)[0].strip()
                    if name:
                        declared.add(name)
    return declared


def infer_modules_from_usage(code: str) -> Set[str]:
    """Map characteristic type names found in the snippet to the module defining them."""
    return {module for regex, module in _TYPE_INFERENCE if regex.search(code)}


def analyze_used_types(code: str) -> Set[str]:
    """Report the namespaces a snippet touches.

    The result is the declared imports plus the namespaces implied by well-known type
    families (collections, pathlib, io, json, ...). It is informational and does not
    feed into reference resolution.
    """
    used = extract_import_statements(code)
    for regex, namespace in _USED_TYPE_FAMILIES:
        if regex.search(code):
            used.add(namespace)
    return used


class ReferenceResolver:
    """Infers which modules a snippet must be compiled against.

    Detection runs three independent layers and unions their results with the base set:

    1. Import-based: declared imports matched by namespace against every rule.
    2. Pattern-based: every rule predicate run over the whole snippet.
    3. Inference-based: a fixed table of characteristic type names.

    Loading is best effort. A detected module that the loader cannot load is recorded in
    :attr:`ReferenceSet.skipped` and logged, never raised.
    """

    def __init__(
        self,
        registry: Optional[RuleRegistry] = None,
        loader: Optional[ModuleLoader] = None,
        base_references: Optional[Iterable[str]] = None,
    ) -> None:
        """Initialize the resolver.

        Parameters
        ----------
        registry : Optional[RuleRegistry]
            The rule registry to read. Default is a new registry with the built-in rules.
        loader : Optional[ModuleLoader]
            The module loader. Default is :func:`importlib.import_module`.
        base_references : Optional[Iterable[str]]
            Modules always referenced. Default is ``BASE_REFERENCES``.
        """
        self._registry = registry if registry is not None else RuleRegistry.with_builtin_rules()
        self._loader = loader if loader is not None else importlib.import_module
        self._base_references = frozenset(
            base_references if base_references is not None else BASE_REFERENCES
        )

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    @property
    def base_references(self) -> frozenset:
        return self._base_references

    def detect(self, code: str) -> Set[str]:
        """Return the module names the snippet needs, including the base set.

        This is a pure function of the text and the current rule snapshot.
        """
        detected: Set[str] = set(self._base_references)
        rules = self._registry.snapshot()

        for declared in extract_import_statements(code):
            for module_rules in rules.values():
                for rule in module_rules:
                    if rule.matches_import(declared):
                        detected.add(rule.module)

        for module_rules in rules.values():
            for rule in module_rules:
                if rule.matches(code):
                    detected.add(rule.module)

        detected |= infer_modules_from_usage(code)
        return detected

    def resolve(self, code: str) -> ReferenceSet:
        """Detect the modules a snippet needs and load them.

        Parameters
        ----------
        code : str
            The snippet text.

        Returns
        -------
        ReferenceSet
            The detected modules, the loaded module objects and the ones skipped.
        """
        detected = self.detect(code)
        references = ReferenceSet(modules=frozenset(detected))
        for name in sorted(detected):
            try:
                module = self._loader(name)
            except Exception as e:
                logger.debug(f"Cannot load module '{name}', skipping it: {e}")
                references.skipped[name] = str(e) or type(e).__name__
                continue
            references.add_loaded(name, module)
        logger.debug(
            f"Resolved {len(references.loaded)} references, skipped {len(references.skipped)}"
        )
        return references
