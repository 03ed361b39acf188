"""Detection rules and the registry that groups them by module name."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from dynfunc.logging import get_logger

logger = get_logger("RuleRegistry")

DetectionPredicate = Callable[[str], bool]
"""Predicate over the whole snippet text."""

_DOTTED_NAME = re.compile(r"[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*")


@dataclass(frozen=True)
class DetectionRule:
    """A module a snippet may need, with the predicate that detects the need."""

    module: str
    """The module to reference when the rule matches (e.g. 'urllib.request')."""
    predicate: DetectionPredicate
    """Returns True when the snippet text needs the module."""
    namespace: Optional[str] = None
    """The import namespace the module lives under (e.g. 'urllib'). Default is the module
    name itself."""
    description: str = ""
    """Human-readable summary of what the predicate looks for."""

    @property
    def namespace_name(self) -> str:
        return self.namespace or self.module

    def matches(self, code: str) -> bool:
        return bool(self.predicate(code))

    def matches_import(self, declared: str) -> bool:
        """Check whether an imported module path lives under this rule's namespace.

        The comparison is a case-insensitive prefix match on whole dotted segments, so
        ``collections.abc`` matches ``collections`` but ``requests`` does not match ``re``.
        """
        namespace = self.namespace_name.lower()
        declared = declared.lower()
        return declared == namespace or declared.startswith(namespace + ".")


def api_rule(
    module: str,
    names: Iterable[str] = (),
    substrings: Iterable[str] = (),
    patterns: Iterable[str] = (),
    namespace: Optional[str] = None,
) -> DetectionRule:
    """Build a rule matching characteristic API usage of a module.

    The rule matches when any substring occurs in the text, any name occurs as a whole
    word, or any raw regular expression matches. Name and pattern matches ignore case.

    Parameters
    ----------
    module : str
        The module to reference.
    names : Iterable[str]
        Type or function names, matched with word boundaries.
    substrings : Iterable[str]
        Plain substrings, matched case-sensitively.
    patterns : Iterable[str]
        Raw regular expressions.
    namespace : Optional[str]
        The import namespace. Default is the module name.

    Returns
    -------
    DetectionRule
        The rule.
    """
    substrings = tuple(substrings)
    regexes: List[re.Pattern] = []
    names = tuple(names)
    if names:
        alternation = "|".join(re.escape(name) for name in names)
        regexes.append(re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE))
    regexes.extend(re.compile(pattern, re.IGNORECASE) for pattern in patterns)

    def predicate(code: str) -> bool:
        if any(substring in code for substring in substrings):
            return True
        return any(regex.search(code) for regex in regexes)

    description = ", ".join(list(substrings) + list(names) + list(patterns))
    return DetectionRule(
        module=module, predicate=predicate, namespace=namespace, description=description
    )


class RuleRegistry:
    """Detection rules grouped by module name.

    The registry is shared state that may grow at runtime. Writers build a new mapping
    under a lock and swap it in; readers take the current mapping without locking and
    see either the mapping before or after a concurrent registration.
    """

    _rules: Mapping[str, Tuple[DetectionRule, ...]]
    """Current immutable snapshot: module name -> ordered rules."""

    def __init__(self, rules: Optional[Iterable[DetectionRule]] = None) -> None:
        """Initialize the registry.

        Parameters
        ----------
        rules : Optional[Iterable[DetectionRule]]
            Initial rules, grouped by their module in the given order. Default is empty.
        """
        self._lock = threading.Lock()
        grouped: Dict[str, Tuple[DetectionRule, ...]] = {}
        for rule in rules or ():
            grouped[rule.module] = grouped.get(rule.module, ()) + (rule,)
        self._rules = MappingProxyType(grouped)

    @classmethod
    def with_builtin_rules(cls) -> "RuleRegistry":
        """Create a registry populated with the built-in rules."""
        from .builtin_rules import BUILTIN_RULES

        return cls(BUILTIN_RULES)

    def snapshot(self) -> Mapping[str, Tuple[DetectionRule, ...]]:
        """Return the current read-only mapping of module name to rules."""
        return self._rules

    def rules_for(self, module: str) -> Tuple[DetectionRule, ...]:
        return self._rules.get(module, ())

    def modules(self) -> List[str]:
        return list(self._rules)

    def add(self, *rules: DetectionRule) -> "RuleRegistry":
        """Append rules to their modules' rule lists, creating the lists if absent.

        Returns
        -------
        RuleRegistry
            Self, for method chaining.
        """
        with self._lock:
            grouped = dict(self._rules)
            for rule in rules:
                grouped[rule.module] = grouped.get(rule.module, ()) + (rule,)
            self._rules = MappingProxyType(grouped)
        return self

    def register_rule(
        self, module: str, namespace_pattern: str, *type_patterns: str
    ) -> "RuleRegistry":
        """Register detection rules for a module.

        One rule matches an ``import`` or ``from`` declaration of ``namespace_pattern``;
        one more rule is added per type pattern and matches that regular expression
        anywhere in the snippet. All rules are appended to the module's rule list and
        affect every later resolution.

        Parameters
        ----------
        module : str
            The module to reference when any of the rules match.
        namespace_pattern : str
            Regular expression for the declared namespace (e.g. 'yaml' or 'google\\.protobuf').
        type_patterns : str
            Regular expressions for characteristic type or API names.

        Returns
        -------
        RuleRegistry
            Self, for method chaining.

        Raises
        ------
        ValueError
            If the module name or namespace pattern is empty.
        re.error
            If any pattern is not a valid regular expression.
        """
        if not module or not module.strip():
            raise ValueError("module must not be empty")
        if not namespace_pattern or not namespace_pattern.strip():
            raise ValueError("namespace_pattern must not be empty")

        namespace = namespace_pattern if _DOTTED_NAME.fullmatch(namespace_pattern) else None
        declaration = re.compile(rf"\b(?:import|from)\s+{namespace_pattern}")
        rules = [
            DetectionRule(
                module=module,
                predicate=lambda code, regex=declaration: regex.search(code) is not None,
                namespace=namespace,
                description=f"import {namespace_pattern}",
            )
        ]
        for pattern in type_patterns:
            regex = re.compile(pattern)
            rules.append(
                DetectionRule(
                    module=module,
                    predicate=lambda code, regex=regex: regex.search(code) is not None,
                    namespace=namespace,
                    description=pattern,
                )
            )
        self.add(*rules)
        logger.debug(f"Registered {len(rules)} rules for module '{module}'")
        return self

    def __len__(self) -> int:
        return sum(len(rules) for rules in self._rules.values())

    def __contains__(self, module: object) -> bool:
        return module in self._rules
