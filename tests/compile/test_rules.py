"""Tests for compile/rules.py."""

import re
import sys
import threading

import pytest

from dynfunc.compile import BUILTIN_RULES, DetectionRule, RuleRegistry, api_rule


def test_api_rule_names_are_whole_words_ignoring_case():
    rule = api_rule("statistics", names=["median"])
    assert rule.matches("x = median(values)")
    assert rule.matches("x = MEDIAN(values)")
    assert not rule.matches("x = medians(values)")


def test_api_rule_substrings_are_case_sensitive():
    rule = api_rule("pathlib", substrings=["Path("])
    assert rule.matches("p = Path('a')")
    assert not rule.matches("p = path('a')")


def test_api_rule_patterns():
    rule = api_rule("numpy", patterns=[r"\bnp\.\w+"])
    assert rule.matches("a = np.zeros(3)")
    assert not rule.matches("a = snp.zeros(3)")


def test_matches_import_uses_whole_segments():
    rule = DetectionRule(module="re", predicate=lambda code: False)
    assert rule.matches_import("re")
    assert rule.matches_import("RE")
    assert not rule.matches_import("requests")

    nested = DetectionRule(module="urllib.request", predicate=lambda code: False, namespace="urllib")
    assert nested.namespace_name == "urllib"
    assert nested.matches_import("urllib.parse")
    assert nested.matches_import("Urllib")
    assert not nested.matches_import("urllib3")


def test_registry_groups_rules_by_module():
    first = api_rule("json", names=["JSONDecodeError"])
    second = api_rule("json", substrings=["json.loads"])
    registry = RuleRegistry([first, second])

    assert registry.modules() == ["json"]
    assert registry.rules_for("json") == (first, second)
    assert registry.rules_for("yaml") == ()
    assert "json" in registry
    assert len(registry) == 2


def test_with_builtin_rules():
    registry = RuleRegistry.with_builtin_rules()
    assert len(registry) == len(BUILTIN_RULES)
    for module in ("collections", "json", "re", "urllib.request", "pydantic"):
        assert module in registry


def test_register_rule_adds_declaration_and_type_rules():
    registry = RuleRegistry()
    registry.register_rule("yaml", "yaml", r"\bsafe_load\b", r"\bYAMLError\b")

    rules = registry.rules_for("yaml")
    assert len(rules) == 3
    declaration = rules[0]
    assert declaration.namespace == "yaml"
    assert declaration.matches("import yaml\n")
    assert declaration.matches("from yaml import safe_load\n")
    assert not declaration.matches("yaml = 1\n")
    assert rules[1].matches("data = safe_load(text)")
    assert rules[2].matches("except YAMLError:")


def test_register_rule_type_patterns_are_case_sensitive():
    registry = RuleRegistry().register_rule("yaml", "yaml", r"\bYAMLError\b")
    assert not registry.rules_for("yaml")[1].matches("except yamlerror:")


def test_register_rule_regex_namespace_has_no_import_namespace():
    registry = RuleRegistry().register_rule("google.protobuf", r"google\.protobuf")
    rule = registry.rules_for("google.protobuf")[0]
    assert rule.namespace is None
    assert rule.matches("from google.protobuf import message")


def test_register_rule_appends_to_existing_module():
    registry = RuleRegistry.with_builtin_rules()
    before = len(registry.rules_for("json"))
    registry.register_rule("json", "json", r"\bJSONDecodeError\b")
    assert len(registry.rules_for("json")) == before + 2


def test_register_rule_rejects_empty_arguments():
    registry = RuleRegistry()
    with pytest.raises(ValueError):
        registry.register_rule("", "yaml")
    with pytest.raises(ValueError):
        registry.register_rule("yaml", "   ")


def test_register_rule_rejects_invalid_pattern():
    registry = RuleRegistry()
    with pytest.raises(re.error):
        registry.register_rule("yaml", "yaml", "(unclosed")


def test_snapshot_is_not_changed_by_later_registration():
    registry = RuleRegistry()
    snapshot = registry.snapshot()
    registry.register_rule("yaml", "yaml")
    assert "yaml" not in snapshot
    assert "yaml" in registry.snapshot()


def test_snapshot_is_read_only():
    registry = RuleRegistry.with_builtin_rules()
    with pytest.raises(TypeError):
        registry.snapshot()["json"] = ()


def test_concurrent_registration_keeps_every_rule():
    registry = RuleRegistry()

    def register(index: int) -> None:
        for offset in range(20):
            registry.register_rule(f"module_{index}", f"module_{index}", rf"\bName{offset}\b")

    threads = [threading.Thread(target=register, args=(index,)) for index in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry.modules()) == 8
    assert len(registry) == 8 * 20 * 2


if __name__ == "__main__":
    pytest.main(sys.argv)
