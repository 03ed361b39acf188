from typing import Callable, Iterator

import pytest

from dynfunc.api import set_compiler
from dynfunc.compile import Compiler, CompilerConfig, RuleRegistry
from dynfunc.data import CompiledUnit


@pytest.fixture(autouse=True)
def _clean_dynfunc_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear DYNFUNC_* variables so configuration defaults are deterministic."""
    for name in ("DYNFUNC_WARNINGS_AS_ERRORS", "DYNFUNC_REGISTER_MODULES", "DYNFUNC_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def registry() -> RuleRegistry:
    """A fresh registry with the built-in rules, not shared with other tests."""
    return RuleRegistry.with_builtin_rules()


@pytest.fixture
def compiler(registry: RuleRegistry) -> Compiler:
    """A compiler over a fresh registry."""
    return Compiler(registry=registry, config=CompilerConfig())


@pytest.fixture
def compile_unit(compiler: Compiler) -> Callable[[str], CompiledUnit]:
    """Compile a snippet that is expected to compile, and return its unit."""

    def _compile(source: str) -> CompiledUnit:
        result = compiler.compile(source)
        assert result.success, result.error_message
        return result.unit

    return _compile


@pytest.fixture
def reset_global_compiler() -> Iterator[None]:
    """Drop the process-wide compiler before and after the test."""
    set_compiler(None)
    yield
    set_compiler(None)
