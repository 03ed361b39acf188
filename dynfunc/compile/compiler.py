"""Compilation orchestrator: snippet text in, loaded unit or diagnostics out."""

from __future__ import annotations

import tokenize
from pathlib import Path
from typing import Optional, Union

from dynfunc.data import CompilationResult, CompiledUnit, UnitMetadata, hash_source
from dynfunc.errors import EmptySourceError, LoadError
from dynfunc.logging import get_logger

from .backend import CompilerBackend
from .backends import PythonBackend
from .config import CompilerConfig
from .resolver import ReferenceResolver
from .rules import RuleRegistry
from .utils import create_unit_name

logger = get_logger("Compiler")


class Compiler:
    """Compiles snippets into loaded units.

    The compiler resolves the references a snippet needs, hands the text to its backend
    and wraps the loaded module in a :class:`CompiledUnit`. Compilation failures are
    returned as data; only precondition violations raise.

    Each successful compilation leaves a loaded module in process memory. Nothing is
    reclaimed: units are meant to be kept and invoked many times.
    """

    def __init__(
        self,
        resolver: Optional[ReferenceResolver] = None,
        backend: Optional[CompilerBackend] = None,
        config: Optional[CompilerConfig] = None,
        registry: Optional[RuleRegistry] = None,
    ) -> None:
        """Initialize the compiler.

        Parameters
        ----------
        resolver : Optional[ReferenceResolver]
            The reference resolver. Default is a resolver over ``registry`` with the
            configured base references.
        backend : Optional[CompilerBackend]
            The compiler backend. Default is a :class:`PythonBackend` configured from
            ``config``.
        config : Optional[CompilerConfig]
            The compiler configuration. Default is ``CompilerConfig()``.
        registry : Optional[RuleRegistry]
            The rule registry for the default resolver. Ignored when ``resolver`` is given.
            Default is a new registry with the built-in rules.
        """
        self._config = config if config is not None else CompilerConfig()
        if resolver is None:
            resolver = ReferenceResolver(
                registry=registry, base_references=self._config.base_references
            )
        self._resolver = resolver
        if backend is None:
            backend = PythonBackend(
                warnings_as_errors=self._config.warnings_as_errors,
                register_modules=self._config.register_modules,
            )
        self._backend = backend

    @property
    def config(self) -> CompilerConfig:
        return self._config

    @property
    def resolver(self) -> ReferenceResolver:
        return self._resolver

    @property
    def backend(self) -> CompilerBackend:
        return self._backend

    def compile(self, source: Optional[str]) -> CompilationResult:
        """Compile snippet text into a loaded unit.

        Parameters
        ----------
        source : Optional[str]
            The snippet text.

        Returns
        -------
        CompilationResult
            The loaded unit on success; error diagnostics in source order on failure.

        Raises
        ------
        EmptySourceError
            If ``source`` is None, empty or whitespace only.
        """
        if source is None or not source.strip():
            raise EmptySourceError("Source code must not be empty")

        references = self._resolver.resolve(source)
        if references.skipped:
            logger.info(f"Compiling without unresolved references: {sorted(references.skipped)}")

        unit_name = create_unit_name(source, self._config.unit_prefix)
        emitted = self._backend.emit(source, unit_name)
        for diagnostic in emitted.diagnostics:
            if not diagnostic.is_error:
                logger.warning(f"{unit_name}: {diagnostic.code}: {diagnostic.message}")

        if not emitted.success:
            errors = emitted.errors
            logger.info(f"Compilation of '{unit_name}' failed with {len(errors)} errors")
            return CompilationResult.failed(errors, references)

        try:
            module = self._backend.load(emitted.artifact, source, unit_name, references)
        except LoadError as e:
            logger.info(f"Loading '{unit_name}' failed: {e}")
            return CompilationResult.failed(e.diagnostics, references)

        metadata = UnitMetadata(
            name=unit_name,
            source_hash=hash_source(source),
            references=frozenset(references.loaded),
            skipped_references=sorted(references.skipped),
            misc={"backend": self._backend.name},
        )
        logger.debug(f"Compiled unit '{unit_name}'")
        return CompilationResult.succeeded(CompiledUnit(module, source, metadata), references)

    def compile_from_path(self, path: Optional[Union[str, Path]]) -> CompilationResult:
        """Read a snippet file and compile its full text.

        The file is decoded with the encoding named by its coding declaration, UTF-8 when
        there is none.

        Parameters
        ----------
        path : Optional[Union[str, Path]]
            The snippet file path.

        Returns
        -------
        CompilationResult
            Same as :meth:`compile`.

        Raises
        ------
        EmptySourceError
            If ``path`` is None, empty or whitespace only, or the file is empty.
        FileNotFoundError
            If ``path`` does not name an existing file.
        SyntaxError
            If the coding declaration names an unknown encoding.
        UnicodeDecodeError
            If the file does not decode with its declared encoding.
        """
        if path is None or not str(path).strip():
            raise EmptySourceError("File path must not be empty")
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Snippet file not found: {file_path}")
        with tokenize.open(file_path) as f:
            source = f.read()
        return self.compile(source)
