"""Compiler contract.

``CompilerBase`` is the interface every compiler implements. Each operation
exists in a blocking form and a non-blocking (coroutine, ``_async`` suffix)
form. Methods a subclass does not override fail with
``ContractNotImplementedError`` rather than returning a default.

``SimpleCompilerBase`` is the adapter for compilers whose engine is blocking
only: it implements every non-blocking method through the blocking one and
supplies permissive defaults.
"""

import os
from typing import Any

from stylecompile.errors import ContractNotImplementedError
from stylecompile.models import CompileResult

CompilerContext = dict[str, Any]


class CompilerBase:
    """Base interface for compilers.

    Attributes:
        compiler_options: Options forwarded to the compiler's engine; callers
            may replace or mutate it between compiles
    """

    def __init__(self) -> None:
        self.compiler_options: dict[str, Any] = {}

    def _not_implemented(self, method: str) -> ContractNotImplementedError:
        return ContractNotImplementedError(type(self).__name__, method)

    @classmethod
    def get_input_mime_types(cls) -> list[str]:
        """Get the MIME types this compiler accepts as input.

        Returns:
            A non-empty list of MIME types
        """
        raise ContractNotImplementedError(cls.__name__, "get_input_mime_types")

    def determine_import_paths(self, file_path: str | None = None) -> list[str]:
        """Get the ordered list of directories searched for imports.

        Args:
            file_path: Full path of the file being compiled, if any

        Returns:
            Directory paths, highest precedence first
        """
        raise self._not_implemented("determine_import_paths")

    def should_compile_file(
        self, file_name: str, context: CompilerContext | None = None
    ) -> bool:
        """Decide whether a file should be compiled.

        Args:
            file_name: Full path of the file
            context: Caller-owned bookkeeping, never interpreted here

        Returns:
            True if this compiler should compile the file
        """
        raise self._not_implemented("should_compile_file")

    async def should_compile_file_async(
        self, file_name: str, context: CompilerContext | None = None
    ) -> bool:
        raise self._not_implemented("should_compile_file_async")

    def determine_dependent_files(
        self, source: str, file_name: str, context: CompilerContext | None = None
    ) -> list[str]:
        """Get the files a source transitively imports.

        Hosts use this to trigger rebuilds when an imported file changes.

        Args:
            source: The contents of ``file_name``
            file_name: Full path of the file
            context: Caller-owned bookkeeping, never interpreted here

        Returns:
            Sorted, duplicate-free absolute paths; equal to the
            ``dependencies`` a compile of the same input reports
        """
        raise self._not_implemented("determine_dependent_files")

    async def determine_dependent_files_async(
        self, source: str, file_name: str, context: CompilerContext | None = None
    ) -> list[str]:
        raise self._not_implemented("determine_dependent_files_async")

    def compile(
        self, source: str, file_name: str, context: CompilerContext | None = None
    ) -> CompileResult:
        """Compile a source file.

        Args:
            source: The contents of ``file_name``
            file_name: Full path of the file
            context: Caller-owned bookkeeping, never interpreted here

        Returns:
            The canonical compile result
        """
        raise self._not_implemented("compile")

    async def compile_async(
        self, source: str, file_name: str, context: CompilerContext | None = None
    ) -> CompileResult:
        raise self._not_implemented("compile_async")

    def get_compiler_version(self) -> str:
        """Get a version token of the underlying compiler library.

        Hosts discard cached output when it changes. The value is compared
        for equality only, never parsed.
        """
        raise self._not_implemented("get_compiler_version")


class SimpleCompilerBase(CompilerBase):
    """Adapter implementing the non-blocking contract through blocking calls.

    Subclasses implement ``compile``, ``get_compiler_version`` and
    ``get_input_mime_types``.
    """

    def determine_import_paths(self, file_path: str | None = None) -> list[str]:
        return [os.getcwd()]

    def should_compile_file(
        self, file_name: str, context: CompilerContext | None = None
    ) -> bool:
        return True

    async def should_compile_file_async(
        self, file_name: str, context: CompilerContext | None = None
    ) -> bool:
        return self.should_compile_file(file_name, context)

    def determine_dependent_files(
        self, source: str, file_name: str, context: CompilerContext | None = None
    ) -> list[str]:
        return []

    async def determine_dependent_files_async(
        self, source: str, file_name: str, context: CompilerContext | None = None
    ) -> list[str]:
        return self.determine_dependent_files(source, file_name, context)

    async def compile_async(
        self, source: str, file_name: str, context: CompilerContext | None = None
    ) -> CompileResult:
        return self.compile(source, file_name, context)
