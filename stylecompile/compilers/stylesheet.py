"""Shared implementation of the stylesheet compilers.

A ``StylesheetCompiler`` composes a search-path builder, a dependency walker
(extractor plus resolver) and a rendering engine. Language subclasses only
declare their MIME types, options, import conventions and engine.
"""

import copy
import os
from collections.abc import Iterable
from typing import Any

from loguru import logger

from stylecompile.compiler_base import CompilerBase, CompilerContext
from stylecompile.constants import OUTPUT_MIME_TYPE
from stylecompile.errors import ContractNotImplementedError
from stylecompile.models import CompileResult, RenderRequest
from stylecompile.options import COMMON_OPTIONS, OptionSpec, validate_options
from stylecompile.render import RenderEngine, get_engine, normalize_output
from stylecompile.resolution import (
    DependencyWalker,
    ImportExtractor,
    ImportResolver,
    SearchPathBuilder,
)


class StylesheetCompiler(CompilerBase):
    """Base class for compilers of CSS preprocessor languages.

    Compilers keep the directories of every file they have seen, so one
    instance should be reused across the compiles of a build session. An
    instance is not safe for concurrent compiles.
    """

    mime_types: list[str] = []
    engine_name: str = ""
    default_options: dict[str, Any] = {}
    option_specs: tuple[OptionSpec, ...] = COMMON_OPTIONS
    reverse_search_paths: bool = False
    builtin_imports: frozenset[str] = frozenset()

    def __init__(
        self,
        engine: RenderEngine | None = None,
        library_paths: Iterable[str] | None = None,
    ):
        """Initialize the compiler.

        Args:
            engine: Rendering engine to use; the shared default engine for
                this language is loaded on first use when omitted
            library_paths: Library search directories; computed from the
                working directory when omitted
        """
        super().__init__()
        self.compiler_options = copy.deepcopy(self.default_options)
        self._engine = engine
        self.search_path_builder = SearchPathBuilder(
            library_paths, reverse=self.reverse_search_paths
        )
        self.walker = DependencyWalker(
            self.create_extractor(),
            self.create_resolver(),
            self.determine_import_paths,
            self.builtin_imports,
        )

    @classmethod
    def get_input_mime_types(cls) -> list[str]:
        if not cls.mime_types:
            raise ContractNotImplementedError(cls.__name__, "get_input_mime_types")
        return list(cls.mime_types)

    @property
    def engine(self) -> RenderEngine:
        if self._engine is not None:
            return self._engine
        return get_engine(self.engine_name)

    @property
    def seen_file_paths(self) -> list[str]:
        return list(self.search_path_builder.seen_file_paths)

    @property
    def library_paths(self) -> tuple[str, ...]:
        return self.search_path_builder.library_paths

    def create_extractor(self) -> ImportExtractor:
        raise self._not_implemented("create_extractor")

    def create_resolver(self) -> ImportResolver:
        raise self._not_implemented("create_resolver")

    def build_engine_options(
        self, file_path: str, search_paths: list[str], options: dict[str, Any]
    ) -> dict[str, Any]:
        """Shape validated compiler options into the engine's option object."""
        return dict(options)

    def determine_import_paths(self, file_path: str | None = None) -> list[str]:
        return self.search_path_builder.build(
            file_path, self.compiler_options.get("paths")
        )

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
        self.validated_options()
        return self.walker.walk(source, file_name)

    async def determine_dependent_files_async(
        self, source: str, file_name: str, context: CompilerContext | None = None
    ) -> list[str]:
        self.validated_options()
        return await self.walker.walk_async(source, file_name)

    def compile(
        self, source: str, file_name: str, context: CompilerContext | None = None
    ) -> CompileResult:
        request = self._prepare_request(file_name)
        dependencies = self.walker.walk(source, file_name)
        raw = self.engine.render(source, request)
        return normalize_output(raw, dependencies, OUTPUT_MIME_TYPE, file_name)

    async def compile_async(
        self, source: str, file_name: str, context: CompilerContext | None = None
    ) -> CompileResult:
        request = self._prepare_request(file_name)
        dependencies = await self.walker.walk_async(source, file_name)
        raw = await self.engine.render_async(source, request)
        return normalize_output(raw, dependencies, OUTPUT_MIME_TYPE, file_name)

    def get_compiler_version(self) -> str:
        return self.engine.version()

    def validated_options(self) -> dict[str, Any]:
        """Validate ``compiler_options`` against this family's option specs."""
        return validate_options(self.compiler_options, self.option_specs)

    def _prepare_request(self, file_name: str) -> RenderRequest:
        options = self.validated_options()
        search_paths = self.determine_import_paths(file_name)
        logger.debug(
            f"Compiling {os.path.basename(file_name)} with {type(self).__name__}, "
            f"{len(search_paths)} search paths"
        )
        return RenderRequest(
            file_path=file_name,
            search_paths=search_paths,
            options=self.build_engine_options(file_name, search_paths, options),
            library_paths=self.library_paths,
            resolve_import=self.walker.resolve_import,
        )
