"""Recursive dependency walking.

The walker applies an extractor and a resolver to a stylesheet and to every
file it transitively imports. Imports are processed strictly one subtree at a
time because each resolution may add a directory to the compiler's seen set,
and the next resolution must observe exactly the files processed so far.
"""

from collections.abc import Callable, Collection

from loguru import logger

from stylecompile.io_utils import read_source_file, read_source_file_async
from stylecompile.resolution.extractors import ImportExtractor
from stylecompile.resolution.resolver import ImportResolver

SearchPathProvider = Callable[[str | None], list[str]]


class DependencyWalker:
    """Collects the transitive imports of a stylesheet."""

    def __init__(
        self,
        extractor: ImportExtractor,
        resolver: ImportResolver,
        search_paths: SearchPathProvider,
        builtin_imports: Collection[str] = (),
    ):
        """Initialize the walker.

        Args:
            extractor: Pulls import specifiers out of source text
            resolver: Maps specifiers to files
            search_paths: Returns the search-path list for a given file
            builtin_imports: Specifiers provided by engine plugins, never files
        """
        self.extractor = extractor
        self.resolver = resolver
        self.search_paths = search_paths
        self.builtin_imports = frozenset(builtin_imports)

    def resolve_import(self, specifier: str, origin: str) -> str:
        """Resolve one import of ``origin`` with the current search paths."""
        return self.resolver.resolve(specifier, origin, self.search_paths(origin))

    def walk(self, source: str, file_path: str) -> list[str]:
        """Return the sorted transitive dependencies of a stylesheet.

        Raises:
            UnresolvedImportError: If any import cannot be resolved
            SourceReadError: If a resolved file cannot be read
        """
        visited: dict[str, bool] = {}
        self._walk(source, file_path, visited)
        return sorted(visited)

    async def walk_async(self, source: str, file_path: str) -> list[str]:
        """Non-blocking variant of ``walk`` with identical results."""
        visited: dict[str, bool] = {}
        await self._walk_async(source, file_path, visited)
        return sorted(visited)

    def _pending_imports(self, source: str, file_path: str) -> list[str]:
        return [
            specifier
            for specifier in self.extractor.extract(source, file_path)
            if specifier not in self.builtin_imports
        ]

    def _walk(self, source: str, file_path: str, visited: dict[str, bool]) -> None:
        for specifier in self._pending_imports(source, file_path):
            dependency = self.resolve_import(specifier, file_path)
            if dependency in visited:
                continue
            visited[dependency] = True
            logger.debug(f"Walking {dependency} (imported by {file_path})")
            self._walk(read_source_file(dependency), dependency, visited)

    async def _walk_async(
        self, source: str, file_path: str, visited: dict[str, bool]
    ) -> None:
        for specifier in self._pending_imports(source, file_path):
            dependency = self.resolve_import(specifier, file_path)
            if dependency in visited:
                continue
            visited[dependency] = True
            logger.debug(f"Walking {dependency} (imported by {file_path})")
            dependency_source = await read_source_file_async(dependency)
            await self._walk_async(dependency_source, dependency, visited)
