from stylecompile.resolution.extractors import (
    ImportExtractor,
    LessImportExtractor,
    SassImportExtractor,
    StylusImportExtractor,
)
from stylecompile.resolution.resolver import (
    ImportResolver,
    LessImportResolver,
    SassImportResolver,
    StylusImportResolver,
)
from stylecompile.resolution.search_paths import SearchPathBuilder, find_library_paths
from stylecompile.resolution.walker import DependencyWalker

__all__ = [
    "DependencyWalker",
    "ImportExtractor",
    "ImportResolver",
    "LessImportExtractor",
    "LessImportResolver",
    "SassImportExtractor",
    "SassImportResolver",
    "SearchPathBuilder",
    "StylusImportExtractor",
    "StylusImportResolver",
    "find_library_paths",
]
