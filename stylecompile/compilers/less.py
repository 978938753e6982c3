from typing import Any

from stylecompile.compilers.stylesheet import StylesheetCompiler
from stylecompile.constants import LESS_DEFAULT_OPTIONS, LESS_MIME_TYPES
from stylecompile.options import LESS_OPTIONS
from stylecompile.resolution import LessImportExtractor, LessImportResolver


class LessCompiler(StylesheetCompiler):
    """Compiler for LESS stylesheets, rendered by the ``less`` Node package."""

    mime_types = LESS_MIME_TYPES
    engine_name = "less"
    default_options = LESS_DEFAULT_OPTIONS
    option_specs = LESS_OPTIONS

    def create_extractor(self) -> LessImportExtractor:
        return LessImportExtractor()

    def create_resolver(self) -> LessImportResolver:
        return LessImportResolver()

    def build_engine_options(
        self, file_path: str, search_paths: list[str], options: dict[str, Any]
    ) -> dict[str, Any]:
        return {**options, "paths": search_paths, "filename": file_path}
