from typing import Any

from stylecompile.compilers.stylesheet import StylesheetCompiler
from stylecompile.constants import SASS_DEFAULT_OPTIONS, SASS_MIME_TYPES
from stylecompile.options import SASS_OPTIONS
from stylecompile.resolution import SassImportExtractor, SassImportResolver
from stylecompile.resolution.extractors import is_indented_sass


class SassCompiler(StylesheetCompiler):
    """Compiler for both Sass syntaxes, rendered by libsass.

    The syntax is chosen per file: ``.sass`` files use the indented syntax,
    everything else is treated as SCSS.
    """

    mime_types = SASS_MIME_TYPES
    engine_name = "sass"
    default_options = SASS_DEFAULT_OPTIONS
    option_specs = SASS_OPTIONS

    def create_extractor(self) -> SassImportExtractor:
        return SassImportExtractor()

    def create_resolver(self) -> SassImportResolver:
        return SassImportResolver()

    def build_engine_options(
        self, file_path: str, search_paths: list[str], options: dict[str, Any]
    ) -> dict[str, Any]:
        return {
            **options,
            "indentedSyntax": is_indented_sass(file_path),
            "sourceMapRoot": file_path,
        }
