import os
from typing import Any

from stylecompile.compilers.stylesheet import StylesheetCompiler
from stylecompile.constants import (
    STYLUS_BUILTIN_IMPORTS,
    STYLUS_DEFAULT_OPTIONS,
    STYLUS_MIME_TYPES,
)
from stylecompile.options import STYLUS_OPTIONS
from stylecompile.resolution import StylusImportExtractor, StylusImportResolver


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        return [value]
    return list(value)


class StylusCompiler(StylesheetCompiler):
    """Compiler for Stylus stylesheets, rendered by the ``stylus`` Node package.

    Stylus reads its search paths from the end of the list, so
    ``determine_import_paths`` returns the list reversed: library directories
    first and the directory of the compiled file last.
    """

    mime_types = STYLUS_MIME_TYPES
    engine_name = "stylus"
    default_options = STYLUS_DEFAULT_OPTIONS
    option_specs = STYLUS_OPTIONS
    reverse_search_paths = True
    builtin_imports = STYLUS_BUILTIN_IMPORTS

    def create_extractor(self) -> StylusImportExtractor:
        return StylusImportExtractor()

    def create_resolver(self) -> StylusImportResolver:
        return StylusImportResolver()

    def build_engine_options(
        self, file_path: str, search_paths: list[str], options: dict[str, Any]
    ) -> dict[str, Any]:
        opts = {**options, "filename": os.path.basename(file_path)}

        for key in ("import", "use", "include"):
            if key in opts:
                opts[key] = _as_list(opts[key])

        # nib is both imported and registered as a plugin
        if "nib" in opts.get("import", []):
            use = opts.setdefault("use", [])
            if "nib" not in use:
                use.append("nib")

        return opts
