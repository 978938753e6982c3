"""Sass/SCSS rendering through the libsass Python binding.

libsass is natively blocking, so it is called directly on the blocking path
and on a worker thread on the non-blocking path. Imports are routed through a
custom importer that uses the compiler's own resolver, so the engine sees the
same search-path precedence as the dependency walker and reports every file
it loaded.
"""

import base64
import json
import re
from typing import Any

from loguru import logger

from stylecompile.errors import EngineError, UnresolvedImportError
from stylecompile.io_utils import read_source_file
from stylecompile.models import RenderOutput, RenderRequest
from stylecompile.render.base import RenderEngine
from stylecompile.resolution.extractors import accepts_sass_import

_EMBEDDED_SOURCE_MAP = re.compile(
    r"/\*# sourceMappingURL=data:application/json;"
    r"(?:charset=utf-8;)?base64,([A-Za-z0-9+/=]+) \*/"
)


def extract_embedded_source_map(css: str) -> dict[str, Any] | None:
    """Decode the source map libsass embeds as a data URL, if there is one."""
    match = _EMBEDDED_SOURCE_MAP.search(css)
    if match is None:
        return None
    return json.loads(base64.b64decode(match.group(1)).decode("utf-8"))


class LibSassEngine(RenderEngine):
    """Render engine backed by ``libsass``.

    With ``sourceMapEmbed`` the map stays embedded in the CSS and is also
    decoded into the output's ``source_map``.
    """

    name = "sass"

    def __init__(self) -> None:
        try:
            import sass
        except ImportError as e:
            raise EngineError("The libsass package is required to compile Sass") from e
        self._sass = sass

    def render(self, source: str, request: RenderRequest) -> RenderOutput:
        options = request.options
        imports: list[str] = []

        def importer(path: str, prev: str) -> list[tuple[str, str]] | None:
            if request.resolve_import is None or not accepts_sass_import(path):
                return None
            origin = request.file_path if prev == "stdin" else prev
            try:
                resolved = request.resolve_import(path, origin)
            except UnresolvedImportError:
                # libsass reports the missing import with its own diagnostic
                return None
            imports.append(resolved)
            return [(resolved, read_source_file(resolved))]

        kwargs: dict[str, Any] = {
            "string": source,
            "indented": bool(options.get("indentedSyntax", False)),
            "include_paths": list(request.search_paths),
            "importers": [(0, importer)],
            "output_style": options.get("outputStyle", "nested"),
            "source_comments": bool(options.get("comments", False)),
            "source_map_embed": bool(options.get("sourceMapEmbed", False)),
            "source_map_contents": bool(options.get("sourceMapContents", False)),
        }
        if options.get("sourceMapRoot"):
            kwargs["source_map_root"] = options["sourceMapRoot"]
        if options.get("precision") is not None:
            kwargs["precision"] = options["precision"]

        logger.debug(f"Rendering {request.file_path} with libsass")
        try:
            css = self._sass.compile(**kwargs)
        except self._sass.CompileError as e:
            message = str(e)
            raise EngineError(
                message, file_path=request.file_path, formatted=message
            ) from e

        return RenderOutput(
            css=css, source_map=extract_embedded_source_map(css), imports=imports
        )

    def version(self) -> str:
        return str(self._sass.libsass_version)
