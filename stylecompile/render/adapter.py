"""Normalization of raw engine output into the canonical compile result."""

import os
from collections.abc import Iterable

from stylecompile.constants import EMPTY_OUTPUT_PLACEHOLDER
from stylecompile.errors import EngineError
from stylecompile.models import CompileResult, RenderOutput


def merge_dependencies(walked: Iterable[str], reported: Iterable[str]) -> list[str]:
    """Merge walked and engine-reported dependencies.

    Args:
        walked: Absolute paths found by the dependency walker
        reported: Paths reported by the engine, possibly relative

    Returns:
        Sorted, duplicate-free absolute paths
    """
    merged = set(walked)
    merged.update(os.path.abspath(path) for path in reported)
    return sorted(merged)


def normalize_output(
    raw: RenderOutput,
    walked: Iterable[str],
    mime_type: str,
    file_path: str | None = None,
) -> CompileResult:
    """Turn an engine's raw output into a ``CompileResult``.

    A file made only of imports renders to an empty string; that output is
    valid, so it is replaced with a single space to keep it distinguishable
    from "not compiled yet" for consumers that test the code for emptiness.

    Args:
        raw: Output of the engine
        walked: Dependencies found by the walker
        mime_type: MIME type of the compiled code
        file_path: File that was compiled, for error reporting

    Returns:
        The canonical compile result

    Raises:
        EngineError: If the engine produced no output at all
    """
    if raw.css is None:
        raise EngineError("Rendering engine returned no output", file_path=file_path)

    code = raw.css
    if code == "":
        code = EMPTY_OUTPUT_PLACEHOLDER

    return CompileResult(
        code=code,
        source_maps=raw.source_map or None,
        dependencies=merge_dependencies(walked, raw.imports),
        mime_type=mime_type,
    )
