from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CompileResult:
    """Canonical output of every compiler.

    Attributes:
        code: The compiled code, never the empty string
        source_maps: Source map object reported by the engine, if any
        dependencies: Sorted, duplicate-free absolute paths of imported files
        mime_type: MIME type of the compiled code
    """

    code: str
    source_maps: dict[str, Any] | str | None
    dependencies: list[str]
    mime_type: str


@dataclass
class RenderRequest:
    """Everything an engine needs to render one stylesheet."""

    file_path: str
    search_paths: list[str]
    options: dict[str, Any] = field(default_factory=dict)
    library_paths: tuple[str, ...] = ()
    resolve_import: Callable[[str, str], str] | None = None


@dataclass
class RenderOutput:
    """Raw engine output before normalization."""

    css: str | None
    source_map: dict[str, Any] | str | None = None
    imports: list[str] = field(default_factory=list)
