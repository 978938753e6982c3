import os
from typing import Any

from stylecompile.compiler_base import CompilerBase
from stylecompile.compilers.less import LessCompiler
from stylecompile.compilers.passthrough import PassthroughCompiler
from stylecompile.compilers.sass import SassCompiler
from stylecompile.compilers.stylesheet import StylesheetCompiler
from stylecompile.compilers.stylus import StylusCompiler
from stylecompile.constants import EXTENSION_MIME_TYPES

# Registry of input MIME types to the compiler classes handling them
_COMPILER_REGISTRY: dict[str, type[CompilerBase]] = {}


def register_compiler(compiler_class: type[CompilerBase]) -> None:
    """Register a compiler class for every MIME type it accepts.

    Args:
        compiler_class: The compiler class to register
    """
    for mime_type in compiler_class.get_input_mime_types():
        _COMPILER_REGISTRY[mime_type] = compiler_class


for _compiler_class in (
    LessCompiler,
    SassCompiler,
    StylusCompiler,
    PassthroughCompiler,
):
    register_compiler(_compiler_class)


def create_compiler(mime_type: str, **kwargs: Any) -> CompilerBase:
    """Create a compiler for the given input MIME type.

    Args:
        mime_type: Input MIME type, e.g. ``text/less``
        **kwargs: Passed to the compiler's constructor

    Returns:
        A new compiler instance

    Raises:
        ValueError: If no compiler handles the MIME type
    """
    if mime_type not in _COMPILER_REGISTRY:
        raise ValueError(f"Unsupported MIME type: {mime_type}")
    return _COMPILER_REGISTRY[mime_type](**kwargs)


def mime_type_for_path(path: str) -> str:
    """Guess the input MIME type of a stylesheet from its extension.

    Raises:
        ValueError: If the extension is not a known stylesheet extension
    """
    extension = os.path.splitext(path)[1].lower()
    if extension not in EXTENSION_MIME_TYPES:
        raise ValueError(f"Unsupported stylesheet extension: {extension or path}")
    return EXTENSION_MIME_TYPES[extension]


def compiler_for_path(path: str, **kwargs: Any) -> CompilerBase:
    """Create the compiler handling a file, chosen by its extension."""
    return create_compiler(mime_type_for_path(path), **kwargs)


__all__ = [
    "LessCompiler",
    "PassthroughCompiler",
    "SassCompiler",
    "StylesheetCompiler",
    "StylusCompiler",
    "compiler_for_path",
    "create_compiler",
    "mime_type_for_path",
    "register_compiler",
]
