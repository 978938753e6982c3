"""
Exceptions raised by stylesheet compilers.

This module defines the error kinds surfaced to callers of the compiler
contract. None of them are retried internally; they propagate to the caller
of the blocking or non-blocking operation that triggered them.
"""

import os
from typing import Optional


class CompilerError(Exception):
    """Base class for every error raised while compiling stylesheets.

    The message is extended with the name of the file being processed when
    one is known, so that errors raised deep inside a dependency walk still
    point at the offending stylesheet.

    Examples:
        >>> raise CompilerError("Bad input", file_path="/project/main.less")
        CompilerError: Bad input in main.less
    """

    include_location = True

    def __init__(self, message: str, file_path: Optional[str] = None):
        """Initialize the exception with a message and optional file path.

        Args:
            message: The error message
            file_path: Path of the stylesheet being processed, if known
        """
        self.message = message
        self.file_path = file_path

        location_info = ""
        if self.include_location and file_path:
            location_info = f" in {os.path.basename(file_path)}"

        super().__init__(f"{message}{location_info}")


class ContractNotImplementedError(CompilerError, NotImplementedError):
    """Raised when a compiler contract method has no concrete override."""

    def __init__(self, compiler: str, method: str):
        self.compiler = compiler
        self.method = method
        super().__init__(f"{compiler} does not implement {method}()")


class UnresolvedImportError(CompilerError):
    """Raised when an import specifier matches no file in any search path."""

    def __init__(
        self,
        specifier: str,
        origin: Optional[str] = None,
        searched: Optional[list[str]] = None,
    ):
        """Initialize with the failing import.

        Args:
            specifier: The import specifier as written in the source
            origin: Path of the file containing the import
            searched: Directories that were tried, in order
        """
        self.specifier = specifier
        self.origin = origin
        self.searched = list(searched or [])
        super().__init__(f"Cannot resolve import '{specifier}'", file_path=origin)


class EngineError(CompilerError):
    """Raised when a wrapped rendering engine reports a failure.

    The engine's own diagnostic is kept verbatim, both as the exception
    message and in ``formatted``.
    """

    include_location = False

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        formatted: Optional[str] = None,
    ):
        self.formatted = formatted if formatted is not None else message
        super().__init__(message, file_path=file_path)


class SourceReadError(CompilerError):
    """Raised when a resolved stylesheet cannot be read."""


class ConfigurationError(CompilerError):
    """Raised when a recognized compiler option has an invalid value."""
