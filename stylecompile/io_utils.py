"""
File reading primitives used by the dependency walker and the engines.
"""

import asyncio

from stylecompile.constants import DEFAULT_FILE_ENCODING
from stylecompile.errors import SourceReadError


def read_source_file(path: str, encoding: str = DEFAULT_FILE_ENCODING) -> str:
    """Read a stylesheet from disk.

    Args:
        path: Absolute path of the file
        encoding: Text encoding of the file

    Returns:
        The file contents

    Raises:
        SourceReadError: If the file cannot be read
    """
    try:
        with open(path, encoding=encoding) as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(f"Cannot read stylesheet: {e}", file_path=path) from e


async def read_source_file_async(
    path: str, encoding: str = DEFAULT_FILE_ENCODING
) -> str:
    """Read a stylesheet from disk without blocking the event loop."""
    return await asyncio.to_thread(read_source_file, path, encoding)
