"""Search-path construction for stylesheet imports.

The ordered directory list produced here decides import precedence, so it
must be identical for identical state. Tiers, highest precedence first:

1. the directory of the file being compiled, folded into the seen set
2. every directory seen so far, in insertion order
3. user supplied ``paths`` from the compiler options
4. the process working directory
5. library directories (``node_modules`` lookup chain)

Compilers whose engine consumes the list back to front get it reversed.
"""

import os
from collections.abc import Iterable

from loguru import logger


def find_library_paths(start: str | None = None) -> list[str]:
    """Enumerate module-resolution directories, nearest first.

    Mirrors Node's lookup chain: a ``node_modules`` directory for every
    ancestor of ``start``, then ``$NODE_PATH`` and the per-user global folders.

    Args:
        start: Directory to start from (defaults to the working directory)

    Returns:
        Duplicate-free list of directory paths; they need not exist
    """
    current = os.path.abspath(start or os.getcwd())
    paths: list[str] = []

    while True:
        if os.path.basename(current) != "node_modules":
            paths.append(os.path.join(current, "node_modules"))
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent

    node_path = os.environ.get("NODE_PATH", "")
    paths.extend(p for p in node_path.split(os.pathsep) if p)

    home = os.path.expanduser("~")
    paths.append(os.path.join(home, ".node_modules"))
    paths.append(os.path.join(home, ".node_libraries"))

    return list(dict.fromkeys(paths))


class SearchPathBuilder:
    """Accumulates seen directories and builds ordered search-path lists."""

    def __init__(
        self, library_paths: Iterable[str] | None = None, reverse: bool = False
    ):
        """Initialize the builder.

        Args:
            library_paths: Library directories; computed from the working
                directory when omitted
            reverse: Reverse the final list for engines that read it backwards
        """
        if library_paths is None:
            library_paths = find_library_paths()
        self.library_paths: tuple[str, ...] = tuple(
            dict.fromkeys(os.fspath(p) for p in library_paths)
        )
        # A dict keeps insertion order and ignores re-insertion
        self.seen_file_paths: dict[str, bool] = {}
        self.reverse = reverse

    def add_file(self, file_path: str) -> None:
        """Fold the directory of ``file_path`` into the seen set."""
        directory = os.path.dirname(os.path.abspath(file_path))
        if directory not in self.seen_file_paths:
            logger.debug(f"Adding {directory} to seen import directories")
            self.seen_file_paths[directory] = True

    def build(
        self, file_path: str | None = None, user_paths: Iterable[str] | None = None
    ) -> list[str]:
        """Build the ordered search-path list.

        Args:
            file_path: File currently being compiled, if any
            user_paths: The ``paths`` compiler option

        Returns:
            Ordered list of directories to search
        """
        if file_path:
            self.add_file(file_path)

        paths = list(self.seen_file_paths)
        if user_paths:
            paths.extend(os.fspath(p) for p in user_paths)
        paths.append(os.getcwd())
        paths.extend(self.library_paths)

        if self.reverse:
            paths.reverse()

        return paths
