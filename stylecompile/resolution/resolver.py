"""Import path resolution.

A resolver maps one import specifier to one existing file, trying the
directories of a search-path list in order and, within each directory, the
file names the language would accept for that specifier.
"""

import os
from collections.abc import Sequence

from loguru import logger

from stylecompile.errors import UnresolvedImportError
from stylecompile.resolution.extractors import is_indented_sass


class ImportResolver:
    """Resolves import specifiers to absolute file paths.

    Subclasses describe the language's file naming conventions through
    ``candidate_names``. Resolvers are stateless and can be shared.
    """

    # Engines that consume search paths back to front scan them the same way
    reverse_search: bool = False

    def candidate_names(self, specifier: str, origin: str | None) -> list[str]:
        """File names to try, relative to a search directory, in order."""
        return [specifier]

    def resolve(
        self, specifier: str, origin: str | None, search_paths: Sequence[str]
    ) -> str:
        """Resolve a specifier to an absolute path.

        Bare specifiers are looked up in the directory of ``origin`` before
        the search paths, so a nested import finds its own siblings first.

        Args:
            specifier: The import as written in the source
            origin: Path of the importing file
            search_paths: Ordered directories from the search-path builder

        Returns:
            Absolute path of the first matching file

        Raises:
            UnresolvedImportError: If no directory yields a match
        """
        names = self.candidate_names(specifier, origin)

        if os.path.isabs(specifier):
            directories: list[str] = [""]
        elif specifier.startswith(("./", "../")) and origin:
            directories = [os.path.dirname(os.path.abspath(origin))]
        else:
            directories = list(search_paths)
            if self.reverse_search:
                directories.reverse()
            if origin:
                # The importing file's own directory precedes the shared list
                origin_dir = os.path.dirname(os.path.abspath(origin))
                directories = list(dict.fromkeys([origin_dir, *directories]))

        for directory in directories:
            for name in names:
                candidate = os.path.abspath(os.path.join(directory, name))
                if os.path.isfile(candidate):
                    logger.debug(f"Resolved '{specifier}' to {candidate}")
                    return candidate

        raise UnresolvedImportError(specifier, origin=origin, searched=directories)


class LessImportResolver(ImportResolver):
    """Resolver for LESS: ``name.less`` unless an extension is given."""

    def candidate_names(self, specifier: str, origin: str | None) -> list[str]:
        if os.path.splitext(specifier)[1]:
            return [specifier]
        return [f"{specifier}.less", specifier]


class SassImportResolver(ImportResolver):
    """Resolver for Sass and SCSS, including ``_partial`` and index files.

    The importing file's own syntax is preferred over the other one.
    """

    def candidate_names(self, specifier: str, origin: str | None) -> list[str]:
        head, tail = os.path.split(specifier)
        extension = os.path.splitext(tail)[1].lower()

        if extension in (".scss", ".sass", ".css"):
            names = [tail, f"_{tail}"]
        else:
            if origin and is_indented_sass(origin):
                order = ("sass", "scss")
            else:
                order = ("scss", "sass")
            names = []
            for ext in order:
                names.extend([f"{tail}.{ext}", f"_{tail}.{ext}"])
            names.extend([f"{tail}.css", f"_{tail}.css"])
            for ext in order:
                names.append(os.path.join(tail, f"_index.{ext}"))
                names.append(os.path.join(tail, f"index.{ext}"))

        return [os.path.join(head, name) for name in names]


class StylusImportResolver(ImportResolver):
    """Resolver for Stylus, which reads its search paths back to front."""

    reverse_search = True

    def candidate_names(self, specifier: str, origin: str | None) -> list[str]:
        if os.path.splitext(specifier)[1]:
            return [specifier]
        return [f"{specifier}.styl", os.path.join(specifier, "index.styl")]
