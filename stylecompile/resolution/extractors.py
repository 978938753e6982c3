"""Import extraction strategies.

An extractor turns stylesheet source text into the ordered list of raw import
specifiers it references. Brace-based syntaxes (LESS, SCSS) are tokenized
with tinycss2; indentation-based syntaxes (Sass, Stylus) are scanned line by
line.
"""

import os
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

import tinycss2

from stylecompile.constants import REMOTE_PREFIXES

# Strings and url() bodies are kept so that "//" inside them survives
_COMMENT_PATTERN = re.compile(
    r"""(url\([^)]*\)|"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*')"""
    r"""|(/\*.*?\*/)"""
    r"""|//[^\n]*""",
    re.DOTALL,
)

_IMPORT_LINE = re.compile(r"^[ \t]*@([\w-]+)[ \t]+(.*)$", re.MULTILINE)
_QUOTED = re.compile(r"""(["'])(.*?)\1""")


def strip_comments(source: str, block_comments: bool = False) -> str:
    """Remove ``//`` line comments, and optionally ``/* */`` comments.

    Args:
        source: Stylesheet source
        block_comments: Also remove block comments

    Returns:
        Source text without the comments
    """

    def replace(match: re.Match[str]) -> str:
        if match.group(1):
            return match.group(1)
        if match.group(2):
            return "" if block_comments else match.group(2)
        return ""

    return _COMMENT_PATTERN.sub(replace, source)


def is_remote(specifier: str) -> bool:
    """Check whether a specifier points outside the local file system."""
    return specifier.startswith(REMOTE_PREFIXES) or specifier.startswith("url(")


class ImportExtractor(ABC):
    """Pulls raw import specifiers out of source text."""

    @abstractmethod
    def extract(self, source: str, file_path: str | None = None) -> list[str]:
        """Extract import specifiers in source order.

        Args:
            source: Stylesheet source text
            file_path: Path of the stylesheet, for syntax selection

        Returns:
            Ordered list of unresolved import specifiers
        """
        pass

    def accepts(self, specifier: str) -> bool:
        """Decide whether a specifier refers to a local stylesheet."""
        return bool(specifier) and not is_remote(specifier)


class TokenImportExtractor(ImportExtractor):
    """Extractor for brace-based syntaxes, built on tinycss2 tokens."""

    at_keywords: tuple[str, ...] = ("import",)

    def extract(self, source: str, file_path: str | None = None) -> list[str]:
        tokens = tinycss2.parse_component_value_list(
            strip_comments(source), skip_comments=True
        )
        specifiers: list[str] = []
        self._collect(tokens, specifiers)
        return [s for s in specifiers if self.accepts(s)]

    def _collect(self, tokens: list[Any], specifiers: list[str]) -> None:
        index = 0
        while index < len(tokens):
            token = tokens[index]
            if token.type == "at-keyword" and token.lower_value in self.at_keywords:
                prelude = []
                index += 1
                while index < len(tokens) and not _ends_statement(tokens[index]):
                    prelude.append(tokens[index])
                    index += 1
                specifiers.extend(self._prelude_specifiers(prelude))
                continue
            if token.type == "{} block":
                # Imports may be nested inside rules and conditionals
                self._collect(token.content, specifiers)
            index += 1

    def _prelude_specifiers(self, prelude: list[Any]) -> Iterable[str]:
        return [token.value for token in prelude if token.type == "string"]


class LessImportExtractor(TokenImportExtractor):
    """Extracts ``@import`` targets from LESS source."""

    def _prelude_specifiers(self, prelude: list[Any]) -> Iterable[str]:
        options: set[str] = set()
        for token in prelude:
            if token.type == "() block":
                options.update(
                    t.lower_value for t in token.content if t.type == "ident"
                )

        if "css" in options:
            return []

        specifiers = []
        for specifier in super()._prelude_specifiers(prelude):
            # less leaves .css imports to the browser unless told otherwise
            if specifier.lower().endswith(".css") and not options & {"less", "inline"}:
                continue
            specifiers.append(specifier)
        return specifiers


class ScssImportExtractor(TokenImportExtractor):
    """Extracts ``@import``, ``@use`` and ``@forward`` targets from SCSS."""

    at_keywords = ("import", "use", "forward")

    def accepts(self, specifier: str) -> bool:
        return accepts_sass_import(specifier) and super().accepts(specifier)


class LineImportExtractor(ImportExtractor):
    """Extractor for indentation-based syntaxes."""

    at_keywords: tuple[str, ...] = ("import",)

    def extract(self, source: str, file_path: str | None = None) -> list[str]:
        specifiers: list[str] = []
        stripped = strip_comments(source, block_comments=True)
        for match in _IMPORT_LINE.finditer(stripped):
            if match.group(1).lower() not in self.at_keywords:
                continue
            arguments = match.group(2).strip().rstrip(";").strip()
            if arguments.startswith("url("):
                continue

            quoted = _QUOTED.findall(arguments)
            if quoted:
                candidates = [value for _, value in quoted]
            else:
                candidates = [
                    part.split()[0] for part in arguments.split(",") if part.strip()
                ]
            specifiers.extend(c for c in candidates if self.accepts(c))
        return specifiers


class IndentedSassImportExtractor(LineImportExtractor):
    """Extracts imports from the indented Sass syntax."""

    at_keywords = ("import", "use", "forward")

    def accepts(self, specifier: str) -> bool:
        return accepts_sass_import(specifier) and super().accepts(specifier)


class SassImportExtractor(ImportExtractor):
    """Picks the Sass or SCSS strategy from the file extension."""

    def __init__(self) -> None:
        self.indented = IndentedSassImportExtractor()
        self.scss = ScssImportExtractor()

    def extract(self, source: str, file_path: str | None = None) -> list[str]:
        if file_path and is_indented_sass(file_path):
            return self.indented.extract(source, file_path)
        return self.scss.extract(source, file_path)


class StylusImportExtractor(LineImportExtractor):
    """Extracts ``@import`` and ``@require`` targets from Stylus source."""

    at_keywords = ("import", "require")


def is_indented_sass(file_path: str) -> bool:
    """Check whether a file uses the indented Sass syntax."""
    return os.path.splitext(file_path)[1].lower() == ".sass"


def accepts_sass_import(specifier: str) -> bool:
    """Plain CSS imports and built-in ``sass:`` modules never load a file."""
    return not specifier.lower().endswith(".css") and not specifier.startswith("sass:")


def _ends_statement(token: Any) -> bool:
    return token.type == "{} block" or (
        token.type == "literal" and token.value == ";"
    )
