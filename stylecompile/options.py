"""
Recognized compiler options and their validation.

Each compiler family declares the option names it understands. Known options
are type-checked before a compile; unknown options are forwarded to the
rendering engine untouched.
"""

import os
from dataclasses import dataclass
from typing import Any

from loguru import logger

from stylecompile.errors import ConfigurationError


@dataclass(frozen=True)
class OptionSpec:
    """A recognized compiler option."""

    name: str
    types: tuple[type, ...]
    description: str = ""


COMMON_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec(
        "paths",
        (list, tuple),
        "Extra search directories, consulted after every seen directory",
    ),
)

LESS_OPTIONS: tuple[OptionSpec, ...] = COMMON_OPTIONS + (
    OptionSpec("sourceMap", (dict, bool), "less source map settings"),
)

SASS_OPTIONS: tuple[OptionSpec, ...] = COMMON_OPTIONS + (
    OptionSpec("comments", (bool,), "Emit source line comments"),
    OptionSpec("sourceMapEmbed", (bool,), "Embed the source map in the output"),
    OptionSpec("sourceMapContents", (bool,), "Include sources in the source map"),
    OptionSpec("outputStyle", (str,), "nested, expanded, compact or compressed"),
    OptionSpec("precision", (int,), "Decimal precision of numbers"),
)

STYLUS_OPTIONS: tuple[OptionSpec, ...] = COMMON_OPTIONS + (
    OptionSpec("sourcemap", (str, dict, bool), "Stylus source map settings"),
    OptionSpec("import", (str, list, tuple), "Files imported before the source"),
    OptionSpec("use", (str, list, tuple), "Node plugins to apply"),
    OptionSpec("include", (str, list, tuple), "Extra include directories"),
    OptionSpec("define", (dict,), "Global variables"),
    OptionSpec("set", (dict,), "Renderer settings"),
)


def validate_options(
    options: dict[str, Any], specs: tuple[OptionSpec, ...]
) -> dict[str, Any]:
    """Check known options and return a copy safe to hand to an engine.

    Args:
        options: The caller's compiler options
        specs: Options recognized by the compiler family

    Returns:
        A shallow copy of the options with ``paths`` normalized to strings

    Raises:
        ConfigurationError: If a recognized option has the wrong type
    """
    known = {spec.name: spec for spec in specs}
    validated = dict(options)

    for name, value in options.items():
        spec = known.get(name)
        if spec is None:
            logger.debug(f"Forwarding unrecognized option '{name}' to the engine")
            continue
        if value is None:
            continue
        if not isinstance(value, spec.types):
            expected = " or ".join(t.__name__ for t in spec.types)
            raise ConfigurationError(
                f"Option '{name}' must be {expected}, got {type(value).__name__}"
            )

    paths = validated.get("paths")
    if paths:
        try:
            validated["paths"] = [os.fspath(p) for p in paths]
        except TypeError as e:
            raise ConfigurationError(f"Option 'paths' must contain paths: {e}") from e

    return validated
