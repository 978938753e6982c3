"""Factory for the process-wide default rendering engines.

Default engines are created on first use and then shared by every compiler
that was not given an engine explicitly.
"""

import threading
from collections.abc import Callable

from loguru import logger

from stylecompile.render.base import RenderEngine
from stylecompile.render.libsass import LibSassEngine
from stylecompile.render.node import create_less_engine, create_stylus_engine

# Registry of engine names to the factories creating them
_ENGINE_FACTORIES: dict[str, Callable[[], RenderEngine]] = {
    "less": create_less_engine,
    "sass": LibSassEngine,
    "stylus": create_stylus_engine,
}

_ENGINES: dict[str, RenderEngine] = {}
_ENGINE_LOCK = threading.Lock()


def get_engine(name: str) -> RenderEngine:
    """Get the shared engine registered under ``name``.

    The engine is created once per process; concurrent first use from
    several compilers creates it only once.

    Args:
        name: Engine name (``less``, ``sass``, ``stylus``)

    Returns:
        The shared engine instance

    Raises:
        ValueError: If no engine is registered under the name
    """
    with _ENGINE_LOCK:
        engine = _ENGINES.get(name)
        if engine is None:
            if name not in _ENGINE_FACTORIES:
                raise ValueError(f"Unsupported engine: {name}")
            logger.debug(f"Loading {name} rendering engine")
            engine = _ENGINE_FACTORIES[name]()
            _ENGINES[name] = engine
        return engine


def register_engine(name: str, factory: Callable[[], RenderEngine]) -> None:
    """Register an engine factory, replacing any shared instance.

    Args:
        name: Engine name
        factory: Callable creating the engine
    """
    with _ENGINE_LOCK:
        _ENGINE_FACTORIES[name] = factory
        _ENGINES.pop(name, None)


def reset_engines() -> None:
    """Drop every shared engine instance so the next use recreates it."""
    with _ENGINE_LOCK:
        _ENGINES.clear()
