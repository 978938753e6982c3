from stylecompile.render.adapter import merge_dependencies, normalize_output
from stylecompile.render.base import AsyncRenderEngine, RenderEngine
from stylecompile.render.engine_factory import get_engine, register_engine, reset_engines
from stylecompile.render.libsass import LibSassEngine
from stylecompile.render.node import NodeEngine, create_less_engine, create_stylus_engine
from stylecompile.render.sync import force_sync

__all__ = [
    "AsyncRenderEngine",
    "LibSassEngine",
    "NodeEngine",
    "RenderEngine",
    "create_less_engine",
    "create_stylus_engine",
    "force_sync",
    "get_engine",
    "merge_dependencies",
    "normalize_output",
    "register_engine",
    "reset_engines",
]
