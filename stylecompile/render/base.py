"""Rendering engine interfaces.

This module provides the interfaces that connect compilers with the wrapped
rendering engines. An engine either has a natively blocking API (subclass
``RenderEngine``) or is irreducibly asynchronous (subclass
``AsyncRenderEngine``); either way it offers both calling conventions.
"""

import asyncio
from abc import ABC, abstractmethod

from stylecompile.models import RenderOutput, RenderRequest
from stylecompile.render.sync import force_sync


class RenderEngine(ABC):
    """Interface for a stylesheet rendering engine."""

    name: str = ""

    @abstractmethod
    def render(self, source: str, request: RenderRequest) -> RenderOutput:
        """
        Render a stylesheet, blocking until the engine is done.

        Args:
            source: Stylesheet source text
            request: File path, search paths and engine options

        Returns:
            The engine's raw output

        Raises:
            EngineError: If the engine reports an error
        """
        pass

    async def render_async(self, source: str, request: RenderRequest) -> RenderOutput:
        """
        Render a stylesheet without blocking the event loop.

        Blocking engines run on a worker thread.
        """
        return await asyncio.to_thread(self.render, source, request)

    @abstractmethod
    def version(self) -> str:
        """
        Get an opaque version token of the engine.

        Returns:
            A version string, only ever compared for equality
        """
        pass


class AsyncRenderEngine(RenderEngine):
    """Base for engines whose only native API is asynchronous."""

    @abstractmethod
    async def render_async(self, source: str, request: RenderRequest) -> RenderOutput:
        pass

    def render(self, source: str, request: RenderRequest) -> RenderOutput:
        """Render by draining the asynchronous call to completion."""
        return force_sync(lambda: self.render_async(source, request))
