"""LESS and Stylus rendering through Node.js.

The JavaScript engines are driven by a small bridge script run with
``node -e``: the source, options and search paths go in as JSON on stdin, and
``{css, map, imports}`` comes back as JSON on stdout. The subprocess is
managed with asyncio, which makes these engines asynchronous only; their
blocking path goes through ``force_sync``.
"""

import asyncio
import json
import os
import shutil
from typing import Any

from loguru import logger

from stylecompile.constants import (
    DEFAULT_NODE_EXECUTABLE,
    LESS_BRIDGE_SCRIPT,
    NODE_EXECUTABLE_ENV,
    NODE_VERSION_SCRIPT,
    STYLUS_BRIDGE_SCRIPT,
)
from stylecompile.errors import EngineError
from stylecompile.models import RenderOutput, RenderRequest
from stylecompile.render.base import AsyncRenderEngine
from stylecompile.render.sync import force_sync


class NodeEngine(AsyncRenderEngine):
    """Render engine backed by a Node.js package."""

    def __init__(
        self,
        package: str,
        bridge_script: str,
        node_executable: str | None = None,
    ):
        """Initialize the engine.

        Args:
            package: Node package providing the renderer (``less``, ``stylus``)
            bridge_script: JavaScript run with ``node -e`` for each render
            node_executable: Node binary; defaults to ``$STYLECOMPILE_NODE``
                or ``node`` on the PATH
        """
        self.name = package
        self.package = package
        self.bridge_script = bridge_script
        self.node_executable = node_executable or os.environ.get(
            NODE_EXECUTABLE_ENV, DEFAULT_NODE_EXECUTABLE
        )
        self._version: str | None = None

    def build_payload(self, source: str, request: RenderRequest) -> dict[str, Any]:
        return {
            "source": source,
            "options": request.options,
            "paths": request.search_paths,
        }

    def _environment(self, library_paths: tuple[str, ...]) -> dict[str, str]:
        env = dict(os.environ)
        node_path = [p for p in library_paths if os.path.isdir(p)]
        if env.get("NODE_PATH"):
            node_path.append(env["NODE_PATH"])
        if node_path:
            env["NODE_PATH"] = os.pathsep.join(node_path)
        return env

    async def _run(
        self,
        args: list[str],
        stdin: bytes | None = None,
        library_paths: tuple[str, ...] = (),
    ) -> tuple[int, bytes, bytes]:
        executable = shutil.which(self.node_executable)
        if executable is None:
            raise EngineError(
                f"Node.js executable '{self.node_executable}' not found; "
                f"it is required to compile {self.package}"
            )

        process = await asyncio.create_subprocess_exec(
            executable,
            *args,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=self._environment(library_paths),
        )
        stdout, stderr = await process.communicate(stdin)
        return process.returncode or 0, stdout, stderr

    async def render_async(self, source: str, request: RenderRequest) -> RenderOutput:
        payload = json.dumps(self.build_payload(source, request)).encode("utf-8")

        logger.debug(f"Rendering {request.file_path} with node {self.package}")
        returncode, stdout, stderr = await self._run(
            ["-e", self.bridge_script], payload, request.library_paths
        )

        if returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            if not message:
                message = f"{self.package} exited with status {returncode}"
            raise EngineError(message, file_path=request.file_path, formatted=message)

        try:
            data = json.loads(stdout.decode("utf-8"))
        except json.JSONDecodeError as e:
            raise EngineError(
                f"Unreadable output from {self.package}: {e}",
                file_path=request.file_path,
            ) from e

        return RenderOutput(
            css=data.get("css"),
            source_map=data.get("map"),
            imports=list(data.get("imports") or []),
        )

    async def version_async(self) -> str:
        returncode, stdout, stderr = await self._run(
            ["-e", NODE_VERSION_SCRIPT, self.package]
        )
        if returncode != 0:
            raise EngineError(stderr.decode("utf-8", errors="replace").strip())
        return stdout.decode("utf-8").strip()

    def version(self) -> str:
        if self._version is None:
            self._version = force_sync(self.version_async)
        return self._version


def create_less_engine() -> NodeEngine:
    """Create the engine for LESS."""
    return NodeEngine("less", LESS_BRIDGE_SCRIPT)


def create_stylus_engine() -> NodeEngine:
    """Create the engine for Stylus."""
    return NodeEngine("stylus", STYLUS_BRIDGE_SCRIPT)
