"""Fixtures and configuration for pytest."""

import asyncio
import re
from dataclasses import dataclass
from pathlib import Path

import pytest

from stylecompile.models import RenderOutput, RenderRequest
from stylecompile.render import AsyncRenderEngine, RenderEngine, reset_engines

# Import statements of every supported syntax, one per line
_IMPORT_STATEMENT = re.compile(
    r"^[ \t]*@(?:import|use|forward|require)\b[^\n]*\n?", re.MULTILINE
)

FIXTURE_RULE = ".fake_fixture { color: red; }\n"


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "libsass: mark test as requiring libsass")
    config.addinivalue_line("markers", "node: mark test as driving a node process")


def _render_without_imports(source: str) -> RenderOutput:
    return RenderOutput(css=_IMPORT_STATEMENT.sub("", source).strip())


class FakeEngine(RenderEngine):
    """Blocking engine that drops import statements and keeps everything else."""

    name = "fake"

    def __init__(self) -> None:
        self.requests: list[RenderRequest] = []

    def render(self, source: str, request: RenderRequest) -> RenderOutput:
        self.requests.append(request)
        return _render_without_imports(source)

    def version(self) -> str:
        return "fake-1.0"


class AsyncFakeEngine(AsyncRenderEngine):
    """Asynchronous-only counterpart of ``FakeEngine``."""

    name = "fake-async"

    def __init__(self) -> None:
        self.requests: list[RenderRequest] = []

    async def render_async(self, source: str, request: RenderRequest) -> RenderOutput:
        await asyncio.sleep(0)
        self.requests.append(request)
        return _render_without_imports(source)

    def version(self) -> str:
        return "fake-async-1.0"


@dataclass
class StyleProject:
    """A project on disk: the working directory with a source and library dir."""

    root: Path
    src: Path
    library: Path

    def write(self, relative: str, content: str = FIXTURE_RULE) -> str:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return str(path)


@pytest.fixture(autouse=True)
def _shared_engines():
    """Drop process-wide engines created by a test."""
    yield
    reset_engines()


@pytest.fixture
def engine_registry(monkeypatch):
    """Isolate engine registrations made by a test."""
    from stylecompile.render import engine_factory

    monkeypatch.setattr(
        engine_factory, "_ENGINE_FACTORIES", dict(engine_factory._ENGINE_FACTORIES)
    )
    return engine_factory


@pytest.fixture
def project(tmp_path, monkeypatch) -> StyleProject:
    """Create a project tree and make its root the working directory."""
    root = tmp_path.resolve() / "project"
    src = root / "src"
    library = root / "node_modules"
    src.mkdir(parents=True)
    library.mkdir(parents=True)
    monkeypatch.chdir(root)
    monkeypatch.delenv("NODE_PATH", raising=False)
    return StyleProject(root=root, src=src, library=library)


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def async_fake_engine() -> AsyncFakeEngine:
    return AsyncFakeEngine()


@pytest.fixture
def make_compiler(project):
    """Build compilers bound to the project's library dir and a fake engine."""

    def factory(compiler_class, engine=None):
        return compiler_class(
            engine=engine if engine is not None else FakeEngine(),
            library_paths=[str(project.library)],
        )

    return factory
