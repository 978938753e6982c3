"""Command line interface for stylecompile.

This module provides a command-line interface for compiling LESS, Sass/SCSS
and Stylus stylesheets to CSS, listing their dependencies, and recompiling
them whenever they or any file they import changes.
"""

import os
import sys
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional, TypeVar, cast

import arrow
import typer
import watchdog.events
import watchdog.observers
from loguru import logger
from watchdog.events import FileSystemEventHandler

from stylecompile import __version__
from stylecompile.compiler_base import CompilerBase
from stylecompile.compilers import StylesheetCompiler, compiler_for_path
from stylecompile.errors import CompilerError
from stylecompile.io_utils import read_source_file
from stylecompile.models import CompileResult

# Define type variables for TypedCallable
F = TypeVar("F", bound=Callable[..., Any])


# TypedCommand decorator helper
def typed_command(app_command: Any) -> Callable[[F], F]:
    """Wrap typer command with proper typing for mypy."""

    def decorator(func: F) -> F:
        return cast(F, app_command(func))

    return decorator


app = typer.Typer(
    name="stylecompile",
    help=(
        "Compile LESS, Sass/SCSS and Stylus stylesheets to CSS. "
        "Commands: compile, deps, watch."
    ),
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    """Send debug output to stderr when requested."""
    if verbose:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")


def _create_compiler(
    stylesheet: str, include_paths: Optional[list[str]] = None
) -> CompilerBase:
    """Create the compiler for a stylesheet, chosen by its extension.

    Args:
        stylesheet: Path of the stylesheet
        include_paths: Extra search directories

    Returns:
        A configured compiler
    """
    try:
        compiler = compiler_for_path(stylesheet)
    except ValueError as e:
        logger.error(f"Unsupported stylesheet: {e}")
        raise typer.Exit(1) from e

    if include_paths:
        if isinstance(compiler, StylesheetCompiler):
            compiler.compiler_options["paths"] = [
                os.path.abspath(p) for p in include_paths
            ]
        else:
            logger.warning(
                f"Include paths are ignored for {os.path.basename(stylesheet)}"
            )

    return compiler


def _compile_file(compiler: CompilerBase, stylesheet: str) -> CompileResult:
    source = read_source_file(stylesheet)
    return compiler.compile(source, stylesheet)


def _add_header_comment(code: str, source_file: str) -> str:
    """Prefix compiled CSS with a generation comment.

    Args:
        code: Compiled CSS
        source_file: The stylesheet it was compiled from

    Returns:
        CSS with a header comment
    """
    timestamp = arrow.utcnow().format("YYYY-MM-DD HH:mm:ss UTC")
    header = f"/* Generated by stylecompile v{__version__}\n"
    header += f" * Generation time: {timestamp}\n"
    header += f" * Source file: {os.path.basename(source_file)}\n"
    header += " */\n"
    return header + code


def _write_output(code: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(code)
        return

    logger.info(f"Writing CSS to {output}...")
    with open(output, "w") as f:
        f.write(code)


# Define reusable arguments
STYLESHEET_ARG = typer.Argument(
    ..., help="Stylesheet to compile (.less, .scss, .sass, .styl, .css)"
)
INCLUDE_PATH_OPT = typer.Option(
    None, "--include-path", "-I", help="Extra import search directory (repeatable)"
)
VERBOSE_OPT = typer.Option(False, "--verbose", "-v", help="Log debug output")


@typed_command(app.command("compile"))
def compile_stylesheet(
    stylesheet: str = STYLESHEET_ARG,
    output: Optional[Path] = typer.Argument(
        None, help="Output CSS file (printed to stdout when omitted)"
    ),
    include_path: Optional[list[str]] = INCLUDE_PATH_OPT,
    header: bool = typer.Option(
        False, "--header", help="Prefix the output with a generation comment"
    ),
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Compile a stylesheet to CSS.

    Example: stylecompile compile styles/main.less build/main.css -I vendor
    """
    _configure_logging(verbose)
    stylesheet = os.path.abspath(stylesheet)
    compiler = _create_compiler(stylesheet, include_path)

    logger.info(f"Compiling {stylesheet}...")
    try:
        result = _compile_file(compiler, stylesheet)
    except CompilerError as e:
        logger.error(f"Compilation failed: {e}")
        raise typer.Exit(1) from e

    code = _add_header_comment(result.code, stylesheet) if header else result.code
    _write_output(code, output)
    logger.info(
        f"Compiled {os.path.basename(stylesheet)} "
        f"({len(result.dependencies)} dependencies)"
    )


@typed_command(app.command("deps"))
def list_dependencies(
    stylesheet: str = STYLESHEET_ARG,
    include_path: Optional[list[str]] = INCLUDE_PATH_OPT,
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Print the files a stylesheet transitively imports, one per line.

    Example: stylecompile deps styles/main.scss
    """
    _configure_logging(verbose)
    stylesheet = os.path.abspath(stylesheet)
    compiler = _create_compiler(stylesheet, include_path)

    try:
        source = read_source_file(stylesheet)
        dependencies = compiler.determine_dependent_files(source, stylesheet)
    except CompilerError as e:
        logger.error(f"Dependency scan failed: {e}")
        raise typer.Exit(1) from e

    for dependency in dependencies:
        typer.echo(dependency)


class StylesheetChangeHandler(FileSystemEventHandler):
    """Recompiles a stylesheet when it or one of its dependencies changes."""

    def __init__(
        self,
        compiler: CompilerBase,
        stylesheet: str,
        output: Path,
        header: bool = False,
    ):
        """Initialize the handler.

        Args:
            compiler: Compiler reused across rebuilds
            stylesheet: Absolute path of the watched stylesheet
            output: Output CSS file
            header: Whether to prefix output with a generation comment
        """
        self.compiler = compiler
        self.stylesheet = stylesheet
        self.output = output
        self.header = header
        self.watched_files: set[str] = {stylesheet}
        self.needs_rebuild = False

    def on_modified(self, event: watchdog.events.FileSystemEvent) -> None:
        """Handle file modified event.

        Args:
            event: File system event
        """
        path = os.path.abspath(os.fsdecode(event.src_path))
        if path in self.watched_files:
            logger.info(f"Detected changes in {path}")
            self.needs_rebuild = True

    def watched_directories(self) -> set[str]:
        return {os.path.dirname(path) for path in self.watched_files}

    def rebuild(self) -> bool:
        """Compile the stylesheet and refresh the watched file set.

        Returns:
            True if the compile succeeded
        """
        try:
            result = _compile_file(self.compiler, self.stylesheet)
        except CompilerError as e:
            logger.error(f"Compilation failed: {e}")
            return False

        code = result.code
        if self.header:
            code = _add_header_comment(code, self.stylesheet)
        _write_output(code, self.output)

        self.watched_files = {self.stylesheet, *result.dependencies}
        logger.info(f"Watching {len(self.watched_files)} files")
        return True


@typed_command(app.command("watch"))
def watch_stylesheet(
    stylesheet: str = STYLESHEET_ARG,
    output: Path = typer.Argument(..., help="Output CSS file"),
    include_path: Optional[list[str]] = INCLUDE_PATH_OPT,
    header: bool = typer.Option(
        False, "--header", help="Prefix the output with a generation comment"
    ),
    interval: float = typer.Option(
        0.2, "--interval", help="Seconds between change checks"
    ),
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Watch a stylesheet and its imports and recompile on changes.

    Example: stylecompile watch styles/main.styl build/main.css
    """
    _configure_logging(verbose)
    stylesheet = os.path.abspath(stylesheet)
    compiler = _create_compiler(stylesheet, include_path)

    # Create file system observer for hot reload
    observer = watchdog.observers.Observer()
    handler = StylesheetChangeHandler(compiler, stylesheet, output, header)
    scheduled: set[str] = set()

    def schedule_new_directories() -> None:
        # Watch the directories of the files, not the files themselves
        for directory in sorted(handler.watched_directories() - scheduled):
            observer.schedule(handler, path=directory, recursive=False)
            scheduled.add(directory)

    handler.rebuild()
    schedule_new_directories()
    observer.start()

    try:
        logger.info(f"Watching {stylesheet} (press Ctrl+C to exit)...")
        while True:
            time.sleep(interval)
            if handler.needs_rebuild:
                handler.needs_rebuild = False
                handler.rebuild()
                schedule_new_directories()
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received, stopping...")
    finally:
        observer.stop()
        observer.join()


if __name__ == "__main__":
    app()
