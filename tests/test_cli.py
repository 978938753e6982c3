"""Tests for the stylecompile command-line interface."""

import pytest
from typer.testing import CliRunner
from watchdog.events import FileModifiedEvent

from stylecompile import LessCompiler
from stylecompile.main import StylesheetChangeHandler, app
from stylecompile.render import register_engine

runner = CliRunner()


@pytest.fixture
def less_engine(engine_registry, fake_engine):
    """Route LESS compiles to the fake engine."""
    register_engine("less", lambda: fake_engine)
    return fake_engine


def test_help():
    """Test that the CLI help command works."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Compile LESS, Sass/SCSS and Stylus stylesheets" in result.stdout


def test_compile_css_to_stdout(project):
    path = project.write("src/plain.css", "a { color: red; }")

    result = runner.invoke(app, ["compile", path])

    assert result.exit_code == 0
    assert "a { color: red; }" in result.stdout


def test_compile_less_to_file_with_header(project, less_engine, tmp_path):
    """Test compiling to a file with include paths and a header comment."""
    project.write("vendor/colors.less")
    main = project.write("src/main.less", '@import "colors";\n.a { color: red; }\n')
    output = tmp_path / "main.css"

    result = runner.invoke(
        app, ["compile", main, str(output), "-I", "vendor", "--header"]
    )

    assert result.exit_code == 0
    content = output.read_text()
    assert content.startswith("/* Generated by stylecompile v0.1.0\n")
    assert " * Generation time: " in content
    assert " * Source file: main.less\n" in content
    assert content.endswith(".a { color: red; }")
    assert str(project.root / "vendor") in less_engine.requests[0].search_paths


def test_compile_failure_exits_with_error(project, less_engine):
    main = project.write("src/main.less", '@import "missing";\n')

    result = runner.invoke(app, ["compile", main])

    assert result.exit_code == 1


def test_compile_unsupported_extension(project):
    path = project.write("src/main.pcss", "a {}")

    result = runner.invoke(app, ["compile", path])

    assert result.exit_code == 1


def test_deps_prints_one_path_per_line(project):
    """Test dependency listing without rendering."""
    project.write("src/main.scss", '@import "colors";\n@import "grid";\n')
    colors = project.write("src/_colors.scss")
    grid = project.write("node_modules/grid.scss")

    result = runner.invoke(app, ["deps", "src/main.scss"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == sorted([colors, grid])


def test_deps_unresolved_import(project):
    project.write("src/main.styl", '@import "missing"\n')

    result = runner.invoke(app, ["deps", "src/main.styl"])

    assert result.exit_code == 1


def test_watch_handler_tracks_dependencies(project, make_compiler, tmp_path):
    """Test that rebuilds refresh the watched files from the dependencies."""
    source = '@import "colors";\n.a { color: red; }\n'
    main = project.write("src/main.less", source)
    colors = project.write("node_modules/colors.less")
    output = tmp_path / "out.css"

    handler = StylesheetChangeHandler(make_compiler(LessCompiler), main, output)

    assert handler.rebuild() is True
    assert output.read_text() == ".a { color: red; }"
    assert handler.watched_files == {main, colors}
    assert handler.watched_directories() == {str(project.src), str(project.library)}

    handler.on_modified(FileModifiedEvent(str(project.root / "other.less")))
    assert handler.needs_rebuild is False

    handler.on_modified(FileModifiedEvent(colors))
    assert handler.needs_rebuild is True


def test_watch_handler_keeps_watching_after_failure(project, make_compiler, tmp_path):
    """Test that a failed rebuild leaves the previous state in place."""
    main = project.write("src/main.less", ".a { color: red; }\n")
    output = tmp_path / "out.css"
    handler = StylesheetChangeHandler(make_compiler(LessCompiler), main, output)
    handler.rebuild()

    project.write("src/main.less", '@import "missing";\n')

    assert handler.rebuild() is False
    assert output.read_text() == ".a { color: red; }"
    assert handler.watched_files == {main}


def test_deps_undecodable_dependency(project):
    """Test that an unreadable dependency exits cleanly instead of crashing."""
    project.write("src/main.scss", '@import "bad";\n')
    (project.root / "_bad.scss").write_bytes(b"$primary: red;\n\xff\xfe\n")

    result = runner.invoke(app, ["deps", "src/main.scss"])

    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)
