"""Tests for the concrete compilers, their options and the registry."""

import pytest

import stylecompile
from stylecompile import (
    ConfigurationError,
    LessCompiler,
    PassthroughCompiler,
    SassCompiler,
    StylusCompiler,
    compiler_for_path,
    create_compiler,
)
from stylecompile.compilers import mime_type_for_path, register_compiler
from stylecompile.compilers.stylesheet import StylesheetCompiler
from stylecompile.constants import (
    LESS_DEFAULT_OPTIONS,
    SASS_DEFAULT_OPTIONS,
    STYLUS_DEFAULT_OPTIONS,
)
from stylecompile.errors import ContractNotImplementedError
from stylecompile.options import LESS_OPTIONS, validate_options


@pytest.mark.parametrize(
    "compiler_class, mime_types",
    [
        (LessCompiler, ["text/less"]),
        (SassCompiler, ["text/sass", "text/scss"]),
        (StylusCompiler, ["text/stylus"]),
        (PassthroughCompiler, ["text/css"]),
    ],
)
def test_input_mime_types(compiler_class, mime_types):
    assert compiler_class.get_input_mime_types() == mime_types


@pytest.mark.parametrize(
    "compiler_class, defaults",
    [
        (LessCompiler, LESS_DEFAULT_OPTIONS),
        (SassCompiler, SASS_DEFAULT_OPTIONS),
        (StylusCompiler, STYLUS_DEFAULT_OPTIONS),
    ],
)
def test_default_options_are_copied(compiler_class, defaults, make_compiler):
    """Test that mutating one compiler's options leaves the defaults alone."""
    compiler = make_compiler(compiler_class)
    assert compiler.compiler_options == defaults

    compiler.compiler_options["paths"] = ["/extra"]
    assert "paths" not in defaults
    assert make_compiler(compiler_class).compiler_options == defaults


def test_stylesheet_compiler_requires_language():
    """Test that the shared base cannot be used without a language."""
    with pytest.raises(ContractNotImplementedError):
        StylesheetCompiler(library_paths=[])
    with pytest.raises(ContractNotImplementedError):
        StylesheetCompiler.get_input_mime_types()


def test_should_compile_every_file(make_compiler):
    compiler = make_compiler(LessCompiler)

    assert compiler.should_compile_file("/p/_partial.less", {}) is True


@pytest.mark.asyncio
async def test_should_compile_every_file_async(make_compiler):
    assert await make_compiler(StylusCompiler).should_compile_file_async("/p/a.styl")


def test_less_engine_options(project, make_compiler, fake_engine):
    """Test the option object handed to the LESS engine."""
    compiler = make_compiler(LessCompiler, fake_engine)
    compiler.compiler_options["paths"] = [str(project.root / "vendor")]
    main = project.write("src/main.less", ".a {}")

    compiler.compile(".a {}", main)

    request = fake_engine.requests[0]
    assert request.file_path == main
    assert request.options["filename"] == main
    assert request.options["paths"] == request.search_paths
    assert request.search_paths == [
        str(project.src),
        str(project.root / "vendor"),
        str(project.root),
        str(project.library),
    ]
    assert request.options["sourceMap"] == {"sourceMapFileInline": True}
    assert request.library_paths == (str(project.library),)


@pytest.mark.parametrize("ext, indented", [(".scss", False), (".sass", True)])
def test_sass_engine_options(project, make_compiler, fake_engine, ext, indented):
    compiler = make_compiler(SassCompiler, fake_engine)
    main = project.write(f"src/main{ext}", "")

    compiler.compile("", main)

    options = fake_engine.requests[0].options
    assert options["indentedSyntax"] is indented
    assert options["sourceMapRoot"] == main
    assert options["sourceMapEmbed"] is True


def test_stylus_engine_options(project, make_compiler, fake_engine):
    """Test that nib is both imported and used, and lists are normalized."""
    compiler = make_compiler(StylusCompiler, fake_engine)
    compiler.compiler_options["include"] = "/shared"
    main = project.write("src/main.styl", "")

    compiler.compile("", main)

    request = fake_engine.requests[0]
    assert request.options["import"] == ["nib"]
    assert request.options["use"] == ["nib"]
    assert request.options["include"] == ["/shared"]
    assert request.options["filename"] == "main.styl"
    assert request.search_paths[-1] == str(project.src)
    assert compiler.compiler_options["include"] == "/shared"


def test_stylus_nib_is_not_a_file_dependency(project, make_compiler):
    source = "@import nib\nbody\n  color red\n"
    main = project.write("src/main.styl", source)

    result = make_compiler(StylusCompiler).compile(source, main)

    assert result.dependencies == []


def test_unknown_options_are_forwarded(project, make_compiler, fake_engine):
    compiler = make_compiler(LessCompiler, fake_engine)
    compiler.compiler_options["strictMath"] = True
    main = project.write("src/main.less", "")

    compiler.compile("", main)

    assert fake_engine.requests[0].options["strictMath"] is True


def test_invalid_option_type(project, make_compiler):
    """Test that a recognized option with the wrong type is rejected."""
    compiler = make_compiler(SassCompiler)
    compiler.compiler_options["precision"] = "high"
    main = project.write("src/main.scss", "")

    with pytest.raises(ConfigurationError, match="precision"):
        compiler.compile("", main)
    with pytest.raises(ConfigurationError):
        compiler.determine_dependent_files("", main)


def test_validate_options_normalizes_paths(tmp_path):
    validated = validate_options({"paths": [tmp_path], "extra": 1}, LESS_OPTIONS)

    assert validated == {"paths": [str(tmp_path)], "extra": 1}


def test_validate_options_rejects_bad_paths():
    with pytest.raises(ConfigurationError):
        validate_options({"paths": "/not/a/list"}, LESS_OPTIONS)
    with pytest.raises(ConfigurationError):
        validate_options({"paths": [1, 2]}, LESS_OPTIONS)


def test_seen_and_library_paths(project, make_compiler):
    compiler = make_compiler(LessCompiler)
    compiler.determine_import_paths(str(project.src / "a.less"))
    compiler.determine_import_paths(str(project.root / "b.less"))
    compiler.determine_import_paths(str(project.src / "c.less"))

    assert compiler.seen_file_paths == [str(project.src), str(project.root)]
    assert compiler.library_paths == (str(project.library),)


def test_determine_import_paths_without_file(project, make_compiler):
    """Test the initial-state query with no file."""
    compiler = make_compiler(LessCompiler)

    assert compiler.determine_import_paths() == [
        str(project.root),
        str(project.library),
    ]
    assert compiler.seen_file_paths == []


def test_passthrough_compiler():
    compiler = PassthroughCompiler()

    result = compiler.compile("a { color: red; }", "/p/a.css")
    empty = compiler.compile("", "/p/empty.css")

    assert result.code == "a { color: red; }"
    assert result.dependencies == []
    assert empty.code == " "
    assert compiler.get_compiler_version() == stylecompile.__version__


@pytest.mark.parametrize(
    "path, compiler_class",
    [
        ("main.less", LessCompiler),
        ("main.scss", SassCompiler),
        ("main.SASS", SassCompiler),
        ("main.styl", StylusCompiler),
        ("main.stylus", StylusCompiler),
        ("main.css", PassthroughCompiler),
    ],
)
def test_compiler_for_path(path, compiler_class):
    kwargs = {} if compiler_class is PassthroughCompiler else {"library_paths": []}

    assert type(compiler_for_path(path, **kwargs)) is compiler_class


def test_unknown_extension():
    with pytest.raises(ValueError, match="Unsupported stylesheet extension"):
        mime_type_for_path("main.pcss")


def test_unknown_mime_type():
    with pytest.raises(ValueError, match="Unsupported MIME type"):
        create_compiler("text/postcss")


def test_register_compiler(monkeypatch):
    """Test that registering a compiler routes its MIME types to it."""
    from stylecompile import compilers

    monkeypatch.setattr(
        compilers, "_COMPILER_REGISTRY", dict(compilers._COMPILER_REGISTRY)
    )

    class PostCssCompiler(PassthroughCompiler):
        @classmethod
        def get_input_mime_types(cls) -> list[str]:
            return ["text/postcss"]

    register_compiler(PostCssCompiler)

    assert type(create_compiler("text/postcss")) is PostCssCompiler
