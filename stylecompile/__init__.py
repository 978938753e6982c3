from stylecompile.compiler_base import CompilerBase, SimpleCompilerBase
from stylecompile.compilers import (
    LessCompiler,
    PassthroughCompiler,
    SassCompiler,
    StylusCompiler,
    compiler_for_path,
    create_compiler,
)
from stylecompile.errors import (
    CompilerError,
    ConfigurationError,
    ContractNotImplementedError,
    EngineError,
    SourceReadError,
    UnresolvedImportError,
)
from stylecompile.models import CompileResult

__version__ = "0.1.0"


__all__ = [
    "CompileResult",
    "CompilerBase",
    "CompilerError",
    "ConfigurationError",
    "ContractNotImplementedError",
    "EngineError",
    "LessCompiler",
    "PassthroughCompiler",
    "SassCompiler",
    "SimpleCompilerBase",
    "SourceReadError",
    "StylusCompiler",
    "UnresolvedImportError",
    "compiler_for_path",
    "create_compiler",
]
