from stylecompile.compiler_base import CompilerContext, SimpleCompilerBase
from stylecompile.constants import (
    CSS_MIME_TYPES,
    EMPTY_OUTPUT_PLACEHOLDER,
    OUTPUT_MIME_TYPE,
)
from stylecompile.models import CompileResult


class PassthroughCompiler(SimpleCompilerBase):
    """Compiler for plain CSS, which is returned unchanged."""

    @classmethod
    def get_input_mime_types(cls) -> list[str]:
        return list(CSS_MIME_TYPES)

    def compile(
        self, source: str, file_name: str, context: CompilerContext | None = None
    ) -> CompileResult:
        return CompileResult(
            code=source or EMPTY_OUTPUT_PLACEHOLDER,
            source_maps=None,
            dependencies=[],
            mime_type=OUTPUT_MIME_TYPE,
        )

    def get_compiler_version(self) -> str:
        from stylecompile import __version__

        return __version__
