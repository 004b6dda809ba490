"""
Toy Language Compiler Main Module
=================================

This module provides the programmatic interface to the compiler. It
orchestrates the front end:

    Source → Lex → Parse → Generate → C program text

Usage
-----
Command line:
    $ toyc program.toy

Programmatic:
    >>> from toyc.lang import compile_toy
    >>> print(compile_toy("x = 10; print(x);"))
    #include <stdio.h>
    int main() {
        int x = 10;
        printf("%d\\n", x);
        return 0;
    }

Writing the artifact and invoking the native toolchain are not done
here; see toyc.driver.

Error Handling
--------------
The lexer and the parser each collect every error in their stage and
raise one CompilationError at the end. A lexical error stops the
pipeline before parsing; a syntax error stops it before generation.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from toyc.lang.lexer import Lexer, Token, MAX_TOKENS
from toyc.lang.parser import Parser
from toyc.lang.codegen import CodeGenerator
from toyc.lang.ast import Program, walk

logger = logging.getLogger(__name__)

PROGRAM_HEADER = "#include <stdio.h>\nint main() {\n"
PROGRAM_FOOTER = "    return 0;\n}\n"


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        max_tokens: Capacity of the token buffer
        filename: Name used in diagnostics when none is given
    """
    max_tokens: int = MAX_TOKENS
    filename: str = "<input>"

    def __post_init__(self):
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename
        success: True if compilation succeeded
        tokens: Token list (EOF included)
        line_count: Line counter after lexing
        ast: The parsed program
        body: Generated C statements without the main() wrapper
        program: Complete C program text
        warnings: Warning messages
    """
    filename: str = ""
    success: bool = False
    tokens: list[Token] = field(default_factory=list)
    line_count: int = 0
    ast: Optional[Program] = None
    body: str = ""
    program: str = ""
    warnings: list[str] = field(default_factory=list)

    @property
    def token_count(self) -> int:
        """Number of real tokens (EOF excluded)."""
        return max(0, len(self.tokens) - 1)

    @property
    def node_count(self) -> int:
        return sum(1 for _ in walk(self.ast))


def wrap_program(body: str) -> str:
    """
    Wrap generated statements in a C entry point.

    `body` is expected to be indented one level already.
    """
    return f"{PROGRAM_HEADER}{body}{PROGRAM_FOOTER}"


class ToyCompiler:
    """
    Compiles toy-language source to C.

    Every call to compile_source() uses fresh lexer and parser objects,
    so one ToyCompiler can compile any number of programs.

    Example:
        compiler = ToyCompiler()
        result = compiler.compile_source("x = 10;")
        print(result.program)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: Optional[str] = None) -> CompilerResult:
        """
        Compile source text to a C program.

        Raises:
            CompilationError: On any lexical or syntax error
        """
        filename = filename or self.options.filename
        result = CompilerResult(filename=filename)

        # Stage 1: Lexical analysis
        lexer = Lexer(source, filename, max_tokens=self.options.max_tokens)
        result.tokens = lexer.tokenize()
        result.line_count = lexer.line

        # Stage 2: Parsing
        parser = Parser(result.tokens, filename, source.splitlines())
        result.ast = parser.parse()
        result.warnings = list(parser.errors.warnings)

        # Stage 3: Code generation
        result.body = CodeGenerator(base_indent=1).generate(result.ast)
        result.program = wrap_program(result.body)
        result.success = True

        logger.info(
            f"Compiled {filename}: {result.token_count} tokens, "
            f"{len(result.ast)} statement(s)"
        )
        return result

    def compile_file(self, filepath: str) -> CompilerResult:
        """
        Compile a source file.

        Raises:
            CompilationError: On any lexical or syntax error
            FileNotFoundError: If the file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_toy(source: str, filename: str = "<input>", max_tokens: int = MAX_TOKENS) -> str:
    """
    Compile toy-language source to a complete C program.

    Raises:
        CompilationError: If compilation fails
    """
    options = CompilerOptions(max_tokens=max_tokens, filename=filename)
    return ToyCompiler(options).compile_source(source).program
