"""
toyc - A Toy Imperative Language Compiler
=========================================

toyc compiles a small imperative language (integer variables, `print`,
`if`/`else`) to C, then hands the C to a native compiler and runs the
result.

Main Components
---------------
- **lang**: the compiler front end
    Lexer, recursive descent parser, AST and C code generator

- **native**: native build/execute interface
    Builds the generated C with gcc (or another compiler) and runs it

- **driver**: pipeline orchestration
    Lex, parse, generate, write the artifact, then build and run

- **cli**: the `toyc` command

Quick Start
-----------
Compile to C:
    >>> from toyc import compile_toy
    >>> c_source = compile_toy("x = 10; print(x);")

Compile, build and run:
    >>> from toyc import Driver
    >>> result = Driver().run("x = 10; print(x);")
    >>> result.execution.stdout
    '10\\n'

Or use the command-line tool:
    $ toyc -e "x = 10; print(x);"
"""

__version__ = "1.0.0"

from toyc.errors import (
    ToyCError,
    SourceLocation,
    ResourceError,
    ToolchainError,
    BuildError,
    ExecutionError,
)
from toyc.lang import (
    ToyCompiler,
    CompilerOptions,
    CompilerResult,
    compile_toy,
    CompilationError,
)
from toyc.config import BuildConfig
from toyc.native import NativeToolchain, GccToolchain, NullToolchain, ExecutionResult
from toyc.driver import Driver, DriverResult

__all__ = [
    # Version
    "__version__",
    # Errors
    "ToyCError",
    "SourceLocation",
    "ResourceError",
    "ToolchainError",
    "BuildError",
    "ExecutionError",
    "CompilationError",
    # Compiler
    "ToyCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_toy",
    # Build and run
    "BuildConfig",
    "NativeToolchain",
    "GccToolchain",
    "NullToolchain",
    "ExecutionResult",
    "Driver",
    "DriverResult",
]
