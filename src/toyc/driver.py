"""
toyc Driver
===========

Runs the whole pipeline for one program, in strict order:

    1. Lex and parse      (CompilationError aborts)
    2. Generate C         (written to the artifact path; ResourceError aborts)
    3. Build and execute  (through a NativeToolchain; failures are soft)

Fatal problems propagate as exceptions for the caller (normally the
CLI) to turn into an exit status. Build and execution failures are
logged and kept on the DriverResult, and the run still counts as a
success because the compilation itself worked.

Progress messages go through the module logger at INFO level; the CLI
configures logging so they reach the terminal.

Example
-------
>>> from toyc.driver import Driver
>>> from toyc.config import BuildConfig
>>> result = Driver(BuildConfig(run_program=False)).run("x = 10; print(x);")
>>> result.artifact_path
PosixPath('output.c')
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from toyc.config import BuildConfig
from toyc.errors import ResourceError, ToolchainError
from toyc.lang.compiler import ToyCompiler, CompilerOptions, CompilerResult
from toyc.native import NativeToolchain, GccToolchain, ExecutionResult

logger = logging.getLogger(__name__)


@dataclass
class DriverResult:
    """
    Outcome of a driver run that got past code generation.

    Attributes:
        compilation: Front-end result (tokens, AST, C text)
        artifact_path: Where the C program was written
        executable_path: The built binary, if the build succeeded
        execution: Output of the program, if it ran successfully
        toolchain_error: The soft build/execute failure, if any
    """
    compilation: CompilerResult
    artifact_path: Path
    executable_path: Optional[Path] = None
    execution: Optional[ExecutionResult] = None
    toolchain_error: Optional[ToolchainError] = None

    @property
    def built(self) -> bool:
        return self.executable_path is not None


def read_source_line(stream: TextIO) -> str:
    """
    Read one line of program text from `stream`.

    The trailing newline is removed.

    Raises:
        ResourceError: If the stream is at end of input or unreadable
    """
    try:
        line = stream.readline()
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceError(f"error reading input: {e}")

    if not line:
        raise ResourceError("error reading input or no input provided")

    if line.endswith("\n"):
        line = line[:-1]
    return line


def write_artifact(program: str, path: Path) -> Path:
    """
    Write the generated C program.

    Raises:
        ResourceError: If the file cannot be created
    """
    try:
        path.write_text(program, encoding="utf-8")
    except OSError as e:
        raise ResourceError(f"unable to open output file ({e.strerror or e})", str(path))
    return path


class Driver:
    """
    Orchestrates compile, artifact, build and execute for one program.

    Attributes:
        config: Build configuration
        options: Compiler options
        toolchain: Native build/execute implementation
    """

    def __init__(
        self,
        config: Optional[BuildConfig] = None,
        toolchain: Optional[NativeToolchain] = None,
        options: Optional[CompilerOptions] = None,
    ):
        self.config = config or BuildConfig()
        self.options = options or CompilerOptions()
        self.toolchain = toolchain or GccToolchain(
            self.config.cc,
            self.config.cflags,
            timeout=self.config.timeout,
        )

    def compile(self, source: str, filename: Optional[str] = None) -> CompilerResult:
        """
        Run the front end only.

        Raises:
            CompilationError: On any lexical or syntax error
        """
        return ToyCompiler(self.options).compile_source(source, filename)

    def run(self, source: str, filename: Optional[str] = None) -> DriverResult:
        """
        Run the full pipeline.

        Raises:
            CompilationError: On any lexical or syntax error
            ResourceError: If the artifact cannot be written
        """
        compilation = self.compile(source, filename)

        artifact = write_artifact(compilation.program, self.config.output_path)
        logger.info(f"C code generated in {artifact}")

        result = DriverResult(compilation=compilation, artifact_path=artifact)

        if not self.config.run_program:
            return result

        try:
            logger.info(f"Compiling {artifact}...")
            result.executable_path = self.toolchain.build(
                artifact, self.config.executable_path
            )
            logger.info("Running the compiled program...")
            result.execution = self.toolchain.run(result.executable_path)
        except ToolchainError as e:
            logger.warning(f"Error: {e.message}")
            result.toolchain_error = e

        return result
