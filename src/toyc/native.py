"""
Native Build/Execute Interface
==============================

The compiler's output is C source. Turning it into a running program is
the job of an external toolchain, reached only through the
NativeToolchain interface so the front end can be used and tested
without a C compiler installed.

Implementations
---------------
- GccToolchain: runs a C compiler (gcc by default) and then the binary
- NullToolchain: does nothing; used when building is switched off

Failures raise BuildError or ExecutionError. The driver treats both as
soft failures: they are reported, but the compilation itself has
already succeeded.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from toyc.errors import BuildError, ExecutionError

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """
    Outcome of running a compiled program.

    Attributes:
        return_code: Process exit status
        stdout: Captured standard output
        stderr: Captured standard error
    """
    return_code: int = 0
    stdout: str = ""
    stderr: str = ""


class NativeToolchain(ABC):
    """Builds a generated C file and runs the result."""

    @abstractmethod
    def build(self, source_path: Path, executable_path: Path) -> Path:
        """
        Compile `source_path` into an executable.

        Returns:
            Path of the executable

        Raises:
            BuildError: If the compiler fails or cannot be started
        """

    @abstractmethod
    def run(self, executable_path: Path) -> ExecutionResult:
        """
        Run a built executable.

        Raises:
            ExecutionError: If it cannot start or exits non-zero
        """


class GccToolchain(NativeToolchain):
    """
    Native toolchain backed by a command-line C compiler.

    Attributes:
        cc: Compiler command (gcc, clang, cc, ...)
        cflags: Extra compiler arguments
        timeout: Seconds before a build or run is abandoned
    """

    def __init__(
        self,
        cc: str = "gcc",
        cflags: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
    ):
        self.cc = cc
        self.cflags = list(cflags or [])
        self.timeout = timeout

    def build(self, source_path: Path, executable_path: Path) -> Path:
        cmd = [self.cc, *self.cflags, str(source_path), "-o", str(executable_path)]
        command = " ".join(cmd)
        logger.debug(f"Building: {command}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise BuildError(f"Compilation of {source_path} timed out", command=command)
        except FileNotFoundError:
            raise BuildError(f"C compiler '{self.cc}' not found", command=command)

        if result.returncode != 0:
            raise BuildError(
                f"Compilation of {source_path} failed",
                command=command,
                return_code=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )

        return executable_path

    def run(self, executable_path: Path) -> ExecutionResult:
        # A bare name would be looked up on PATH instead of the build dir
        command = str(executable_path)
        if executable_path.parent == Path("."):
            command = f"./{executable_path}"
        logger.debug(f"Running: {command}")

        try:
            result = subprocess.run(
                [command],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise ExecutionError(f"Execution of {executable_path} timed out", command=command)
        except OSError as e:
            raise ExecutionError(f"Execution of {executable_path} failed: {e}", command=command)

        if result.returncode != 0:
            raise ExecutionError(
                f"Execution of {executable_path} failed",
                command=command,
                return_code=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )

        return ExecutionResult(result.returncode, result.stdout, result.stderr)


class NullToolchain(NativeToolchain):
    """Toolchain that neither builds nor runs anything."""

    def build(self, source_path: Path, executable_path: Path) -> Path:
        return executable_path

    def run(self, executable_path: Path) -> ExecutionResult:
        return ExecutionResult()
