"""
toyc Error Hierarchy
====================

This module defines the base of the exception hierarchy for toyc.
All exceptions inherit from ToyCError, allowing callers to catch every
toyc-related error with a single except clause if desired.

Exception Hierarchy
-------------------
ToyCError (base)
├── LanguageError (see toyc.lang.errors) - lexical and syntax errors
├── ResourceError - input text or output artifact unavailable
└── ToolchainError - native build/execute step failed
    ├── BuildError - C compiler rejected the generated artifact
    └── ExecutionError - the compiled program could not run or failed

Lexical and syntax errors are fatal to a compilation. Toolchain errors are
"soft": they are reported to the user but the compilation itself has
already succeeded, so the driver never escalates them.
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class ToyCError(Exception):
    """
    Base exception for all toyc errors.

        try:
            compile_toy("x = 10;")
        except ToyCError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

    Attributes:
        filename: Name of the source (or "<input>" for terminal input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Resource Exceptions
# =============================================================================

class ResourceError(ToyCError):
    """
    Input text could not be acquired or the output artifact not created.

    Always fatal: the driver aborts immediately.

    Attributes:
        path: The file involved, if any
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        if path:
            super().__init__(f"{message}: {path}")
        else:
            super().__init__(message)


# =============================================================================
# Toolchain Exceptions
# =============================================================================

class ToolchainError(ToyCError):
    """
    Base exception for native build/execute failures.

    Attributes:
        command: The command line that failed (for display)
        return_code: Process exit status, if the process ran
        stdout: Captured standard output
        stderr: Captured standard error
    """

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        return_code: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
    ):
        self.message = message
        self.command = command
        self.return_code = return_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.command:
            parts.append(f"  command: {self.command}")
        if self.return_code is not None:
            parts.append(f"  exit status: {self.return_code}")
        if self.stderr:
            parts.append(self.stderr.rstrip())
        return "\n".join(parts)


class BuildError(ToolchainError):
    """
    The native C compiler failed on the generated artifact.

    A common cause is re-assigning a variable: every assignment declares
    an `int`, and the C compiler rejects the redeclaration.
    """
    pass


class ExecutionError(ToolchainError):
    """The compiled program could not be started or exited non-zero."""
    pass
