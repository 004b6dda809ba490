"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes for the toyc CLI.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Exit codes for the toyc command."""
    SUCCESS = 0
    COMPILE_ERROR = 1    # Lexical or syntax errors
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error
    RESOURCE_ERROR = 4   # Input unreadable or artifact not writable


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always
    """
    from toyc.errors import ResourceError, ToyCError
    from toyc.lang.errors import CompilationError, LanguageError

    if isinstance(error, CompilationError):
        # The aggregate report is already formatted
        click.echo(str(error), err=True)
        if error.stage:
            click.echo(f"Errors found during {error.stage}. Aborting.", err=True)
        sys.exit(ExitCode.COMPILE_ERROR)

    elif isinstance(error, LanguageError):
        click.echo(str(error), err=True)
        sys.exit(ExitCode.COMPILE_ERROR)

    elif isinstance(error, ResourceError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.RESOURCE_ERROR)

    elif isinstance(error, ToyCError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INTERNAL_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
