"""
toyc - Toy Language Compiler Command-Line Interface
===================================================

Compiles a toy-language program to C, builds it with the native C
compiler and runs it.

Usage Examples
--------------
Interactive (one line from the terminal):
    $ toyc
    Enter your source code (press Ctrl+D or Ctrl+Z then Enter to finish):
    x = 10; print(x);

From a file or the command line:
    $ toyc program.toy
    $ toyc -e "x = 10; print(x);"

Generate C only:
    $ toyc --no-run -o prog.c program.toy

Debugging:
    $ toyc --tokens -e "x = 1 + 2;"
    $ toyc --ast -e "if (x > 5) { print(x); }"
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from toyc import __version__
from toyc.cli.errors import handle_cli_exception
from toyc.config import BuildConfig
from toyc.driver import Driver, read_source_line
from toyc.errors import ExecutionError, ResourceError
from toyc.lang.ast import ASTPrinter
from toyc.lang.compiler import CompilerOptions
from toyc.lang.lexer import Lexer, MAX_TOKENS

logger = logging.getLogger(__name__)

PROMPT = "Enter your source code (press Ctrl+D or Ctrl+Z then Enter to finish):"


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def _acquire_source(
    input_file: Optional[Path],
    source_text: Optional[str],
) -> tuple[str, str]:
    """Return (source, filename) from -e, INPUT_FILE or one line of stdin."""
    if source_text is not None:
        return source_text, "<command-line>"

    if input_file is not None:
        try:
            return input_file.read_text(encoding="utf-8"), str(input_file)
        except (OSError, UnicodeDecodeError) as e:
            raise ResourceError(f"unable to read input file ({e})", str(input_file))

    click.echo(PROMPT)
    source = read_source_line(sys.stdin)
    click.echo(f"Source Code:\n{source}")
    return source, "<stdin>"


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-e", "--source", "source_text",
    help="Program text to compile instead of reading INPUT_FILE or stdin",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generated C file (default: output.c, or $TOYC_OUTPUT)",
)
@click.option(
    "-x", "--executable",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Compiled binary (default: output, or $TOYC_EXECUTABLE)",
)
@click.option(
    "--cc",
    help="Native C compiler (default: gcc, or $TOYC_CC)",
)
@click.option(
    "--no-run",
    is_flag=True,
    help="Only generate C; do not build or run it",
)
@click.option(
    "--max-tokens",
    type=click.IntRange(min=1),
    default=MAX_TOKENS,
    show_default=True,
    help="Token buffer capacity",
)
@click.option(
    "--tokens",
    "dump_tokens",
    is_flag=True,
    help="Print the token list and exit (for debugging)",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print AST and exit (for debugging)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="toyc")
def main(
    input_file: Optional[Path],
    source_text: Optional[str],
    output: Optional[Path],
    executable: Optional[Path],
    cc: Optional[str],
    no_run: bool,
    max_tokens: int,
    dump_tokens: bool,
    ast: bool,
    verbose: bool,
) -> None:
    """
    Compile a toy-language program to C, build it and run it.

    INPUT_FILE is the program to compile. Without it (and without -e)
    a single line is read from the terminal.

    \b
    Language:
        x = 10;                      # declare-and-assign an int
        print(x);  print();          # print a value, or a newline
        if (x > 5) { ... } else { ... }

    Expressions fold left to right with no precedence:
    `a + b * c` means `(a + b) * c`.
    """
    setup_logging(verbose)

    try:
        source, filename = _acquire_source(input_file, source_text)

        if dump_tokens:
            for token in Lexer(source, filename, max_tokens=max_tokens).tokenize():
                click.echo(repr(token))
            return

        config = BuildConfig.from_env().with_overrides(
            output_path=output,
            executable_path=executable,
            cc=cc,
        )
        if no_run:
            config.run_program = False

        driver = Driver(config, options=CompilerOptions(max_tokens=max_tokens))

        if ast:
            compilation = driver.compile(source, filename)
            click.echo(ASTPrinter().print(compilation.ast))
            return

        result = driver.run(source, filename)

        for warning in result.compilation.warnings:
            click.echo(warning, err=True)

        if verbose:
            click.echo(f"Tokenized: {result.compilation.token_count} tokens")
            click.echo(f"Parsed: {len(result.compilation.ast)} top-level statement(s)")

        stdout = None
        if result.execution is not None:
            stdout = result.execution.stdout
        elif isinstance(result.toolchain_error, ExecutionError):
            stdout = result.toolchain_error.stdout

        if stdout is not None:
            click.echo("----- Program Output -----")
            click.echo(stdout, nl=False)
            click.echo("-------------------------")

        if result.toolchain_error is not None:
            click.echo(f"Error: {result.toolchain_error}", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
