"""
Toy Language Error Hierarchy
============================

This module defines the exceptions raised by the lexer and parser.
All exceptions inherit from LanguageError, which itself inherits from
the base ToyCError for consistent error handling across toyc.

Exception Hierarchy
-------------------
LanguageError (base for all front-end errors)
├── LexicalError - problems found while tokenizing
│   ├── UnknownCharacterError - character outside the language
│   └── TokenLimitError - token buffer capacity reached
├── ToySyntaxError - problems found while parsing
│   ├── MissingTokenError - required token absent
│   ├── UnexpectedTokenError - token cannot start a statement
│   └── UnknownKeywordError - keyword cannot start a statement
└── CompilationError - aggregate of every error found in one stage

Error Message Format
--------------------
    <input>:1:5: error: expected '=' after identifier 'x' near token '10'
        x 10;
            ^

Errors are not raised one at a time. The lexer and parser record them
in an ErrorCollector so a single pass reports all of them, then raise a
CompilationError at the end of the stage.
"""

from typing import Optional, List

from toyc.errors import ToyCError, SourceLocation


# =============================================================================
# Base Language Exception
# =============================================================================

class LanguageError(ToyCError):
    """
    Base exception for all lexer and parser errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
        token_text: Lexeme of the offending token (None at end of input)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        token_text: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        self.token_text = token_text
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        """Line number of the error, if known."""
        return self.location.line if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            <input>:1:3: error: unknown character '@'
                x @= 1;
                  ^
        """
        parts = []

        headline = self.message
        if self.token_text is not None:
            headline = f"{headline} near token '{self.token_text}'"

        if self.location:
            parts.append(f"{self.location}: error: {headline}")
        else:
            parts.append(f"error: {headline}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class CompilationError(LanguageError):
    """
    Aggregate error raised at the end of a failed lexing or parsing stage.

    The message is the formatted report from ErrorCollector and is passed
    through unchanged. The individual errors stay available in `errors`.
    """

    def __init__(self, message: str, errors: Optional[List[LanguageError]] = None, stage: str = ""):
        self.errors: List[LanguageError] = list(errors or [])
        self.stage = stage
        super().__init__(message)

    def _format_message(self) -> str:
        return self.message


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(LanguageError):
    """Error found while converting source text into tokens."""
    pass


class UnknownCharacterError(LexicalError):
    """
    Character that does not belong to the language.

    Scanning continues past the character, so several of these can be
    reported from one pass.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unknown character '{char}'",
            location=location,
            source_line=source_line,
        )


class TokenLimitError(LexicalError):
    """The token buffer is full; the rest of the input is dropped."""

    def __init__(
        self,
        limit: int,
        location: Optional[SourceLocation] = None,
        token_text: Optional[str] = None,
    ):
        self.limit = limit
        super().__init__(
            f"token limit exceeded ({limit} tokens)",
            location=location,
            hint="split the program or raise --max-tokens",
            token_text=token_text,
        )


# =============================================================================
# Syntax Errors
# =============================================================================

class ToySyntaxError(LanguageError):
    """Error found while building the AST from tokens."""
    pass


class MissingTokenError(ToySyntaxError):
    """A required token is absent at a grammar position."""
    pass


class UnexpectedTokenError(ToySyntaxError):
    """A token that cannot start a statement."""

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"unexpected token '{found}'",
            location=location,
            hint="statements start with an identifier, 'print' or 'if'",
            source_line=source_line,
            token_text=found,
        )


class UnknownKeywordError(ToySyntaxError):
    """A keyword that cannot start a statement (e.g. a stray 'else')."""

    def __init__(
        self,
        keyword: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.keyword = keyword
        super().__init__(
            f"unknown keyword '{keyword}'",
            location=location,
            source_line=source_line,
            token_text=keyword,
        )


# =============================================================================
# Error Collection (for multi-error reporting)
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The lexer and parser keep going after an error so the user sees every
    problem from one run. At the end of the stage the collector raises a
    single CompilationError.

    Example:
        collector = ErrorCollector()
        collector.add(UnknownCharacterError("@", location))
        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self):
        self.errors: List[LanguageError] = []
        self.warnings: List[str] = []

    def add(self, error: LanguageError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def add_warning(self, message: str, location: Optional[SourceLocation] = None) -> None:
        """Add a warning message."""
        if location:
            self.warnings.append(f"{location}: warning: {message}")
        else:
            self.warnings.append(f"warning: {message}")

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def error_count(self) -> int:
        return len(self.errors)

    def report(self) -> str:
        """Format all errors and warnings for display."""
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        for warning in self.warnings:
            lines.append(warning)

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        )

        return "\n".join(lines)

    def clear(self) -> None:
        self.errors.clear()
        self.warnings.clear()

    def raise_if_errors(self, stage: str = "") -> None:
        """Raise a CompilationError if any errors were collected."""
        if self.has_errors():
            raise CompilationError(self.report(), self.errors, stage=stage)
