"""
Toy Language Lexer (Tokenizer)
==============================

This module converts toy-language source text into a list of tokens for
the parser.

Token Categories
----------------
- Keywords: print, if, else
- Identifiers: a letter followed by letters or digits
- Numbers: unsigned decimal digit runs
- Operators: + - * / (arithmetic), > < (relational)
- Assignment and equality: = and ==
- Delimiters: ; ( ) { }

Whitespace is skipped. A newline advances the line counter but produces
no token.

Error Handling
--------------
The lexer does not stop at the first bad character. Every unknown
character is recorded with its location and scanning continues past it,
so one pass reports every problem. When the token buffer reaches its
capacity the remaining tokens are dropped and a single TokenLimitError
is recorded. If anything was recorded, tokenize() raises a
CompilationError carrying all of them.

Example Usage
-------------
>>> from toyc.lang.lexer import Lexer
>>> for token in Lexer("x = 10;").tokenize():
...     print(token)
Token(IDENTIFIER, 'x', 1:1)
Token(ASSIGN, '=', 1:3)
Token(NUMBER, '10', 1:5)
Token(SEMICOLON, ';', 1:7)
Token(EOF, 1:8)
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from toyc.errors import SourceLocation
from toyc.lang.errors import (
    ErrorCollector,
    UnknownCharacterError,
    TokenLimitError,
)

logger = logging.getLogger(__name__)

# Capacity of the token buffer; the EOF sentinel is not counted
MAX_TOKENS = 100


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token types for the toy language."""

    EOF = auto()            # End of input (sentinel, never counted)

    # === Identifiers and Literals ===
    IDENTIFIER = auto()
    NUMBER = auto()

    # === Keywords ===
    PRINT = auto()          # print
    IF = auto()             # if
    ELSE = auto()           # else

    # === Operators ===
    OPERATOR = auto()       # + - * /
    RELATIONAL = auto()     # > <
    ASSIGN = auto()         # =
    EQUALITY = auto()       # ==

    # === Delimiters ===
    SEMICOLON = auto()      # ;
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }


KEYWORDS: dict[str, TokenType] = {
    "print": TokenType.PRINT,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.OPERATOR,
    "-": TokenType.OPERATOR,
    "*": TokenType.OPERATOR,
    "/": TokenType.OPERATOR,
    ">": TokenType.RELATIONAL,
    "<": TokenType.RELATIONAL,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from toy-language source.

    Attributes:
        type: The TokenType classification
        text: The exact lexeme (None only for EOF)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source
    """
    type: TokenType
    text: Optional[str]
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.text is not None:
            return f"Token({self.type.name}, {self.text!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_keyword(self) -> bool:
        return self.type in (TokenType.PRINT, TokenType.IF, TokenType.ELSE)

    def is_operator(self) -> bool:
        """Return True for tokens that may join two terms in an expression."""
        return self.type in (TokenType.OPERATOR, TokenType.RELATIONAL)

    def is_term(self) -> bool:
        return self.type in (TokenType.NUMBER, TokenType.IDENTIFIER)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes toy-language source.

    Each Lexer instance owns all of its state (position, line counter,
    token buffer, collected errors), so independent compilations never
    interfere with each other.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = lexer.tokenize()
        print(lexer.line)   # line counter after the pass

    Attributes:
        source: The source text being tokenized
        filename: Name of the source (for error reporting)
        max_tokens: Capacity of the token buffer
        tokens: Tokens produced so far
        errors: Collected lexical errors
    """

    IDENT_START = string.ascii_letters
    IDENT_CHARS = string.ascii_letters + string.digits

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        max_tokens: int = MAX_TOKENS,
        line_number: int = 1,
    ):
        self.source = source
        self.filename = filename
        self.max_tokens = max_tokens
        self.tokens: list[Token] = []
        self.errors = ErrorCollector()

        self._pos = 0
        self._line = line_number
        self._column = 1
        self._line_start_pos = 0
        self._limit_reported = False
        self._finished = False

    @property
    def line(self) -> int:
        """Current value of the line counter."""
        return self._line

    def tokenize(self) -> list[Token]:
        """
        Scan the whole source.

        The scan happens once; later calls return the same token list
        (and raise the same errors).

        Returns:
            The token list, terminated by an EOF token

        Raises:
            CompilationError: If any lexical error was recorded
        """
        if self._finished:
            self.errors.raise_if_errors(stage="lexing")
            return self.tokens
        self._finished = True

        while not self._at_end():
            self._skip_whitespace()
            if self._at_end():
                break
            self._scan_token()

        self.tokens.append(self._make_token(TokenType.EOF, None))
        logger.debug(
            f"Lexed {len(self.tokens) - 1} tokens over {self._line} line(s) "
            f"from {self.filename}"
        )

        self.errors.raise_if_errors(stage="lexing")
        return self.tokens

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Return the character at position + offset, or "" past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume the current character, updating line and column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        token_type: TokenType,
        text: Optional[str],
        start_line: Optional[int] = None,
        start_column: Optional[int] = None,
    ) -> Token:
        return Token(
            type=token_type,
            text=text,
            line=start_line or self._line,
            column=start_column or self._column,
            filename=self.filename,
        )

    def _add_token(
        self,
        token_type: TokenType,
        text: str,
        start_line: int,
        start_column: int,
    ) -> None:
        """Append a token unless the buffer is already full."""
        if len(self.tokens) >= self.max_tokens:
            if not self._limit_reported:
                self.errors.add(TokenLimitError(
                    self.max_tokens,
                    SourceLocation(self.filename, start_line, start_column),
                    token_text=text,
                ))
                self._limit_reported = True
            logger.debug(f"Dropped token {text!r} at {start_line}:{start_column}")
            return
        self.tokens.append(self._make_token(token_type, text, start_line, start_column))

    # =========================================================================
    # Scanning
    # =========================================================================

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._peek().isspace():
            self._advance()

    def _scan_token(self) -> None:
        start_line = self._line
        start_column = self._column
        char = self._peek()

        if char in self.IDENT_START:
            self._scan_identifier(start_line, start_column)
            return

        if char in string.digits:
            self._scan_number(start_line, start_column)
            return

        self._advance()

        if char == "=":
            if self._peek() == "=":
                self._advance()
                self._add_token(TokenType.EQUALITY, "==", start_line, start_column)
            else:
                self._add_token(TokenType.ASSIGN, "=", start_line, start_column)
            return

        if char in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[char], char, start_line, start_column)
            return

        # Unknown character: record it and keep scanning
        self.errors.add(UnknownCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column),
            self._get_current_line(),
        ))

    def _scan_identifier(self, start_line: int, start_column: int) -> None:
        """Scan an identifier, classifying exact keyword matches."""
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        token_type = KEYWORDS.get(name, TokenType.IDENTIFIER)
        self._add_token(token_type, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> None:
        chars = []
        while self._peek() and self._peek() in string.digits:
            chars.append(self._advance())

        self._add_token(TokenType.NUMBER, "".join(chars), start_line, start_column)

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]


def tokenize(
    source: str,
    filename: str = "<input>",
    max_tokens: int = MAX_TOKENS,
) -> list[Token]:
    """Tokenize source text in one call. Raises CompilationError on errors."""
    return Lexer(source, filename, max_tokens=max_tokens).tokenize()
