"""
Toy Language Lexer Tests
========================

Tests for toyc.lang.lexer and toyc.lang.stream: token classification,
line/column tracking, error collection and the token buffer limit.
"""

import pytest

from toyc.lang.lexer import Lexer, Token, TokenType, tokenize, MAX_TOKENS
from toyc.lang.stream import TokenStream
from toyc.lang.errors import (
    CompilationError,
    UnknownCharacterError,
    TokenLimitError,
)


def types_of(source: str) -> list[TokenType]:
    return [t.type for t in tokenize(source)]


class TestTokens:
    """Token classification."""

    def test_empty_source(self):
        """Empty source should produce only the EOF token."""
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].text is None

    def test_whitespace_only(self):
        """Whitespace is skipped entirely."""
        assert types_of("  \t\n  \r\n ") == [TokenType.EOF]

    def test_assignment(self):
        """`x = 10;` is identifier, assign, number, semicolon."""
        tokens = tokenize("x = 10;")
        assert [t.type for t in tokens] == [
            TokenType.IDENTIFIER,
            TokenType.ASSIGN,
            TokenType.NUMBER,
            TokenType.SEMICOLON,
            TokenType.EOF,
        ]
        assert [t.text for t in tokens[:-1]] == ["x", "=", "10", ";"]

    def test_keywords(self):
        """Only exact keyword spellings are keywords."""
        tokens = tokenize("print if else printer iff elsewhere")
        assert [t.type for t in tokens[:-1]] == [
            TokenType.PRINT,
            TokenType.IF,
            TokenType.ELSE,
            TokenType.IDENTIFIER,
            TokenType.IDENTIFIER,
            TokenType.IDENTIFIER,
        ]

    def test_keywords_are_case_sensitive(self):
        assert types_of("Print IF")[:-1] == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]

    def test_identifier_with_digits(self):
        """Identifiers may contain digits after the first letter."""
        tokens = tokenize("a1b2")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].text == "a1b2"

    def test_number_then_identifier(self):
        """A digit run ends at the first letter."""
        tokens = tokenize("12ab")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].text == "12"
        assert tokens[1].type == TokenType.IDENTIFIER
        assert tokens[1].text == "ab"

    def test_operators(self):
        """Arithmetic and relational operators are distinct categories."""
        tokens = tokenize("+ - * / > <")
        assert [t.type for t in tokens[:-1]] == [TokenType.OPERATOR] * 4 + [TokenType.RELATIONAL] * 2
        assert all(t.is_operator() for t in tokens[:-1])

    def test_equality_and_assign(self):
        """`==` wins over `=` by one character of lookahead."""
        tokens = tokenize("== = ===")
        assert [(t.type, t.text) for t in tokens[:-1]] == [
            (TokenType.EQUALITY, "=="),
            (TokenType.ASSIGN, "="),
            (TokenType.EQUALITY, "=="),
            (TokenType.ASSIGN, "="),
        ]

    def test_delimiters(self):
        assert types_of("; ( ) { }")[:-1] == [
            TokenType.SEMICOLON,
            TokenType.LPAREN,
            TokenType.RPAREN,
            TokenType.LBRACE,
            TokenType.RBRACE,
        ]

    def test_no_whitespace_needed(self):
        """Tokens are split without whitespace between them."""
        tokens = tokenize("if(x>5){print(x);}")
        assert [t.text for t in tokens[:-1]] == [
            "if", "(", "x", ">", "5", ")", "{", "print", "(", "x", ")", ";", "}",
        ]

    def test_lexemes_reconstruct_source(self):
        """Concatenated lexemes equal the source minus whitespace."""
        source = "if (x > 5) { print(x); } else { y = x + 1; print(); }"
        tokens = tokenize(source)
        assert "".join(t.text for t in tokens[:-1]) == source.replace(" ", "")

    def test_token_repr(self):
        tokens = tokenize("x")
        assert repr(tokens[0]) == "Token(IDENTIFIER, 'x', 1:1)"
        assert repr(tokens[1]) == "Token(EOF, 1:2)"

    def test_token_helpers(self):
        tokens = tokenize("print 5 x")
        assert tokens[0].is_keyword()
        assert tokens[1].is_term()
        assert tokens[2].is_term()
        assert not tokens[0].is_term()


class TestLocations:
    """Line and column tracking."""

    def test_columns(self):
        tokens = tokenize("x = 10;")
        assert [t.column for t in tokens] == [1, 3, 5, 7, 8]

    def test_newline_advances_line(self):
        """A newline moves the next token to line 2, column 1."""
        tokens = tokenize("x = 1;\ny = 2;")
        y = tokens[4]
        assert y.text == "y"
        assert y.line == 2
        assert y.column == 1

    def test_line_counter(self):
        lexer = Lexer("a = 1;\n\nb = 2;\n")
        lexer.tokenize()
        assert lexer.line == 4

    def test_filename_in_location(self):
        tokens = tokenize("x", filename="prog.toy")
        assert str(tokens[0].location) == "prog.toy:1:1"

    def test_starting_line_number(self):
        tokens = Lexer("x", line_number=7).tokenize()
        assert tokens[0].line == 7


class TestRepeatedTokenize:
    """A Lexer scans its source once."""

    def test_second_call_returns_same_tokens(self):
        lexer = Lexer("x = 1;")
        first = lexer.tokenize()
        second = lexer.tokenize()
        assert second is first
        assert [t.type for t in second].count(TokenType.EOF) == 1
        assert len(second) == 5

    def test_second_call_raises_same_errors(self):
        lexer = Lexer("x = @;")
        with pytest.raises(CompilationError):
            lexer.tokenize()
        with pytest.raises(CompilationError) as exc_info:
            lexer.tokenize()
        assert len(exc_info.value.errors) == 1


class TestLexicalErrors:
    """Unknown characters and error collection."""

    def test_unknown_character(self):
        """An unknown character is reported with its location."""
        with pytest.raises(CompilationError) as exc_info:
            tokenize("x = @;")
        error = exc_info.value
        assert error.stage == "lexing"
        assert len(error.errors) == 1
        assert isinstance(error.errors[0], UnknownCharacterError)
        assert error.errors[0].char == "@"
        assert str(error.errors[0].location) == "<input>:1:5"
        assert "unknown character '@'" in str(error)

    def test_all_unknown_characters_reported(self):
        """Scanning continues after an unknown character."""
        lexer = Lexer("x = @1 # 2;")
        with pytest.raises(CompilationError) as exc_info:
            lexer.tokenize()
        assert [e.char for e in exc_info.value.errors] == ["@", "#"]
        # Valid tokens around the bad characters are still produced
        assert [t.text for t in lexer.tokens[:-1]] == ["x", "=", "1", "2", ";"]

    def test_underscore_is_not_an_identifier_character(self):
        with pytest.raises(CompilationError) as exc_info:
            tokenize("my_var = 1;")
        assert exc_info.value.errors[0].char == "_"

    def test_error_line_number(self):
        with pytest.raises(CompilationError) as exc_info:
            tokenize("x = 1;\ny = $;")
        assert exc_info.value.errors[0].line == 2

    def test_error_shows_source_line_and_caret(self):
        with pytest.raises(CompilationError) as exc_info:
            tokenize("x = @;")
        message = str(exc_info.value.errors[0])
        assert "    x = @;" in message
        assert "        ^" in message

    def test_report_summary(self):
        with pytest.raises(CompilationError) as exc_info:
            tokenize("@ #")
        assert "2 errors, 0 warnings" in str(exc_info.value)


class TestTokenLimit:
    """Capacity of the token buffer."""

    def test_default_limit(self):
        assert MAX_TOKENS == 100

    def test_limit_exactly_reached(self):
        """Filling the buffer exactly is not an error; EOF is not counted."""
        tokens = Lexer("a = 1;", max_tokens=4).tokenize()
        assert len(tokens) == 5
        assert tokens[-1].type == TokenType.EOF

    def test_limit_exceeded(self):
        """Tokens past the limit are dropped with one error."""
        lexer = Lexer("a = 1;", max_tokens=3)
        with pytest.raises(CompilationError) as exc_info:
            lexer.tokenize()
        errors = exc_info.value.errors
        assert len(errors) == 1
        assert isinstance(errors[0], TokenLimitError)
        assert errors[0].limit == 3
        assert errors[0].token_text == ";"
        assert len([t for t in lexer.tokens if t.type != TokenType.EOF]) == 3

    def test_limit_reported_once(self):
        with pytest.raises(CompilationError) as exc_info:
            Lexer("a b c d e f g h", max_tokens=2).tokenize()
        assert len(exc_info.value.errors) == 1

    def test_default_limit_exceeded(self):
        source = "x = 1; " * 26  # 104 tokens
        with pytest.raises(CompilationError) as exc_info:
            tokenize(source)
        assert "token limit exceeded (100 tokens)" in str(exc_info.value)


class TestTokenStream:
    """Cursor over the token list."""

    def test_requires_eof(self):
        with pytest.raises(ValueError):
            TokenStream([Token(TokenType.IDENTIFIER, "x", 1, 1)])

    def test_len_excludes_eof(self):
        assert len(TokenStream(tokenize("x = 1;"))) == 4

    def test_peek_advance_previous(self):
        stream = TokenStream(tokenize("x = 1;"))
        assert stream.peek().text == "x"
        assert stream.peek(1).text == "="
        assert stream.advance().text == "x"
        assert stream.previous().text == "x"
        assert stream.position == 1

    def test_match_consumes_only_on_success(self):
        stream = TokenStream(tokenize("x = 1;"))
        assert stream.match(TokenType.NUMBER) is None
        assert stream.position == 0
        assert stream.match(TokenType.NUMBER, TokenType.IDENTIFIER).text == "x"
        assert stream.position == 1

    def test_cursor_stops_at_eof(self):
        stream = TokenStream(tokenize("x"))
        stream.advance()
        assert stream.at_end()
        assert stream.advance().type == TokenType.EOF
        assert stream.peek(5).type == TokenType.EOF
        assert stream.check(TokenType.EOF)
