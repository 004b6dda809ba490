"""
Toy Language Recursive Descent Parser
=====================================

This module builds the AST from the token list produced by the lexer.

Grammar (Informal EBNF)
-----------------------
program    ::= statement*
statement  ::= assignment | print_stmt | if_stmt
assignment ::= IDENTIFIER '=' expression ';'
print_stmt ::= 'print' '(' term? ')' ';'
if_stmt    ::= 'if' '(' expression ')' '{' statement* '}'
               ('else' '{' statement* '}')?
expression ::= term (OP term)*
term       ::= NUMBER | IDENTIFIER

OP is an arithmetic (+ - * /) or relational (> <) operator. `==` is
lexed but is not an expression operator.

No Operator Precedence
----------------------
Expressions fold strictly left to right. Each `OP term` builds a new
binary node whose left child is everything parsed so far and whose right
child is the single next term:

    a + b * c   parses as   (a + b) * c

Error Recovery
--------------
Errors are recorded and parsing moves on to the next top-level
statement from wherever the cursor stopped. There is no
resynchronization to a statement boundary, so one mistake can cause
follow-on errors. A block nested deeper than MAX_NESTING is reported
and skipped. A statement that fails a required token produces no
node and is left out of its chain. At the end of the pass all errors are
raised together as a CompilationError.

Example Usage
-------------
>>> from toyc.lang.parser import parse_source
>>> program = parse_source("x = 1 + 2;")
>>> program.body.kind.variable
'x'
>>> program.body.kind.value.operator
<BinaryOperator.ADD: '+'>
"""

import logging
from typing import Optional

from toyc.errors import SourceLocation
from toyc.lang.lexer import Lexer, Token, TokenType, MAX_TOKENS
from toyc.lang.stream import TokenStream
from toyc.lang.ast import (
    Program,
    Statement,
    StatementKind,
    AssignStatement,
    PrintStatement,
    IfStatement,
    Expression,
    LiteralExpression,
    BinaryExpression,
    BinaryOperator,
    link_statements,
)
from toyc.lang.errors import (
    ErrorCollector,
    LanguageError,
    MissingTokenError,
    ToySyntaxError,
    UnexpectedTokenError,
    UnknownKeywordError,
)

logger = logging.getLogger(__name__)

# Deepest allowed block nesting
MAX_NESTING = 64


class Parser:
    """
    Recursive descent parser for the toy language.

    One method per grammar rule. All mutable state (cursor, collected
    errors) belongs to the instance.

    Attributes:
        filename: Source filename for error reporting
        source_lines: Source text split into lines, for error context
        errors: Collected syntax errors
    """

    def __init__(
        self,
        tokens: list[Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        self.filename = filename
        self.source_lines = source_lines or []
        self.errors = ErrorCollector()
        self._stream = TokenStream(tokens)
        self._depth = 0

    @property
    def position(self) -> int:
        """Index of the current token."""
        return self._stream.position

    def parse(self) -> Program:
        """
        Parse the whole token list.

        Returns:
            Program owning the top-level statement chain

        Raises:
            CompilationError: If any syntax error was recorded
        """
        program = self.parse_all()
        self.errors.raise_if_errors(stage="parsing")
        return program

    def parse_all(self) -> Program:
        """
        Parse every top-level statement without raising.

        Errors are left in `errors`; failed statements are missing from
        the returned chain.
        """
        kinds = []
        while not self._stream.at_end():
            kind = self._parse_statement()
            if kind is not None:
                kinds.append(kind)

        logger.debug(f"Parsed {len(kinds)} top-level statement(s) from {self.filename}")

        return Program(
            location=SourceLocation(self.filename, 1, 1),
            body=link_statements(kinds),
        )

    # =========================================================================
    # Error Helpers
    # =========================================================================

    def _error(
        self,
        message: str,
        token: Optional[Token] = None,
        hint: Optional[str] = None,
    ) -> None:
        """Record a missing-token error at `token` (default: current token)."""
        token = token or self._stream.peek()
        self._record(MissingTokenError(
            message,
            location=token.location,
            hint=hint,
            source_line=self._get_source_line(token.line),
            token_text=token.text,
        ))

    def _record(self, error: LanguageError) -> None:
        logger.debug(f"Syntax error: {error.message}")
        self.errors.add(error)

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_statement(self) -> Optional[StatementKind]:
        """
        Parse one statement.

        Returns:
            The statement, or None if it failed or could not start
        """
        if self._stream.at_end():
            return None

        token = self._stream.peek()

        if token.type == TokenType.IDENTIFIER:
            return self._parse_assignment()
        if token.type == TokenType.PRINT:
            return self._parse_print()
        if token.type == TokenType.IF:
            return self._parse_if()

        # Cannot start a statement here: report it and step over the
        # token so the loop always makes progress
        source_line = self._get_source_line(token.line)
        if token.is_keyword():
            self._record(UnknownKeywordError(token.text, token.location, source_line))
        else:
            self._record(UnexpectedTokenError(token.text, token.location, source_line))
        self._stream.advance()
        return None

    def _parse_assignment(self) -> Optional[AssignStatement]:
        """Parse `IDENTIFIER '=' expression ';'`."""
        name = self._stream.advance()

        if not self._stream.match(TokenType.ASSIGN):
            self._error(f"expected '=' after identifier '{name.text}'")
            return None

        value = self._parse_expression()

        if not self._stream.match(TokenType.SEMICOLON):
            self._error("missing ';' after assignment")

        if value is None:
            return None

        return AssignStatement(
            location=name.location,
            variable=name.text,
            value=value,
        )

    def _parse_print(self) -> Optional[PrintStatement]:
        """Parse `'print' '(' term? ')' ';'`."""
        keyword = self._stream.advance()

        if not self._stream.match(TokenType.LPAREN):
            self._error("expected '(' after 'print'")
            return None

        value = None
        term = self._stream.match(TokenType.IDENTIFIER, TokenType.NUMBER)
        if term is not None:
            value = self._make_literal(term)

        if not self._stream.match(TokenType.RPAREN):
            self._error(
                "expected ')' after print",
                hint="print takes a single number or identifier",
            )

        if not self._stream.match(TokenType.SEMICOLON):
            self._error("missing ';' after print statement")

        return PrintStatement(location=keyword.location, value=value)

    def _parse_if(self) -> Optional[IfStatement]:
        """Parse an if statement with its optional else block."""
        keyword = self._stream.advance()

        if not self._stream.match(TokenType.LPAREN):
            self._error("expected '(' after 'if'")
            return None

        condition = self._parse_expression()
        then_branch = None
        else_branch = None

        if self._stream.match(TokenType.RPAREN):
            if self._stream.match(TokenType.LBRACE):
                then_branch = self._parse_block()
                if self._stream.match(TokenType.ELSE):
                    if self._stream.match(TokenType.LBRACE):
                        else_branch = self._parse_block()
                    else:
                        self._error("expected '{' after 'else'")
            else:
                self._error("expected '{' after if condition")
        else:
            self._error("expected ')' after if condition")

        if condition is None:
            return None

        return IfStatement(
            location=keyword.location,
            condition=condition,
            then_branch=then_branch,
            else_branch=else_branch,
        )

    def _parse_block(self) -> Optional[Statement]:
        """
        Parse statements up to the closing brace (already past the '{').

        A block nested deeper than MAX_NESTING is reported and skipped
        up to its matching brace.

        Returns:
            Head of the block's chain, or None if the block is empty
        """
        start = self._stream.previous()

        if self._depth >= MAX_NESTING:
            self._record(ToySyntaxError(
                f"blocks nested too deeply (limit {MAX_NESTING})",
                location=start.location,
                source_line=self._get_source_line(start.line),
                token_text=start.text,
            ))
            self._skip_block()
            return None

        kinds = []
        closed = False

        self._depth += 1
        try:
            while not self._stream.at_end():
                if self._stream.match(TokenType.RBRACE):
                    closed = True
                    break
                kind = self._parse_statement()
                if kind is not None:
                    kinds.append(kind)
        finally:
            self._depth -= 1

        if not closed:
            self.errors.add_warning(
                "block opened here is not closed before end of input",
                start.location,
            )

        return link_statements(kinds)

    def _skip_block(self) -> None:
        """Consume tokens through the brace closing the current block."""
        depth = 1
        while not self._stream.at_end():
            token = self._stream.advance()
            if token.type == TokenType.LBRACE:
                depth += 1
            elif token.type == TokenType.RBRACE:
                depth -= 1
                if depth == 0:
                    return

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_expression(self) -> Optional[Expression]:
        """
        Parse `term (OP term)*`, folding left to right.

        Returns:
            The expression, or None if no leading term was found
        """
        first = self._stream.match(TokenType.NUMBER, TokenType.IDENTIFIER)
        if first is None:
            self._error("expected number or identifier in expression")
            return None

        expr: Expression = self._make_literal(first)

        while self._stream.check(TokenType.OPERATOR, TokenType.RELATIONAL):
            op = self._stream.advance()
            term = self._stream.match(TokenType.NUMBER, TokenType.IDENTIFIER)
            if term is None:
                self._error("expected number or identifier after operator")
                return expr
            expr = BinaryExpression(
                location=expr.location,
                operator=BinaryOperator(op.text),
                left=expr,
                right=self._make_literal(term),
            )

        return expr

    def _make_literal(self, token: Token) -> LiteralExpression:
        return LiteralExpression(location=token.location, text=token.text)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: str,
    filename: str = "<input>",
    max_tokens: int = MAX_TOKENS,
) -> Program:
    """
    Lex and parse source text in one call.

    Raises:
        CompilationError: On any lexical or syntax error
    """
    tokens = Lexer(source, filename, max_tokens=max_tokens).tokenize()
    return Parser(tokens, filename, source.splitlines()).parse()
