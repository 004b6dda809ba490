"""
Token Stream
============

A cursor over the token list produced by the lexer. The parser reads
tokens only through this class: single-token lookahead plus a
"consume if it matches" primitive.

The list always ends with an EOF token; the cursor never moves past it.
"""

from typing import Optional

from toyc.lang.lexer import Token, TokenType


class TokenStream:
    """
    Position over a token sequence, starting at 0.

    Attributes:
        tokens: The token list (must end with EOF)
        position: Index of the current token
    """

    def __init__(self, tokens: list[Token]):
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token list must end with an EOF token")
        self.tokens = tokens
        self.position = 0

    def __len__(self) -> int:
        """Number of real tokens (EOF excluded)."""
        return len(self.tokens) - 1

    def at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def peek(self, offset: int = 0) -> Token:
        """Look at the token at position + offset (EOF when past the end)."""
        pos = self.position + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[pos]

    def previous(self) -> Token:
        """The most recently consumed token."""
        if self.position == 0:
            return self.tokens[0]
        return self.tokens[self.position - 1]

    def advance(self) -> Token:
        """Consume and return the current token."""
        token = self.peek()
        if not self.at_end():
            self.position += 1
        return token

    def check(self, *types: TokenType) -> bool:
        return self.peek().type in types

    def match(self, *types: TokenType) -> Optional[Token]:
        """
        Consume the current token if it is one of the given types.

        Returns:
            The consumed token, or None if no match
        """
        if self.check(*types):
            return self.advance()
        return None
