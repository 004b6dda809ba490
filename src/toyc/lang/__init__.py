"""
Toy Language Front End
======================

A lexer, a recursive descent parser and a C code generator for a small
imperative language with integer variables, `print` and `if`/`else`.

Pipeline
--------
    Source → Lexer → Parser → AST → Code Generator → C source

The C source is then handed to a native toolchain (see toyc.native).

Language
--------
    x = 10;
    y = x + 5;
    if (y > 12) { print(y); } else { print(0); }
    print();

Expressions have no operator precedence: they fold left to right, so
`a + b * c` means `(a + b) * c`.
"""

from toyc.lang.compiler import (
    ToyCompiler,
    CompilerOptions,
    CompilerResult,
    compile_toy,
    wrap_program,
)
from toyc.lang.errors import (
    LanguageError,
    LexicalError,
    UnknownCharacterError,
    TokenLimitError,
    ToySyntaxError,
    MissingTokenError,
    UnexpectedTokenError,
    UnknownKeywordError,
    CompilationError,
    ErrorCollector,
)
from toyc.lang.lexer import Lexer, Token, TokenType, MAX_TOKENS, tokenize
from toyc.lang.stream import TokenStream
from toyc.lang.parser import Parser, parse_source
from toyc.lang.codegen import CodeGenerator
from toyc.lang.ast import (
    ASTNode,
    ASTPrinter,
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
    iter_chain,
    walk,
    unfold_left,
)

__all__ = [
    # Main API
    "ToyCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_toy",
    "wrap_program",
    # Errors
    "LanguageError",
    "LexicalError",
    "UnknownCharacterError",
    "TokenLimitError",
    "ToySyntaxError",
    "MissingTokenError",
    "UnexpectedTokenError",
    "UnknownKeywordError",
    "CompilationError",
    "ErrorCollector",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "MAX_TOKENS",
    "tokenize",
    "TokenStream",
    # Parser
    "Parser",
    "parse_source",
    # Code Generator
    "CodeGenerator",
    # AST
    "ASTNode",
    "ASTPrinter",
    "Program",
    "Statement",
    "StatementKind",
    "AssignStatement",
    "PrintStatement",
    "IfStatement",
    "Expression",
    "LiteralExpression",
    "BinaryExpression",
    "BinaryOperator",
    "link_statements",
    "iter_chain",
    "walk",
    "unfold_left",
]
