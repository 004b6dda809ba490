"""
C Code Generator for the Toy Language
=====================================

This module renders the AST as C statements. The output is only the
statement list; the compiler wraps it in `main()` (see
toyc.lang.compiler.wrap_program).

Rendering Rules
---------------
| Node                      | C output                           |
|---------------------------|------------------------------------|
| Assign(x, e)              | int x = e;                         |
| Print(e)                  | printf("%d\\n", e);                 |
| Print(None)               | printf("\\n");                      |
| If(c, then, else)         | if (c) { ... } else { ... }        |
| Literal(t)                | t                                  |
| Binary(op, l, r)          | l op r                             |

Every assignment declares a new `int`. There is no symbol table, so
assigning the same name twice declares it twice and the C compiler will
reject the artifact. This is a known limitation.

Expression Rendering
--------------------
Binary nodes render as `left op right` with single spaces. The parser
builds left-deep trees with no precedence, so a binary left operand is
wrapped in parentheses to keep C from regrouping it:

    a + b * c   ->   (a + b) * c

Usage
-----
>>> from toyc.lang.parser import parse_source
>>> from toyc.lang.codegen import CodeGenerator
>>> print(CodeGenerator().generate(parse_source("x = 10;")))
int x = 10;
"""

import logging
from typing import Optional

from toyc.lang.ast import (
    ASTVisitor,
    Program,
    Statement,
    AssignStatement,
    PrintStatement,
    IfStatement,
    Expression,
    LiteralExpression,
    BinaryExpression,
    unfold_left,
)

logger = logging.getLogger(__name__)

INDENT = "    "


class CodeGenerator(ASTVisitor):
    """
    Generates C statements from a toy-language AST.

    Statements are emitted as lines into `output`; expressions are
    returned as strings by their visit methods.

    Attributes:
        output: Generated lines
        base_indent: Indentation levels applied to every line
    """

    def __init__(self, base_indent: int = 0):
        self.base_indent = base_indent
        self.output: list[str] = []
        self._depth = 0

    def generate(self, node: Program | Statement | None) -> str:
        """
        Render a program or a statement chain.

        Returns:
            The C statements, one per line, with a trailing newline
            (empty string for an empty program)
        """
        self.output = []
        self._depth = self.base_indent

        if isinstance(node, Program):
            self.visit(node)
        else:
            self.visit_chain(node)

        logger.debug(f"Generated {len(self.output)} line(s) of C")

        if not self.output:
            return ""
        return "\n".join(self.output) + "\n"

    def _emit(self, text: str) -> None:
        self.output.append(f"{INDENT * self._depth}{text}")

    def _emit_block(self, head: Optional[Statement]) -> None:
        self._depth += 1
        self.visit_chain(head)
        self._depth -= 1

    # =========================================================================
    # Statements
    # =========================================================================

    def visit_Program(self, node: Program):
        self.visit_chain(node.body)

    def visit_Statement(self, node: Statement):
        self.visit_chain(node)

    def visit_AssignStatement(self, node: AssignStatement):
        self._emit(f"int {node.variable} = {self.visit(node.value)};")

    def visit_PrintStatement(self, node: PrintStatement):
        if node.value is None:
            self._emit('printf("\\n");')
        else:
            self._emit(f'printf("%d\\n", {self.visit(node.value)});')

    def visit_IfStatement(self, node: IfStatement):
        self._emit(f"if ({self.visit(node.condition)}) {{")
        self._emit_block(node.then_branch)
        self._emit("}")
        if node.else_branch is not None:
            self._emit("else {")
            self._emit_block(node.else_branch)
            self._emit("}")

    # =========================================================================
    # Expressions
    # =========================================================================

    def visit_LiteralExpression(self, node: LiteralExpression) -> str:
        return node.text

    def visit_BinaryExpression(self, node: BinaryExpression) -> str:
        # Rebuilt bottom-up along the left spine; only the outermost
        # operation goes unparenthesized
        innermost, spine = unfold_left(node)
        text = self.visit(innermost)
        for i, binary in enumerate(spine):
            if i > 0:
                text = f"({text})"
            text = f"{text} {binary.operator.symbol} {self.visit(binary.right)}"
        return text

    def render_expression(self, expr: Expression) -> str:
        """Render a single expression to C text."""
        return self.visit(expr)
