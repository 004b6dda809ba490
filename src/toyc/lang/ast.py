"""
Toy Language Abstract Syntax Tree (AST) Definitions
===================================================

This module defines the AST node types produced by the parser and
consumed by the code generator.

Node Hierarchy
--------------
ASTNode (base)
├── Program - root; owns the top-level statement chain
├── Statement - chain link wrapping one StatementKind
├── StatementKind
│   ├── AssignStatement - name = expression ;
│   ├── PrintStatement - print ( term? ) ;
│   └── IfStatement - if ( expression ) { ... } else { ... }
└── Expression
    ├── LiteralExpression - identifier name or numeral
    └── BinaryExpression - left op right

Design Notes
------------
- Statements in a program or block form a singly linked chain. Only the
  Statement wrapper carries the `next` link; statement kinds and
  expressions never do.
- An expression's only children are its own operands.
- All nodes are frozen dataclasses: immutable once the parser builds them.
  Because of that a chain is built from its tail (see link_statements).
- Every node has exactly one owner, so the tree has no sharing and no
  cycles and is released as soon as the last reference goes away.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Iterator, Optional

from toyc.errors import SourceLocation


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node starts
    """
    location: SourceLocation

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}@{self.location.line}:{self.location.column}"


@dataclass(frozen=True)
class Expression(ASTNode):
    """Base class for expression nodes. Expressions evaluate to an int."""
    pass


@dataclass(frozen=True)
class StatementKind(ASTNode):
    """Base class for the statement variants wrapped by Statement."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

class BinaryOperator(Enum):
    """Binary operators; the value is the source (and C) symbol."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    GREATER = ">"
    LESS = "<"

    @property
    def symbol(self) -> str:
        return self.value


@dataclass(frozen=True)
class LiteralExpression(Expression):
    """
    Leaf expression: an identifier name or a decimal numeral.

    Attributes:
        text: The lexeme, emitted verbatim
    """
    text: str = ""

    @property
    def is_number(self) -> bool:
        return self.text.isdigit()


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """
    Binary operation (left op right).

    The parser folds left to right, so `left` may be any expression built
    so far while `right` is always a single LiteralExpression.
    """
    operator: BinaryOperator = None
    left: Expression = None
    right: Expression = None


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass(frozen=True)
class AssignStatement(StatementKind):
    """
    Assignment `variable = value;`. Rendered as a fresh int declaration.
    """
    variable: str = ""
    value: Expression = None


@dataclass(frozen=True)
class PrintStatement(StatementKind):
    """
    Print statement. A value of None is the empty `print();`, which
    writes a bare newline.
    """
    value: Optional[Expression] = None


@dataclass(frozen=True)
class IfStatement(StatementKind):
    """
    If statement with optional else block.

    Attributes:
        condition: The condition expression
        then_branch: Head of the then-block chain (None if empty)
        else_branch: Head of the else-block chain (None if absent or empty)
    """
    condition: Expression = None
    then_branch: Optional["Statement"] = None
    else_branch: Optional["Statement"] = None


@dataclass(frozen=True)
class Statement(ASTNode):
    """
    One link of a statement chain.

    Attributes:
        kind: The statement proper
        next: The following statement in the same block, if any
    """
    kind: StatementKind = None
    next: Optional["Statement"] = None

    def __iter__(self) -> Iterator["Statement"]:
        return iter_chain(self)


@dataclass(frozen=True)
class Program(ASTNode):
    """
    Root node: owns the head of the top-level statement chain.
    """
    body: Optional[Statement] = None

    def statements(self) -> Iterator[Statement]:
        return iter_chain(self.body)

    def __len__(self) -> int:
        return sum(1 for _ in self.statements())


# =============================================================================
# Chain Helpers
# =============================================================================

def link_statements(kinds: list[StatementKind]) -> Optional[Statement]:
    """
    Build a chain from statement kinds in program order.

    Returns:
        The head Statement, or None for an empty list
    """
    head = None
    for kind in reversed(kinds):
        head = Statement(location=kind.location, kind=kind, next=head)
    return head


def iter_chain(head: Optional[Statement]) -> Iterator[Statement]:
    """Yield each Statement of a chain in order."""
    current = head
    while current is not None:
        yield current
        current = current.next


def unfold_left(expr: Expression) -> tuple[Expression, list[BinaryExpression]]:
    """
    Split a left-deep expression into its innermost left operand and the
    binary nodes above it, innermost first.

        (a + b) * c   ->   a, [a + b, (a + b) * c]
    """
    spine = []
    while isinstance(expr, BinaryExpression):
        spine.append(expr)
        expr = expr.left
    spine.reverse()
    return expr, spine


def _children(node: ASTNode) -> list[Optional[ASTNode]]:
    if isinstance(node, Program):
        return [node.body]
    if isinstance(node, (AssignStatement, PrintStatement)):
        return [node.value]
    if isinstance(node, IfStatement):
        return [node.condition, node.then_branch, node.else_branch]
    if isinstance(node, BinaryExpression):
        return [node.left, node.right]
    return []


def walk(node: Optional[ASTNode]) -> Iterator[ASTNode]:
    """
    Depth-first post-order traversal.

    Structural children come before their parent; for a statement chain
    each link is finished before moving on to its successor. Uses an
    explicit stack, so long expressions and chains need no recursion.
    """
    stack: list[tuple[Optional[ASTNode], bool]] = [(node, False)]

    while stack:
        current, finished = stack.pop()
        if current is None:
            continue
        if finished:
            yield current
            continue

        if isinstance(current, Statement):
            stack.append((current.next, False))
            stack.append((current, True))
            stack.append((current.kind, False))
            continue

        stack.append((current, True))
        for child in reversed(_children(current)):
            stack.append((child, False))


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care
    about.

    Usage:
        class MyVisitor(ASTVisitor):
            def visit_PrintStatement(self, node):
                ...

        MyVisitor().visit(program)
    """

    def visit(self, node: ASTNode):
        """Dispatch to visit_<ClassName>, or generic_visit."""
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit every child node held in a dataclass field."""
        for f in fields(node):
            value = getattr(node, f.name)
            if isinstance(value, ASTNode):
                self.visit(value)

    def visit_chain(self, head: Optional[Statement]) -> None:
        """Visit every statement of a chain in order."""
        for stmt in iter_chain(head):
            self.visit(stmt.kind)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging (`toyc --ast`).

    Expressions print fully parenthesized so the left-folded structure
    is visible: `a + b * c` shows as `((a + b) * c)`.
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _indent(self) -> None:
        self.indent_level += 1

    def _dedent(self) -> None:
        self.indent_level = max(0, self.indent_level - 1)

    def visit_Program(self, node: Program):
        self._emit("Program")
        self._indent()
        self.visit_chain(node.body)
        self._dedent()

    def visit_Statement(self, node: Statement):
        self.visit_chain(node)

    def visit_AssignStatement(self, node: AssignStatement):
        self._emit(f"Assign: {node.variable} = {self._expr_str(node.value)}")

    def visit_PrintStatement(self, node: PrintStatement):
        if node.value is None:
            self._emit("Print")
        else:
            self._emit(f"Print {self._expr_str(node.value)}")

    def visit_IfStatement(self, node: IfStatement):
        self._emit(f"If ({self._expr_str(node.condition)})")
        self._indent()
        self._emit("Then:")
        self._indent()
        self.visit_chain(node.then_branch)
        self._dedent()
        if node.else_branch:
            self._emit("Else:")
            self._indent()
            self.visit_chain(node.else_branch)
            self._dedent()
        self._dedent()

    def _expr_str(self, expr: Optional[Expression]) -> str:
        if expr is None:
            return ""
        if isinstance(expr, LiteralExpression):
            return expr.text
        if isinstance(expr, BinaryExpression):
            innermost, spine = unfold_left(expr)
            text = self._expr_str(innermost)
            for binary in spine:
                text = f"({text} {binary.operator.symbol} {self._expr_str(binary.right)})"
            return text
        return f"<{type(expr).__name__}>"
