"""Abstract Syntax Tree (AST) definitions for the Lox language.

The parser builds these nodes and the interpreter walks them. Nodes form
a strict tree: every composite node owns its children and nothing points
back up. ``str(node)`` gives a canonical one-line rendering which is
handy for debugging and for comparing parses in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .tokens import Token, TokenType
from .values import stringify


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Expr(Node):
    pass


@dataclass
class Stmt(Node):
    pass


# Expressions

@dataclass
class Literal(Expr):
    value: Any

    def __str__(self) -> str:
        return stringify(self.value)


@dataclass
class Variable(Expr):
    name: Token

    def __str__(self) -> str:
        return str(self.name)


@dataclass
class Assign(Expr):
    name: Token
    value: Expr

    def __str__(self) -> str:
        return f"{self.name} = {self.value}"


@dataclass
class Logical(Expr):
    left: Expr
    operator: Token  # AND or OR
    right: Expr

    def __str__(self) -> str:
        op = 'and' if self.operator.type == TokenType.AND else 'or'
        return f"{self.left} {op} {self.right}"


@dataclass
class Unary(Expr):
    operator: Token
    right: Expr

    def __str__(self) -> str:
        return f"({self.operator.lexeme} {self.right})"


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

    def __str__(self) -> str:
        return f"({self.left} {self.operator.lexeme} {self.right})"


@dataclass
class Grouping(Expr):
    expression: Expr

    def __str__(self) -> str:
        # Binary and Unary already parenthesize themselves.
        return str(self.expression)


# Statements

@dataclass
class Block(Stmt):
    statements: List[Stmt]

    def __str__(self) -> str:
        return "{ " + "  ".join(str(stmt) for stmt in self.statements) + " }"


@dataclass
class Expression(Stmt):
    expression: Expr

    def __str__(self) -> str:
        return str(self.expression)


@dataclass
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]

    def __str__(self) -> str:
        text = f"if ({self.condition}) {self.then_branch}"
        if self.else_branch is not None:
            text += f" else {self.else_branch}"
        return text


@dataclass
class Print(Stmt):
    expression: Expr

    def __str__(self) -> str:
        return f"print {self.expression}"


@dataclass
class Var(Stmt):
    name: Token
    initializer: Optional[Expr]

    def __str__(self) -> str:
        if self.initializer is None:
            return f"var {self.name}"
        return f"var {self.name} = {self.initializer}"
