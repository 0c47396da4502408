"""JSON serialization/deserialization for the Lox AST.

This module converts between Lox AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every expression and
statement node round-trips, and tokens keep their type, lexeme, literal
and line so runtime errors still point at the right source line.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Assign,
    Binary,
    Block,
    Expression,
    Grouping,
    If,
    Literal,
    Logical,
    Print,
    Unary,
    Var,
    Variable,
)
from .tokens import Token, TokenType


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {"type": t.type.name, "lexeme": t.lexeme, "literal": t.literal, "line": t.line}


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["type"]], o["lexeme"], o.get("literal"), o["line"])


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]

    # Expressions
    if isinstance(node, Literal):
        return {"type": "Literal", "value": node.value}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": token_to_obj(node.name)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": token_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, Logical):
        return {
            "type": "Logical",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Unary):
        return {"type": "Unary", "operator": token_to_obj(node.operator), "right": ast_to_obj(node.right)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}

    # Statements
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Expression):
        return {"type": "Expression", "expression": ast_to_obj(node.expression)}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, Print):
        return {"type": "Print", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Var):
        return {
            "type": "Var",
            "name": token_to_obj(node.name),
            "initializer": ast_to_obj(node.initializer),
        }

    raise TypeError(f"Unsupported node type for serialization: {type(node)!r}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, list):
        return [ast_from_obj(x) for x in obj]
    if not isinstance(obj, dict) or "type" not in obj:
        raise ValueError(f"Malformed AST object: {obj!r}")

    t = obj["type"]
    if t == "Literal":
        value = obj["value"]
        # JSON has no float/int distinction; Lox numbers are always floats.
        if isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        return Literal(value)
    if t == "Variable":
        return Variable(token_from_obj(obj["name"]))
    if t == "Assign":
        return Assign(token_from_obj(obj["name"]), ast_from_obj(obj["value"]))
    if t == "Logical":
        return Logical(ast_from_obj(obj["left"]), token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Unary":
        return Unary(token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Binary":
        return Binary(ast_from_obj(obj["left"]), token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Grouping":
        return Grouping(ast_from_obj(obj["expression"]))
    if t == "Block":
        return Block([ast_from_obj(s) for s in obj["statements"]])
    if t == "Expression":
        return Expression(ast_from_obj(obj["expression"]))
    if t == "If":
        return If(
            ast_from_obj(obj["condition"]),
            ast_from_obj(obj["then_branch"]),
            ast_from_obj(obj.get("else_branch")),
        )
    if t == "Print":
        return Print(ast_from_obj(obj["expression"]))
    if t == "Var":
        return Var(token_from_obj(obj["name"]), ast_from_obj(obj.get("initializer")))

    raise ValueError(f"Unknown AST node type: {t}")


def statements_from_obj(obj: Any) -> List[Any]:
    if not isinstance(obj, list):
        raise ValueError("AST JSON must be a list of statements")
    return ast_from_obj(obj)
