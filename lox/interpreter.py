"""Tree-walking interpreter for the Lox language.

The interpreter executes statement nodes for their effect and evaluates
expression nodes to runtime values (see :mod:`lox.values`). Variables
live in one flat :class:`~lox.environment.Environment` created with the
interpreter. The first runtime error aborts the remaining statements and
propagates to the caller as a :class:`~lox.errors.LoxError`.

This module also holds the convenience entry points used by the command
line: :func:`parse_program` and :func:`run_source`.
"""

from __future__ import annotations

import sys
from typing import Any, List, Optional, Tuple

from .ast import (
    Assign, Binary, Block, Expr, Expression, Grouping, If, Literal, Logical,
    Node, Print, Stmt, Unary, Var, Variable,
)
from .environment import Environment
from .errors import ErrorCode, LoxError
from .parser import Parser
from .scanner import Scanner
from .tokens import Token, TokenType
from .values import divide, is_equal, is_truthy, stringify


class Interpreter:
    """Core interpreter that executes a list of Lox statements."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.environment = Environment()
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None
        self.debug_started = False

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp is None:
                # Truncate on first use, append when a later run reopens it.
                mode = 'a' if self.debug_started else 'w'
                self.debug_fp = open(self.debug_file, mode, encoding='utf-8')
                self.debug_started = True
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    # Public API
    def interpret(self, statements: List[Stmt]) -> None:
        try:
            for stmt in statements:
                try:
                    self.execute(stmt)
                except RecursionError:
                    raise LoxError(first_line(stmt), ErrorCode.EVALUATION_TOO_DEEP,
                                   'Expression nesting too deep to evaluate.') from None
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def execute(self, node: Stmt) -> None:
        if self.debug_level >= 1:
            self.debug(f"execute {node}")
        if isinstance(node, Expression):
            self.evaluate(node.expression)
            return None
        if isinstance(node, Print):
            value = self.evaluate(node.expression)
            print(stringify(value))
            return None
        if isinstance(node, Var):
            value = None
            if node.initializer is not None:
                value = self.evaluate(node.initializer)
            self.environment.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"define {node.name.lexeme} = {stringify(value)}")
            return None
        if isinstance(node, Block):
            raise self.unsupported(node, 'Block statements')
        if isinstance(node, If):
            raise self.unsupported(node, 'If statements')
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Variable):
            return self.environment.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value)
            self.environment.assign(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name.lexeme} = {stringify(value)}")
            return value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression)
        if isinstance(node, Unary):
            right = self.evaluate(node.right)
            return self.apply_unary_op(node.operator, right)
        if isinstance(node, Binary):
            # Left before right: the order is observable through assignments.
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            result = self.apply_binary_op(node.operator, left, right)
            if self.debug_level >= 3:
                self.debug(f"binary {stringify(left)} {node.operator.lexeme} {stringify(right)} -> {stringify(result)}")
            return result
        if isinstance(node, Logical):
            raise self.unsupported(node, 'Logical operators', node.operator.line)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def apply_unary_op(self, operator: Token, right: Any) -> Any:
        if operator.type == TokenType.BANG:
            return not is_truthy(right)
        if operator.type == TokenType.MINUS:
            if isinstance(right, float):
                return -right
            raise LoxError.unexpected_type(operator, 'Operand must be a number.')
        raise NotImplementedError(f"unknown unary operator {operator.lexeme}")

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        op = operator.type
        if op == TokenType.PLUS:
            if isinstance(a, float) and isinstance(b, float):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise LoxError.unexpected_type(operator, 'Operands must be two numbers or two strings.')
        if op in (TokenType.MINUS, TokenType.STAR, TokenType.SLASH):
            if not (isinstance(a, float) and isinstance(b, float)):
                raise LoxError.unexpected_type(operator)
            if op == TokenType.MINUS:
                return a - b
            if op == TokenType.STAR:
                return a * b
            return divide(a, b)
        if op in (TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL):
            if isinstance(a, float) and isinstance(b, float):
                pass
            elif isinstance(a, bool) and isinstance(b, bool):
                pass
            else:
                # Mixed kinds compare by truthiness rather than failing.
                a, b = is_truthy(a), is_truthy(b)
            if op == TokenType.GREATER:
                return a > b
            if op == TokenType.GREATER_EQUAL:
                return a >= b
            if op == TokenType.LESS:
                return a < b
            return a <= b
        if op == TokenType.EQUAL_EQUAL:
            return is_equal(a, b)
        if op == TokenType.BANG_EQUAL:
            return not is_equal(a, b)
        raise NotImplementedError(f"unknown binary operator {operator.lexeme}")

    @staticmethod
    def unsupported(node: Node, what: str, line: Optional[int] = None) -> LoxError:
        if line is None:
            line = first_line(node)
        return LoxError(line, ErrorCode.UNSUPPORTED, f"{what} are not supported yet.")


def first_line(node: Any) -> int:
    """Line of the first token found in a node, or 0 if it holds none.

    Walks with an explicit stack so arbitrarily deep trees are fine.
    """
    stack = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, Token):
            return item.line
        if isinstance(item, list):
            children = item
        elif isinstance(item, Node):
            children = list(vars(item).values())
        else:
            continue
        stack.extend(reversed(children))
    return 0


def parse_program(source: str) -> List[Stmt]:
    """Scan and parse Lox source code, raising the first LoxError found."""
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    if scanner.errors:
        raise scanner.errors[0]
    return Parser(tokens).parse()


def scan_and_parse(source: str) -> Tuple[Optional[List[Stmt]], List[LoxError]]:
    """Scan and parse, returning the statements and every static error.

    The statements are None when there was any error; the errors are
    ordered by line.
    """
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    parser = Parser(tokens)
    try:
        statements = parser.parse()
    except LoxError:
        statements = None
    errors = sorted(scanner.errors + parser.errors, key=lambda e: e.line)
    if errors:
        return None, errors
    return statements, errors


EXIT_OK = 0
EXIT_STATIC_ERROR = 65
EXIT_RUNTIME_ERROR = 70


def report(error: LoxError):
    if error.is_runtime:
        print(f"{error.message}\n[line {error.line}]", file=sys.stderr)
    else:
        print(str(error), file=sys.stderr)


def run_source(source: str, interpreter: Optional[Interpreter] = None) -> int:
    """Scan, parse and run a program, reporting errors on stderr.

    Every scan and parse error is reported and nothing is executed if
    there was any. Returns a process exit status.
    """
    if interpreter is None:
        interpreter = Interpreter()
    statements, static_errors = scan_and_parse(source)
    if static_errors:
        for error in static_errors:
            report(error)
        return EXIT_STATIC_ERROR
    try:
        interpreter.interpret(statements)
    except LoxError as e:
        report(e)
        return EXIT_RUNTIME_ERROR
    return EXIT_OK
