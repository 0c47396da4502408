"""Recursive-descent parser for the Lox language.

The parser consumes the token list produced by the scanner and builds a
list of statement nodes. The grammar, from the top:

    program     -> declaration* EOF
    declaration -> varDecl | statement
    varDecl     -> "var" IDENTIFIER ( "=" expression )? ";"
    statement   -> printStmt | exprStmt
    printStmt   -> "print" expression ";"
    exprStmt    -> expression ";"

    expression  -> assignment
    assignment  -> IDENTIFIER "=" assignment | equality
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | primary
    primary     -> "true" | "false" | "nil" | NUMBER | STRING
                 | "(" expression ")" | IDENTIFIER

Binary rules are left associative: the left operand is parsed once and
then repeatedly wrapped as the left side of a new Binary node.

Errors do not stop the parse. When a declaration fails the parser
records the error, skips ahead to a likely statement boundary and goes
on with the next declaration, so a single pass reports every broken
statement. Once the whole token stream is consumed, ``parse`` raises the
first recorded error if there was any.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Assign, Binary, Expr, Expression, Grouping, Literal, Print, Stmt,
    Unary, Var, Variable,
)
from .errors import ErrorCode, LoxError
from .tokens import Token, TokenType


# Tokens that begin a new declaration; used to resynchronize after an error.
SYNC_KEYWORDS = frozenset({
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
})

EQUALITY_OPS = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
COMPARISON_OPS = (TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL)
TERM_OPS = (TokenType.MINUS, TokenType.PLUS)
FACTOR_OPS = (TokenType.SLASH, TokenType.STAR)
UNARY_OPS = (TokenType.BANG, TokenType.MINUS)


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        self.statements: List[Stmt] = []
        self.errors: List[LoxError] = []

    # Token stream helpers

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.pos += 1
        return self.previous()

    def check(self, kind: TokenType) -> bool:
        return self.peek().type == kind

    def match(self, *kinds: TokenType) -> bool:
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind: TokenType, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise LoxError.from_token(self.peek(), message, ErrorCode.EXPECT_TOKEN)

    def synchronize(self):
        """Skip tokens until a statement boundary.

        At least one token is always consumed so that a failing token
        cannot stall the parser.
        """
        self.advance()
        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return
            if self.peek().type in SYNC_KEYWORDS:
                return
            self.advance()

    # Declarations and statements

    def parse(self) -> List[Stmt]:
        while not self.is_at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                self.statements.append(stmt)
        if self.errors:
            raise self.errors[0]
        return self.statements

    def parse_declaration(self) -> Optional[Stmt]:
        try:
            if self.match(TokenType.VAR):
                return self.parse_var_declaration()
            return self.parse_statement()
        except LoxError as e:
            self.errors.append(e)
            self.synchronize()
            return None
        except RecursionError:
            self.errors.append(LoxError.from_token(self.peek(), 'Expression nesting too deep.', ErrorCode.NESTING_TOO_DEEP))
            self.synchronize()
            return None

    def parse_var_declaration(self) -> Var:
        name = self.consume(TokenType.IDENTIFIER, 'Expect variable name.')
        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def parse_statement(self) -> Stmt:
        if self.match(TokenType.PRINT):
            return self.parse_print_statement()
        return self.parse_expression_statement()

    def parse_print_statement(self) -> Print:
        value = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def parse_expression_statement(self) -> Expression:
        value = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return Expression(value)

    # Expressions

    def parse_expression(self) -> Expr:
        return self.parse_assignment()

    def parse_assignment(self) -> Expr:
        expr = self.parse_equality()
        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.parse_assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            # Reported, but the parser is not confused so no need to synchronize.
            self.errors.append(LoxError.from_token(equals, 'Invalid assignment target.', ErrorCode.INVALID_ASSIGNMENT_TARGET))
        return expr

    def parse_binary(self, operand, operators) -> Expr:
        node = operand()
        while self.match(*operators):
            operator = self.previous()
            right = operand()
            node = Binary(node, operator, right)
        return node

    def parse_equality(self) -> Expr:
        return self.parse_binary(self.parse_comparison, EQUALITY_OPS)

    def parse_comparison(self) -> Expr:
        return self.parse_binary(self.parse_term, COMPARISON_OPS)

    def parse_term(self) -> Expr:
        return self.parse_binary(self.parse_factor, TERM_OPS)

    def parse_factor(self) -> Expr:
        return self.parse_binary(self.parse_unary, FACTOR_OPS)

    def parse_unary(self) -> Expr:
        if self.match(*UNARY_OPS):
            operator = self.previous()
            right = self.parse_unary()
            return Unary(operator, right)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.parse_expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise LoxError.from_token(self.peek(), 'Expect expression.', ErrorCode.EXPECT_EXPRESSION)


def parse_tokens(tokens: List[Token]) -> List[Stmt]:
    """Parse a token list, raising the first LoxError if any declaration failed."""
    return Parser(tokens).parse()
