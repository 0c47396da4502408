from enum import IntEnum

from lox.tokens import Token, TokenType


class ErrorCode(IntEnum):
    """Numeric classification carried by every LoxError."""
    UNEXPECTED_CHARACTER = 10
    UNTERMINATED_STRING = 11
    EXPECT_EXPRESSION = 42
    EXPECT_TOKEN = 69
    INVALID_ASSIGNMENT_TARGET = 70
    NESTING_TOO_DEEP = 71
    UNDEFINED_VARIABLE = 100
    TYPE_MISMATCH = 101
    UNSUPPORTED = 102
    EVALUATION_TOO_DEEP = 103


RUNTIME_CODES = frozenset({
    ErrorCode.UNDEFINED_VARIABLE,
    ErrorCode.TYPE_MISMATCH,
    ErrorCode.UNSUPPORTED,
    ErrorCode.EVALUATION_TOO_DEEP,
})


class LoxError(Exception):
    """Error raised by the scanner, parser, environment and interpreter."""
    def __init__(self, line: int, code: int, message: str, where: str = ''):
        super().__init__(f"[line {line}] Error{where}: {message}")
        self.line = line
        self.code = code
        self.message = message
        self.where = where

    @classmethod
    def from_token(cls, token: Token, message: str, code: int = ErrorCode.EXPECT_TOKEN) -> 'LoxError':
        if token.type == TokenType.EOF:
            where = ' at end'
        else:
            where = f" at '{token.lexeme}'"
        return cls(token.line, code, message, where)

    @classmethod
    def unexpected_type(cls, operator: Token, message: str = 'Operands must be numbers.') -> 'LoxError':
        return cls(operator.line, ErrorCode.TYPE_MISMATCH, message)

    @property
    def is_runtime(self) -> bool:
        return self.code in RUNTIME_CODES
