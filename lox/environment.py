from typing import Any, Dict

from lox.errors import ErrorCode, LoxError
from lox.tokens import Token


class Environment:
    """Flat mapping from variable names to runtime values."""
    def __init__(self):
        self.values: Dict[str, Any] = {}

    def define(self, name: str, value: Any):
        # Redefinition is allowed and simply overwrites.
        self.values[name] = value

    def get(self, name: Token) -> Any:
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        raise self.undefined(name)

    def assign(self, name: Token, value: Any) -> Any:
        if name.lexeme not in self.values:
            raise self.undefined(name)
        self.values[name.lexeme] = value
        return value

    @staticmethod
    def undefined(name: Token) -> LoxError:
        return LoxError.from_token(name, f"Undefined variable '{name.lexeme}'.", ErrorCode.UNDEFINED_VARIABLE)
