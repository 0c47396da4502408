# Lox language package
# This package provides a scanner, parser and tree-walking interpreter for Lox.
from .errors import LoxError, ErrorCode
from .interpreter import Interpreter, parse_program, run_source

__all__ = [
    'Interpreter',
    'LoxError',
    'ErrorCode',
    'parse_program',
    'run_source',
]
