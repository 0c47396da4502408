"""Scanner for the Lox language.

The scanner turns raw source text into the flat list of tokens the
parser consumes. Terminal definitions live in a small Lark grammar and
Lark's basic lexer does the matching; this module only converts Lark's
tokens into :class:`~lox.tokens.Token` objects and deals with lexical
errors.

Lark stops at the first character it cannot match. To report every bad
character in one pass, the scanner records the error, skips the
character and restarts the lexer on the remaining text, carrying the
line count forward. Each restart lexes a fresh slice, so a source with
many bad characters costs time proportional to its length times the
number of errors.

An unterminated string is reported on the line where it opens. Nothing
after the opening quote is tokenized, but the EOF token still carries
the last line of the source.
"""

from __future__ import annotations

from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import ErrorCode, LoxError
from .tokens import KEYWORDS, Token, TokenType


PUNCTUATION = {
    TokenType.LEFT_PAREN: '(',
    TokenType.RIGHT_PAREN: ')',
    TokenType.LEFT_BRACE: '{',
    TokenType.RIGHT_BRACE: '}',
    TokenType.COMMA: ',',
    TokenType.DOT: '.',
    TokenType.MINUS: '-',
    TokenType.PLUS: '+',
    TokenType.SEMICOLON: ';',
    TokenType.SLASH: '/',
    TokenType.STAR: '*',
    TokenType.BANG: '!',
    TokenType.BANG_EQUAL: '!=',
    TokenType.EQUAL: '=',
    TokenType.EQUAL_EQUAL: '==',
    TokenType.GREATER: '>',
    TokenType.GREATER_EQUAL: '>=',
    TokenType.LESS: '<',
    TokenType.LESS_EQUAL: '<=',
}


def build_grammar() -> str:
    """Assemble the Lark grammar that declares every Lox terminal.

    Keywords are plain string terminals. Lark notices that each of them
    is fully matched by IDENTIFIER and retypes an identifier match when
    its whole text is a keyword, so ``or`` is OR but ``orchid`` stays an
    IDENTIFIER.
    """
    fixed = list(PUNCTUATION.items()) + [(kind, word) for word, kind in KEYWORDS.items()]
    lines = [
        'start: token*',
        'token: ' + ' | '.join(kind.name for kind, _ in fixed) + ' | IDENTIFIER | STRING | NUMBER',
    ]
    for kind, text in fixed:
        lines.append(f'{kind.name}: "{text}"')
    lines.extend([
        r'IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/',
        r'STRING: /"[^"]*"/',
        r'NUMBER: /[0-9]+(?:\.[0-9]+)?/',
        r'COMMENT: /\/\/[^\n]*/',
        r'WHITESPACE: /[ \t\r\n]+/',
        '%ignore COMMENT',
        '%ignore WHITESPACE',
    ])
    return '\n'.join(lines) + '\n'


LOX_LEXER = Lark(
    build_grammar(),
    parser='lalr',
    lexer='basic',
)


class Scanner:
    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = []
        self.errors: List[LoxError] = []
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        """Scan the whole source; the result always ends with an EOF token."""
        pos = 0
        while pos < len(self.source):
            start_line = self.line
            try:
                for lark_token in LOX_LEXER.lex(self.source[pos:]):
                    self.tokens.append(self.make_token(lark_token, start_line))
            except UnexpectedCharacters as e:
                bad_pos = pos + e.pos_in_stream
                self.line = start_line + self.source.count('\n', pos, bad_pos)
                if self.source[bad_pos] == '"':
                    # A quote only fails to match when the string never closes.
                    self.errors.append(LoxError(self.line, ErrorCode.UNTERMINATED_STRING, 'Unterminated string.'))
                    self.line += self.source.count('\n', bad_pos)
                    break
                self.errors.append(LoxError(self.line, ErrorCode.UNEXPECTED_CHARACTER, 'Unexpected character.'))
                pos = bad_pos + 1
                continue
            self.line = start_line + self.source.count('\n', pos)
            break
        self.tokens.append(Token(TokenType.EOF, '', None, self.line))
        return self.tokens

    def make_token(self, lark_token, start_line: int) -> Token:
        kind = TokenType[lark_token.type]
        lexeme = str(lark_token)
        line = start_line + lark_token.line - 1
        literal = None
        if kind == TokenType.NUMBER:
            literal = float(lexeme)
        elif kind == TokenType.STRING:
            literal = lexeme[1:-1]
        return Token(kind, lexeme, literal, line)
