"""
Shared token and precedence tables for the Pratt expression parser.

Exports:
    - TokenKind: The closed set of token kinds produced by the lexer.
    - token_hashmap: Single-character lexeme to token kind mapping.
    - operator_lexemes: Token kind to canonical operator lexeme.
    - PRECEDENCE: Operator lexeme to binding power.
    - DEFAULT_MAX_DEPTH: Default nesting limit for `Parser`.
"""

from enum import Enum
from types import MappingProxyType


class TokenKind(str, Enum):
    NUMBER = "NUMBER"
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"
    CARET = "CARET"
    BANG = "BANG"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    EOF = "EOF"

    def __str__(self) -> str:
        return self.value


token_hashmap: MappingProxyType[str, TokenKind] = MappingProxyType(
    {
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.STAR,
        "/": TokenKind.SLASH,
        "^": TokenKind.CARET,
        "!": TokenKind.BANG,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
    }
)

operator_lexemes: MappingProxyType[TokenKind, str] = MappingProxyType(
    {
        TokenKind.PLUS: "+",
        TokenKind.MINUS: "-",
        TokenKind.STAR: "*",
        TokenKind.SLASH: "/",
        TokenKind.CARET: "^",
        TokenKind.BANG: "!",
    }
)

# Higher binds tighter. Anything missing binds at 0 and ends the climbing loop.
PRECEDENCE: MappingProxyType[str, int] = MappingProxyType(
    {
        "+": 10,
        "-": 10,
        "*": 20,
        "/": 20,
        "^": 30,
        "!": 40,
    }
)

DEFAULT_MAX_DEPTH = 256

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "PRECEDENCE",
    "TokenKind",
    "operator_lexemes",
    "token_hashmap",
]
