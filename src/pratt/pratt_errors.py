"""
Exception types raised by the Pratt lexer and parser.

All failures derive from the builtin `SyntaxError`, so callers that only care
whether the input was well formed can catch that. The subclasses carry the
offending token kind or text for callers that want to report precisely.

Classes:
    - LexError: A character outside the expression grammar.
    - ParseError: Base class for parser failures.
    - UnexpectedPrefixToken: No prefix handler for the token in operand position.
    - UnexpectedInfixToken: No infix or postfix handler for a token in operator position.
    - UnbalancedParenthesis: A `(` whose inner expression is not followed by `)`.
    - MalformedNumber: A NUMBER token whose text is not an integer.
    - DepthExceeded: Nesting deeper than the parser's `max_depth`.
    - UnexpectedTrailingToken: Input left over after a complete expression.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pratt.pratt_constants import TokenKind
    from pratt.pratt_lexer import Token


class LexError(SyntaxError):
    """Raised when the lexer meets a character it cannot classify.

    Attributes:
        char (str): The offending character.
        line (int): 1-based line of the character.
        col (int): 1-based column of the character.
    """

    def __init__(self, char: str, line: int, col: int):
        super().__init__(f"Unexpected character {char!r} at line {line}, col {col}")
        self.char = char
        self.line = line
        self.col = col


class ParseError(SyntaxError):
    """Base class for every parser failure.

    Attributes:
        token (Token | None): The token being handled when parsing failed,
            or None if the stream was exhausted.
    """

    def __init__(self, message: str, token: Token | None = None):
        super().__init__(message)
        self.token = token


class UnexpectedPrefixToken(ParseError):
    def __init__(self, token: Token | None):
        self.kind: TokenKind | None = token.kind if token is not None else None
        what = "end of token stream" if token is None else f"{token.kind} {token.text!r}"
        super().__init__(f"Unexpected prefix token: {what}", token)


class UnexpectedInfixToken(ParseError):
    def __init__(self, token: Token):
        self.kind: TokenKind = token.kind
        super().__init__(
            f"Unexpected infix or postfix token: {token.kind} {token.text!r}", token
        )


class UnbalancedParenthesis(ParseError):
    def __init__(self, token: Token | None):
        found = "end of token stream" if token is None else f"{token.kind} {token.text!r}"
        super().__init__(f"Expected ')', got {found}", token)


class MalformedNumber(ParseError):
    def __init__(self, token: Token, reason: str = "not a run of decimal digits"):
        super().__init__(f"Malformed number {token.text[:40]!r}: {reason}", token)
        self.reason = reason
        self.text = token.text


class DepthExceeded(ParseError):
    def __init__(self, limit: int, token: Token | None = None):
        self.limit = limit
        super().__init__(f"Expression nesting exceeds maximum depth of {limit}", token)


class UnexpectedTrailingToken(ParseError):
    def __init__(self, token: Token):
        self.kind: TokenKind = token.kind
        super().__init__(
            f"Unexpected token after expression: {token.kind} {token.text!r}", token
        )


__all__ = [
    "DepthExceeded",
    "LexError",
    "MalformedNumber",
    "ParseError",
    "UnbalancedParenthesis",
    "UnexpectedInfixToken",
    "UnexpectedPrefixToken",
    "UnexpectedTrailingToken",
]
