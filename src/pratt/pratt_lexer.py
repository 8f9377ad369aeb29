"""
Tokens, token streams and the lexer for arithmetic expressions.

This module provides everything between raw source text and the parser:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: A single immutable token with kind, text, and source location.
    TokenStream: Forward-only cursor over a finished token list, with one token of lookahead.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips spaces, tabs and newlines
    - Recognizes:
        * Non-negative integer literals
        * The operators `+ - * / ^ !` and parentheses

Raises:
    LexError: If a character outside the grammar is encountered.

Example:
    >>> [t.text for t in tokenize("1 + 2")]
    ['1', '+', '2', '']

Exports:
    - CharacterStream
    - Lexer
    - Token
    - TokenStream
    - tokenize
"""

from collections.abc import Iterable
from dataclasses import dataclass

from pratt.pratt_constants import TokenKind, token_hashmap
from pratt.pratt_errors import LexError


DIGITS = frozenset("0123456789")
WHITESPACE = frozenset(" \t\r\n")


class CharacterStream:
    """
    Reads expression source one character at a time, tracking line and column.

    The lexer only ever needs single-character lookahead and runs of characters
    drawn from a fixed set (digits, whitespace), so that is all this offers.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = 0
        self.line = 1
        self.column = 1

    @property
    def location(self) -> tuple[int, int]:
        """(line, column) of the next unread character."""
        return self.line, self.column

    def current(self) -> str:
        """The next unread character, or "" at end of input."""
        if self.position < len(self.source):
            return self.source[self.position]
        return ""

    def advance(self) -> str:
        """
        Consumes and returns the next character.

        Raises:
            EOFError: If the source is already exhausted.
        """
        char = self.current()
        if not char:
            raise EOFError(f"Read past end of expression source at line {self.line}")
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def take_while(self, allowed: frozenset[str]) -> str:
        """Consumes the longest run of characters from `allowed` and returns it."""
        start = self.position
        while self.current() and self.current() in allowed:
            self.advance()
        return self.source[start : self.position]


@dataclass(frozen=True)
class Token:
    """Represents a single lexical token.

    Attributes:
        kind (TokenKind): The token's kind.
        text (str): The literal text of the token ("" for EOF).
        line (int): The 1-based line number where the token appears (0 if synthesized).
        col (int): The 1-based column number where the token starts (0 if synthesized).
    """

    kind: TokenKind
    text: str = ""
    line: int = 0
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r})"


class TokenStream:
    """
    Forward-only cursor over a finite token sequence ending in an EOF token.

    `peek()` and `next()` return None once the cursor has moved past the last
    token; running out is an ordinary outcome, and it is up to the caller
    whether that is an error.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: tuple[Token, ...] = tuple(tokens)
        if not self._tokens or self._tokens[-1].kind is not TokenKind.EOF:
            raise ValueError("Token sequence must end with an EOF token")
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    def peek(self) -> Token | None:
        if self._position < len(self._tokens):
            return self._tokens[self._position]
        return None

    def next(self) -> Token | None:
        tok = self.peek()
        if tok is not None:
            self._position += 1
        return tok

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"TokenStream(position={self._position}, tokens={list(self._tokens)!r})"


class Lexer:
    """Lexical analyzer for arithmetic expressions.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token, or an EOF token once the source is exhausted.

        Raises:
            LexError: If the next character is not part of the grammar.
        """
        self.stream.take_while(WHITESPACE)

        line, col = self.stream.location
        ch = self.stream.current()
        if not ch:
            return Token(TokenKind.EOF, "", line, col)

        # ASCII digits only: str.isdigit() also accepts "²" and other scripts.
        if ch in DIGITS:
            return Token(TokenKind.NUMBER, self.stream.take_while(DIGITS), line, col)

        if ch in token_hashmap:
            self.stream.advance()
            return Token(token_hashmap[ch], ch, line, col)

        raise LexError(ch, line, col)

    def tokens(self) -> list[Token]:
        """Lexes the rest of the stream, EOF token included."""
        result = []
        while True:
            tok = self.next_token()
            result.append(tok)
            if tok.kind is TokenKind.EOF:
                return result


def tokenize(source: str) -> list[Token]:
    return Lexer(CharacterStream(source)).tokens()


__all__ = ["CharacterStream", "Lexer", "Token", "TokenStream", "tokenize"]
