"""
Pratt Expression Parser

Parses a stream of classified tokens into an expression tree (`ExprNode`),
honouring operator precedence, associativity, and prefix/infix/postfix
placement.

Grammar
-------
- Operands: integer literals and parenthesized expressions `( ... )`
- Prefix operators: `+`, `-`
- Infix operators: `+`, `-` (10), `*`, `/` (20), `^` (30, right associative)
- Postfix operators: `!` (40)

Parser Behavior
---------------
Each token kind may have a prefix handler (it starts an operand) and an infix
or postfix handler (it follows an operand). `parse(min_precedence)` reads one
operand through the prefix table, then keeps folding operators into it for as
long as the next token binds tighter than `min_precedence`. Right
associativity for `^` comes from parsing its right side at one less than its
own binding power.

Entry Points
------------
- `Parser.parse_expression()`: Parse a complete expression; the stream must end there.
- `Parser.parse(min_precedence)`: The precedence-climbing step itself.
- `Parser.parse_result()`: Like `parse_expression()`, returning a `ParseResult`.
- `parse_source(text)`: Lex and parse source text in one call.

Raises
------
ParseError
    Subclasses of `SyntaxError` from `pratt.pratt_errors`, raised on the first
    malformed construct. No partial tree is returned.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from pratt.pratt_ast import ExprNode, InfixOpNode, PostfixOpNode, PrefixOpNode, ValueNode
from pratt.pratt_constants import (
    DEFAULT_MAX_DEPTH,
    PRECEDENCE,
    TokenKind,
    operator_lexemes,
)
from pratt.pratt_errors import (
    DepthExceeded,
    MalformedNumber,
    ParseError,
    UnbalancedParenthesis,
    UnexpectedInfixToken,
    UnexpectedPrefixToken,
    UnexpectedTrailingToken,
)
from pratt.pratt_lexer import Token, TokenStream, tokenize

PrefixFn = Callable[[Token], ExprNode]
InfixFn = Callable[[ExprNode, Token], ExprNode]
PostfixFn = Callable[[ExprNode, Token], ExprNode]


def binding_power(lexeme: str) -> int:
    """Binding power of an operator lexeme; 0 for anything that is not an operator."""
    return PRECEDENCE.get(lexeme, 0)


def binding_power_of(kind: TokenKind) -> int:
    """Binding power of a token kind, looked up through its operator lexeme."""
    lexeme = operator_lexemes.get(kind)
    return binding_power(lexeme) if lexeme is not None else 0


@dataclass(frozen=True)
class ParseResult:
    """Outcome of `Parser.parse_result()`: exactly one of `node` and `error` is set."""

    node: ExprNode | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ExprNode:
        if self.error is not None:
            raise self.error
        assert self.node is not None
        return self.node


class Parser:
    """
    Pratt Parser Class

    Owns a `TokenStream` and three handler tables keyed by `TokenKind`. The
    tables are built once per parser and exposed read-only.

    Attributes
    ----------
    tokens : TokenStream
        The token stream being consumed.
    max_depth : int
        Maximum nesting of `parse` calls before `DepthExceeded` is raised.
    prefix_handlers : Mapping[TokenKind, PrefixFn]
        Handlers for tokens in operand position.
    infix_handlers : Mapping[TokenKind, InfixFn]
        Handlers for binary operators.
    postfix_handlers : Mapping[TokenKind, PostfixFn]
        Handlers for operators that take no right operand.
    """

    def __init__(
        self,
        tokens: TokenStream | Iterable[Token],
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self.tokens: TokenStream = (
            tokens if isinstance(tokens, TokenStream) else TokenStream(tokens)
        )
        self.max_depth = max_depth
        self._depth = 0

        self.prefix_handlers: Mapping[TokenKind, PrefixFn] = MappingProxyType(
            {
                TokenKind.NUMBER: self.parse_number,
                TokenKind.PLUS: self.parse_prefix_operator,
                TokenKind.MINUS: self.parse_prefix_operator,
                TokenKind.LPAREN: self.parse_group,
            }
        )
        self.infix_handlers: Mapping[TokenKind, InfixFn] = MappingProxyType(
            {
                TokenKind.PLUS: self.parse_infix_operator,
                TokenKind.MINUS: self.parse_infix_operator,
                TokenKind.STAR: self.parse_infix_operator,
                TokenKind.SLASH: self.parse_infix_operator,
                TokenKind.CARET: self.parse_right_infix_operator,
            }
        )
        self.postfix_handlers: Mapping[TokenKind, PostfixFn] = MappingProxyType(
            {
                TokenKind.BANG: self.parse_postfix_operator,
            }
        )

    # Prefix handlers

    def parse_number(self, tok: Token) -> ExprNode:
        # int() would also take signs, underscores and padding, none of which render back.
        if not (tok.text.isascii() and tok.text.isdigit()):
            raise MalformedNumber(tok)
        try:
            return ValueNode(int(tok.text))
        except ValueError as exc:
            # Longer than sys.get_int_max_str_digits() (4300 by default).
            raise MalformedNumber(
                tok, f"more than {sys.get_int_max_str_digits()} digits"
            ) from exc

    def parse_prefix_operator(self, tok: Token) -> ExprNode:
        op = operator_lexemes[tok.kind]
        return PrefixOpNode(op, self.parse(binding_power(op)))  # type: ignore[arg-type]

    def parse_group(self, tok: Token) -> ExprNode:
        expr = self.parse(0)
        close = self.tokens.next()
        if close is None or close.kind is not TokenKind.RPAREN:
            raise UnbalancedParenthesis(close)
        return expr

    # Infix and postfix handlers

    def parse_infix_operator(self, lhs: ExprNode, tok: Token) -> ExprNode:
        op = operator_lexemes[tok.kind]
        return InfixOpNode(op, lhs, self.parse(binding_power(op)))  # type: ignore[arg-type]

    def parse_right_infix_operator(self, lhs: ExprNode, tok: Token) -> ExprNode:
        # One below its own power so an equal operator on the right nests inside.
        op = operator_lexemes[tok.kind]
        return InfixOpNode(op, lhs, self.parse(binding_power(op) - 1))  # type: ignore[arg-type]

    def parse_postfix_operator(self, lhs: ExprNode, tok: Token) -> ExprNode:
        return PostfixOpNode(operator_lexemes[tok.kind], lhs)  # type: ignore[arg-type]

    # Core loop

    def peek_binding_power(self) -> int:
        tok = self.tokens.peek()
        return binding_power_of(tok.kind) if tok is not None else 0

    def parse(self, min_precedence: int = 0) -> ExprNode:
        """Parse one operand and every following operator binding tighter than `min_precedence`."""
        tok = self.tokens.next()
        if self._depth >= self.max_depth:
            raise DepthExceeded(self.max_depth, tok)
        self._depth += 1
        try:
            if tok is None or tok.kind not in self.prefix_handlers:
                raise UnexpectedPrefixToken(tok)
            lhs = self.prefix_handlers[tok.kind](tok)

            while self.peek_binding_power() > min_precedence:
                op_tok = self.tokens.next()
                assert op_tok is not None
                infix = self.infix_handlers.get(op_tok.kind)
                if infix is None:
                    infix = self.postfix_handlers.get(op_tok.kind)
                if infix is None:
                    raise UnexpectedInfixToken(op_tok)
                lhs = infix(lhs, op_tok)

            return lhs
        finally:
            self._depth -= 1

    def parse_expression(self) -> ExprNode:
        """Parse a whole expression and require the stream to end right after it."""
        node = self.parse(0)
        tok = self.tokens.peek()
        if tok is not None and tok.kind is not TokenKind.EOF:
            raise UnexpectedTrailingToken(tok)
        return node

    def parse_result(self) -> ParseResult:
        try:
            return ParseResult(node=self.parse_expression())
        except ParseError as exc:
            return ParseResult(error=exc)


def parse_source(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> ExprNode:
    """Tokenize `source` and parse it as a single expression."""
    return Parser(tokenize(source), max_depth=max_depth).parse_expression()


__all__ = [
    "ParseResult",
    "Parser",
    "binding_power",
    "binding_power_of",
    "parse_source",
]
