"""
Defines the expression tree produced by the Pratt parser.

Classes:
    ExprNode:
        Base class for every node. Nodes are immutable and each composite
        node owns its children, so a parsed tree is acyclic and never
        changes after construction.

    ValueNode, PrefixOpNode, InfixOpNode, PostfixOpNode:
        The closed set of node variants: an integer literal, a unary prefix
        operator, a binary operator, and a unary postfix operator.

    ASTDict:
        TypedDict representation for serializing nodes to plain Python
        dictionaries, suitable for JSON output or debugging.

Rendering:
    `render()` (also `str(node)`) gives the fully parenthesized infix form,
    which is unambiguous and parses back to the same tree:

    >>> InfixOpNode("+", ValueNode(1), InfixOpNode("*", ValueNode(2), ValueNode(3))).render()
    '(1+(2*3))'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypedDict

PrefixOp = Literal["+", "-"]
InfixOp = Literal["+", "-", "*", "/", "^"]
PostfixOp = Literal["!"]

PREFIX_OPS: frozenset[str] = frozenset({"+", "-"})
INFIX_OPS: frozenset[str] = frozenset({"+", "-", "*", "/", "^"})
POSTFIX_OPS: frozenset[str] = frozenset({"!"})


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an ExprNode used for serialization.

    Fields:
        kind (str): "value", "prefix", "infix" or "postfix".
        value (int): The literal, for value nodes.
        operator (str): The operator lexeme, for operator nodes.
        operand (ASTDict): The single child of prefix and postfix nodes.
        left (ASTDict): Left child of infix nodes.
        right (ASTDict): Right child of infix nodes.
    """

    kind: str
    value: int
    operator: str
    operand: "ASTDict"
    left: "ASTDict"
    right: "ASTDict"


class ExprNode:
    """Base class for expression tree nodes."""

    __slots__ = ()

    def render(self) -> str:
        raise NotImplementedError  # pragma: no cover

    def to_dict(self) -> ASTDict:
        raise NotImplementedError  # pragma: no cover

    def __str__(self) -> str:
        return self.render()


def _check_operator(op: str, allowed: frozenset[str], variant: str) -> None:
    if op not in allowed:
        raise ValueError(
            f"{variant} operator must be one of {sorted(allowed)}, got {op!r}"
        )


@dataclass(frozen=True, slots=True)
class ValueNode(ExprNode):
    value: int

    def render(self) -> str:
        return str(self.value)

    def to_dict(self) -> ASTDict:
        return {"kind": "value", "value": self.value}


@dataclass(frozen=True, slots=True)
class PrefixOpNode(ExprNode):
    operator: PrefixOp
    operand: ExprNode

    def __post_init__(self) -> None:
        _check_operator(self.operator, PREFIX_OPS, "Prefix")

    def render(self) -> str:
        return f"({self.operator}{self.operand.render()})"

    def to_dict(self) -> ASTDict:
        return {
            "kind": "prefix",
            "operator": self.operator,
            "operand": self.operand.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class InfixOpNode(ExprNode):
    operator: InfixOp
    left: ExprNode
    right: ExprNode

    def __post_init__(self) -> None:
        _check_operator(self.operator, INFIX_OPS, "Infix")

    def render(self) -> str:
        return f"({self.left.render()}{self.operator}{self.right.render()})"

    def to_dict(self) -> ASTDict:
        return {
            "kind": "infix",
            "operator": self.operator,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class PostfixOpNode(ExprNode):
    operator: PostfixOp
    operand: ExprNode

    def __post_init__(self) -> None:
        _check_operator(self.operator, POSTFIX_OPS, "Postfix")

    def render(self) -> str:
        return f"({self.operand.render()}{self.operator})"

    def to_dict(self) -> ASTDict:
        return {
            "kind": "postfix",
            "operator": self.operator,
            "operand": self.operand.to_dict(),
        }


__all__ = [
    "ASTDict",
    "ExprNode",
    "InfixOpNode",
    "PostfixOpNode",
    "PrefixOpNode",
    "ValueNode",
]
