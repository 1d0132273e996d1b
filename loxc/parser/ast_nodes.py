"""
Abstract Syntax Tree node definitions for Lox expressions.

The tree is a closed set of five node kinds. Every node owns its children
outright; nodes are frozen once built, so a tree can never be rewired into a
graph with shared or cyclic children.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List

from ..lexer.tokens import Token, TokenType, LITERAL_TYPES


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""
    BINARY = "Binary"
    GROUPING = "Grouping"
    LITERAL = "Literal"
    UNARY = "Unary"
    ERROR = "Error"


class Expr:
    """Base class for expression nodes."""

    node_type: ASTNodeType

    def children(self) -> List["Expr"]:
        """Get all child nodes, left to right."""
        return []


@dataclass(frozen=True)
class Binary(Expr):
    """Infix operation: ``left operator right``."""
    left: Expr
    operator: Token
    right: Expr

    node_type = ASTNodeType.BINARY

    def children(self) -> List[Expr]:
        return [self.left, self.right]


@dataclass(frozen=True)
class Grouping(Expr):
    """Parenthesized expression."""
    child: Expr

    node_type = ASTNodeType.GROUPING

    def children(self) -> List[Expr]:
        return [self.child]


@dataclass(frozen=True)
class Literal(Expr):
    """
    Literal value.

    ``kind`` is one of NUMBER, STRING, TRUE, FALSE or NIL and ``value`` the
    matching Python value (float, str, True, False, None).
    """
    value: Any
    kind: TokenType

    node_type = ASTNodeType.LITERAL

    def __post_init__(self):
        if self.kind not in LITERAL_TYPES:
            raise ValueError(f"{self.kind.name} is not a literal token type")

    @classmethod
    def from_token(cls, token: Token) -> "Literal":
        """Build a literal from a NUMBER, STRING, TRUE, FALSE or NIL token."""
        if token.type == TokenType.TRUE:
            return cls(True, TokenType.TRUE)
        if token.type == TokenType.FALSE:
            return cls(False, TokenType.FALSE)
        if token.type == TokenType.NIL:
            return cls(None, TokenType.NIL)
        return cls(token.literal, token.type)


@dataclass(frozen=True)
class Unary(Expr):
    """Prefix operation: ``operator child``."""
    operator: Token
    child: Expr

    node_type = ASTNodeType.UNARY

    def children(self) -> List[Expr]:
        return [self.child]


@dataclass(frozen=True)
class ErrorExpr(Expr):
    """Marks the place where a sub-expression failed to parse."""

    node_type = ASTNodeType.ERROR
