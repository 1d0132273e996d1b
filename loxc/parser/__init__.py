"""
Lox Parser Package

Recursive descent parser producing an expression tree.

Key Features:
- One procedure per precedence level, loops for left-associative chains
- Frozen dataclass AST nodes with exclusive ownership of children
- Local ErrorExpr nodes instead of exceptions for syntax errors
- Bounded nesting of unary operators and parentheses
"""

from .ast_nodes import ASTNodeType, Expr, Binary, Grouping, Literal, Unary, ErrorExpr
from .parser import MAX_NESTING, Parser, ParseResult, parse_tokens, parse_string, parse_file

__all__ = [
    # Core parser
    "Parser",
    "ParseResult",
    "parse_tokens",
    "parse_string",
    "parse_file",
    "MAX_NESTING",

    # AST nodes
    "ASTNodeType",
    "Expr",
    "Binary",
    "Grouping",
    "Literal",
    "Unary",
    "ErrorExpr",
]
