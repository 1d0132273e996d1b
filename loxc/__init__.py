"""
loxc - front end for the Lox expression language

Turns source text into tokens, tokens into an expression tree, and the tree
into a Graphviz graph description.

Architecture:
    loxc/
    ├── lexer/           # Tokens and the character scanner
    ├── parser/          # Expression AST and recursive descent parser
    ├── printer/         # Graphviz (DOT) rendering of the AST
    ├── errors.py        # LoxError, LoxIOError, SourceError
    └── cli.py           # `loxc` command line driver

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .errors import LoxError, LoxIOError, SourceError
from .lexer import Scanner, Token, TokenType
from .parser import Parser
from .printer import DotPrinter, to_dot

__all__ = [
    # Pipeline stages
    "Scanner",
    "Parser",
    "DotPrinter",
    "to_dot",

    # Tokens
    "Token",
    "TokenType",

    # Errors
    "LoxError",
    "LoxIOError",
    "SourceError",

    # Version info
    "__version__",
    "__license__",
]
