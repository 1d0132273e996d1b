"""
Lox Lexer Package

Character-level scanner for the Lox expression language.

Key Features:
- Maximal munch for the two-character comparison operators
- Line comments (``// ...``) and whitespace discarded
- Multi-line string literals with correct line tracking
- Fatal, line-annotated errors for unknown characters and unterminated strings
"""

from .tokens import Token, TokenType, KEYWORDS
from .scanner import Scanner, tokenize_string, tokenize_file

__all__ = [
    "Scanner",
    "Token",
    "TokenType",
    "KEYWORDS",
    "tokenize_string",
    "tokenize_file",
]
