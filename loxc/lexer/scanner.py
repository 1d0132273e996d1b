"""
Lox scanner - turns source text into tokens

Single pass over the text with one character of lookahead (two for the
fractional part of a number). The first lexical error aborts the scan.
"""

import logging
from typing import Iterator, List, Optional

from .tokens import Token, TokenType, SINGLE_CHAR_TOKENS, EQUAL_SUFFIX_TOKENS, KEYWORDS
from ..errors import LoxIOError, SourceError

logger = logging.getLogger(__name__)


class Scanner:
    """
    Lox lexical analyzer.

    Holds the cursor state for one source text: ``start`` marks the first
    character of the lexeme being scanned, ``current`` the next character to
    read, and ``line`` the line the cursor is on.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        """
        Initialize the scanner with source code.

        Args:
            source: Source code string
            filename: Name of source file, used in log messages
        """
        self.source = source
        self.filename = filename
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        """
        Scan the entire source.

        Returns:
            List of tokens ending with a single EOF token

        Raises:
            SourceError: On an unknown character or unterminated string
        """
        tokens = list(self)
        logger.debug("Scanned %d tokens from %s", len(tokens), self.filename)
        return tokens

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens lazily, restarting from the beginning of the source."""
        self.start = 0
        self.current = 0
        self.line = 1

        while not self._is_at_end():
            self.start = self.current
            token = self._scan_token()
            if token is not None:
                yield token

        yield Token(TokenType.EOF, "", None, self.line)

    def _scan_token(self) -> Optional[Token]:
        """Scan one lexeme; returns None for whitespace and comments."""
        char = self._advance()

        if char in SINGLE_CHAR_TOKENS:
            return self._make_token(SINGLE_CHAR_TOKENS[char])

        if char in EQUAL_SUFFIX_TOKENS:
            single, double = EQUAL_SUFFIX_TOKENS[char]
            return self._make_token(double if self._match("=") else single)

        if char == "/":
            if self._match("/"):
                # Comment runs to the end of the line
                while self._peek() != "\n" and not self._is_at_end():
                    self._advance()
                return None
            return self._make_token(TokenType.SLASH)

        if char in (" ", "\r", "\t"):
            return None

        if char == "\n":
            self.line += 1
            return None

        if char == '"':
            return self._string()

        if _is_digit(char):
            return self._number()

        if char.isalpha():
            return self._identifier()

        raise SourceError(self.line, "", f"unknown character: {char}")

    def _string(self) -> Token:
        while self._peek() != '"' and not self._is_at_end():
            if self._peek() == "\n":
                self.line += 1
            self._advance()

        if self._is_at_end():
            raise SourceError(self.line, "", "unterminated string")

        self._advance()  # closing quote

        value = self.source[self.start + 1:self.current - 1]
        return self._make_token(TokenType.STRING, value)

    def _number(self) -> Token:
        while _is_digit(self._peek()):
            self._advance()

        # A trailing dot without digits is left for the next token
        if self._peek() == "." and _is_digit(self._peek_next()):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()

        lexeme = self.source[self.start:self.current]
        return self._make_token(TokenType.NUMBER, float(lexeme))

    def _identifier(self) -> Token:
        while self._peek().isalnum() or self._peek() == "_":
            self._advance()

        lexeme = self.source[self.start:self.current]
        token_type = KEYWORDS.get(lexeme)
        if token_type is None:
            return self._make_token(TokenType.IDENTIFIER, lexeme)
        return self._make_token(token_type)

    def _make_token(self, token_type: TokenType, literal=None) -> Token:
        lexeme = self.source[self.start:self.current]
        return Token(token_type, lexeme, literal, self.line)

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def _advance(self) -> str:
        char = self.source[self.current]
        self.current += 1
        return char

    def _match(self, expected: str) -> bool:
        """Consume the next character only if it is ``expected``."""
        if self._is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self.source[self.current]

    def _peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for log messages

    Returns:
        List of tokens

    Raises:
        SourceError: If scanning fails
    """
    return Scanner(source, filename).scan_tokens()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        SourceError: If scanning fails
        LoxIOError: If the file cannot be read
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise LoxIOError.from_os_error(exc, filepath) from exc

    return tokenize_string(source, filepath)
