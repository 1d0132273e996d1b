"""
Lox Recursive Descent Parser

One method per grammar rule, lowest precedence first:

    expression     -> equality
    equality       -> comparison ( ( "!=" | "==" ) comparison )*
    comparison     -> addition ( ( ">" | ">=" | "<" | "<=" ) addition )*
    addition       -> multiplication ( ( "-" | "+" ) multiplication )*
    multiplication -> unary ( ( "/" | "*" ) unary )*
    unary          -> ( "!" | "-" ) unary | primary
    primary        -> "false" | "true" | "nil" | NUMBER | STRING
                    | "(" expression ")"

Syntax errors never escape the parser. A failed ``primary`` becomes an
ErrorExpr node in the tree and a SourceError in ``Parser.errors``. Unary
operators and parentheses nested deeper than ``MAX_NESTING`` abandon the
whole expression with a single "expression nesting too deep" error. No tokens
are skipped to resynchronize, so one mistake can produce further ErrorExpr
nodes later in the same expression.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from ..errors import SourceError
from ..lexer.tokens import Token, TokenType
from .ast_nodes import Binary, ErrorExpr, Expr, Grouping, Literal, Unary

logger = logging.getLogger(__name__)


EQUALITY_OPERATORS = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
COMPARISON_OPERATORS = (
    TokenType.GREATER, TokenType.GREATER_EQUAL,
    TokenType.LESS, TokenType.LESS_EQUAL,
)
ADDITION_OPERATORS = (TokenType.MINUS, TokenType.PLUS)
MULTIPLICATION_OPERATORS = (TokenType.SLASH, TokenType.STAR)
UNARY_OPERATORS = (TokenType.BANG, TokenType.MINUS)

# Each level of parentheses costs about a dozen Python frames
MAX_NESTING = 50


class Parser:
    """
    Lox expression parser.

    Consumes a token list produced by the scanner and builds a single
    expression tree. A parser instance is good for one ``parse()`` call.
    """

    def __init__(self, tokens: Sequence[Token], max_nesting: int = MAX_NESTING):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the scanner, terminated by EOF
            max_nesting: Deepest allowed run of nested unary operators and
                parentheses

        Raises:
            ValueError: If the stream is empty or not EOF-terminated
        """
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token stream must end with an EOF token")

        self.tokens = list(tokens)
        self.current = 0
        self.max_nesting = max_nesting
        self.nesting = 0
        self.errors: List[SourceError] = []

    def parse(self) -> Expr:
        """Parse the token stream into an expression tree."""
        try:
            expr = self._expression()
        except SourceError as e:
            self._record(e)
            expr = ErrorExpr()

        if self.errors:
            logger.debug("Parse finished with %d error(s)", len(self.errors))
        return expr

    def has_errors(self) -> bool:
        """Check if any ErrorExpr node was produced."""
        return len(self.errors) > 0

    # Grammar rules

    def _expression(self) -> Expr:
        return self._equality()

    def _equality(self) -> Expr:
        return self._left_associative(self._comparison, EQUALITY_OPERATORS)

    def _comparison(self) -> Expr:
        return self._left_associative(self._addition, COMPARISON_OPERATORS)

    def _addition(self) -> Expr:
        return self._left_associative(self._multiplication, ADDITION_OPERATORS)

    def _multiplication(self) -> Expr:
        return self._left_associative(self._unary, MULTIPLICATION_OPERATORS)

    def _left_associative(self, operand, operators) -> Expr:
        """Fold ``operand ( op operand )*`` into a left-leaning Binary chain."""
        expr = operand()

        while self._match(*operators):
            operator = self._previous()
            right = operand()
            expr = Binary(expr, operator, right)

        return expr

    def _unary(self) -> Expr:
        if self._match(*UNARY_OPERATORS):
            operator = self._previous()
            self._enter(operator)
            right = self._unary()
            self.nesting -= 1
            return Unary(operator, right)

        return self._primary()

    def _primary(self) -> Expr:
        if self._match(TokenType.FALSE, TokenType.TRUE, TokenType.NIL):
            return Literal.from_token(self._previous())

        if self._is_at_end():
            return self._error(self._peek(), "expected expression")

        token = self._advance()

        if token.type in (TokenType.NUMBER, TokenType.STRING):
            return Literal.from_token(token)

        if token.type == TokenType.LEFT_PAREN:
            self._enter(token)
            expr = self._expression()
            self.nesting -= 1
            try:
                self._consume(TokenType.RIGHT_PAREN, "expected ')' after expression")
            except SourceError as e:
                self._record(e)
                return ErrorExpr()
            return Grouping(expr)

        return self._error(token, "expected expression")

    def _enter(self, token: Token):
        """Count one more level of nesting; raises once past the limit."""
        self.nesting += 1
        if self.nesting > self.max_nesting:
            raise _error_at(token, "expression nesting too deep")

    # Token stream helpers

    def _match(self, *token_types: TokenType) -> bool:
        """Advance past the next token if it is one of ``token_types``."""
        for token_type in token_types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _advance(self) -> Token:
        """Move to the next token; stays put on EOF."""
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[max(self.current - 1, 0)]

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()
        raise _error_at(self._peek(), message)

    def _error(self, token: Token, message: str) -> ErrorExpr:
        self._record(_error_at(token, message))
        return ErrorExpr()

    def _record(self, error: SourceError):
        logger.debug("Syntax error: %s", error)
        self.errors.append(error)


def _error_at(token: Token, message: str) -> SourceError:
    if token.type == TokenType.EOF:
        return SourceError(token.line, "at end", message)
    return SourceError(token.line, f"at '{token.lexeme}'", message)


@dataclass
class ParseResult:
    """Tree produced by a parse together with its syntax diagnostics."""
    ast: Expr
    errors: List[SourceError] = field(default_factory=list)

    def has_errors(self) -> bool:
        return len(self.errors) > 0


def parse_tokens(tokens: Sequence[Token]) -> ParseResult:
    """Parse an EOF-terminated token list."""
    parser = Parser(tokens)
    ast = parser.parse()
    return ParseResult(ast, parser.errors)


def parse_string(source: str, filename: str = "<string>") -> ParseResult:
    """
    Convenience function to scan and parse a source string.

    Args:
        source: Source code string
        filename: Filename for log messages

    Returns:
        ParseResult with the tree and any syntax diagnostics

    Raises:
        SourceError: If scanning fails
    """
    from ..lexer import tokenize_string

    return parse_tokens(tokenize_string(source, filename))


def parse_file(filepath: str) -> ParseResult:
    """
    Convenience function to scan and parse a source file.

    Raises:
        SourceError: If scanning fails
        LoxIOError: If the file cannot be read
    """
    from ..lexer import tokenize_file

    return parse_tokens(tokenize_file(filepath))
