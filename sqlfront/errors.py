"""
sqlfront Errors
===============
Exception types raised by the tokenizer and the parser.

Two disjoint families share a common base:
- LexError: the source text could not be split into tokens
- ParseError: the token stream does not form a valid statement

Every error carries the 1-based line/column where it was detected.
The first error aborts the call; no partial AST is ever returned.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from sqlfront.tokenizer import Token


class SQLError(Exception):
    """Base class for all tokenizer and parser errors."""

    def __init__(self, message: str, line: int, col: int):
        super().__init__(f"{message} at line {line}:{col}")
        self.message = message
        self.line = line
        self.col = col

    @property
    def position(self):
        return (self.line, self.col)


# ═══════════════════════════════════════════════════════════════════════════
# Lexical errors
# ═══════════════════════════════════════════════════════════════════════════

class LexError(SQLError):
    """Error during tokenization."""


class UnexpectedCharError(LexError):
    def __init__(self, char: str, line: int, col: int):
        super().__init__(f"Unexpected character {char!r}", line, col)
        self.char = char


class UnterminatedStringError(LexError):
    """String literal without a closing quote. Position is the opening quote."""

    def __init__(self, quote: str, line: int, col: int):
        super().__init__(f"Unterminated string literal starting with {quote}", line, col)
        self.quote = quote


class InvalidNumberError(LexError):
    def __init__(self, text: str, line: int, col: int):
        super().__init__(f"Invalid number {text!r}", line, col)
        self.text = text


# ═══════════════════════════════════════════════════════════════════════════
# Syntax errors
# ═══════════════════════════════════════════════════════════════════════════

class ParseError(SQLError):
    """Error during parsing with position info taken from the offending token."""

    def __init__(self, message: str, token: "Token"):
        super().__init__(message, token.line, token.col)
        self.token = token


class UnexpectedTokenError(ParseError):
    pass


class UnexpectedEofError(ParseError):
    def __init__(self, token: "Token", context: Optional[str] = None):
        message = "Unexpected end of input"
        if context:
            message = f"{message}, expected {context}"
        super().__init__(message, token)


class ExpectedTokenError(ParseError):
    """
    A required token was missing.

    Attributes:
        expected: Human readable description of what was required, e.g. ";".
        found: The token actually present at that position.
    """

    def __init__(self, expected: str, found: "Token"):
        shown = "end of input" if not found.lexeme else repr(found.lexeme)
        super().__init__(f"Expected {expected}, got {shown}", found)
        self.expected = expected
        self.found = found


class UnknownStatementError(ParseError):
    def __init__(self, token: "Token"):
        super().__init__(
            f"Unknown statement {token.lexeme!r}, expected SELECT or CREATE", token
        )


class NestingTooDeepError(ParseError):
    def __init__(self, token: "Token", limit: int):
        super().__init__(f"Expression nesting exceeds limit of {limit}", token)
        self.limit = limit
