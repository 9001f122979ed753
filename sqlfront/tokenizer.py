"""
sqlfront Tokenizer
==================
Converts raw SQL strings into a stream of typed tokens.

Features:
- Case-insensitive keywords (SELECT = select)
- String literals in single or double quotes, doubled quote escapes ('O''Reilly')
- Numeric literals (integers and decimals with one decimal point)
- Maximal-munch operators (>= is one token, never > followed by =)
- Line/column tracking for error reporting
- EOF sentinel token

The dialect has no comment syntax: every non-whitespace character ends up
in exactly one token or raises a LexError.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, List, Tuple

from sqlfront.errors import InvalidNumberError, UnexpectedCharError, UnterminatedStringError

logger = logging.getLogger(__name__)


class TokenType(Enum):
    # Keywords
    SELECT = auto()
    FROM = auto()
    WHERE = auto()
    ORDER = auto()
    BY = auto()
    ASC = auto()
    DESC = auto()
    CREATE = auto()
    TABLE = auto()
    PRIMARY = auto()
    KEY = auto()
    CHECK = auto()
    AND = auto()
    OR = auto()
    NOT = auto()
    NULL = auto()
    TRUE = auto()
    FALSE = auto()

    # Data Types
    INT = auto()
    VARCHAR = auto()
    BOOL = auto()

    # Literals
    NUMBER = auto()      # 123, 3.14
    STRING = auto()      # 'hello', "hello"
    IDENTIFIER = auto()  # table_name

    # Operators
    EQ = auto()          # =
    NEQ = auto()         # <> or !=
    LT = auto()          # <
    GT = auto()          # >
    LTE = auto()         # <=
    GTE = auto()         # >=
    PLUS = auto()        # +
    MINUS = auto()       # -
    STAR = auto()        # *
    SLASH = auto()       # /

    # Punctuation
    LPAREN = auto()      # (
    RPAREN = auto()      # )
    COMMA = auto()       # ,
    DOT = auto()         # .
    SEMICOLON = auto()   # ;

    # Special
    EOF = auto()


KEYWORD_TYPES = frozenset({
    TokenType.SELECT, TokenType.FROM, TokenType.WHERE, TokenType.ORDER,
    TokenType.BY, TokenType.ASC, TokenType.DESC, TokenType.CREATE,
    TokenType.TABLE, TokenType.PRIMARY, TokenType.KEY, TokenType.CHECK,
    TokenType.AND, TokenType.OR, TokenType.NOT, TokenType.NULL,
    TokenType.TRUE, TokenType.FALSE, TokenType.INT, TokenType.VARCHAR,
    TokenType.BOOL,
})

OPERATOR_TYPES = frozenset({
    TokenType.EQ, TokenType.NEQ, TokenType.LT, TokenType.GT, TokenType.LTE,
    TokenType.GTE, TokenType.PLUS, TokenType.MINUS, TokenType.STAR,
    TokenType.SLASH,
})

PUNCTUATION_TYPES = frozenset({
    TokenType.LPAREN, TokenType.RPAREN, TokenType.COMMA, TokenType.DOT,
    TokenType.SEMICOLON,
})


@dataclass(frozen=True)
class Token:
    """
    Immutable token with position info.

    Attributes:
        type: TokenType
        lexeme: The exact source text of the token (quotes included for strings)
        line: 1-based line number
        col: 1-based column number
        value: Decoded literal for NUMBER (int/float), STRING (unescaped str)
               and TRUE/FALSE (bool); None for everything else
    """
    type: TokenType
    lexeme: str
    line: int
    col: int
    value: Any = None

    @property
    def position(self) -> Tuple[int, int]:
        return (self.line, self.col)

    @property
    def is_keyword(self) -> bool:
        return self.type in KEYWORD_TYPES

    @property
    def is_operator(self) -> bool:
        return self.type in OPERATOR_TYPES

    @property
    def is_punctuation(self) -> bool:
        return self.type in PUNCTUATION_TYPES

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.line}:{self.col})"


class Tokenizer:
    """
    Lexer for SQL. Call .tokenize(sql) to get a list of tokens.
    """

    # Keyword map (uppercase for normalization)
    KEYWORDS = {
        "SELECT": TokenType.SELECT,
        "FROM": TokenType.FROM,
        "WHERE": TokenType.WHERE,
        "ORDER": TokenType.ORDER,
        "BY": TokenType.BY,
        "ASC": TokenType.ASC,
        "DESC": TokenType.DESC,
        "CREATE": TokenType.CREATE,
        "TABLE": TokenType.TABLE,
        "PRIMARY": TokenType.PRIMARY,
        "KEY": TokenType.KEY,
        "CHECK": TokenType.CHECK,
        "AND": TokenType.AND,
        "OR": TokenType.OR,
        "NOT": TokenType.NOT,
        "NULL": TokenType.NULL,
        "TRUE": TokenType.TRUE,
        "FALSE": TokenType.FALSE,
        "INT": TokenType.INT,
        "INTEGER": TokenType.INT,
        "VARCHAR": TokenType.VARCHAR,
        "BOOL": TokenType.BOOL,
        "BOOLEAN": TokenType.BOOL,
    }

    # Regex patterns
    # Note: order matters! Multi-char operators come before their prefixes.
    PATTERNS = [
        # Whitespace (skip)
        (re.compile(r'\s+'), None),

        # Operators (multi-char first)
        (re.compile(r'>='), TokenType.GTE),
        (re.compile(r'<='), TokenType.LTE),
        (re.compile(r'<>'), TokenType.NEQ),
        (re.compile(r'!='), TokenType.NEQ),
        (re.compile(r'='), TokenType.EQ),
        (re.compile(r'<'), TokenType.LT),
        (re.compile(r'>'), TokenType.GT),
        (re.compile(r'\+'), TokenType.PLUS),
        (re.compile(r'-'), TokenType.MINUS),
        (re.compile(r'\*'), TokenType.STAR),
        (re.compile(r'/'), TokenType.SLASH),

        # Punctuation
        (re.compile(r'\('), TokenType.LPAREN),
        (re.compile(r'\)'), TokenType.RPAREN),
        (re.compile(r','), TokenType.COMMA),
        (re.compile(r'\.'), TokenType.DOT),
        (re.compile(r';'), TokenType.SEMICOLON),

        # Literals
        # String: 'hello' or "hello" (a doubled quote is an escaped quote)
        (re.compile(r"'((?:''|[^'])*)'"), TokenType.STRING),
        (re.compile(r'"((?:""|[^"])*)"'), TokenType.STRING),
        # Number: any run of digits and dots, validated below
        (re.compile(r'\d[\d.]*'), TokenType.NUMBER),

        # Unquoted word: my_table (could be keyword)
        (re.compile(r'[a-zA-Z_][a-zA-Z0-9_]*'), TokenType.IDENTIFIER),
    ]

    NUMBER_SHAPE = re.compile(r'\d+(?:\.\d+)?')
    QUOTES = ("'", '"')

    def tokenize(self, sql: str) -> List[Token]:
        """Tokenize SQL string into a list of Tokens, terminated by EOF."""
        tokens = []
        pos = 0
        line = 1
        col_start = 0  # position of start of current line in string

        while pos < len(sql):
            match = None
            col = pos - col_start + 1

            for pattern, token_type in self.PATTERNS:
                regex_match = pattern.match(sql, pos)
                if not regex_match:
                    continue
                text = regex_match.group(0)

                # A string match followed by its own quote means the regex gave
                # back an escaped '' to close early: the literal never ends.
                if token_type == TokenType.STRING and sql.startswith(text[0], regex_match.end()):
                    raise UnterminatedStringError(text[0], line, col)

                if token_type:  # If not skipped (whitespace)
                    tokens.append(self._make_token(token_type, regex_match, line, col))

                pos += len(text)

                # Update line/col tracking
                newlines = text.count('\n')
                if newlines > 0:
                    line += newlines
                    # New column start is after the last newline
                    col_start = pos - (len(text) - text.rfind('\n') - 1)

                match = regex_match
                break

            if not match:
                char = sql[pos]
                if char in self.QUOTES:
                    raise UnterminatedStringError(char, line, col)
                raise UnexpectedCharError(char, line, col)

        # Always append EOF
        tokens.append(Token(TokenType.EOF, "", line, pos - col_start + 1))
        logger.debug("tokenized %d characters into %d tokens", len(sql), len(tokens))
        return tokens

    def _make_token(self, token_type: TokenType, regex_match, line: int, col: int) -> Token:
        text = regex_match.group(0)

        if token_type == TokenType.IDENTIFIER:
            keyword = self.KEYWORDS.get(text.upper())
            if keyword is TokenType.TRUE:
                return Token(keyword, text, line, col, True)
            if keyword is TokenType.FALSE:
                return Token(keyword, text, line, col, False)
            if keyword is not None:
                return Token(keyword, text, line, col)
            return Token(TokenType.IDENTIFIER, text, line, col, text)

        if token_type == TokenType.STRING:
            quote = text[0]
            value = regex_match.group(1).replace(quote * 2, quote)
            return Token(TokenType.STRING, text, line, col, value)

        if token_type == TokenType.NUMBER:
            if not self.NUMBER_SHAPE.fullmatch(text):
                raise InvalidNumberError(text, line, col)
            value = float(text) if '.' in text else int(text)
            if isinstance(value, float) and math.isinf(value):
                raise InvalidNumberError(text, line, col)
            return Token(TokenType.NUMBER, text, line, col, value)

        return Token(token_type, text, line, col)


def tokenize(sql: str) -> List[Token]:
    """Tokenize a SQL string with the default tokenizer."""
    return Tokenizer().tokenize(sql)
