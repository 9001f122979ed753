"""
sqlfront SQL Parser
===================
Public API: SQL text -> tokens -> AST.

Usage:
    from sqlfront import parse, SQLError

    ast = parse("SELECT * FROM users;")
    print(ast)
"""

from typing import List

from sqlfront.parser import Parser, DEFAULT_MAX_DEPTH
from sqlfront.tokenizer import Tokenizer, Token, TokenType, tokenize
from sqlfront.ast_nodes import Statement, Expression
from sqlfront.errors import (
    SQLError, LexError, ParseError,
    UnexpectedCharError, UnterminatedStringError, InvalidNumberError,
    UnexpectedTokenError, UnexpectedEofError, ExpectedTokenError,
    UnknownStatementError, NestingTooDeepError,
)


def parse(sql: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Statement:
    """
    Parse a single ';'-terminated SQL statement into an AST Statement.
    Raises LexError or ParseError (both SQLError) if the input is invalid.
    """
    tokens = Tokenizer().tokenize(sql)
    return Parser(tokens, max_depth=max_depth).parse()


def parse_script(sql: str, max_depth: int = DEFAULT_MAX_DEPTH) -> List[Statement]:
    """Parse every statement in a buffer; an empty buffer yields []."""
    tokens = Tokenizer().tokenize(sql)
    return Parser(tokens, max_depth=max_depth).parse_script()


def parse_expression(sql: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Expression:
    """Parse a standalone expression such as "1 + 2 * 3"."""
    tokens = Tokenizer().tokenize(sql)
    return Parser(tokens, max_depth=max_depth).parse_standalone_expression()


__all__ = [
    "parse", "parse_script", "parse_expression", "tokenize",
    "Parser", "Tokenizer", "Token", "TokenType", "Statement", "Expression",
    "DEFAULT_MAX_DEPTH",
    "SQLError", "LexError", "ParseError",
    "UnexpectedCharError", "UnterminatedStringError", "InvalidNumberError",
    "UnexpectedTokenError", "UnexpectedEofError", "ExpectedTokenError",
    "UnknownStatementError", "NestingTooDeepError",
]
