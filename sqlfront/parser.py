"""
sqlfront SQL Parser
===================
Pratt expression parser plus recursive-descent statement parser.
Converts a stream of tokens into an AST.

Architecture:
- Input: Immutable list of Tokens (from Tokenizer), always ending in EOF
- Output: Statement AST node
- Lookahead: 1 token (2 for ORDER BY and CREATE TABLE)
- Expressions: binding-power driven (see BINDING_POWERS), no rule per level
"""

import logging
from typing import List

from sqlfront.tokenizer import Token, TokenType
from sqlfront.ast_nodes import (
    Statement, Select, CreateTable,
    Expression, Literal, ColumnRef, BinaryOp, UnaryOp,
    Star, OrderItem, ColumnDef, ColumnType, DataType, Constraint,
)
from sqlfront.errors import (
    ExpectedTokenError, NestingTooDeepError, UnexpectedEofError,
    UnexpectedTokenError, UnknownStatementError,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100

# Infix operators: (left binding power, right binding power).
# Left-associative operators use (p, p + 1).
BINDING_POWERS = {
    TokenType.OR: (1, 2),
    TokenType.AND: (3, 4),
    TokenType.EQ: (7, 8),
    TokenType.NEQ: (7, 8),
    TokenType.LT: (7, 8),
    TokenType.GT: (7, 8),
    TokenType.LTE: (7, 8),
    TokenType.GTE: (7, 8),
    TokenType.PLUS: (9, 10),
    TokenType.MINUS: (9, 10),
    TokenType.STAR: (11, 12),
    TokenType.SLASH: (11, 12),
}

# Prefix operators: right binding power of the operand.
# NOT sits between AND and comparisons; sign operators bind tighter than any infix.
PREFIX_BINDING_POWERS = {
    TokenType.NOT: 5,
    TokenType.MINUS: 13,
    TokenType.PLUS: 13,
}

LITERAL_TOKENS = (TokenType.NUMBER, TokenType.STRING, TokenType.TRUE, TokenType.FALSE)


class Parser:
    """
    SQL parser over a fixed token list with a single forward cursor.
    Initialize with a list of tokens, call .parse() to get the AST.
    """

    def __init__(self, tokens: List[Token], max_depth: int = DEFAULT_MAX_DEPTH):
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token list must end with an EOF token")
        self._tokens = tokens
        self._pos = 0
        self._depth = 0
        self._max_depth = max_depth

    def parse(self) -> Statement:
        """Parse exactly one statement; nothing but EOF may follow its ';'."""
        stmt = self.parse_statement()
        self._expect_end("statement")
        return stmt

    def parse_standalone_expression(self) -> Expression:
        """Parse one expression that must span the whole token list."""
        expr = self.parse_expression()
        self._expect_end("expression")
        return expr

    def parse_script(self) -> List[Statement]:
        """Parse consecutive ';'-terminated statements until EOF."""
        statements = []
        while not self._is_at_end():
            statements.append(self.parse_statement())
        logger.debug("parsed script of %d statements", len(statements))
        return statements

    # ─── Statement Parsing ──────────────────────────────────────────

    def parse_statement(self) -> Statement:
        token = self._peek()
        if self._match(TokenType.SELECT):
            stmt = self._parse_select()
        elif self._match(TokenType.CREATE):
            self._consume(TokenType.TABLE, "TABLE")
            stmt = self._parse_create_table()
        elif self._is_at_end():
            raise UnexpectedEofError(token, "statement")
        else:
            raise UnknownStatementError(token)

        logger.debug("parsed %s statement at line %d:%d", type(stmt).__name__, token.line, token.col)
        return stmt

    def _parse_select(self) -> Select:
        # SELECT item, ... FROM table [WHERE expr] [ORDER BY col [ASC|DESC], ...] ;
        columns = [self._parse_select_item()]
        while self._match(TokenType.COMMA):
            columns.append(self._parse_select_item())

        self._consume(TokenType.FROM, "FROM")
        table = self._consume(TokenType.IDENTIFIER, "table name").lexeme

        predicate = None
        if self._match(TokenType.WHERE):
            predicate = self.parse_expression()

        order_by = None
        if self._match(TokenType.ORDER):
            self._consume(TokenType.BY, "BY")
            order_by = tuple(self._parse_order_list())

        self._consume(TokenType.SEMICOLON, ";")
        return Select(tuple(columns), table, predicate, order_by)

    def _parse_select_item(self):
        if self._match(TokenType.STAR):
            return Star()
        if self._check(TokenType.IDENTIFIER):
            return self._parse_column_ref()
        if self._is_at_end():
            raise UnexpectedEofError(self._peek(), "column name or *")
        raise ExpectedTokenError("column name or *", self._peek())

    def _parse_order_list(self) -> List[OrderItem]:
        items = []
        while True:
            column = self._consume(TokenType.IDENTIFIER, "column name").lexeme
            ascending = True
            if self._match(TokenType.DESC):
                ascending = False
            else:
                self._match(TokenType.ASC)
            items.append(OrderItem(column, ascending))
            if not self._match(TokenType.COMMA):
                break
        return items

    def _parse_create_table(self) -> CreateTable:
        # CREATE TABLE table (col type [constraint ...], ...) ;
        table = self._consume(TokenType.IDENTIFIER, "table name").lexeme
        self._consume(TokenType.LPAREN, "(")

        columns = []
        while True:
            columns.append(self._parse_column_def())
            if not self._match(TokenType.COMMA):
                break

        self._consume(TokenType.RPAREN, ")")
        self._consume(TokenType.SEMICOLON, ";")
        return CreateTable(table, tuple(columns))

    def _parse_column_def(self) -> ColumnDef:
        name = self._consume(TokenType.IDENTIFIER, "column name").lexeme
        data_type = self._parse_column_type()

        constraints = set()
        check = None
        while True:
            if self._match(TokenType.PRIMARY):
                self._consume(TokenType.KEY, "KEY")
                constraints.add(Constraint.PRIMARY_KEY)
            elif self._match(TokenType.NOT):
                self._consume(TokenType.NULL, "NULL")
                constraints.add(Constraint.NOT_NULL)
            elif self._check(TokenType.CHECK):
                keyword = self._advance()
                if check is not None:
                    raise UnexpectedTokenError(f"Duplicate CHECK constraint on column {name!r}", keyword)
                self._consume(TokenType.LPAREN, "(")
                check = self.parse_expression()
                self._consume(TokenType.RPAREN, ")")
                constraints.add(Constraint.CHECK)
            else:
                break

        return ColumnDef(name, data_type, frozenset(constraints), check)

    def _parse_column_type(self) -> ColumnType:
        if self._match(TokenType.INT):
            return ColumnType(DataType.INT)
        if self._match(TokenType.BOOL):
            return ColumnType(DataType.BOOL)
        if self._match(TokenType.VARCHAR):
            self._consume(TokenType.LPAREN, "(")
            length = self._consume(TokenType.NUMBER, "VARCHAR length")
            if not isinstance(length.value, int):
                raise ExpectedTokenError("integer VARCHAR length", length)
            self._consume(TokenType.RPAREN, ")")
            return ColumnType(DataType.VARCHAR, length.value)
        raise ExpectedTokenError("column type (INT, VARCHAR or BOOL)", self._peek())

    # ─── Expression Parsing ─────────────────────────────────────────

    def parse_expression(self, min_bp: int = 0) -> Expression:
        """
        Parse an expression whose infix operators all bind tighter than min_bp.

        A primary (or prefix operator) forms the left-hand side; then, while
        the next token is an infix operator with left binding power above
        min_bp, it is consumed and its right-hand side parsed at the
        operator's right binding power.
        """
        if self._depth >= self._max_depth:
            raise NestingTooDeepError(self._peek(), self._max_depth)
        self._depth += 1
        try:
            left = self._parse_prefix()
            while True:
                powers = BINDING_POWERS.get(self._peek().type)
                if powers is None:
                    break
                left_bp, right_bp = powers
                if left_bp <= min_bp:
                    break
                op = self._advance().type
                right = self.parse_expression(right_bp)
                left = BinaryOp(op, left, right)
            return left
        finally:
            self._depth -= 1

    def _parse_prefix(self) -> Expression:
        token = self._peek()

        if token.type in LITERAL_TOKENS:
            self._advance()
            return Literal(token.value)
        if self._match(TokenType.NULL):
            return Literal(None)

        if token.type in PREFIX_BINDING_POWERS:
            self._advance()
            operand = self.parse_expression(PREFIX_BINDING_POWERS[token.type])
            return UnaryOp(token.type, operand)

        if self._match(TokenType.LPAREN):
            expr = self.parse_expression()
            self._consume(TokenType.RPAREN, ")")
            return expr

        if self._check(TokenType.IDENTIFIER):
            return self._parse_column_ref()

        if self._is_at_end():
            raise UnexpectedEofError(token, "expression")

        raise UnexpectedTokenError(f"Unexpected token {token.lexeme!r}, expected expression", token)

    # ─── Helpers ────────────────────────────────────────────────────

    def _parse_column_ref(self) -> ColumnRef:
        name = self._consume(TokenType.IDENTIFIER, "column name").lexeme
        if self._match(TokenType.DOT):
            column = self._consume(TokenType.IDENTIFIER, "column name after '.'").lexeme
            return ColumnRef(column, table=name)
        return ColumnRef(name)

    # ─── Core Parser Logic ──────────────────────────────────────────

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _previous(self) -> Token:
        return self._tokens[self._pos - 1]

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _check(self, type: TokenType) -> bool:
        return self._peek().type == type

    def _advance(self) -> Token:
        if not self._is_at_end():
            self._pos += 1
        return self._previous()

    def _match(self, *types: TokenType) -> bool:
        for type in types:
            if self._check(type):
                self._advance()
                return True
        return False

    def _expect_end(self, what: str) -> None:
        if not self._is_at_end():
            token = self._peek()
            raise UnexpectedTokenError(f"Unexpected token {token.lexeme!r} after {what}", token)

    def _consume(self, type: TokenType, expected: str) -> Token:
        if self._check(type):
            return self._advance()
        raise ExpectedTokenError(expected, self._peek())
