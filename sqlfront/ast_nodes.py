"""
sqlfront AST Nodes
==================
Abstract Syntax Tree definitions for SQL statements and expressions.

Design:
- Frozen dataclasses; child sequences are tuples, so a built tree never changes
- Strict separation between Statements and Expressions
- Operators are stored as TokenType members (PLUS, EQ, AND, ...)
- __str__ renders a compact SQL form, handy for reports and log lines
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto
from typing import Any, FrozenSet, Optional, Tuple, Union

from sqlfront.tokenizer import TokenType


OPERATOR_SYMBOLS = {
    TokenType.PLUS: "+", TokenType.MINUS: "-", TokenType.STAR: "*", TokenType.SLASH: "/",
    TokenType.EQ: "=", TokenType.NEQ: "<>", TokenType.LT: "<", TokenType.GT: ">",
    TokenType.LTE: "<=", TokenType.GTE: ">=", TokenType.AND: "AND", TokenType.OR: "OR",
    TokenType.NOT: "NOT",
}


class ASTNode:
    """Base class for all AST nodes."""
    pass


# ═══════════════════════════════════════════════════════════════════════════
# Expressions
# ═══════════════════════════════════════════════════════════════════════════

class Expression(ASTNode):
    """Base class for SQL expressions."""
    pass


class LiteralType(Enum):
    INT = auto()
    FLOAT = auto()
    STRING = auto()
    BOOL = auto()
    NULL = auto()


def literal_type_of(value: Any) -> LiteralType:
    if value is None: return LiteralType.NULL
    if isinstance(value, bool): return LiteralType.BOOL
    if isinstance(value, int): return LiteralType.INT
    if isinstance(value, float): return LiteralType.FLOAT
    if isinstance(value, str): return LiteralType.STRING
    raise TypeError(f"unsupported literal value {value!r}")


@dataclass(frozen=True)
class Literal(Expression):
    """
    Literal value (number, string, boolean, null).

    data_type takes part in equality, so 1, 1.0 and TRUE are three different
    literals even though Python compares their values as equal. It is
    inferred from the value when omitted.
    """
    value: Any
    data_type: Optional[LiteralType] = None

    def __post_init__(self):
        if self.data_type is None:
            object.__setattr__(self, "data_type", literal_type_of(self.value))

    def __str__(self) -> str:
        if self.data_type == LiteralType.NULL: return "NULL"
        if self.data_type == LiteralType.BOOL: return "TRUE" if self.value else "FALSE"
        if self.data_type == LiteralType.STRING: return "'" + self.value.replace("'", "''") + "'"
        if self.data_type == LiteralType.FLOAT:
            # Fixed-point: the tokenizer has no exponent syntax
            text = format(Decimal(repr(self.value)), "f")
            return text if "." in text else text + ".0"
        return str(self.value)


@dataclass(frozen=True)
class ColumnRef(Expression):
    """Column reference, optionally qualified by its table (t.col)."""
    name: str
    table: Optional[str] = None

    def __str__(self) -> str:
        if self.table:
            return f"{self.table}.{self.name}"
        return self.name


@dataclass(frozen=True)
class BinaryOp(Expression):
    """Binary operation: left op right (e.g. a + b, a = b)."""
    op: TokenType
    left: Expression
    right: Expression

    def __str__(self) -> str:
        sym = OPERATOR_SYMBOLS.get(self.op, self.op.name)
        return f"({self.left} {sym} {self.right})"


@dataclass(frozen=True)
class UnaryOp(Expression):
    """Unary operation: op operand (e.g. -a, NOT a)."""
    op: TokenType
    operand: Expression

    def __str__(self) -> str:
        sym = OPERATOR_SYMBOLS.get(self.op, self.op.name)
        if self.op == TokenType.NOT:
            return f"(NOT {self.operand})"
        return f"({sym}{self.operand})"


# ═══════════════════════════════════════════════════════════════════════════
# Support Structures
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Star(ASTNode):
    """The * item of a SELECT list."""

    def __str__(self) -> str:
        return "*"


@dataclass(frozen=True)
class OrderItem(ASTNode):
    """Item in ORDER BY: column ASC/DESC."""
    column: str
    ascending: bool = True  # Default ASC

    def __str__(self) -> str:
        return f"{self.column} {'ASC' if self.ascending else 'DESC'}"


class DataType(Enum):
    INT = auto()
    VARCHAR = auto()
    BOOL = auto()


@dataclass(frozen=True)
class ColumnType(ASTNode):
    """Declared column type. length is set for VARCHAR(n) only."""
    base: DataType
    length: Optional[int] = None

    def __str__(self) -> str:
        if self.length is not None:
            return f"{self.base.name}({self.length})"
        return self.base.name


class Constraint(Enum):
    PRIMARY_KEY = auto()
    NOT_NULL = auto()
    CHECK = auto()


@dataclass(frozen=True)
class ColumnDef(ASTNode):
    """
    Column definition in CREATE TABLE.

    Attributes:
        name: Column name.
        data_type: ColumnType.
        constraints: Set of Constraint flags declared on the column.
        check: Expression of the CHECK constraint, when Constraint.CHECK is present.
    """
    name: str
    data_type: ColumnType
    constraints: FrozenSet[Constraint] = frozenset()
    check: Optional[Expression] = None

    def __str__(self) -> str:
        parts = [self.name, str(self.data_type)]
        if Constraint.PRIMARY_KEY in self.constraints:
            parts.append("PRIMARY KEY")
        if Constraint.NOT_NULL in self.constraints:
            parts.append("NOT NULL")
        if self.check is not None:
            parts.append(f"CHECK ({self.check})")
        return " ".join(parts)


# ═══════════════════════════════════════════════════════════════════════════
# Statements
# ═══════════════════════════════════════════════════════════════════════════

class Statement(ASTNode):
    """Base class for SQL statements."""
    pass


SelectColumn = Union[ColumnRef, Star]


@dataclass(frozen=True)
class Select(Statement):
    """
    SELECT cols FROM table [WHERE predicate] [ORDER BY col [ASC|DESC], ...];

    order_by is None when the clause is absent.
    """
    columns: Tuple[SelectColumn, ...]
    table: str
    predicate: Optional[Expression] = None
    order_by: Optional[Tuple[OrderItem, ...]] = None

    def __str__(self) -> str:
        parts = ["SELECT", ", ".join(map(str, self.columns)), f"FROM {self.table}"]
        if self.predicate is not None:
            parts.append(f"WHERE {self.predicate}")
        if self.order_by:
            parts.append(f"ORDER BY {', '.join(map(str, self.order_by))}")
        return " ".join(parts) + ";"


@dataclass(frozen=True)
class CreateTable(Statement):
    """
    CREATE TABLE table (col type ...);
    """
    table: str
    columns: Tuple[ColumnDef, ...]

    def __str__(self) -> str:
        cols = ", ".join(map(str, self.columns))
        return f"CREATE TABLE {self.table} ({cols});"
