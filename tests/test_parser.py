"""
sqlfront Statement Parser Tests
===============================
Tests for SQL text -> Statement AST.
Verifies correct structure of SELECT and CREATE TABLE statements.

Focus:
1. Valid SQL produces the exact AST
2. Optional clauses (WHERE, ORDER BY) and their defaults
3. Column definitions: types and constraints
4. Multi-statement buffers
"""

import sys
import os
import dataclasses
import pytest

# Ensure project root is on path
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
sys.path.insert(0, parent_dir)

from sqlfront import parse, parse_script
from sqlfront.ast_nodes import (
    Select, CreateTable, BinaryOp, UnaryOp, Literal, ColumnRef, Star,
    OrderItem, ColumnDef, ColumnType, DataType, Constraint,
)
from sqlfront.tokenizer import TokenType


class TestSelect:

    def test_select_with_where(self):
        ast = parse("SELECT name, age FROM users WHERE age > 18;")
        assert ast == Select(
            columns=(ColumnRef("name"), ColumnRef("age")),
            table="users",
            predicate=BinaryOp(TokenType.GT, ColumnRef("age"), Literal(18)),
            order_by=None,
        )

    def test_select_star_order_by_desc(self):
        ast = parse("SELECT * FROM t ORDER BY x DESC;")
        assert ast == Select(
            columns=(Star(),),
            table="t",
            predicate=None,
            order_by=(OrderItem("x", ascending=False),),
        )

    def test_select_basic(self):
        ast = parse("SELECT id FROM users;")
        assert isinstance(ast, Select)
        assert ast.columns == (ColumnRef("id"),)
        assert ast.table == "users"
        assert ast.predicate is None
        assert ast.order_by is None

    def test_select_lowercase(self):
        assert parse("select * from t;") == parse("SELECT * FROM t;")

    def test_select_qualified_columns(self):
        ast = parse("SELECT t.id, name FROM t;")
        assert ast.columns == (ColumnRef("id", table="t"), ColumnRef("name"))

    def test_select_star_and_columns(self):
        ast = parse("SELECT *, a FROM t;")
        assert ast.columns == (Star(), ColumnRef("a"))

    def test_order_by_defaults_ascending(self):
        ast = parse("SELECT * FROM t ORDER BY a, b ASC, c DESC;")
        assert ast.order_by == (
            OrderItem("a", True), OrderItem("b", True), OrderItem("c", False),
        )

    def test_where_and_order_by(self):
        ast = parse("SELECT a FROM t WHERE a >= 1 AND NOT b = 'x' ORDER BY a;")
        assert ast.predicate.op == TokenType.AND
        assert isinstance(ast.predicate.right, UnaryOp)
        assert ast.predicate.right.op == TokenType.NOT
        assert ast.order_by == (OrderItem("a"),)

    def test_where_with_arithmetic(self):
        ast = parse("SELECT * FROM t WHERE price * 2 + 1 <= 10;")
        where = ast.predicate
        assert where.op == TokenType.LTE
        assert where.left.op == TokenType.PLUS
        assert where.left.left.op == TokenType.STAR

    def test_multiline(self):
        ast = parse("SELECT a,\n       b\n  FROM t\n WHERE a = 1;")
        assert ast.columns == (ColumnRef("a"), ColumnRef("b"))
        assert ast.predicate == BinaryOp(TokenType.EQ, ColumnRef("a"), Literal(1))

    def test_str_round_trip(self):
        ast = parse("SELECT name FROM users WHERE age > 18 ORDER BY name DESC;")
        assert str(ast) == "SELECT name FROM users WHERE (age > 18) ORDER BY name DESC;"
        assert parse(str(ast)) == ast

    @pytest.mark.parametrize("sql", [
        "SELECT * FROM t WHERE x = 100000000000000000000.5;",
        "SELECT * FROM t WHERE x < 0.000001;",
        "SELECT * FROM t WHERE x = 2.50;",
        "SELECT * FROM t WHERE a = 1 OR a = 1.0 OR a = TRUE;",
        "SELECT t.a, b FROM t WHERE -t.a < +b AND NOT c;",
        "SELECT * FROM t WHERE a - -1 = 2 ORDER BY a ASC, b DESC;",
        "SELECT * FROM t WHERE s = 'it''s' OR v = NULL;",
        "CREATE TABLE t (flag BOOL CHECK (TRUE));",
        "CREATE TABLE t (a INT CHECK (a > 0) NOT NULL, n VARCHAR(8) PRIMARY KEY);",
        "CREATE TABLE t (a INT CHECK (-a));",
    ])
    def test_str_parses_back(self, sql):
        ast = parse(sql)
        assert parse(str(ast)) == ast

    def test_float_renders_fixed_point(self):
        ast = parse("SELECT * FROM t WHERE x = 100000000000000000000.5 OR y = 0.000001;")
        text = str(ast)
        assert "100000000000000000000.0" in text
        assert "0.000001" in text
        assert "e" not in text.split("WHERE")[1]

    def test_check_with_primary_keeps_parentheses(self):
        ast = parse("CREATE TABLE t (flag BOOL CHECK (TRUE));")
        assert "CHECK (TRUE)" in str(ast)

    def test_ast_is_immutable(self):
        ast = parse("SELECT * FROM t;")
        with pytest.raises(dataclasses.FrozenInstanceError):
            ast.table = "other"


class TestCreateTable:

    def test_create_table_basic(self):
        ast = parse("CREATE TABLE products (id INT PRIMARY KEY, name VARCHAR(100));")
        assert ast == CreateTable(
            table="products",
            columns=(
                ColumnDef("id", ColumnType(DataType.INT), frozenset({Constraint.PRIMARY_KEY})),
                ColumnDef("name", ColumnType(DataType.VARCHAR, 100), frozenset()),
            ),
        )

    def test_create_table_constraints(self):
        ast = parse("CREATE TABLE users (id INT PRIMARY KEY NOT NULL, active BOOL NOT NULL);")
        id_col, active = ast.columns
        assert id_col.constraints == {Constraint.PRIMARY_KEY, Constraint.NOT_NULL}
        assert active.data_type == ColumnType(DataType.BOOL)
        assert active.constraints == {Constraint.NOT_NULL}

    def test_create_table_check(self):
        ast = parse("CREATE TABLE people (age INT CHECK (age >= 0 AND age < 150));")
        age = ast.columns[0]
        assert Constraint.CHECK in age.constraints
        assert age.check.op == TokenType.AND
        assert age.check.left == BinaryOp(TokenType.GTE, ColumnRef("age"), Literal(0))

    def test_create_table_type_aliases(self):
        ast = parse("create table t (a integer, b boolean);")
        assert [c.data_type.base for c in ast.columns] == [DataType.INT, DataType.BOOL]

    def test_constraint_order_does_not_matter(self):
        a = parse("CREATE TABLE t (id INT NOT NULL PRIMARY KEY);")
        b = parse("CREATE TABLE t (id INT PRIMARY KEY NOT NULL);")
        assert a == b

    def test_str_rendering(self):
        ast = parse("CREATE TABLE t (id INT PRIMARY KEY, name VARCHAR(20) NOT NULL);")
        assert str(ast) == "CREATE TABLE t (id INT PRIMARY KEY, name VARCHAR(20) NOT NULL);"


class TestScript:

    def test_parse_script(self):
        statements = parse_script(
            "CREATE TABLE t (id INT);\nSELECT * FROM t;\nSELECT id FROM t WHERE id = 1;"
        )
        assert [type(s) for s in statements] == [CreateTable, Select, Select]

    def test_parse_script_empty(self):
        assert parse_script("") == []
        assert parse_script("  \n ") == []


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
