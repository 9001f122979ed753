import argparse
import logging
import sys
import os

# Ensure project root is on path
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
sys.path.insert(0, parent_dir)

from sqlfront import parse, tokenize, SQLError

QUERIES = [
    "SELECT * FROM users;",
    "SELECT name, age FROM users WHERE age > 18;",
    "SELECT * FROM t ORDER BY x DESC;",
    "SELECT id FROM orders WHERE total * 2 + 1 >= 100 AND NOT status = 'void' ORDER BY id, total DESC;",
    "CREATE TABLE products (id INT PRIMARY KEY, name VARCHAR(100));",
    "CREATE TABLE people (id INT NOT NULL, adult BOOL, age INT CHECK (age >= 0));",
]

ERRORS = [
    "SELECT * FROM t",              # Missing terminator
    "SELECT 'abc FROM t;",          # Unterminated string
    "DROP TABLE t;",                # Unknown statement
    "SELECT (1 + 2 FROM t;",        # Unbalanced paren
    "CREATE TABLE t (id);",         # Missing type
    "SELECT 1.2.3 FROM t;",         # Invalid number
]


def run_report():
    print("# Parser Verification Report\n")

    print("## Valid SQL -> AST Dumps\n")

    for i, sql in enumerate(QUERIES, 1):
        print(f"### Example {i}")
        print(f"**SQL**: `{sql}`")
        try:
            ast = parse(sql)
            print(f"**Tokens**: {len(tokenize(sql))}")
            print(f"**AST**: `{ast!r}`")
            print(f"**Rendered**: `{ast}`\n")
        except SQLError as e:
            print(f"**ERROR**: {e}\n")

    print("## Parser Error Examples\n")

    for i, sql in enumerate(ERRORS, 1):
        print(f"### Error Case {i}")
        print(f"**SQL**: `{sql}`")
        try:
            parse(sql)
            print("**Result**: Parsed successfully (Unexpected!)\n")
        except SQLError as e:
            print(f"**Error Output**: `{type(e).__name__}: {e}`\n")


def main(argv=None):
    arg_parser = argparse.ArgumentParser(description="Print AST dumps and error outputs for sample SQL.")
    arg_parser.add_argument("-v", "--verbose", action="store_true", help="show parser debug logging")
    args = arg_parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")
    run_report()


if __name__ == "__main__":
    main()
