"""Tests for the query executor, run against an in-memory SQLite database."""

import sqlite3
from dataclasses import dataclass
from typing import Optional

import pytest

from dbml_ddl import compile_dbml
from dbml_ddl.ingest.query_executor import dataclass_row_builder, execute_query
from dbml_ddl.parser.base import QueryExecutionError


@dataclass
class User:
    id: int
    name: str
    email: Optional[str] = None


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, email TEXT)")
    conn.executemany(
        "INSERT INTO users (id, name, email) VALUES (?, ?, ?)",
        [(1, "ada", "ada@example.com"), (2, "grace", None), (3, "linus", "l@example.com")],
    )
    yield conn
    conn.close()


class TestDataclassRowBuilder:

    def test_builds_from_type(self):
        build = dataclass_row_builder(User)
        assert build((1, "ada", None)) == User(id=1, name="ada")

    def test_builds_from_instance(self):
        build = dataclass_row_builder(User(id=0, name=""))
        assert build((2, "grace", "g@example.com")) == User(2, "grace", "g@example.com")

    def test_rejects_non_dataclass(self):
        with pytest.raises(TypeError):
            dataclass_row_builder(dict)

    def test_column_count_mismatch(self):
        build = dataclass_row_builder(User)
        with pytest.raises(ValueError):
            build((1, "ada"))


class TestExecuteQuery:

    def test_returns_records_in_row_order(self, connection):
        users = execute_query(
            "SELECT id, name, email FROM users ORDER BY id", [], connection, User
        )
        assert users == [
            User(1, "ada", "ada@example.com"),
            User(2, "grace", None),
            User(3, "linus", "l@example.com"),
        ]

    def test_positional_params(self, connection):
        users = execute_query(
            "SELECT id, name, email FROM users WHERE id > ? AND name != ?",
            [1, "linus"],
            connection,
            User(0, ""),
        )
        assert [u.name for u in users] == ["grace"]

    def test_no_rows(self, connection):
        assert execute_query("SELECT id, name, email FROM users WHERE id = ?", [99], connection, User) == []

    def test_none_params(self, connection):
        users = execute_query("SELECT id, name, email FROM users", None, connection, User)
        assert len(users) == 3

    def test_custom_builder(self, connection):
        names = execute_query(
            "SELECT name FROM users ORDER BY id", [], connection, builder=lambda row: row[0].upper()
        )
        assert names == ["ADA", "GRACE", "LINUS"]

    def test_invalid_sql(self, connection):
        with pytest.raises(QueryExecutionError) as exc_info:
            execute_query("SELECT nope FROM missing", [], connection, User)
        assert isinstance(exc_info.value.__cause__, sqlite3.Error)

    def test_row_population_failure(self, connection):
        with pytest.raises(QueryExecutionError, match="row 0"):
            execute_query("SELECT id, name FROM users ORDER BY id", [], connection, User)

    def test_missing_prototype(self, connection):
        with pytest.raises(TypeError):
            execute_query("SELECT id FROM users", [], connection)

    def test_runs_generated_ddl(self):
        conn = sqlite3.connect(":memory:")
        try:
            ddl = compile_dbml(
                "Table users {\n  id: integer [pk]\n  name: text [notNull]\n  email: text [unique]\n}\n",
                strict=True,
            )
            conn.executescript(ddl)
            conn.execute("INSERT INTO users (id, name, email) VALUES (?, ?, ?)", (7, "ken", "k@example.com"))
            users = execute_query("SELECT id, name, email FROM users", [], conn, User)
            assert users == [User(7, "ken", "k@example.com")]
        finally:
            conn.close()


class _FailingCursor:
    """Cursor whose execute and close both raise."""

    def execute(self, query, params):
        raise sqlite3.OperationalError("server went away")

    def fetchall(self):
        return []

    def close(self):
        raise sqlite3.ProgrammingError("cannot close cursor")


class _FailingConnection:

    def cursor(self):
        return _FailingCursor()


class TestCursorCleanup:

    def test_close_failure_keeps_execution_error(self):
        with pytest.raises(QueryExecutionError, match="server went away") as exc_info:
            execute_query("SELECT 1", [], _FailingConnection(), User)
        assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)

    def test_close_failure_logged(self, caplog):
        with caplog.at_level("WARNING", logger="dbml_ddl.ingest.query_executor"):
            with pytest.raises(QueryExecutionError):
                execute_query("SELECT 1", [], _FailingConnection(), User)
        assert "Failed to close cursor" in caplog.text
