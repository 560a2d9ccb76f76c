"""Tests for the sqlite session."""

from __future__ import annotations

import sqlite3

import pytest

from sqlpad.domains.connections.app.session import SqliteSession
from sqlpad.domains.query.app.query_service import NonQueryResult, QueryResult, describe_outcome, format_cell
from sqlpad.shared.core.errors import QueryError, SchemaUnavailable


@pytest.fixture
def session(sqlite_db):
    session = SqliteSession.open(sqlite_db)
    yield session
    session.close()


class TestFetchSchema:
    def test_tables_and_views_with_columns(self, session):
        schema = session.fetch_schema()
        assert list(schema) == ["big_orders", "notes", "orders", "users"]
        assert schema["orders"] == ["id", "user_id", "total"]
        assert schema["big_orders"] == ["id", "total"]

    def test_not_a_database(self, tmp_path):
        path = tmp_path / "garbage.db"
        path.write_bytes(b"this is not a sqlite file" * 100)
        session = SqliteSession.open(path)
        try:
            with pytest.raises(SchemaUnavailable):
                session.fetch_schema()
        finally:
            session.close()

    def test_closed_session(self, session):
        session.close()
        with pytest.raises(SchemaUnavailable):
            session.fetch_schema()


class TestRunQuery:
    def test_select_formats_cells(self, session):
        result = session.run_query("select id, total from orders order by id;")
        assert isinstance(result, QueryResult)
        assert result.columns == ["id", "total"]
        assert result.rows == [("1", "9.5"), ("2", "25.0"), ("3", "NULL")]
        assert result.row_count == 3
        assert result.truncated is False

    def test_blob_cells(self, session):
        result = session.run_query("select body from notes")
        assert isinstance(result, QueryResult)
        assert result.rows == [("<BLOB>",)]

    def test_max_rows_truncates(self, session):
        result = session.run_query("select * from users", max_rows=2)
        assert isinstance(result, QueryResult)
        assert result.row_count == 2
        assert result.truncated is True

    def test_non_query_reports_rows_affected(self, session):
        result = session.run_query("update users set name = upper(name) where id < 3")
        assert result == NonQueryResult(rows_affected=2)
        check = session.run_query("select name from users where id = 1")
        assert check.rows == [("ALICE",)]

    def test_error_carries_database_message(self, session):
        with pytest.raises(QueryError) as exc_info:
            session.run_query("select * from nope")
        assert "no such table: nope" in exc_info.value.message

    def test_closed_session(self, session):
        session.close()
        with pytest.raises(QueryError):
            session.run_query("select 1")

    def test_multiple_statements_become_query_error(self, session):
        with pytest.raises(QueryError):
            session.run_query("select 1; select 2")

    def test_driver_warning_becomes_query_error(self, session):
        class WarningCursor:
            def execute(self, text):
                raise sqlite3.Warning("You can only execute one statement at a time.")

            def close(self):
                pass

        class WarningConnection:
            def cursor(self):
                return WarningCursor()

            def close(self):
                pass

        session._connection = WarningConnection()
        with pytest.raises(QueryError) as exc_info:
            session.run_query("select 1; select 2")
        assert "one statement at a time" in exc_info.value.message

    def test_invalid_utf8_text_is_replaced(self, session):
        session.run_query("create table raw (t text)")
        session.run_query("insert into raw values (cast(x'41ff42' as text))")
        result = session.run_query("select t from raw")
        assert result.rows == [("A\ufffdB",)]

    def test_interrupt_without_running_query_is_harmless(self, session):
        session.interrupt()
        result = session.run_query("select 1")
        assert result.rows == [("1",)]


class TestFormatting:
    def test_format_cell(self):
        assert format_cell(None) == "NULL"
        assert format_cell(b"\x00") == "<BLOB>"
        assert format_cell(3) == "3"
        assert format_cell(2.5) == "2.5"
        assert format_cell("text") == "text"

    def test_describe_outcome(self):
        assert describe_outcome(QueryResult(["a"], [("1",)], 1)) == "1 rows returned"
        assert describe_outcome(QueryResult(["a"], [("1",)], 1, truncated=True)) == "1 rows returned (truncated to 1)"
        assert describe_outcome(NonQueryResult(4)) == "4 rows affected"
