"""Session wrapper around a single sqlite connection."""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path

from sqlpad.domains.query.app.query_service import NonQueryResult, QueryOutcome, QueryResult, format_cell
from sqlpad.shared.core.errors import QueryError, SchemaUnavailable

_SCHEMA_QUERY = (
    "select name from sqlite_master "
    "where type in ('table', 'view') and name not like 'sqlite_%' "
    "order by name"
)


def _quote_pragma_arg(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


class SqliteSession:
    """Owns the database connection for one workspace.

    Queries run on a worker thread, so the connection is opened with
    ``check_same_thread=False`` and every use goes through ``_lock``.
    ``interrupt`` is the exception: sqlite allows it from any thread while
    a statement is running.
    """

    def __init__(self, connection: sqlite3.Connection, path: Path) -> None:
        self._connection: sqlite3.Connection | None = connection
        self.path = path
        self._lock = threading.Lock()

    @classmethod
    def open(cls, path: str | Path) -> SqliteSession:
        path = Path(path)
        connection = sqlite3.connect(str(path), check_same_thread=False)
        # TEXT values that are not valid UTF-8 still display.
        connection.text_factory = lambda data: data.decode("utf-8", "replace")
        return cls(connection, path)

    def _require_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise QueryError("Not connected")
        return self._connection

    def fetch_schema(self) -> dict[str, list[str]]:
        """Tables and views with their columns in declared order.

        Raises:
            SchemaUnavailable: if the database cannot list its objects.
        """
        try:
            with self._lock:
                connection = self._require_connection()
                names = [row[0] for row in connection.execute(_SCHEMA_QUERY).fetchall()]
                schema: dict[str, list[str]] = {}
                for name in names:
                    rows = connection.execute(f"pragma table_info({_quote_pragma_arg(name)})").fetchall()
                    schema[name] = [row[1] for row in rows]
        except (sqlite3.Error, QueryError) as e:
            raise SchemaUnavailable(str(e)) from e
        return schema

    def run_query(self, text: str, max_rows: int | None = None) -> QueryOutcome:
        """Execute ``text`` and return its rows or its affected-row count.

        Raises:
            QueryError: with the database's message.
        """
        try:
            with self._lock:
                connection = self._require_connection()
                cursor = connection.cursor()
                try:
                    cursor.execute(text)
                    if cursor.description:
                        columns = [col[0] for col in cursor.description]
                        if max_rows is not None:
                            # Fetch one extra row to detect if there are more
                            raw_rows = cursor.fetchmany(max_rows + 1)
                            truncated = len(raw_rows) > max_rows
                            if truncated:
                                raw_rows = raw_rows[:max_rows]
                        else:
                            raw_rows = cursor.fetchall()
                            truncated = False
                        rows = [tuple(format_cell(value) for value in row) for row in raw_rows]
                        return QueryResult(columns=columns, rows=rows, row_count=len(rows), truncated=truncated)
                    rows_affected = max(int(cursor.rowcount), 0)
                    connection.commit()
                    return NonQueryResult(rows_affected=rows_affected)
                finally:
                    cursor.close()
        except (sqlite3.Error, sqlite3.Warning) as e:
            raise QueryError(str(e)) from e

    def interrupt(self) -> None:
        """Abort the statement currently running on the connection, if any."""
        connection = self._connection
        if connection is not None:
            connection.interrupt()

    def close(self) -> None:
        with self._lock:
            if self._connection is None:
                return
            self._connection.close()
            self._connection = None
