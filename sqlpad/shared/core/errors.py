"""Error taxonomy for sqlpad.

Component failures (schema, query, history) are recovered by the workspace
and turned into status text. Only startup errors are fatal.
"""

from __future__ import annotations

from pathlib import Path


class SqlpadError(Exception):
    """Base class for sqlpad errors."""


class SchemaUnavailable(SqlpadError):
    """The database could not enumerate its tables or columns."""


class QueryError(SqlpadError):
    """A query failed. ``message`` is shown verbatim in the status line."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class HistoryIoError(SqlpadError):
    """Reading or writing a history file failed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidCursorState(SqlpadError):
    """The editor cursor left the buffer's valid range."""
