"""Query result types and cell formatting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class QueryResult:
    """Rows returned by a statement that produces a result set."""

    columns: list[str]
    rows: list[tuple[str, ...]]
    row_count: int
    truncated: bool = False


@dataclass(frozen=True)
class NonQueryResult:
    """Outcome of a statement without a result set."""

    rows_affected: int


QueryOutcome = Union[QueryResult, NonQueryResult]


def format_cell(value: Any) -> str:
    """Render a sqlite value for display: NULL, numbers, text, ``<BLOB>``."""
    if value is None:
        return "NULL"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "<BLOB>"
    return str(value)


def describe_outcome(outcome: QueryOutcome) -> str:
    """Status line text for a finished query."""
    if isinstance(outcome, QueryResult):
        text = f"{outcome.row_count} rows returned"
        if outcome.truncated:
            text += f" (truncated to {outcome.row_count})"
        return text
    return f"{outcome.rows_affected} rows affected"
