"""Schema-aware SQL autocompletion."""

from .engine import (
    CONTEXT_KEYWORDS,
    AutocompleteState,
    ColumnContext,
    ColumnForTable,
    CompletionContext,
    TableContext,
    TokenSpan,
    complete,
    find_token,
)

__all__ = [
    "CONTEXT_KEYWORDS",
    "AutocompleteState",
    "ColumnContext",
    "ColumnForTable",
    "CompletionContext",
    "TableContext",
    "TokenSpan",
    "complete",
    "find_token",
]
