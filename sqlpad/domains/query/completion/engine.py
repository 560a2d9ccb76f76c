"""Context classification and suggestion ranking for the query editor.

The engine is stateless: every call rescans the text around the cursor and
rebuilds the suggestion list from the schema snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from sqlpad.domains.explorer.app.schema_service import SchemaCache

TABLE_KEYWORDS = frozenset({"from", "join", "into", "update"})
COLUMN_KEYWORDS = frozenset({"select", "on"})
CONTEXT_KEYWORDS = TABLE_KEYWORDS | COLUMN_KEYWORDS

# How far back (in characters) to look for a context keyword.
SCAN_WINDOW = 256


@dataclass(frozen=True)
class TableContext:
    """Cursor follows FROM / JOIN / INTO / UPDATE."""


@dataclass(frozen=True)
class ColumnContext:
    """Cursor follows SELECT / ON."""


@dataclass(frozen=True)
class ColumnForTable:
    """Cursor is in a ``table.column`` token."""

    table: str


CompletionContext = Union[TableContext, ColumnContext, ColumnForTable]


@dataclass(frozen=True)
class TokenSpan:
    """The in-progress prefix before the cursor.

    ``start``/``end`` bound the text a suggestion replaces. For ``orders.t``
    that is only ``t``; ``qualifier`` holds ``orders``.
    """

    start: int
    end: int
    text: str
    qualifier: str | None = None
    token_start: int = 0


@dataclass
class AutocompleteState:
    context: CompletionContext
    prefix: str
    prefix_start: int
    prefix_end: int
    suggestions: list[str]
    annotations: dict[str, str] = field(default_factory=dict)
    selected: int = 0

    @property
    def selected_item(self) -> str | None:
        if not self.suggestions:
            return None
        return self.suggestions[self.selected]

    def move_selection(self, delta: int) -> None:
        """Move the highlight, clamped to the list (no wraparound)."""
        if not self.suggestions:
            self.selected = 0
            return
        self.selected = max(0, min(self.selected + delta, len(self.suggestions) - 1))


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def find_token(text: str, cursor: int) -> TokenSpan:
    """Scan backward from ``cursor`` over identifier characters and dots."""
    cursor = max(0, min(cursor, len(text)))
    start = cursor
    while start > 0 and (_is_ident_char(text[start - 1]) or text[start - 1] == "."):
        start -= 1
    token = text[start:cursor]
    if "." in token:
        qualifier, _, prefix = token.rpartition(".")
        # schema.table.col -> look the table up by its last segment
        qualifier = qualifier.rsplit(".", 1)[-1]
        return TokenSpan(
            start=cursor - len(prefix),
            end=cursor,
            text=prefix,
            qualifier=qualifier,
            token_start=start,
        )
    return TokenSpan(start=start, end=cursor, text=token, token_start=start)


def _word_end(text: str, cursor: int) -> int:
    """End of the identifier the cursor sits in (``cursor`` itself at a word end)."""
    end = cursor
    while end < len(text) and _is_ident_char(text[end]):
        end += 1
    return end


def _skip_space_back(text: str, pos: int, floor: int) -> int:
    while pos > floor and text[pos - 1].isspace():
        pos -= 1
    return pos


def find_context_keyword(text: str, token_start: int) -> str | None:
    """Find the keyword governing the token that starts at ``token_start``.

    Whitespace is skipped, and so are completed list items (``a, b, |``), so
    ``select id, na`` still resolves to ``select``. Any other word ends the
    scan without a match.
    """
    floor = max(0, token_start - SCAN_WINDOW)
    pos = token_start
    while True:
        pos = _skip_space_back(text, pos, floor)
        if pos <= floor:
            return None
        if text[pos - 1] == ",":
            pos = _skip_space_back(text, pos - 1, floor)
            while pos > floor and not text[pos - 1].isspace() and text[pos - 1] != ",":
                pos -= 1
            continue
        end = pos
        while pos > floor and _is_ident_char(text[pos - 1]):
            pos -= 1
        if pos == floor and floor > 0 and _is_ident_char(text[floor - 1]):
            # Window cut through a word.
            return None
        word = text[pos:end].lower()
        if word in CONTEXT_KEYWORDS:
            return word
        return None


def classify(text: str, token: TokenSpan) -> CompletionContext | None:
    if token.qualifier is not None:
        return ColumnForTable(token.qualifier)
    keyword = find_context_keyword(text, token.token_start)
    if keyword in TABLE_KEYWORDS:
        return TableContext()
    if keyword in COLUMN_KEYWORDS:
        return ColumnContext()
    return None


def _candidates(context: CompletionContext, schema: SchemaCache) -> dict[str, str]:
    """Candidate name -> display annotation."""
    if isinstance(context, TableContext):
        return {name: "table" for name in schema.table_names}
    if isinstance(context, ColumnContext):
        return {name: ", ".join(owners) for name, owners in schema.column_owners().items()}
    table = schema.resolve_table(context.table)
    if table is None:
        return {}
    return {column: table for column in schema.columns_for(table)}


def rank(candidates: list[str], prefix: str) -> list[str]:
    """Keep names starting with ``prefix`` (case-insensitive), sorted by name."""
    lowered = prefix.lower()
    matches = [name for name in candidates if name.lower().startswith(lowered)]
    return sorted(matches, key=lambda name: (name.lower(), name))


def complete(text: str, cursor: int, schema: SchemaCache) -> AutocompleteState | None:
    """Build a fresh suggestion list, or None when nothing applies."""
    token = find_token(text, cursor)
    context = classify(text, token)
    if context is None:
        return None
    candidates = _candidates(context, schema)
    suggestions = rank(list(candidates), token.text)
    if not suggestions:
        return None
    return AutocompleteState(
        context=context,
        prefix=token.text,
        prefix_start=token.start,
        prefix_end=_word_end(text, token.end),
        suggestions=suggestions,
        annotations={name: candidates[name] for name in suggestions},
    )

