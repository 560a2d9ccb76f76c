"""Filterable table list overlay and SELECT synthesis."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from sqlpad.domains.explorer.app.schema_service import SchemaCache

ROW_LIMIT = 100

_PLAIN_IDENTIFIER = re.compile(r"[^\W\d]\w*")

# Words sqlite reserves; a column named "order" must be quoted to be selected.
SQLITE_KEYWORDS = frozenset(
    """
    ABORT ACTION ADD AFTER ALL ALTER ALWAYS ANALYZE AND AS ASC ATTACH AUTOINCREMENT
    BEFORE BEGIN BETWEEN BY CASCADE CASE CAST CHECK COLLATE COLUMN COMMIT CONFLICT
    CONSTRAINT CREATE CROSS CURRENT CURRENT_DATE CURRENT_TIME CURRENT_TIMESTAMP
    DATABASE DEFAULT DEFERRABLE DEFERRED DELETE DESC DETACH DISTINCT DO DROP EACH
    ELSE END ESCAPE EXCEPT EXCLUDE EXCLUSIVE EXISTS EXPLAIN FAIL FILTER FIRST
    FOLLOWING FOR FOREIGN FROM FULL GENERATED GLOB GROUP GROUPS HAVING IF IGNORE
    IMMEDIATE IN INDEX INDEXED INITIALLY INNER INSERT INSTEAD INTERSECT INTO IS
    ISNULL JOIN KEY LAST LEFT LIKE LIMIT MATCH MATERIALIZED NATURAL NO NOT NOTHING
    NOTNULL NULL NULLS OF OFFSET ON OR ORDER OTHERS OUTER OVER PARTITION PLAN
    PRAGMA PRECEDING PRIMARY QUERY RAISE RANGE RECURSIVE REFERENCES REGEXP REINDEX
    RELEASE RENAME REPLACE RESTRICT RETURNING RIGHT ROLLBACK ROW ROWS SAVEPOINT
    SELECT SET TABLE TEMP TEMPORARY THEN TIES TO TRANSACTION TRIGGER UNBOUNDED
    UNION UNIQUE UPDATE USING VACUUM VALUES VIEW VIRTUAL WHEN WHERE WINDOW WITH
    WITHOUT
    """.split()
)


def filter_tables(tables: list[str], filter_text: str) -> list[str]:
    """Keep tables containing ``filter_text`` anywhere (case-insensitive), in stored order."""
    needle = filter_text.lower()
    return [name for name in tables if needle in name.lower()]


def quote_identifier(name: str) -> str:
    """Bare when sqlite would read ``name`` as a plain identifier, double-quoted otherwise."""
    if _PLAIN_IDENTIFIER.fullmatch(name) and name.upper() not in SQLITE_KEYWORDS:
        return name
    return '"' + name.replace('"', '""') + '"'


def build_select_query(table: str, columns: list[str] | tuple[str, ...]) -> str:
    """``select <cols> from <table> limit 100;`` with ``*`` when columns are unknown."""
    column_list = ", ".join(quote_identifier(col) for col in columns) if columns else "*"
    return f"select {column_list} from {quote_identifier(table)} limit {ROW_LIMIT};"


@dataclass
class PickerState:
    tables: list[str]
    filter_text: str = ""
    matches: list[str] = field(default_factory=list)
    selected: int = 0

    def __post_init__(self) -> None:
        self.refilter()

    @classmethod
    def from_schema(cls, schema: SchemaCache) -> PickerState:
        return cls(tables=schema.table_names)

    @property
    def selected_table(self) -> str | None:
        if not self.matches:
            return None
        return self.matches[self.selected]

    def refilter(self) -> None:
        self.matches = filter_tables(self.tables, self.filter_text)
        self.selected = 0

    def type_character(self, char: str) -> None:
        self.filter_text += char
        self.refilter()

    def backspace(self) -> None:
        if not self.filter_text:
            return
        self.filter_text = self.filter_text[:-1]
        self.refilter()

    def move_selection(self, delta: int) -> None:
        if not self.matches:
            self.selected = 0
            return
        self.selected = max(0, min(self.selected + delta, len(self.matches) - 1))
