"""Schema snapshot shared by autocomplete and the table picker."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

from sqlpad.shared.core.debug_events import emit_debug_event
from sqlpad.shared.core.errors import SchemaUnavailable

SchemaFetcher = Callable[[], Mapping[str, Iterable[str]]]


@dataclass(frozen=True)
class SchemaCache:
    """Table name -> ordered column names. Read-only once built."""

    tables: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Iterable[str]]) -> SchemaCache:
        return cls({str(name): tuple(str(col) for col in cols) for name, cols in data.items()})

    @property
    def table_names(self) -> list[str]:
        return list(self.tables)

    def resolve_table(self, name: str) -> str | None:
        """Return the stored spelling of ``name`` (case-insensitive), if known."""
        if name in self.tables:
            return name
        lowered = name.lower()
        for table in self.tables:
            if table.lower() == lowered:
                return table
        return None

    def columns_for(self, table: str) -> tuple[str, ...]:
        resolved = self.resolve_table(table)
        if resolved is None:
            return ()
        return self.tables[resolved]

    def column_owners(self) -> dict[str, list[str]]:
        """Column name -> tables that define it, each column listed once."""
        owners: dict[str, list[str]] = {}
        for table, columns in self.tables.items():
            for column in columns:
                tables = owners.setdefault(column, [])
                if table not in tables:
                    tables.append(table)
        return owners

    def __bool__(self) -> bool:
        return bool(self.tables)


EMPTY_SCHEMA = SchemaCache()


@dataclass
class SchemaService:
    """Loads the schema once per session on first need.

    A failed load is remembered: later calls return the empty snapshot
    instead of hitting the database on every keystroke.
    """

    fetch: SchemaFetcher
    _cache: SchemaCache | None = None
    _error: str | None = None

    def get(self) -> SchemaCache:
        """Return the schema, loading it if needed.

        Raises:
            SchemaUnavailable: only on the first failing load.
        """
        if self._cache is not None:
            return self._cache
        if self._error is not None:
            return EMPTY_SCHEMA
        try:
            data = self.fetch()
        except SchemaUnavailable as e:
            self._error = str(e) or "unknown error"
            emit_debug_event("schema.load_failed", category="schema", error=self._error)
            raise
        self._cache = SchemaCache.from_mapping(data)
        emit_debug_event("schema.loaded", category="schema", tables=len(self._cache.tables))
        return self._cache
