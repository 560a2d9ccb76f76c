"""In-memory history store for tests and for sessions whose history files fail."""

from __future__ import annotations

from collections.abc import Iterable

from sqlpad.domains.query.store.history import HistoryIdentity, normalize_query


class InMemoryHistoryStore:
    """In-memory history store."""

    is_persistent: bool = False

    def __init__(self, entries: dict[str, list[str]] | None = None) -> None:
        self._entries: dict[str, list[str]] = {key: list(items) for key, items in (entries or {}).items()}

    @classmethod
    def seeded(cls, identity: HistoryIdentity, entries: Iterable[str]) -> InMemoryHistoryStore:
        return cls({identity.key: list(entries)})

    @property
    def entries(self) -> dict[str, list[str]]:
        return self._entries

    def load_all(self, identity: HistoryIdentity) -> list[str]:
        return list(self._entries.get(identity.key, []))

    def load_latest(self, identity: HistoryIdentity) -> str | None:
        items = self._entries.get(identity.key)
        return items[-1] if items else None

    def append(self, identity: HistoryIdentity, query: str) -> bool:
        query_stripped = normalize_query(query)
        if not query_stripped:
            return False
        items = self._entries.setdefault(identity.key, [])
        if items and items[-1] == query_stripped:
            return False
        items.append(query_stripped)
        return True
