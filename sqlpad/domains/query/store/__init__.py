"""Query history stores."""

from .history import (
    FileHistoryStore,
    HistoryIdentity,
    HistoryStoreProtocol,
    history_identity,
)
from .memory import InMemoryHistoryStore

__all__ = [
    "FileHistoryStore",
    "HistoryIdentity",
    "HistoryStoreProtocol",
    "InMemoryHistoryStore",
    "history_identity",
]
