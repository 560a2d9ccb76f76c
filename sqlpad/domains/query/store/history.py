"""Per-database query history files.

One file per database identity under the history root. The file holds the
queries oldest-first, separated by a single NUL byte, nothing else.
"""

from __future__ import annotations

import hashlib
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from sqlpad.shared.core.errors import HistoryIoError

SEPARATOR = "\0"
HISTORY_SUFFIX = ".history"

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class HistoryIdentity:
    """Stable key for a database file, derived from its canonical path."""

    canonical_path: Path
    key: str

    @property
    def file_name(self) -> str:
        return f"{self.key}{HISTORY_SUFFIX}"


def canonicalize(database_path: str | os.PathLike[str]) -> Path:
    return Path(database_path).expanduser().resolve()


def sanitize_name(name: str) -> str:
    cleaned = _UNSAFE_NAME_CHARS.sub("_", name).strip("._")
    return cleaned or "database"


def history_identity(database_path: str | os.PathLike[str]) -> HistoryIdentity:
    """Derive the identity from the resolved absolute path.

    The key combines the sanitized file name (readable) with a hash of the
    full canonical path, so same-named databases in different directories
    never share a file.
    """
    canonical = canonicalize(database_path)
    digest = hashlib.sha256(str(canonical).encode("utf-8", "surrogateescape")).hexdigest()[:16]
    return HistoryIdentity(canonical_path=canonical, key=f"{sanitize_name(canonical.name)}-{digest}")


def normalize_query(query: str) -> str:
    return query.replace(SEPARATOR, "").strip()


class HistoryStoreProtocol(Protocol):
    def load_all(self, identity: HistoryIdentity) -> list[str]:
        ...

    def load_latest(self, identity: HistoryIdentity) -> str | None:
        ...

    def append(self, identity: HistoryIdentity, query: str) -> bool:
        ...


class FileHistoryStore:
    """History persisted as NUL-separated files under ``root``."""

    is_persistent: bool = True

    def __init__(self, root: Path) -> None:
        self.root = root

    def path_for(self, identity: HistoryIdentity) -> Path:
        return self.root / identity.file_name

    def _read_entries(self, path: Path) -> list[str]:
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as e:
            raise HistoryIoError(path, e.strerror or str(e)) from e
        if not raw:
            return []
        text = raw.decode("utf-8", errors="replace")
        return [entry for entry in text.split(SEPARATOR) if entry]

    def load_all(self, identity: HistoryIdentity) -> list[str]:
        """Return entries oldest to newest."""
        return self._read_entries(self.path_for(identity))

    def load_latest(self, identity: HistoryIdentity) -> str | None:
        entries = self.load_all(identity)
        return entries[-1] if entries else None

    def append(self, identity: HistoryIdentity, query: str) -> bool:
        """Append ``query`` unless it is empty or equal to the newest entry.

        The write is flushed and fsynced before returning.

        Returns:
            True if an entry was written.
        """
        query = normalize_query(query)
        if not query:
            return False
        path = self.path_for(identity)
        entries = self._read_entries(path)
        if entries and entries[-1] == query:
            return False
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            has_content = path.exists() and path.stat().st_size > 0
            payload = SEPARATOR + query if has_content else query
            with path.open("ab") as handle:
                handle.write(payload.encode("utf-8"))
                handle.flush()
                os.fsync(handle.fileno())
        except OSError as e:
            raise HistoryIoError(path, e.strerror or str(e)) from e
        return True
