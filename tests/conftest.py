"""Pytest fixtures for sqlpad tests."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from sqlpad.core.keymap import reset_keymap
from sqlpad.shared.core.debug_events import clear_debug_event_history, configure_debug_events


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Keep the keymap and debug sink from leaking between tests."""
    reset_keymap()
    configure_debug_events(False)
    clear_debug_event_history()
    yield
    reset_keymap()
    configure_debug_events(False)
    clear_debug_event_history()


@pytest.fixture
def schema_data() -> dict[str, list[str]]:
    return {"orders": ["id", "total"], "users": ["id", "name"]}


@pytest.fixture
def history_root(tmp_path: Path) -> Path:
    return tmp_path / "history"


@pytest.fixture(scope="function")
def sqlite_db_path(tmp_path: Path) -> Path:
    """Create a temporary SQLite database file path."""
    return tmp_path / "test_database.db"


@pytest.fixture(scope="function")
def sqlite_db(sqlite_db_path: Path) -> Path:
    """Create a temporary SQLite database with test data."""
    conn = sqlite3.connect(sqlite_db_path)
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL
        )
    """)

    cursor.execute("""
        CREATE TABLE orders (
            id INTEGER PRIMARY KEY,
            user_id INTEGER,
            total REAL
        )
    """)

    cursor.execute("""
        CREATE TABLE notes (
            id INTEGER PRIMARY KEY,
            body BLOB
        )
    """)

    cursor.execute("""
        CREATE VIEW big_orders AS
        SELECT id, total FROM orders WHERE total > 20
    """)

    cursor.executemany(
        "INSERT INTO users (id, name) VALUES (?, ?)",
        [(1, "Alice"), (2, "Bob"), (3, "Charlie")],
    )
    cursor.executemany(
        "INSERT INTO orders (id, user_id, total) VALUES (?, ?, ?)",
        [(1, 1, 9.5), (2, 1, 25.0), (3, 2, None)],
    )
    cursor.execute("INSERT INTO notes (id, body) VALUES (1, ?)", (b"\x00\x01",))

    conn.commit()
    conn.close()
    return sqlite_db_path
