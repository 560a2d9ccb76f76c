"""Helpers for driving a Workspace with key events in tests."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from sqlpad.domains.explorer.app.schema_service import SchemaService
from sqlpad.domains.query.store import HistoryIdentity, InMemoryHistoryStore, history_identity
from sqlpad.domains.shell.app.workspace import Workspace
from sqlpad.shared.core.errors import HistoryIoError

_KEY_NAMES = {
    " ": "space",
    ".": "full_stop",
    ",": "comma",
    ";": "semicolon",
    "*": "asterisk",
    "=": "equals_sign",
    "(": "left_parenthesis",
    ")": "right_parenthesis",
}

DEFAULT_IDENTITY = history_identity(Path("/tmp/sqlpad-tests/app.db"))


def build_workspace(
    schema: Mapping[str, Sequence[str]] | None = None,
    *,
    history=None,
    identity: HistoryIdentity = DEFAULT_IDENTITY,
    fetch=None,
) -> Workspace:
    data = dict(schema or {})
    return Workspace(
        identity=identity,
        history=history if history is not None else InMemoryHistoryStore(),
        schema=SchemaService(fetch or (lambda: data)),
    )


def type_text(workspace: Workspace, text: str) -> None:
    """Type printable characters one key event at a time."""
    for char in text:
        if char == "\n":
            workspace.handle_key("enter")
            continue
        workspace.handle_key(_KEY_NAMES.get(char, char), char)


def press(workspace: Workspace, *keys: str) -> list:
    """Press named keys; single characters also carry themselves as the character."""
    signals = []
    for key in keys:
        character = key if len(key) == 1 else None
        signals.append(workspace.handle_key(key, character))
    return signals


class FailingHistoryStore:
    """History store whose every operation fails like an unwritable disk."""

    is_persistent = True

    def __init__(self, reason: str = "Permission denied") -> None:
        self.reason = reason
        self.calls = 0

    def _fail(self):
        self.calls += 1
        raise HistoryIoError(Path("/nowhere/app.history"), self.reason)

    def load_all(self, identity):
        self._fail()

    def load_latest(self, identity):
        self._fail()

    def append(self, identity, query):
        self._fail()
