"""Owned editor text plus a cursor offset.

The cursor is an index into the ``str`` (code points), so slicing at the
cursor can never split a character. Every mutator clamps instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlpad.shared.core.errors import InvalidCursorState


@dataclass
class EditorBuffer:
    text: str = ""
    cursor: int = 0

    def __post_init__(self) -> None:
        self.clamp()

    def clamp(self) -> None:
        self.cursor = max(0, min(self.cursor, len(self.text)))

    def validate(self) -> None:
        """Raise if the cursor is out of range (used by tests and assertions)."""
        if not 0 <= self.cursor <= len(self.text):
            raise InvalidCursorState(f"cursor {self.cursor} outside [0, {len(self.text)}]")

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()

    @property
    def location(self) -> tuple[int, int]:
        """Return the cursor as ``(line, column)``."""
        before = self.text[: self.cursor]
        line = before.count("\n")
        column = len(before) - (before.rfind("\n") + 1)
        return line, column

    def offset_for(self, line: int, column: int) -> int:
        """Convert ``(line, column)`` to an offset, clamping both parts."""
        lines = self.text.split("\n")
        line = max(0, min(line, len(lines) - 1))
        column = max(0, min(column, len(lines[line])))
        return sum(len(item) + 1 for item in lines[:line]) + column

    def set_text(self, text: str) -> None:
        self.text = text
        self.cursor = len(text)

    def clear(self) -> None:
        self.set_text("")

    def insert(self, value: str) -> None:
        self.clamp()
        self.text = self.text[: self.cursor] + value + self.text[self.cursor :]
        self.cursor += len(value)

    def replace_span(self, start: int, end: int, value: str) -> None:
        """Replace ``text[start:end]`` and leave the cursor after ``value``."""
        start = max(0, min(start, len(self.text)))
        end = max(start, min(end, len(self.text)))
        self.text = self.text[:start] + value + self.text[end:]
        self.cursor = start + len(value)

    def delete_left(self) -> None:
        self.clamp()
        if self.cursor == 0:
            return
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1

    def delete_right(self) -> None:
        self.clamp()
        if self.cursor >= len(self.text):
            return
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]

    def move_left(self) -> None:
        self.cursor = max(0, self.cursor - 1)
        self.clamp()

    def move_right(self) -> None:
        self.cursor = min(len(self.text), self.cursor + 1)
        self.clamp()

    def move_up(self) -> None:
        line, column = self.location
        if line == 0:
            self.cursor = 0
            return
        self.cursor = self.offset_for(line - 1, column)

    def move_down(self) -> None:
        line, column = self.location
        if line >= self.text.count("\n"):
            self.cursor = len(self.text)
            return
        self.cursor = self.offset_for(line + 1, column)

    def move_line_start(self) -> None:
        line, _ = self.location
        self.cursor = self.offset_for(line, 0)

    def move_line_end(self) -> None:
        line, _ = self.location
        self.cursor = self.offset_for(line, len(self.text))
