"""Query editor insert mode state."""

from __future__ import annotations

from sqlpad.core.input_context import Focus, InputContext
from sqlpad.core.state_base import State
from sqlpad.core.vim import VimMode


class QueryInsertModeState(State):
    """Query editor in INSERT mode: typing edits the buffer."""

    help_category = "Query Editor (Insert)"

    def _setup_actions(self) -> None:
        self.allows("exit_insert_mode", label="Normal Mode", help="Exit to NORMAL mode")
        self.allows("execute_query_insert", label="Execute", help="Execute query (stay in INSERT)")
        self.allows("insert_character")
        self.allows("insert_newline", help="New line")
        self.allows("delete_left", help="Delete before cursor")
        self.allows("delete_right", help="Delete at cursor")
        self.allows("cursor_left")
        self.allows("cursor_right")
        self.allows("cursor_up")
        self.allows("cursor_down")
        self.allows("cursor_line_start", help="Move to line start")
        self.allows("cursor_line_end", help="Move to line end")
        self.forbids("toggle_focus", "quit_workspace")

    def is_active(self, app: InputContext) -> bool:
        return app.focus == Focus.EDITOR and app.vim_mode == VimMode.INSERT
