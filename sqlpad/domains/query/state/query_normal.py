"""Query editor normal mode state."""

from __future__ import annotations

from sqlpad.core.input_context import Focus, InputContext
from sqlpad.core.state_base import DisplayBinding, State, resolve_display_key
from sqlpad.core.vim import VimMode


class QueryNormalModeState(State):
    """Query editor in NORMAL mode."""

    help_category = "Query Editor (Normal)"

    def _setup_actions(self) -> None:
        self.allows("enter_insert_mode", label="Insert Mode", help="Enter INSERT mode")
        self.allows("execute_query", label="Execute", help="Execute query")
        self.allows("history_prev", help="Previous query in history")
        self.allows("history_next", help="Next query in history")
        self.allows("new_query", label="New", help="Save query to history and clear")
        self.allows("show_table_picker", label="Tables", help="Pick a table to query")

    def get_display_bindings(self, app: InputContext) -> tuple[list[DisplayBinding], list[DisplayBinding]]:
        left: list[DisplayBinding] = []
        seen: set[str] = set()

        for action, fallback, label in (
            ("enter_insert_mode", "i", "Insert Mode"),
            ("execute_query", "<enter>", "Execute"),
        ):
            left.append(DisplayBinding(key=resolve_display_key(action) or fallback, label=label, action=action))
            seen.add(action)

        prev_key = resolve_display_key("history_prev") or "h"
        next_key = resolve_display_key("history_next") or "l"
        label = "History*" if app.browsing_history else "History"
        left.append(DisplayBinding(key=f"{prev_key}/{next_key}", label=label, action="history_prev"))
        seen.update(["history_prev", "history_next"])

        for action, fallback, label in (
            ("new_query", "n", "New"),
            ("show_table_picker", "t", "Tables"),
        ):
            left.append(DisplayBinding(key=resolve_display_key(action) or fallback, label=label, action=action))
            seen.add(action)

        right: list[DisplayBinding] = []
        if self.parent:
            parent_left, parent_right = self.parent.get_display_bindings(app)
            for binding in parent_left:
                if binding.action not in seen:
                    left.append(binding)
                    seen.add(binding.action)
            right = [binding for binding in parent_right if binding.action not in seen]

        return left, right

    def is_active(self, app: InputContext) -> bool:
        return app.focus == Focus.EDITOR and app.vim_mode == VimMode.NORMAL
