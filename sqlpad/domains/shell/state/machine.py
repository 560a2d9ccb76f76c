"""Workspace key-state machine.

Maps an ``InputContext`` onto one of the workspace states below and answers
two questions for it: may this action run now, and which bindings belong in
the footer. States inherit actions from their parent::

    root
    ├── main_screen
    │   ├── query_focused
    │   │   ├── query_normal
    │   │   └── query_insert
    │   │       └── autocomplete_active
    │   └── results_focused
    └── table_picker_active
"""

from __future__ import annotations

from sqlpad.core.input_context import InputContext
from sqlpad.core.state_base import ActionResult, DisplayBinding, HelpEntry, State
from sqlpad.domains.explorer.state import TablePickerActiveState
from sqlpad.domains.query.state import (
    AutocompleteActiveState,
    QueryFocusedState,
    QueryInsertModeState,
    QueryNormalModeState,
)
from sqlpad.domains.results.state import ResultsFocusedState
from sqlpad.domains.shell.state.main_screen import MainScreenState
from sqlpad.domains.shell.state.root import RootState

HELP_RULE_WIDTH = 62


class UIStateMachine:
    def __init__(self) -> None:
        self.root = RootState()
        self.main_screen = MainScreenState(parent=self.root)
        self.table_picker_active = TablePickerActiveState(parent=self.root)
        self.query_focused = QueryFocusedState(parent=self.main_screen)
        self.query_normal = QueryNormalModeState(parent=self.query_focused)
        self.query_insert = QueryInsertModeState(parent=self.query_focused)
        self.autocomplete_active = AutocompleteActiveState(parent=self.query_insert)
        self.results_focused = ResultsFocusedState(parent=self.main_screen)

        # Overlays first, then leaves before the parents they refine.
        self._by_priority: tuple[State, ...] = (
            self.table_picker_active,
            self.autocomplete_active,
            self.query_insert,
            self.query_normal,
            self.query_focused,
            self.results_focused,
            self.main_screen,
            self.root,
        )

    def get_active_state(self, app: InputContext) -> State:
        return next((state for state in self._by_priority if state.is_active(app)), self.root)

    def get_active_state_name(self, app: InputContext) -> str:
        return type(self.get_active_state(app)).__name__

    def check_action(self, app: InputContext, action_name: str) -> bool:
        """True only when the active state (or an ancestor) allows the action."""
        return self.get_active_state(app).check_action(app, action_name) is ActionResult.ALLOWED

    def get_display_bindings(self, app: InputContext) -> tuple[list[DisplayBinding], list[DisplayBinding]]:
        return self.get_active_state(app).get_display_bindings(app)

    def help_entries(self) -> list[HelpEntry]:
        """Help entries from every state, general categories first."""
        entries: list[HelpEntry] = []
        seen: set[tuple[str, str]] = set()
        for state in reversed(self._by_priority):
            for entry in state.get_help_entries():
                if (entry.category, entry.key) not in seen:
                    seen.add((entry.category, entry.key))
                    entries.append(entry)
        return entries

    def generate_help_text(self) -> str:
        """Rich-markup help listing keys per category."""
        sections: dict[str, list[str]] = {}
        for entry in self.help_entries():
            sections.setdefault(entry.category, []).append(
                f"    [bold $warning]{entry.key:<14}[/] [dim]-[/] {entry.description}"
            )

        blocks = []
        for category, rows in sections.items():
            header = f"[bold $primary]{category.upper()}[/]\n[dim]{'-' * HELP_RULE_WIDTH}[/]"
            blocks.append("\n".join([header, *rows]))
        return "\n\n".join(blocks)
