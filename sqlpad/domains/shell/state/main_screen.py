"""Main screen state definitions."""

from __future__ import annotations

from sqlpad.core.input_context import InputContext
from sqlpad.core.state_base import State
from sqlpad.core.vim import VimMode


def _in_normal_mode(app: InputContext) -> bool:
    return app.vim_mode == VimMode.NORMAL


class MainScreenState(State):
    """Base state for the workspace with no overlay open."""

    help_category = "Navigation"

    def _setup_actions(self) -> None:
        self.allows("toggle_focus", _in_normal_mode, label="Switch pane", help="Toggle editor/results focus")
        self.allows("quit_workspace", _in_normal_mode, help="Save query to history and quit")
        self.allows("show_help", _in_normal_mode, label="Help", right=True, help="Show this keybinding reference")

    def is_active(self, app: InputContext) -> bool:
        return not app.table_picker_visible
