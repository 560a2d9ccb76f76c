"""Table picker overlay state."""

from __future__ import annotations

from sqlpad.core.input_context import InputContext
from sqlpad.core.state_base import State


class TablePickerActiveState(State):
    """Table picker open over the normal-mode editor.

    Typed characters go to the filter, so pane and quit keys are off.
    """

    help_category = "Table Picker"

    def _setup_actions(self) -> None:
        self.allows("picker_accept", label="Run", help="Query the selected table")
        self.allows("picker_close", label="Close", help="Close the picker")
        self.allows("picker_next", help="Next table")
        self.allows("picker_prev", help="Previous table")
        self.allows("picker_type", help="Filter tables")
        self.allows("picker_backspace", help="Shorten the filter")
        self.forbids("toggle_focus", "quit_workspace")

    def is_active(self, app: InputContext) -> bool:
        return app.table_picker_visible
