"""Autocomplete popup open over the insert-mode editor."""

from __future__ import annotations

from sqlpad.core.input_context import InputContext
from sqlpad.core.state_base import State


class AutocompleteActiveState(State):
    """Suggestion popup visible; editing keys still reach the buffer."""

    help_category = "Autocomplete"

    def _setup_actions(self) -> None:
        self.allows("autocomplete_accept", label="Accept", help="Insert the selected suggestion")
        self.allows("autocomplete_next", help="Next suggestion")
        self.allows("autocomplete_prev", help="Previous suggestion")
        self.allows("autocomplete_close", label="Close", help="Close suggestions")

    def is_active(self, app: InputContext) -> bool:
        return app.autocomplete_visible
