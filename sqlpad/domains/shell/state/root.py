"""Root state: actions available everywhere."""

from __future__ import annotations

from sqlpad.core.input_context import InputContext
from sqlpad.core.state_base import State


class RootState(State):
    """Fallback state at the top of the hierarchy."""

    help_category = "Global"

    def _setup_actions(self) -> None:
        self.allows("quit", label="Quit", right=True, help="Quit (saves the query to history)")

    def is_active(self, app: InputContext) -> bool:
        return True
