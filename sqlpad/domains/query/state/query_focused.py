"""Query editor focused state."""

from __future__ import annotations

from sqlpad.core.input_context import Focus, InputContext
from sqlpad.core.state_base import State


class QueryFocusedState(State):
    """Query editor has focus (either mode)."""

    help_category = "Query Editor"

    def _setup_actions(self) -> None:
        pass

    def is_active(self, app: InputContext) -> bool:
        return app.focus == Focus.EDITOR
