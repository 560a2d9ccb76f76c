"""Results table focused state."""

from __future__ import annotations

from sqlpad.core.input_context import Focus, InputContext
from sqlpad.core.state_base import State


class ResultsFocusedState(State):
    """Results table has focus."""

    help_category = "Results"

    def _setup_actions(self) -> None:
        def has_results(app: InputContext) -> bool:
            return app.has_results

        self.allows("results_cursor_down", has_results, help="Next row")  # vim j
        self.allows("results_cursor_up", has_results, help="Previous row")  # vim k

    def is_active(self, app: InputContext) -> bool:
        return app.focus == Focus.RESULTS
