"""Results key state exports."""

from .results_focused import ResultsFocusedState

__all__ = [
    "ResultsFocusedState",
]
