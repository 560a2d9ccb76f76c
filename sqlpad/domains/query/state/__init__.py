"""Query key state exports."""

from .autocomplete_active import AutocompleteActiveState
from .query_focused import QueryFocusedState
from .query_insert import QueryInsertModeState
from .query_normal import QueryNormalModeState

__all__ = [
    "AutocompleteActiveState",
    "QueryFocusedState",
    "QueryInsertModeState",
    "QueryNormalModeState",
]
