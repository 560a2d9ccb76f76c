"""Shell key state exports."""

from .machine import UIStateMachine
from .main_screen import MainScreenState
from .root import RootState

__all__ = [
    "MainScreenState",
    "RootState",
    "UIStateMachine",
]
