"""Explorer key state exports."""

from .table_picker_active import TablePickerActiveState

__all__ = [
    "TablePickerActiveState",
]
