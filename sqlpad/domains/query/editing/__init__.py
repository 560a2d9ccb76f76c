"""Editor text state for the query pane."""

from .buffer import EditorBuffer

__all__ = ["EditorBuffer"]
