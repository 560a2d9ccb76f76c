"""Editing modes for the query editor."""

from __future__ import annotations

from enum import Enum


class VimMode(Enum):
    """Vim-style editing mode."""

    INSERT = "insert"
    NORMAL = "normal"
