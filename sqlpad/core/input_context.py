"""UI-agnostic input context used for key state evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sqlpad.core.vim import VimMode


class Focus(str, Enum):
    """Pane receiving non-mode-specific input."""

    EDITOR = "editor"
    RESULTS = "results"


class OverlayKind(str, Enum):
    NONE = "none"
    AUTOCOMPLETE = "autocomplete"
    TABLE_PICKER = "table_picker"


@dataclass(frozen=True)
class InputContext:
    """Snapshot of workspace input state for key routing/state evaluation."""

    focus: Focus
    vim_mode: VimMode
    overlay: OverlayKind = OverlayKind.NONE
    query_executing: bool = False
    has_results: bool = False
    browsing_history: bool = False

    @property
    def autocomplete_visible(self) -> bool:
        return self.overlay is OverlayKind.AUTOCOMPLETE

    @property
    def table_picker_visible(self) -> bool:
        return self.overlay is OverlayKind.TABLE_PICKER
