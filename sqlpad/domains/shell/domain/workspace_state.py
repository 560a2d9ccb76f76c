"""Workspace aggregate: editor buffer, mode, focus, overlay and history cursor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from sqlpad.core.input_context import Focus, OverlayKind
from sqlpad.core.vim import VimMode
from sqlpad.domains.explorer.app.table_picker import PickerState
from sqlpad.domains.query.completion import AutocompleteState
from sqlpad.domains.query.editing import EditorBuffer

Overlay = Union[AutocompleteState, PickerState, None]


@dataclass(frozen=True)
class RunQuery:
    """Signal: execute ``text`` against the database."""

    text: str


@dataclass(frozen=True)
class Quit:
    """Signal: the workspace is done; history has been flushed."""


Signal = Union[RunQuery, Quit]


@dataclass
class WorkspaceState:
    buffer: EditorBuffer = field(default_factory=EditorBuffer)
    mode: VimMode = VimMode.INSERT
    focus: Focus = Focus.EDITOR
    overlay: Overlay = None
    # None while editing live; otherwise an index into history_entries.
    history_index: int | None = None
    history_entries: list[str] = field(default_factory=list)
    draft: str | None = None
    status: str = "Ready"

    @property
    def overlay_kind(self) -> OverlayKind:
        if isinstance(self.overlay, AutocompleteState):
            return OverlayKind.AUTOCOMPLETE
        if isinstance(self.overlay, PickerState):
            return OverlayKind.TABLE_PICKER
        return OverlayKind.NONE

    @property
    def autocomplete(self) -> AutocompleteState | None:
        return self.overlay if isinstance(self.overlay, AutocompleteState) else None

    @property
    def picker(self) -> PickerState | None:
        return self.overlay if isinstance(self.overlay, PickerState) else None


@dataclass(frozen=True)
class AutocompleteView:
    suggestions: tuple[str, ...]
    annotations: tuple[str, ...]
    selected: int
    prefix: str


@dataclass(frozen=True)
class PickerView:
    filter_text: str
    matches: tuple[str, ...]
    selected: int
    total: int


@dataclass(frozen=True)
class WorkspaceSnapshot:
    """Read-only copy of the workspace handed to the renderer each frame."""

    text: str
    cursor: int
    line: int
    column: int
    mode: VimMode
    focus: Focus
    overlay: OverlayKind
    autocomplete: AutocompleteView | None
    picker: PickerView | None
    status: str
    history_position: tuple[int, int] | None

    @classmethod
    def capture(cls, state: WorkspaceState) -> WorkspaceSnapshot:
        line, column = state.buffer.location
        autocomplete = None
        if state.autocomplete is not None:
            ac = state.autocomplete
            autocomplete = AutocompleteView(
                suggestions=tuple(ac.suggestions),
                annotations=tuple(ac.annotations.get(name, "") for name in ac.suggestions),
                selected=ac.selected,
                prefix=ac.prefix,
            )
        picker = None
        if state.picker is not None:
            picker = PickerView(
                filter_text=state.picker.filter_text,
                matches=tuple(state.picker.matches),
                selected=state.picker.selected,
                total=len(state.picker.tables),
            )
        position = None
        if state.history_index is not None:
            position = (state.history_index + 1, len(state.history_entries))
        return cls(
            text=state.buffer.text,
            cursor=state.buffer.cursor,
            line=line,
            column=column,
            mode=state.mode,
            focus=state.focus,
            overlay=state.overlay_kind,
            autocomplete=autocomplete,
            picker=picker,
            status=state.status,
            history_position=position,
        )
