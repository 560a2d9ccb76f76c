"""Widgets rendering the workspace snapshot.

None of these take focus: every key reaches the app, which routes it
through the workspace.
"""

from __future__ import annotations

from rich.markup import escape
from rich.text import Text
from textual.widgets import DataTable, Static

from sqlpad.core.state_base import DisplayBinding
from sqlpad.core.vim import VimMode
from sqlpad.domains.shell.domain.workspace_state import AutocompleteView, PickerView, WorkspaceSnapshot

# Rendering caps only; the suggestion and match lists themselves are unbounded.
MAX_VISIBLE_SUGGESTIONS = 8
MAX_VISIBLE_TABLES = 12


def _window(count: int, selected: int, size: int) -> range:
    """Indices of a ``size``-long window that keeps ``selected`` visible."""
    if count <= size:
        return range(count)
    start = max(0, min(selected - size // 2, count - size))
    return range(start, start + size)


def render_editor(snapshot: WorkspaceSnapshot) -> Text:
    text = snapshot.text
    cursor = max(0, min(snapshot.cursor, len(text)))
    cursor_style = "reverse" if snapshot.mode == VimMode.INSERT else "reverse bold"
    rendered = Text()
    rendered.append(text[:cursor])
    under = text[cursor : cursor + 1]
    if not under or under == "\n":
        rendered.append(" ", style=cursor_style)
        rendered.append(under)
    else:
        rendered.append(under, style=cursor_style)
    rendered.append(text[cursor + 1 :])
    return rendered


def render_suggestions(view: AutocompleteView) -> Text:
    rendered = Text()
    rows = _window(len(view.suggestions), view.selected, MAX_VISIBLE_SUGGESTIONS)
    for position, index in enumerate(rows):
        if position:
            rendered.append("\n")
        name = view.suggestions[index]
        style = "reverse" if index == view.selected else ""
        rendered.append(f" {name} ", style=style)
        annotation = view.annotations[index]
        if annotation:
            rendered.append(f" {annotation}", style="dim")
    hidden = len(view.suggestions) - len(rows)
    if hidden > 0:
        rendered.append(f"\n ... {hidden} more", style="dim")
    return rendered


def render_picker(view: PickerView) -> Text:
    rendered = Text()
    rendered.append("Table: ", style="bold")
    rendered.append(view.filter_text)
    rendered.append(" ", style="reverse")
    rendered.append(f"  {len(view.matches)}/{view.total}", style="dim")
    if not view.matches:
        rendered.append("\n (no matching tables)", style="dim")
        return rendered
    for index in _window(len(view.matches), view.selected, MAX_VISIBLE_TABLES):
        rendered.append("\n")
        marker = "> " if index == view.selected else "  "
        rendered.append(marker + view.matches[index], style="reverse" if index == view.selected else "")
    return rendered


def render_bindings(left: list[DisplayBinding], right: list[DisplayBinding]) -> str:
    def fmt(binding: DisplayBinding) -> str:
        return f"[bold]{escape(binding.key)}[/] [dim]{escape(binding.label)}[/]"

    left_str = "  ".join(fmt(binding) for binding in left)
    right_str = "  ".join(fmt(binding) for binding in right)
    if left_str and right_str:
        return f"{left_str}    {right_str}"
    return left_str or right_str


class EditorView(Static):
    DEFAULT_CSS = """
    EditorView {
        height: 1fr;
        border: round $border;
        padding: 0 1;
    }

    EditorView.vim-insert {
        border: round $success;
    }

    EditorView.vim-normal {
        border: round $warning;
    }
    """

    can_focus = False

    def show(self, snapshot: WorkspaceSnapshot) -> None:
        self.remove_class("vim-insert", "vim-normal")
        self.add_class("vim-insert" if snapshot.mode == VimMode.INSERT else "vim-normal")
        title = f"Query [{snapshot.mode.value.upper()}]"
        if snapshot.history_position is not None:
            index, total = snapshot.history_position
            title += f" history {index}/{total}"
        self.border_title = escape(title)
        self.update(render_editor(snapshot))


class AutocompleteDropdown(Static):
    DEFAULT_CSS = """
    AutocompleteDropdown {
        display: none;
        height: auto;
        max-height: 10;
        border: round $primary;
        background: $surface;
    }

    AutocompleteDropdown.visible {
        display: block;
    }
    """

    can_focus = False

    def show(self, view: AutocompleteView | None) -> None:
        if view is None:
            self.remove_class("visible")
            self.update("")
            return
        self.add_class("visible")
        self.update(render_suggestions(view))


class TablePickerOverlay(Static):
    DEFAULT_CSS = """
    TablePickerOverlay {
        display: none;
        height: auto;
        max-height: 16;
        border: round $accent;
        background: $surface;
    }

    TablePickerOverlay.visible {
        display: block;
    }
    """

    can_focus = False

    def show(self, view: PickerView | None) -> None:
        if view is None:
            self.remove_class("visible")
            self.update("")
            return
        self.add_class("visible")
        self.update(render_picker(view))


class ResultsTable(DataTable):
    """Results grid. Cursor moves come from the app's key routing."""

    can_focus = False


class ContextFooter(Static):
    DEFAULT_CSS = """
    ContextFooter {
        height: 1;
        background: $panel;
    }
    """

    def show(self, left: list[DisplayBinding], right: list[DisplayBinding]) -> None:
        self.update(render_bindings(left, right))
