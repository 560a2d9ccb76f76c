"""Modal screens pushed over the workspace."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

CLOSE_KEYS = frozenset({"escape", "q", "question_mark"})


class HelpScreen(ModalScreen[None]):
    """Keybinding reference; any of ``CLOSE_KEYS`` dismisses it."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    #help-body {
        width: 80;
        max-height: 80%;
        border: round $primary;
        background: $surface;
        padding: 0 1;
    }
    """

    def __init__(self, help_text: str) -> None:
        super().__init__()
        self.help_text = help_text

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="help-body"):
            yield Static(self.help_text, id="help-text")

    def on_mount(self) -> None:
        self.query_one("#help-body").border_title = "Help"

    def on_key(self, event: Key) -> None:
        if event.key in CLOSE_KEYS:
            event.prevent_default()
            event.stop()
            self.dismiss()
