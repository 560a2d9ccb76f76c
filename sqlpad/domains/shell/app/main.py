"""Main Textual application for sqlpad."""

from __future__ import annotations

import asyncio
from typing import Any, ClassVar

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Vertical
from textual.events import Key
from textual.widgets import Static
from textual.worker import Worker

from sqlpad.core.input_context import Focus, InputContext
from sqlpad.domains.query.app.dispatch import QueryTicket
from sqlpad.domains.query.app.query_service import QueryOutcome, QueryResult
from sqlpad.domains.shell.app.workspace import Workspace
from sqlpad.domains.shell.domain.workspace_state import Quit, RunQuery, Signal
from sqlpad.shared.app import AppServices
from sqlpad.shared.core.debug_events import emit_debug_event
from sqlpad.shared.core.errors import QueryError
from sqlpad.shared.ui.screens import HelpScreen
from sqlpad.shared.ui.widgets import (
    AutocompleteDropdown,
    ContextFooter,
    EditorView,
    ResultsTable,
    TablePickerOverlay,
)


class SqlpadApp(App):
    """Keyboard-driven query workspace for one sqlite database."""

    TITLE = "sqlpad"

    CSS = """
    #main-panel {
        height: 1fr;
    }

    #query-area {
        height: 2fr;
    }

    #results-area {
        height: 3fr;
        border: round $border;
    }

    #results-area.active-pane {
        border: round $primary;
    }

    #status-bar {
        height: 1;
        padding: 0 1;
    }
    """

    BINDINGS: ClassVar[list[Any]] = []

    def __init__(self, *, services: AppServices, workspace: Workspace | None = None):
        super().__init__()
        self.services = services
        self.workspace = workspace or Workspace(
            identity=services.identity,
            history=services.history_store,
            schema=services.schema_service,
        )
        self._query_worker: Worker[Any] | None = None
        self._has_results: bool = False

    @property
    def query_executing(self) -> bool:
        return self.services.dispatcher.in_flight

    def _get_input_context(self) -> InputContext:
        return self.workspace.input_context(query_executing=self.query_executing, has_results=self._has_results)

    def compose(self) -> ComposeResult:
        with Vertical(id="main-panel"):
            with Container(id="query-area"):
                yield EditorView(id="query-input")
                yield AutocompleteDropdown(id="autocomplete-dropdown")
                yield TablePickerOverlay(id="table-picker")
            with Container(id="results-area"):
                yield ResultsTable(id="results-table", zebra_stripes=True, cursor_type="row")
            yield Static("", id="status-bar")
        yield ContextFooter(id="footer")

    def on_mount(self) -> None:
        self.sub_title = str(self.services.identity.canonical_path)
        self.query_one("#results-area").border_title = "Results"
        self._refresh()

    def on_key(self, event: Key) -> None:
        """Route key presses through the workspace."""
        if isinstance(self.screen, HelpScreen):
            return
        resolved = self.workspace.resolve(
            event.key,
            event.character,
            query_executing=self.query_executing,
            has_results=self._has_results,
        )
        if resolved is None:
            return
        event.prevent_default()
        event.stop()
        if self.workspace.handles(resolved.action):
            self._handle_signal(self.workspace.perform(resolved))
        else:
            handler = getattr(self, f"action_{resolved.action}", None)
            if handler:
                handler()
        self._refresh()

    async def action_quit(self) -> None:
        """Quit from any state (ctrl+q), saving the buffer first."""
        self._handle_signal(self.workspace.action_quit())

    def action_show_help(self) -> None:
        """Show help with all keybindings."""
        self.push_screen(HelpScreen(self.workspace.state_machine.generate_help_text()))

    def action_results_cursor_down(self) -> None:
        self.results_table.action_cursor_down()

    def action_results_cursor_up(self) -> None:
        self.results_table.action_cursor_up()

    @property
    def results_table(self) -> ResultsTable:
        return self.query_one("#results-table", ResultsTable)

    @property
    def status_bar(self) -> Static:
        return self.query_one("#status-bar", Static)

    def _handle_signal(self, signal: Signal | None) -> None:
        if isinstance(signal, RunQuery):
            self._start_query(signal.text)
        elif isinstance(signal, Quit):
            self.exit()

    def _start_query(self, text: str) -> None:
        ticket = self.services.dispatcher.begin(text)
        self._query_worker = self.run_worker(
            self._run_query_async(ticket),
            name="query",
            group="query",
            exclusive=True,
        )

    async def _run_query_async(self, ticket: QueryTicket) -> None:
        dispatcher = self.services.dispatcher
        try:
            outcome = await asyncio.to_thread(dispatcher.execute, ticket)
        except QueryError as e:
            if dispatcher.finish(ticket):
                emit_debug_event("query.error", category="query", ticket=ticket.number, error=e.message)
                self.workspace.query_failed(e)
        else:
            if dispatcher.finish(ticket):
                self.workspace.query_finished(outcome)
                self._display_outcome(outcome)
        self._refresh()

    def _display_outcome(self, outcome: QueryOutcome) -> None:
        table = self.results_table
        table.clear(columns=True)
        if isinstance(outcome, QueryResult):
            table.add_columns(*outcome.columns)
            table.add_rows(outcome.rows)
            self._has_results = bool(outcome.rows)
        else:
            self._has_results = False

    def _refresh(self) -> None:
        snapshot = self.workspace.snapshot()
        self.query_one("#query-input", EditorView).show(snapshot)
        self.query_one("#autocomplete-dropdown", AutocompleteDropdown).show(snapshot.autocomplete)
        self.query_one("#table-picker", TablePickerOverlay).show(snapshot.picker)

        results_area = self.query_one("#results-area")
        results_area.set_class(snapshot.focus == Focus.RESULTS, "active-pane")

        status = Text()
        status.append(f"-- {snapshot.mode.value.upper()} --", style="bold")
        status.append("  ")
        status.append(snapshot.status)
        self.status_bar.update(status)

        ctx = self._get_input_context()
        left, right = self.workspace.state_machine.get_display_bindings(ctx)
        self.query_one("#footer", ContextFooter).show(left, right)
