"""Workspace controller: routes every key to exactly one action.

The controller is UI-agnostic. It mutates ``WorkspaceState`` and returns at
most one signal per key (``RunQuery`` or ``Quit``); the Textual app renders
``snapshot()`` and carries the signals out.
"""

from __future__ import annotations

from sqlpad.core.input_context import Focus, InputContext
from sqlpad.core.key_router import ResolvedAction, resolve_action
from sqlpad.core.vim import VimMode
from sqlpad.domains.explorer.app.schema_service import EMPTY_SCHEMA, SchemaCache, SchemaService
from sqlpad.domains.explorer.app.table_picker import PickerState, build_select_query
from sqlpad.domains.query.app.query_service import QueryOutcome, describe_outcome
from sqlpad.domains.query.completion import complete, find_token
from sqlpad.domains.query.store import HistoryIdentity, HistoryStoreProtocol, InMemoryHistoryStore
from sqlpad.domains.query.store.history import normalize_query
from sqlpad.domains.shell.domain.workspace_state import (
    Quit,
    RunQuery,
    Signal,
    WorkspaceSnapshot,
    WorkspaceState,
)
from sqlpad.domains.shell.state import UIStateMachine
from sqlpad.shared.core.debug_events import emit_debug_event
from sqlpad.shared.core.errors import HistoryIoError, InvalidCursorState, QueryError, SchemaUnavailable


class Workspace:
    def __init__(
        self,
        *,
        identity: HistoryIdentity,
        history: HistoryStoreProtocol,
        schema: SchemaService,
        state_machine: UIStateMachine | None = None,
    ) -> None:
        self.identity = identity
        self.history = history
        self.schema_service = schema
        self.state_machine = state_machine or UIStateMachine()
        self.state = WorkspaceState()
        self._known_history: list[str] = []

        try:
            latest = self.history.load_latest(identity)
        except HistoryIoError as e:
            self._disable_history(e)
            latest = None
        if latest:
            self._known_history = [latest]
            self.state.buffer.set_text(latest)

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def input_context(self, *, query_executing: bool = False, has_results: bool = False) -> InputContext:
        return InputContext(
            focus=self.state.focus,
            vim_mode=self.state.mode,
            overlay=self.state.overlay_kind,
            query_executing=query_executing,
            has_results=has_results,
            browsing_history=self.state.history_index is not None,
        )

    def resolve(
        self,
        key: str,
        character: str | None = None,
        *,
        query_executing: bool = False,
        has_results: bool = False,
    ) -> ResolvedAction | None:
        ctx = self.input_context(query_executing=query_executing, has_results=has_results)
        return resolve_action(
            key,
            ctx,
            character=character,
            is_allowed=lambda name: self.state_machine.check_action(ctx, name),
        )

    def handles(self, action: str) -> bool:
        return callable(getattr(self, f"action_{action}", None))

    def perform(self, resolved: ResolvedAction) -> Signal | None:
        """Run the handler for an already-resolved action."""
        handler = getattr(self, f"action_{resolved.action}", None)
        if handler is None:
            return None
        try:
            self.state.buffer.validate()
        except InvalidCursorState as e:
            emit_debug_event("cursor.clamped", category="workspace", error=str(e))
            self.state.buffer.clamp()
        if resolved.character is not None:
            signal = handler(resolved.character)
        else:
            signal = handler()
        self.state.buffer.clamp()
        return signal

    def handle_key(
        self,
        key: str,
        character: str | None = None,
        *,
        query_executing: bool = False,
        has_results: bool = False,
    ) -> Signal | None:
        """Process one key event. Unbound keys are ignored."""
        resolved = self.resolve(key, character, query_executing=query_executing, has_results=has_results)
        if resolved is None:
            return None
        return self.perform(resolved)

    def snapshot(self) -> WorkspaceSnapshot:
        return WorkspaceSnapshot.capture(self.state)

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def _disable_history(self, error: HistoryIoError) -> None:
        emit_debug_event("history.io_error", category="history", path=str(error.path), reason=error.reason)
        self.state.status = f"History disabled: {error.reason}"
        self.history = InMemoryHistoryStore.seeded(self.identity, self._known_history)

    def _load_history(self) -> list[str]:
        try:
            entries = self.history.load_all(self.identity)
        except HistoryIoError as e:
            self._disable_history(e)
            entries = self.history.load_all(self.identity)
        self._known_history = list(entries)
        return entries

    def _append_history(self, text: str) -> bool:
        try:
            written = self.history.append(self.identity, text)
        except HistoryIoError as e:
            self._disable_history(e)
            written = self.history.append(self.identity, text)
        if written:
            self._known_history.append(normalize_query(text))
        return written

    def _schema(self) -> SchemaCache:
        try:
            return self.schema_service.get()
        except SchemaUnavailable as e:
            self.state.status = f"Schema unavailable: {e}"
            return EMPTY_SCHEMA

    def _refresh_autocomplete(self) -> None:
        buffer = self.state.buffer
        token = find_token(buffer.text, buffer.cursor)
        if token.token_start == buffer.cursor:
            # Nothing typed at the cursor (whitespace, start of text, ...).
            self.state.overlay = None
            return
        self.state.overlay = complete(buffer.text, buffer.cursor, self._schema())

    def _leave_history(self) -> None:
        self.state.history_index = None
        self.state.draft = None

    def _request_run(self) -> RunQuery | None:
        if self.state.buffer.is_empty:
            self.state.status = "Empty query"
            return None
        text = self.state.buffer.text
        self._append_history(text)
        self._leave_history()
        self.state.status = "Running query..."
        return RunQuery(text)

    def flush(self) -> None:
        """Save the buffer to history (non-empty and different from the newest)."""
        self._append_history(self.state.buffer.text)

    # ------------------------------------------------------------------
    # Query results
    # ------------------------------------------------------------------

    def query_finished(self, outcome: QueryOutcome) -> None:
        self.state.status = describe_outcome(outcome)

    def query_failed(self, error: QueryError) -> None:
        self.state.status = f"Query error: {error.message}"

    # ------------------------------------------------------------------
    # Global and pane actions
    # ------------------------------------------------------------------

    def action_quit(self) -> Quit:
        self.flush()
        return Quit()

    def action_quit_workspace(self) -> Quit:
        return self.action_quit()

    def action_toggle_focus(self) -> None:
        self.state.focus = Focus.RESULTS if self.state.focus == Focus.EDITOR else Focus.EDITOR

    # ------------------------------------------------------------------
    # Insert mode
    # ------------------------------------------------------------------

    def action_exit_insert_mode(self) -> None:
        self.state.mode = VimMode.NORMAL
        self.state.overlay = None

    def action_execute_query_insert(self) -> RunQuery | None:
        self.state.overlay = None
        return self._request_run()

    def action_insert_character(self, character: str) -> None:
        self.state.buffer.insert(character)
        self._refresh_autocomplete()

    def action_insert_newline(self) -> None:
        self.state.buffer.insert("\n")
        self._refresh_autocomplete()

    def action_delete_left(self) -> None:
        self.state.buffer.delete_left()
        self._refresh_autocomplete()

    def action_delete_right(self) -> None:
        self.state.buffer.delete_right()
        self._refresh_autocomplete()

    def action_cursor_left(self) -> None:
        self.state.buffer.move_left()
        self._refresh_autocomplete()

    def action_cursor_right(self) -> None:
        self.state.buffer.move_right()
        self._refresh_autocomplete()

    def action_cursor_up(self) -> None:
        self.state.buffer.move_up()
        self._refresh_autocomplete()

    def action_cursor_down(self) -> None:
        self.state.buffer.move_down()
        self._refresh_autocomplete()

    def action_cursor_line_start(self) -> None:
        self.state.buffer.move_line_start()
        self._refresh_autocomplete()

    def action_cursor_line_end(self) -> None:
        self.state.buffer.move_line_end()
        self._refresh_autocomplete()

    # ------------------------------------------------------------------
    # Autocomplete overlay
    # ------------------------------------------------------------------

    def action_autocomplete_accept(self) -> None:
        state = self.state.autocomplete
        if state is None:
            return
        chosen = state.selected_item
        if chosen is not None:
            self.state.buffer.replace_span(state.prefix_start, state.prefix_end, chosen)
        self.state.overlay = None

    def action_autocomplete_next(self) -> None:
        if self.state.autocomplete is not None:
            self.state.autocomplete.move_selection(1)

    def action_autocomplete_prev(self) -> None:
        if self.state.autocomplete is not None:
            self.state.autocomplete.move_selection(-1)

    def action_autocomplete_close(self) -> None:
        self.state.overlay = None

    # ------------------------------------------------------------------
    # Normal mode
    # ------------------------------------------------------------------

    def action_enter_insert_mode(self) -> None:
        self.state.mode = VimMode.INSERT
        self.state.focus = Focus.EDITOR
        self._leave_history()

    def action_execute_query(self) -> RunQuery | None:
        return self._request_run()

    def action_history_prev(self) -> None:
        state = self.state
        if state.history_index is None:
            entries = self._load_history()
            if not entries:
                state.status = "No history"
                return
            index = len(entries) - 1
            if entries[index] == state.buffer.text.strip():
                index -= 1
            if index < 0:
                return
            state.history_entries = entries
            state.draft = state.buffer.text
        else:
            index = max(0, state.history_index - 1)
        state.history_index = index
        state.buffer.set_text(state.history_entries[index])

    def action_history_next(self) -> None:
        state = self.state
        if state.history_index is None:
            return
        index = state.history_index + 1
        if index >= len(state.history_entries):
            state.buffer.set_text(state.draft or "")
            self._leave_history()
            return
        state.history_index = index
        state.buffer.set_text(state.history_entries[index])

    def action_new_query(self) -> None:
        self._append_history(self.state.buffer.text)
        self.state.buffer.clear()
        self._leave_history()

    def action_show_table_picker(self) -> None:
        self.state.overlay = PickerState.from_schema(self._schema())

    # ------------------------------------------------------------------
    # Table picker overlay
    # ------------------------------------------------------------------

    def action_picker_type(self, character: str) -> None:
        if self.state.picker is not None:
            self.state.picker.type_character(character)

    def action_picker_backspace(self) -> None:
        if self.state.picker is not None:
            self.state.picker.backspace()

    def action_picker_next(self) -> None:
        if self.state.picker is not None:
            self.state.picker.move_selection(1)

    def action_picker_prev(self) -> None:
        if self.state.picker is not None:
            self.state.picker.move_selection(-1)

    def action_picker_close(self) -> None:
        self.state.overlay = None

    def action_picker_accept(self) -> RunQuery | None:
        picker = self.state.picker
        if picker is None or picker.selected_table is None:
            return None
        table = picker.selected_table
        query = build_select_query(table, self._schema().columns_for(table))
        self.state.overlay = None
        self.state.buffer.set_text(query)
        return self._request_run()
