"""At-most-one in-flight query per workspace.

A new run replaces the outstanding one: the running statement is
interrupted and its result, if it still arrives, is discarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from sqlpad.domains.query.app.query_service import QueryOutcome
from sqlpad.shared.core.debug_events import emit_debug_event


class QuerySession(Protocol):
    def run_query(self, text: str, max_rows: int | None = None) -> QueryOutcome:
        ...

    def interrupt(self) -> None:
        ...


@dataclass(frozen=True)
class QueryTicket:
    number: int
    text: str


class QueryDispatcher:
    def __init__(self, session: QuerySession, max_rows: int | None = None) -> None:
        self._session = session
        self._max_rows = max_rows
        self._counter = 0
        self._active: QueryTicket | None = None

    @property
    def in_flight(self) -> bool:
        return self._active is not None

    @property
    def active(self) -> QueryTicket | None:
        return self._active

    def begin(self, text: str) -> QueryTicket:
        """Register a new run, superseding any outstanding one."""
        if self._active is not None:
            emit_debug_event("query.superseded", category="query", ticket=self._active.number)
            self._session.interrupt()
        self._counter += 1
        ticket = QueryTicket(self._counter, text)
        self._active = ticket
        emit_debug_event("query.start", category="query", ticket=ticket.number)
        return ticket

    def execute(self, ticket: QueryTicket) -> QueryOutcome:
        """Run the ticket's query. Blocking; call it off the event loop."""
        return self._session.run_query(ticket.text, self._max_rows)

    def is_current(self, ticket: QueryTicket) -> bool:
        return self._active is not None and self._active.number == ticket.number

    def finish(self, ticket: QueryTicket) -> bool:
        """Close out ``ticket``. False means it was superseded and its result must be dropped."""
        if not self.is_current(ticket):
            emit_debug_event("query.discarded", category="query", ticket=ticket.number)
            return False
        self._active = None
        emit_debug_event("query.finish", category="query", ticket=ticket.number)
        return True

    def cancel(self) -> None:
        """Interrupt the outstanding query, if any, and forget it."""
        if self._active is None:
            return
        self._session.interrupt()
        self._active = None
