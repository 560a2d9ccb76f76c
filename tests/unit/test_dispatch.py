"""Tests for the single in-flight query policy."""

from __future__ import annotations

from sqlpad.domains.query.app.dispatch import QueryDispatcher
from sqlpad.domains.query.app.query_service import NonQueryResult


class FakeSession:
    def __init__(self) -> None:
        self.interrupts = 0
        self.calls: list[tuple[str, int | None]] = []

    def run_query(self, text, max_rows=None):
        self.calls.append((text, max_rows))
        return NonQueryResult(rows_affected=0)

    def interrupt(self) -> None:
        self.interrupts += 1


class TestQueryDispatcher:
    def test_single_run(self):
        session = FakeSession()
        dispatcher = QueryDispatcher(session, max_rows=10)

        ticket = dispatcher.begin("select 1")
        assert dispatcher.in_flight
        assert dispatcher.execute(ticket) == NonQueryResult(0)
        assert session.calls == [("select 1", 10)]
        assert dispatcher.finish(ticket) is True
        assert not dispatcher.in_flight
        assert session.interrupts == 0

    def test_new_run_replaces_outstanding_one(self):
        session = FakeSession()
        dispatcher = QueryDispatcher(session)

        first = dispatcher.begin("select 1")
        second = dispatcher.begin("select 2")

        assert session.interrupts == 1
        assert dispatcher.active == second
        assert dispatcher.finish(first) is False
        assert dispatcher.in_flight
        assert dispatcher.finish(second) is True
        assert not dispatcher.in_flight

    def test_tickets_are_increasing(self):
        dispatcher = QueryDispatcher(FakeSession())
        first = dispatcher.begin("a")
        dispatcher.finish(first)
        second = dispatcher.begin("b")
        assert second.number > first.number

    def test_cancel(self):
        session = FakeSession()
        dispatcher = QueryDispatcher(session)
        dispatcher.cancel()
        assert session.interrupts == 0

        ticket = dispatcher.begin("select 1")
        dispatcher.cancel()
        assert session.interrupts == 1
        assert dispatcher.finish(ticket) is False
