"""Tests for the autocomplete engine."""

from __future__ import annotations

import pytest

from sqlpad.domains.explorer.app.schema_service import SchemaCache
from sqlpad.domains.query.completion import (
    AutocompleteState,
    ColumnContext,
    ColumnForTable,
    TableContext,
    complete,
    find_token,
)
from sqlpad.domains.query.completion.engine import SCAN_WINDOW, classify, rank
from sqlpad.domains.query.editing.buffer import EditorBuffer


@pytest.fixture
def schema(schema_data) -> SchemaCache:
    return SchemaCache.from_mapping(schema_data)


def complete_at_end(text: str, schema: SchemaCache) -> AutocompleteState | None:
    return complete(text, len(text), schema)


def accept(text: str, state: AutocompleteState, suggestion: str | None = None) -> EditorBuffer:
    buffer = EditorBuffer(text, len(text))
    buffer.replace_span(state.prefix_start, state.prefix_end, suggestion or state.selected_item)
    return buffer


class TestFindToken:
    def test_prefix_before_cursor(self):
        token = find_token("select na", 9)
        assert (token.start, token.end, token.text) == (7, 9, "na")
        assert token.qualifier is None

    def test_qualified_token(self):
        token = find_token("select orders.t", 15)
        assert token.qualifier == "orders"
        assert token.text == "t"
        assert token.start == 14
        assert token.token_start == 7

    def test_cursor_inside_word_uses_text_before_cursor(self):
        token = find_token("select name", 9)
        assert token.text == "na"
        assert (token.start, token.end) == (7, 9)

    def test_empty_token_after_whitespace(self):
        token = find_token("select ", 7)
        assert token.text == ""
        assert token.start == token.end == 7

    def test_schema_qualified_name_uses_last_segment(self):
        token = find_token("select main.orders.to", 21)
        assert token.qualifier == "orders"
        assert token.text == "to"


class TestClassify:
    @pytest.mark.parametrize(
        "text",
        ["select * from o", "SELECT * FROM o", "select * from a join o", "insert into o", "update o"],
    )
    def test_table_keywords(self, text):
        assert classify(text, find_token(text, len(text))) == TableContext()

    @pytest.mark.parametrize("text", ["select i", "select id, na", "select a,b , c, n", "join t on i"])
    def test_column_keywords(self, text):
        assert classify(text, find_token(text, len(text))) == ColumnContext()

    def test_qualified_token_wins(self):
        text = "select * from orders where orders.t"
        assert classify(text, find_token(text, len(text))) == ColumnForTable("orders")

    def test_other_words_stop_the_scan(self):
        text = "select * from users where na"
        assert classify(text, find_token(text, len(text))) is None

    def test_no_keyword(self):
        assert classify("na", find_token("na", 2)) is None

    def test_keyword_beyond_scan_window(self):
        text = "select" + " " * (SCAN_WINDOW + 10) + "na"
        assert classify(text, find_token(text, len(text))) is None


class TestComplete:
    def test_column_for_table(self, schema):
        state = complete_at_end("select orders.t", schema)
        assert state is not None
        assert state.context == ColumnForTable("orders")
        assert state.suggestions == ["total"]

    def test_unknown_table_has_no_suggestions(self, schema):
        assert complete_at_end("select nope.i", schema) is None

    def test_table_context_lists_tables(self, schema):
        state = complete_at_end("select * from u", schema)
        assert state is not None
        assert state.context == TableContext()
        assert state.suggestions == ["users"]

    def test_prefix_match_is_case_insensitive(self, schema):
        state = complete_at_end("SELECT * FROM US", schema)
        assert state is not None
        assert state.suggestions == ["users"]

    def test_empty_prefix_matches_everything_in_context(self, schema):
        state = complete_at_end("select * from ", schema)
        assert state is not None
        assert state.suggestions == ["orders", "users"]

    def test_columns_are_deduplicated_and_annotated(self, schema):
        state = complete_at_end("select i", schema)
        assert state is not None
        assert state.suggestions == ["id"]
        assert state.annotations["id"] == "orders, users"

    def test_ranking_is_lexicographic(self):
        schema = SchemaCache.from_mapping({"b_t": [], "A_x": [], "a_t": []})
        state = complete_at_end("select * from ", schema)
        assert state is not None
        assert state.suggestions == ["a_t", "A_x", "b_t"]

    def test_no_match_returns_none(self, schema):
        assert complete_at_end("select * from zz", schema) is None

    def test_multibyte_identifiers(self):
        schema = SchemaCache.from_mapping({"café": ["prix"]})
        state = complete_at_end("select * from caf", schema)
        assert state is not None
        assert state.suggestions == ["café"]
        buffer = accept("select * from caf", state)
        assert buffer.text == "select * from café"
        assert buffer.cursor == len(buffer.text)

    def test_selection_moves_and_clamps(self, schema):
        state = complete_at_end("select * from ", schema)
        assert state is not None
        state.move_selection(-1)
        assert state.selected == 0
        state.move_selection(1)
        state.move_selection(1)
        assert state.selected == 1
        assert state.selected_item == "users"

    def test_rank_keeps_prefix_matches_only(self):
        assert rank(["name", "id", "Nickname"], "n") == ["name", "Nickname"]


class TestAcceptSpan:
    def test_replaces_exactly_the_prefix_span(self, schema):
        text = "select na from users"
        state = complete(text, 9, schema)
        assert state is not None
        assert (state.prefix_start, state.prefix_end) == (7, 9)
        buffer = accept(text, state)
        assert buffer.text == text[: state.prefix_start] + "name" + text[state.prefix_end :]
        assert buffer.text == "select name from users"
        assert buffer.cursor == 11

    def test_cursor_inside_word_replaces_the_whole_word(self, schema):
        text = "select name"
        state = complete(text, 9, schema)
        assert state is not None
        assert state.prefix == "na"
        assert (state.prefix_start, state.prefix_end) == (7, 11)
        buffer = accept(text, state)
        assert buffer.text == "select name"
        assert buffer.cursor == 11

    def test_tail_after_cursor_stops_at_non_identifier(self, schema):
        text = "select nam,id from users"
        state = complete(text, 9, schema)
        assert state is not None
        assert state.prefix_end == 10
        assert accept(text, state).text == "select name,id from users"

    def test_qualified_prefix_keeps_the_table(self, schema):
        text = "select orders.t"
        state = complete_at_end(text, schema)
        assert state is not None
        buffer = accept(text, state)
        assert buffer.text == "select orders.total"
        assert buffer.cursor == len(buffer.text)

    def test_explicit_suggestion(self, schema):
        text = "select * from "
        state = complete_at_end(text, schema)
        assert state is not None
        assert accept(text, state, "users").text == "select * from users"
