"""Tests for the editor buffer."""

from __future__ import annotations

import random

import pytest

from sqlpad.domains.query.editing import EditorBuffer
from sqlpad.shared.core.errors import InvalidCursorState


class TestEditing:
    def test_insert_advances_cursor(self):
        buffer = EditorBuffer()
        buffer.insert("select")
        buffer.insert(" 1")
        assert buffer.text == "select 1"
        assert buffer.cursor == 8

    def test_insert_in_middle(self):
        buffer = EditorBuffer("selct", cursor=3)
        buffer.insert("e")
        assert buffer.text == "select"
        assert buffer.cursor == 4

    def test_delete_left_at_start_is_noop(self):
        buffer = EditorBuffer("abc", cursor=0)
        buffer.delete_left()
        assert buffer.text == "abc"
        assert buffer.cursor == 0

    def test_delete_right_at_end_is_noop(self):
        buffer = EditorBuffer("abc", cursor=3)
        buffer.delete_right()
        assert buffer.text == "abc"
        assert buffer.cursor == 3

    def test_delete_multibyte_character(self):
        buffer = EditorBuffer("café", cursor=4)
        buffer.delete_left()
        assert buffer.text == "caf"
        assert buffer.cursor == 3

    def test_replace_span(self):
        buffer = EditorBuffer("select na from users")
        buffer.replace_span(7, 9, "name")
        assert buffer.text == "select name from users"
        assert buffer.cursor == 11

    def test_set_text_puts_cursor_at_end(self):
        buffer = EditorBuffer("old", cursor=1)
        buffer.set_text("select 2;")
        assert buffer.cursor == len("select 2;")


class TestCursorMovement:
    def test_location_reports_line_and_column(self):
        buffer = EditorBuffer("select *\nfrom users", cursor=13)
        assert buffer.location == (1, 4)

    def test_move_up_clamps_column_to_shorter_line(self):
        buffer = EditorBuffer("abc\nhello", cursor=9)
        buffer.move_up()
        assert buffer.cursor == 3
        assert buffer.location == (0, 3)

    def test_move_down_keeps_column(self):
        buffer = EditorBuffer("abc\nhello", cursor=2)
        buffer.move_down()
        assert buffer.location == (1, 2)

    def test_move_up_on_first_line_goes_to_start(self):
        buffer = EditorBuffer("abc", cursor=2)
        buffer.move_up()
        assert buffer.cursor == 0

    def test_move_down_on_last_line_goes_to_end(self):
        buffer = EditorBuffer("abc\nde", cursor=5)
        buffer.move_down()
        assert buffer.cursor == 6

    def test_line_start_and_end(self):
        buffer = EditorBuffer("abc\nhello\nxy", cursor=6)
        buffer.move_line_start()
        assert buffer.cursor == 4
        buffer.move_line_end()
        assert buffer.cursor == 9


class TestCursorInvariant:
    def test_constructor_clamps(self):
        assert EditorBuffer("abc", cursor=10).cursor == 3
        assert EditorBuffer("abc", cursor=-4).cursor == 0

    def test_validate_raises_on_out_of_range_cursor(self):
        buffer = EditorBuffer("abc")
        buffer.cursor = 99
        with pytest.raises(InvalidCursorState):
            buffer.validate()
        buffer.clamp()
        buffer.validate()
        assert buffer.cursor == 3

    def test_random_edit_sequences_keep_cursor_in_range(self):
        rng = random.Random(20240501)
        operations = [
            lambda b: b.insert(rng.choice(["a", "é", "\n", "語", " "])),
            lambda b: b.delete_left(),
            lambda b: b.delete_right(),
            lambda b: b.move_left(),
            lambda b: b.move_right(),
            lambda b: b.move_up(),
            lambda b: b.move_down(),
            lambda b: b.move_line_start(),
            lambda b: b.move_line_end(),
        ]
        buffer = EditorBuffer()
        for _ in range(2000):
            rng.choice(operations)(buffer)
            assert 0 <= buffer.cursor <= len(buffer.text)
            buffer.validate()
