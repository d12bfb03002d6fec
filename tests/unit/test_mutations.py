"""
Unit tests for buffer mutations.
"""

from vimpytype.editor.buffer import CursorPosition, TextBuffer
from vimpytype.editor.mutations import (
    backspace,
    delete_char_at_cursor,
    delete_selection,
    insert_char,
)


class TestInsertAndBackspace:
    def test_insert_splices_at_cursor(self):
        buffer = TextBuffer(["total"])
        cursor = insert_char(buffer, CursorPosition(0, 2), "X")
        assert buffer.lines == ["toXtal"]
        assert cursor == CursorPosition(0, 3)

    def test_insert_at_end_of_line(self):
        buffer = TextBuffer(["ab"])
        cursor = insert_char(buffer, CursorPosition(0, 2), "c")
        assert buffer.lines == ["abc"]
        assert cursor == CursorPosition(0, 3)

    def test_backspace_undoes_insert(self):
        """Insert then backspace at the same spot restores the line."""
        for col in range(len("return total") + 1):
            buffer = TextBuffer(["return total"])
            cursor = insert_char(buffer, CursorPosition(0, col), "z")
            cursor = backspace(buffer, cursor)
            assert buffer.lines == ["return total"]
            assert cursor == CursorPosition(0, col)

    def test_backspace_joins_lines(self):
        buffer = TextBuffer(["def f():", "pass", "end"])
        cursor = backspace(buffer, CursorPosition(1, 0))
        assert buffer.lines == ["def f():pass", "end"]
        assert cursor == CursorPosition(0, len("def f():"))

    def test_backspace_at_buffer_start_is_noop(self):
        buffer = TextBuffer(["abc"])
        assert backspace(buffer, CursorPosition(0, 0)) == CursorPosition(0, 0)
        assert buffer.lines == ["abc"]

    def test_join_keeps_at_least_one_line(self):
        buffer = TextBuffer(["", ""])
        backspace(buffer, CursorPosition(1, 0))
        assert buffer.lines == [""]


class TestDeleteChar:
    def test_delete_in_middle_keeps_column(self):
        buffer = TextBuffer(["abcd"])
        cursor = delete_char_at_cursor(buffer, CursorPosition(0, 1))
        assert buffer.lines == ["acd"]
        assert cursor == CursorPosition(0, 1)

    def test_delete_last_character_steps_left(self):
        buffer = TextBuffer(["abcd"])
        cursor = delete_char_at_cursor(buffer, CursorPosition(0, 3))
        assert buffer.lines == ["abc"]
        assert cursor == CursorPosition(0, 2)

    def test_delete_only_character(self):
        buffer = TextBuffer(["a"])
        cursor = delete_char_at_cursor(buffer, CursorPosition(0, 0))
        assert buffer.lines == [""]
        assert cursor == CursorPosition(0, 0)

    def test_delete_on_empty_line_is_noop(self):
        buffer = TextBuffer(["", "x"])
        cursor = delete_char_at_cursor(buffer, CursorPosition(0, 0))
        assert buffer.lines == ["", "x"]
        assert cursor == CursorPosition(0, 0)


class TestDeleteSelection:
    def test_only_deletes_character_under_cursor(self):
        """Visual delete removes a single character regardless of the anchor."""
        buffer = TextBuffer(["hello world"])
        cursor = delete_selection(buffer, CursorPosition(0, 4), anchor=CursorPosition(0, 0))
        assert buffer.lines == ["hell world"]
        assert cursor == CursorPosition(0, 4)


class TestTextBuffer:
    def test_from_empty_text_has_one_line(self):
        assert TextBuffer.from_text("").lines == [""]

    def test_empty_list_becomes_one_line(self):
        assert TextBuffer([]).lines == [""]

    def test_from_text_keeps_trailing_empty_line(self):
        assert TextBuffer.from_text("a\n").lines == ["a", ""]
