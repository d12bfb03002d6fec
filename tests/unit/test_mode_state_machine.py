"""
Unit tests for the editor mode state machine.

Mode transitions, the pending gg prefix, and the status line.
"""

import pytest

from vimpytype.core.keys import BACKSPACE, ESCAPE
from vimpytype.editor.buffer import CursorPosition
from vimpytype.editor.modes import EditorMode, ModeStateMachine, scroll_label

CODE = """def calculate_sum(numbers):
    total = 0
    for num in numbers:
        total += num
    return total"""


@pytest.fixture
def editor(scheduler):
    ed = ModeStateMachine(scheduler, prefix_timeout_ms=1000)
    ed.load(CODE, "sum.py", (1, 4))
    return ed


def feed(editor, *tokens):
    for token in tokens:
        snapshot = editor.handle_key(token)
    return snapshot


class TestNormalMode:
    def test_starts_in_normal(self, editor):
        assert editor.mode == EditorMode.NORMAL
        assert editor.cursor == CursorPosition(1, 4)

    def test_motion_moves_cursor(self, editor):
        snapshot = feed(editor, "j", "l")
        assert snapshot.cursor == CursorPosition(2, 5)
        assert snapshot.mode == EditorMode.NORMAL

    def test_x_deletes_under_cursor(self, editor):
        feed(editor, "x")
        assert editor.buffer.line(1) == "    otal = 0"

    def test_unknown_token_is_noop(self, editor):
        before = editor.snapshot()
        after = feed(editor, "Q", "Ctrl+d", ESCAPE)
        assert after == before

    def test_load_clamps_initial_cursor(self, scheduler):
        ed = ModeStateMachine(scheduler)
        ed.load("ab", cursor=(5, 9))
        assert ed.cursor == CursorPosition(0, 1)
        assert ed.filename == "main.py"


class TestInsertMode:
    def test_i_then_typing_inserts(self, editor):
        feed(editor, "i", "m", "y", "_")
        assert editor.mode == EditorMode.INSERT
        assert editor.buffer.line(1) == "    my_total = 0"
        assert editor.cursor == CursorPosition(1, 7)

    def test_escape_steps_back(self, editor):
        feed(editor, "i", "a", ESCAPE)
        assert editor.mode == EditorMode.NORMAL
        assert editor.cursor == CursorPosition(1, 4)

    def test_a_appends_after_cursor(self, editor):
        feed(editor, "a", "X")
        assert editor.buffer.line(1) == "    tXotal = 0"

    def test_a_at_end_of_line_appends_to_line(self, editor):
        feed(editor, "$", "a", "!")
        assert editor.buffer.line(1) == "    total = 0!"
        feed(editor, ESCAPE)
        assert editor.cursor == CursorPosition(1, len("    total = 0!") - 1)

    def test_backspace_joins_lines(self, editor):
        feed(editor, "j", "0", "i", BACKSPACE)
        assert editor.buffer.line(1) == "    total = 0    for num in numbers:"
        assert editor.cursor == CursorPosition(1, len("    total = 0"))
        assert editor.buffer.line_count == 4

    def test_modified_tokens_are_not_inserted(self, editor):
        feed(editor, "i", "Ctrl+w", "Enter")
        assert editor.buffer.line(1) == "    total = 0"

    def test_motion_keys_are_text_in_insert(self, editor):
        feed(editor, "i", "j", "k")
        assert editor.buffer.line(1) == "    jktotal = 0"


class TestVisualMode:
    def test_v_sets_anchor(self, editor):
        snapshot = feed(editor, "v")
        assert snapshot.mode == EditorMode.VISUAL
        assert snapshot.anchor == CursorPosition(1, 4)

    def test_motion_keeps_visual(self, editor):
        snapshot = feed(editor, "v", "l", "l")
        assert snapshot.mode == EditorMode.VISUAL
        assert snapshot.cursor == CursorPosition(1, 6)
        assert snapshot.anchor == CursorPosition(1, 4)

    @pytest.mark.parametrize("key", ["x", "d"])
    def test_delete_removes_single_char_and_exits(self, editor, key):
        snapshot = feed(editor, "v", "l", "l", key)
        assert snapshot.mode == EditorMode.NORMAL
        assert snapshot.anchor is None
        assert editor.buffer.line(1) == "    toal = 0"

    def test_escape_clears_anchor(self, editor):
        snapshot = feed(editor, "v", "w", ESCAPE)
        assert snapshot.mode == EditorMode.NORMAL
        assert snapshot.anchor is None


class TestPendingPrefix:
    def test_gg_within_window_jumps_to_top(self, editor, scheduler):
        feed(editor, "j", "j", "g")
        assert editor.pending_prefix is not None
        scheduler.advance(500)
        snapshot = feed(editor, "g")
        assert snapshot.cursor == CursorPosition(0, 0)
        assert snapshot.pending_prefix is None

    def test_single_g_does_not_move(self, editor):
        snapshot = feed(editor, "g")
        assert snapshot.cursor == CursorPosition(1, 4)
        assert snapshot.pending_prefix.token == "g"
        assert snapshot.pending_prefix.expires_at == 1000

    def test_expired_prefix_is_discarded(self, editor, scheduler):
        feed(editor, "g")
        scheduler.advance(1000)
        assert editor.pending_prefix is None
        snapshot = feed(editor, "g")
        # Second g starts a new prefix instead of completing gg
        assert snapshot.cursor == CursorPosition(1, 4)
        assert snapshot.pending_prefix is not None

    def test_unrelated_key_discards_prefix_and_still_applies(self, editor):
        snapshot = feed(editor, "g", "j")
        assert snapshot.pending_prefix is None
        assert snapshot.cursor == CursorPosition(2, 4)
        snapshot = feed(editor, "g")
        assert snapshot.cursor == CursorPosition(2, 4)

    def test_gg_in_visual_mode(self, editor):
        snapshot = feed(editor, "v", "g", "g")
        assert snapshot.mode == EditorMode.VISUAL
        assert snapshot.cursor == CursorPosition(0, 0)

    def test_close_cancels_prefix_timer(self, editor, scheduler):
        feed(editor, "g")
        editor.close()
        assert editor.pending_prefix is None
        assert scheduler.pending == 0


class TestStatusLine:
    def test_coordinates_are_one_based(self, editor):
        status = editor.status_line()
        assert status.coords == "2:5"
        assert status.mode == "NORMAL"
        assert status.filename == "sum.py"

    def test_scroll_labels(self):
        assert scroll_label(0, 5) == "Top"
        assert scroll_label(4, 5) == "Bot"
        assert scroll_label(1, 5) == "40%"
        assert scroll_label(0, 1) == "Top"

    def test_scroll_rounds_half_up(self):
        assert scroll_label(1, 8) == "25%"
        assert scroll_label(2, 8) == "38%"

    def test_mode_shown_in_status(self, editor):
        feed(editor, "i")
        assert editor.status_line().mode == "INSERT"


class TestInvariants:
    def test_cursor_in_bounds_after_random_input(self, editor):
        import random

        rng = random.Random(7)
        tokens = ["h", "j", "k", "l", "w", "b", "0", "$", "g", "G", "%", "x", "v", "d", ESCAPE]
        for _ in range(2000):
            feed(editor, rng.choice(tokens))
            buffer = editor.buffer
            assert buffer.line_count >= 1
            assert 0 <= editor.cursor.line < buffer.line_count
            if editor.mode != EditorMode.INSERT:
                assert 0 <= editor.cursor.col <= buffer.last_col(editor.cursor.line)
