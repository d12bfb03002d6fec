"""
Motion resolver.

apply_motion() maps (buffer, cursor, motion token) to a new cursor position
and has no side effects. Unknown tokens and impossible moves return the
cursor unchanged.

Word motions only look at the current line; they never continue onto the
next or previous line.
"""

from __future__ import annotations

from typing import Callable

from vimpytype.editor.buffer import CursorPosition, TextBuffer, clamp_normal

# Two-key motion completed through the pending-prefix mechanism
JUMP_TOP = "gg"

BRACKET_PAIRS = {"(": ")", ")": "(", "{": "}", "}": "{", "[": "]", "]": "["}
OPENING_BRACKETS = frozenset("({[")


def _left(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition:
    if pos.col > 0:
        return pos.moved(col=pos.col - 1)
    return pos


def _right(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition:
    if pos.col < buffer.line_length(pos.line) - 1:
        return pos.moved(col=pos.col + 1)
    return pos


def _down(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition:
    if pos.line < buffer.last_line:
        line = pos.line + 1
        return CursorPosition(line, min(pos.col, buffer.last_col(line)))
    return pos


def _up(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition:
    if pos.line > 0:
        line = pos.line - 1
        return CursorPosition(line, min(pos.col, buffer.last_col(line)))
    return pos


def _word_forward(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition:
    text = buffer.line(pos.line)
    if pos.col >= len(text) - 1:
        return pos
    space = text.find(" ", pos.col + 1)
    if space == -1:
        return pos.moved(col=len(text) - 1)
    return pos.moved(col=space + 1)


def _word_backward(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition:
    if pos.col <= 0:
        return pos
    text = buffer.line(pos.line)
    col = pos.col - 1
    while col > 0 and text[col] == " ":
        col -= 1
    while col > 0 and text[col - 1] != " ":
        col -= 1
    return pos.moved(col=col)


def _line_start(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition:
    return pos.moved(col=0)


def _line_end(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition:
    return pos.moved(col=buffer.last_col(pos.line))


def _document_top(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition:
    return CursorPosition(0, 0)


def _document_bottom(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition:
    return CursorPosition(buffer.last_line, 0)


def find_matching_bracket(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition | None:
    """
    Locate the bracket matching the one under the cursor.

    Scans forward from an opening bracket or backward from a closing one,
    crossing line boundaries and tracking nesting depth. Returns None when
    the cursor is not on a bracket or no match exists.
    """
    char = buffer.char_at(pos)
    if char is None or char not in BRACKET_PAIRS:
        return None

    target = BRACKET_PAIRS[char]
    step = 1 if char in OPENING_BRACKETS else -1
    depth = 0
    line = pos.line
    col = pos.col + step

    while 0 <= line < buffer.line_count:
        text = buffer.line(line)
        if col < 0:
            line -= 1
            if line >= 0:
                col = buffer.line_length(line) - 1
            continue
        if col >= len(text):
            line += 1
            col = 0
            continue

        current = text[col]
        if current == char:
            depth += 1
        elif current == target:
            if depth == 0:
                return CursorPosition(line, col)
            depth -= 1
        col += step

    return None


def _bracket_match(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition:
    return find_matching_bracket(buffer, pos) or pos


MOTIONS: dict[str, Callable[[TextBuffer, CursorPosition], CursorPosition]] = {
    "h": _left,
    "l": _right,
    "j": _down,
    "k": _up,
    "w": _word_forward,
    "b": _word_backward,
    "0": _line_start,
    "$": _line_end,
    JUMP_TOP: _document_top,
    "G": _document_bottom,
    "%": _bracket_match,
}


def is_motion(token: str) -> bool:
    return token in MOTIONS


def apply_motion(buffer: TextBuffer, cursor: CursorPosition, token: str) -> CursorPosition:
    """Resolve a motion token. Column is clamped to the resulting line."""
    motion = MOTIONS.get(token)
    if motion is None:
        return cursor
    return clamp_normal(buffer, motion(buffer, cursor))
