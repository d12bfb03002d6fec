"""
Buffer mutations used by insert, normal and visual mode.

Each function edits the buffer in place and returns the new cursor.
"""

from __future__ import annotations

from vimpytype.editor.buffer import CursorPosition, TextBuffer


def insert_char(buffer: TextBuffer, cursor: CursorPosition, ch: str) -> CursorPosition:
    """Splice ch in at the cursor column and step past it."""
    text = buffer.lines[cursor.line]
    buffer.lines[cursor.line] = text[: cursor.col] + ch + text[cursor.col :]
    return cursor.moved(col=cursor.col + len(ch))


def backspace(buffer: TextBuffer, cursor: CursorPosition) -> CursorPosition:
    """
    Delete the character left of the cursor.

    At column 0 the current line is joined onto the previous one and the
    cursor lands on the join point. At the very start of the buffer nothing
    happens.
    """
    if cursor.col > 0:
        text = buffer.lines[cursor.line]
        buffer.lines[cursor.line] = text[: cursor.col - 1] + text[cursor.col :]
        return cursor.moved(col=cursor.col - 1)

    if cursor.line > 0:
        previous = buffer.lines[cursor.line - 1]
        buffer.lines[cursor.line - 1] = previous + buffer.lines[cursor.line]
        del buffer.lines[cursor.line]
        return CursorPosition(cursor.line - 1, len(previous))

    return cursor


def delete_char_at_cursor(buffer: TextBuffer, cursor: CursorPosition) -> CursorPosition:
    """Delete the character under the cursor (normal-mode x)."""
    text = buffer.lines[cursor.line]
    if not text:
        return cursor
    remaining = text[: cursor.col] + text[cursor.col + 1 :]
    buffer.lines[cursor.line] = remaining
    if cursor.col >= len(remaining) and cursor.col > 0:
        return cursor.moved(col=cursor.col - 1)
    return cursor


def delete_selection(
    buffer: TextBuffer, cursor: CursorPosition, anchor: CursorPosition | None
) -> CursorPosition:
    """
    Delete a visual selection.

    Only the character under the cursor is removed, whatever the anchor.
    Range deletion would need a selection model the simulator does not have.
    """
    return delete_char_at_cursor(buffer, cursor)
