"""
Simulated modal editor.

A small, faithful subset of a modal editor: cursor motions, NORMAL/INSERT/
VISUAL transitions, character insertion and deletion, and bracket matching.
It exists so training sessions can show the effect of the keys a learner is
practising.
"""

from vimpytype.editor.buffer import CursorPosition, TextBuffer
from vimpytype.editor.modes import (
    EditorMode,
    EditorSnapshot,
    ModeStateMachine,
    PendingPrefix,
    StatusLine,
)
from vimpytype.editor.motions import apply_motion, find_matching_bracket
from vimpytype.editor.mutations import (
    backspace,
    delete_char_at_cursor,
    delete_selection,
    insert_char,
)

__all__ = [
    "CursorPosition",
    "TextBuffer",
    "EditorMode",
    "EditorSnapshot",
    "ModeStateMachine",
    "PendingPrefix",
    "StatusLine",
    "apply_motion",
    "find_matching_bracket",
    "insert_char",
    "backspace",
    "delete_char_at_cursor",
    "delete_selection",
]
