"""
Mode state machine for the simulated editor.

Drives the buffer through NORMAL, INSERT and VISUAL mode:

    NORMAL  i -> INSERT            a -> INSERT (cursor steps right)
    NORMAL  v -> VISUAL (anchor)   x -> delete char   motions -> move
    INSERT  <Esc> -> NORMAL        <BS> -> backspace  printable -> insert
    VISUAL  <Esc> -> NORMAL        x/d -> delete      motions -> move

Two-key motions (gg) go through a PendingPrefix: the first key is held with
an explicit expiry; a completing key fires the motion, anything else or the
expiry drops it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from vimpytype.core.keys import BACKSPACE, ESCAPE, is_printable
from vimpytype.core.scheduling import Scheduler, TimerSlot
from vimpytype.editor.buffer import (
    CursorPosition,
    TextBuffer,
    clamp_insert,
    clamp_normal,
)
from vimpytype.editor.motions import JUMP_TOP, apply_motion, is_motion
from vimpytype.editor.mutations import (
    backspace,
    delete_char_at_cursor,
    delete_selection,
    insert_char,
)

# Prefix key -> {completing key: motion}
PREFIX_MOTIONS: dict[str, dict[str, str]] = {
    "g": {"g": JUMP_TOP},
}


class EditorMode(str, Enum):
    """Active editor mode."""

    NORMAL = "NORMAL"
    INSERT = "INSERT"
    VISUAL = "VISUAL"


@dataclass(frozen=True)
class PendingPrefix:
    """A buffered motion prefix awaiting its second key."""

    token: str
    expires_at: float

    def expired(self, now: float) -> bool:
        return now >= self.expires_at


@dataclass(frozen=True)
class StatusLine:
    """Status bar summary."""

    mode: str
    filename: str
    scroll: str  # "Top", "Bot" or a percentage such as "50%"
    coords: str  # 1-based "line:col"

    def __str__(self) -> str:
        return f"{self.mode}  {self.filename}  {self.scroll}  {self.coords}"


@dataclass(frozen=True)
class EditorSnapshot:
    """Read-only view of the editor for presentation layers."""

    lines: tuple[str, ...]
    cursor: CursorPosition
    mode: EditorMode
    anchor: CursorPosition | None
    pending_prefix: PendingPrefix | None
    status: StatusLine


def scroll_label(line: int, line_count: int) -> str:
    if line == 0:
        return "Top"
    if line == line_count - 1:
        return "Bot"
    return f"{math.floor((line + 1) / line_count * 100 + 0.5)}%"


class ModeStateMachine:
    """
    Simulated modal editor.

    Owns one buffer and cursor. Tokens are processed synchronously, one at
    a time; the only deferred work is expiry of a pending prefix, which runs
    through the injected scheduler.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        prefix_timeout_ms: float = 1000,
        filename: str = "main.py",
    ):
        self._scheduler = scheduler
        self.prefix_timeout_ms = prefix_timeout_ms
        self.buffer = TextBuffer()
        self.cursor = CursorPosition()
        self.mode = EditorMode.NORMAL
        self.anchor: CursorPosition | None = None
        self.filename = filename
        self._pending: PendingPrefix | None = None
        self._prefix_timer = TimerSlot(scheduler, "prefix")

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def load(
        self,
        text: str,
        filename: str | None = None,
        cursor: CursorPosition | tuple[int, int] | None = None,
    ) -> EditorSnapshot:
        """Replace the buffer and reset to NORMAL mode."""
        self.buffer = TextBuffer.from_text(text)
        if filename is not None:
            self.filename = filename
        if isinstance(cursor, tuple):
            cursor = CursorPosition(*cursor)
        self.cursor = clamp_normal(self.buffer, cursor or CursorPosition())
        self.mode = EditorMode.NORMAL
        self.anchor = None
        self._clear_prefix()
        return self.snapshot()

    # -------------------------------------------------------------------------
    # Pending prefix
    # -------------------------------------------------------------------------

    @property
    def pending_prefix(self) -> PendingPrefix | None:
        if self._pending is not None and self._pending.expired(self._scheduler.now()):
            self._clear_prefix()
        return self._pending

    def _arm_prefix(self, token: str) -> None:
        self._pending = PendingPrefix(token, self._scheduler.now() + self.prefix_timeout_ms)
        self._prefix_timer.arm(self.prefix_timeout_ms, self._expire_prefix)

    def _expire_prefix(self) -> None:
        if self._pending is not None:
            logger.debug("Pending prefix {!r} expired", self._pending.token)
        self._pending = None

    def _clear_prefix(self) -> None:
        self._pending = None
        self._prefix_timer.cancel()

    def _resolve_motion(self, token: str) -> str | None:
        """
        Run a token through the prefix buffer.

        Returns the motion (or plain token) to act on, or None when the token
        was swallowed as a new prefix.
        """
        pending = self.pending_prefix
        if pending is not None:
            self._clear_prefix()
            completed = PREFIX_MOTIONS[pending.token].get(token)
            if completed is not None:
                return completed
        if token in PREFIX_MOTIONS:
            self._arm_prefix(token)
            return None
        return token

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def handle_key(self, token: str) -> EditorSnapshot:
        """Apply one token in the current mode and return the new state."""
        if self.mode == EditorMode.NORMAL:
            self._handle_normal(token)
        elif self.mode == EditorMode.INSERT:
            self._handle_insert(token)
        elif self.mode == EditorMode.VISUAL:
            self._handle_visual(token)
        return self.snapshot()

    def _handle_normal(self, token: str) -> None:
        key = self._resolve_motion(token)
        if key is None:
            return
        if key == "i":
            self.mode = EditorMode.INSERT
        elif key == "a":
            if self.cursor.col < self.buffer.line_length(self.cursor.line):
                self.cursor = self.cursor.moved(col=self.cursor.col + 1)
            self.mode = EditorMode.INSERT
        elif key == "v":
            self.anchor = self.cursor
            self.mode = EditorMode.VISUAL
        elif is_motion(key):
            self.cursor = apply_motion(self.buffer, self.cursor, key)
        elif key == "x":
            self.cursor = delete_char_at_cursor(self.buffer, self.cursor)

    def _handle_insert(self, token: str) -> None:
        if token == ESCAPE:
            self.mode = EditorMode.NORMAL
            if self.cursor.col > 0:
                self.cursor = self.cursor.moved(col=self.cursor.col - 1)
            self.cursor = clamp_normal(self.buffer, self.cursor)
        elif token == BACKSPACE:
            self.cursor = backspace(self.buffer, self.cursor)
        elif is_printable(token):
            self.cursor = insert_char(self.buffer, clamp_insert(self.buffer, self.cursor), token)

    def _handle_visual(self, token: str) -> None:
        if token == ESCAPE:
            self._clear_prefix()
            self.anchor = None
            self.mode = EditorMode.NORMAL
            return
        key = self._resolve_motion(token)
        if key is None:
            return
        if is_motion(key):
            self.cursor = apply_motion(self.buffer, self.cursor, key)
        elif key in ("x", "d"):
            self.cursor = delete_selection(self.buffer, self.cursor, self.anchor)
            self.anchor = None
            self.mode = EditorMode.NORMAL

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def status_line(self) -> StatusLine:
        return StatusLine(
            mode=self.mode.value,
            filename=self.filename,
            scroll=scroll_label(self.cursor.line, self.buffer.line_count),
            coords=f"{self.cursor.line + 1}:{self.cursor.col + 1}",
        )

    def snapshot(self) -> EditorSnapshot:
        return EditorSnapshot(
            lines=self.buffer.snapshot(),
            cursor=self.cursor,
            mode=self.mode,
            anchor=self.anchor,
            pending_prefix=self.pending_prefix,
            status=self.status_line(),
        )

    def close(self) -> None:
        """Drop in-flight prefix state and its timer."""
        self._clear_prefix()
