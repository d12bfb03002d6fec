"""
Text buffer and cursor model for the simulated editor.

The buffer is a plain list of lines and always holds at least one line.
Cursor columns follow the modal-editor convention: in NORMAL and VISUAL
mode the cursor sits on a character (last index at most), in INSERT mode it
may sit one past the end of the line.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CursorPosition:
    """Zero-based line/column pair."""

    line: int = 0
    col: int = 0

    def moved(self, line: int | None = None, col: int | None = None) -> CursorPosition:
        return CursorPosition(
            self.line if line is None else line,
            self.col if col is None else col,
        )


@dataclass
class TextBuffer:
    """Ordered, mutable lines of text. Never empty."""

    lines: list[str] = field(default_factory=lambda: [""])

    def __post_init__(self) -> None:
        if not self.lines:
            self.lines = [""]

    @classmethod
    def from_text(cls, text: str) -> TextBuffer:
        return cls(text.split("\n"))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def last_line(self) -> int:
        return len(self.lines) - 1

    def line(self, index: int) -> str:
        return self.lines[index]

    def line_length(self, index: int) -> int:
        return len(self.lines[index])

    def last_col(self, index: int) -> int:
        """Last valid NORMAL-mode column of a line (0 for an empty line)."""
        return max(0, len(self.lines[index]) - 1)

    def char_at(self, pos: CursorPosition) -> str | None:
        text = self.lines[pos.line]
        if 0 <= pos.col < len(text):
            return text[pos.col]
        return None

    def snapshot(self) -> tuple[str, ...]:
        """Current lines without exposing internal mutability."""
        return tuple(self.lines)


def clamp_normal(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition:
    """Clamp a position to NORMAL/VISUAL bounds."""
    line = min(max(pos.line, 0), buffer.last_line)
    col = min(max(pos.col, 0), buffer.last_col(line))
    return CursorPosition(line, col)


def clamp_insert(buffer: TextBuffer, pos: CursorPosition) -> CursorPosition:
    """Clamp a position to INSERT bounds (one past the last character allowed)."""
    line = min(max(pos.line, 0), buffer.last_line)
    col = min(max(pos.col, 0), buffer.line_length(line))
    return CursorPosition(line, col)
