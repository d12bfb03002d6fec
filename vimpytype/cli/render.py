"""
Rich rendering of editor snapshots and training state.

Presentation only: reads snapshots and session attributes, never mutates.
"""

from __future__ import annotations

import re

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from vimpytype.core.difficulty import KeySet
from vimpytype.editor.modes import EditorMode, EditorSnapshot
from vimpytype.training.base import TrainingSession

# =============================================================================
# THEME
# =============================================================================

THEME = {
    "primary": "#61AFEF",
    "success": "#98C379",
    "warning": "#E5C07B",
    "error": "#E06C75",
    "dim": "#5C6370",
    "keyword": "#C678DD",
    "string": "#98C379",
    "comment": "#5C6370",
    "number": "#D19A66",
    "function": "#61AFEF",
}

MODE_STYLES = {
    EditorMode.NORMAL: Style(color="black", bgcolor=THEME["primary"], bold=True),
    EditorMode.INSERT: Style(color="black", bgcolor=THEME["success"], bold=True),
    EditorMode.VISUAL: Style(color="black", bgcolor=THEME["keyword"], bold=True),
}

KEYWORDS = frozenset(
    {
        "def", "return", "print", "if", "else", "elif", "for", "while", "import",
        "from", "pass", "class", "try", "except", "True", "False", "None", "in",
        "and", "or", "not",
    }
)

_WORD = re.compile(r"\b\w+\b")


def highlight_line(line: str) -> list[str]:
    """Per-character syntax class ('' for plain text). Basic Python only."""
    styles = [""] * len(line)

    comment = line.find("#")
    if comment != -1:
        for i in range(comment, len(line)):
            styles[i] = "comment"

    quote = ""
    for i, char in enumerate(line):
        if styles[i] == "comment":
            break
        if not quote and char in ("'", '"'):
            quote = char
            styles[i] = "string"
        elif quote:
            styles[i] = "string"
            if char == quote:
                quote = ""

    for match in _WORD.finditer(line):
        start, end = match.span()
        if any(styles[start:end]):
            continue
        word = match.group(0)
        if word in KEYWORDS:
            kind = "keyword"
        elif word.isdigit():
            kind = "number"
        elif line[end : end + 1] == "(":
            kind = "function"
        else:
            continue
        for i in range(start, end):
            styles[i] = kind
    return styles


def render_buffer(snapshot: EditorSnapshot) -> Text:
    """Buffer text with syntax colours and the cursor drawn in mode colour."""
    text = Text()
    cursor = snapshot.cursor
    cursor_style = MODE_STYLES[snapshot.mode]
    for index, line in enumerate(snapshot.lines):
        styles = highlight_line(line)
        for col, char in enumerate(line):
            if index == cursor.line and col == cursor.col:
                text.append(char, style=cursor_style)
            elif styles[col]:
                text.append(char, style=THEME[styles[col]])
            else:
                text.append(char)
        if index == cursor.line and cursor.col >= len(line):
            text.append(" ", style=cursor_style)
        if index < len(snapshot.lines) - 1:
            text.append("\n")
    return text


def render_status(snapshot: EditorSnapshot) -> Text:
    status = snapshot.status
    text = Text()
    text.append(f" {status.mode} ", style=MODE_STYLES[snapshot.mode])
    text.append(f" {status.filename} ", style=Style(color=THEME["dim"]))
    if snapshot.pending_prefix is not None:
        text.append(f" {snapshot.pending_prefix.token}", style=Style(color=THEME["warning"]))
    text.append(f"  {status.scroll}  {status.coords}", style=Style(color=THEME["dim"]))
    return text


def render_keyboard(key_set: KeySet, highlight: str | None = None) -> Text:
    """One cap per key in the set; the current target is highlighted."""
    text = Text()
    for key in key_set.unique_keys():
        if key == highlight:
            text.append(f" {key} ", style=Style(color="black", bgcolor=THEME["warning"], bold=True))
        else:
            text.append(f" {key} ", style=Style(color=THEME["primary"]))
        text.append(" ")
    return text


def render_session(session: TrainingSession, key_set: KeySet | None = None) -> Panel:
    """Full view of a running session: instruction, buffer, status line, keys."""
    snapshot = session.snapshot()
    instruction = Text(session.instruction or " ", style=Style(bold=True))
    parts = [instruction, Text(""), render_buffer(snapshot), Text(""), render_status(snapshot)]

    highlight = getattr(session, "target", None)
    step = getattr(session, "current_step", None)
    if step is not None:
        highlight = step.key
    if key_set is not None:
        parts.extend([Text(""), render_keyboard(key_set, highlight)])

    return Panel(
        Group(*parts),
        title=f"[bold]{session.kind.value.upper()}[/bold]",
        subtitle=f"Score: {session.score}",
        border_style=THEME["primary"],
        box=box.ROUNDED,
        padding=(1, 2),
    )


def render_key_sets(key_sets: dict) -> Table:
    table = Table(title="Difficulties", box=box.SIMPLE_HEAVY)
    table.add_column("Difficulty", style="bold cyan")
    table.add_column("Keys", justify="right")
    table.add_column("Key set")
    for difficulty, key_set in key_sets.items():
        table.add_row(difficulty.value, str(len(key_set.unique_keys())), " ".join(key_set.unique_keys()))
    return table
