"""
Notifications published by training sessions.

Sessions never render. They publish these events to subscribers; a
presentation layer decides what to draw, play or store.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

from vimpytype.editor.modes import EditorSnapshot
from vimpytype.training.recognizer import MatchOutcome


class SessionKind(str, Enum):
    """Kinds of training session."""

    LESSON = "lesson"
    DRILL = "drill"
    CHALLENGE = "challenge"


@dataclass(frozen=True)
class KeyMatched:
    """Outcome of one token fed to the recognizer."""

    token: str
    outcome: MatchOutcome
    buffer: tuple[str, ...]


@dataclass(frozen=True)
class ScoreChanged:
    score: int
    delta: int


@dataclass(frozen=True)
class StepStarted:
    """A new lesson step, drill round or challenge is active."""

    index: int
    total: int | None  # None for open-ended drills
    instruction: str
    target: str


@dataclass(frozen=True)
class StepSatisfied:
    index: int
    message: str


@dataclass(frozen=True)
class SessionCompleted:
    """Terminal state reached. handoff names the session offered next, if any."""

    kind: SessionKind
    score: int
    message: str
    handoff: SessionKind | None = None


@dataclass(frozen=True)
class HandoffRequested:
    """The learner accepted the offered follow-up session."""

    source: SessionKind
    target: SessionKind


@dataclass(frozen=True)
class EditorChanged:
    snapshot: EditorSnapshot


@dataclass(frozen=True)
class SessionStopped:
    kind: SessionKind
    score: int


SessionEvent = Union[
    KeyMatched,
    ScoreChanged,
    StepStarted,
    StepSatisfied,
    SessionCompleted,
    HandoffRequested,
    EditorChanged,
    SessionStopped,
]

Listener = Callable[[SessionEvent], None]
