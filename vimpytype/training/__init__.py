"""
Training sessions for VimpyType.

Each session type shares one recognizer algorithm and differs only in policy:
- lesson: hard reset on a miss, confirm to advance, hands off to a drill
- drill: random targets, points for hits, penalty for misses
- challenge: multi-key sequences with alternates, grow-then-trim buffering

Sessions publish events (see events.py) instead of rendering.
"""

from vimpytype.training.base import TrainingSession
from vimpytype.training.challenge import CHALLENGES, Challenge, ChallengeSession
from vimpytype.training.drill import DrillSession
from vimpytype.training.events import (
    EditorChanged,
    HandoffRequested,
    KeyMatched,
    ScoreChanged,
    SessionCompleted,
    SessionKind,
    SessionStopped,
    StepSatisfied,
    StepStarted,
)
from vimpytype.training.lesson import LESSON_STEPS, LessonSession, LessonStep
from vimpytype.training.recognizer import (
    KeySequenceRecognizer,
    MatchOutcome,
    RecognizerPolicy,
    SequenceSpec,
)

__all__ = [
    # Recognizer
    "KeySequenceRecognizer",
    "MatchOutcome",
    "RecognizerPolicy",
    "SequenceSpec",
    # Sessions
    "TrainingSession",
    "LessonSession",
    "LessonStep",
    "LESSON_STEPS",
    "DrillSession",
    "ChallengeSession",
    "Challenge",
    "CHALLENGES",
    # Events
    "SessionKind",
    "KeyMatched",
    "ScoreChanged",
    "StepStarted",
    "StepSatisfied",
    "SessionCompleted",
    "HandoffRequested",
    "EditorChanged",
    "SessionStopped",
]
