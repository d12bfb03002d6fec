"""
Randomised drill.

Each round asks for one key drawn uniformly from the difficulty's key set.
A hit scores points and, after a short confirmation pause, starts the next
round. A miss costs points (never below zero) and keeps the same target.
"""

from __future__ import annotations

import random
from typing import Protocol, Sequence

from vimpytype.config import Settings
from vimpytype.core.difficulty import KeySet, get_key_set
from vimpytype.core.scheduling import Scheduler
from vimpytype.training.base import TrainingSession
from vimpytype.training.events import SessionKind, StepSatisfied, StepStarted
from vimpytype.training.recognizer import MatchOutcome, RecognizerPolicy, SequenceSpec

DRILL_CODE = """def practice():
    # Type the keys shown above
    pass"""
DRILL_FILENAME = "practice.py"
DRILL_CURSOR = (2, 4)


class Chooser(Protocol):
    def choice(self, seq: Sequence[str]) -> str: ...


class DrillSession(TrainingSession):
    """Endless scored practice over a key set."""

    kind = SessionKind.DRILL
    policy = RecognizerPolicy.PENALIZE_ON_MISS

    def __init__(
        self,
        scheduler: Scheduler,
        keys: KeySet | Sequence[str] | None = None,
        settings: Settings | None = None,
        rng: Chooser | None = None,
    ):
        super().__init__(scheduler, settings)
        if keys is None:
            keys = get_key_set(self.settings.difficulty)
        self.keys: tuple[str, ...] = tuple(keys.keys if isinstance(keys, KeySet) else keys)
        self.rng: Chooser = rng or random.Random()
        self.target: str | None = None
        self.round = 0
        self.hits = 0
        self.misses = 0

    def _begin(self) -> None:
        if not self.keys:
            raise ValueError("A drill needs at least one key")
        self.round = 0
        self.hits = 0
        self.misses = 0
        self.editor.load(DRILL_CODE, DRILL_FILENAME, DRILL_CURSOR)
        self._next_round()

    def _next_round(self) -> None:
        self.target = self.rng.choice(self.keys)
        self.round += 1
        self.instruction = f"Do: {self.target}"
        self.recognizer.reset(SequenceSpec.parse(self.target))
        self._emit(StepStarted(self.round, None, self.instruction, self.target))

    def _on_token(self, token: str) -> tuple[MatchOutcome | None, bool]:
        outcome = self._consume(token)
        if outcome == MatchOutcome.EXACT_MATCH:
            self.hits += 1
            self._add_score(self.settings.drill_hit_points)
            self._emit(StepSatisfied(self.round, f"+{self.settings.drill_hit_points}"))
            self._pause_then(self.settings.drill_confirm_delay_ms, self._next_round)
        elif outcome == MatchOutcome.NO_MATCH and self.policy.penalizes_miss:
            self.misses += 1
            self._add_score(-self.settings.drill_miss_penalty)
        return outcome, True
