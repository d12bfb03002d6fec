"""
Multi-key challenges.

An ordered list of tasks, each with a primary key sequence and accepted
alternatives. A solved challenge scores points and, after a pause, loads the
next one into the editor. Wrong keys never cost points; the recognizer keeps
growing the buffer so stray leading keys do not lose progress.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from vimpytype.config import Settings
from vimpytype.core.scheduling import Scheduler
from vimpytype.training.base import TrainingSession
from vimpytype.training.events import (
    SessionCompleted,
    SessionKind,
    StepSatisfied,
    StepStarted,
)
from vimpytype.training.recognizer import MatchOutcome, RecognizerPolicy, SequenceSpec


@dataclass(frozen=True)
class Challenge:
    """One task: code to show, instruction, accepted sequences."""

    instruction: str
    code: str
    target: str
    alternates: tuple[str, ...] = field(default_factory=tuple)
    filename: str | None = None

    @property
    def spec(self) -> SequenceSpec:
        return SequenceSpec.parse(self.target, self.alternates)


CHALLENGES: list[Challenge] = [
    Challenge(
        instruction="Navigate to the word 'total' (line 2)",
        code="""def calculate_sum(numbers):
    total = 0
    for num in numbers:
        total += num
    return total""",
        target="jjw",
        alternates=("2jw", "/total<Enter>"),
    ),
    Challenge(
        instruction="Delete the line containing 'print'",
        code="""result = calculate_sum([1, 2, 3])
print(f"Sum: {result}")
# End of script""",
        target="jdd",
        alternates=("Gdd", "/print<Enter>dd"),
    ),
    Challenge(
        instruction="Change 'num' to 'n' (in the loop)",
        code="""    for num in numbers:
        total += num""",
        target="wcwn<Esc>",
        alternates=("dwian<Esc>",),
    ),
    Challenge(
        instruction="Jump to the end of the file",
        code="""import os

def main():
    print("Hello")

if __name__ == "__main__":
    main()""",
        target="G",
        alternates=(":$",),
    ),
    Challenge(
        instruction="Copy the first line",
        code="""def copy_me():
    pass""",
        target="yy",
        alternates=("Y",),
    ),
]

FINISHED_CODE = "Great job!"
CORRECT_MESSAGE = "Correct! Next challenge..."


class ChallengeSession(TrainingSession):
    """Works through CHALLENGES (or a given list) in order."""

    kind = SessionKind.CHALLENGE
    policy = RecognizerPolicy.GROW_THEN_TRIM

    def __init__(
        self,
        scheduler: Scheduler,
        challenges: list[Challenge] | None = None,
        settings: Settings | None = None,
    ):
        super().__init__(scheduler, settings)
        self.challenges = challenges if challenges is not None else CHALLENGES
        self.index = 0
        self.finished = False

    @property
    def current(self) -> Challenge | None:
        if self.finished or self.index >= len(self.challenges):
            return None
        return self.challenges[self.index]

    def _begin(self) -> None:
        if not self.challenges:
            raise ValueError("A challenge session needs at least one challenge")
        self.index = 0
        self.finished = False
        self._load_challenge()

    def _load_challenge(self) -> None:
        challenge = self.current
        if challenge is None:
            self._finish()
            return
        spec = challenge.spec
        self.editor.load(challenge.code, challenge.filename or self.settings.default_filename)
        self.recognizer.reset(spec)
        self.instruction = challenge.instruction
        self._emit(StepStarted(self.index, len(self.challenges), challenge.instruction, str(spec)))

    def _on_token(self, token: str) -> tuple[MatchOutcome | None, bool]:
        if self.finished:
            return None, True
        outcome = self._consume(token)
        if outcome == MatchOutcome.EXACT_MATCH:
            self._add_score(self.settings.challenge_points)
            self.instruction = CORRECT_MESSAGE
            self._emit(StepSatisfied(self.index, CORRECT_MESSAGE))
            self._pause_then(self.settings.challenge_advance_delay_ms, self._advance)
        return outcome, True

    def _advance(self) -> None:
        self.index += 1
        self._load_challenge()

    def _finish(self) -> None:
        self.finished = True
        self.recognizer.reset()
        message = f"Challenge complete! Final score: {self.score}"
        self.instruction = message
        self.editor.load(FINISHED_CODE)
        logger.info("Challenges finished with score {}", self.score)
        self._emit(SessionCompleted(SessionKind.CHALLENGE, self.score, message))
