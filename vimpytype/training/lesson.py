"""
Guided lesson.

One key per step. A step is satisfied when the learner types its key; the
learner then confirms (advance key or confirm()) to move on. Steps are
filtered to the chosen difficulty and shown in declared order. After the
last step the lesson is complete and offers a hand-off into a drill.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from vimpytype.config import Settings
from vimpytype.core.difficulty import Difficulty, get_difficulty
from vimpytype.core.keys import ADVANCE
from vimpytype.core.scheduling import Scheduler
from vimpytype.training.base import TrainingSession
from vimpytype.training.events import (
    HandoffRequested,
    SessionCompleted,
    SessionKind,
    StepSatisfied,
    StepStarted,
)
from vimpytype.training.recognizer import MatchOutcome, RecognizerPolicy, SequenceSpec


@dataclass(frozen=True)
class LessonStep:
    """A single step in the lesson progression."""

    text: str  # Instruction shown above the editor
    key: str  # Target in sequence notation
    difficulty: Difficulty

    @property
    def spec(self) -> SequenceSpec:
        return SequenceSpec.parse(self.key)


# ============================================================================
# LESSON CONTENT
# ============================================================================

LESSON_STEPS: list[LessonStep] = [
    # Basic movement
    LessonStep("Welcome! Press 'h' to move left.", "h", Difficulty.EASY),
    LessonStep("Very good! Press 'j' to move down.", "j", Difficulty.EASY),
    LessonStep("Perfect. Press 'k' to move up.", "k", Difficulty.EASY),
    LessonStep("Great. Press 'l' to move right.", "l", Difficulty.EASY),
    # Word and line movement
    LessonStep("Those are the basics! Press 'w' to jump one word forward.", "w", Difficulty.MEDIUM),
    LessonStep("And 'b' to jump one word back.", "b", Difficulty.MEDIUM),
    LessonStep("Press '$' to jump to the end of the line.", "$", Difficulty.MEDIUM),
    LessonStep("Press '%' to jump to the matching bracket.", "%", Difficulty.MEDIUM),
    # Document movement
    LessonStep("'gg' jumps to the top of the document. (Press g twice)", "gg", Difficulty.MEDIUM),
    LessonStep("'G' jumps to the end of the document.", "G", Difficulty.MEDIUM),
    # Advanced movement
    LessonStep("Press '0' to jump to the start of the line.", "0", Difficulty.HARD),
    LessonStep("Press '^' to jump to the first non-blank character.", "^", Difficulty.HARD),
    LessonStep("Press 'e' to jump to the end of the next word.", "e", Difficulty.HARD),
]

LESSON_CODE = """def tutorial():
    print("Welcome to VimpyType")
    # Follow the instructions above
    return True"""
LESSON_FILENAME = "tutorial.py"
LESSON_CURSOR = (1, 10)

CORRECT_MESSAGE = "Correct! Press space to continue."
COMPLETE_MESSAGE = "Lesson complete! You are ready to practise. Press space to start a drill."


def select_steps(steps: list[LessonStep], difficulty: Difficulty) -> list[LessonStep]:
    """Steps at exactly this difficulty, in order. Falls back to all steps."""
    selected = [step for step in steps if step.difficulty.level == difficulty.level]
    return selected or list(steps)


class LessonSession(TrainingSession):
    """Step-by-step introduction to the motions of one difficulty."""

    kind = SessionKind.LESSON
    policy = RecognizerPolicy.HARD_RESET

    def __init__(
        self,
        scheduler: Scheduler,
        difficulty: Difficulty | str | None = None,
        settings: Settings | None = None,
        steps: list[LessonStep] | None = None,
    ):
        super().__init__(scheduler, settings)
        self.difficulty = get_difficulty(difficulty or self.settings.difficulty)
        self.all_steps = steps if steps is not None else LESSON_STEPS
        self.steps: list[LessonStep] = []
        self.index = 0
        self.satisfied = False
        self.complete = False

    @property
    def current_step(self) -> LessonStep | None:
        if self.complete or self.index >= len(self.steps):
            return None
        return self.steps[self.index]

    @property
    def progress(self) -> str:
        return f"Step {min(self.index + 1, len(self.steps))}/{len(self.steps)}"

    def _begin(self) -> None:
        self.steps = select_steps(self.all_steps, self.difficulty)
        self.index = 0
        self.complete = False
        self.editor.load(LESSON_CODE, LESSON_FILENAME, LESSON_CURSOR)
        self._show_step()

    def _show_step(self) -> None:
        step = self.current_step
        if step is None:
            self._finish()
            return
        self.satisfied = False
        self.instruction = step.text
        self.recognizer.reset(step.spec)
        self._emit(StepStarted(self.index, len(self.steps), step.text, step.key))

    def _on_token(self, token: str) -> tuple[MatchOutcome | None, bool]:
        if token == ADVANCE:
            self.confirm()
            return None, False
        if self.complete:
            return None, True

        outcome = self._consume(token)
        if outcome == MatchOutcome.EXACT_MATCH and not self.satisfied:
            self.satisfied = True
            self.instruction = CORRECT_MESSAGE
            self._emit(StepSatisfied(self.index, CORRECT_MESSAGE))
        return outcome, True

    def confirm(self) -> None:
        """Advance past a satisfied step, or accept the drill hand-off."""
        if not self.active:
            return
        if self.complete:
            logger.info("Lesson hand-off to drill accepted")
            self.stop()
            self._emit(HandoffRequested(SessionKind.LESSON, SessionKind.DRILL))
        elif self.satisfied:
            self.index += 1
            self._show_step()

    def _finish(self) -> None:
        self.complete = True
        self.satisfied = False
        self.recognizer.reset()
        self.instruction = COMPLETE_MESSAGE
        logger.info("Lesson at {} complete ({} steps)", self.difficulty.value, len(self.steps))
        self._emit(
            SessionCompleted(
                SessionKind.LESSON,
                self.score,
                COMPLETE_MESSAGE,
                handoff=SessionKind.DRILL,
            )
        )
