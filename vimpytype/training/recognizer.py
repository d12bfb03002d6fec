"""
Key-sequence recognizer.

Matches a stream of key tokens against the accepted sequences of a
SequenceSpec (one primary plus any number of alternates):

    consume(token) -> EXACT_MATCH | PARTIAL | NO_MATCH

The buffer grows by one token per call. An exact match clears it for the
next step. A strict prefix of any accepted sequence is a partial match. What
happens on a partial match and on a miss depends on the policy:

    Policy             Partial                  Miss
    HARD_RESET         arm inactivity timer     clear buffer
    PENALIZE_ON_MISS   arm inactivity timer     clear buffer, caller penalises
    GROW_THEN_TRIM     nothing                  keep growing; past
                                                longest + slack keep last key
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

from vimpytype.core.keys import format_sequence, parse_sequence
from vimpytype.core.scheduling import Scheduler, TimerSlot


class MatchOutcome(str, Enum):
    """Result of feeding one token."""

    EXACT_MATCH = "exact_match"
    PARTIAL = "partial"
    NO_MATCH = "no_match"


class RecognizerPolicy(str, Enum):
    """Buffering policy chosen by each kind of training session."""

    HARD_RESET = "hard_reset"  # Lesson
    PENALIZE_ON_MISS = "penalize_on_miss"  # Drill
    GROW_THEN_TRIM = "grow_then_trim"  # Challenge

    @property
    def arms_partial_timeout(self) -> bool:
        return self != RecognizerPolicy.GROW_THEN_TRIM

    @property
    def resets_on_miss(self) -> bool:
        return self != RecognizerPolicy.GROW_THEN_TRIM

    @property
    def penalizes_miss(self) -> bool:
        return self == RecognizerPolicy.PENALIZE_ON_MISS


@dataclass(frozen=True)
class SequenceSpec:
    """Token sequences accepted as correct for one step."""

    primary: tuple[str, ...]
    alternates: tuple[tuple[str, ...], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.primary:
            raise ValueError("SequenceSpec needs a non-empty primary sequence")
        if any(not alt for alt in self.alternates):
            raise ValueError("SequenceSpec alternates must be non-empty")

    @classmethod
    def parse(cls, primary: str, alternates: list[str] | tuple[str, ...] = ()) -> SequenceSpec:
        """Build a spec from sequence notation ("wcwn<Esc>", "Ctrl+d", ...)."""
        return cls(
            parse_sequence(primary),
            tuple(parse_sequence(alt) for alt in alternates),
        )

    @property
    def accepted(self) -> tuple[tuple[str, ...], ...]:
        return (self.primary, *self.alternates)

    @property
    def max_length(self) -> int:
        return max(len(seq) for seq in self.accepted)

    def __str__(self) -> str:
        return " | ".join(format_sequence(seq) for seq in self.accepted)


class KeySequenceRecognizer:
    """
    Prefix-tolerant matcher for one SequenceSpec at a time.

    Each instance belongs to exactly one session and owns at most one
    pending inactivity timer.
    """

    def __init__(
        self,
        policy: RecognizerPolicy,
        scheduler: Scheduler,
        partial_timeout_ms: float = 800,
        trim_slack: int = 2,
    ):
        self.policy = policy
        self.partial_timeout_ms = partial_timeout_ms
        self.trim_slack = trim_slack
        self.spec: SequenceSpec | None = None
        self._buffer: list[str] = []
        self._timer = TimerSlot(scheduler, f"{policy.value}-partial")

    @property
    def buffer(self) -> tuple[str, ...]:
        return tuple(self._buffer)

    @property
    def timer_armed(self) -> bool:
        return self._timer.armed

    def reset(self, spec: SequenceSpec | None = None) -> None:
        """Start a new step. Keeps the current spec when none is given."""
        self._timer.cancel()
        self._buffer.clear()
        if spec is not None:
            self.spec = spec

    def close(self) -> None:
        """Tear down: cancel the timer and forget the spec."""
        self._timer.cancel()
        self._buffer.clear()
        self.spec = None

    def consume(self, token: str) -> MatchOutcome:
        if self.spec is None:
            return MatchOutcome.NO_MATCH

        self._timer.cancel()
        self._buffer.append(token)
        buffered = tuple(self._buffer)
        accepted = self.spec.accepted

        if buffered in accepted:
            logger.debug("Exact match {}", format_sequence(buffered))
            self._buffer.clear()
            return MatchOutcome.EXACT_MATCH

        if any(len(seq) > len(buffered) and seq[: len(buffered)] == buffered for seq in accepted):
            if self.policy.arms_partial_timeout:
                self._timer.arm(self.partial_timeout_ms, self._expire_partial)
            return MatchOutcome.PARTIAL

        if self.policy.resets_on_miss:
            self._buffer.clear()
        elif len(self._buffer) > self.spec.max_length + self.trim_slack:
            del self._buffer[:-1]
        return MatchOutcome.NO_MATCH

    def extend_timeout(self, min_ms: float) -> None:
        """Keep a pending partial buffer alive for at least min_ms more."""
        if self._timer.armed and self._timer.remaining_ms() < min_ms:
            self._timer.arm(min_ms, self._expire_partial)

    def _expire_partial(self) -> None:
        logger.debug("Partial buffer {} timed out", format_sequence(self._buffer))
        self._buffer.clear()
