"""
Shared machinery for training sessions.

A session owns one simulated editor and one recognizer. Every token the host
delivers goes to the recognizer (through the subclass policy) and then to
the editor, so the buffer shows the effect of the keys being practised.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from loguru import logger

from vimpytype.config import Settings, get_settings
from vimpytype.core.scheduling import Scheduler, TimerSlot
from vimpytype.editor.modes import EditorSnapshot, ModeStateMachine
from vimpytype.training.events import (
    EditorChanged,
    KeyMatched,
    Listener,
    ScoreChanged,
    SessionEvent,
    SessionKind,
    SessionStopped,
)
from vimpytype.training.recognizer import (
    KeySequenceRecognizer,
    MatchOutcome,
    RecognizerPolicy,
)


class TrainingSession(ABC):
    """
    Base class for lesson, drill and challenge sessions.

    Subclasses set ``kind`` and ``policy``, implement _begin() to set up the
    first step and _on_token() to react to recognizer outcomes.
    """

    kind: SessionKind
    policy: RecognizerPolicy

    def __init__(self, scheduler: Scheduler, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.scheduler = scheduler
        self.editor = ModeStateMachine(
            scheduler,
            prefix_timeout_ms=self.settings.prefix_timeout_ms,
            filename=self.settings.default_filename,
        )
        self.recognizer = KeySequenceRecognizer(
            self.policy,
            scheduler,
            partial_timeout_ms=self.settings.partial_match_timeout_ms,
            trim_slack=self.settings.challenge_trim_slack,
        )
        self._pause = TimerSlot(scheduler, f"{self.kind.value}-pause")
        self._listeners: list[Listener] = []
        self.active = False
        self.score = 0
        self.instruction = ""

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Reset score and state, then enter the first step."""
        self._pause.cancel()
        self.recognizer.reset()
        self.score = 0
        self.active = True
        logger.info("Starting {} session", self.kind.value)
        self._begin()

    def stop(self) -> None:
        """Cancel every pending timer and drop in-flight state immediately."""
        if not self.active:
            return
        self.active = False
        self._pause.cancel()
        self.recognizer.close()
        self.editor.close()
        logger.info("Stopped {} session (score {})", self.kind.value, self.score)
        self._emit(SessionStopped(self.kind, self.score))

    @property
    def pausing(self) -> bool:
        """True during the confirmation pause after a solved step."""
        return self._pause.armed

    def pause_remaining_ms(self) -> float:
        return self._pause.remaining_ms()

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def handle_key(self, token: str) -> MatchOutcome | None:
        """
        Process one token.

        Returns the recognizer outcome, or None when the token was not
        matched (inactive session, confirmation pause, control token).
        """
        if not self.active:
            return None

        outcome: MatchOutcome | None = None
        forward = True
        if not self.pausing:
            outcome, forward = self._on_token(token)

        if forward and self.active:
            snapshot = self.editor.handle_key(token)
            self._hold_for_prefix(snapshot)
            self._emit(EditorChanged(snapshot))
        return outcome

    def _hold_for_prefix(self, snapshot: EditorSnapshot) -> None:
        # A buffered "g" must live as long as the editor's gg window
        prefix = snapshot.pending_prefix
        if prefix is not None:
            self.recognizer.extend_timeout(prefix.expires_at - self.scheduler.now())

    def snapshot(self) -> EditorSnapshot:
        return self.editor.snapshot()

    # -------------------------------------------------------------------------
    # Helpers for subclasses
    # -------------------------------------------------------------------------

    def _consume(self, token: str) -> MatchOutcome:
        outcome = self.recognizer.consume(token)
        logger.debug("{} key {!r} -> {}", self.kind.value, token, outcome.value)
        self._emit(KeyMatched(token, outcome, self.recognizer.buffer))
        return outcome

    def _add_score(self, delta: int) -> None:
        """Apply a score change, never dropping below zero."""
        new_score = max(0, self.score + delta)
        applied = new_score - self.score
        self.score = new_score
        self._emit(ScoreChanged(self.score, applied))

    def _pause_then(self, delay_ms: float, callback: Callable[[], None]) -> None:
        def resume() -> None:
            if self.active:
                callback()

        self._pause.arm(delay_ms, resume)

    @abstractmethod
    def _begin(self) -> None:
        """Set up the first step."""

    @abstractmethod
    def _on_token(self, token: str) -> tuple[MatchOutcome | None, bool]:
        """React to a token. Returns (outcome, forward_to_editor)."""
