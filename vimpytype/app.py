"""
Host application: routes input to the active training session.

Responsibilities kept out of the core:
- turning raw key events into tokens (auto-repeat and bare modifier presses
  are dropped, Ctrl plus a character becomes "Ctrl+<char>")
- holding the difficulty selection
- starting/stopping sessions and following the lesson -> drill hand-off
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from loguru import logger

from vimpytype.config import Settings, get_settings
from vimpytype.core.difficulty import Difficulty, KeySet, get_difficulty, get_key_set
from vimpytype.core.keys import MODIFIER_KEYS, modified_token
from vimpytype.core.scheduling import Scheduler
from vimpytype.training.base import TrainingSession
from vimpytype.training.challenge import ChallengeSession
from vimpytype.training.drill import Chooser, DrillSession
from vimpytype.training.events import (
    HandoffRequested,
    Listener,
    SessionEvent,
    SessionKind,
    SessionStopped,
)
from vimpytype.training.lesson import LessonSession
from vimpytype.training.recognizer import MatchOutcome


@dataclass(frozen=True)
class KeyEvent:
    """A raw key press as reported by an input device."""

    key: str
    ctrl: bool = False
    repeat: bool = False


def key_event_to_token(event: KeyEvent) -> str | None:
    """Translate a raw key event to a token, or None if it should be ignored."""
    if event.repeat or event.key in MODIFIER_KEYS:
        return None
    if event.ctrl and len(event.key) == 1:
        return modified_token("Ctrl", event.key)
    return event.key


class Screen(str, Enum):
    """Which part of the trainer has focus."""

    MODE_SELECT = "mode_select"
    DASHBOARD = "dashboard"
    LESSON = "lesson"
    DRILL = "drill"
    CHALLENGE = "challenge"


_SESSION_SCREENS = {
    SessionKind.LESSON: Screen.LESSON,
    SessionKind.DRILL: Screen.DRILL,
    SessionKind.CHALLENGE: Screen.CHALLENGE,
}


class TrainerApp:
    """Owns at most one running session and forwards tokens to it."""

    def __init__(
        self,
        scheduler: Scheduler,
        settings: Settings | None = None,
        rng: Chooser | None = None,
    ):
        self.scheduler = scheduler
        self.settings = settings or get_settings()
        self.rng = rng
        self.difficulty: Difficulty = self.settings.difficulty
        self.screen = Screen.MODE_SELECT
        self.session: TrainingSession | None = None
        self._listeners: list[Listener] = []

    @property
    def key_set(self) -> KeySet:
        return get_key_set(self.difficulty)

    def subscribe(self, listener: Listener) -> None:
        """Listen to events of every session this app starts."""
        self._listeners.append(listener)

    def set_difficulty(self, name: str | Difficulty) -> Difficulty:
        self.difficulty = get_difficulty(name)
        self.screen = Screen.DASHBOARD
        logger.info("Difficulty set to {}", self.difficulty.value)
        return self.difficulty

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def start_lesson(self) -> LessonSession:
        session = LessonSession(self.scheduler, self.difficulty, settings=self.settings)
        self._launch(session)
        return session

    def start_drill(self) -> DrillSession:
        session = DrillSession(self.scheduler, self.key_set, settings=self.settings, rng=self.rng)
        self._launch(session)
        return session

    def start_challenge(self) -> ChallengeSession:
        session = ChallengeSession(self.scheduler, settings=self.settings)
        self._launch(session)
        return session

    def start(self, kind: SessionKind) -> TrainingSession:
        starters: dict[SessionKind, Callable[[], TrainingSession]] = {
            SessionKind.LESSON: self.start_lesson,
            SessionKind.DRILL: self.start_drill,
            SessionKind.CHALLENGE: self.start_challenge,
        }
        return starters[kind]()

    def stop_session(self) -> None:
        if self.session is not None:
            self.session.stop()
        self.session = None
        self.screen = Screen.DASHBOARD

    def _launch(self, session: TrainingSession) -> None:
        self.stop_session()
        session.subscribe(self._on_event)
        for listener in self._listeners:
            session.subscribe(listener)
        self.session = session
        self.screen = _SESSION_SCREENS[session.kind]
        session.start()

    def _on_event(self, event: SessionEvent) -> None:
        if isinstance(event, HandoffRequested):
            self.start(event.target)
        elif isinstance(event, SessionStopped):
            if self.session is not None and not self.session.active:
                self.session = None
                self.screen = Screen.DASHBOARD

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def handle_event(self, event: KeyEvent) -> MatchOutcome | None:
        token = key_event_to_token(event)
        if token is None:
            return None
        return self.handle_token(token)

    def handle_token(self, token: str) -> MatchOutcome | None:
        if self.session is None:
            return None
        return self.session.handle_key(token)
