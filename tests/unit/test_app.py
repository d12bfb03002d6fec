"""
Unit tests for the host application: key events, routing and hand-off.
"""

import pytest

from vimpytype.app import KeyEvent, Screen, TrainerApp, key_event_to_token
from vimpytype.core.keys import ADVANCE
from vimpytype.training.drill import DrillSession
from vimpytype.training.events import SessionKind
from vimpytype.training.lesson import LessonSession
from vimpytype.training.recognizer import MatchOutcome


@pytest.fixture
def app(scheduler, settings, fixed_choice):
    return TrainerApp(scheduler, settings=settings, rng=fixed_choice("j"))


class TestKeyEvents:
    def test_plain_key(self):
        assert key_event_to_token(KeyEvent("j")) == "j"

    def test_repeat_is_dropped(self):
        assert key_event_to_token(KeyEvent("j", repeat=True)) is None

    @pytest.mark.parametrize("key", ["Control", "Shift", "Alt", "Meta"])
    def test_bare_modifier_is_dropped(self, key):
        assert key_event_to_token(KeyEvent(key)) is None

    def test_ctrl_combination(self):
        assert key_event_to_token(KeyEvent("d", ctrl=True)) == "Ctrl+d"

    def test_named_key_passes_through(self):
        assert key_event_to_token(KeyEvent("Escape")) == "Escape"


class TestRouting:
    def test_no_session_ignores_input(self, app):
        assert app.handle_token("j") is None
        assert app.screen == Screen.MODE_SELECT

    def test_set_difficulty(self, app):
        app.set_difficulty("medium")
        assert app.screen == Screen.DASHBOARD
        assert "gg" in app.key_set

    def test_events_reach_drill(self, app):
        drill = app.start_drill()
        assert app.screen == Screen.DRILL
        assert app.handle_event(KeyEvent("j")) == MatchOutcome.EXACT_MATCH
        assert drill.score == 10

    def test_starting_a_session_stops_the_previous(self, app, scheduler):
        drill = app.start_drill()
        drill.handle_key("j")
        challenge = app.start_challenge()
        assert not drill.active
        assert app.session is challenge
        assert scheduler.pending == 0

    def test_stop_session(self, app):
        app.start(SessionKind.CHALLENGE)
        app.stop_session()
        assert app.session is None
        assert app.screen == Screen.DASHBOARD

    def test_listeners_follow_new_sessions(self, app):
        events = []
        app.subscribe(events.append)
        app.start_drill()
        assert events


class TestHandoff:
    def test_lesson_completion_starts_drill(self, app):
        lesson = app.start_lesson()
        assert isinstance(lesson, LessonSession)
        for key in ["h", "j", "k", "l"]:
            app.handle_token(key)
            app.handle_token(ADVANCE)
        assert lesson.complete

        app.handle_token(ADVANCE)
        assert not lesson.active
        assert isinstance(app.session, DrillSession)
        assert app.session.active
        assert app.screen == Screen.DRILL
        assert app.session.keys == ("h", "j", "k", "l")
