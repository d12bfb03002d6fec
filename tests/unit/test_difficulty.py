"""
Unit tests for difficulties, key sets and settings.
"""

import pytest

from vimpytype.config import Settings
from vimpytype.core.difficulty import KEY_SETS, Difficulty, get_difficulty, get_key_set


class TestDifficulty:
    @pytest.mark.parametrize("name", ["easy", "EASY", " medium ", "hard", "meister"])
    def test_known_names(self, name):
        assert get_difficulty(name).value == name.strip().lower()

    def test_unknown_falls_back_to_easy(self):
        assert get_difficulty("impossible") == Difficulty.EASY
        assert get_key_set("impossible") == KEY_SETS[Difficulty.EASY]

    def test_levels_are_ordered(self):
        levels = [d.level for d in Difficulty]
        assert levels == sorted(levels)


class TestKeySets:
    def test_easy_is_basic_movement(self):
        assert get_key_set("easy").keys == ("h", "j", "k", "l")

    def test_sets_grow_with_difficulty(self):
        easy, medium, hard = (set(get_key_set(d).keys) for d in ("easy", "medium", "hard"))
        assert easy < medium < hard

    def test_meister_has_page_scrolling(self):
        meister = get_key_set(Difficulty.MEISTER)
        assert "Ctrl+d" in meister
        assert "gg" in meister
        assert len(meister.unique_keys()) == len(meister)


class TestSettings:
    def test_defaults(self, settings):
        assert settings.partial_match_timeout_ms == 800
        assert settings.prefix_timeout_ms == 1000
        assert settings.drill_confirm_delay_ms == 200
        assert settings.challenge_advance_delay_ms == 1000
        assert settings.challenge_trim_slack == 2

    def test_fixture_ignores_exported_overrides(self, monkeypatch, request):
        monkeypatch.setenv("VIMPYTYPE_DRILL_MISS_PENALTY", "3")
        monkeypatch.setenv("VIMPYTYPE_PARTIAL_MATCH_TIMEOUT_MS", "50")
        settings = request.getfixturevalue("settings")
        assert settings.drill_miss_penalty == 10
        assert settings.partial_match_timeout_ms == 800

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("VIMPYTYPE_DIFFICULTY", "hard")
        monkeypatch.setenv("VIMPYTYPE_DRILL_MISS_PENALTY", "5")
        settings = Settings(_env_file=None)
        assert settings.difficulty == Difficulty.HARD
        assert settings.drill_miss_penalty == 5
