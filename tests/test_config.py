"""Tests for configuration helpers."""

import pytest

from peakplan.config import Config


class TestConfig:

    def test_clamp_score(self):
        assert Config.clamp_score(105) == 100
        assert Config.clamp_score(-3) == 1
        assert Config.clamp_score(55) == 55

    def test_level_workouts(self):
        assert Config.get_level_workouts("beginner") == 3
        assert Config.get_level_workouts("Advanced") == 6
        assert Config.get_level_workouts(None) is None
        assert Config.get_level_workouts("elite") is None

    def test_validate_defaults(self):
        assert Config.validate()

    def test_validate_rejects_bad_range(self, monkeypatch):
        monkeypatch.setattr(Config, "MIN_SCORE", 50)
        monkeypatch.setattr(Config, "MAX_SCORE", 10)
        with pytest.raises(ValueError):
            Config.validate()

    def test_validate_rejects_bad_scale(self, monkeypatch):
        monkeypatch.setattr(Config, "SCORE_SCALE", 0)
        with pytest.raises(ValueError):
            Config.validate()
