"""Tests for profiles, goals and the library seed."""

import pytest
from datetime import date

from sqlalchemy import func, select

from conftest import OTHER_USER_ID, USER_ID
from peakplan.db.models import Exercise, Goal, Sport, User
from peakplan.db.seed import EXERCISES, SPORTS, seed_library
from peakplan.errors import NotFoundError
from peakplan.planning.goals import create_goal, list_goals, list_sports, set_profile


class TestSeed:

    def test_seed_counts(self, empty_db):
        counts = seed_library(empty_db)
        assert counts == {"sports": len(SPORTS), "exercises": len(EXERCISES)}
        assert len(SPORTS) == 10

    def test_reseed_is_noop(self, db):
        assert seed_library(db) == {"sports": 0, "exercises": 0}
        with db.get_session() as session:
            assert session.scalar(select(func.count(Sport.id))) == 10
            assert session.scalar(select(func.count(Exercise.id))) == len(EXERCISES)


class TestGoals:

    def test_create_goal_creates_user(self, db):
        goal = create_goal(USER_ID, "skiing", "2026-12-01", "Ski season", db=db)
        assert goal.target_date == date(2026, 12, 1)
        assert goal.status == "active"
        with db.get_session() as session:
            assert session.get(User, USER_ID) is not None
            assert session.get(Goal, goal.id).name == "Ski season"

    def test_unknown_sport(self, db):
        with pytest.raises(NotFoundError):
            create_goal(USER_ID, "curling", "2026-12-01", "Stones", db=db)

    def test_bad_date(self, db):
        with pytest.raises(ValueError):
            create_goal(USER_ID, "skiing", "December", "Ski season", db=db)

    def test_set_profile(self, db):
        set_profile(USER_ID, "beginner", None, db=db)
        user = set_profile(USER_ID, None, 4, db=db)
        assert (user.fitness_level, user.training_days_per_week) == ("beginner", 4)

    @pytest.mark.parametrize("level,days", [("elite", None), (None, 0), (None, 8)])
    def test_set_profile_rejects_bad_values(self, db, level, days):
        with pytest.raises(ValueError):
            set_profile(USER_ID, level, days, db=db)

    def test_list_sports(self, db):
        sports = list_sports(db=db)
        assert len(sports) == 10
        assert [s.name for s in sports] == sorted(s.name for s in sports)
        assert "mountain-biking" in {s.slug for s in sports}

    def test_list_goals(self, db):
        later = create_goal(USER_ID, "skiing", "2026-12-01", "Ski season", db=db)
        sooner = create_goal(USER_ID, "hiking", "2026-06-01", "Summit", db=db)
        create_goal(OTHER_USER_ID, "kayaking", "2026-07-01", "Rapids", db=db)

        goals = list_goals(USER_ID, db=db)
        assert [g.id for g in goals] == [sooner.id, later.id]
        assert goals[0].sport.slug == "hiking"

    def test_list_active_goals(self, db):
        done = create_goal(USER_ID, "skiing", "2026-12-01", "Ski season", db=db)
        active = create_goal(USER_ID, "hiking", "2026-06-01", "Summit", db=db)
        with db.get_session() as session:
            session.get(Goal, done.id).status = "completed"

        assert [g.id for g in list_goals(USER_ID, active_only=True, db=db)] == [active.id]
        assert len(list_goals(USER_ID, db=db)) == 2
