"""Shared fixtures: an in-memory database seeded with the exercise library."""

from datetime import date, timedelta

import pytest

from peakplan.db.database import Database
from peakplan.db.seed import seed_library
from peakplan.planning.goals import create_goal, set_profile

# A Monday, so plan week 1 starts on this date
PLAN_START = date(2026, 1, 5)
USER_ID = "athlete-1"
OTHER_USER_ID = "athlete-2"


@pytest.fixture
def empty_db():
    """Fresh in-memory SQLite database with tables but no rows."""
    db = Database("sqlite:///:memory:")
    db.create_tables()
    yield db
    db.close()


@pytest.fixture
def db(empty_db):
    """In-memory database with the sports and exercise library loaded."""
    seed_library(empty_db)
    return empty_db


@pytest.fixture
def make_goal(db):
    """Create a goal `weeks` weeks after PLAN_START for a sport."""

    def _make(sport_slug="skiing", weeks=10, user_id=USER_ID, fitness_level=None, training_days=None):
        if fitness_level is not None or training_days is not None:
            set_profile(user_id, fitness_level, training_days, db=db)
        goal = create_goal(
            user_id,
            sport_slug,
            PLAN_START + timedelta(weeks=weeks),
            name=f"{sport_slug} season",
            db=db,
        )
        return goal.id

    return _make
