"""Tests for weekly check-ins and adaptation of upcoming weeks."""

import pytest
from sqlalchemy import func, select

from conftest import OTHER_USER_ID, PLAN_START, USER_ID
from peakplan.db.models import TrainingWeek, WeeklyCheckIn
from peakplan.errors import NotFoundError
from peakplan.planning.check_in import (
    BOOST_NOTE,
    RECOVERY_NOTE,
    CheckInAdapter,
    append_note,
)
from peakplan.planning.plan_generator import generate_plan


class TestAppendNote:

    def test_empty(self):
        assert append_note(None, "x") == "x"
        assert append_note("", "x") == "x"

    def test_existing(self):
        assert append_note("a", "b") == "a | b"


class TestCheckInAdapter:
    """Test check-in adaptation on a 10-week skiing plan.

    Stored scores by week: 50/30, 60/40, 60/40, 40/40 (deload),
    70/60, 80/70, 90/80, 40/80, 50/90, 50/90.
    """

    @pytest.fixture(autouse=True)
    def _setup(self, db, make_goal):
        self.db = db
        goal_id = make_goal("skiing", weeks=10)
        self.plan_id = generate_plan(USER_ID, goal_id, db=db, today=PLAN_START)
        self.adapter = CheckInAdapter(db)

    def _week(self, number):
        with self.db.get_session() as session:
            return session.scalars(
                select(TrainingWeek).where(
                    TrainingWeek.plan_id == self.plan_id,
                    TrainingWeek.week_number == number,
                )
            ).one()

    def test_on_track_changes_nothing(self):
        before = [(self._week(n).volume_score, self._week(n).phase) for n in range(1, 11)]
        result = self.adapter.submit_check_in(self._week(1).id, USER_ID, "on_track")

        assert not result.adapted
        assert result.message == "Check-in saved. Keep it up!"
        after = [(self._week(n).volume_score, self._week(n).phase) for n in range(1, 11)]
        assert after == before

    def test_too_hard_converts_nearest_week(self):
        result = self.adapter.submit_check_in(self._week(1).id, USER_ID, "too_hard")

        assert result.adapted
        assert result.adjusted_weeks == [2]
        assert result.message == "Week 2 converted to a recovery week to help you bounce back."
        week = self._week(2)
        assert week.phase == "recovery"
        assert (week.volume_score, week.intensity_score) == (40, 40)
        assert week.notes == RECOVERY_NOTE
        # Only the nearest week changes
        assert self._week(3).phase == "base"

    def test_repeated_too_hard_moves_on(self):
        week_1 = self._week(1).id
        self.adapter.submit_check_in(week_1, USER_ID, "too_hard")
        result = self.adapter.submit_check_in(week_1, USER_ID, "too_hard")

        assert result.adjusted_weeks == [3]
        assert self._week(3).phase == "recovery"

    def test_recovery_weeks_are_skipped(self):
        # Week 4 is already a deload, so week 5 is the nearest candidate
        result = self.adapter.submit_check_in(self._week(3).id, USER_ID, "too_hard")

        assert result.adjusted_weeks == [5]
        assert self._week(4).notes != RECOVERY_NOTE

    def test_too_easy_boosts_next_three(self):
        result = self.adapter.submit_check_in(self._week(1).id, USER_ID, "too_easy")

        assert result.adapted
        assert result.adjusted_weeks == [2, 3, 5]
        assert result.message == "Next 3 week(s) boosted in volume and intensity."
        assert (self._week(2).volume_score, self._week(2).intensity_score) == (75, 55)
        assert (self._week(3).volume_score, self._week(3).intensity_score) == (75, 55)
        assert (self._week(5).volume_score, self._week(5).intensity_score) == (85, 75)
        assert self._week(2).notes == BOOST_NOTE
        assert self._week(4).volume_score == 40

    def test_boost_is_capped(self):
        self.adapter.submit_check_in(self._week(6).id, USER_ID, "too_easy")

        assert (self._week(7).volume_score, self._week(7).intensity_score) == (100, 95)
        assert (self._week(8).volume_score, self._week(8).intensity_score) == (55, 95)
        assert (self._week(9).volume_score, self._week(9).intensity_score) == (65, 100)

    def test_boost_notes_accumulate(self):
        week_1 = self._week(1).id
        self.adapter.submit_check_in(week_1, USER_ID, "too_easy")
        self.adapter.submit_check_in(week_1, USER_ID, "too_easy")

        assert self._week(2).notes == f"{BOOST_NOTE} | {BOOST_NOTE}"

    def test_fewer_than_three_future_weeks(self):
        result = self.adapter.submit_check_in(self._week(8).id, USER_ID, "too_easy")
        assert result.adjusted_weeks == [9, 10]
        assert result.message == "Next 2 week(s) boosted in volume and intensity."

    def test_last_week_has_nothing_to_adapt(self):
        result = self.adapter.submit_check_in(self._week(10).id, USER_ID, "too_hard")

        assert not result.adapted
        assert result.message == "Check-in saved. No future weeks to adapt."
        # The check-in itself is still stored
        assert self.adapter.get_check_in(self._week(10).id, USER_ID).rating == "too_hard"

    def test_resubmitting_updates_check_in(self):
        week_1 = self._week(1).id
        self.adapter.submit_check_in(week_1, USER_ID, "on_track", notes="fine")
        self.adapter.submit_check_in(week_1, USER_ID, "too_hard", notes="legs gone")

        with self.db.get_session() as session:
            count = session.scalar(select(func.count(WeeklyCheckIn.id)))
        assert count == 1
        check_in = self.adapter.get_check_in(week_1, USER_ID)
        assert (check_in.rating, check_in.notes) == ("too_hard", "legs gone")

    def test_get_check_in_none(self):
        assert self.adapter.get_check_in(self._week(1).id, USER_ID) is None

    def test_unknown_rating(self):
        with pytest.raises(ValueError):
            self.adapter.submit_check_in(self._week(1).id, USER_ID, "meh")

    def test_week_of_another_user(self):
        with pytest.raises(NotFoundError):
            self.adapter.submit_check_in(self._week(1).id, OTHER_USER_ID, "too_hard")
        with pytest.raises(NotFoundError):
            self.adapter.get_check_in(self._week(1).id, OTHER_USER_ID)
