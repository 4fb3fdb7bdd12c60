"""Tests for plan views, skipping and moving workouts."""

import pytest
from datetime import timedelta

from conftest import OTHER_USER_ID, PLAN_START, USER_ID
from peakplan.errors import NotFoundError, WorkoutDayConflictError
from peakplan.planning.plan_generator import generate_plan
from peakplan.planning.schedule import ScheduleService


class TestScheduleService:
    """Test reads and edits on a 10-week skiing plan."""

    @pytest.fixture(autouse=True)
    def _setup(self, db, make_goal):
        self.db = db
        self.goal_id = make_goal("skiing", weeks=10)
        self.plan_id = generate_plan(USER_ID, self.goal_id, db=db, today=PLAN_START)
        self.service = ScheduleService(db)
        overview = self.service.get_current_plan(USER_ID)
        self.week_1 = self.service.get_week(overview.weeks[0].id, USER_ID)

    def _workout_on(self, day):
        return next(d.workout for d in self.week_1.workouts if d.workout.day_of_week == day)

    def test_current_plan(self):
        overview = self.service.get_current_plan(USER_ID)
        assert overview.plan.id == self.plan_id
        assert overview.goal.id == self.goal_id
        assert overview.sport.slug == "skiing"
        assert [w.week_number for w in overview.weeks] == list(range(1, 11))

    def test_no_current_plan(self):
        assert self.service.get_current_plan(OTHER_USER_ID) is None

    def test_nearest_goal_wins(self, make_goal):
        sooner = make_goal("hiking", weeks=5)
        plan_id = generate_plan(USER_ID, sooner, db=self.db, today=PLAN_START)
        assert self.service.get_current_plan(USER_ID).plan.id == plan_id

    def test_week_detail(self):
        days = [d.workout.day_of_week for d in self.week_1.workouts]
        assert days == [0, 2, 4]
        for detail in self.week_1.workouts:
            orders = [item.order_in_workout for item, _ in detail.exercises]
            assert orders == list(range(1, len(orders) + 1))

    def test_week_of_another_user(self):
        assert self.service.get_week(self.week_1.week.id, OTHER_USER_ID) is None

    def test_today_workout(self):
        detail = self.service.get_today_workout(USER_ID, today=PLAN_START)
        assert detail.workout.name == "Lower Body Power"
        assert detail.exercises

    def test_today_in_later_week(self):
        # Wednesday of week 2
        detail = self.service.get_today_workout(USER_ID, today=PLAN_START + timedelta(days=9))
        assert detail.workout.day_of_week == 2
        assert detail.workout.week_id != self.week_1.week.id

    def test_rest_day(self):
        assert self.service.get_today_workout(USER_ID, today=PLAN_START + timedelta(days=1)) is None

    def test_before_plan_start(self):
        assert self.service.get_today_workout(USER_ID, today=PLAN_START - timedelta(days=3)) is None

    def test_skip_toggles(self):
        workout = self._workout_on(0)
        assert self.service.toggle_skip_workout(workout.id, USER_ID) == "skipped"
        assert self.service.get_today_workout(USER_ID, today=PLAN_START) is None

        assert self.service.toggle_skip_workout(workout.id, USER_ID) == "scheduled"
        assert self.service.get_today_workout(USER_ID, today=PLAN_START) is not None

    def test_skip_not_owned(self):
        with pytest.raises(NotFoundError):
            self.service.toggle_skip_workout(self._workout_on(0).id, OTHER_USER_ID)

    def test_move_to_free_day(self):
        workout = self._workout_on(0)
        moved = self.service.swap_workout_day(workout.id, USER_ID, 1)
        assert moved.day_of_week == 1

        week = self.service.get_week(self.week_1.week.id, USER_ID)
        assert [d.workout.day_of_week for d in week.workouts] == [1, 2, 4]
        assert self.service.get_today_workout(USER_ID, today=PLAN_START) is None

    def test_move_to_occupied_day(self):
        with pytest.raises(WorkoutDayConflictError):
            self.service.swap_workout_day(self._workout_on(0).id, USER_ID, 2)

    def test_move_to_same_day(self):
        workout = self._workout_on(4)
        assert self.service.swap_workout_day(workout.id, USER_ID, 4).day_of_week == 4

    @pytest.mark.parametrize("day", [-1, 7])
    def test_move_invalid_day(self, day):
        with pytest.raises(ValueError):
            self.service.swap_workout_day(self._workout_on(0).id, USER_ID, day)

    def test_move_not_owned(self):
        with pytest.raises(NotFoundError):
            self.service.swap_workout_day(self._workout_on(0).id, OTHER_USER_ID, 1)
