"""Tests for plan generation against the seeded library."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from conftest import OTHER_USER_ID, PLAN_START, USER_ID
from peakplan.db.models import (
    PlanStatus,
    TrainingPlan,
    TrainingWeek,
    Workout,
    WorkoutExercise,
)
from peakplan.errors import NotFoundError
from peakplan.planning.periodization import DELOAD_NOTE
from peakplan.planning.plan_generator import (
    PlanGenerator,
    resolve_workouts_per_week,
    scale_score,
)


class TestResolveWorkouts:

    def test_training_days_cap(self):
        assert resolve_workouts_per_week(4, training_days=3) == 3
        assert resolve_workouts_per_week(3, training_days=6) == 3

    def test_training_days_win_over_fitness_level(self):
        assert resolve_workouts_per_week(4, training_days=6, fitness_level="beginner") == 4

    def test_fitness_level_default(self):
        assert resolve_workouts_per_week(4, fitness_level="beginner") == 3
        assert resolve_workouts_per_week(4, fitness_level="advanced") == 4
        assert resolve_workouts_per_week(4, fitness_level="unknown") == 4

    def test_no_preferences(self):
        assert resolve_workouts_per_week(4) == 4

    def test_scale_score(self):
        assert scale_score(5) == 50
        assert scale_score(0) == 1
        assert scale_score(12) == 100


class TestPlanGenerator:
    """Test persisted plans."""

    @pytest.fixture(autouse=True)
    def _setup(self, db, make_goal):
        self.db = db
        self.make_goal = make_goal
        self.generator = PlanGenerator(db)

    def _weeks(self, session, plan_id):
        return session.scalars(
            select(TrainingWeek)
            .where(TrainingWeek.plan_id == plan_id)
            .order_by(TrainingWeek.week_number)
        ).all()

    def test_generates_full_plan(self):
        goal_id = self.make_goal("skiing", weeks=10)
        plan_id = self.generator.generate_plan(USER_ID, goal_id, today=PLAN_START)

        with self.db.get_session() as session:
            plan = session.get(TrainingPlan, plan_id)
            assert plan.status == PlanStatus.ACTIVE.value
            assert plan.total_weeks == 10
            assert plan.start_date == PLAN_START
            assert plan.name == "skiing season"

            weeks = self._weeks(session, plan_id)
            assert [w.week_number for w in weeks] == list(range(1, 11))
            assert [w.phase for w in weeks] == [
                "base", "base", "base", "recovery",
                "build", "build", "build",
                "peak", "peak", "peak",
            ]
            assert (weeks[0].volume_score, weeks[0].intensity_score) == (50, 30)
            assert (weeks[3].volume_score, weeks[3].intensity_score) == (40, 40)
            assert weeks[3].notes == DELOAD_NOTE
            assert all(1 <= w.volume_score <= 100 for w in weeks)
            assert all(1 <= w.intensity_score <= 100 for w in weeks)

    def test_weekly_workouts_follow_template(self):
        goal_id = self.make_goal("skiing", weeks=10)
        plan_id = self.generator.generate_plan(USER_ID, goal_id, today=PLAN_START)

        with self.db.get_session() as session:
            weeks = self._weeks(session, plan_id)
            for week in weeks:
                assert len(week.workouts) == week.workouts_per_week

            assert [w.day_of_week for w in weeks[0].workouts] == [0, 2, 4]
            assert [w.name for w in weeks[3].workouts] == ["Lower Body Power", "Core & Stability"]
            assert len(weeks[4].workouts) == 4

    def test_exercises_ordered_and_prescribed(self):
        goal_id = self.make_goal("skiing", weeks=10)
        plan_id = self.generator.generate_plan(USER_ID, goal_id, today=PLAN_START)

        with self.db.get_session() as session:
            week = self._weeks(session, plan_id)[4]  # first build week
            for workout in week.workouts:
                orders = [e.order_in_workout for e in workout.exercises]
                assert orders == list(range(1, len(orders) + 1))
                assert 0 < len(orders) <= 5

            lower = week.workouts[0]
            for item in lower.exercises:
                if item.exercise.type == "strength":
                    assert (item.sets, item.reps, item.rest_seconds) == (4, "6-10", 120)
                primaries = {
                    m.muscle_group for m in item.exercise.muscles if m.role == "primary"
                }
                assert primaries & {"quads", "glutes"}

    def test_regenerate_replaces_active_plan(self):
        goal_id = self.make_goal("mountain-biking", weeks=6)
        first = self.generator.generate_plan(USER_ID, goal_id, today=PLAN_START)
        second = self.generator.generate_plan(USER_ID, goal_id, today=PLAN_START)

        assert first != second
        with self.db.get_session() as session:
            active = session.scalars(
                select(TrainingPlan).where(
                    TrainingPlan.goal_id == goal_id,
                    TrainingPlan.status == PlanStatus.ACTIVE.value,
                )
            ).all()
            assert [p.id for p in active] == [second]
            assert session.get(TrainingPlan, first) is None

            # Old weeks, workouts and prescriptions went with the old plan
            assert session.scalar(select(func.count(TrainingWeek.id))) == 6
            orphans = session.scalar(
                select(func.count(Workout.id)).where(
                    Workout.week_id.not_in(select(TrainingWeek.id))
                )
            )
            assert orphans == 0
            orphan_items = session.scalar(
                select(func.count(WorkoutExercise.id)).where(
                    WorkoutExercise.workout_id.not_in(select(Workout.id))
                )
            )
            assert orphan_items == 0

    def test_second_active_plan_for_goal_rejected(self):
        goal_id = self.make_goal("skiing", weeks=10)
        self.generator.generate_plan(USER_ID, goal_id, today=PLAN_START)

        with pytest.raises(IntegrityError):
            with self.db.get_session() as session:
                session.add(TrainingPlan(
                    user_id=USER_ID,
                    goal_id=goal_id,
                    name="duplicate",
                    start_date=PLAN_START,
                    end_date=PLAN_START,
                    total_weeks=1,
                    status=PlanStatus.ACTIVE.value,
                ))

        with self.db.get_session() as session:
            active = session.scalar(
                select(func.count(TrainingPlan.id)).where(
                    TrainingPlan.goal_id == goal_id,
                    TrainingPlan.status == PlanStatus.ACTIVE.value,
                )
            )
        assert active == 1

    def test_inactive_plans_do_not_conflict(self):
        goal_id = self.make_goal("skiing", weeks=10)
        self.generator.generate_plan(USER_ID, goal_id, today=PLAN_START)

        with self.db.get_session() as session:
            session.add(TrainingPlan(
                user_id=USER_ID,
                goal_id=goal_id,
                name="archived",
                start_date=PLAN_START,
                end_date=PLAN_START,
                total_weeks=1,
                status=PlanStatus.COMPLETED.value,
            ))

        with self.db.get_session() as session:
            assert session.scalar(
                select(func.count(TrainingPlan.id)).where(TrainingPlan.goal_id == goal_id)
            ) == 2

    def test_beginner_profile_caps_workouts(self):
        goal_id = self.make_goal("skiing", weeks=10, fitness_level="beginner")
        plan_id = self.generator.generate_plan(USER_ID, goal_id, today=PLAN_START)

        with self.db.get_session() as session:
            weeks = self._weeks(session, plan_id)
            assert [w.workouts_per_week for w in weeks] == [3, 3, 3, 2, 3, 3, 3, 3, 3, 3]

    def test_one_training_day_still_gets_two_workouts(self):
        goal_id = self.make_goal("swimming", weeks=2, training_days=1)
        plan_id = self.generator.generate_plan(USER_ID, goal_id, today=PLAN_START)

        with self.db.get_session() as session:
            weeks = self._weeks(session, plan_id)
            assert len(weeks) == 2
            assert all(w.phase == "peak" for w in weeks)
            assert all(w.workouts_per_week == 2 for w in weeks)

    def test_goal_of_another_user(self):
        goal_id = self.make_goal("hiking", weeks=8, user_id=OTHER_USER_ID)
        with pytest.raises(NotFoundError):
            self.generator.generate_plan(USER_ID, goal_id, today=PLAN_START)

    def test_missing_goal(self):
        with pytest.raises(NotFoundError) as exc:
            self.generator.generate_plan(USER_ID, "no-such-goal", today=PLAN_START)
        assert exc.value.entity == "Goal"

    def test_failed_generation_keeps_existing_plan(self, monkeypatch):
        goal_id = self.make_goal("kayaking", weeks=6)
        plan_id = self.generator.generate_plan(USER_ID, goal_id, today=PLAN_START)

        def boom(*args, **kwargs):
            raise RuntimeError("selection failed")

        monkeypatch.setattr(
            "peakplan.planning.plan_generator.ExerciseSelector.select_exercises", boom
        )
        with pytest.raises(RuntimeError):
            self.generator.generate_plan(USER_ID, goal_id, today=PLAN_START)

        with self.db.get_session() as session:
            assert session.get(TrainingPlan, plan_id) is not None
            assert len(self._weeks(session, plan_id)) == 6
