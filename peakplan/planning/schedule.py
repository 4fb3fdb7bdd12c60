"""Plan views and per-workout schedule changes (skip, move to another day)."""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import select

from ..db.database import Database, get_db
from ..db.models import (
    Exercise,
    Goal,
    PlanStatus,
    Sport,
    TrainingPlan,
    TrainingWeek,
    Workout,
    WorkoutExercise,
    WorkoutLog,
    WorkoutStatus,
)
from ..errors import NotFoundError, WorkoutDayConflictError
from .calendar import today_utc
from .workout_log import find_log

logger = logging.getLogger(__name__)


@dataclass
class PlanOverview:
    plan: TrainingPlan
    goal: Goal
    sport: Sport
    weeks: List[TrainingWeek] = field(default_factory=list)


@dataclass
class WorkoutDetail:
    workout: Workout
    exercises: List[Tuple[WorkoutExercise, Exercise]] = field(default_factory=list)
    log: Optional[WorkoutLog] = None


@dataclass
class WeekDetail:
    week: TrainingWeek
    workouts: List[WorkoutDetail] = field(default_factory=list)


class ScheduleService:
    """Read and rearrange a user's scheduled workouts."""

    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_db()

    def _workout_detail(self, session, workout: Workout) -> WorkoutDetail:
        rows = session.execute(
            select(WorkoutExercise, Exercise)
            .join(Exercise, WorkoutExercise.exercise_id == Exercise.id)
            .where(WorkoutExercise.workout_id == workout.id)
            .order_by(WorkoutExercise.order_in_workout)
        ).all()
        return WorkoutDetail(workout=workout, exercises=[(we, ex) for we, ex in rows])

    def _owned_workout(self, session, workout_id: str, user_id: str) -> Workout:
        workout = session.scalars(
            select(Workout)
            .join(TrainingWeek, Workout.week_id == TrainingWeek.id)
            .join(TrainingPlan, TrainingWeek.plan_id == TrainingPlan.id)
            .where(Workout.id == workout_id, TrainingPlan.user_id == user_id)
        ).first()
        if workout is None:
            raise NotFoundError("Workout", workout_id)
        return workout

    def _active_plan(self, session, user_id: str):
        return session.execute(
            select(TrainingPlan, Goal, Sport)
            .join(Goal, TrainingPlan.goal_id == Goal.id)
            .join(Sport, Goal.sport_id == Sport.id)
            .where(
                TrainingPlan.user_id == user_id,
                TrainingPlan.status == PlanStatus.ACTIVE.value,
            )
            .order_by(Goal.target_date)
            .limit(1)
        ).first()

    def get_current_plan(self, user_id: str) -> Optional[PlanOverview]:
        """The user's active plan for the nearest goal, with its weeks."""
        with self.db.get_session() as session:
            row = self._active_plan(session, user_id)
            if row is None:
                return None
            plan, goal, sport = row
            weeks = session.scalars(
                select(TrainingWeek)
                .where(TrainingWeek.plan_id == plan.id)
                .order_by(TrainingWeek.week_number)
            ).all()
            return PlanOverview(plan=plan, goal=goal, sport=sport, weeks=list(weeks))

    def get_week(self, week_id: str, user_id: str) -> Optional[WeekDetail]:
        """A week with its workouts by day and each workout's exercises in order."""
        with self.db.get_session() as session:
            week = session.scalars(
                select(TrainingWeek)
                .join(TrainingPlan, TrainingWeek.plan_id == TrainingPlan.id)
                .where(TrainingWeek.id == week_id, TrainingPlan.user_id == user_id)
            ).first()
            if week is None:
                return None

            workouts = session.scalars(
                select(Workout)
                .where(Workout.week_id == week_id)
                .order_by(Workout.day_of_week, Workout.order_in_day)
            ).all()
            return WeekDetail(
                week=week,
                workouts=[self._workout_detail(session, w) for w in workouts],
            )

    def get_today_workout(self, user_id: str, today: Optional[date] = None) -> Optional[WorkoutDetail]:
        """Today's scheduled workout with any log, or None on a rest or skipped day."""
        today = today or today_utc()

        with self.db.get_session() as session:
            row = self._active_plan(session, user_id)
            if row is None:
                return None
            plan = row[0]

            week = session.scalars(
                select(TrainingWeek)
                .where(TrainingWeek.plan_id == plan.id, TrainingWeek.start_date <= today)
                .order_by(TrainingWeek.start_date.desc())
                .limit(1)
            ).first()
            if week is None:
                return None

            workout = session.scalars(
                select(Workout)
                .where(
                    Workout.week_id == week.id,
                    Workout.day_of_week == today.weekday(),
                    Workout.status != WorkoutStatus.SKIPPED.value,
                )
                .order_by(Workout.order_in_day)
                .limit(1)
            ).first()
            if workout is None:
                return None

            detail = self._workout_detail(session, workout)
            detail.log = find_log(session, workout.id, user_id)
            return detail

    def toggle_skip_workout(self, workout_id: str, user_id: str) -> str:
        """Flip a workout between scheduled and skipped.

        Returns:
            The new status value
        """
        with self.db.get_session() as session:
            workout = self._owned_workout(session, workout_id, user_id)
            if workout.status == WorkoutStatus.SKIPPED.value:
                workout.status = WorkoutStatus.SCHEDULED.value
            else:
                workout.status = WorkoutStatus.SKIPPED.value
            new_status = workout.status

        logger.info(f"Workout {workout_id} is now {new_status}")
        return new_status

    def swap_workout_day(self, workout_id: str, user_id: str, new_day_of_week: int) -> Workout:
        """Move a workout to another day of the same week.

        Raises:
            ValueError: Day outside 0..6
            NotFoundError: Workout missing or not owned by the user
            WorkoutDayConflictError: Another workout already occupies the day
        """
        if not 0 <= new_day_of_week <= 6:
            raise ValueError(f"day_of_week must be between 0 and 6, got {new_day_of_week}")

        with self.db.get_session() as session:
            workout = self._owned_workout(session, workout_id, user_id)
            if workout.day_of_week == new_day_of_week:
                return workout

            conflict = session.scalars(
                select(Workout.id).where(
                    Workout.week_id == workout.week_id,
                    Workout.day_of_week == new_day_of_week,
                    Workout.id != workout.id,
                )
            ).first()
            if conflict is not None:
                raise WorkoutDayConflictError(workout.week_id, new_day_of_week)

            old_day = workout.day_of_week
            workout.day_of_week = new_day_of_week

        logger.info(f"Moved workout {workout_id} from day {old_day} to day {new_day_of_week}")
        return workout
