"""Logging completed workouts and individual sets.

A workout has at most one log per user. Logging again updates it, and so
does logging the same set number of an exercise twice.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Union

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from ..db.database import Database, get_db
from ..db.models import (
    ExerciseLog,
    LogStatus,
    TrainingPlan,
    TrainingWeek,
    Workout,
    WorkoutExercise,
    WorkoutLog,
)
from ..errors import NotFoundError
from .calendar import today_utc

logger = logging.getLogger(__name__)

MIN_EFFORT = 1
MAX_EFFORT = 10


@dataclass
class HistoryEntry:
    log: WorkoutLog
    workout: Workout


def _validate_effort(perceived_effort: Optional[int]):
    if perceived_effort is not None and not MIN_EFFORT <= perceived_effort <= MAX_EFFORT:
        raise ValueError(
            f"perceived_effort must be between {MIN_EFFORT} and {MAX_EFFORT}, got {perceived_effort}"
        )


def _to_weight(weight_kg: Union[Decimal, float, str, None]) -> Optional[Decimal]:
    if weight_kg is None:
        return None
    try:
        weight = Decimal(str(weight_kg)).quantize(Decimal("0.01"))
    except InvalidOperation:
        raise ValueError(f"Invalid weight {weight_kg!r}")
    if weight < 0:
        raise ValueError("weight_kg must not be negative")
    return weight


def find_log(session, workout_id: str, user_id: str) -> Optional[WorkoutLog]:
    """The user's log for a workout, sets and their exercises loaded."""
    return session.scalars(
        select(WorkoutLog)
        .where(WorkoutLog.workout_id == workout_id, WorkoutLog.user_id == user_id)
        .options(selectinload(WorkoutLog.sets).selectinload(ExerciseLog.exercise))
    ).first()


class WorkoutLogService:
    """Record how scheduled workouts actually went."""

    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_db()

    def _require_owned(self, session, workout_id: str, user_id: str):
        owned = session.scalars(
            select(Workout.id)
            .join(TrainingWeek, Workout.week_id == TrainingWeek.id)
            .join(TrainingPlan, TrainingWeek.plan_id == TrainingPlan.id)
            .where(Workout.id == workout_id, TrainingPlan.user_id == user_id)
        ).first()
        if owned is None:
            raise NotFoundError("Workout", workout_id)

    def get_log(self, workout_id: str, user_id: str) -> Optional[WorkoutLog]:
        """Existing log for a workout, with its sets loaded, or None."""
        with self.db.get_session() as session:
            return find_log(session, workout_id, user_id)

    def log_workout(
        self,
        workout_id: str,
        user_id: str,
        status,
        duration_minutes: Optional[int] = None,
        perceived_effort: Optional[int] = None,
        notes: Optional[str] = None,
        logged_on: Optional[date] = None,
    ) -> WorkoutLog:
        """Create or update the log for a workout.

        The log date is set when the log is first created and kept on updates.

        Raises:
            NotFoundError: Workout missing or not owned by the user
            ValueError: Unknown status or effort outside 1..10
        """
        status = LogStatus(status)
        _validate_effort(perceived_effort)
        if duration_minutes is not None and duration_minutes < 0:
            raise ValueError("duration_minutes must not be negative")

        with self.db.get_session() as session:
            self._require_owned(session, workout_id, user_id)

            log = find_log(session, workout_id, user_id)
            if log is None:
                log = WorkoutLog(
                    workout_id=workout_id,
                    user_id=user_id,
                    date=logged_on or today_utc(),
                )
                session.add(log)

            log.status = status.value
            log.completed = status == LogStatus.COMPLETED
            log.duration_minutes = duration_minutes
            log.perceived_effort = perceived_effort
            log.notes = notes
            session.flush()

        logger.info(f"Logged workout {workout_id} as {status.value}")
        return log

    def log_set(
        self,
        workout_id: str,
        user_id: str,
        order_in_workout: int,
        set_number: int,
        reps_completed: Optional[int] = None,
        weight_kg=None,
        duration_seconds: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> ExerciseLog:
        """Record one set of the exercise at a position in the workout.

        The workout must already be logged.

        Raises:
            NotFoundError: Workout, its log or the exercise position is missing
            ValueError: Set number below 1 or a malformed weight
        """
        if set_number < 1:
            raise ValueError(f"set_number must be at least 1, got {set_number}")
        weight = _to_weight(weight_kg)

        with self.db.get_session() as session:
            self._require_owned(session, workout_id, user_id)

            log = find_log(session, workout_id, user_id)
            if log is None:
                raise NotFoundError("Workout log", workout_id)

            item = session.scalars(
                select(WorkoutExercise).where(
                    WorkoutExercise.workout_id == workout_id,
                    WorkoutExercise.order_in_workout == order_in_workout,
                )
            ).first()
            if item is None:
                raise NotFoundError("Exercise", f"#{order_in_workout} in workout {workout_id}")

            entry = session.scalars(
                select(ExerciseLog).where(
                    ExerciseLog.workout_log_id == log.id,
                    ExerciseLog.exercise_id == item.exercise_id,
                    ExerciseLog.set_number == set_number,
                )
            ).first()
            if entry is None:
                entry = ExerciseLog(
                    workout_log_id=log.id,
                    exercise_id=item.exercise_id,
                    set_number=set_number,
                )
                session.add(entry)

            entry.reps_completed = reps_completed
            entry.weight_kg = weight
            entry.duration_seconds = duration_seconds
            entry.notes = notes
            session.flush()

        logger.debug(f"Logged set {set_number} of exercise #{order_in_workout} in workout {workout_id}")
        return entry

    def get_history(self, user_id: str, limit: int = 20) -> List[HistoryEntry]:
        """Most recent logs first."""
        with self.db.get_session() as session:
            rows = session.execute(
                select(WorkoutLog, Workout)
                .join(Workout, WorkoutLog.workout_id == Workout.id)
                .where(WorkoutLog.user_id == user_id)
                .order_by(WorkoutLog.created_at.desc(), WorkoutLog.date.desc())
                .limit(limit)
            ).all()
            return [HistoryEntry(log=log, workout=workout) for log, workout in rows]
