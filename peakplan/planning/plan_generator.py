"""Plan generation: turns a goal into a fully scheduled training plan.

Regeneration is destructive. Any active plan for the goal is deleted
(cascading to weeks, workouts and prescriptions) and replaced inside the
same transaction, so callers never see a half-built plan.
"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy import select

from ..config import config
from ..db.database import Database, get_db
from ..db.models import (
    Goal,
    PlanStatus,
    TrainingPlan,
    TrainingWeek,
    User,
    Workout,
    WorkoutExercise,
)
from ..errors import NotFoundError
from .calendar import monday_of, today_utc
from .exercise_selector import ExerciseSelector
from .periodization import build_periodization, get_prescription
from .sport_templates import get_workout_slots

logger = logging.getLogger(__name__)


def resolve_workouts_per_week(
    nominal: int,
    training_days: Optional[int] = None,
    fitness_level: Optional[str] = None,
) -> int:
    """Effective sessions for a week.

    An explicit training-days preference wins over the fitness-level
    default; either one can only lower the phase's nominal count.
    """
    if training_days is not None:
        return min(nominal, training_days)

    level_days = config.get_level_workouts(fitness_level)
    if level_days is not None:
        return min(nominal, level_days)

    return nominal


def scale_score(score: int) -> int:
    """Convert a 1-10 generation score to the stored 1-100 scale."""
    return config.clamp_score(score * config.SCORE_SCALE)


class PlanGenerator:
    """Generate and persist periodized training plans."""

    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_db()

    def generate_plan(self, user_id: str, goal_id: str, today: Optional[date] = None) -> str:
        """Generate (or regenerate) the plan for a goal.

        Args:
            user_id: Owner of the goal
            goal_id: Goal to plan for
            today: Reference date, defaults to the current UTC date

        Returns:
            ID of the new active plan

        Raises:
            NotFoundError: Goal missing or owned by another user
        """
        start_date = monday_of(today or today_utc())

        with self.db.get_session() as session:
            # Locking the goal row serializes concurrent regenerations
            goal = session.scalars(
                select(Goal)
                .where(Goal.id == goal_id, Goal.user_id == user_id)
                .with_for_update()
            ).first()
            if goal is None:
                raise NotFoundError("Goal", goal_id)

            sport = goal.sport
            if sport is None:
                raise NotFoundError("Sport", goal.sport_id)

            user = session.get(User, user_id)
            training_days = user.training_days_per_week if user else None
            fitness_level = user.fitness_level if user else None

            existing = session.scalars(
                select(TrainingPlan).where(
                    TrainingPlan.goal_id == goal_id,
                    TrainingPlan.status == PlanStatus.ACTIVE.value,
                )
            ).all()
            for old_plan in existing:
                logger.info(f"Replacing active plan {old_plan.id} for goal {goal_id}")
                session.delete(old_plan)
            if existing:
                # Deletes must reach the database before the new active plan is inserted
                session.flush()

            week_specs = build_periodization(start_date, goal.target_date)

            plan = TrainingPlan(
                user_id=user_id,
                goal_id=goal_id,
                name=goal.name,
                start_date=start_date,
                end_date=goal.target_date,
                total_weeks=len(week_specs),
                status=PlanStatus.ACTIVE.value,
            )
            session.add(plan)
            session.flush()

            selector = ExerciseSelector(session)

            for spec in week_specs:
                effective = resolve_workouts_per_week(
                    spec.workouts_per_week, training_days, fitness_level
                )
                slots = get_workout_slots(sport.slug, effective)

                week = TrainingWeek(
                    plan_id=plan.id,
                    week_number=spec.week_number,
                    phase=spec.phase.value,
                    start_date=spec.start_date,
                    volume_score=scale_score(spec.volume_score),
                    intensity_score=scale_score(spec.intensity_score),
                    workouts_per_week=len(slots),
                    notes=spec.notes,
                )
                session.add(week)
                session.flush()

                for slot in slots:
                    workout = Workout(
                        week_id=week.id,
                        name=slot.name,
                        day_of_week=slot.day_of_week,
                        estimated_minutes=slot.estimated_minutes,
                        focus=slot.focus,
                    )
                    session.add(workout)
                    session.flush()

                    selected = selector.select_exercises(
                        sport.id, slot.primary_muscles, slot.exercise_count, slot.prefer_type
                    )
                    if not selected:
                        logger.warning(
                            f"No exercises matched slot '{slot.name}' for {sport.slug} "
                            f"(week {spec.week_number})"
                        )

                    for order, exercise in enumerate(selected, start=1):
                        prescription = get_prescription(spec.phase, exercise.type)
                        session.add(WorkoutExercise(
                            workout_id=workout.id,
                            exercise_id=exercise.id,
                            order_in_workout=order,
                            sets=prescription.sets,
                            reps=prescription.reps,
                            rest_seconds=prescription.rest_seconds,
                        ))

                logger.debug(
                    f"Week {spec.week_number} ({spec.phase.value}): {len(slots)} workouts"
                )

            plan_id = plan.id

        logger.info(
            f"Generated plan {plan_id} for goal {goal_id}: {len(week_specs)} weeks "
            f"from {start_date} to {goal.target_date}"
        )
        return plan_id


def generate_plan(
    user_id: str,
    goal_id: str,
    db: Optional[Database] = None,
    today: Optional[date] = None,
) -> str:
    """Generate the plan for a goal using the given (or global) database."""
    return PlanGenerator(db).generate_plan(user_id, goal_id, today=today)
