"""Database models for sports, the exercise library, goals and training plans."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExerciseType(str, Enum):
    """Exercise categories in the library."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    PLYOMETRIC = "plyometric"
    BALANCE = "balance"


class MuscleRole(str, Enum):
    """How an exercise loads a muscle group."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class FitnessLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class PlanStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class WorkoutStatus(str, Enum):
    SCHEDULED = "scheduled"
    SKIPPED = "skipped"


class LogStatus(str, Enum):
    """How a logged workout went."""

    COMPLETED = "completed"
    PARTIAL = "partial"
    SKIPPED = "skipped"


class CheckInRating(str, Enum):
    """Subjective weekly difficulty rating."""

    TOO_EASY = "too_easy"
    ON_TRACK = "on_track"
    TOO_HARD = "too_hard"


class Sport(Base):
    """Target sport a goal trains for."""

    __tablename__ = "sports"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), unique=True, nullable=False)
    slug = Column(String(100), unique=True, nullable=False)  # template key, e.g. "mountain-biking"
    category = Column(String(20), nullable=False)  # winter, summer, year_round
    icon = Column(String(20))
    description = Column(Text)

    def __repr__(self):
        return f"<Sport(slug={self.slug})>"


class User(Base):
    """Profile fields the generator personalises on."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String(255), unique=True)
    display_name = Column(String(255))
    fitness_level = Column(String(20))  # beginner, intermediate, advanced
    training_days_per_week = Column(Integer)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<User(id={self.id}, fitness_level={self.fitness_level})>"


class Exercise(Base):
    """Exercise library entry. Read-only to the planning engine."""

    __tablename__ = "exercises"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(Text)
    type = Column(String(20), nullable=False)  # ExerciseType value
    equipment = Column(String(50), nullable=False)
    instructions = Column(Text)
    is_bilateral = Column(Boolean, default=True)

    muscles = relationship(
        "ExerciseMuscle", back_populates="exercise", cascade="all, delete-orphan"
    )
    sport_scores = relationship(
        "ExerciseSport", back_populates="exercise", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Exercise(name={self.name}, type={self.type})>"


class ExerciseMuscle(Base):
    """Muscle group targeted by an exercise and the role it plays."""

    __tablename__ = "exercise_muscles"

    id = Column(Integer, primary_key=True)
    exercise_id = Column(String(36), ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False)
    muscle_group = Column(String(30), nullable=False, index=True)
    role = Column(String(20), nullable=False)  # MuscleRole value

    exercise = relationship("Exercise", back_populates="muscles")


class ExerciseSport(Base):
    """Suitability of an exercise for a sport (1-10)."""

    __tablename__ = "exercise_sports"
    __table_args__ = (UniqueConstraint("exercise_id", "sport_id", name="uq_exercise_sport"),)

    id = Column(Integer, primary_key=True)
    exercise_id = Column(String(36), ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False)
    sport_id = Column(String(36), ForeignKey("sports.id"), nullable=False)
    relevance_score = Column(Integer, nullable=False)

    exercise = relationship("Exercise", back_populates="sport_scores")


class Goal(Base):
    """A dated target, e.g. "peak shape for ski season by Dec 1"."""

    __tablename__ = "goals"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    sport_id = Column(String(36), ForeignKey("sports.id"), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    target_date = Column(Date, nullable=False)
    status = Column(String(20), default=GoalStatus.ACTIVE.value, nullable=False)
    created_at = Column(DateTime, default=_utcnow)

    sport = relationship("Sport")

    def __repr__(self):
        return f"<Goal(id={self.id}, target_date={self.target_date}, status={self.status})>"


class TrainingPlan(Base):
    """A periodized plan generated for a goal."""

    __tablename__ = "training_plans"
    __table_args__ = (
        # One active plan per goal
        Index(
            "uq_training_plans_active_goal",
            "goal_id",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    goal_id = Column(String(36), ForeignKey("goals.id"), nullable=False)
    name = Column(String(100), nullable=False)
    start_date = Column(Date, nullable=False)  # Monday
    end_date = Column(Date, nullable=False)
    total_weeks = Column(Integer, nullable=False)
    status = Column(String(20), default=PlanStatus.ACTIVE.value, nullable=False)
    created_at = Column(DateTime, default=_utcnow)

    goal = relationship("Goal")
    weeks = relationship(
        "TrainingWeek",
        back_populates="plan",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TrainingWeek.week_number",
    )

    def __repr__(self):
        return f"<TrainingPlan(id={self.id}, weeks={self.total_weeks}, status={self.status})>"


class TrainingWeek(Base):
    """One week of a plan with its phase and load targets."""

    __tablename__ = "training_weeks"
    __table_args__ = (UniqueConstraint("plan_id", "week_number", name="uq_plan_week_number"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    plan_id = Column(String(36), ForeignKey("training_plans.id", ondelete="CASCADE"), nullable=False)
    week_number = Column(Integer, nullable=False)  # 1-indexed
    phase = Column(String(20), nullable=False)  # TrainingPhase value
    start_date = Column(Date, nullable=False)  # Monday
    volume_score = Column(Integer, nullable=False)  # 1-100
    intensity_score = Column(Integer, nullable=False)  # 1-100
    workouts_per_week = Column(Integer, nullable=False)
    notes = Column(Text)

    plan = relationship("TrainingPlan", back_populates="weeks")
    workouts = relationship(
        "Workout",
        back_populates="week",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: [Workout.day_of_week, Workout.order_in_day],
    )
    check_ins = relationship(
        "WeeklyCheckIn", back_populates="week", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self):
        return f"<TrainingWeek(week={self.week_number}, phase={self.phase}, start={self.start_date})>"


class Workout(Base):
    """A single session within a week."""

    __tablename__ = "workouts"

    id = Column(String(36), primary_key=True, default=_new_id)
    week_id = Column(String(36), ForeignKey("training_weeks.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0 = Monday, 6 = Sunday
    order_in_day = Column(Integer, default=1, nullable=False)
    estimated_minutes = Column(Integer)
    focus = Column(Text)
    status = Column(String(20), default=WorkoutStatus.SCHEDULED.value, nullable=False)

    week = relationship("TrainingWeek", back_populates="workouts")
    exercises = relationship(
        "WorkoutExercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WorkoutExercise.order_in_workout",
    )

    def __repr__(self):
        return f"<Workout(name={self.name}, day={self.day_of_week}, status={self.status})>"


class WorkoutExercise(Base):
    """An exercise prescribed within a workout, in order."""

    __tablename__ = "workout_exercises"
    __table_args__ = (UniqueConstraint("workout_id", "order_in_workout", name="uq_workout_exercise_order"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    workout_id = Column(String(36), ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False)
    exercise_id = Column(String(36), ForeignKey("exercises.id"), nullable=False)
    order_in_workout = Column(Integer, nullable=False)  # 1-indexed
    sets = Column(Integer, nullable=False)
    reps = Column(String(20), nullable=False)  # "8-10", "30s", "AMRAP"
    rest_seconds = Column(Integer)
    notes = Column(Text)

    workout = relationship("Workout", back_populates="exercises")
    exercise = relationship("Exercise")


class WeeklyCheckIn(Base):
    """A user's rating of how a training week felt."""

    __tablename__ = "weekly_check_ins"
    __table_args__ = (UniqueConstraint("week_id", "user_id", name="uq_check_in_week_user"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    week_id = Column(String(36), ForeignKey("training_weeks.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    rating = Column(String(20), nullable=False)  # CheckInRating value
    notes = Column(Text)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    week = relationship("TrainingWeek", back_populates="check_ins")

    def __repr__(self):
        return f"<WeeklyCheckIn(week_id={self.week_id}, rating={self.rating})>"


class WorkoutLog(Base):
    """What the user actually did for a scheduled workout."""

    __tablename__ = "workout_logs"
    __table_args__ = (UniqueConstraint("workout_id", "user_id", name="uq_workout_log_user"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # Regenerating a plan removes its workouts along with their logs
    workout_id = Column(String(36), ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False)  # LogStatus value
    completed = Column(Boolean, default=False, nullable=False)
    duration_minutes = Column(Integer)
    perceived_effort = Column(Integer)  # RPE 1-10
    notes = Column(Text)
    created_at = Column(DateTime, default=_utcnow)

    sets = relationship(
        "ExerciseLog",
        back_populates="workout_log",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ExerciseLog.set_number",
    )

    def __repr__(self):
        return f"<WorkoutLog(workout_id={self.workout_id}, status={self.status})>"


class ExerciseLog(Base):
    """Performance for one set of an exercise within a logged workout."""

    __tablename__ = "exercise_logs"
    __table_args__ = (
        UniqueConstraint("workout_log_id", "exercise_id", "set_number", name="uq_exercise_log_set"),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    workout_log_id = Column(String(36), ForeignKey("workout_logs.id", ondelete="CASCADE"), nullable=False)
    exercise_id = Column(String(36), ForeignKey("exercises.id"), nullable=False)
    set_number = Column(Integer, nullable=False)  # 1-indexed
    reps_completed = Column(Integer)
    weight_kg = Column(Numeric(5, 2))  # None for bodyweight
    duration_seconds = Column(Integer)  # holds and intervals
    notes = Column(Text)

    workout_log = relationship("WorkoutLog", back_populates="sets")
    exercise = relationship("Exercise")

    def __repr__(self):
        return f"<ExerciseLog(exercise_id={self.exercise_id}, set={self.set_number})>"
