"""Database module for the peakplan training planner."""

from .database import Database, get_db, close_db
from .models import (
    Exercise,
    Goal,
    Sport,
    TrainingPlan,
    TrainingWeek,
    User,
    ExerciseLog,
    WeeklyCheckIn,
    Workout,
    WorkoutExercise,
    WorkoutLog,
)

__all__ = [
    "Database",
    "get_db",
    "close_db",
    "Exercise",
    "Goal",
    "Sport",
    "TrainingPlan",
    "TrainingWeek",
    "User",
    "WeeklyCheckIn",
    "Workout",
    "WorkoutExercise",
    "WorkoutLog",
    "ExerciseLog",
]
