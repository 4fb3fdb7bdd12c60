"""Periodization, plan generation and check-in adaptation."""

from .check_in import CheckInAdapter, CheckInResult, submit_check_in
from .exercise_selector import ExerciseSelector, list_exercises, rank_candidates
from .goals import create_goal, list_goals, list_sports, set_profile
from .periodization import (
    PHASE_PARAMS,
    TrainingPhase,
    WeekSpec,
    build_periodization,
    get_prescription,
    phase_blocks,
)
from .plan_generator import PlanGenerator, generate_plan
from .schedule import ScheduleService
from .sport_templates import SPORT_TEMPLATES, WorkoutSlot, get_workout_slots
from .workout_log import WorkoutLogService

__all__ = [
    "CheckInAdapter",
    "CheckInResult",
    "submit_check_in",
    "ExerciseSelector",
    "list_exercises",
    "rank_candidates",
    "create_goal",
    "list_goals",
    "list_sports",
    "set_profile",
    "PHASE_PARAMS",
    "TrainingPhase",
    "WeekSpec",
    "build_periodization",
    "get_prescription",
    "phase_blocks",
    "PlanGenerator",
    "generate_plan",
    "ScheduleService",
    "SPORT_TEMPLATES",
    "WorkoutSlot",
    "get_workout_slots",
    "WorkoutLogService",
]
