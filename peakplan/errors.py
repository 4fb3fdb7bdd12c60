"""Exceptions raised by the planning engine."""

from typing import Optional


class PeakPlanError(Exception):
    """Base class for planner errors."""
    pass


class NotFoundError(PeakPlanError):
    """An entity does not exist or is not owned by the requesting user."""

    def __init__(self, entity: str, entity_id: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        message = f"{entity} not found" if entity_id is None else f"{entity} {entity_id} not found"
        super().__init__(message)


class WorkoutDayConflictError(PeakPlanError):
    """The target day already holds another workout in the same week."""

    def __init__(self, week_id: str, day_of_week: int):
        self.week_id = week_id
        self.day_of_week = day_of_week
        super().__init__(f"Day {day_of_week} already has a workout in week {week_id}")
