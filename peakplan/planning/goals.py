"""User profiles and goals that plans are generated from."""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from ..db.database import Database, get_db
from ..db.models import FitnessLevel, Goal, GoalStatus, Sport, User
from ..errors import NotFoundError
from .calendar import DateLike, parse_date

logger = logging.getLogger(__name__)

FITNESS_LEVELS = tuple(level.value for level in FitnessLevel)


def _get_or_create_user(session, user_id: str) -> User:
    user = session.get(User, user_id)
    if user is None:
        user = User(id=user_id)
        session.add(user)
        session.flush()
        logger.info(f"Created user {user_id}")
    return user


def set_profile(
    user_id: str,
    fitness_level: Optional[str] = None,
    training_days_per_week: Optional[int] = None,
    db: Optional[Database] = None,
) -> User:
    """Create or update the user's planning preferences."""
    if fitness_level is not None and fitness_level not in FITNESS_LEVELS:
        raise ValueError(f"fitness_level must be one of {', '.join(FITNESS_LEVELS)}")
    if training_days_per_week is not None and not 1 <= training_days_per_week <= 7:
        raise ValueError("training_days_per_week must be between 1 and 7")

    db = db or get_db()
    with db.get_session() as session:
        user = _get_or_create_user(session, user_id)
        if fitness_level is not None:
            user.fitness_level = fitness_level
        if training_days_per_week is not None:
            user.training_days_per_week = training_days_per_week
    return user


def create_goal(
    user_id: str,
    sport_slug: str,
    target_date: DateLike,
    name: str,
    description: Optional[str] = None,
    db: Optional[Database] = None,
) -> Goal:
    """Create an active goal for a sport.

    Raises:
        NotFoundError: Unknown sport slug
        ValueError: Malformed target date
    """
    target = parse_date(target_date)

    db = db or get_db()
    with db.get_session() as session:
        sport = session.scalars(select(Sport).where(Sport.slug == sport_slug)).first()
        if sport is None:
            raise NotFoundError("Sport", sport_slug)

        _get_or_create_user(session, user_id)
        goal = Goal(
            user_id=user_id,
            sport_id=sport.id,
            name=name,
            description=description,
            target_date=target,
            status=GoalStatus.ACTIVE.value,
        )
        session.add(goal)
        session.flush()
        goal_id = goal.id

    logger.info(f"Created goal {goal_id} ({sport_slug}) for {target}")
    return goal


def list_sports(db: Optional[Database] = None) -> List[Sport]:
    """All sports by name."""
    db = db or get_db()
    with db.get_session() as session:
        return list(session.scalars(select(Sport).order_by(Sport.name)))


def list_goals(
    user_id: str,
    active_only: bool = False,
    db: Optional[Database] = None,
) -> List[Goal]:
    """The user's goals, nearest target date first, with their sport loaded."""
    stmt = (
        select(Goal)
        .where(Goal.user_id == user_id)
        .options(selectinload(Goal.sport))
        .order_by(Goal.target_date, Goal.created_at)
    )
    if active_only:
        stmt = stmt.where(Goal.status == GoalStatus.ACTIVE.value)

    db = db or get_db()
    with db.get_session() as session:
        return list(session.scalars(stmt))
