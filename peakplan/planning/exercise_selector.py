"""Exercise selection for workout slots.

Candidates are exercises with a primary role on any of the slot's target
muscles. They are ranked by relevance to the sport, optionally narrowed to a
preferred exercise type, and the top entries fill the slot.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from ..db.database import Database
from ..db.models import Exercise, ExerciseMuscle, ExerciseSport, MuscleRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExerciseCandidate:
    """Library exercise considered for a slot."""

    id: str
    type: str
    name: str = ""
    relevance: Optional[int] = None  # None when no score exists for the sport


@dataclass(frozen=True)
class SelectedExercise:
    id: str
    type: str


def rank_candidates(
    candidates: Iterable[ExerciseCandidate],
    count: int,
    prefer_type: Optional[str] = None,
) -> List[SelectedExercise]:
    """Pick the top `count` candidates by sport relevance.

    Missing relevance ranks last; ties keep the input order. A type
    preference is dropped when it would leave fewer than `count` candidates.
    """
    if count <= 0:
        return []

    unique: Dict[str, ExerciseCandidate] = {}
    for candidate in candidates:
        unique.setdefault(candidate.id, candidate)

    ranked = sorted(
        unique.values(),
        key=lambda c: (c.relevance is None, -(c.relevance or 0)),
    )

    pool = ranked
    if prefer_type and prefer_type != "any":
        filtered = [c for c in ranked if c.type == prefer_type]
        if len(filtered) >= count:
            pool = filtered

    return [SelectedExercise(id=c.id, type=c.type) for c in pool[:count]]


class ExerciseSelector:
    """Fills workout slots from the exercise library."""

    def __init__(self, session: Session):
        self.session = session
        self._candidate_cache: Dict[Tuple[str, Tuple[str, ...]], List[ExerciseCandidate]] = {}

    def find_candidates(self, sport_id: str, primary_muscles: Sequence[str]) -> List[ExerciseCandidate]:
        """Exercises with a primary role on any of the muscles, in library order."""
        key = (sport_id, tuple(sorted(primary_muscles)))
        if key in self._candidate_cache:
            return self._candidate_cache[key]

        if not primary_muscles:
            return []

        matching_ids = (
            select(ExerciseMuscle.exercise_id)
            .where(
                ExerciseMuscle.muscle_group.in_(list(primary_muscles)),
                ExerciseMuscle.role == MuscleRole.PRIMARY.value,
            )
        )
        stmt = (
            select(Exercise.id, Exercise.type, Exercise.name, ExerciseSport.relevance_score)
            .outerjoin(
                ExerciseSport,
                and_(ExerciseSport.exercise_id == Exercise.id, ExerciseSport.sport_id == sport_id),
            )
            .where(Exercise.id.in_(matching_ids))
            .order_by(Exercise.name)
        )

        candidates = [
            ExerciseCandidate(id=row.id, type=row.type, name=row.name, relevance=row.relevance_score)
            for row in self.session.execute(stmt)
        ]
        self._candidate_cache[key] = candidates
        return candidates

    def select_exercises(
        self,
        sport_id: str,
        primary_muscles: Sequence[str],
        count: int,
        prefer_type: Optional[str] = None,
    ) -> List[SelectedExercise]:
        """Select up to `count` exercises for a slot.

        Returns an empty list when no exercise targets the muscles.
        """
        candidates = self.find_candidates(sport_id, primary_muscles)
        if not candidates:
            return []
        return rank_candidates(candidates, count, prefer_type)


def list_exercises(
    db: Database,
    search: Optional[str] = None,
    exercise_type: Optional[str] = None,
) -> List[Exercise]:
    """Browse the library by name substring and/or type."""
    stmt = select(Exercise).order_by(Exercise.name)
    if search:
        stmt = stmt.where(Exercise.name.ilike(f"%{search}%"))
    if exercise_type:
        stmt = stmt.where(Exercise.type == exercise_type)

    with db.get_session() as session:
        return list(session.scalars(stmt))
