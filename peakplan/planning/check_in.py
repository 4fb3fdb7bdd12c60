"""Weekly check-ins and the adaptation of upcoming weeks.

A "too hard" rating turns the nearest upcoming non-recovery week into a
recovery week. A "too easy" rating boosts the next few non-recovery weeks.
Recovery weeks are never adapted again, so repeated "too hard" check-ins
convert different weeks.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy import select

from ..config import config
from ..db.database import Database, get_db
from ..db.models import CheckInRating, TrainingPlan, TrainingWeek, WeeklyCheckIn
from ..errors import NotFoundError
from .periodization import TrainingPhase

logger = logging.getLogger(__name__)

RECOVERY_NOTE = "Auto-adjusted to recovery week based on your check-in."
BOOST_NOTE = "Intensity boosted based on your check-in."
NOTE_SEPARATOR = " | "


@dataclass
class CheckInResult:
    """Outcome of a check-in submission."""

    adapted: bool
    message: str
    adjusted_weeks: List[int] = field(default_factory=list)


def append_note(notes: Optional[str], suffix: str) -> str:
    return f"{notes}{NOTE_SEPARATOR}{suffix}" if notes else suffix


class CheckInAdapter:
    """Records check-ins and adapts future weeks of the plan."""

    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_db()

    def _owned_week(self, session, week_id: str, user_id: str) -> TrainingWeek:
        week = session.scalars(
            select(TrainingWeek)
            .join(TrainingPlan, TrainingWeek.plan_id == TrainingPlan.id)
            .where(TrainingWeek.id == week_id, TrainingPlan.user_id == user_id)
        ).first()
        if week is None:
            raise NotFoundError("Week", week_id)
        return week

    def get_check_in(self, week_id: str, user_id: str) -> Optional[WeeklyCheckIn]:
        """Existing check-in for a week, or None."""
        with self.db.get_session() as session:
            self._owned_week(session, week_id, user_id)
            return session.scalars(
                select(WeeklyCheckIn).where(
                    WeeklyCheckIn.week_id == week_id,
                    WeeklyCheckIn.user_id == user_id,
                )
            ).first()

    def submit_check_in(
        self,
        week_id: str,
        user_id: str,
        rating,
        notes: Optional[str] = None,
    ) -> CheckInResult:
        """Save a check-in and adapt upcoming weeks.

        Args:
            week_id: Week being rated
            user_id: Owner of the plan
            rating: too_easy, on_track or too_hard
            notes: Optional free text

        Returns:
            Whether any week was adapted, with a user-facing message

        Raises:
            NotFoundError: Week missing or not owned by the user
            ValueError: Unknown rating
        """
        rating = CheckInRating(rating)

        with self.db.get_session() as session:
            week = self._owned_week(session, week_id, user_id)

            # Serialize adaptations on the same plan
            session.scalars(
                select(TrainingPlan).where(TrainingPlan.id == week.plan_id).with_for_update()
            ).first()

            self._upsert(session, week_id, user_id, rating, notes)

            if rating == CheckInRating.ON_TRACK:
                return CheckInResult(adapted=False, message="Check-in saved. Keep it up!")

            future_weeks = session.scalars(
                select(TrainingWeek)
                .where(
                    TrainingWeek.plan_id == week.plan_id,
                    TrainingWeek.start_date > week.start_date,
                    TrainingWeek.phase != TrainingPhase.RECOVERY.value,
                )
                .order_by(TrainingWeek.start_date)
            ).all()

            if not future_weeks:
                return CheckInResult(
                    adapted=False, message="Check-in saved. No future weeks to adapt."
                )

            if rating == CheckInRating.TOO_HARD:
                result = self._convert_to_recovery(future_weeks[0])
            else:
                result = self._boost(future_weeks[: config.BOOST_WEEKS])

        logger.info(
            f"Check-in {rating.value} on week {week_id} adapted weeks {result.adjusted_weeks}"
        )
        return result

    def _upsert(self, session, week_id, user_id, rating: CheckInRating, notes):
        check_in = session.scalars(
            select(WeeklyCheckIn).where(
                WeeklyCheckIn.week_id == week_id,
                WeeklyCheckIn.user_id == user_id,
            )
        ).first()
        if check_in is None:
            session.add(WeeklyCheckIn(
                week_id=week_id, user_id=user_id, rating=rating.value, notes=notes
            ))
        else:
            check_in.rating = rating.value
            check_in.notes = notes
        session.flush()

    def _convert_to_recovery(self, target: TrainingWeek) -> CheckInResult:
        target.phase = TrainingPhase.RECOVERY.value
        target.volume_score = config.clamp_score(config.RECOVERY_SCORE)
        target.intensity_score = config.clamp_score(config.RECOVERY_SCORE)
        target.notes = RECOVERY_NOTE
        return CheckInResult(
            adapted=True,
            message=f"Week {target.week_number} converted to a recovery week to help you bounce back.",
            adjusted_weeks=[target.week_number],
        )

    def _boost(self, targets: List[TrainingWeek]) -> CheckInResult:
        # Applied in start-date order and committed together
        for week in targets:
            week.volume_score = config.clamp_score(week.volume_score + config.BOOST_AMOUNT)
            week.intensity_score = config.clamp_score(week.intensity_score + config.BOOST_AMOUNT)
            week.notes = append_note(week.notes, BOOST_NOTE)
        return CheckInResult(
            adapted=True,
            message=f"Next {len(targets)} week(s) boosted in volume and intensity.",
            adjusted_weeks=[w.week_number for w in targets],
        )


def submit_check_in(
    week_id: str,
    user_id: str,
    rating,
    notes: Optional[str] = None,
    db: Optional[Database] = None,
) -> CheckInResult:
    """Submit a check-in using the given (or global) database."""
    return CheckInAdapter(db).submit_check_in(week_id, user_id, rating, notes)
