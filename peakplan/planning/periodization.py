"""Training periodization: phase blocks, weekly load targets and prescriptions.

Given the weeks remaining until a goal date, the planner splits them into
base/build/peak blocks, inserts a deload every 4th week of base and build
blocks, and interpolates volume and intensity across each block.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from .calendar import DateLike, add_weeks, monday_of, weeks_between

logger = logging.getLogger(__name__)

DELOAD_NOTE = "Deload week — reduce load by 40%"
DELOAD_INTERVAL = 4


class TrainingPhase(str, Enum):
    """Training phases in a periodized plan."""

    BASE = "base"  # General foundation, high volume low intensity
    BUILD = "build"  # Sport-specific volume builds
    PEAK = "peak"  # High intensity, tapering volume toward the goal date
    RECOVERY = "recovery"  # Deload week
    TRANSITION = "transition"  # Between goal seasons


@dataclass(frozen=True)
class Prescription:
    """Sets, reps and rest for one exercise."""

    sets: int
    reps: str
    rest_seconds: int


@dataclass(frozen=True)
class PhaseParams:
    """Load targets and prescriptions for a phase."""

    volume: Tuple[int, int]
    intensity: Tuple[int, int]
    workouts: int
    prescriptions: Mapping[str, Prescription]


@dataclass(frozen=True)
class PhaseBlock:
    phase: TrainingPhase
    weeks: int


@dataclass(frozen=True)
class WeekSpec:
    """Generated targets for one plan week (scores on the 1-10 scale)."""

    week_number: int
    phase: TrainingPhase
    volume_score: int
    intensity_score: int
    workouts_per_week: int
    start_date: date
    notes: Optional[str] = None

    @property
    def is_deload(self) -> bool:
        return self.notes == DELOAD_NOTE


def _prescriptions(strength, plyometric, cardio, other) -> Mapping[str, Prescription]:
    return MappingProxyType({
        "strength": Prescription(*strength),
        "plyometric": Prescription(*plyometric),
        "cardio": Prescription(*cardio),
        "other": Prescription(*other),
    })


PHASE_PARAMS: Mapping[TrainingPhase, PhaseParams] = MappingProxyType({
    TrainingPhase.BASE: PhaseParams(
        volume=(5, 7), intensity=(3, 5), workouts=3,
        prescriptions=_prescriptions(
            strength=(3, "12-15", 90), plyometric=(3, "8", 90),
            cardio=(3, "30s", 45), other=(3, "12", 60),
        ),
    ),
    TrainingPhase.BUILD: PhaseParams(
        volume=(7, 9), intensity=(6, 8), workouts=4,
        prescriptions=_prescriptions(
            strength=(4, "6-10", 120), plyometric=(4, "6", 120),
            cardio=(4, "45s", 30), other=(4, "10", 90),
        ),
    ),
    TrainingPhase.PEAK: PhaseParams(
        volume=(4, 5), intensity=(8, 9), workouts=3,
        prescriptions=_prescriptions(
            strength=(5, "3-5", 180), plyometric=(4, "4", 150),
            cardio=(4, "60s", 20), other=(4, "6", 120),
        ),
    ),
    TrainingPhase.RECOVERY: PhaseParams(
        volume=(3, 4), intensity=(3, 4), workouts=2,
        prescriptions=_prescriptions(
            strength=(2, "12-15", 60), plyometric=(2, "6", 60),
            cardio=(2, "20s", 60), other=(2, "12", 60),
        ),
    ),
    TrainingPhase.TRANSITION: PhaseParams(
        volume=(4, 5), intensity=(4, 5), workouts=3,
        prescriptions=_prescriptions(
            strength=(3, "12", 90), plyometric=(3, "8", 90),
            cardio=(3, "30s", 45), other=(3, "12", 60),
        ),
    ),
})

DELOAD_PHASES = frozenset({TrainingPhase.BASE, TrainingPhase.BUILD})


def phase_blocks(total_weeks: int) -> List[PhaseBlock]:
    """Split the available weeks into phase blocks.

    Args:
        total_weeks: Weeks until the goal date (at least 1)

    Returns:
        Ordered blocks whose week counts sum to total_weeks
    """
    if total_weeks < 1:
        raise ValueError(f"total_weeks must be at least 1, got {total_weeks}")

    if total_weeks < 4:
        return [PhaseBlock(TrainingPhase.PEAK, total_weeks)]

    if total_weeks < 8:
        build = max(1, math.floor(total_weeks * 0.4))
        return [
            PhaseBlock(TrainingPhase.BUILD, build),
            PhaseBlock(TrainingPhase.PEAK, total_weeks - build),
        ]

    if total_weeks < 16:
        peak = max(3, math.floor(total_weeks * 0.25))
        build = math.floor((total_weeks - peak) * 0.55)
    else:
        # Full periodization
        peak = max(4, math.floor(total_weeks * 0.2))
        build = math.floor(total_weeks * 0.4)

    base = total_weeks - peak - build
    return [
        PhaseBlock(TrainingPhase.BASE, base),
        PhaseBlock(TrainingPhase.BUILD, build),
        PhaseBlock(TrainingPhase.PEAK, peak),
    ]


def lerp(low: float, high: float, t: float) -> int:
    """Linear interpolation rounded half up."""
    return math.floor(low + (high - low) * t + 0.5)


def is_deload_week(block_phase: TrainingPhase, index_in_block: int) -> bool:
    """Every 4th week of a base or build block is a deload."""
    return block_phase in DELOAD_PHASES and (index_in_block + 1) % DELOAD_INTERVAL == 0


def build_periodization(start_date: DateLike, target_date: DateLike) -> List[WeekSpec]:
    """Create the week-by-week targets from start_date up to target_date.

    Progress through a block is positional, but the parameter row used is
    the week's effective phase, so deload weeks drop to the recovery range.

    Args:
        start_date: Plan start (any day, aligned to its Monday for week dates)
        target_date: Goal event date

    Returns:
        WeekSpec list numbered 1..N with Monday start dates 7 days apart
    """
    total_weeks = weeks_between(start_date, target_date)
    blocks = phase_blocks(total_weeks)

    specs: List[WeekSpec] = []
    monday = monday_of(start_date)

    for block in blocks:
        for i in range(block.weeks):
            deload = is_deload_week(block.phase, i)
            phase = TrainingPhase.RECOVERY if deload else block.phase
            params = PHASE_PARAMS[phase]
            progress = i / (block.weeks - 1) if block.weeks > 1 else 0

            specs.append(WeekSpec(
                week_number=len(specs) + 1,
                phase=phase,
                volume_score=lerp(params.volume[0], params.volume[1], progress),
                intensity_score=lerp(params.intensity[0], params.intensity[1], progress),
                workouts_per_week=params.workouts,
                start_date=monday,
                notes=DELOAD_NOTE if deload else None,
            ))
            monday = add_weeks(monday, 1)

    logger.debug(
        f"Periodization: {total_weeks} weeks in blocks "
        + ", ".join(f"{b.phase.value}={b.weeks}" for b in blocks)
    )
    return specs


def exercise_type_class(exercise_type: Optional[str]) -> str:
    """Collapse an exercise type to strength, plyometric, cardio or other."""
    value = getattr(exercise_type, "value", exercise_type)
    if value in ("strength", "plyometric", "cardio"):
        return value
    return "other"


def get_prescription(phase, exercise_type: Optional[str]) -> Prescription:
    """Sets/reps/rest for an exercise type within a training phase."""
    params = PHASE_PARAMS[TrainingPhase(phase)]
    return params.prescriptions[exercise_type_class(exercise_type)]
