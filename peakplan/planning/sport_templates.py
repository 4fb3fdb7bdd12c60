"""Weekly workout structure per sport.

Each sport maps a weekly session count (2, 3 or 4) to an ordered list of
workout slots. The plan generator fills every slot with exercises chosen
from the library.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

GENERAL_FITNESS = "general-fitness"
MIN_SLOT_COUNT = 2
MAX_SLOT_COUNT = 4


@dataclass(frozen=True)
class WorkoutSlot:
    """A workout placeholder awaiting concrete exercises."""

    name: str
    focus: str
    estimated_minutes: int
    day_of_week: int  # 0=Mon ... 6=Sun
    primary_muscles: Tuple[str, ...]
    secondary_muscles: Tuple[str, ...]
    exercise_count: int
    prefer_type: Optional[str] = None  # None or "any" means no type preference


def _slot(name, focus, minutes, primary, secondary, count=5, prefer_type=None):
    def at(day: int) -> WorkoutSlot:
        return WorkoutSlot(
            name=name,
            focus=focus,
            estimated_minutes=minutes,
            day_of_week=day,
            primary_muscles=tuple(primary),
            secondary_muscles=tuple(secondary),
            exercise_count=count,
            prefer_type=prefer_type,
        )
    return at


LOWER_POWER = _slot(
    "Lower Body Power", "Quad-dominant strength and explosiveness", 60,
    ["quads", "glutes"], ["hamstrings", "calves"])
LOWER_STABILITY = _slot(
    "Hip & Posterior Chain", "Hamstrings, glutes, hip stability", 55,
    ["hamstrings", "glutes"], ["abductors", "adductors", "lower_back"])
UPPER_PULL = _slot(
    "Upper Body Pull", "Back strength and grip", 50,
    ["upper_back"], ["biceps", "core"])
UPPER_PUSH = _slot(
    "Upper Body Push", "Chest, shoulder, and tricep strength", 50,
    ["chest", "shoulders"], ["triceps", "core"])
CORE_STABILITY = _slot(
    "Core & Stability", "Core, lateral stability, and balance", 40,
    ["core"], ["abductors", "adductors", "lower_back"])
CONDITIONING = _slot(
    "Full Body Conditioning", "Aerobic capacity and movement quality", 40,
    ["core", "quads"], ["glutes", "shoulders"], prefer_type="cardio")
PLYO = _slot(
    "Power & Plyometrics", "Explosive power and reactive strength", 45,
    ["quads", "glutes"], ["calves", "core"], prefer_type="plyometric")


def _template(two, three, four) -> Mapping[int, Tuple[WorkoutSlot, ...]]:
    return MappingProxyType({2: tuple(two), 3: tuple(three), 4: tuple(four)})


_LEG_DOMINANT = _template(
    [LOWER_POWER(0), CORE_STABILITY(3)],
    [LOWER_POWER(0), LOWER_STABILITY(2), CORE_STABILITY(4)],
    [LOWER_POWER(0), LOWER_STABILITY(1), PLYO(3), CORE_STABILITY(4)],
)

SPORT_TEMPLATES: Mapping[str, Mapping[int, Tuple[WorkoutSlot, ...]]] = MappingProxyType({
    "skiing": _LEG_DOMINANT,
    "snowboarding": _LEG_DOMINANT,
    "mountain-biking": _template(
        [LOWER_POWER(0), CORE_STABILITY(3)],
        [LOWER_POWER(0), UPPER_PULL(2), CORE_STABILITY(4)],
        [LOWER_POWER(0), UPPER_PULL(1), LOWER_STABILITY(3), CORE_STABILITY(4)],
    ),
    "road-cycling": _template(
        [LOWER_POWER(0), CORE_STABILITY(3)],
        [LOWER_POWER(0), LOWER_STABILITY(2), CORE_STABILITY(4)],
        [LOWER_POWER(0), LOWER_STABILITY(1), CORE_STABILITY(3), CONDITIONING(4)],
    ),
    "trail-running": _template(
        [LOWER_STABILITY(0), CORE_STABILITY(3)],
        [LOWER_POWER(0), LOWER_STABILITY(2), CORE_STABILITY(4)],
        [LOWER_POWER(0), LOWER_STABILITY(1), PLYO(3), CORE_STABILITY(4)],
    ),
    "hiking": _template(
        [LOWER_POWER(0), CORE_STABILITY(3)],
        [LOWER_POWER(0), LOWER_STABILITY(2), CORE_STABILITY(4)],
        [LOWER_POWER(0), LOWER_STABILITY(1), CORE_STABILITY(3), CONDITIONING(5)],
    ),
    "rock-climbing": _template(
        [UPPER_PULL(0), CORE_STABILITY(3)],
        [UPPER_PULL(0), CORE_STABILITY(2), UPPER_PUSH(4)],
        [UPPER_PULL(0), CORE_STABILITY(1), UPPER_PUSH(3), LOWER_STABILITY(4)],
    ),
    "swimming": _template(
        [UPPER_PULL(0), CORE_STABILITY(3)],
        [UPPER_PULL(0), UPPER_PUSH(2), CORE_STABILITY(4)],
        [UPPER_PULL(0), UPPER_PUSH(1), CORE_STABILITY(3), CONDITIONING(4)],
    ),
    "kayaking": _template(
        [UPPER_PULL(0), CORE_STABILITY(3)],
        [UPPER_PULL(0), CORE_STABILITY(2), UPPER_PUSH(4)],
        [UPPER_PULL(0), CORE_STABILITY(1), UPPER_PUSH(3), LOWER_POWER(4)],
    ),
    GENERAL_FITNESS: _template(
        [LOWER_POWER(0), UPPER_PULL(3)],
        [LOWER_POWER(0), UPPER_PULL(2), UPPER_PUSH(4)],
        [UPPER_PUSH(0), UPPER_PULL(1), LOWER_POWER(3), CORE_STABILITY(4)],
    ),
})


def clamp_slot_count(workouts_per_week: int) -> int:
    """Clamp a weekly session count to the available template variants."""
    return min(MAX_SLOT_COUNT, max(MIN_SLOT_COUNT, workouts_per_week))


def get_workout_slots(sport_slug: str, workouts_per_week: int) -> Tuple[WorkoutSlot, ...]:
    """Return the workout slots for a sport and weekly session count.

    Unknown sports fall back to the general fitness template.
    """
    template = SPORT_TEMPLATES.get(sport_slug)
    if template is None:
        logger.warning(f"No template for sport '{sport_slug}', using {GENERAL_FITNESS}")
        template = SPORT_TEMPLATES[GENERAL_FITNESS]
    return template[clamp_slot_count(workouts_per_week)]
