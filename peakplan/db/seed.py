"""Seed data for sports and the tagged exercise library."""

import logging
from typing import Dict

from sqlalchemy import select

from .database import Database
from .models import Exercise, ExerciseMuscle, ExerciseSport, MuscleRole, Sport

logger = logging.getLogger(__name__)


SPORTS = [
    {"name": "Skiing", "slug": "skiing", "category": "winter", "icon": "⛷️",
     "description": "Alpine and cross-country skiing"},
    {"name": "Snowboarding", "slug": "snowboarding", "category": "winter", "icon": "🏂",
     "description": "Freestyle and all-mountain snowboarding"},
    {"name": "Mountain Biking", "slug": "mountain-biking", "category": "summer", "icon": "🚵",
     "description": "Trail, enduro, and downhill mountain biking"},
    {"name": "Road Cycling", "slug": "road-cycling", "category": "summer", "icon": "🚴",
     "description": "Road and gravel cycling"},
    {"name": "Trail Running", "slug": "trail-running", "category": "summer", "icon": "🏃",
     "description": "Trail running and ultramarathons"},
    {"name": "Hiking", "slug": "hiking", "category": "year_round", "icon": "🥾",
     "description": "Day hikes, backpacking, and peak bagging"},
    {"name": "Rock Climbing", "slug": "rock-climbing", "category": "year_round", "icon": "🧗",
     "description": "Sport climbing, trad, and bouldering"},
    {"name": "Swimming", "slug": "swimming", "category": "year_round", "icon": "🏊",
     "description": "Lap swimming and open water"},
    {"name": "Kayaking", "slug": "kayaking", "category": "summer", "icon": "🛶",
     "description": "Whitewater and sea kayaking"},
    {"name": "General Fitness", "slug": "general-fitness", "category": "year_round", "icon": "💪",
     "description": "Strength, conditioning, and overall fitness"},
]

# name, type, equipment, description, primary muscles, secondary muscles, sport slug -> relevance
EXERCISES = [
    # Lower body strength
    ("Back Squat", "strength", "barbell",
     "Compound lower body movement with barbell on upper back",
     ["quads", "glutes"], ["hamstrings", "core"],
     {"skiing": 10, "snowboarding": 10, "mountain-biking": 8, "hiking": 8, "trail-running": 6,
      "road-cycling": 7, "general-fitness": 9, "rock-climbing": 5}),
    ("Front Squat", "strength", "barbell",
     "Squat with barbell in front rack position, demands more core and quad",
     ["quads", "core"], ["glutes"],
     {"skiing": 9, "snowboarding": 9, "mountain-biking": 7, "hiking": 7, "trail-running": 5,
      "general-fitness": 8}),
    ("Goblet Squat", "strength", "kettlebell",
     "Squat holding a kettlebell at chest, great for squat mechanics and core",
     ["quads", "glutes"], ["core"],
     {"skiing": 8, "snowboarding": 8, "mountain-biking": 7, "hiking": 7, "trail-running": 6,
      "general-fitness": 8}),
    ("Bulgarian Split Squat", "strength", "dumbbell",
     "Single-leg squat with rear foot elevated for maximum quad and glute load",
     ["quads", "glutes"], ["hamstrings", "adductors"],
     {"skiing": 9, "snowboarding": 9, "mountain-biking": 8, "hiking": 8, "trail-running": 8,
      "general-fitness": 8, "rock-climbing": 6}),
    ("Reverse Lunges", "strength", "bodyweight",
     "Step back into a lunge, easier on the knees than forward lunges",
     ["quads", "glutes"], ["hamstrings"],
     {"skiing": 8, "snowboarding": 8, "mountain-biking": 7, "hiking": 8, "trail-running": 8,
      "general-fitness": 7}),
    ("Walking Lunges", "strength", "bodyweight",
     "Alternating forward lunges with continuous forward movement",
     ["quads", "glutes"], ["hamstrings", "calves"],
     {"skiing": 7, "snowboarding": 7, "mountain-biking": 7, "hiking": 9, "trail-running": 8,
      "general-fitness": 7}),
    ("Step-Ups", "strength", "box",
     "Single-leg step onto a bench or box that mimics uphill hiking mechanics",
     ["quads", "glutes"], ["calves"],
     {"hiking": 10, "trail-running": 9, "skiing": 7, "snowboarding": 7, "mountain-biking": 8,
      "general-fitness": 7}),
    ("Romanian Deadlift", "strength", "barbell",
     "Hip-hinge deadlift variation targeting hamstrings and glutes",
     ["hamstrings", "glutes"], ["lower_back", "core"],
     {"skiing": 8, "snowboarding": 8, "mountain-biking": 8, "trail-running": 8, "hiking": 8,
      "general-fitness": 9, "road-cycling": 7}),
    ("Deadlift", "strength", "barbell",
     "Full pull from the floor for the whole posterior chain",
     ["hamstrings", "glutes", "lower_back"], ["quads", "upper_back"],
     {"skiing": 8, "snowboarding": 8, "mountain-biking": 7, "hiking": 7, "trail-running": 6,
      "general-fitness": 10, "rock-climbing": 6}),
    ("Single-Leg Deadlift", "strength", "dumbbell",
     "Hip hinge on one leg that builds posterior chain and balance together",
     ["hamstrings", "glutes"], ["core", "lower_back"],
     {"skiing": 8, "snowboarding": 8, "trail-running": 9, "hiking": 9, "mountain-biking": 7,
      "general-fitness": 8}),
    ("Hip Thrust", "strength", "barbell",
     "Barbell glute bridge for maximal glute activation",
     ["glutes"], ["hamstrings", "core"],
     {"skiing": 9, "snowboarding": 9, "mountain-biking": 8, "trail-running": 7, "hiking": 7,
      "road-cycling": 8, "general-fitness": 8}),
    ("Glute Bridge", "strength", "bodyweight",
     "Bodyweight hip extension for foundational glute activation",
     ["glutes"], ["hamstrings", "core"],
     {"skiing": 7, "snowboarding": 7, "mountain-biking": 7, "trail-running": 6, "hiking": 6,
      "general-fitness": 7, "road-cycling": 6}),
    ("Calf Raises", "strength", "bodyweight",
     "Standing calf raise for ankle stability and lower leg strength",
     ["calves"], [],
     {"skiing": 8, "snowboarding": 7, "trail-running": 9, "hiking": 9, "mountain-biking": 6,
      "general-fitness": 6}),
    ("Leg Press", "strength", "machine",
     "Machine compound press, high volume quad and glute work with minimal spinal load",
     ["quads"], ["glutes", "hamstrings"],
     {"skiing": 8, "snowboarding": 8, "mountain-biking": 7, "hiking": 6, "trail-running": 5,
      "general-fitness": 8, "road-cycling": 6}),
    ("Leg Curl", "strength", "machine",
     "Machine hamstring isolation for posterior chain balance",
     ["hamstrings"], [],
     {"skiing": 7, "snowboarding": 7, "mountain-biking": 6, "trail-running": 6,
      "general-fitness": 7, "road-cycling": 5}),
    ("Good Mornings", "strength", "barbell",
     "Hip hinge with barbell on back that teaches the hinge pattern",
     ["hamstrings", "lower_back"], ["glutes"],
     {"skiing": 7, "snowboarding": 7, "mountain-biking": 6, "hiking": 6, "trail-running": 5,
      "general-fitness": 7}),
    # Plyometrics
    ("Box Jump", "plyometric", "box",
     "Explosive jump onto a box for power and landing mechanics",
     ["quads", "glutes"], ["calves", "core"],
     {"skiing": 10, "snowboarding": 10, "mountain-biking": 8, "trail-running": 7,
      "general-fitness": 8, "hiking": 5}),
    ("Lateral Bounds", "plyometric", "bodyweight",
     "Side-to-side single-leg hops that mimic the lateral push-off in skiing",
     ["glutes", "abductors"], ["adductors", "calves"],
     {"skiing": 10, "snowboarding": 10, "trail-running": 7, "mountain-biking": 6,
      "general-fitness": 7}),
    ("Jump Squat", "plyometric", "bodyweight",
     "Explosive squat jump for reactive leg power",
     ["quads", "glutes"], ["calves"],
     {"skiing": 9, "snowboarding": 9, "mountain-biking": 7, "trail-running": 7,
      "general-fitness": 8, "hiking": 5}),
    ("Depth Drop", "plyometric", "box",
     "Step off a box and absorb the landing",
     ["quads"], ["calves", "core"],
     {"skiing": 8, "snowboarding": 8, "trail-running": 7, "mountain-biking": 6,
      "general-fitness": 6}),
    # Upper body push
    ("Push-Ups", "strength", "bodyweight",
     "Classic bodyweight press for chest, shoulders, and triceps",
     ["chest", "shoulders"], ["triceps", "core"],
     {"rock-climbing": 7, "swimming": 7, "kayaking": 7, "mountain-biking": 7,
      "general-fitness": 8, "skiing": 5}),
    ("Bench Press", "strength", "barbell",
     "Horizontal barbell press for chest and anterior shoulder",
     ["chest"], ["triceps", "shoulders"],
     {"general-fitness": 9, "rock-climbing": 5, "swimming": 6, "kayaking": 6,
      "mountain-biking": 5}),
    ("Overhead Press", "strength", "barbell",
     "Standing barbell press for shoulder strength and core stability",
     ["shoulders"], ["triceps", "core", "upper_back"],
     {"general-fitness": 8, "kayaking": 7, "swimming": 7, "mountain-biking": 6, "skiing": 5,
      "snowboarding": 5}),
    ("Dumbbell Shoulder Press", "strength", "dumbbell",
     "Seated or standing dumbbell press with a longer range of motion",
     ["shoulders"], ["triceps", "core"],
     {"general-fitness": 7, "kayaking": 6, "swimming": 6, "mountain-biking": 5, "skiing": 5}),
    ("Pike Push-Ups", "strength", "bodyweight",
     "Bodyweight vertical press targeting the shoulders",
     ["shoulders"], ["triceps", "core"],
     {"rock-climbing": 7, "swimming": 6, "kayaking": 6, "general-fitness": 7}),
    # Upper body pull
    ("Pull-Ups", "strength", "pull_up_bar",
     "Vertical pull for lat strength and grip",
     ["upper_back", "biceps"], ["core"],
     {"rock-climbing": 10, "kayaking": 8, "swimming": 7, "mountain-biking": 6,
      "general-fitness": 8, "skiing": 5}),
    ("Chin-Ups", "strength", "pull_up_bar",
     "Supinated-grip pull-up with more biceps emphasis",
     ["biceps", "upper_back"], ["core"],
     {"rock-climbing": 10, "kayaking": 7, "general-fitness": 8, "mountain-biking": 5,
      "skiing": 5}),
    ("Lat Pulldown", "strength", "cable",
     "Cable vertical pull with adjustable weight",
     ["upper_back"], ["biceps"],
     {"rock-climbing": 9, "kayaking": 8, "swimming": 7, "general-fitness": 8,
      "mountain-biking": 6}),
    ("Barbell Row", "strength", "barbell",
     "Horizontal barbell pull for upper back thickness",
     ["upper_back"], ["biceps", "lower_back"],
     {"rock-climbing": 8, "kayaking": 9, "general-fitness": 8, "skiing": 6, "snowboarding": 6,
      "mountain-biking": 6}),
    ("Dumbbell Row", "strength", "dumbbell",
     "Single-arm horizontal pull that addresses imbalances",
     ["upper_back"], ["biceps", "core"],
     {"rock-climbing": 8, "kayaking": 9, "general-fitness": 8, "skiing": 6,
      "mountain-biking": 6, "swimming": 6}),
    ("Cable Row", "strength", "cable",
     "Seated horizontal cable pull with constant tension",
     ["upper_back"], ["biceps", "lower_back"],
     {"rock-climbing": 7, "kayaking": 8, "swimming": 6, "general-fitness": 8,
      "mountain-biking": 5}),
    ("Face Pulls", "strength", "cable",
     "Cable pull to face height for rear deltoids and external rotators",
     ["upper_back"], ["shoulders"],
     {"swimming": 8, "kayaking": 9, "rock-climbing": 7, "mountain-biking": 6,
      "general-fitness": 7}),
    ("Dead Hang", "strength", "pull_up_bar",
     "Passive hang from a bar for grip strength",
     [], ["upper_back", "shoulders", "core"],
     {"rock-climbing": 10, "kayaking": 6, "general-fitness": 6}),
    ("Band Pull-Aparts", "strength", "resistance_band",
     "Band shoulder exercise for upper back and rear delt health",
     ["upper_back"], ["shoulders"],
     {"swimming": 8, "kayaking": 8, "rock-climbing": 7, "skiing": 5, "mountain-biking": 6,
      "general-fitness": 7}),
    # Core and stability
    ("Plank", "strength", "bodyweight",
     "Isometric anti-extension core hold",
     ["core"], ["shoulders", "glutes"],
     {"skiing": 8, "snowboarding": 8, "mountain-biking": 9, "kayaking": 8, "rock-climbing": 8,
      "trail-running": 7, "hiking": 7, "general-fitness": 9, "swimming": 7}),
    ("Side Plank", "strength", "bodyweight",
     "Lateral isometric hold for obliques and lateral stability",
     ["core"], ["adductors", "abductors"],
     {"skiing": 9, "snowboarding": 9, "kayaking": 8, "mountain-biking": 8, "rock-climbing": 7,
      "trail-running": 7, "general-fitness": 8}),
    ("Dead Bug", "strength", "bodyweight",
     "Supine anti-extension drill with limb movement",
     ["core"], ["hip_flexors"],
     {"skiing": 8, "snowboarding": 8, "trail-running": 8, "mountain-biking": 7,
      "general-fitness": 8, "rock-climbing": 7}),
    ("Bird Dog", "balance", "bodyweight",
     "Quadruped stability with opposite arm-leg extension",
     ["core"], ["lower_back", "glutes"],
     {"skiing": 7, "snowboarding": 7, "trail-running": 7, "mountain-biking": 7,
      "general-fitness": 7, "hiking": 6}),
    ("Hollow Hold", "strength", "bodyweight",
     "Supine hollow body position for core compression strength",
     ["core"], ["hip_flexors"],
     {"rock-climbing": 9, "skiing": 7, "snowboarding": 7, "general-fitness": 8, "kayaking": 7,
      "swimming": 8}),
    ("Pallof Press", "strength", "resistance_band",
     "Anti-rotation band press for rotational stability",
     ["core"], [],
     {"skiing": 9, "snowboarding": 9, "kayaking": 9, "mountain-biking": 8,
      "general-fitness": 8, "rock-climbing": 7}),
    ("Russian Twists", "strength", "bodyweight",
     "Rotational core exercise for oblique strength",
     ["core"], [],
     {"kayaking": 10, "skiing": 7, "snowboarding": 7, "mountain-biking": 7,
      "general-fitness": 7, "rock-climbing": 6}),
    ("Hanging Knee Raises", "strength", "pull_up_bar",
     "Hang from a bar and raise knees to chest",
     ["core", "hip_flexors"], [],
     {"rock-climbing": 9, "general-fitness": 8, "skiing": 6, "snowboarding": 6, "kayaking": 6}),
    ("Copenhagen Plank", "strength", "bodyweight",
     "Side plank with top leg elevated for adductors and lateral core",
     ["adductors"], ["core"],
     {"skiing": 10, "snowboarding": 10, "trail-running": 7, "mountain-biking": 6,
      "general-fitness": 7}),
    ("Single-Leg Balance", "balance", "bodyweight",
     "Stand on one leg for proprioception and ankle stability",
     [], ["calves", "core"],
     {"skiing": 8, "snowboarding": 8, "trail-running": 8, "hiking": 7, "general-fitness": 6,
      "rock-climbing": 7}),
    ("Lateral Band Walks", "strength", "resistance_band",
     "Side steps with a band to activate glute med and hip abductors",
     ["abductors"], ["glutes"],
     {"skiing": 10, "snowboarding": 10, "trail-running": 7, "mountain-biking": 6, "hiking": 7,
      "general-fitness": 7}),
    ("Clamshells", "strength", "resistance_band",
     "Side-lying hip abduction for the glute medius",
     ["abductors"], ["glutes"],
     {"skiing": 9, "snowboarding": 9, "trail-running": 8, "hiking": 7, "mountain-biking": 6,
      "general-fitness": 6}),
    # Mobility
    ("Hip Flexor Stretch", "flexibility", "bodyweight",
     "Kneeling lunge stretch for the hip flexors",
     ["hip_flexors"], [],
     {"skiing": 8, "snowboarding": 8, "mountain-biking": 9, "road-cycling": 9,
      "trail-running": 8, "hiking": 7, "general-fitness": 8}),
    ("Pigeon Pose", "flexibility", "bodyweight",
     "Deep hip external rotation stretch",
     ["glutes"], ["hip_flexors"],
     {"skiing": 7, "snowboarding": 7, "mountain-biking": 8, "road-cycling": 8,
      "trail-running": 8, "general-fitness": 7}),
    ("Thoracic Rotation", "flexibility", "bodyweight",
     "Open book rotation that restores thoracic spine mobility",
     ["upper_back"], ["core"],
     {"skiing": 7, "snowboarding": 7, "kayaking": 8, "mountain-biking": 7,
      "general-fitness": 7, "rock-climbing": 7}),
    # Conditioning
    ("Burpees", "cardio", "bodyweight",
     "Full-body conditioning for aerobic capacity and power endurance",
     ["core"], ["chest", "quads"],
     {"skiing": 7, "snowboarding": 7, "mountain-biking": 7, "trail-running": 7,
      "general-fitness": 9, "hiking": 6}),
    ("Mountain Climbers", "cardio", "bodyweight",
     "Running in plank position, cardio and core combined",
     ["core", "hip_flexors"], ["shoulders"],
     {"mountain-biking": 8, "trail-running": 7, "skiing": 6, "rock-climbing": 7,
      "general-fitness": 8}),
    ("Sled Push", "cardio", "bodyweight",
     "Heavy sled push for leg drive and conditioning under load",
     ["quads", "glutes"], ["core"],
     {"skiing": 8, "snowboarding": 8, "mountain-biking": 7, "trail-running": 7, "hiking": 7,
      "general-fitness": 8}),
    ("Foam Roll Quads", "flexibility", "foam_roller",
     "Self-myofascial release for the quadriceps",
     ["quads"], [],
     {"skiing": 8, "snowboarding": 8, "mountain-biking": 7, "trail-running": 7, "hiking": 7,
      "general-fitness": 7}),
    ("Foam Roll Thoracic Spine", "flexibility", "foam_roller",
     "Mobilize the upper back over a foam roller",
     ["upper_back"], [],
     {"kayaking": 8, "mountain-biking": 8, "rock-climbing": 7, "skiing": 6,
      "general-fitness": 7}),
]


def seed_library(db: Database) -> Dict[str, int]:
    """Insert sports and exercises that are not already present.

    Safe to re-run: sports match on slug, exercises on name.

    Returns:
        Counts of newly inserted sports and exercises
    """
    inserted = {"sports": 0, "exercises": 0}

    with db.get_session() as session:
        sport_ids = {s.slug: s.id for s in session.scalars(select(Sport))}
        for row in SPORTS:
            if row["slug"] in sport_ids:
                continue
            sport = Sport(**row)
            session.add(sport)
            session.flush()
            sport_ids[sport.slug] = sport.id
            inserted["sports"] += 1

        existing = set(session.scalars(select(Exercise.name)))
        for name, ex_type, equipment, description, primary, secondary, relevance in EXERCISES:
            if name in existing:
                continue
            exercise = Exercise(name=name, type=ex_type, equipment=equipment, description=description)
            exercise.muscles = (
                [ExerciseMuscle(muscle_group=m, role=MuscleRole.PRIMARY.value) for m in primary]
                + [ExerciseMuscle(muscle_group=m, role=MuscleRole.SECONDARY.value) for m in secondary]
            )
            exercise.sport_scores = [
                ExerciseSport(sport_id=sport_ids[slug], relevance_score=score)
                for slug, score in relevance.items()
                if slug in sport_ids
            ]
            session.add(exercise)
            inserted["exercises"] += 1

    logger.info(f"Seeded {inserted['sports']} sports and {inserted['exercises']} exercises")
    return inserted
