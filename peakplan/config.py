"""Configuration management for the peakplan training planner."""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./peakplan.db")

    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    DEFAULT_USER_ID: str = os.getenv("DEFAULT_USER_ID", "default")

    # Stored week scores live on a 1-100 scale, generation works on 1-10
    SCORE_SCALE: int = int(os.getenv("SCORE_SCALE", "10"))
    MIN_SCORE: int = int(os.getenv("MIN_SCORE", "1"))
    MAX_SCORE: int = int(os.getenv("MAX_SCORE", "100"))

    # Check-in adaptation
    RECOVERY_SCORE: int = int(os.getenv("RECOVERY_SCORE", "40"))
    BOOST_AMOUNT: int = int(os.getenv("BOOST_AMOUNT", "15"))
    BOOST_WEEKS: int = int(os.getenv("BOOST_WEEKS", "3"))

    # Default weekly sessions by fitness level (caps the phase's nominal count)
    FITNESS_LEVEL_WORKOUTS = {
        "beginner": int(os.getenv("WORKOUTS_BEGINNER", "3")),
        "intermediate": int(os.getenv("WORKOUTS_INTERMEDIATE", "4")),
        "advanced": int(os.getenv("WORKOUTS_ADVANCED", "6")),
    }

    @classmethod
    def get_level_workouts(cls, fitness_level):
        """Get the weekly workout cap for a fitness level, or None if unknown."""
        if not fitness_level:
            return None
        return cls.FITNESS_LEVEL_WORKOUTS.get(fitness_level.lower())

    @classmethod
    def clamp_score(cls, score: float) -> int:
        """Clamp a stored volume/intensity score into the allowed range."""
        return int(max(cls.MIN_SCORE, min(cls.MAX_SCORE, score)))

    @classmethod
    def validate(cls) -> bool:
        """Validate configuration values."""
        if cls.SCORE_SCALE <= 0:
            raise ValueError("SCORE_SCALE must be a positive integer")
        if cls.MIN_SCORE < 1 or cls.MIN_SCORE > cls.MAX_SCORE:
            raise ValueError(
                f"Invalid score range: MIN_SCORE={cls.MIN_SCORE}, MAX_SCORE={cls.MAX_SCORE}"
            )
        if not cls.MIN_SCORE <= cls.RECOVERY_SCORE <= cls.MAX_SCORE:
            raise ValueError("RECOVERY_SCORE must lie within MIN_SCORE..MAX_SCORE")
        if cls.BOOST_WEEKS < 1:
            raise ValueError("BOOST_WEEKS must be at least 1")
        return True


config = Config()
