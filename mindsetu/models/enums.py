"""Fixed taxonomies: emotional state, willingness, subject families."""

from enum import Enum
from typing import Dict, Optional, Union

from ..domain.errors import InvalidMoodValue, InvalidWillingnessValue


class EmotionalState(Enum):
    """How the user reports feeling at check-in or completion."""

    STRESSED = "stressed"
    TIRED = "tired"
    UNMOTIVATED = "unmotivated"
    NEUTRAL = "neutral"
    GOOD = "good"

    @classmethod
    def parse(cls, value: Union[str, "EmotionalState"]) -> "EmotionalState":
        """Parse a state from its name, raising InvalidMoodValue otherwise."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidMoodValue(value)

    @classmethod
    def coerce(cls, value: object) -> Optional["EmotionalState"]:
        """Like parse() but returns None for anything unrecognised."""
        try:
            return cls.parse(value)  # type: ignore[arg-type]
        except InvalidMoodValue:
            return None

    @property
    def score(self) -> int:
        return MOOD_SCORES[self]

    @property
    def is_positive(self) -> bool:
        """Neutral or good: the moods that allow a full-commitment action."""
        return self in (EmotionalState.NEUTRAL, EmotionalState.GOOD)


class WillingnessLevel(Enum):
    """How willing the user is to do the activity right now."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: Union[str, "WillingnessLevel"]) -> "WillingnessLevel":
        """Parse a level from its name, raising InvalidWillingnessValue otherwise."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidWillingnessValue(value)

    @classmethod
    def coerce(cls, value: object) -> Optional["WillingnessLevel"]:
        """Like parse() but returns None for anything unrecognised."""
        try:
            return cls.parse(value)  # type: ignore[arg-type]
        except InvalidWillingnessValue:
            return None


class SubjectKind(Enum):
    """Activity family used to pick a scaled-down action."""

    GENERIC = "generic"
    GYM = "gym"
    READING = "reading"
    MEDITATION = "meditation"


class Priority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Intensity(Enum):
    """Energy or stress level on a mood journal entry."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class HabitFrequency(Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


# Ordinal scores for averaging only. Tired and unmotivated share a score.
MOOD_SCORES: Dict[EmotionalState, int] = {
    EmotionalState.STRESSED: 1,
    EmotionalState.TIRED: 2,
    EmotionalState.UNMOTIVATED: 2,
    EmotionalState.NEUTRAL: 3,
    EmotionalState.GOOD: 5,
}

NEUTRAL_MOOD_SCORE = MOOD_SCORES[EmotionalState.NEUTRAL]


def mood_score(mood: Union[str, EmotionalState]) -> int:
    """Return the ordinal score for a mood (raises InvalidMoodValue)."""
    return MOOD_SCORES[EmotionalState.parse(mood)]
