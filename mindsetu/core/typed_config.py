"""
Typed configuration domain objects.

Replaces raw dict access to the ``engine`` YAML section with
Pydantic-validated, immutable config classes:
- WeeklyConfig    (weekly_progress.py)
- StreakConfig    (streak_tracker.py)
- MoodConfig      (mood_trend.py)
- CheckinConfig   (engine.py)
"""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .defaults_loader import get_engine_sections

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class WeeklyConfig(BaseModel):
    """Calendar-week window used by weekly target aggregation."""

    model_config = ConfigDict(frozen=True)

    week_starts_on: str = "sunday"

    @field_validator("week_starts_on")
    @classmethod
    def weekday_valid(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in WEEKDAY_NAMES:
            raise ValueError(f"week_starts_on must be a weekday name, got '{v}'")
        return v

    @property
    def start_weekday(self) -> int:
        """Weekday index of the first day (0=Monday, 6=Sunday)."""
        return WEEKDAY_NAMES.index(self.week_starts_on)


class StreakConfig(BaseModel):
    """Streak derivation policy."""

    model_config = ConfigDict(frozen=True)

    allow_grace_day: bool = True


class MoodConfig(BaseModel):
    """Mood trend defaults."""

    model_config = ConfigDict(frozen=True)

    neutral_score: float = 3.0

    @field_validator("neutral_score")
    @classmethod
    def score_in_range(cls, v: float) -> float:
        if not 1.0 <= v <= 5.0:
            raise ValueError("neutral_score must be between 1 and 5")
        return v


class CheckinConfig(BaseModel):
    """Check-in flow registry behaviour."""

    model_config = ConfigDict(frozen=True)

    enforce_single_flight: bool = True


class EngineConfig(BaseModel):
    """All engine tunables."""

    model_config = ConfigDict(frozen=True)

    weekly: WeeklyConfig = WeeklyConfig()
    streak: StreakConfig = StreakConfig()
    mood: MoodConfig = MoodConfig()
    checkin: CheckinConfig = CheckinConfig()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "EngineConfig":
        """Build from a raw ``engine`` section, falling back to defaults.

        Invalid sections are logged and replaced by their defaults rather
        than failing the whole config.
        """
        data = data or {}
        sections: Dict[str, BaseModel] = {}
        for name, model in (
            ("weekly", WeeklyConfig),
            ("streak", StreakConfig),
            ("mood", MoodConfig),
            ("checkin", CheckinConfig),
        ):
            raw = data.get(name) or {}
            try:
                sections[name] = model(**raw)
            except (ValidationError, TypeError) as e:
                logger.warning("Invalid engine.%s config, using defaults: %s", name, e)
                sections[name] = model()
        return cls(**sections)


def load_engine_config() -> EngineConfig:
    """Build the EngineConfig from the ``engine.*`` YAML sections."""
    return EngineConfig.from_dict(get_engine_sections())
