"""In-memory domain models for the check-in and progress engine."""

from .enums import (
    MOOD_SCORES,
    NEUTRAL_MOOD_SCORE,
    EmotionalState,
    HabitFrequency,
    Intensity,
    Priority,
    SubjectKind,
    WillingnessLevel,
    mood_score,
)
from .records import (
    CheckinRecord,
    CompletionRecord,
    HabitCompletion,
    MoodEntry,
    MoodPair,
    PriorityHabitEvent,
)
from .subjects import AdHocTask, Habit, PriorityHabit, Subject

__all__ = [
    "MOOD_SCORES",
    "NEUTRAL_MOOD_SCORE",
    "AdHocTask",
    "CheckinRecord",
    "CompletionRecord",
    "EmotionalState",
    "Habit",
    "HabitCompletion",
    "HabitFrequency",
    "Intensity",
    "MoodEntry",
    "MoodPair",
    "Priority",
    "PriorityHabit",
    "PriorityHabitEvent",
    "Subject",
    "SubjectKind",
    "WillingnessLevel",
    "mood_score",
]
