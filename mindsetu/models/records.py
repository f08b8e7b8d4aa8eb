"""
Immutable records produced by check-ins and completions.

Records are created once and never mutated. A later check-in on the same
subject supersedes an earlier one; nothing is deleted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from .enums import EmotionalState, Intensity, WillingnessLevel


@dataclass(frozen=True)
class CheckinRecord:
    """Result of a completed check-in flow."""

    subject_id: str
    mood: EmotionalState
    willingness: WillingnessLevel
    timestamp: datetime
    resolved_action: str

    def __post_init__(self) -> None:
        if not self.resolved_action or not self.resolved_action.strip():
            raise ValueError("resolved_action must be non-empty")


@dataclass(frozen=True)
class CompletionRecord:
    """A subject marked done, with the mood reported at completion."""

    subject_id: str
    mood: EmotionalState
    completed_at: datetime


@dataclass(frozen=True)
class HabitCompletion:
    """One entry in a habit's append-only completion history."""

    habit_id: str
    date: datetime


@dataclass(frozen=True)
class PriorityHabitEvent:
    """A day's outcome for the priority habit.

    ``date`` may be missing on events imported from older logs; such events
    never count toward weekly progress.
    """

    habit_id: str
    date: Optional[datetime]
    completed: bool = False
    checkin: Optional[CheckinRecord] = None

    @property
    def adaptive_action(self) -> Optional[str]:
        return self.checkin.resolved_action if self.checkin else None


@dataclass(frozen=True)
class MoodPair:
    """Mood before (check-in) and after (completion) for one subject."""

    initial_mood: Optional[EmotionalState]
    completion_mood: Optional[EmotionalState]

    @property
    def is_complete(self) -> bool:
        return self.initial_mood is not None and self.completion_mood is not None


@dataclass(frozen=True)
class MoodEntry:
    """Free-standing mood journal entry."""

    id: str
    mood: EmotionalState
    timestamp: datetime
    energy: Intensity = Intensity.MEDIUM
    stress: Intensity = Intensity.MEDIUM
    notes: Optional[str] = None
    triggers: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.triggers, tuple):
            object.__setattr__(self, "triggers", tuple(self.triggers))
