"""
Subjects that can receive check-ins and completions.

Entities are frozen dataclasses; every state change returns a new instance
via ``dataclasses.replace`` so callers keep control of the event log.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple, Union

from ..utils.clock import align_to
from .enums import EmotionalState, HabitFrequency, Priority
from .records import CheckinRecord, HabitCompletion


@dataclass(frozen=True)
class AdHocTask:
    """A one-off task with a scheduled time."""

    id: str
    title: str
    scheduled_time: datetime
    category: str = "General"
    priority: Priority = Priority.MEDIUM
    completed: bool = False
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    last_checkin: Optional[CheckinRecord] = None
    adapted_action: Optional[str] = None
    completion_mood: Optional[EmotionalState] = None

    @property
    def name(self) -> str:
        return self.title

    def is_overdue(self, now: datetime) -> bool:
        """Not done and its scheduled time has passed."""
        return not self.completed and align_to(self.scheduled_time, now) <= now

    def __repr__(self) -> str:
        return f"<AdHocTask(id={self.id}, title={self.title!r}, completed={self.completed})>"


@dataclass(frozen=True)
class PriorityHabit:
    """The single designated habit with a days-per-week target.

    A target of 0 disables weekly tracking for the habit.
    """

    id: str
    name: str
    category: str = "General"
    days_per_week: int = 3
    is_active: bool = True
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not 0 <= self.days_per_week <= 7:
            raise ValueError(
                f"days_per_week must be between 0 and 7, got {self.days_per_week}"
            )

    def __repr__(self) -> str:
        return f"<PriorityHabit(id={self.id}, name={self.name!r}, days_per_week={self.days_per_week})>"


@dataclass(frozen=True)
class Habit:
    """A tracked habit with its completion history.

    The streak is not stored; see services.streak_tracker.calculate_streak.
    """

    id: str
    name: str
    category: str = "General"
    target_frequency: HabitFrequency = HabitFrequency.DAILY
    completed_dates: Tuple[Union[date, datetime], ...] = field(default_factory=tuple)
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    color: str = "#8B5CF6"

    def __post_init__(self) -> None:
        if not isinstance(self.completed_dates, tuple):
            object.__setattr__(self, "completed_dates", tuple(self.completed_dates))

    def completions(self) -> Tuple[HabitCompletion, ...]:
        """Completion history as HabitCompletion entries."""
        return tuple(HabitCompletion(habit_id=self.id, date=d) for d in self.completed_dates)

    def __repr__(self) -> str:
        return f"<Habit(id={self.id}, name={self.name!r}, completions={len(self.completed_dates)})>"


Subject = Union[AdHocTask, PriorityHabit]
