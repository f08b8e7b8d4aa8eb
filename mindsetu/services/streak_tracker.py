"""
Habit completion bookkeeping.

Streaks are derived from the completion-date history on every call, never
stored, so they cannot drift from the visible calendar.
"""

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Set, Tuple, Union

from ..models.enums import HabitFrequency
from ..models.subjects import Habit
from ..utils.clock import local_date
from .weekly_progress import week_start

logger = logging.getLogger(__name__)


def is_completed_today(habit: Habit, now: Optional[datetime] = None) -> bool:
    """True if any completion shares the local calendar date of *now*."""
    if now is None:
        now = datetime.now()
    today = now.date()
    return any(local_date(d, now) == today for d in habit.completed_dates)


def complete_habit(habit: Habit, now: Optional[datetime] = None) -> Habit:
    """Append a completion at *now* and return the updated habit.

    The history is append-only; a second completion on the same day is kept
    but does not lengthen the streak.
    """
    if now is None:
        now = datetime.now()
    if is_completed_today(habit, now):
        logger.debug(f"Habit {habit.id} already completed on {now.date()}")
    return replace(habit, completed_dates=habit.completed_dates + (now,))


def _daily_streak(days: Set[date], today: date, allow_grace_day: bool) -> int:
    anchor = today
    if anchor not in days:
        if not allow_grace_day:
            return 0
        anchor = today - timedelta(days=1)

    streak = 0
    current = anchor
    while current in days:
        streak += 1
        current -= timedelta(days=1)
    return streak


def _weekly_streak(
    days: Set[date], today: date, allow_grace_day: bool, start_weekday: int
) -> int:
    weeks = {week_start(d, start_weekday) for d in days}
    anchor = week_start(today, start_weekday)
    if anchor not in weeks:
        if not allow_grace_day:
            return 0
        anchor -= timedelta(weeks=1)

    streak = 0
    current = anchor
    while current in weeks:
        streak += 1
        current -= timedelta(weeks=1)
    return streak


def calculate_streak(
    completed_dates: Iterable[Union[date, datetime]],
    now: Optional[datetime] = None,
    frequency: HabitFrequency = HabitFrequency.DAILY,
    allow_grace_day: bool = True,
    start_weekday: int = 6,
) -> int:
    """Length of the run of completed periods ending now.

    Args:
        completed_dates: Completion timestamps (or plain dates) in any order,
            duplicates allowed.
        now: Current datetime to measure from.
        frequency: Daily counts days, weekly counts calendar weeks.
        allow_grace_day: When the current period is not done yet, count the
            run ending in the previous period instead of returning 0.
        start_weekday: First day of a week for weekly habits (6=Sunday).

    Returns:
        Number of consecutive periods with at least one completion.
    """
    if now is None:
        now = datetime.now()
    days = {local_date(d, now) for d in completed_dates}
    if not days:
        return 0

    today = now.date()
    if frequency is HabitFrequency.WEEKLY:
        return _weekly_streak(days, today, allow_grace_day, start_weekday)
    return _daily_streak(days, today, allow_grace_day)


def habit_streak(
    habit: Habit,
    now: Optional[datetime] = None,
    allow_grace_day: bool = True,
    start_weekday: int = 6,
) -> int:
    """Current streak for a habit under its target frequency."""
    return calculate_streak(
        habit.completed_dates,
        now,
        frequency=habit.target_frequency,
        allow_grace_day=allow_grace_day,
        start_weekday=start_weekday,
    )


def completion_calendar(
    habit: Habit, now: Optional[datetime] = None, days: int = 7
) -> List[Tuple[date, bool]]:
    """Per-day completion flags for the last *days* days, oldest first."""
    if now is None:
        now = datetime.now()
    done = {local_date(d, now) for d in habit.completed_dates}
    today = now.date()
    return [
        (day, day in done)
        for day in (today - timedelta(days=offset) for offset in range(days - 1, -1, -1))
    ]


def completed_today_count(habits: Iterable[Habit], now: Optional[datetime] = None) -> int:
    """Number of habits with a completion today."""
    return sum(1 for habit in habits if is_completed_today(habit, now))
