"""Weekly target progress for the priority habit.

The window is the calendar week containing ``now`` (Sunday 00:00 through
Saturday 23:59:59 local by default), recomputed on every call.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Mapping, Optional, Tuple

from ..utils.clock import align_to

logger = logging.getLogger(__name__)

SUNDAY = 6


@dataclass(frozen=True)
class WeeklyProgress:
    completed_count: int
    target: int
    ratio: Optional[float]

    @property
    def has_target(self) -> bool:
        """False when no weekly target is set (ratio is then None)."""
        return self.ratio is not None

    @property
    def remaining(self) -> Optional[int]:
        if not self.has_target:
            return None
        return max(self.target - self.completed_count, 0)

    @property
    def percent(self) -> Optional[int]:
        if self.ratio is None:
            return None
        return round(self.ratio * 100)


def week_start(day: date, start_weekday: int = SUNDAY) -> date:
    """First day of the week containing *day* (weekday 0=Monday, 6=Sunday)."""
    offset = (day.weekday() - start_weekday) % 7
    return day - timedelta(days=offset)


def week_bounds(
    now: Optional[datetime] = None, start_weekday: int = SUNDAY
) -> Tuple[datetime, datetime]:
    """Half-open ``[start, end)`` bounds of the week containing *now*.

    ``start`` is midnight on the first day; ``end`` is midnight seven days
    later, in the same zone as *now*.
    """
    if now is None:
        now = datetime.now()
    first = week_start(now.date(), start_weekday)
    start = datetime.combine(first, time.min, tzinfo=now.tzinfo)
    end = datetime.combine(first + timedelta(days=7), time.min, tzinfo=now.tzinfo)
    return start, end


def _field(event: Any, name: str) -> Any:
    if isinstance(event, Mapping):
        return event.get(name)
    return getattr(event, name, None)


def weekly_progress(
    events: Iterable[Any],
    target: int,
    now: Optional[datetime] = None,
    start_weekday: int = SUNDAY,
) -> WeeklyProgress:
    """Count completed events inside the current week against *target*.

    Args:
        events: Objects (or mappings) with ``date`` and ``completed``.
            Events with no date, or a date that is neither a date nor a
            datetime, never count.
        target: Days-per-week target. 0 (or less) means no target.
        now: Reference time for the week window.
        start_weekday: First day of the week (6=Sunday).

    Returns:
        WeeklyProgress with ratio capped at 1.0, or ratio None without a target.
    """
    if now is None:
        now = datetime.now()
    start, end = week_bounds(now, start_weekday)

    completed_count = 0
    for event in events:
        when = _field(event, "date")
        if when is None or not _field(event, "completed"):
            continue
        if not isinstance(when, datetime):
            if not isinstance(when, date):
                logger.warning(f"Skipping event with unusable date {when!r}")
                continue
            when = datetime.combine(when, time.min)
        if start <= align_to(when, now) < end:
            completed_count += 1

    if target <= 0:
        if target < 0:
            logger.warning(f"Negative weekly target {target}, treating as no target")
        return WeeklyProgress(completed_count=completed_count, target=0, ratio=None)

    ratio = min(completed_count / target, 1.0)
    return WeeklyProgress(completed_count=completed_count, target=target, ratio=ratio)
