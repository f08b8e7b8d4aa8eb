"""
Before/after mood statistics.

Only records with both an initial (check-in) mood and a completion mood are
averaged; partial records are dropped, never defaulted. All reductions are
sums and counts, so input order never matters.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..models.enums import MOOD_SCORES, NEUTRAL_MOOD_SCORE, EmotionalState
from ..models.records import MoodEntry, MoodPair
from ..models.subjects import AdHocTask

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoodTrend:
    avg_initial: float
    avg_final: float
    percent_delta: float
    sample_size: int = 0

    @property
    def improved(self) -> bool:
        return self.percent_delta > 0


@dataclass(frozen=True)
class WeeklyInsights:
    tasks_completed: int
    checkins_done: int
    trend: MoodTrend

    @property
    def mood_improvement_label(self) -> str:
        """Rounded signed percentage, e.g. ``+40%``."""
        delta = round(self.trend.percent_delta)
        sign = "+" if delta > 0 else ""
        return f"{sign}{delta}%"


@dataclass(frozen=True)
class MoodDistribution:
    counts: Dict[EmotionalState, int]
    average_score: float
    total: int

    def most_common(self) -> Optional[EmotionalState]:
        if not self.total:
            return None
        # Ties go to the earlier state in declaration order
        return max(EmotionalState, key=lambda s: (self.counts[s], -list(EmotionalState).index(s)))


def _mood_of(record: Any, *names: str) -> Optional[EmotionalState]:
    for name in names:
        if isinstance(record, Mapping):
            value = record.get(name)
        else:
            value = getattr(record, name, None)
        if value is not None:
            return EmotionalState.coerce(value)
    return None


def _as_pair(record: Any) -> MoodPair:
    if isinstance(record, MoodPair):
        return record
    return MoodPair(
        initial_mood=_mood_of(record, "initial_mood", "initial"),
        completion_mood=_mood_of(record, "completion_mood", "final"),
    )


def mood_trend(
    records: Iterable[Any], neutral_score: float = NEUTRAL_MOOD_SCORE
) -> MoodTrend:
    """Average mood before and after, and the percentage change.

    Args:
        records: MoodPair instances, or objects/mappings with
            ``initial_mood``/``completion_mood`` (``initial``/``final`` also
            accepted).
        neutral_score: Average reported when no complete pairs exist.

    Returns:
        MoodTrend; empty input gives neutral/neutral/0.
    """
    pairs = [p for p in (_as_pair(r) for r in records) if p.is_complete]
    if not pairs:
        return MoodTrend(
            avg_initial=float(neutral_score),
            avg_final=float(neutral_score),
            percent_delta=0.0,
            sample_size=0,
        )

    count = len(pairs)
    avg_initial = sum(MOOD_SCORES[p.initial_mood] for p in pairs) / count
    avg_final = sum(MOOD_SCORES[p.completion_mood] for p in pairs) / count

    if avg_initial == 0:
        percent_delta = 0.0
    else:
        percent_delta = (avg_final - avg_initial) / avg_initial * 100

    return MoodTrend(
        avg_initial=avg_initial,
        avg_final=avg_final,
        percent_delta=percent_delta,
        sample_size=count,
    )


def mood_pairs_from_tasks(tasks: Iterable[AdHocTask]) -> List[MoodPair]:
    """Pairs for completed tasks that have both a check-in and a completion mood."""
    return [
        MoodPair(initial_mood=task.last_checkin.mood, completion_mood=task.completion_mood)
        for task in tasks
        if task.completed and task.last_checkin is not None and task.completion_mood is not None
    ]


def weekly_insights(
    tasks: Iterable[AdHocTask], neutral_score: float = NEUTRAL_MOOD_SCORE
) -> WeeklyInsights:
    """Completed-task count, check-ins with full mood data, and the trend."""
    tasks = list(tasks)
    pairs = mood_pairs_from_tasks(tasks)
    return WeeklyInsights(
        tasks_completed=sum(1 for t in tasks if t.completed),
        checkins_done=len(pairs),
        trend=mood_trend(pairs, neutral_score),
    )


def mood_distribution(entries: Iterable[MoodEntry]) -> MoodDistribution:
    """Count journal entries per state and average their scores."""
    counts = {state: 0 for state in EmotionalState}
    total = 0
    score_sum = 0
    for entry in entries:
        counts[entry.mood] += 1
        score_sum += MOOD_SCORES[entry.mood]
        total += 1

    average = score_sum / total if total else float(NEUTRAL_MOOD_SCORE)
    return MoodDistribution(counts=counts, average_score=average, total=total)
