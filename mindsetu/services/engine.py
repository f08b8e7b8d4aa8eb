"""
CheckinEngine: the surface the presentation layer calls into.

Wires the pure services to an injectable clock, the typed engine config and
the event bus. It keeps one piece of state, the registry of open check-in
flows, which makes check-ins single-flight per subject.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ..core.typed_config import EngineConfig, load_engine_config
from ..domain.errors import CheckinAlreadyActive, FlowNotActive
from ..domain.events import (
    CheckinResolved,
    CompletionRecorded,
    EventBus,
    HabitCompleted,
    get_event_bus,
)
from ..models.records import CheckinRecord, CompletionRecord, PriorityHabitEvent
from ..models.subjects import AdHocTask, Habit, PriorityHabit, Subject
from ..utils.clock import Clock, system_clock
from ..utils.logging import log_engine_event
from . import checkin_flow, mood_trend, streak_tracker, task_board, weekly_progress
from .action_resolver import resolve_for_subject
from .checkin_flow import CheckinFlow, FlowState, Resolver, Transition
from .mood_trend import MoodTrend, WeeklyInsights
from .weekly_progress import WeeklyProgress

logger = logging.getLogger(__name__)


class CheckinEngine:
    """Adaptive check-in and progress aggregation engine."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        clock: Clock = system_clock,
        event_bus: Optional[EventBus] = None,
        resolver: Resolver = resolve_for_subject,
    ) -> None:
        self.config = config if config is not None else load_engine_config()
        self._clock = clock
        self._bus = event_bus if event_bus is not None else get_event_bus()
        self._resolver = resolver
        self._active: Dict[str, CheckinFlow] = {}

    def now(self) -> datetime:
        return self._clock()

    # --- Action resolution ---

    def resolve_action(self, subject: Subject, willingness: Any, mood: Any) -> str:
        """Recommended action text for a subject; never empty."""
        return self._resolver(subject, willingness, mood)

    # --- Check-in flows ---

    def start_checkin(self, subject: Subject) -> CheckinFlow:
        """Open a check-in flow for *subject*.

        Raises:
            CheckinAlreadyActive: a flow is already open for this subject and
                single-flight is enforced.
        """
        if subject.id in self._active and self.config.checkin.enforce_single_flight:
            raise CheckinAlreadyActive(subject.id)
        flow = checkin_flow.start_checkin(subject)
        self._active[subject.id] = flow
        return flow

    def active_flow(self, subject_id: str) -> Optional[CheckinFlow]:
        return self._active.get(subject_id)

    def active_subject_ids(self) -> List[str]:
        return sorted(self._active)

    def advance_checkin(
        self,
        flow: CheckinFlow,
        value: Any = None,
        *,
        willingness: Any = None,
        mood: Any = None,
    ) -> Transition:
        """Advance an open flow; a resolved flow is closed and published.

        Raises:
            FlowNotActive: the engine has no open flow for this subject, or
                *flow* is not the one it holds (a stale copy).
        """
        if self._active.get(flow.subject_id) != flow:
            raise FlowNotActive(flow.subject_id)

        transition = checkin_flow.advance_checkin(
            flow,
            value,
            willingness=willingness,
            mood=mood,
            now=self.now(),
            resolver=self._resolver,
        )
        if not transition.accepted:
            logger.debug(f"Check-in for {flow.subject_id} not advanced: {transition.reason}")
            return transition

        if transition.flow.state is FlowState.RESOLVED:
            del self._active[flow.subject_id]
            record = transition.flow.record
            subject_kind = "habit" if isinstance(flow.subject, PriorityHabit) else "task"
            log_engine_event(
                "checkin_resolved",
                {
                    "subject_id": record.subject_id,
                    "subject_kind": subject_kind,
                    "willingness": record.willingness.value,
                    "mood": record.mood.value,
                },
            )
            self._bus.publish(CheckinResolved(record=record, subject_kind=subject_kind))
        else:
            self._active[flow.subject_id] = transition.flow
        return transition

    def go_back(self, flow: CheckinFlow) -> CheckinFlow:
        """Step back; leaving the first step closes the flow without a record.

        Raises:
            FlowNotActive: the engine holds a different flow for this subject.
        """
        current = self._active.get(flow.subject_id)
        if current is not None and current != flow:
            raise FlowNotActive(flow.subject_id)
        updated = checkin_flow.go_back(flow)
        if updated.state is FlowState.CANCELLED:
            self._active.pop(flow.subject_id, None)
        elif flow.subject_id in self._active:
            self._active[flow.subject_id] = updated
        return updated

    def cancel_checkin(self, subject_id: str) -> Optional[CheckinFlow]:
        """Abandon the open flow for *subject_id*, if any. Nothing is recorded."""
        flow = self._active.pop(subject_id, None)
        if flow is None:
            return None
        return checkin_flow.cancel_checkin(flow)

    # --- Completions ---

    def record_completion(self, subject_id: str, mood: Any) -> CompletionRecord:
        """Create and publish a completion record stamped with the engine clock."""
        record = task_board.record_completion(subject_id, mood, self.now())
        log_engine_event(
            "completion_recorded",
            {"subject_id": subject_id, "mood": record.mood.value},
        )
        self._bus.publish(CompletionRecorded(record=record))
        return record

    def complete_task(self, task: AdHocTask, mood: Any) -> AdHocTask:
        """Mark a task done with its completion mood."""
        if task.completed:
            return task
        record = self.record_completion(task.id, mood)
        return task_board.complete_task(task, record.mood, record.completed_at)

    def complete_habit(self, habit: Habit) -> Habit:
        """Append a completion for today and publish the new streak."""
        now = self.now()
        updated = streak_tracker.complete_habit(habit, now)
        streak = self.habit_streak(updated)
        log_engine_event("habit_completed", {"habit_id": habit.id, "streak": streak})
        self._bus.publish(HabitCompleted(habit_id=habit.id, completed_on=now, streak=streak))
        return updated

    def log_priority_habit(
        self,
        habit: PriorityHabit,
        completed: bool,
        checkin: Optional[CheckinRecord] = None,
    ) -> PriorityHabitEvent:
        """Today's event for the priority habit, optionally carrying its check-in."""
        if checkin is not None:
            event = checkin_flow.habit_event_from(checkin, completed=completed)
        else:
            event = PriorityHabitEvent(habit_id=habit.id, date=self.now(), completed=completed)
        if event.habit_id != habit.id:
            raise ValueError(
                f"CheckinRecord subject_id={event.habit_id} does not match habit id={habit.id}"
            )
        log_engine_event(
            "priority_habit_logged",
            {"habit_id": habit.id, "completed": completed},
        )
        return event

    # --- Aggregations (pure, recomputed every call) ---

    def is_completed_today(self, habit: Habit) -> bool:
        return streak_tracker.is_completed_today(habit, self.now())

    def habit_streak(self, habit: Habit) -> int:
        return streak_tracker.habit_streak(
            habit,
            self.now(),
            allow_grace_day=self.config.streak.allow_grace_day,
            start_weekday=self.config.weekly.start_weekday,
        )

    def weekly_progress(
        self, events: Iterable[Any], target: int
    ) -> WeeklyProgress:
        return weekly_progress.weekly_progress(
            events,
            target,
            self.now(),
            start_weekday=self.config.weekly.start_weekday,
        )

    def priority_habit_progress(
        self, habit: PriorityHabit, events: Iterable[PriorityHabitEvent]
    ) -> WeeklyProgress:
        """Weekly progress for one priority habit's own events.

        An inactive habit has no target.
        """
        own = [e for e in events if e.habit_id == habit.id]
        target = habit.days_per_week if habit.is_active else 0
        return self.weekly_progress(own, target)

    def mood_trend(self, records: Iterable[Any]) -> MoodTrend:
        return mood_trend.mood_trend(records, neutral_score=self.config.mood.neutral_score)

    def weekly_insights(self, tasks: Iterable[AdHocTask]) -> WeeklyInsights:
        return mood_trend.weekly_insights(tasks, neutral_score=self.config.mood.neutral_score)
