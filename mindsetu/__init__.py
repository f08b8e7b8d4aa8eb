"""
Mind Setu engine: adaptive check-ins and progress aggregation.

Usage:
    from mindsetu import CheckinEngine, EmotionalState, WillingnessLevel

    engine = CheckinEngine()
    flow = engine.start_checkin(priority_habit)
    step = engine.advance_checkin(flow, WillingnessLevel.MEDIUM)
    done = engine.advance_checkin(step.flow, EmotionalState.TIRED)
    print(done.record.resolved_action)
"""

from .domain.errors import (
    CheckinAlreadyActive,
    DomainError,
    FlowNotActive,
    InvalidMoodValue,
    InvalidWillingnessValue,
)
from .domain.events import CheckinResolved, CompletionRecorded, EventBus, HabitCompleted
from .models import (
    MOOD_SCORES,
    AdHocTask,
    CheckinRecord,
    CompletionRecord,
    EmotionalState,
    Habit,
    HabitCompletion,
    HabitFrequency,
    MoodEntry,
    MoodPair,
    Priority,
    PriorityHabit,
    PriorityHabitEvent,
    SubjectKind,
    WillingnessLevel,
    mood_score,
)
from .services.action_resolver import resolve_action, resolve_for_subject
from .services.checkin_flow import (
    CheckinFlow,
    FlowState,
    Transition,
    advance_checkin,
    cancel_checkin,
    start_checkin,
)
from .services.engine import CheckinEngine
from .services.mood_trend import MoodTrend, mood_trend, weekly_insights
from .services.streak_tracker import calculate_streak, complete_habit, is_completed_today
from .services.task_board import record_completion
from .services.weekly_progress import WeeklyProgress, week_bounds, weekly_progress

__all__ = [
    "MOOD_SCORES",
    "AdHocTask",
    "CheckinAlreadyActive",
    "CheckinEngine",
    "CheckinFlow",
    "CheckinRecord",
    "CheckinResolved",
    "CompletionRecord",
    "CompletionRecorded",
    "DomainError",
    "EmotionalState",
    "EventBus",
    "FlowNotActive",
    "FlowState",
    "Habit",
    "HabitCompleted",
    "HabitCompletion",
    "HabitFrequency",
    "InvalidMoodValue",
    "InvalidWillingnessValue",
    "MoodEntry",
    "MoodPair",
    "MoodTrend",
    "Priority",
    "PriorityHabit",
    "PriorityHabitEvent",
    "SubjectKind",
    "Transition",
    "WeeklyProgress",
    "WillingnessLevel",
    "advance_checkin",
    "calculate_streak",
    "cancel_checkin",
    "complete_habit",
    "is_completed_today",
    "mood_score",
    "mood_trend",
    "record_completion",
    "resolve_action",
    "resolve_for_subject",
    "start_checkin",
    "week_bounds",
    "weekly_insights",
    "weekly_progress",
]
