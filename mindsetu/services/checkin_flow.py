"""
Check-in state machine.

A CheckinFlow is an immutable value: every operation returns a new flow (or
the same one when nothing changes). Invalid moves are refused by value via
Transition(accepted=False) and the returned flow is the exact input flow.

Priority habits use a two-step capture (willingness, then emotion). Ad-hoc
tasks capture both fields together and resolve in one step.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from ..models.enums import EmotionalState, WillingnessLevel
from ..models.records import CheckinRecord, PriorityHabitEvent
from ..models.subjects import PriorityHabit, Subject
from .action_resolver import resolve_for_subject

logger = logging.getLogger(__name__)

Resolver = Callable[[Subject, WillingnessLevel, EmotionalState], str]


class FlowMode(Enum):
    SINGLE_STEP = "single_step"
    TWO_STEP = "two_step"


class FlowState(Enum):
    """Where the flow is.

    IDLE: first (or only) step is on screen.
    WILLINGNESS_CAPTURED: two-step flows only; emotion step is on screen.
    RESOLVED: emotion captured and action resolved (terminal).
    CANCELLED: abandoned by the caller, no record (terminal).
    """

    IDLE = "idle"
    WILLINGNESS_CAPTURED = "willingness_captured"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({FlowState.RESOLVED, FlowState.CANCELLED})

REASON_FINISHED = "check-in already finished"
REASON_NEED_WILLINGNESS = "willingness is required to continue"
REASON_NEED_MOOD = "emotional state is required to continue"
REASON_INVALID_VALUE = "value not valid for the current step"


@dataclass(frozen=True)
class CheckinFlow:
    subject: Subject
    mode: FlowMode
    state: FlowState = FlowState.IDLE
    willingness: Optional[WillingnessLevel] = None
    mood: Optional[EmotionalState] = None
    record: Optional[CheckinRecord] = None

    @property
    def subject_id(self) -> str:
        return self.subject.id

    @property
    def step(self) -> int:
        """UI step number (1 or 2)."""
        return 2 if self.state is FlowState.WILLINGNESS_CAPTURED else 1

    @property
    def total_steps(self) -> int:
        return 2 if self.mode is FlowMode.TWO_STEP else 1

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def can_proceed(self) -> bool:
        """Whether advance_checkin() would be accepted without a new value."""
        if self.is_terminal:
            return False
        if self.mode is FlowMode.TWO_STEP and self.state is FlowState.IDLE:
            return self.willingness is not None
        return self.willingness is not None and self.mood is not None


@dataclass(frozen=True)
class Transition:
    """Outcome of advance_checkin()."""

    accepted: bool
    flow: CheckinFlow
    reason: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.accepted and self.flow.state is FlowState.RESOLVED

    @property
    def record(self) -> Optional[CheckinRecord]:
        return self.flow.record


def start_checkin(subject: Subject) -> CheckinFlow:
    """Open a flow for a subject: two-step for priority habits."""
    mode = FlowMode.TWO_STEP if isinstance(subject, PriorityHabit) else FlowMode.SINGLE_STEP
    logger.debug(f"Starting {mode.value} check-in for subject {subject.id}")
    return CheckinFlow(subject=subject, mode=mode)


def select_willingness(flow: CheckinFlow, willingness: object) -> CheckinFlow:
    """Set (or change) the willingness selection on the first step."""
    level = WillingnessLevel.coerce(willingness)
    if level is None or flow.is_terminal or flow.state is not FlowState.IDLE:
        return flow
    return replace(flow, willingness=level)


def select_emotion(flow: CheckinFlow, mood: object) -> CheckinFlow:
    """Set (or change) the emotion selection on the step that captures it."""
    state = EmotionalState.coerce(mood)
    if state is None or flow.is_terminal:
        return flow
    if flow.mode is FlowMode.TWO_STEP and flow.state is not FlowState.WILLINGNESS_CAPTURED:
        return flow
    return replace(flow, mood=state)


def _apply_value(flow: CheckinFlow, value: object) -> Optional[CheckinFlow]:
    """Apply a value to the field the current step captures."""
    if flow.mode is FlowMode.TWO_STEP:
        if flow.state is FlowState.IDLE:
            level = WillingnessLevel.coerce(value)
            return replace(flow, willingness=level) if level else None
        state = EmotionalState.coerce(value)
        return replace(flow, mood=state) if state else None

    # Single step takes either field
    level = WillingnessLevel.coerce(value)
    if level is not None:
        return replace(flow, willingness=level)
    state = EmotionalState.coerce(value)
    return replace(flow, mood=state) if state else None


def advance_checkin(
    flow: CheckinFlow,
    value: object = None,
    *,
    willingness: object = None,
    mood: object = None,
    now: Optional[datetime] = None,
    resolver: Resolver = resolve_for_subject,
) -> Transition:
    """Try to move the flow forward.

    Args:
        flow: Current flow state.
        value: Value for the field captured on the current step.
        willingness: Explicit willingness (first step / single step only).
        mood: Explicit emotional state (emotion step / single step only).
        now: Timestamp for the resulting record.
        resolver: Action resolver, replaceable for tests.

    Returns:
        Transition. On rejection ``flow`` is the unchanged input.
    """
    if flow.is_terminal:
        return Transition(accepted=False, flow=flow, reason=REASON_FINISHED)

    candidate = flow
    if value is not None:
        applied = _apply_value(candidate, value)
        if applied is None:
            return Transition(accepted=False, flow=flow, reason=REASON_INVALID_VALUE)
        candidate = applied
    if willingness is not None:
        level = WillingnessLevel.coerce(willingness)
        updated = select_willingness(candidate, level)
        if level is None or updated.willingness is not level:
            return Transition(accepted=False, flow=flow, reason=REASON_INVALID_VALUE)
        candidate = updated
    if mood is not None:
        state = EmotionalState.coerce(mood)
        updated = select_emotion(candidate, state)
        if state is None or updated.mood is not state:
            return Transition(accepted=False, flow=flow, reason=REASON_INVALID_VALUE)
        candidate = updated

    if candidate.willingness is None:
        logger.debug(f"Check-in for {flow.subject_id} refused: no willingness")
        return Transition(accepted=False, flow=flow, reason=REASON_NEED_WILLINGNESS)

    if candidate.mode is FlowMode.TWO_STEP and candidate.state is FlowState.IDLE:
        return Transition(
            accepted=True,
            flow=replace(candidate, state=FlowState.WILLINGNESS_CAPTURED),
        )

    if candidate.mood is None:
        logger.debug(f"Check-in for {flow.subject_id} refused: no mood")
        return Transition(accepted=False, flow=flow, reason=REASON_NEED_MOOD)

    return Transition(accepted=True, flow=_resolve(candidate, now, resolver))


def _resolve(flow: CheckinFlow, now: Optional[datetime], resolver: Resolver) -> CheckinFlow:
    if now is None:
        now = datetime.now()
    action = resolver(flow.subject, flow.willingness, flow.mood)
    record = CheckinRecord(
        subject_id=flow.subject_id,
        mood=flow.mood,
        willingness=flow.willingness,
        timestamp=now,
        resolved_action=action,
    )
    logger.info(
        f"Resolved check-in for subject {flow.subject_id}: "
        f"willingness={flow.willingness.value}, mood={flow.mood.value}"
    )
    return replace(flow, state=FlowState.RESOLVED, record=record)


def go_back(flow: CheckinFlow) -> CheckinFlow:
    """Navigate back one step; backing out of the first step cancels."""
    if flow.is_terminal:
        return flow
    if flow.state is FlowState.WILLINGNESS_CAPTURED:
        return replace(flow, state=FlowState.IDLE, mood=None)
    return cancel_checkin(flow)


def cancel_checkin(flow: CheckinFlow) -> CheckinFlow:
    """Abandon the flow. No record is ever produced for a cancelled flow."""
    if flow.is_terminal:
        return flow
    logger.debug(f"Check-in for subject {flow.subject_id} cancelled at step {flow.step}")
    return replace(flow, state=FlowState.CANCELLED, record=None)


def habit_event_from(record: CheckinRecord, completed: bool = False) -> PriorityHabitEvent:
    """Priority-habit log entry for a resolved check-in."""
    return PriorityHabitEvent(
        habit_id=record.subject_id,
        date=record.timestamp,
        completed=completed,
        checkin=record,
    )
