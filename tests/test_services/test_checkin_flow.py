"""
Tests for the check-in state machine.
"""

from datetime import datetime

import pytest

from mindsetu.models import CheckinRecord, EmotionalState, WillingnessLevel
from mindsetu.services.checkin_flow import (
    REASON_FINISHED,
    REASON_INVALID_VALUE,
    REASON_NEED_MOOD,
    REASON_NEED_WILLINGNESS,
    FlowMode,
    FlowState,
    advance_checkin,
    cancel_checkin,
    go_back,
    habit_event_from,
    select_emotion,
    select_willingness,
    start_checkin,
)

NOW = datetime(2026, 2, 18, 9, 30)


class TestStart:
    def test_priority_habit_is_two_step(self, reading_habit):
        flow = start_checkin(reading_habit)
        assert flow.mode is FlowMode.TWO_STEP
        assert flow.state is FlowState.IDLE
        assert flow.step == 1
        assert flow.total_steps == 2
        assert flow.willingness is None and flow.mood is None

    def test_task_is_single_step(self, gym_task):
        flow = start_checkin(gym_task)
        assert flow.mode is FlowMode.SINGLE_STEP
        assert flow.total_steps == 1
        assert flow.subject_id == "2"


class TestTwoStepFlow:
    def test_rejected_without_willingness_leaves_state_unchanged(self, reading_habit):
        flow = start_checkin(reading_habit)
        result = advance_checkin(flow, now=NOW)

        assert not result.accepted
        assert result.reason == REASON_NEED_WILLINGNESS
        assert result.flow == flow
        assert result.flow is flow

    def test_selection_then_advance(self, reading_habit):
        flow = select_willingness(start_checkin(reading_habit), "medium")
        assert flow.can_proceed

        result = advance_checkin(flow, now=NOW)
        assert result.accepted
        assert result.flow.state is FlowState.WILLINGNESS_CAPTURED
        assert result.flow.step == 2
        assert result.record is None

    def test_full_flow_resolves_with_record(self, reading_habit):
        step1 = advance_checkin(start_checkin(reading_habit), WillingnessLevel.LOW, now=NOW)
        step2 = advance_checkin(step1.flow, EmotionalState.TIRED, now=NOW)

        assert step2.resolved
        record = step2.record
        assert isinstance(record, CheckinRecord)
        assert record.subject_id == "ph-1"
        assert record.willingness is WillingnessLevel.LOW
        assert record.mood is EmotionalState.TIRED
        assert record.timestamp == NOW
        assert record.resolved_action == "Open your book and read one paragraph"

    def test_step_two_rejected_without_mood(self, reading_habit):
        step1 = advance_checkin(start_checkin(reading_habit), "high", now=NOW)
        result = advance_checkin(step1.flow, now=NOW)

        assert not result.accepted
        assert result.reason == REASON_NEED_MOOD
        assert result.flow is step1.flow

    def test_mood_value_on_first_step_is_invalid(self, reading_habit):
        flow = start_checkin(reading_habit)
        result = advance_checkin(flow, "good", now=NOW)
        assert not result.accepted
        assert result.reason == REASON_INVALID_VALUE
        assert result.flow is flow

    def test_emotion_cannot_be_selected_on_first_step(self, reading_habit):
        flow = start_checkin(reading_habit)
        assert select_emotion(flow, "good") is flow

    def test_willingness_cannot_change_on_second_step(self, reading_habit):
        step1 = advance_checkin(start_checkin(reading_habit), "low", now=NOW)
        assert select_willingness(step1.flow, "high") is step1.flow

    def test_resolver_is_injectable(self, reading_habit):
        step1 = advance_checkin(start_checkin(reading_habit), "high", now=NOW)
        result = advance_checkin(
            step1.flow, "good", now=NOW, resolver=lambda subject, w, m: f"{subject.name}:{w.value}:{m.value}"
        )
        assert result.record.resolved_action == "Evening reading:high:good"


class TestSingleStepFlow:
    def test_needs_both_fields(self, gym_task):
        flow = select_emotion(start_checkin(gym_task), "tired")
        result = advance_checkin(flow, now=NOW)
        assert not result.accepted
        assert result.reason == REASON_NEED_WILLINGNESS
        assert result.flow is flow

    def test_keywords_resolve_in_one_call(self, gym_task):
        result = advance_checkin(
            start_checkin(gym_task), willingness="medium", mood="tired", now=NOW
        )
        assert result.resolved
        assert result.record.resolved_action == (
            "Put on workout clothes and do 5 minutes of stretching"
        )

    def test_value_fills_either_field(self, gym_task):
        flow = start_checkin(gym_task)
        first = advance_checkin(flow, "high", now=NOW)
        assert not first.accepted
        assert first.reason == REASON_NEED_MOOD
        # Rejected transitions do not keep the value
        assert first.flow.willingness is None

        flow = select_willingness(flow, "high")
        second = advance_checkin(flow, "good", now=NOW)
        assert second.resolved
        assert second.record.resolved_action == 'Great energy! Start the full task: "Go to gym"'

    def test_invalid_keyword_value_rejected(self, gym_task):
        flow = start_checkin(gym_task)
        result = advance_checkin(flow, willingness="maybe", mood="good", now=NOW)
        assert not result.accepted
        assert result.reason == REASON_INVALID_VALUE
        assert result.flow is flow


class TestTerminalStates:
    def test_resolved_flow_cannot_advance(self, gym_task):
        done = advance_checkin(start_checkin(gym_task), willingness="low", mood="good", now=NOW)
        again = advance_checkin(done.flow, "low", now=NOW)
        assert not again.accepted
        assert again.reason == REASON_FINISHED
        assert again.flow is done.flow

    def test_cancel_produces_no_record(self, reading_habit):
        step1 = advance_checkin(start_checkin(reading_habit), "medium", now=NOW)
        cancelled = cancel_checkin(step1.flow)
        assert cancelled.state is FlowState.CANCELLED
        assert cancelled.record is None
        assert not advance_checkin(cancelled, "good", now=NOW).accepted

    def test_cancel_is_noop_on_resolved(self, gym_task):
        done = advance_checkin(start_checkin(gym_task), willingness="low", mood="good", now=NOW)
        assert cancel_checkin(done.flow) is done.flow


class TestGoBack:
    def test_back_from_step_two_returns_to_step_one(self, reading_habit):
        step1 = advance_checkin(start_checkin(reading_habit), "medium", now=NOW)
        flow = select_emotion(step1.flow, "good")
        back = go_back(flow)
        assert back.state is FlowState.IDLE
        assert back.willingness is WillingnessLevel.MEDIUM
        assert back.mood is None

    def test_back_from_step_one_cancels(self, reading_habit):
        back = go_back(start_checkin(reading_habit))
        assert back.state is FlowState.CANCELLED


class TestHabitEvent:
    def test_event_carries_checkin(self, reading_habit):
        step1 = advance_checkin(start_checkin(reading_habit), "low", now=NOW)
        done = advance_checkin(step1.flow, "stressed", now=NOW)

        event = habit_event_from(done.record)
        assert event.habit_id == "ph-1"
        assert event.date == NOW
        assert event.completed is False
        assert event.adaptive_action == done.record.resolved_action


def test_record_rejects_empty_action():
    with pytest.raises(ValueError):
        CheckinRecord(
            subject_id="x",
            mood=EmotionalState.GOOD,
            willingness=WillingnessLevel.HIGH,
            timestamp=NOW,
            resolved_action="  ",
        )
