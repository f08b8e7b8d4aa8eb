"""Ad-hoc task views and state changes.

Pure helpers over an in-memory task list; each change returns a new task.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Iterable, List, Optional

from ..models.enums import EmotionalState
from ..models.records import CheckinRecord, CompletionRecord
from ..models.subjects import AdHocTask
from ..utils.clock import align_to, local_date

logger = logging.getLogger(__name__)


def upcoming_tasks(tasks: Iterable[AdHocTask], now: datetime) -> List[AdHocTask]:
    """Open tasks scheduled after *now*, soonest first."""
    return sorted(
        (t for t in tasks if not t.completed and align_to(t.scheduled_time, now) > now),
        key=lambda t: t.scheduled_time,
    )


def overdue_tasks(tasks: Iterable[AdHocTask], now: datetime) -> List[AdHocTask]:
    """Open tasks whose scheduled time has passed, oldest first."""
    return sorted(
        (t for t in tasks if t.is_overdue(now)),
        key=lambda t: t.scheduled_time,
    )


def completed_today(tasks: Iterable[AdHocTask], now: datetime) -> List[AdHocTask]:
    """Tasks completed on the local calendar date of *now*."""
    today = now.date()
    return [
        t
        for t in tasks
        if t.completed and t.completed_at is not None and local_date(t.completed_at, now) == today
    ]


def apply_checkin(task: AdHocTask, record: CheckinRecord) -> AdHocTask:
    """Attach a resolved check-in as the task's last check-in.

    A newer check-in supersedes the previous one.
    """
    if record.subject_id != task.id:
        raise ValueError(
            f"CheckinRecord subject_id={record.subject_id} does not match task id={task.id}"
        )
    return replace(task, last_checkin=record, adapted_action=record.resolved_action)


def record_completion(
    subject_id: str, mood: object, now: Optional[datetime] = None
) -> CompletionRecord:
    """Build a completion record with the mood reported when finishing."""
    if now is None:
        now = datetime.now()
    return CompletionRecord(
        subject_id=subject_id,
        mood=EmotionalState.parse(mood),
        completed_at=now,
    )


def complete_task(
    task: AdHocTask, mood: object, now: Optional[datetime] = None
) -> AdHocTask:
    """Mark a task done. The completion time is set once and kept after that."""
    if task.completed:
        logger.debug(f"Task {task.id} already completed at {task.completed_at}")
        return task
    completion = record_completion(task.id, mood, now)
    return replace(
        task,
        completed=True,
        completed_at=completion.completed_at,
        completion_mood=completion.mood,
    )
