"""
Pure action resolution for check-ins.

No I/O, no randomness: maps (willingness, mood, subject) to the text of the
next action. Every input resolves to a non-empty string.

Lookup order for the scaled-down tiers:
1. Exact canonical title (hand-authored actions for known subjects)
2. Keyword family (gym, reading, meditation)
3. Generic template for the tier
"""

import logging
import re
from enum import Enum
from typing import Dict, Optional, Pattern, Tuple

from ..models.enums import EmotionalState, SubjectKind, WillingnessLevel
from ..models.subjects import AdHocTask, PriorityHabit, Subject

logger = logging.getLogger(__name__)


class ActionTier(Enum):
    FULL = "full"
    MEDIUM = "medium"
    MICRO = "micro"


class SubjectVariant(Enum):
    """Which template voice to use: one-off task or priority habit."""

    TASK = "task"
    HABIT = "habit"


# (medium, micro) actions for known subject titles
CANONICAL_ACTIONS: Dict[str, Tuple[str, str]] = {
    "Write project report": (
        "Open the document and write just one paragraph",
        "Open the document and write one sentence",
    ),
    "Go to gym": (
        "Put on workout clothes and do 5 minutes of stretching",
        "Put on your gym shoes and take 3 deep breaths",
    ),
    "Clean kitchen": (
        "Clear and wipe down just the counter",
        "Put away 3 items from the counter",
    ),
    "Call mom": (
        "Send a quick text saying you'll call soon",
        "Add mom's contact to your favorites",
    ),
}

# (medium, micro) actions per activity family
FAMILY_ACTIONS: Dict[SubjectKind, Tuple[str, str]] = {
    SubjectKind.GYM: (
        "Put on your workout clothes and do 10 minutes of light movement",
        "Just put on your workout clothes and take 3 deep breaths",
    ),
    SubjectKind.READING: (
        "Read just one page or chapter - that counts!",
        "Open your book and read one paragraph",
    ),
    SubjectKind.MEDITATION: (
        "Try a 5-minute breathing exercise instead",
        "Take 3 mindful breaths right where you are",
    ),
}

# Checked in order; first family whose pattern matches wins. The core stems
# match anywhere in the name ("Gymnastics"), the extra words only whole.
FAMILY_KEYWORDS: Tuple[Tuple[SubjectKind, Pattern[str]], ...] = (
    (SubjectKind.GYM, re.compile(r"gym|workout|\b(exercise|fitness)\b", re.IGNORECASE)),
    (SubjectKind.READING, re.compile(r"reading|\b(read|books?)\b", re.IGNORECASE)),
    (
        SubjectKind.MEDITATION,
        re.compile(r"meditation|\b(meditate|mindfulness)\b", re.IGNORECASE),
    ),
)

FULL_TEMPLATES: Dict[SubjectVariant, str] = {
    SubjectVariant.TASK: 'Great energy! Start the full task: "{name}"',
    SubjectVariant.HABIT: "Perfect energy! Do your full {name} session today! \U0001f680",
}

GENERIC_TEMPLATES: Dict[SubjectVariant, Tuple[str, str]] = {
    SubjectVariant.TASK: (
        'Break "{name}" into smaller steps',
        'Take one tiny step toward "{name}"',
    ),
    SubjectVariant.HABIT: (
        "Do a mini version of {name} for just 10 minutes",
        "Take one tiny step toward {name} - even 2 minutes counts",
    ),
}

# Last resort when even the template cannot be filled
UNIVERSAL_FALLBACK = "Take one tiny step forward - even 2 minutes counts"


def select_tier(willingness: object, mood: object) -> ActionTier:
    """Pick the effort tier. Unrecognised inputs land on the micro tier."""
    level = WillingnessLevel.coerce(willingness)
    state = EmotionalState.coerce(mood)

    if level is WillingnessLevel.HIGH and state is not None and state.is_positive:
        return ActionTier.FULL
    if level is WillingnessLevel.MEDIUM:
        return ActionTier.MEDIUM
    return ActionTier.MICRO


def infer_kind(name: Optional[str], category: Optional[str] = None) -> SubjectKind:
    """Match a subject's name, then its category, against keyword families."""
    for text in (name, category):
        if not text:
            continue
        for kind, pattern in FAMILY_KEYWORDS:
            if pattern.search(text):
                return kind
    return SubjectKind.GENERIC


def _coerce_kind(kind: object) -> Optional[SubjectKind]:
    if kind is None or isinstance(kind, SubjectKind):
        return kind
    try:
        return SubjectKind(str(kind).strip().lower())
    except ValueError:
        logger.debug(f"Unknown subject kind {kind!r}, inferring from name")
        return None


def _format(template: str, name: str) -> str:
    text = template.format(name=name).strip()
    return text or UNIVERSAL_FALLBACK


def resolve_action(
    subject_name: str,
    willingness: object,
    mood: object,
    kind: object = None,
    category: Optional[str] = None,
    variant: SubjectVariant = SubjectVariant.TASK,
) -> str:
    """Return the recommended action text for a check-in.

    Args:
        subject_name: Task title or habit name.
        willingness: WillingnessLevel (or its string value).
        mood: EmotionalState (or its string value).
        kind: Explicit SubjectKind; inferred from name/category when omitted.
        category: Subject category, used for family inference.
        variant: Task or habit wording.

    Returns:
        Non-empty action text.
    """
    name = (subject_name or "").strip()
    tier = select_tier(willingness, mood)

    if tier is ActionTier.FULL:
        return _format(FULL_TEMPLATES[variant], name)

    index = 0 if tier is ActionTier.MEDIUM else 1

    canonical = CANONICAL_ACTIONS.get(name)
    if canonical:
        return canonical[index]

    family = _coerce_kind(kind)
    if family is None:
        family = infer_kind(name, category)
    if family in FAMILY_ACTIONS:
        return FAMILY_ACTIONS[family][index]

    return _format(GENERIC_TEMPLATES[variant][index], name)


def resolve_for_subject(subject: Subject, willingness: object, mood: object) -> str:
    """Resolve an action for a task or priority habit."""
    if isinstance(subject, PriorityHabit):
        return resolve_action(
            subject.name,
            willingness,
            mood,
            category=subject.category,
            variant=SubjectVariant.HABIT,
        )
    if isinstance(subject, AdHocTask):
        return resolve_action(
            subject.title,
            willingness,
            mood,
            category=subject.category,
            variant=SubjectVariant.TASK,
        )
    name = getattr(subject, "name", None) or getattr(subject, "title", "")
    return resolve_action(str(name), willingness, mood)
