"""
Typed domain errors for the Mind Setu engine.

The engine itself absorbs degenerate input into default results and refuses
invalid check-in transitions by value. These errors cover caller misuse only,
so callers can distinguish each failure mode and map it to a message.
"""


class DomainError(Exception):
    """Base class for all domain-specific errors."""


# ---------------------------------------------------------------------------
# Taxonomy parsing
# ---------------------------------------------------------------------------


class InvalidMoodValue(DomainError, ValueError):
    """A string could not be parsed into an EmotionalState."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown emotional state: {value!r}")


class InvalidWillingnessValue(DomainError, ValueError):
    """A string could not be parsed into a WillingnessLevel."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown willingness level: {value!r}")


# ---------------------------------------------------------------------------
# Check-in flow registry
# ---------------------------------------------------------------------------


class CheckinAlreadyActive(DomainError):
    """A check-in flow is already open for this subject."""

    def __init__(self, subject_id: str) -> None:
        self.subject_id = subject_id
        super().__init__(f"Check-in already in progress for subject {subject_id}")


class FlowNotActive(DomainError):
    """The flow being advanced is not the subject's open flow."""

    def __init__(self, subject_id: str) -> None:
        self.subject_id = subject_id
        super().__init__(f"No active check-in for subject {subject_id}")
