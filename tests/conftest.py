import logging
import logging.handlers
import os
from datetime import datetime

import pytest

# Set test environment variables
os.environ["MINDSETU_LOG_LEVEL"] = "WARNING"


@pytest.fixture(autouse=True)
def _strip_file_handlers():
    """Remove file handlers from root logger so tests never write to logs/app.log."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    for h in saved:
        root.removeHandler(h)
    yield
    # Restore any that were removed (and strip any new ones tests may have added)
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
    for h in saved:
        root.addHandler(h)


@pytest.fixture(autouse=True)
def _fresh_config_cache():
    """Drop cached YAML config and the global event bus between tests."""
    from mindsetu.core.defaults_loader import clear_cache
    from mindsetu.domain.events import reset_event_bus

    clear_cache()
    reset_event_bus()
    yield
    clear_cache()
    reset_event_bus()


@pytest.fixture
def wednesday_noon():
    """Wednesday 2026-02-18 12:00 local; its week runs Sun 15th - Sat 21st."""
    return datetime(2026, 2, 18, 12, 0)


@pytest.fixture
def gym_task():
    from mindsetu.models import AdHocTask, Priority

    return AdHocTask(
        id="2",
        title="Go to gym",
        scheduled_time=datetime(2026, 2, 18, 18, 0),
        category="Health",
        priority=Priority.MEDIUM,
    )


@pytest.fixture
def reading_habit():
    from mindsetu.models import PriorityHabit

    return PriorityHabit(id="ph-1", name="Evening reading", category="Learning", days_per_week=3)


@pytest.fixture
def engine(wednesday_noon):
    """CheckinEngine on a fixed clock with default config and a private bus."""
    from mindsetu.core.typed_config import EngineConfig
    from mindsetu.domain.events import EventBus
    from mindsetu.services.engine import CheckinEngine
    from mindsetu.utils.clock import fixed_clock

    return CheckinEngine(
        config=EngineConfig(),
        clock=fixed_clock(wednesday_noon),
        event_bus=EventBus(),
    )
