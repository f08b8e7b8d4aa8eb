"""
Injectable wall clock and local-time helpers.

Every time-window computation takes ``now`` explicitly. These helpers let
callers pass a clock around and compare stored timestamps against ``now``
in ``now``'s local time, whether or not either side carries a tzinfo.
"""

from datetime import date, datetime
from typing import Callable, Union

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Current local wall-clock time (naive)."""
    return datetime.now()


def fixed_clock(at: datetime) -> Clock:
    """Clock that always returns *at* (for tests and replays)."""

    def _clock() -> datetime:
        return at

    return _clock


def align_to(value: datetime, now: datetime) -> datetime:
    """Express *value* in the same local frame as *now*.

    - both naive or both aware: aware values are converted to now's zone
    - aware value, naive now: converted to system local time, tz dropped
    - naive value, aware now: taken as wall time in now's zone
    """
    if value.tzinfo is None and now.tzinfo is None:
        return value
    if value.tzinfo is not None and now.tzinfo is not None:
        return value.astimezone(now.tzinfo)
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value.replace(tzinfo=now.tzinfo)


def local_date(value: Union[date, datetime], now: datetime) -> date:
    """Calendar date of *value* as seen from *now*'s local time.

    A plain ``date`` is already a local calendar day and is returned as is.
    """
    if not isinstance(value, datetime):
        return value
    return align_to(value, now).date()
