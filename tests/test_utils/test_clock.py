"""Tests for clock injection and local-date alignment."""

from datetime import date, datetime, timedelta, timezone

from mindsetu.utils.clock import align_to, fixed_clock, local_date, system_clock

IST = timezone(timedelta(hours=5, minutes=30))


class TestClocks:
    def test_fixed_clock(self):
        at = datetime(2026, 2, 18, 12, 0)
        clock = fixed_clock(at)
        assert clock() == at
        assert clock() is at

    def test_system_clock_is_naive_now(self):
        before = datetime.now()
        now = system_clock()
        assert now.tzinfo is None
        assert now >= before


class TestAlignTo:
    def test_both_naive_unchanged(self):
        value = datetime(2026, 2, 18, 23, 30)
        assert align_to(value, datetime(2026, 2, 19)) is value

    def test_both_aware_converted(self):
        value = datetime(2026, 2, 18, 20, 0, tzinfo=timezone.utc)
        now = datetime(2026, 2, 19, 9, 0, tzinfo=IST)
        aligned = align_to(value, now)
        assert aligned.tzinfo is IST
        assert aligned.hour == 1 and aligned.minute == 30

    def test_naive_value_aware_now(self):
        value = datetime(2026, 2, 18, 23, 0)
        aligned = align_to(value, datetime(2026, 2, 18, 9, 0, tzinfo=IST))
        assert aligned == datetime(2026, 2, 18, 23, 0, tzinfo=IST)

    def test_aware_value_naive_now(self):
        value = datetime(2026, 2, 18, 12, 0, tzinfo=timezone.utc)
        aligned = align_to(value, datetime(2026, 2, 18, 12, 0))
        assert aligned.tzinfo is None
        assert aligned == value.astimezone().replace(tzinfo=None)


class TestLocalDate:
    def test_late_utc_is_next_day_in_ist(self):
        value = datetime(2026, 2, 18, 20, 0, tzinfo=timezone.utc)
        now = datetime(2026, 2, 19, 9, 0, tzinfo=IST)
        assert local_date(value, now) == date(2026, 2, 19)

    def test_plain_date_returned_as_is(self):
        day = date(2026, 2, 18)
        assert local_date(day, datetime(2026, 2, 19, 1, 0, tzinfo=IST)) is day
        assert local_date(day, datetime(2026, 2, 19, 1, 0)) is day
