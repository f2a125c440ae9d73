"""
Unit tests for review-day boundaries.

Run: pytest tests/unit/test_clock.py -v
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from ksrs.core.clock import day_offset, day_offset_unix, day_start, day_start_unix

UTC = timezone.utc


def at(day, hour, minute=0):
    return datetime(2024, 3, day, hour, minute, tzinfo=UTC)


class TestDayStart:
    """The day runs from 04:00 to 04:00."""

    def test_afternoon_belongs_to_same_date(self):
        assert day_start(at(10, 12)) == at(10, 4)

    def test_before_cutoff_belongs_to_previous_date(self):
        assert day_start(at(10, 2, 30)) == at(9, 4)

    def test_exactly_at_cutoff(self):
        assert day_start(at(10, 4)) == at(10, 4)

    def test_custom_cutoff(self):
        assert day_start(at(10, 2), cutoff_hour=0) == at(10, 0)

    def test_unix_matches_datetime(self):
        assert day_start_unix(at(10, 12)) == int(at(10, 4).timestamp())


class TestDayOffset:
    """Future review days."""

    def test_tomorrow(self):
        assert day_offset(1, at(10, 12)) == at(11, 4)

    def test_tomorrow_from_late_night(self):
        # 02:00 on the 11th still belongs to the 10th
        assert day_offset(1, at(11, 2)) == at(11, 4)

    def test_zero_days_is_day_start(self):
        assert day_offset(0, at(10, 23)) == at(10, 4)

    def test_crosses_month(self):
        assert day_offset(30, at(10, 12)) == datetime(2024, 4, 9, 4, tzinfo=UTC)

    def test_unix(self):
        assert day_offset_unix(2, at(10, 12)) == int(at(12, 4).timestamp())


BERLIN = ZoneInfo("Europe/Berlin")


def berlin(month, day, hour):
    return datetime(2026, month, day, hour, tzinfo=BERLIN)


class TestDaylightSaving:
    """
    Boundaries stay at 04:00 wall clock time across DST changes.

    Europe/Berlin switches to summer time on 2026-03-29 and back on
    2026-10-25.
    """

    @pytest.mark.parametrize("month,day", [(3, 28), (3, 29), (10, 24), (10, 25)])
    def test_day_start_is_cutoff_in_zone(self, month, day):
        assert day_start(berlin(month, day, 12)) == berlin(month, day, 4)
        assert day_start(berlin(month, day, 12)).hour == 4

    def test_tomorrow_after_spring_change(self):
        tomorrow = day_offset(1, berlin(3, 28, 12))

        assert tomorrow == berlin(3, 29, 4)
        assert tomorrow.utcoffset() == timedelta(hours=2)
        assert day_offset_unix(1, berlin(3, 28, 12)) - day_start_unix(berlin(3, 28, 12)) == 23 * 3600

    def test_tomorrow_after_autumn_change(self):
        tomorrow = day_offset(1, berlin(10, 24, 12))

        assert tomorrow == berlin(10, 25, 4)
        assert tomorrow.utcoffset() == timedelta(hours=1)
        assert day_offset_unix(1, berlin(10, 24, 12)) - day_start_unix(berlin(10, 24, 12)) == 25 * 3600

    def test_week_across_change(self):
        assert day_offset(7, berlin(3, 25, 12)) == berlin(4, 1, 4)


@pytest.mark.usefixtures("berlin_local_time")
class TestLocalClock:
    """Naive and astimezone() datetimes follow the process local zone."""

    def test_day_start_is_local_cutoff(self):
        start = day_start(datetime(2026, 3, 28, 12).astimezone())

        assert start.replace(tzinfo=None) == datetime(2026, 3, 28, 4)

    @pytest.mark.parametrize("month,day", [(3, 28), (10, 24)])
    def test_tomorrow_is_local_cutoff(self, month, day):
        tomorrow = day_offset(1, datetime(2026, month, day, 12).astimezone())

        assert tomorrow.timestamp() == berlin(month, day + 1, 4).timestamp()

    def test_naive_now_is_local(self):
        assert day_offset_unix(1, datetime(2026, 3, 28, 12)) == int(berlin(3, 29, 4).timestamp())

    def test_utc_now_keeps_utc_boundaries(self):
        assert day_start(at(10, 12)) == at(10, 4)
