"""Tests for sleepstats.analytics.clock -- clock-minute normalization."""

from datetime import datetime

import pytest

from sleepstats.analytics.clock import (
    BEDTIME_CUTOFF_HOUR,
    MINUTES_PER_DAY,
    average_clock,
    format_clock,
    round_half_up,
    to_bedtime_minutes,
    to_clock_minutes,
)


class TestToClockMinutes:
    def test_midnight(self):
        assert to_clock_minutes(datetime(2024, 1, 1, 0, 0)) == 0

    def test_last_minute(self):
        assert to_clock_minutes(datetime(2024, 1, 1, 23, 59)) == 1439

    def test_seconds_ignored(self):
        assert to_clock_minutes(datetime(2024, 1, 1, 7, 30, 59)) == 450


class TestToBedtimeMinutes:
    def test_evening_unchanged(self):
        assert to_bedtime_minutes(datetime(2024, 1, 1, 23, 30)) == 1410

    def test_after_midnight_remapped(self):
        assert to_bedtime_minutes(datetime(2024, 1, 2, 0, 45)) == 1485

    def test_just_before_cutoff_remapped(self):
        ts = datetime(2024, 1, 2, BEDTIME_CUTOFF_HOUR - 1, 59)
        assert to_bedtime_minutes(ts) == 8 * 60 + 59 + MINUTES_PER_DAY

    def test_cutoff_not_remapped(self):
        ts = datetime(2024, 1, 2, BEDTIME_CUTOFF_HOUR, 0)
        assert to_bedtime_minutes(ts) == 540

    def test_continuous_across_midnight(self):
        before = to_bedtime_minutes(datetime(2024, 1, 1, 23, 50))
        after = to_bedtime_minutes(datetime(2024, 1, 2, 0, 10))
        assert after - before == 20


class TestAverageClock:
    def test_empty(self):
        assert average_clock([]) == "00:00"

    def test_zero_padding(self):
        assert average_clock([425]) == "07:05"

    def test_mean(self):
        assert average_clock([420, 480]) == "07:30"

    def test_wraps_remapped_bedtimes(self):
        # 23:30 and 00:30 average to midnight, not noon
        assert average_clock([1410, 1470]) == "00:00"

    def test_fraction_floored(self):
        assert average_clock([0, 1]) == "00:00"


class TestFormatClock:
    def test_format(self):
        assert format_clock(1439) == "23:59"

    def test_wraps(self):
        assert format_clock(1440 + 65) == "01:05"


class TestRoundHalfUp:
    def test_half_goes_up(self):
        assert round_half_up(2.5) == 3

    def test_negative_half_toward_positive(self):
        assert round_half_up(-2.5) == -2

    def test_one_decimal(self):
        assert round_half_up(7.25, 1) == pytest.approx(7.3)

    def test_plain(self):
        assert round_half_up(479.4) == 479

    def test_tie_decided_on_binary_value(self):
        # 1.15 is stored as 1.149999...
        assert round_half_up(1.15, 1) == pytest.approx(1.1)
