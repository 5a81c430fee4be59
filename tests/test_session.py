"""Tests for sleepstats.session -- session records and parsing."""

from datetime import date, datetime, timedelta, timezone

import pytest

from sleepstats.errors import InvalidArgument
from sleepstats.session import SleepSession, parse_date, parse_timestamp
from tests.conftest import make_record, make_session


class TestParseTimestamp:
    def test_naive(self):
        assert parse_timestamp("2024-03-04T23:15:00") == datetime(2024, 3, 4, 23, 15)

    def test_zulu_suffix(self):
        ts = parse_timestamp("2024-03-04T23:15:00.000Z")
        assert ts.tzinfo is not None
        assert ts.utcoffset() == timedelta(0)
        assert ts.hour == 23

    def test_offset_keeps_wall_clock(self):
        ts = parse_timestamp("2024-03-04T23:15:00+09:00")
        assert (ts.hour, ts.minute) == (23, 15)

    def test_datetime_passthrough(self):
        dt = datetime(2024, 3, 4, 1, 2)
        assert parse_timestamp(dt) is dt

    @pytest.mark.parametrize("value", ["", "yesterday", "2024-13-01T00:00:00", None, 42])
    def test_invalid(self, value):
        with pytest.raises(InvalidArgument):
            parse_timestamp(value)


class TestParseDate:
    def test_valid(self):
        assert parse_date("2024-02-29") == date(2024, 2, 29)

    def test_date_passthrough(self):
        assert parse_date(date(2024, 1, 1)) == date(2024, 1, 1)

    @pytest.mark.parametrize("value", ["2023-02-29", "2024-1-5", "20240105", "2024/01/05", "abc"])
    def test_invalid(self, value):
        with pytest.raises(InvalidArgument):
            parse_date(value)

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            parse_date("nope")


class TestSleepSession:
    def test_duration_derived(self):
        assert make_session(duration_min=437).duration_minutes == 437

    def test_duration_rounds_seconds(self):
        s = SleepSession(
            id=1, user_id=1,
            sleep_time=datetime(2024, 3, 4, 23, 0, 0),
            wake_time=datetime(2024, 3, 5, 7, 0, 40),
        )
        assert s.duration_minutes == 481

    def test_wake_before_sleep_rejected(self):
        with pytest.raises(InvalidArgument):
            SleepSession(1, 1, datetime(2024, 3, 5, 7), datetime(2024, 3, 4, 23))

    def test_equal_times_rejected(self):
        t = datetime(2024, 3, 5, 7)
        with pytest.raises(InvalidArgument):
            SleepSession(1, 1, t, t)

    def test_mixed_awareness_rejected(self):
        with pytest.raises(InvalidArgument):
            SleepSession(
                1, 1,
                datetime(2024, 3, 4, 23),
                datetime(2024, 3, 5, 7, tzinfo=timezone.utc),
            )

    @pytest.mark.parametrize("quality", [0, 11, -3])
    def test_quality_out_of_range(self, quality):
        with pytest.raises(InvalidArgument):
            make_session(quality=quality)

    def test_date_part(self):
        assert make_session("2024-03-05T00:30:00").date_part == "2024-03-05"


class TestFromDict:
    def test_camel_case(self):
        s = SleepSession.from_dict(make_record())
        assert s.user_id == 1
        assert s.duration_minutes == 480
        assert s.quality == 7

    def test_snake_case(self):
        s = SleepSession.from_dict({
            "user_id": "3",
            "sleep_time": "2024-03-04T22:00:00",
            "wake_time": "2024-03-05T06:30:00",
        })
        assert s.user_id == 3
        assert s.quality is None
        assert s.duration_minutes == 510

    def test_stored_duration_ignored(self):
        s = SleepSession.from_dict(make_record(sleep_duration=999))
        assert s.duration_minutes == 480

    def test_missing_field(self):
        record = make_record()
        del record["wakeTime"]
        with pytest.raises(InvalidArgument):
            SleepSession.from_dict(record)

    def test_bad_quality_type(self):
        record = make_record()
        record["quality"] = "great"
        with pytest.raises(InvalidArgument):
            SleepSession.from_dict(record)

    def test_fractional_quality_rejected(self):
        record = make_record()
        record["quality"] = 7.9
        with pytest.raises(InvalidArgument, match="whole number"):
            SleepSession.from_dict(record)

    def test_integral_float_quality(self):
        record = make_record()
        record["quality"] = 8.0
        assert SleepSession.from_dict(record).quality == 8

    def test_to_dict_roundtrip_fields(self):
        s = SleepSession.from_dict(make_record(record_id=9, quality=None))
        data = s.to_dict()
        assert data["id"] == 9
        assert data["sleepDuration"] == 480
        assert data["sleepTime"] == "2024-03-04T23:00:00"
        assert data["quality"] is None

    def test_repr(self):
        assert "480min" in repr(make_session(duration_min=480))
