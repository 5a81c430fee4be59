"""Tests for sleepstats.generator -- synthetic session data."""

from datetime import date

import numpy as np

from sleepstats.analytics.clock import to_bedtime_minutes
from sleepstats.generator import BAD_NOTES, GOOD_NOTES, generate_sessions, note_for_quality


class TestGenerateSessions:
    def test_no_missing_days(self):
        sessions = generate_sessions(1, 30, end=date(2024, 4, 30), missing_probability=0.0, seed=1)
        assert len(sessions) == 30

    def test_all_missing(self):
        assert generate_sessions(1, 30, missing_probability=1.0, seed=1) == []

    def test_deterministic_with_seed(self):
        a = generate_sessions(1, 20, end=date(2024, 4, 30), seed=42)
        b = generate_sessions(1, 20, end=date(2024, 4, 30), seed=42)
        assert a == b

    def test_chronological_and_numbered(self):
        sessions = generate_sessions(3, 15, end=date(2024, 4, 30), missing_probability=0.0, seed=7)
        starts = [s.sleep_time for s in sessions]
        assert starts == sorted(starts)
        assert [s.id for s in sessions] == list(range(1, 16))
        assert all(s.user_id == 3 for s in sessions)

    def test_plausible_values(self):
        sessions = generate_sessions(1, 60, end=date(2024, 4, 30), missing_probability=0.0, seed=3)
        for s in sessions:
            assert 1 <= s.quality <= 10
            assert s.notes
            assert s.duration_minutes >= 60
            # bedtimes fall between 21:00 and 00:59
            assert 21 * 60 <= to_bedtime_minutes(s.sleep_time) < 25 * 60

    def test_covers_requested_evenings(self):
        sessions = generate_sessions(1, 10, end=date(2024, 4, 30), missing_probability=0.0, seed=5)
        # 2024-04-21 is a Sunday; a bedtime after midnight lands on the 22nd
        assert sessions[0].sleep_time.date() in (date(2024, 4, 21), date(2024, 4, 22))


class TestNoteForQuality:
    def test_bands(self):
        rng = np.random.default_rng(0)
        assert note_for_quality(9, rng) in GOOD_NOTES
        assert note_for_quality(2, rng) in BAD_NOTES
