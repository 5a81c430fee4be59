"""Weekday/weekend split and bedtime consistency scoring.

The consistency score maps the sample standard deviation of bedtimes
(on the remapped bedtime scale, see :mod:`sleepstats.analytics.clock`)
onto 0-100: a spread of 0 minutes scores 100 and a spread of two hours
or more scores 0.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from sleepstats.analytics.clock import round_half_up, to_bedtime_minutes
from sleepstats.analytics.summary import mean_duration
from sleepstats.session import SleepSession

# Bedtime standard deviation (minutes) at which consistency reaches 0.
CONSISTENCY_STDDEV_CEILING = 120.0

# date.weekday(): Saturday = 5, Sunday = 6
WEEKEND_DAYS = frozenset({5, 6})


@dataclass
class PatternSummary:
    """Weekday vs weekend durations and bedtime regularity."""

    weekday_average_duration_minutes: int = 0
    weekend_average_duration_minutes: int = 0
    consistency_score: int = 100  # 0-100, higher = more regular

    def to_dict(self) -> dict[str, Any]:
        return {
            "weekdayAverageDurationMinutes": self.weekday_average_duration_minutes,
            "weekendAverageDurationMinutes": self.weekend_average_duration_minutes,
            "consistencyScore": self.consistency_score,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        return (
            f"PatternSummary(weekday={self.weekday_average_duration_minutes}min, "
            f"weekend={self.weekend_average_duration_minutes}min, "
            f"consistency={self.consistency_score}/100)"
        )


def is_weekend(session: SleepSession) -> bool:
    """True when the session started on a Saturday or Sunday."""
    return session.sleep_time.weekday() in WEEKEND_DAYS


def consistency_score(bedtime_minutes: Sequence[float]) -> int:
    """Score bedtime regularity from 0 (erratic) to 100 (identical bedtimes).

    Fewer than two bedtimes cannot show irregularity and score 100.
    """
    if len(bedtime_minutes) <= 1:
        return 100

    arr = np.asarray(bedtime_minutes, dtype=np.float64)
    std = float(np.std(arr, ddof=1))
    score = round_half_up(100.0 - std / CONSISTENCY_STDDEV_CEILING * 100.0)
    return int(max(0.0, min(100.0, score)))


def analyze_patterns(sessions: Sequence[SleepSession]) -> PatternSummary:
    """Split sessions by weekday/weekend and score bedtime consistency.

    Args:
        sessions: Sessions to analyze (may be empty).

    Returns:
        PatternSummary; subset averages are 0 when a subset is empty.
    """
    weekday = [s for s in sessions if not is_weekend(s)]
    weekend = [s for s in sessions if is_weekend(s)]
    bedtimes = [to_bedtime_minutes(s.sleep_time) for s in sessions]

    return PatternSummary(
        weekday_average_duration_minutes=int(round_half_up(mean_duration(weekday))),
        weekend_average_duration_minutes=int(round_half_up(mean_duration(weekend))),
        consistency_score=consistency_score(bedtimes),
    )
