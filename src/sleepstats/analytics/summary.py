"""Summary aggregator.

Collapses any set of sleep sessions into a single JSON-serializable
:class:`SummaryMetrics`.  An empty set is a valid answer ("no data yet"),
not an error, and produces zeroed metrics.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from sleepstats.analytics.clock import (
    average_clock,
    round_half_up,
    to_bedtime_minutes,
    to_clock_minutes,
)
from sleepstats.session import SleepSession

# Fixed 8-hour baseline for sleep efficiency.  Known simplification: it
# is not adjusted per user.
IDEAL_SLEEP_MINUTES = 480

EFFICIENCY_CAP = 100


@dataclass
class SummaryMetrics:
    """Aggregate statistics for a set of sleep sessions."""

    total_sessions: int = 0
    average_duration_minutes: int = 0
    average_quality: float = 0.0  # 0 when no session is rated
    average_bedtime: str = "00:00"  # HH:MM
    average_wake_time: str = "00:00"  # HH:MM
    sleep_efficiency_percent: int = 0

    @property
    def is_empty(self) -> bool:
        return self.total_sessions == 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict (JSON-friendly, camelCase keys)."""
        return {
            "totalSessions": self.total_sessions,
            "averageDurationMinutes": self.average_duration_minutes,
            "averageQuality": self.average_quality,
            "averageBedtime": self.average_bedtime,
            "averageWakeTime": self.average_wake_time,
            "sleepEfficiencyPercent": self.sleep_efficiency_percent,
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        return (
            f"SummaryMetrics(n={self.total_sessions}, "
            f"avg={self.average_duration_minutes}min, "
            f"quality={self.average_quality:.1f}, "
            f"bed={self.average_bedtime}, wake={self.average_wake_time}, "
            f"eff={self.sleep_efficiency_percent}%)"
        )


def mean_duration(sessions: Sequence[SleepSession]) -> float:
    """Unrounded mean duration in minutes (0.0 for no sessions)."""
    if len(sessions) == 0:
        return 0.0
    return float(np.mean([s.duration_minutes for s in sessions]))


def mean_quality(sessions: Sequence[SleepSession]) -> float:
    """Unrounded mean quality over rated sessions only (0.0 if none are rated)."""
    ratings = [s.quality for s in sessions if s.quality is not None]
    if not ratings:
        return 0.0
    return float(np.mean(ratings))


def efficiency_percent(average_duration: float) -> int:
    """Average duration as a percentage of the 8-hour ideal, capped at 100."""
    pct = round_half_up(average_duration / IDEAL_SLEEP_MINUTES * 100.0)
    return int(min(EFFICIENCY_CAP, pct))


def summarize(sessions: Sequence[SleepSession]) -> SummaryMetrics:
    """Compute summary metrics over a set of sleep sessions.

    Args:
        sessions: Any list of sessions, possibly empty.

    Returns:
        SummaryMetrics; zeroed (clocks ``"00:00"``) for an empty list.
    """
    if len(sessions) == 0:
        return SummaryMetrics()

    avg_duration = mean_duration(sessions)

    # Bedtimes are averaged on the remapped scale so 23:30 and 00:30 average
    # to 00:00 rather than noon; average_clock wraps the result back.
    bedtimes = [to_bedtime_minutes(s.sleep_time) for s in sessions]
    waketimes = [to_clock_minutes(s.wake_time) for s in sessions]

    return SummaryMetrics(
        total_sessions=len(sessions),
        average_duration_minutes=int(round_half_up(avg_duration)),
        average_quality=round_half_up(mean_quality(sessions), 1),
        average_bedtime=average_clock(bedtimes),
        average_wake_time=average_clock(waketimes),
        sleep_efficiency_percent=efficiency_percent(avg_duration),
    )
