"""Per-period aggregation (daily / weekly / monthly / yearly tables).

Weekly keys use a simplified, month-anchored week number rather than
ISO-8601 weeks::

    week = ceil((day_of_month + weekday_of_first_of_month) / 7)

with the weekday counted Sunday = 0.  The 1st of a month is always in
week 1 and a new week starts every Sunday; weeks never span two months,
so ``2024-W01`` appears once per month.  Downstream tables depend on
these bucket boundaries, so the arithmetic is kept as-is.
"""

from __future__ import annotations

import json
import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Sequence

from sleepstats.analytics.clock import round_half_up
from sleepstats.analytics.summary import mean_duration, mean_quality
from sleepstats.errors import InvalidArgument
from sleepstats.session import SleepSession


class Granularity(str, Enum):
    """Bucketing resolution for period tables."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: str | Granularity) -> Granularity:
        """Accept an enum member or its literal string value."""
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(g.value for g in cls)
            raise InvalidArgument(
                f"Unknown granularity {value!r} (expected one of: {choices})"
            ) from None


@dataclass
class PeriodBucket:
    """Aggregates for one period key."""

    period_key: str
    average_duration_minutes: int
    average_quality: float
    session_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period_key,
            "averageDurationMinutes": self.average_duration_minutes,
            "averageQuality": self.average_quality,
            "sessionCount": self.session_count,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def _sunday_based_weekday(d: date) -> int:
    # date.weekday(): Monday = 0 ... Sunday = 6
    return (d.weekday() + 1) % 7


def week_of_month(d: date) -> int:
    """Month-anchored week number (1-6), see module docstring."""
    offset = _sunday_based_weekday(d.replace(day=1))
    return math.ceil((d.day + offset) / 7)


def period_key(ts: datetime, granularity: Granularity | str) -> str:
    """Bucket key for a sleep start timestamp."""
    g = Granularity.parse(granularity)
    d = ts.date()
    if g is Granularity.DAILY:
        return d.isoformat()
    if g is Granularity.WEEKLY:
        return f"{d.year:04d}-W{week_of_month(d):02d}"
    if g is Granularity.MONTHLY:
        return f"{d.year:04d}-{d.month:02d}"
    return f"{d.year:04d}"


def group_by_period(
    sessions: Sequence[SleepSession],
    granularity: Granularity | str,
) -> list[PeriodBucket]:
    """Group sessions into period buckets, sorted by key.

    Args:
        sessions: Sessions to group (may be empty).
        granularity: ``daily``, ``weekly``, ``monthly`` or ``yearly``.

    Returns:
        One PeriodBucket per non-empty period; ``[]`` for no sessions.

    Raises:
        InvalidArgument: for an unknown granularity.
    """
    g = Granularity.parse(granularity)

    groups: dict[str, list[SleepSession]] = defaultdict(list)
    for s in sessions:
        groups[period_key(s.sleep_time, g)].append(s)

    buckets = [
        PeriodBucket(
            period_key=key,
            average_duration_minutes=int(round_half_up(mean_duration(members))),
            average_quality=round_half_up(mean_quality(members), 1),
            session_count=len(members),
        )
        for key, members in groups.items()
    ]
    buckets.sort(key=lambda b: b.period_key)
    return buckets
