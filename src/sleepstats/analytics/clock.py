"""Clock-time normalization shared by every analytics module.

Timestamps are reduced to minutes past midnight on their own wall clock.
Bedtimes need one extra step: a bedtime of 00:45 belongs to the same
evening as 23:30, so clock values before the 09:00 cutoff are pushed past
1440 to keep bedtimes on one continuous scale.  The cutoff assumes nobody
goes to bed between 09:00 and 21:00; it is a fixed heuristic and every
caller goes through :func:`to_bedtime_minutes` so it can be changed here.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Sequence

MINUTES_PER_DAY = 24 * 60

# Bedtimes with an hour below this are treated as "after midnight".
BEDTIME_CUTOFF_HOUR = 9


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with ties going toward +infinity (2.5 -> 3, -2.5 -> -2).

    Python's built-in ``round`` uses banker's rounding, which would make
    averages like 480.5 round down.
    Ties are decided on the binary float, so 1.15 rounds to 1.1 like
    JavaScript's ``Math.round``.
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def to_clock_minutes(ts: datetime) -> int:
    """Minutes past midnight (0-1439) on the timestamp's wall clock."""
    return ts.hour * 60 + ts.minute


def to_bedtime_minutes(ts: datetime) -> int:
    """Clock minutes with after-midnight bedtimes remapped above 1440.

    23:30 -> 1410, 00:45 -> 1485.
    """
    minutes = to_clock_minutes(ts)
    if ts.hour < BEDTIME_CUTOFF_HOUR:
        minutes += MINUTES_PER_DAY
    return minutes


def format_clock(minutes: float) -> str:
    """Format minutes past midnight as ``HH:MM`` (fractions are floored)."""
    whole = int(math.floor(minutes)) % MINUTES_PER_DAY
    return f"{whole // 60:02d}:{whole % 60:02d}"


def average_clock(minutes: Sequence[float]) -> str:
    """Mean of clock minutes, wrapped to 24h and formatted ``HH:MM``.

    Accepts remapped bedtime minutes too; the modulo brings the mean back
    onto the 24-hour clock.  Empty input gives ``"00:00"``.
    """
    if len(minutes) == 0:
        return "00:00"
    mean = sum(minutes) / len(minutes)
    return format_clock(mean % MINUTES_PER_DAY)
