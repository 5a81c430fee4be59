"""Duration and quality time series for charting."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Sequence

from sleepstats.session import SleepSession


@dataclass
class TrendPoint:
    """One ``(date, value)`` sample."""

    date: str  # YYYY-MM-DD
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "value": self.value}


@dataclass
class TrendSeries:
    """Parallel date-ordered series of durations and quality ratings."""

    duration: list[TrendPoint] = field(default_factory=list)
    quality: list[TrendPoint] = field(default_factory=list)  # rated sessions only

    def to_dict(self) -> dict[str, Any]:
        return {
            "duration": [p.to_dict() for p in self.duration],
            "quality": [p.to_dict() for p in self.quality],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        return f"TrendSeries(duration={len(self.duration)}pts, quality={len(self.quality)}pts)"


def build_trends(sessions: Sequence[SleepSession]) -> TrendSeries:
    """Project sessions onto date-ordered duration and quality series.

    ISO dates sort correctly as strings.  ``sorted`` is stable, so sessions
    sharing a date keep their input order.
    """
    duration = [TrendPoint(date=s.date_part, value=s.duration_minutes) for s in sessions]
    quality = [
        TrendPoint(date=s.date_part, value=s.quality)
        for s in sessions
        if s.quality is not None
    ]
    return TrendSeries(
        duration=sorted(duration, key=lambda p: p.date),
        quality=sorted(quality, key=lambda p: p.date),
    )
