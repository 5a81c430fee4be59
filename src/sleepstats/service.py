"""Query operations over a user's sleep sessions.

:class:`SleepStatsService` is what a request handler calls.  Each
operation validates its arguments, makes one repository call and hands
the sessions to the pure functions in :mod:`sleepstats.analytics`.
Argument errors are raised before the repository is touched; repository
errors propagate unchanged.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Callable

from sleepstats.analytics.insights import DEFAULT_WINDOW_LABEL, Insight, generate_insights
from sleepstats.analytics.patterns import PatternSummary, analyze_patterns
from sleepstats.analytics.periods import Granularity, PeriodBucket, group_by_period
from sleepstats.analytics.summary import SummaryMetrics, summarize
from sleepstats.analytics.trends import TrendSeries, build_trends
from sleepstats.errors import InvalidArgument
from sleepstats.repository import SessionRepository
from sleepstats.session import SleepSession, parse_date

logger = logging.getLogger(__name__)

INSIGHT_WINDOW_DAYS = 30


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-date range; either bound may be open (None)."""

    start: date | None = None
    end: date | None = None

    @classmethod
    def parse(cls, start: str | date | None, end: str | date | None) -> DateRange:
        """Validate ``YYYY-MM-DD`` bounds.

        Raises:
            InvalidArgument: for a malformed date or ``start > end``.
        """
        start_d = parse_date(start) if start else None
        end_d = parse_date(end) if end else None
        if start_d is not None and end_d is not None and start_d > end_d:
            raise InvalidArgument(
                f"start date {start_d.isoformat()} is after end date {end_d.isoformat()}"
            )
        return cls(start_d, end_d)

    def __str__(self) -> str:
        lo = self.start.isoformat() if self.start else "..."
        hi = self.end.isoformat() if self.end else "..."
        return f"[{lo}, {hi}]"


def insight_windows(today: date, days: int = INSIGHT_WINDOW_DAYS) -> tuple[DateRange, DateRange]:
    """The trailing window ending today and the equally long one before it.

    With 30 days: current = [today-30, today], prior = [today-60, today-30].
    The current window checks the sleep date against its start and the prior
    window checks the wake date against its end, so each overnight session
    lands in exactly one of them.
    """
    current = DateRange(today - timedelta(days=days), today)
    prior = DateRange(today - timedelta(days=2 * days), today - timedelta(days=days))
    return current, prior


@dataclass
class SleepStatsReport:
    """Summary, trends and patterns for one date range."""

    summary: SummaryMetrics
    trends: TrendSeries
    patterns: PatternSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "trends": self.trends.to_dict(),
            "patterns": self.patterns.to_dict(),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class SleepStatsService:
    """Read-only statistics over a session repository.

    Args:
        repository: Source of sleep sessions.
        clock: Returns today's date; used only to place the insight windows.
    """

    def __init__(
        self,
        repository: SessionRepository,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.repository = repository
        self.clock = clock

    def _fetch(self, user_id: int, window: DateRange) -> list[SleepSession]:
        sessions = self.repository.fetch_sessions(user_id, window.start, window.end)
        logger.debug("user %s %s: %d sessions", user_id, window, len(sessions))
        return sessions

    def get_summary(
        self,
        user_id: int,
        start_date: str | date | None = None,
        end_date: str | date | None = None,
    ) -> SummaryMetrics:
        window = DateRange.parse(start_date, end_date)
        return summarize(self._fetch(user_id, window))

    def get_trends(
        self,
        user_id: int,
        start_date: str | date | None = None,
        end_date: str | date | None = None,
    ) -> TrendSeries:
        window = DateRange.parse(start_date, end_date)
        return build_trends(self._fetch(user_id, window))

    def get_period_stats(
        self,
        user_id: int,
        granularity: Granularity | str = Granularity.DAILY,
        start_date: str | date | None = None,
        end_date: str | date | None = None,
    ) -> list[PeriodBucket]:
        g = Granularity.parse(granularity)
        window = DateRange.parse(start_date, end_date)
        return group_by_period(self._fetch(user_id, window), g)

    def get_patterns(
        self,
        user_id: int,
        start_date: str | date | None = None,
        end_date: str | date | None = None,
    ) -> PatternSummary:
        window = DateRange.parse(start_date, end_date)
        return analyze_patterns(self._fetch(user_id, window))

    def get_report(
        self,
        user_id: int,
        start_date: str | date | None = None,
        end_date: str | date | None = None,
    ) -> SleepStatsReport:
        """Summary, trends and patterns from a single repository fetch."""
        window = DateRange.parse(start_date, end_date)
        sessions = self._fetch(user_id, window)
        return SleepStatsReport(
            summary=summarize(sessions),
            trends=build_trends(sessions),
            patterns=analyze_patterns(sessions),
        )

    def get_insights(self, user_id: int) -> list[Insight]:
        """Insights for the last 30 days compared with the 30 days before."""
        current_window, prior_window = insight_windows(self.clock())
        current = self._fetch(user_id, current_window)
        prior = self._fetch(user_id, prior_window)
        return generate_insights(
            current,
            prior,
            patterns=analyze_patterns(current),
            window_label=DEFAULT_WINDOW_LABEL,
        )
