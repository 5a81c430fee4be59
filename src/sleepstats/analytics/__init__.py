"""Statistics engine for logged sleep sessions.

Modules:
    clock     -- Clock-minute normalization and the after-midnight bedtime remap
    summary   -- Summary metrics (averages, efficiency)
    trends    -- Date-ordered duration/quality series
    periods   -- Daily/weekly/monthly/yearly buckets
    patterns  -- Weekday/weekend split and consistency score
    insights  -- Rule-based insights across two windows
"""

from sleepstats.analytics.clock import (
    to_clock_minutes,
    to_bedtime_minutes,
    average_clock,
    format_clock,
    round_half_up,
)
from sleepstats.analytics.summary import summarize, SummaryMetrics
from sleepstats.analytics.trends import build_trends, TrendSeries, TrendPoint
from sleepstats.analytics.periods import (
    group_by_period,
    period_key,
    week_of_month,
    Granularity,
    PeriodBucket,
)
from sleepstats.analytics.patterns import analyze_patterns, consistency_score, PatternSummary
from sleepstats.analytics.insights import generate_insights, Insight, InsightKind

__all__ = [
    # clock
    "to_clock_minutes",
    "to_bedtime_minutes",
    "average_clock",
    "format_clock",
    "round_half_up",
    # summary
    "summarize",
    "SummaryMetrics",
    # trends
    "build_trends",
    "TrendSeries",
    "TrendPoint",
    # periods
    "group_by_period",
    "period_key",
    "week_of_month",
    "Granularity",
    "PeriodBucket",
    # patterns
    "analyze_patterns",
    "consistency_score",
    "PatternSummary",
    # insights
    "generate_insights",
    "Insight",
    "InsightKind",
]
