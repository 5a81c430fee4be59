"""Rule-based insights comparing two windows of sleep sessions.

Rules run in a fixed order and each appends at most one insight:

1. Duration trend -- average duration changed by >= 10% vs the prior window.
2. Quality trend  -- average quality changed by >= 10% (both windows rated).
3. Weekday/weekend anomaly -- averages differ by >= 60 minutes.
4. Consistency    -- score < 50 (recommendation) or >= 80 (praise).
5. Efficiency     -- < 60% (too little sleep) or > 100% (oversleeping).

If the current window is empty, none of the above run and a single
"insufficient data" recommendation is returned instead.  Missing quality
data or an empty prior window only gate individual rules; nothing here
raises for absent data.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

from sleepstats.analytics.clock import round_half_up
from sleepstats.analytics.patterns import PatternSummary, analyze_patterns
from sleepstats.analytics.summary import SummaryMetrics, summarize
from sleepstats.session import SleepSession

CHANGE_THRESHOLD_PERCENT = 10
WEEKEND_GAP_MINUTES = 60
LOW_CONSISTENCY_SCORE = 50
HIGH_CONSISTENCY_SCORE = 80
LOW_EFFICIENCY_PERCENT = 60
HIGH_EFFICIENCY_PERCENT = 100

DEFAULT_WINDOW_LABEL = "30 days"

INSUFFICIENT_DATA_MESSAGE = (
    "Keep logging your sleep every day to unlock more accurate sleep insights."
)


class InsightKind(str, Enum):
    TREND = "trend"
    ANOMALY = "anomaly"
    RECOMMENDATION = "recommendation"


@dataclass
class Insight:
    """A single typed observation about recent sleep."""

    kind: InsightKind
    message: str
    metric: str
    value: float
    change_percent: int = 0
    window_label: str = DEFAULT_WINDOW_LABEL

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "message": self.message,
            "data": {
                "metric": self.metric,
                "value": self.value,
                "change": self.change_percent,
                "period": self.window_label,
            },
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def percent_change(current: float, prior: float) -> int:
    """Rounded relative change of *current* against *prior*, in percent."""
    return int(round_half_up((current - prior) / prior * 100.0))


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def _duration_trend(current: SummaryMetrics, prior: SummaryMetrics, label: str) -> Insight | None:
    if prior.total_sessions == 0 or prior.average_duration_minutes == 0:
        return None
    change = percent_change(current.average_duration_minutes, prior.average_duration_minutes)
    if abs(change) < CHANGE_THRESHOLD_PERCENT:
        return None
    direction = "up" if change > 0 else "down"
    return Insight(
        kind=InsightKind.TREND,
        message=(
            f"Your average sleep duration is {direction} {abs(change)}% "
            f"compared with the previous {label}."
        ),
        metric="sleep_duration",
        value=current.average_duration_minutes,
        change_percent=change,
        window_label=label,
    )


def _quality_trend(current: SummaryMetrics, prior: SummaryMetrics, label: str) -> Insight | None:
    if current.average_quality <= 0 or prior.average_quality <= 0:
        return None
    change = percent_change(current.average_quality, prior.average_quality)
    if abs(change) < CHANGE_THRESHOLD_PERCENT:
        return None
    verb = "improved" if change > 0 else "declined"
    return Insight(
        kind=InsightKind.TREND,
        message=(
            f"Your sleep quality has {verb} by {abs(change)}% "
            f"compared with the previous {label}."
        ),
        metric="sleep_quality",
        value=current.average_quality,
        change_percent=change,
        window_label=label,
    )


def _weekend_anomaly(patterns: PatternSummary, label: str) -> Insight | None:
    diff = patterns.weekend_average_duration_minutes - patterns.weekday_average_duration_minutes
    if abs(diff) < WEEKEND_GAP_MINUTES:
        return None
    hours = round_half_up(abs(diff) / 60.0, 1)
    if diff > 0:
        message = f"You sleep about {hours:g} hours longer on weekends than on weekdays."
    else:
        message = f"You sleep about {hours:g} hours longer on weekdays than on weekends, an unusual pattern."
    return Insight(
        kind=InsightKind.ANOMALY,
        message=message,
        metric="weekday_weekend_gap",
        value=abs(diff),
        window_label=label,
    )


def _consistency(patterns: PatternSummary, label: str) -> Insight | None:
    score = patterns.consistency_score
    if score < LOW_CONSISTENCY_SCORE:
        return Insight(
            kind=InsightKind.RECOMMENDATION,
            message=(
                f"Your sleep consistency score is low ({score}/100). Going to bed "
                f"and waking up at similar times every day helps sleep quality."
            ),
            metric="sleep_consistency",
            value=score,
            window_label=label,
        )
    if score >= HIGH_CONSISTENCY_SCORE:
        return Insight(
            kind=InsightKind.TREND,
            message=(
                f"Your sleep consistency is excellent ({score}/100). "
                f"You are keeping a regular sleep schedule."
            ),
            metric="sleep_consistency",
            value=score,
            window_label=label,
        )
    return None


def _efficiency(current: SummaryMetrics, label: str) -> Insight | None:
    eff = current.sleep_efficiency_percent
    if eff < LOW_EFFICIENCY_PERCENT:
        return Insight(
            kind=InsightKind.RECOMMENDATION,
            message=(
                f"Your sleep efficiency is low ({eff}%). You are sleeping well "
                f"short of the ideal 8 hours."
            ),
            metric="sleep_efficiency",
            value=eff,
            window_label=label,
        )
    # Efficiency is capped at 100 by the aggregator, so this only fires if
    # the cap is ever lifted.
    if eff > HIGH_EFFICIENCY_PERCENT:
        return Insight(
            kind=InsightKind.RECOMMENDATION,
            message="You are sleeping more than 8 hours. Too much sleep can also affect your health.",
            metric="sleep_efficiency",
            value=eff,
            window_label=label,
        )
    return None


def insufficient_data_insight(label: str = DEFAULT_WINDOW_LABEL) -> Insight:
    return Insight(
        kind=InsightKind.RECOMMENDATION,
        message=INSUFFICIENT_DATA_MESSAGE,
        metric="insufficient_data",
        value=0,
        window_label=label,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def generate_insights(
    current_sessions: Sequence[SleepSession],
    prior_sessions: Sequence[SleepSession],
    patterns: PatternSummary | None = None,
    window_label: str = DEFAULT_WINDOW_LABEL,
) -> list[Insight]:
    """Compare the current window against the prior one and emit insights.

    Args:
        current_sessions: Sessions in the most recent window.
        prior_sessions: Sessions in the window just before it.
        patterns: Pattern analysis of the current window; computed from
            *current_sessions* when omitted.
        window_label: Human label for the window length (e.g. ``"30 days"``).

    Returns:
        Insights in rule order; exactly one "insufficient data"
        recommendation when the current window is empty.
    """
    current = summarize(current_sessions)
    if current.is_empty:
        return [insufficient_data_insight(window_label)]

    prior = summarize(prior_sessions)
    if patterns is None:
        patterns = analyze_patterns(current_sessions)

    candidates = [
        _duration_trend(current, prior, window_label),
        _quality_trend(current, prior, window_label),
        _weekend_anomaly(patterns, window_label),
        _consistency(patterns, window_label),
        _efficiency(current, window_label),
    ]
    return [insight for insight in candidates if insight is not None]
