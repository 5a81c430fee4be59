"""sleepstats: statistics, trends and insights for logged sleep sessions."""

from sleepstats.errors import InvalidArgument, SleepStatsError, UpstreamUnavailable
from sleepstats.session import SleepSession
from sleepstats.repository import (
    InMemorySessionRepository,
    JsonlSessionRepository,
    SessionRepository,
)
from sleepstats.service import SleepStatsReport, SleepStatsService

__version__ = "0.1.0"

__all__ = [
    "InvalidArgument",
    "SleepStatsError",
    "UpstreamUnavailable",
    "SleepSession",
    "InMemorySessionRepository",
    "JsonlSessionRepository",
    "SessionRepository",
    "SleepStatsReport",
    "SleepStatsService",
]
