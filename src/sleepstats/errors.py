"""Exception types raised by the sleep statistics engine.

An empty dataset is never an error: the engine answers "no data" with
zeroed metrics or empty lists, so only caller mistakes and storage
failures surface as exceptions.
"""

from __future__ import annotations


class SleepStatsError(Exception):
    """Base class for all sleepstats errors."""


class InvalidArgument(SleepStatsError, ValueError):
    """Malformed date, unknown granularity, inverted range or bad record.

    Raised before any data is fetched or aggregated.
    """


class UpstreamUnavailable(SleepStatsError, RuntimeError):
    """The session repository failed to load records (I/O or storage error).

    The engine does not retry; the error reaches the caller unchanged.
    """
