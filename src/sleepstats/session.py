"""Sleep session records and ISO-8601 parsing helpers.

A session's duration is always derived from its sleep/wake pair.  Stored
records carry a denormalized ``sleepDuration`` field, but it is ignored on
load so that every statistic is computed from the same source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from sleepstats.errors import InvalidArgument

QUALITY_MIN = 1
QUALITY_MAX = 10


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO-8601 datetime string (a trailing ``Z`` is accepted)."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        raise InvalidArgument(f"Invalid timestamp: {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidArgument(f"Invalid timestamp: {value!r}") from exc


def parse_date(value: str | date) -> date:
    """Parse a ``YYYY-MM-DD`` calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or len(value) != 10:
        raise InvalidArgument(f"Invalid date (expected YYYY-MM-DD): {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidArgument(f"Invalid date (expected YYYY-MM-DD): {value!r}") from exc


def _pick(record: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return None


@dataclass(frozen=True)
class SleepSession:
    """One recorded sleep interval for a user."""

    id: int | None
    user_id: int
    sleep_time: datetime
    wake_time: datetime
    quality: int | None = None  # 1-10, None when not rated
    notes: str | None = None

    def __post_init__(self) -> None:
        try:
            ordered = self.sleep_time < self.wake_time
        except TypeError as exc:
            # naive vs aware timestamps
            raise InvalidArgument(
                "sleep_time and wake_time must both carry a UTC offset or neither"
            ) from exc
        if not ordered:
            raise InvalidArgument(
                f"sleep_time must be before wake_time "
                f"({self.sleep_time.isoformat()} >= {self.wake_time.isoformat()})"
            )
        if self.quality is not None and not QUALITY_MIN <= self.quality <= QUALITY_MAX:
            raise InvalidArgument(
                f"quality must be between {QUALITY_MIN} and {QUALITY_MAX}, got {self.quality}"
            )

    @property
    def duration_minutes(self) -> int:
        """Minutes between falling asleep and waking, rounded."""
        seconds = (self.wake_time - self.sleep_time).total_seconds()
        return int(seconds / 60.0 + 0.5)

    @property
    def date_part(self) -> str:
        """Calendar date of the sleep start, ``YYYY-MM-DD``."""
        return self.sleep_time.date().isoformat()

    @property
    def has_quality(self) -> bool:
        return self.quality is not None

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> SleepSession:
        """Build a session from a stored record (camelCase or snake_case keys).

        Raises:
            InvalidArgument: if a required field is missing or malformed.
        """
        sleep_raw = _pick(record, "sleepTime", "sleep_time")
        wake_raw = _pick(record, "wakeTime", "wake_time")
        user_raw = _pick(record, "userId", "user_id")
        if sleep_raw is None or wake_raw is None or user_raw is None:
            raise InvalidArgument(
                f"Session record needs userId, sleepTime and wakeTime: {record!r}"
            )

        quality = record.get("quality")
        if isinstance(quality, float) and not quality.is_integer():
            raise InvalidArgument(f"quality must be a whole number: {record!r}")
        try:
            user_id = int(user_raw)
            quality = int(quality) if quality is not None else None
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"Malformed session record: {record!r}") from exc

        return cls(
            id=record.get("id"),
            user_id=user_id,
            sleep_time=parse_timestamp(sleep_raw),
            wake_time=parse_timestamp(wake_raw),
            quality=quality,
            notes=record.get("notes"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored record shape (with the derived duration)."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "sleepTime": self.sleep_time.isoformat(),
            "wakeTime": self.wake_time.isoformat(),
            "sleepDuration": self.duration_minutes,
            "quality": self.quality,
            "notes": self.notes,
        }

    def __repr__(self) -> str:
        q = f"q={self.quality}" if self.quality is not None else "q=-"
        return (
            f"SleepSession(user={self.user_id}, "
            f"{self.sleep_time.isoformat()} -> {self.wake_time.isoformat()}, "
            f"{self.duration_minutes}min, {q})"
        )
