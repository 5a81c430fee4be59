"""Shared fixtures and helpers for the sleepstats test suite."""

from __future__ import annotations

import json
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

from sleepstats.repository import InMemorySessionRepository
from sleepstats.session import SleepSession


# ---------------------------------------------------------------------------
# Session-building helpers
# ---------------------------------------------------------------------------


def make_session(
    sleep: str = "2024-03-04T23:00:00",
    duration_min: int = 480,
    quality: int | None = 7,
    user_id: int = 1,
    session_id: int | None = None,
    notes: str | None = None,
) -> SleepSession:
    """Build a session from a bedtime and a duration in minutes."""
    sleep_time = datetime.fromisoformat(sleep)
    return SleepSession(
        id=session_id,
        user_id=user_id,
        sleep_time=sleep_time,
        wake_time=sleep_time + timedelta(minutes=duration_min),
        quality=quality,
        notes=notes,
    )


def make_nightly(
    first_evening: date,
    nights: int,
    bedtime: str = "23:00",
    duration_min: int = 480,
    quality: int | None = 7,
    user_id: int = 1,
) -> list[SleepSession]:
    """One session per evening with identical bedtime and duration."""
    return [
        make_session(
            sleep=f"{(first_evening + timedelta(days=i)).isoformat()}T{bedtime}:00",
            duration_min=duration_min,
            quality=quality,
            user_id=user_id,
            session_id=i + 1,
        )
        for i in range(nights)
    ]


# ---------------------------------------------------------------------------
# JSONL helpers
# ---------------------------------------------------------------------------


def write_jsonl(path: Path, entries: list[dict]) -> Path:
    """Write a list of dicts as JSONL to the given path."""
    with open(path, "w") as f:
        for entry in entries:
            f.write(json.dumps(entry) + "\n")
    return path


def make_record(
    sleep_time: str = "2024-03-04T23:00:00",
    wake_time: str = "2024-03-05T07:00:00",
    user_id: int = 1,
    quality: int | None = 7,
    record_id: int = 1,
    sleep_duration: int | None = None,
) -> dict:
    """Create a single stored session record (camelCase keys)."""
    record = {
        "id": record_id,
        "userId": user_id,
        "sleepTime": sleep_time,
        "wakeTime": wake_time,
        "quality": quality,
        "notes": None,
    }
    if sleep_duration is not None:
        record["sleepDuration"] = sleep_duration
    return record


@pytest.fixture
def repo() -> InMemorySessionRepository:
    return InMemorySessionRepository()
