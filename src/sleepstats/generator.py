"""Synthetic sleep sessions for demos and local testing.

Produces a plausible sleep log: weekday bedtimes between 21:00 and 23:59,
weekend bedtimes between 22:00 and 00:59, longer weekend sleep, a 1-10
quality rating with a matching note, and randomly skipped days.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

import numpy as np

from sleepstats.session import SleepSession

# (mean hours, std hours) of sleep duration
WEEKDAY_DURATION_H = (7.0, 1.2)
WEEKEND_DURATION_H = (8.0, 1.0)

QUALITY_MEAN = 7.0
QUALITY_STD = 2.0

GOOD_NOTES = [
    "Slept very comfortably.",
    "Deep sleep without dreams.",
    "Fell asleep early and woke up refreshed.",
    "Slept through without interruptions.",
    "Woke up feeling fresh.",
]
AVERAGE_NOTES = [
    "An ordinary night.",
    "Woke up once but fell back asleep.",
    "Tossed and turned a little.",
    "Woke up a bit early.",
    "Fell asleep fine but got up once during the night.",
]
BAD_NOTES = [
    "Had trouble falling asleep.",
    "Woke up several times.",
    "Restless night.",
    "Woke up too early and could not get back to sleep.",
    "Felt tired after waking up.",
]


def note_for_quality(quality: int, rng: np.random.Generator) -> str:
    if quality >= 8:
        notes = GOOD_NOTES
    elif quality >= 5:
        notes = AVERAGE_NOTES
    else:
        notes = BAD_NOTES
    return notes[int(rng.integers(0, len(notes)))]


def generate_sessions(
    user_id: int,
    days: int,
    end: date | None = None,
    missing_probability: float = 0.1,
    seed: int | None = None,
) -> list[SleepSession]:
    """Generate one session per evening for *days* evenings ending at *end*.

    Args:
        user_id: Owner of the generated sessions.
        days: Number of evenings to cover.
        end: Last evening (default: today).
        missing_probability: Chance (0-1) that an evening is skipped.
        seed: Seed for reproducible output.

    Returns:
        Sessions in chronological order, ids numbered from 1.
    """
    rng = np.random.default_rng(seed)
    last = end or date.today()
    sessions: list[SleepSession] = []

    for i in range(days - 1, -1, -1):
        if rng.random() < missing_probability:
            continue

        evening = last - timedelta(days=i)
        weekend = evening.weekday() >= 5

        # Hours >= 24 roll over into the next morning of the same evening
        hour = int(rng.integers(22, 25)) if weekend else int(rng.integers(21, 24))
        minute = int(rng.integers(0, 60))
        sleep_time = datetime.combine(evening, time(0, 0)) + timedelta(hours=hour, minutes=minute)

        mean_h, std_h = WEEKEND_DURATION_H if weekend else WEEKDAY_DURATION_H
        duration_min = max(60.0, rng.normal(mean_h, std_h) * 60.0) + int(rng.integers(0, 60))
        wake_time = sleep_time + timedelta(minutes=round(duration_min))

        quality = int(np.clip(round(rng.normal(QUALITY_MEAN, QUALITY_STD)), 1, 10))

        sessions.append(SleepSession(
            id=len(sessions) + 1,
            user_id=user_id,
            sleep_time=sleep_time,
            wake_time=wake_time,
            quality=quality,
            notes=note_for_quality(quality, rng),
        ))

    return sessions
