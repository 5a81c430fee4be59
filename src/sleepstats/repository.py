"""Session repositories: where the engine gets its sleep records from.

Any object with a matching ``fetch_sessions`` method can back the engine.
Two implementations ship here: an in-memory list (tests, embedding) and a
JSONL file with one session record per line.

Contract shared by all repositories:
  - date bounds are inclusive; ``start`` filters on the sleep date and
    ``end`` on the wake date
  - no matching records gives ``[]``, never None
  - storage failures raise :class:`UpstreamUnavailable`
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Protocol

from sleepstats.errors import InvalidArgument, UpstreamUnavailable
from sleepstats.session import SleepSession

logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    def fetch_sessions(
        self,
        user_id: int,
        start: date | None = None,
        end: date | None = None,
    ) -> list[SleepSession]:
        ...


def in_range(session: SleepSession, start: date | None, end: date | None) -> bool:
    """Inclusive date-range check on the sleep and wake dates."""
    if start is not None and session.sleep_time.date() < start:
        return False
    if end is not None and session.wake_time.date() > end:
        return False
    return True


def filter_sessions(
    sessions: Iterable[SleepSession],
    user_id: int,
    start: date | None = None,
    end: date | None = None,
) -> list[SleepSession]:
    return [
        s for s in sessions
        if s.user_id == user_id and in_range(s, start, end)
    ]


class InMemorySessionRepository:
    """List-backed repository."""

    def __init__(self, sessions: Iterable[SleepSession] = ()) -> None:
        self._sessions: list[SleepSession] = list(sessions)

    def add(self, session: SleepSession) -> None:
        self._sessions.append(session)

    def __len__(self) -> int:
        return len(self._sessions)

    def fetch_sessions(
        self,
        user_id: int,
        start: date | None = None,
        end: date | None = None,
    ) -> list[SleepSession]:
        return filter_sessions(self._sessions, user_id, start, end)


class JsonlSessionRepository:
    """Repository over a ``.jsonl`` file of session records.

    The file is re-read on every fetch, so appended records are picked up
    without reloading.  Blank lines are ignored; any unreadable line is a
    storage error.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> list[SleepSession]:
        sessions: list[SleepSession] = []
        try:
            with open(self.path) as f:
                for line_num, line in enumerate(f, 1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        sessions.append(SleepSession.from_dict(json.loads(line)))
                    except (json.JSONDecodeError, InvalidArgument) as exc:
                        logger.error("%s line %d: unreadable session record", self.path, line_num)
                        raise UpstreamUnavailable(
                            f"{self.path}: bad session record on line {line_num}: {exc}"
                        ) from exc
        except OSError as exc:
            logger.error("Cannot read session store %s: %s", self.path, exc)
            raise UpstreamUnavailable(f"Cannot read session store {self.path}: {exc}") from exc

        logger.debug("Loaded %d sessions from %s", len(sessions), self.path)
        return sessions

    def fetch_sessions(
        self,
        user_id: int,
        start: date | None = None,
        end: date | None = None,
    ) -> list[SleepSession]:
        return filter_sessions(self._load(), user_id, start, end)

    def append(self, session: SleepSession) -> None:
        """Append one record to the file (created if missing)."""
        self.write(self.path, [session], mode="a")

    @staticmethod
    def write(path: str | Path, sessions: Iterable[SleepSession], mode: str = "w") -> Path:
        """Write sessions as JSONL to *path*."""
        outpath = Path(path)
        try:
            outpath.parent.mkdir(parents=True, exist_ok=True)
            with open(outpath, mode) as f:
                for s in sessions:
                    f.write(json.dumps(s.to_dict()) + "\n")
        except OSError as exc:
            raise UpstreamUnavailable(f"Cannot write session store {outpath}: {exc}") from exc
        return outpath
