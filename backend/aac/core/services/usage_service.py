from __future__ import annotations

from collections import deque
from datetime import UTC, datetime

from aac.core.schemas.phrase import UsageEvent


class UsageTracker:
    """Per-key selection counter with a timestamped usage log.

    Counts never decrease; they are cleared only by building a new tracker.
    The log is bounded, but the last-use order of every key is kept so that
    recency ordering stays complete after old events roll off.
    """

    def __init__(self, log_limit: int = 1000) -> None:
        self._counts: dict[str, int] = {}
        self._last_used: dict[str, int] = {}
        self._log: deque[UsageEvent] = deque(maxlen=max(1, log_limit))
        self._sequence = 0

    @property
    def revision(self) -> int:
        """Number of uses recorded so far; changes whenever any count changes."""
        return self._sequence

    def record_use(self, key: str) -> int:
        """Increment the count for `key` and return the new value."""
        self._sequence += 1
        count = self._counts.get(key, 0) + 1
        self._counts[key] = count
        self._last_used[key] = self._sequence
        self._log.append(
            UsageEvent(key=key, sequence=self._sequence, used_at=datetime.now(UTC))
        )
        return count

    def count(self, key: str) -> int:
        return self._counts.get(key, 0)

    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    def last_used(self, key: str) -> int | None:
        """Sequence number of the latest use of `key`, None if never used."""
        return self._last_used.get(key)

    def recency(self) -> dict[str, int]:
        """Last-use sequence number per key; higher means more recent."""
        return dict(self._last_used)

    def recent_events(self, limit: int | None = None) -> list[UsageEvent]:
        """Most recent events first."""
        events = list(reversed(self._log))
        return events if limit is None else events[:limit]
