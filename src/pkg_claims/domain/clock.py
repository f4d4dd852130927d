from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """
    Source of "now" for time-based claim checks.

    Passed explicitly wherever the current instant is needed, so tests can
    pin time without touching shared state.
    """

    def now(self) -> datetime:
        """Return the current instant as a timezone-aware UTC datetime."""
        ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock frozen at a given instant; move it with `advance`."""

    def __init__(self, instant: datetime | int | float) -> None:
        if not isinstance(instant, datetime):
            instant = datetime.fromtimestamp(instant, tz=timezone.utc)
        elif instant.tzinfo is None:
            raise ValueError("FixedClock requires a timezone-aware datetime")
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def advance(self, delta: timedelta) -> None:
        self._instant = self._instant + delta
