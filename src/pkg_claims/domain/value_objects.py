# src/pkg_claims/domain/value_objects.py

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple, Union

Instant = Union[int, float, datetime]

# decimal-text claims beyond 10**19 seconds read as absent
MAX_DIGITS = 18


# --- Time value objects ----------------------------------------------------


@dataclass(frozen=True, slots=True, order=True)
class NumericDate:
    """
    Whole seconds since the epoch, as carried by `exp`, `iat` and `nbf`.

    Decoders hand these claims over either as numbers or, when they keep
    numbers verbatim, as decimal text. Both collapse into this type.
    """
    seconds: int

    @classmethod
    def from_claim(cls, value: Any) -> Optional[NumericDate]:
        """
        Normalize a raw claim value, truncating toward zero.

        Returns None for any shape that is not a finite number or a decimal
        string, so callers can treat it exactly like a missing claim.
        """
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                return None
            return cls(int(value))
        if isinstance(value, str):
            try:
                number = Decimal(value.strip())
            except InvalidOperation:
                return None
            if not number.is_finite() or number.adjusted() > MAX_DIGITS:
                return None
            if number.adjusted() < 0:
                # |number| < 1
                return cls(0)
            return cls(int(number))
        return None

    def __int__(self) -> int:
        return self.seconds

    def __sub__(self, leeway: Leeway) -> NumericDate:
        return NumericDate(self.seconds - leeway.seconds)


def to_unix_seconds(now: Instant) -> int:
    """Reduce an instant (seconds or aware datetime) to whole epoch seconds."""
    if isinstance(now, datetime):
        if now.tzinfo is None:
            raise ValueError("naive datetime given as the current instant; pass an aware one")
        return int(now.timestamp())
    return int(now)


@dataclass(frozen=True, slots=True)
class Leeway:
    """
    Clock tolerance in whole seconds.

    Subtracted from `iat` and `nbf` before comparison; `exp` never sees it.
    May be negative, which makes those checks stricter.
    """
    seconds: int = 0

    @classmethod
    def of(cls, duration: Union[timedelta, int, float]) -> Leeway:
        if isinstance(duration, timedelta):
            return cls(int(duration / timedelta(seconds=1)))
        return cls(int(duration))

    def __int__(self) -> int:
        return self.seconds


ZERO_LEEWAY = Leeway()


# --- Identity value objects ------------------------------------------------


def normalize_audience(value: Any) -> Tuple[str, ...]:
    """
    Normalize an `aud` claim into a tuple.

    A plain string is a single-element audience. A list or tuple is only
    accepted when every member is a string; anything else is no audience.
    """
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    return ()


def normalize_issuer(value: Any) -> str:
    return value if isinstance(value, str) else ""
