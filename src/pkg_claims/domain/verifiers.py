"""
Standard claim predicates.

Each one takes an already-normalized claim value (None when the claim is
absent or has an unusable shape) and returns a bool. None of them raise.
"""

from __future__ import annotations

import hmac
from typing import Optional, Sequence

from .value_objects import NumericDate


def _equal(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def verify_aud(aud: Sequence[str], cmp: str, required: bool) -> bool:
    if not aud:
        return not required
    return any(_equal(member, cmp) for member in aud)


def verify_exp(exp: Optional[NumericDate], now: int, required: bool) -> bool:
    if exp is None:
        return not required
    return now <= exp.seconds


def verify_iat(iat: Optional[NumericDate], now: int, required: bool) -> bool:
    if iat is None:
        return not required
    return now >= iat.seconds


def verify_nbf(nbf: Optional[NumericDate], now: int, required: bool) -> bool:
    if nbf is None:
        return not required
    return now >= nbf.seconds


def verify_iss(iss: str, cmp: str, required: bool) -> bool:
    # an empty issuer only counts as a match when it is also what was expected
    if _equal(iss, cmp):
        return True
    return iss == "" and not required
