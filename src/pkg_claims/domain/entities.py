from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import timedelta
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union

from .clock import Clock, SystemClock
from .constants import (
    MSG_EXPIRED,
    MSG_NOT_VALID_YET,
    MSG_USED_BEFORE_ISSUED,
    Claim,
    ValidationErrorFlag,
)
from .exceptions import (
    TokenExpiredError,
    TokenNotValidYetError,
    TokenUsedBeforeIssuedError,
    ValidationError,
)
from .value_objects import (
    ZERO_LEEWAY,
    Instant,
    Leeway,
    NumericDate,
    normalize_audience,
    normalize_issuer,
    to_unix_seconds,
)
from .verifiers import verify_aud, verify_exp, verify_iat, verify_iss, verify_nbf


def _key(name: Union[str, Claim]) -> str:
    return name.value if isinstance(name, Claim) else name


@dataclass(frozen=True, slots=True)
class MapClaims:
    """
    Claim store for a decoded token payload.

    Holds the raw claim values exactly as the decoder produced them together
    with the leeway used for `iat` / `nbf`. Instances are immutable: `set`
    and `with_leeway` return a new store and leave the original untouched.
    """
    claims: Mapping[str, Any] = field(default_factory=dict)
    leeway: Leeway = ZERO_LEEWAY

    def __post_init__(self) -> None:
        object.__setattr__(self, "claims", MappingProxyType(dict(self.claims)))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> MapClaims:
        if isinstance(payload, MapClaims):
            return payload
        return cls(claims=payload)

    # ---- claim store -----------------------------------------------------

    def get(self, key: Union[str, Claim], default: Any = None) -> Any:
        return self.claims.get(_key(key), default)

    def set(self, key: Union[str, Claim], value: Any) -> MapClaims:
        updated: Dict[str, Any] = dict(self.claims)
        updated[_key(key)] = value
        return replace(self, claims=updated)

    def with_leeway(self, duration: Union[timedelta, int, float]) -> MapClaims:
        """
        Return a copy whose `iat` / `nbf` checks tolerate `duration` of skew.

        Keep it to a few minutes at most. `exp` is never relaxed.
        """
        return replace(self, leeway=Leeway.of(duration))

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.claims)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, Claim):
            key = key.value
        return key in self.claims

    def __iter__(self) -> Iterator[str]:
        return iter(self.claims)

    def __len__(self) -> int:
        return len(self.claims)

    # ---- normalized accessors ----------------------------------------------

    @property
    def expires_at(self) -> Optional[NumericDate]:
        return NumericDate.from_claim(self.get(Claim.EXPIRES_AT))

    @property
    def issued_at(self) -> Optional[NumericDate]:
        return NumericDate.from_claim(self.get(Claim.ISSUED_AT))

    @property
    def not_before(self) -> Optional[NumericDate]:
        return NumericDate.from_claim(self.get(Claim.NOT_BEFORE))

    @property
    def audience(self) -> Tuple[str, ...]:
        return normalize_audience(self.get(Claim.AUDIENCE))

    @property
    def issuer(self) -> str:
        return normalize_issuer(self.get(Claim.ISSUER))

    # ---- verifiers ---------------------------------------------------------

    def verify_audience(self, cmp: str, required: bool = False) -> bool:
        """
        Compare the `aud` claim against `cmp`.

        With `required=False` an absent (or empty) audience passes.
        """
        return verify_aud(self.audience, cmp, required)

    def verify_expires_at(self, now: Instant, required: bool = False) -> bool:
        return verify_exp(self.expires_at, to_unix_seconds(now), required)

    def verify_issued_at(self, now: Instant, required: bool = False) -> bool:
        iat = self.issued_at
        if iat is not None:
            iat = iat - self.leeway
        return verify_iat(iat, to_unix_seconds(now), required)

    def verify_not_before(self, now: Instant, required: bool = False) -> bool:
        nbf = self.not_before
        if nbf is not None:
            nbf = nbf - self.leeway
        return verify_nbf(nbf, to_unix_seconds(now), required)

    def verify_issuer(self, cmp: str, required: bool = False) -> bool:
        """
        Compare the `iss` claim against `cmp`.

        With `required=False` an absent issuer passes.
        """
        return verify_iss(self.issuer, cmp, required)

    # ---- aggregate -----------------------------------------------------------

    def valid(self, clock: Optional[Clock] = None) -> Optional[ValidationError]:
        """
        Check `exp`, `iat` and `nbf` against the clock's current instant.

        Absent claims pass. Returns None when every check passes, otherwise a
        ValidationError whose bitmask names every failed check and whose
        message comes from the last one (order: exp, iat, nbf).
        """
        now = to_unix_seconds((clock or SystemClock()).now())
        outcome = ValidationError()

        if not self.verify_expires_at(now, False):
            outcome.add(ValidationErrorFlag.EXPIRED, TokenExpiredError(MSG_EXPIRED))

        if not self.verify_issued_at(now, False):
            outcome.add(
                ValidationErrorFlag.ISSUED_AT,
                TokenUsedBeforeIssuedError(MSG_USED_BEFORE_ISSUED),
            )

        if not self.verify_not_before(now, False):
            outcome.add(
                ValidationErrorFlag.NOT_VALID_YET,
                TokenNotValidYetError(MSG_NOT_VALID_YET),
            )

        if outcome.valid():
            return None
        return outcome

    def ensure_valid(self, clock: Optional[Clock] = None) -> MapClaims:
        outcome = self.valid(clock)
        if outcome is not None:
            raise outcome
        return self
