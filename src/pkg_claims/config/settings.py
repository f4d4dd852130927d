from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from ..domain.constants import Claim


@dataclass(slots=True)
class ValidationSettings:
    """
    Policy for ValidateClaimsUseCase.

    Host code decides how to construct this (env, config file, etc.).
    `audience` / `issuer` left as None skip those comparisons entirely.
    """
    leeway_seconds: int = 0
    audience: Optional[str] = None
    issuer: Optional[str] = None

    # Claims whose absence is a failure
    required_claims: FrozenSet[Claim] = field(default_factory=frozenset)

    def requires(self, claim: Claim) -> bool:
        return claim in self.required_claims

    @property
    def require_expires_at(self) -> bool:
        return self.requires(Claim.EXPIRES_AT)

    @property
    def require_issued_at(self) -> bool:
        return self.requires(Claim.ISSUED_AT)

    @property
    def require_not_before(self) -> bool:
        return self.requires(Claim.NOT_BEFORE)

    @property
    def require_audience(self) -> bool:
        return self.requires(Claim.AUDIENCE)

    @property
    def require_issuer(self) -> bool:
        return self.requires(Claim.ISSUER)
