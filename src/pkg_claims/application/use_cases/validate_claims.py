from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from ...config.settings import ValidationSettings
from ...domain.clock import Clock, SystemClock
from ...domain.constants import Claim
from ...domain.entities import MapClaims
from ...domain.exceptions import (
    AudienceMismatchError,
    IssuerMismatchError,
    MissingClaimError,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ValidateClaimsUseCase:
    """
    Application use case:
    - apply the configured leeway to a claim store
    - run the time-based checks (exp / iat / nbf)
    - enforce required claims, expected audience and expected issuer

    Unlike the MapClaims verifiers, which only answer yes/no, this raises a
    specific InvalidTokenError subclass for the first policy violation.
    """

    settings: ValidationSettings = field(default_factory=ValidationSettings)
    clock: Clock = field(default_factory=SystemClock)

    def execute(self, claims: Mapping[str, Any]) -> MapClaims:
        """
        Validate claims and return the leeway-applied MapClaims.

        Raises:
            ValidationError
            MissingClaimError
            AudienceMismatchError
            IssuerMismatchError
        """
        store = MapClaims.from_mapping(claims).with_leeway(self.settings.leeway_seconds)

        outcome = store.valid(self.clock)
        if outcome is not None:
            logger.debug("Time-based claim check failed: %s (%r)", outcome, outcome.errors)
            raise outcome

        self._check_required(store)
        self._check_audience(store)
        self._check_issuer(store)

        logger.debug("Claims accepted (leeway=%ss)", store.leeway.seconds)
        return store

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _check_required(self, store: MapClaims) -> None:
        present = {
            Claim.EXPIRES_AT: store.expires_at is not None,
            Claim.ISSUED_AT: store.issued_at is not None,
            Claim.NOT_BEFORE: store.not_before is not None,
            Claim.AUDIENCE: bool(store.audience),
            Claim.ISSUER: store.issuer != "",
        }
        for claim in Claim:
            if self.settings.requires(claim) and not present[claim]:
                logger.debug("Required claim %s is missing", claim.value)
                raise MissingClaimError(claim.value)

    def _check_audience(self, store: MapClaims) -> None:
        expected = self.settings.audience
        if expected is None:
            return
        if not store.verify_audience(expected, self.settings.require_audience):
            logger.debug("Audience %r does not contain %r", store.audience, expected)
            raise AudienceMismatchError(
                f"Invalid audience: expected {expected}, got {list(store.audience)}"
            )

    def _check_issuer(self, store: MapClaims) -> None:
        expected = self.settings.issuer
        if expected is None:
            return
        if not store.verify_issuer(expected, self.settings.require_issuer):
            logger.debug("Issuer %r does not match %r", store.issuer, expected)
            raise IssuerMismatchError(
                f"Invalid issuer: expected {expected}, got {store.issuer or None}"
            )
