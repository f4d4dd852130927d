from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...domain.entities import MapClaims
from ...domain.exceptions import AuthenticationError, InvalidTokenError
from ...domain.ports import ClaimsDecoder
from .validate_claims import ValidateClaimsUseCase

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AuthenticateTokenUseCase:
    """
    Application use case:
    - Decode a token via ClaimsDecoder port
    - Validate the resulting claims via ValidateClaimsUseCase

    Framework-agnostic.
    """

    token_decoder: ClaimsDecoder
    validator: ValidateClaimsUseCase = field(default_factory=ValidateClaimsUseCase)

    def execute(self, token: str) -> MapClaims:
        """
        Authenticate a token and return its validated claims.

        Raises:
            InvalidTokenError (or a subclass)
            AuthenticationError
        """
        try:
            claims = self.token_decoder.decode(token)
        except InvalidTokenError:
            # let callers distinguish these explicitly
            raise
        except Exception as exc:
            # Wrap unexpected errors in a generic AuthenticationError
            logger.debug("Token decoder failed unexpectedly", exc_info=True)
            raise AuthenticationError(f"Token validation failed: {exc}") from exc

        return self.validator.execute(claims)
