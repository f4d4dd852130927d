"""
pkg_claims

Validation of the registered JWT claims (exp, iat, nbf, aud, iss) on an
already-decoded token payload, with clean-architecture seams for plugging
in a decoder and a clock.
"""

__version__ = "0.1.0"

from .domain.entities import MapClaims
from .domain.constants import Claim, ValidationErrorFlag
from .domain.clock import Clock, SystemClock, FixedClock
from .domain.exceptions import (
    AuthenticationError,
    ConfigurationError,
    InvalidTokenError,
    ValidationError,
    TokenExpiredError,
    TokenUsedBeforeIssuedError,
    TokenNotValidYetError,
    AudienceMismatchError,
    IssuerMismatchError,
    MissingClaimError,
)
from .domain.value_objects import NumericDate, Leeway
from .domain.ports import ClaimsDecoder

from .config import ValidationSettings, settings_from_env

from .application.use_cases.validate_claims import ValidateClaimsUseCase
from .application.use_cases.authenticate import AuthenticateTokenUseCase

# PyJWT-backed adapter (optional to re-export)
from .adapters.pyjwt.claims_decoder import JWTClaimsDecoder

__all__ = [
    "__version__",
    # domain core
    "MapClaims",
    "Claim",
    "ValidationErrorFlag",
    "NumericDate",
    "Leeway",
    "Clock",
    "SystemClock",
    "FixedClock",
    "ClaimsDecoder",
    # exceptions
    "AuthenticationError",
    "ConfigurationError",
    "InvalidTokenError",
    "ValidationError",
    "TokenExpiredError",
    "TokenUsedBeforeIssuedError",
    "TokenNotValidYetError",
    "AudienceMismatchError",
    "IssuerMismatchError",
    "MissingClaimError",
    # config
    "ValidationSettings",
    "settings_from_env",
    # use cases
    "ValidateClaimsUseCase",
    "AuthenticateTokenUseCase",
    # adapters
    "JWTClaimsDecoder",
]
