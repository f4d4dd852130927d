from __future__ import annotations

from typing import Optional

from .constants import NO_ERRORS, ValidationErrorFlag


class AuthenticationError(Exception):
    """Raised when authentication fails."""
    pass


class ConfigurationError(ValueError):
    """Raised when validation settings cannot be built."""
    pass


class InvalidTokenError(AuthenticationError):
    """Raised when token is malformed or its claims are invalid."""
    pass


class TokenExpiredError(InvalidTokenError):
    """The `exp` claim lies in the past."""
    pass


class TokenUsedBeforeIssuedError(InvalidTokenError):
    """The `iat` claim lies in the future."""
    pass


class TokenNotValidYetError(InvalidTokenError):
    """The `nbf` claim lies in the future."""
    pass


class AudienceMismatchError(InvalidTokenError):
    pass


class IssuerMismatchError(InvalidTokenError):
    pass


class MissingClaimError(InvalidTokenError):
    """A claim the validation policy requires is not present."""

    def __init__(self, claim: str) -> None:
        super().__init__(f"token is missing required claim {claim!r}")
        self.claim = claim


class ValidationError(InvalidTokenError):
    """
    Aggregate outcome of claim validation.

    `errors` is a bitmask of every failed check, while `inner` (and therefore
    the message) describes only the last one that failed.
    """

    def __init__(
        self,
        message: str = "",
        errors: ValidationErrorFlag = NO_ERRORS,
        inner: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.text = message
        self.errors = errors
        self.inner = inner

    @property
    def message(self) -> str:
        if self.inner is not None:
            return str(self.inner)
        if self.text:
            return self.text
        return "token is invalid"

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ValidationError(errors={self.errors!r}, message={self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self.errors == other.errors and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.errors, self.message))

    def add(self, flag: ValidationErrorFlag, inner: Exception) -> None:
        self.errors |= flag
        self.inner = inner

    def has(self, flag: ValidationErrorFlag) -> bool:
        return bool(self.errors & flag)

    def valid(self) -> bool:
        return self.errors == NO_ERRORS
