from __future__ import annotations

from typing import Protocol

from .entities import MapClaims


class ClaimsDecoder(Protocol):
    """
    Port for turning an encoded token into a claim store.

    Implementations live in the adapters layer (e.g. the PyJWT decoder).
    """

    def decode(self, token: str) -> MapClaims:
        """
        Decode the token and verify its signature.

        Should NOT check exp / iat / nbf / aud / iss; that is the job of
        MapClaims and ValidateClaimsUseCase.
        Raises:
          - ValidationError (malformed / unverifiable / bad signature)
          - or other InvalidTokenError subclasses
        """
        ...
