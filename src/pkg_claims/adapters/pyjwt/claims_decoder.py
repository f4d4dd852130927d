import json
import logging
from typing import Any, Sequence

from jwt import api_jws
from jwt.exceptions import (
    DecodeError,
    InvalidSignatureError,
    InvalidTokenError as JWTInvalidTokenError,
)

from ...domain.constants import ValidationErrorFlag
from ...domain.entities import MapClaims
from ...domain.exceptions import ValidationError
from ...domain.ports import ClaimsDecoder

logger = logging.getLogger(__name__)


class JWTClaimsDecoder(ClaimsDecoder):
    """
    Adapter implementing ClaimsDecoder port using PyJWT's JWS layer.

    Infrastructure layer:
    - Knows about compact JWS structure and signature verification.
    - Leaves every registered claim check to MapClaims.

    With `use_number=True` all JSON numbers in the payload are kept as
    their decimal text instead of being converted to int/float.
    """

    def __init__(
        self,
        key: Any,
        algorithms: Sequence[str],
        use_number: bool = False,
    ) -> None:
        self._key = key
        self._algorithms = list(algorithms)
        self._use_number = use_number

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def decode(self, token: str) -> MapClaims:
        """
        Verify the token signature and return its payload as MapClaims.

        Raises:
            ValidationError (MALFORMED, SIGNATURE_INVALID or UNVERIFIABLE)
        """
        try:
            decoded = api_jws.decode_complete(
                token,
                key=self._key,
                algorithms=self._algorithms,
            )
        except InvalidSignatureError as exc:
            raise ValidationError(
                f"Invalid signature: {exc}", ValidationErrorFlag.SIGNATURE_INVALID
            ) from exc
        except DecodeError as exc:
            raise ValidationError(
                f"Malformed token: {exc}", ValidationErrorFlag.MALFORMED
            ) from exc
        except JWTInvalidTokenError as exc:
            raise ValidationError(
                f"Unverifiable token: {exc}", ValidationErrorFlag.UNVERIFIABLE
            ) from exc

        payload = self._parse_payload(decoded["payload"])
        logger.debug("Decoded token with %d claims", len(payload))
        return MapClaims.from_mapping(payload)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _parse_payload(self, raw: bytes) -> dict[str, Any]:
        try:
            if self._use_number:
                payload = json.loads(raw, parse_int=str, parse_float=str)
            else:
                payload = json.loads(raw)
        except ValueError as exc:
            raise ValidationError(
                f"Malformed token: invalid payload JSON: {exc}",
                ValidationErrorFlag.MALFORMED,
            ) from exc

        if not isinstance(payload, dict):
            raise ValidationError(
                "Malformed token: payload must be a JSON object",
                ValidationErrorFlag.MALFORMED,
            )
        return payload
