from enum import Enum, IntFlag


class Claim(str, Enum):
    EXPIRES_AT = "exp"
    ISSUED_AT = "iat"
    NOT_BEFORE = "nbf"
    AUDIENCE = "aud"
    ISSUER = "iss"


class ValidationErrorFlag(IntFlag):
    """
    Error classification bits carried by a ValidationError.

    Only EXPIRED, ISSUED_AT and NOT_VALID_YET are produced by claim
    validation. The remaining bits belong to the decoding layer.
    """
    MALFORMED = 1 << 0
    UNVERIFIABLE = 1 << 1
    SIGNATURE_INVALID = 1 << 2
    EXPIRED = 1 << 4
    ISSUED_AT = 1 << 5
    NOT_VALID_YET = 1 << 7


NO_ERRORS = ValidationErrorFlag(0)

MSG_EXPIRED = "token is expired"
MSG_USED_BEFORE_ISSUED = "token used before issued"
MSG_NOT_VALID_YET = "token is not valid yet"
