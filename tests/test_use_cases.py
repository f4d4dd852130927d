# tests/test_use_cases.py
import pytest

from pkg_claims.application.use_cases.authenticate import AuthenticateTokenUseCase
from pkg_claims.application.use_cases.validate_claims import ValidateClaimsUseCase
from pkg_claims.config.settings import ValidationSettings
from pkg_claims.domain.clock import FixedClock
from pkg_claims.domain.constants import Claim, ValidationErrorFlag
from pkg_claims.domain.entities import MapClaims
from pkg_claims.domain.exceptions import (
    AudienceMismatchError,
    AuthenticationError,
    IssuerMismatchError,
    MissingClaimError,
    ValidationError,
)
from pkg_claims.domain.value_objects import Leeway

NOW = 1_700_000_000


def _use_case(**settings):
    return ValidateClaimsUseCase(
        settings=ValidationSettings(**settings),
        clock=FixedClock(NOW),
    )


def test_validate_accepts_plain_mapping_and_applies_leeway():
    store = _use_case(leeway_seconds=30).execute({"iat": NOW + 20, "exp": NOW + 60})

    assert isinstance(store, MapClaims)
    assert store.leeway == Leeway(30)


def test_validate_raises_time_based_outcome():
    with pytest.raises(ValidationError) as exc_info:
        _use_case().execute({"exp": NOW - 1})
    assert exc_info.value.errors == ValidationErrorFlag.EXPIRED


def test_validate_required_claims():
    use_case = _use_case(required_claims=frozenset({Claim.EXPIRES_AT, Claim.ISSUER}))

    with pytest.raises(MissingClaimError) as exc_info:
        use_case.execute({"iss": "a"})
    assert exc_info.value.claim == "exp"

    with pytest.raises(MissingClaimError) as exc_info:
        use_case.execute({"exp": NOW + 1})
    assert exc_info.value.claim == "iss"

    use_case.execute({"exp": NOW + 1, "iss": "a"})


def test_validate_audience():
    use_case = _use_case(audience="svc")

    use_case.execute({"aud": ["web", "svc"]})
    use_case.execute({})  # absent audience passes when not required

    with pytest.raises(AudienceMismatchError):
        use_case.execute({"aud": "web"})

    with pytest.raises(MissingClaimError):
        _use_case(audience="svc", required_claims=frozenset({Claim.AUDIENCE})).execute({})


def test_validate_issuer():
    use_case = _use_case(issuer="https://idp.example.com")

    use_case.execute({"iss": "https://idp.example.com"})
    use_case.execute({"iss": 42})  # wrong type reads as absent

    with pytest.raises(IssuerMismatchError):
        use_case.execute({"iss": "https://evil.example.com"})


def test_settings_require_properties():
    settings = ValidationSettings(required_claims=frozenset({Claim.NOT_BEFORE}))
    assert settings.require_not_before
    assert not settings.require_expires_at
    assert not settings.require_issued_at
    assert not settings.require_audience
    assert not settings.require_issuer


# --- AuthenticateTokenUseCase ---------------------------------------------


class _StaticDecoder:
    def __init__(self, claims=None, error=None):
        self._claims = claims
        self._error = error

    def decode(self, token):
        if self._error is not None:
            raise self._error
        return MapClaims(self._claims)


def test_authenticate_decodes_and_validates():
    use_case = AuthenticateTokenUseCase(
        token_decoder=_StaticDecoder({"exp": NOW + 60, "aud": "svc"}),
        validator=_use_case(audience="svc"),
    )
    claims = use_case.execute("token")
    assert claims.get("aud") == "svc"


def test_authenticate_propagates_invalid_token_errors():
    malformed = ValidationError("Malformed token", ValidationErrorFlag.MALFORMED)
    use_case = AuthenticateTokenUseCase(
        token_decoder=_StaticDecoder(error=malformed),
        validator=_use_case(),
    )
    with pytest.raises(ValidationError) as exc_info:
        use_case.execute("token")
    assert exc_info.value is malformed


def test_authenticate_wraps_unexpected_errors():
    use_case = AuthenticateTokenUseCase(
        token_decoder=_StaticDecoder(error=RuntimeError("boom")),
        validator=_use_case(),
    )
    with pytest.raises(AuthenticationError, match="boom"):
        use_case.execute("token")


def test_authenticate_rejects_expired_claims():
    use_case = AuthenticateTokenUseCase(
        token_decoder=_StaticDecoder({"exp": NOW - 60}),
        validator=_use_case(),
    )
    with pytest.raises(ValidationError):
        use_case.execute("token")
