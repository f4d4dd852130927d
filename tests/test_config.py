# tests/test_config.py
import pytest

from pkg_claims.config import ValidationSettings, parse_claim_names, settings_from_env
from pkg_claims.domain.constants import Claim
from pkg_claims.domain.exceptions import ConfigurationError

ENV_KEYS = ["CLAIMS_LEEWAY_SECONDS", "CLAIMS_AUDIENCE", "CLAIMS_ISSUER", "CLAIMS_REQUIRE"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_from_empty_env():
    assert settings_from_env() == ValidationSettings()


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("CLAIMS_LEEWAY_SECONDS", " 45 ")
    monkeypatch.setenv("CLAIMS_AUDIENCE", "svc")
    monkeypatch.setenv("CLAIMS_ISSUER", "https://idp.example.com")
    monkeypatch.setenv("CLAIMS_REQUIRE", "exp, iss,,")

    settings = settings_from_env()

    assert settings.leeway_seconds == 45
    assert settings.audience == "svc"
    assert settings.issuer == "https://idp.example.com"
    assert settings.required_claims == frozenset({Claim.EXPIRES_AT, Claim.ISSUER})


def test_bad_leeway(monkeypatch):
    monkeypatch.setenv("CLAIMS_LEEWAY_SECONDS", "a minute")
    with pytest.raises(ConfigurationError, match="CLAIMS_LEEWAY_SECONDS"):
        settings_from_env()


def test_unknown_required_claim(monkeypatch):
    monkeypatch.setenv("CLAIMS_REQUIRE", "exp,jti")
    with pytest.raises(ConfigurationError, match="jti"):
        settings_from_env()


def test_parse_claim_names():
    assert parse_claim_names(["aud", " nbf "]) == frozenset({Claim.AUDIENCE, Claim.NOT_BEFORE})
    assert parse_claim_names([]) == frozenset()
