from __future__ import annotations

import os
from typing import FrozenSet, Iterable, Optional

from ..domain.constants import Claim
from ..domain.exceptions import ConfigurationError
from .settings import ValidationSettings


def parse_claim_names(names: Iterable[str]) -> FrozenSet[Claim]:
    claims = set()
    for name in names:
        name = name.strip()
        if not name:
            continue
        try:
            claims.add(Claim(name))
        except ValueError:
            allowed = ", ".join(c.value for c in Claim)
            raise ConfigurationError(
                f"Unknown claim {name!r} (expected one of: {allowed})"
            ) from None
    return frozenset(claims)


def settings_from_env() -> ValidationSettings:
    def _int(key: str, default: int = 0) -> int:
        raw = os.getenv(key)
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw.strip())
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None

    def _str(key: str) -> Optional[str]:
        raw = os.getenv(key)
        if not raw or not raw.strip():
            return None
        return raw.strip()

    def _split_csv(key: str) -> list[str]:
        raw = os.getenv(key)
        if not raw:
            return []
        return [x.strip() for x in raw.split(",") if x and x.strip()]

    return ValidationSettings(
        leeway_seconds=_int("CLAIMS_LEEWAY_SECONDS", 0),
        audience=_str("CLAIMS_AUDIENCE"),
        issuer=_str("CLAIMS_ISSUER"),
        required_claims=parse_claim_names(_split_csv("CLAIMS_REQUIRE")),
    )
