"""
pkg_claims.config

- ValidationSettings: policy used by ValidateClaimsUseCase.
- settings_from_env: build settings from CLAIMS_* environment variables.
"""

from __future__ import annotations

from .env import parse_claim_names, settings_from_env
from .settings import ValidationSettings

__all__ = [
    "ValidationSettings",
    "settings_from_env",
    "parse_claim_names",
]
