# src/pkg_claims/cli.py

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Any, Sequence

from .application.use_cases.validate_claims import ValidateClaimsUseCase
from .config.env import parse_claim_names, settings_from_env
from .config.settings import ValidationSettings
from .domain.clock import Clock, FixedClock, SystemClock
from .domain.constants import Claim, ValidationErrorFlag
from .domain.exceptions import InvalidTokenError, ValidationError


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pkg-claims",
        description="Validate the registered claims (exp, iat, nbf, aud, iss) "
                    "of an already-decoded token payload",
    )

    parser.add_argument(
        "payload",
        nargs="?",
        help="Path to a JSON file with the claim payload (default: stdin)",
    )
    parser.add_argument(
        "--leeway",
        type=int,
        help="Leeway in seconds for iat / nbf (default: env CLAIMS_LEEWAY_SECONDS)",
    )
    parser.add_argument(
        "--audience",
        "-a",
        help="Expected audience (default: env CLAIMS_AUDIENCE)",
    )
    parser.add_argument(
        "--issuer",
        "-i",
        help="Expected issuer (default: env CLAIMS_ISSUER)",
    )
    parser.add_argument(
        "--require",
        "-r",
        nargs="*",
        choices=[c.value for c in Claim],
        help="Claims that must be present (default: env CLAIMS_REQUIRE)",
    )
    parser.add_argument(
        "--now",
        type=int,
        help="Validate as of this unix timestamp instead of the wall clock",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log each check to stderr.",
    )

    return parser.parse_args(args=argv)


def _settings(args: argparse.Namespace) -> ValidationSettings:
    settings = settings_from_env()
    overrides: dict[str, Any] = {}
    if args.leeway is not None:
        overrides["leeway_seconds"] = args.leeway
    if args.audience is not None:
        overrides["audience"] = args.audience
    if args.issuer is not None:
        overrides["issuer"] = args.issuer
    if args.require is not None:
        overrides["required_claims"] = parse_claim_names(args.require)
    return replace(settings, **overrides)


def _load_payload(path: str | None) -> Any:
    if path is None or path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def _flag_names(errors: ValidationErrorFlag) -> list[str]:
    return [flag.name for flag in ValidationErrorFlag if flag.name and errors & flag]


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    clock: Clock = FixedClock(args.now) if args.now is not None else SystemClock()
    result: dict[str, Any]

    try:
        payload = _load_payload(args.payload)
        if not isinstance(payload, dict):
            raise ValueError("payload must be a JSON object")
        ValidateClaimsUseCase(settings=_settings(args), clock=clock).execute(payload)
        result = {"ok": True}
    except ValidationError as exc:
        result = {"ok": False, "error": str(exc), "flags": _flag_names(exc.errors)}
    except InvalidTokenError as exc:
        result = {"ok": False, "error": str(exc), "flags": []}
    except (ValueError, OSError) as exc:
        # unreadable file, bad JSON, bad payload shape or bad CLAIMS_* environment
        result = {"ok": False, "error": str(exc), "flags": []}

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0 if result["ok"] else 1


if __name__ == "__main__":
    sys.exit(main())
