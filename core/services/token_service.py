# =============================================================================
# core/services/token_service.py - Bearer Token Issue / Verify
# =============================================================================
# Signs and verifies HMAC JWTs with the process-wide TokenConfig.
#
# Every failure is logged with its context (payload or token plus the library
# error) and re-raised as one of two opaque errors:
# - TokenSigningError: sign() could not produce a token
# - TokenVerificationError: the token is malformed, tampered or expired
#
# Callers cannot tell expired from tampered from malformed. Treat both errors
# as "reject the request as unauthenticated".
#
# Signing failures log at ERROR (a server-side payload bug); verification
# failures log at WARNING since a bad token is ordinary client input.
#
# Usage:
#   service = TokenService(settings.token_config)
#   token = service.sign({"id": 42, "role": "admin"})
#   claims = service.verify(token)
# =============================================================================

import logging
import math
import time
from collections.abc import Mapping
from typing import Any

from jose import jwt
from jose.exceptions import JOSEError

from core.models.token import TokenConfig
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

# Claims whose format python-jose enforces on decode (at_hash also needs an
# access_token). A caller payload may carry any value under these names, so
# only signature, expiry and nbf are checked.
_DECODE_OPTIONS = {
    "verify_aud": False,
    "verify_sub": False,
    "verify_jti": False,
    "verify_at_hash": False,
}


# =============================================================================
# Errors
# =============================================================================

class TokenError(ApplicationError):
    """Base class for token failures."""


class TokenSigningError(TokenError):
    """Raised when a token cannot be signed."""

    def __init__(self):
        super().__init__(
            message="Failed to authenticate token",
            code="TOKEN_SIGNING_FAILED",
            suggestion="Check that the payload is a JSON-serializable mapping without an 'exp' claim",
        )


class TokenVerificationError(TokenError):
    """Raised when a token is malformed, has a bad signature or has expired."""

    def __init__(self):
        super().__init__(
            message="Invalid token",
            code="INVALID_TOKEN",
            suggestion="Sign in again to obtain a new token",
        )


# =============================================================================
# Service
# =============================================================================

class TokenService:
    """
    Issues and validates bearer tokens.

    Stateless apart from the read-only config, so one instance can be shared
    across concurrent requests.
    """

    def __init__(self, config: TokenConfig):
        self._config = config

    @property
    def expires_in_seconds(self) -> int:
        """Token lifetime in whole seconds."""
        return int(self._config.expires_in.total_seconds())

    def sign(self, payload: Mapping[str, Any]) -> str:
        """
        Sign a claim mapping.

        Adds `iat` (now, unless the payload already carries one) and `exp`
        (iat + configured lifetime) before signing.

        Args:
            payload: Claim name -> JSON-serializable value

        Returns:
            The compact JWS string

        Raises:
            TokenSigningError: If the payload cannot be signed
        """
        try:
            claims = self._build_claims(payload)
            return jwt.encode(
                claims,
                self._config.secret.get_secret_value(),
                algorithm=self._config.algorithm,
            )
        except (JOSEError, TypeError, ValueError, OverflowError) as e:
            logger.error(f"Failed to sign token: {e} (payload={payload!r})")
            raise TokenSigningError() from None

    def verify(self, token: str) -> dict[str, Any]:
        """
        Verify a token and return its claims.

        Args:
            token: Compact JWS string produced by sign()

        Returns:
            The decoded claims, including `iat` and `exp`

        Raises:
            TokenVerificationError: If the token is malformed, its signature
                does not match, or it has expired
        """
        try:
            if not isinstance(token, str):
                raise TypeError(f"token must be a string, got {type(token).__name__}")
            return jwt.decode(
                token,
                self._config.secret.get_secret_value(),
                algorithms=[self._config.algorithm],
                options=_DECODE_OPTIONS,
            )
        except (JOSEError, TypeError, ValueError) as e:
            logger.warning(f"Invalid token: {e} (token={token!r})")
            raise TokenVerificationError() from None

    def _build_claims(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        if not isinstance(payload, Mapping):
            raise TypeError(f"payload must be a mapping, got {type(payload).__name__}")
        if "exp" in payload:
            raise ValueError("payload already has an 'exp' claim")

        issued_at = payload.get("iat")
        if issued_at is None:
            issued_at = int(time.time())
        else:
            issued_at = int(_numeric_claim("iat", issued_at))

        # nbf is checked again on decode, so a bad value must fail here
        if "nbf" in payload:
            _numeric_claim("nbf", payload["nbf"])

        claims = dict(payload)
        claims["iat"] = issued_at
        claims["exp"] = math.floor(issued_at + self._config.expires_in.total_seconds())
        return claims


def _numeric_claim(name: str, value: Any) -> int | float:
    """Return value if it is a finite number, for time claims like iat/nbf."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{name}' claim must be a number")
    if not math.isfinite(value):
        raise ValueError(f"'{name}' claim must be finite")
    return value
