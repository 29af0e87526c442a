# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for token handling.
#
# The token is read from the Authorization: Bearer header first, then from
# the auth cookie. Verification failures raise TokenVerificationError, which
# the app-level handler turns into a 401.
#
# Usage:
#   from app.auth import get_current_claims
#
#   @router.get("/protected")
#   async def protected(claims: dict = Depends(get_current_claims)):
#       return {"email": claims["email"]}
# =============================================================================

import logging
from functools import lru_cache
from typing import Any, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.cookies import get_auth_cookie
from app.config import settings
from app.exceptions import NotAuthenticatedError
from core.services.token_service import TokenService, TokenVerificationError

logger = logging.getLogger(__name__)

# Bearer extractor that lets cookie-only requests through
security_optional = HTTPBearer(auto_error=False)


@lru_cache
def get_token_service() -> TokenService:
    """
    Get the process-wide TokenService.

    Built once from settings.token_config; override this dependency in tests
    to inject a different configuration.
    """
    return TokenService(settings.token_config)


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> str | None:
    """Return the bearer token from the header, falling back to the cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return get_auth_cookie(request)


async def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
    tokens: TokenService = Depends(get_token_service),
) -> dict[str, Any]:
    """
    Extract and verify the caller's token.

    Returns:
        The verified claims

    Raises:
        NotAuthenticatedError: No token was sent (401)
        TokenVerificationError: The token is invalid or expired (401)
    """
    token = extract_token(request, credentials)
    if not token:
        raise NotAuthenticatedError()
    return tokens.verify(token)


async def get_current_claims_optional(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
    tokens: TokenService = Depends(get_token_service),
) -> Optional[dict[str, Any]]:
    """
    Optionally verify the caller's token.

    Returns None if no token is provided or it does not verify, instead of
    raising an error.
    """
    token = extract_token(request, credentials)
    if not token:
        return None

    try:
        return tokens.verify(token)
    except TokenVerificationError:
        # Already logged by TokenService
        return None
