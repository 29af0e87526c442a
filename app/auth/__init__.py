# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Token-based authentication on top of core.services.TokenService.
#
# Usage:
#   from app.auth import get_current_claims
#
#   @router.get("/protected")
#   async def protected(claims: dict = Depends(get_current_claims)):
#       return {"email": claims["email"]}
# =============================================================================

from app.auth.dependencies import (
    get_current_claims,
    get_current_claims_optional,
    get_token_service,
)
from app.auth.models import AuthUser

__all__ = [
    "get_current_claims",
    "get_current_claims_optional",
    "get_token_service",
    "AuthUser",
]
