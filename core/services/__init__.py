# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .token_service import (
    TokenError,
    TokenService,
    TokenSigningError,
    TokenVerificationError,
)

__all__ = [
    "TokenError",
    "TokenService",
    "TokenSigningError",
    "TokenVerificationError",
]
