# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas:
# - token.py: TokenConfig (signing secret, expiry, algorithm)
# =============================================================================

from .token import DEFAULT_ALGORITHM, TokenConfig

__all__ = [
    "DEFAULT_ALGORITHM",
    "TokenConfig",
]
