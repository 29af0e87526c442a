# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health, uptime and readiness endpoints
#
# Auth routes live in app/auth/. Each router is mounted in main.py.
# =============================================================================

from . import health

__all__ = [
    "health",
]
