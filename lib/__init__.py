# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - database.py: psycopg2 wrapper for the managed Postgres connection
# - utils.py: Shared utilities (error base class, duration parsing)
#
# database.py reads app.config at import time, so it is imported directly
# (from lib.database import DatabaseClient) rather than re-exported here.
# =============================================================================

from lib.utils import ApplicationError, parse_duration

__all__ = [
    "ApplicationError",
    "parse_duration",
]
