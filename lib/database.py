# =============================================================================
# lib/database.py - Postgres Client Wrapper
# =============================================================================
# Thin wrapper around a single psycopg2 connection to the managed Postgres
# database (Neon). The connection is opened lazily on first use and reused.
#
# There is no pool and no retry: a failed connect surfaces as DatabaseError
# and the next call tries again.
#
# Usage:
#   from lib.database import DatabaseClient
#   conn = DatabaseClient.get_connection()
# =============================================================================

from __future__ import annotations

import logging
import threading
from typing import Any

import psycopg2
from psycopg2.extensions import connection as PgConnection

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class DatabaseError(ApplicationError):
    """Error while connecting to or talking with Postgres."""

    def __init__(
        self,
        message: str,
        code: str = "DATABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


class DatabaseClient:
    """
    Singleton holder for the Postgres connection.

    All methods are class methods, so callers never instantiate it.

    Example:
        if DatabaseClient.ping():
            conn = DatabaseClient.get_connection()
    """

    _connection: PgConnection | None = None
    # Guards the lazy open so concurrent callers share one connection
    _lock = threading.Lock()

    @classmethod
    def get_connection(cls) -> PgConnection:
        """
        Get or open the shared connection.

        Returns:
            An open psycopg2 connection

        Raises:
            DatabaseError: If DATABASE_URL is not set or the connect fails
        """
        with cls._lock:
            if cls._connection is not None and not cls._connection.closed:
                return cls._connection

            if not settings.DATABASE_URL:
                raise DatabaseError(
                    message="DATABASE_URL is not configured",
                    code="DATABASE_NOT_CONFIGURED",
                    suggestion="Set DATABASE_URL in your .env file",
                )

            try:
                cls._connection = psycopg2.connect(
                    settings.DATABASE_URL,
                    connect_timeout=settings.DATABASE_CONNECT_TIMEOUT,
                )
                logger.info("Database connection established")
            except psycopg2.Error as e:
                # The DSN may carry a password, so only the driver message is kept
                logger.error(f"Database connection failed: {e}")
                raise DatabaseError(
                    message="Failed to connect to the database",
                    code="DATABASE_CONNECT_FAILED",
                    suggestion="Check DATABASE_URL and that the database is reachable",
                ) from None

            return cls._connection

    @classmethod
    def ping(cls) -> bool:
        """
        Run a trivial query to check connectivity.

        Returns:
            True if SELECT 1 succeeded, False otherwise
        """
        try:
            conn = cls.get_connection()
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
            conn.rollback()
            return True
        except DatabaseError as e:
            logger.warning(f"Database ping failed: {e.message}")
            return False
        except psycopg2.Error as e:
            logger.warning(f"Database ping failed: {e}")
            cls.close()
            return False

    @classmethod
    def close(cls) -> None:
        """Close the shared connection if it is open."""
        with cls._lock:
            if cls._connection is None:
                return
            try:
                if not cls._connection.closed:
                    cls._connection.close()
                    logger.info("Database connection closed")
            finally:
                cls._connection = None
