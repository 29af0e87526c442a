# =============================================================================
# app/middleware.py - HTTP Middleware
# =============================================================================
# Cross-cutting request handling registered in main.py:
# - RequestLoggingMiddleware: one access-log line per request
# - SecurityHeadersMiddleware: hardening headers on every response
#
# CORS is handled by Starlette's CORSMiddleware (see main.py).
# =============================================================================

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("app.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log method, path, status and duration for every request.

    Unhandled exceptions are logged with the elapsed time and re-raised.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        client = request.client.host if request.client else "-"

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.error(
                f"{client} {request.method} {request.url.path} failed after {duration_ms:.1f}ms"
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{client} {request.method} {request.url.path} "
            f"{response.status_code} {duration_ms:.1f}ms"
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    def __init__(
        self,
        app,
        csp_policy: str | None = None,
        enable_hsts: bool = True,
        hsts_max_age: int = 15552000,
        xfo_option: str = "SAMEORIGIN",
        referrer_policy: str = "no-referrer",
    ):
        """
        Initialize security headers middleware.

        Args:
            app: ASGI application
            csp_policy: Content Security Policy directive
            enable_hsts: Enable HTTP Strict Transport Security
            hsts_max_age: HSTS max age in seconds (default 180 days)
            xfo_option: X-Frame-Options value (DENY, SAMEORIGIN)
            referrer_policy: Referrer-Policy value
        """
        super().__init__(app)
        self.csp_policy = csp_policy or self._default_csp()
        self.enable_hsts = enable_hsts
        self.hsts_max_age = hsts_max_age
        self.xfo_option = xfo_option
        self.referrer_policy = referrer_policy

    def _default_csp(self) -> str:
        """Return default Content Security Policy."""
        return (
            "default-src 'self'; "
            "base-uri 'self'; "
            "font-src 'self' https: data:; "
            "form-action 'self'; "
            "frame-ancestors 'self'; "
            "img-src 'self' data:; "
            "object-src 'none'; "
            "script-src 'self'; "
            "script-src-attr 'none'; "
            "style-src 'self' https: 'unsafe-inline'; "
            "upgrade-insecure-requests"
        )

    def security_headers(self) -> dict[str, str]:
        """Headers applied to every response."""
        headers = {
            "Content-Security-Policy": self.csp_policy,
            "Cross-Origin-Opener-Policy": "same-origin",
            "Cross-Origin-Resource-Policy": "same-origin",
            "Origin-Agent-Cluster": "?1",
            "Referrer-Policy": self.referrer_policy,
            "X-Content-Type-Options": "nosniff",
            "X-DNS-Prefetch-Control": "off",
            "X-Download-Options": "noopen",
            "X-Frame-Options": self.xfo_option,
            "X-Permitted-Cross-Domain-Policies": "none",
            # Legacy XSS auditors are disabled, CSP replaces them
            "X-XSS-Protection": "0",
        }
        if self.enable_hsts:
            headers["Strict-Transport-Security"] = (
                f"max-age={self.hsts_max_age}; includeSubDomains"
            )
        return headers

    async def dispatch(self, request: Request, call_next) -> Response:
        """Add security headers to response."""
        response = await call_next(request)
        for name, value in self.security_headers().items():
            response.headers[name] = value
        return response
