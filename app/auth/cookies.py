# =============================================================================
# app/auth/cookies.py - Auth Cookie Helpers
# =============================================================================
# The token is stored in an httpOnly, SameSite=strict cookie. It is marked
# Secure in production only, so local http development still works.
# =============================================================================

from fastapi import Request, Response

from app.config import settings

TOKEN_COOKIE_NAME = "token"


def cookie_options() -> dict:
    """Attributes shared by set and clear, so the browser matches them."""
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "strict",
        "path": "/",
    }


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        max_age=settings.COOKIE_MAX_AGE_SECONDS,
        **cookie_options(),
    )


def get_auth_cookie(request: Request) -> str | None:
    return request.cookies.get(TOKEN_COOKIE_NAME) or None


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(TOKEN_COOKIE_NAME, **cookie_options())
