# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Placeholder auth endpoints mounted at /api/auth.
#
# There is no user store yet: sign-up and sign-in issue a token for the
# submitted identity without checking credentials. The password is validated
# for shape only and never stored or logged.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, Response, status

from app.auth.cookies import clear_auth_cookie, set_auth_cookie
from app.auth.dependencies import get_current_claims, get_token_service
from app.auth.models import (
    AuthResponse,
    AuthUser,
    ClaimsResponse,
    MessageResponse,
    SignInRequest,
    SignUpRequest,
)
from core.services.token_service import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


def _issue(user: AuthUser, response: Response, tokens: TokenService) -> str:
    """Sign a token for the user and set it as the auth cookie."""
    token = tokens.sign(user.model_dump(exclude_none=True))
    set_auth_cookie(response, token)
    return token


@router.post(
    "/sign-up",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def sign_up(
    body: SignUpRequest,
    response: Response,
    tokens: TokenService = Depends(get_token_service),
) -> AuthResponse:
    """
    Register a user and sign them in.

    Returns the token in the body and sets it as an httpOnly cookie.

    Raises:
        500: If the token cannot be signed
    """
    user = AuthUser(email=body.email, role=body.role, name=body.name)
    token = _issue(user, response, tokens)

    logger.info(f"User registered: {user.email} ({user.role})")
    return AuthResponse(message="User registered", user=user, token=token)


@router.post("/sign-in", response_model=AuthResponse)
def sign_in(
    body: SignInRequest,
    response: Response,
    tokens: TokenService = Depends(get_token_service),
) -> AuthResponse:
    """
    Sign a user in.

    Returns the token in the body and sets it as an httpOnly cookie.
    """
    user = AuthUser(email=body.email)
    token = _issue(user, response, tokens)

    logger.info(f"User signed in: {user.email}")
    return AuthResponse(message="User signed in", user=user, token=token)


@router.post("/sign-out", response_model=MessageResponse)
def sign_out(response: Response) -> MessageResponse:
    """Clear the auth cookie. Tokens stay valid until they expire."""
    clear_auth_cookie(response)
    return MessageResponse(message="User signed out")


@router.get("/me", response_model=ClaimsResponse)
async def me(claims: dict = Depends(get_current_claims)) -> ClaimsResponse:
    """
    Return the claims of the presented token.

    Raises:
        401: If no token was sent, or it is invalid or expired
    """
    return ClaimsResponse(authenticated=True, claims=claims)
