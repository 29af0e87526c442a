# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for the auth request/response bodies.
# =============================================================================

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuthUser(BaseModel):
    """
    Identity carried inside an issued token.

    These fields become the token's claims, alongside iat/exp.
    """
    model_config = ConfigDict(frozen=True)

    email: str
    role: Literal["user", "admin"] = "user"
    name: Optional[str] = None


class SignInRequest(BaseModel):
    """Credentials submitted to /sign-in."""
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v


class SignUpRequest(SignInRequest):
    """Registration body for /sign-up."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    role: Literal["user", "admin"] = "user"


class AuthResponse(BaseModel):
    """Returned by /sign-up and /sign-in."""
    message: str
    user: AuthUser
    token: str


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    message: str


class ClaimsResponse(BaseModel):
    """Claims of the token presented by the caller."""
    authenticated: bool
    claims: dict[str, Any]
